"""
Translation file store.

Reads and writes one flat JSON object per language in the output directory
(``<output>/<language>.json``). Writes are atomic and, in append mode, merge
the incoming keys over whatever is already on disk.
"""

import json
import os
import stat
import tempfile
from pathlib import Path
from typing import Dict, Iterable

from auto_translatr import language_codes as lc
from auto_translatr.core.result import Failure, Result, Success, is_failure
from auto_translatr.logger import get_logger
from auto_translatr.translation.missing import Language, TranslationSet, Translations

logger = get_logger(__name__)


class StoreError(Exception):
    """Translation file could not be read or written."""
    pass


def get_translation_file_path(language: Language, output_dir: Path) -> Path:
    return Path(output_dir) / lc.get_language_file_name(language)


def read_translation_file(file_path: Path) -> Result:
    """
    Read one translation file.

    Returns:
        Success({}) if the file does not exist, Success(map) if it parses,
        Failure(StoreError) otherwise
    """
    if not file_path.exists():
        return Success({})

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        return Failure(StoreError(f"Invalid JSON in {file_path}: {e}"))
    except OSError as e:
        return Failure(StoreError(f"Could not read {file_path}: {e}"))

    if not isinstance(data, dict):
        return Failure(StoreError(f"{file_path} does not contain a JSON object"))

    return Success(data)


def read_all_translations(supported_languages: Iterable[Language], output_dir: Path) -> Result:
    """
    Read the translation files of every supported language.

    A file that cannot be read is logged and treated as empty, so every
    supported language always has an entry.
    """
    translations: TranslationSet = {}

    for language in supported_languages:
        file_path = get_translation_file_path(language, output_dir)
        result = read_translation_file(file_path)

        if is_failure(result):
            logger.warning(f"Could not read translation file for language '{language}': {result.error}")
            translations[language] = {}
        else:
            translations[language] = result.value

    return Success(translations)


def _target_mode(file_path: Path) -> int:
    """Mode the written file should end up with: the existing one, or the umask default."""
    if file_path.exists():
        return stat.S_IMODE(file_path.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _atomic_write_json(file_path: Path, data: Dict[str, str]) -> None:
    """Write JSON to a temp file next to the target, then rename it into place."""
    file_path.parent.mkdir(parents=True, exist_ok=True)

    temp_fd, temp_path = tempfile.mkstemp(
        dir=file_path.parent,
        prefix=f".{file_path.stem}_",
        suffix=".json.tmp"
    )
    temp_path = Path(temp_path)

    try:
        with open(temp_fd, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.write('\n')

        # mkstemp creates 0600 files
        os.chmod(temp_path, _target_mode(file_path))
        temp_path.replace(file_path)
        logger.debug(f"Atomic write successful: {file_path}")

    except Exception:
        if temp_path.exists():
            temp_path.unlink()
        raise


def write_language_file(language: Language, translations: Translations, output_dir: Path,
                        append: bool = False) -> Result:
    """
    Write a language file.

    Args:
        language: Language code, determines the file name
        translations: Key -> translated text
        output_dir: Directory holding the translation files
        append: Merge into the existing file instead of replacing it.
            Existing keys are kept, incoming keys win on conflict.

    Returns:
        Success(None) or Failure(StoreError)
    """
    file_path = get_translation_file_path(language, output_dir)
    existing: Translations = {}

    if append and file_path.exists():
        read_result = read_translation_file(file_path)
        if is_failure(read_result):
            return Failure(StoreError(
                f"Failed to read existing translation file for '{language}': {read_result.error}"
            ))
        existing = read_result.value

    try:
        _atomic_write_json(file_path, {**existing, **translations})
    except OSError as e:
        return Failure(StoreError(f"Failed to write translation file for '{language}': {e}"))

    return Success(None)


def write_language_files(translations: TranslationSet, output_dir: Path, append: bool = False) -> Result:
    """Write each language in turn; the first Failure stops the batch."""
    for language, language_translations in translations.items():
        result = write_language_file(language, language_translations, output_dir, append=append)
        if is_failure(result):
            return result
    return Success(None)


class TranslationStore:
    """Reader/writer pair for the translation pipeline, backed by JSON files."""

    def __init__(self, supported_languages: Iterable[Language], output_dir: Path):
        self.supported_languages = list(supported_languages)
        self.output_dir = Path(output_dir)

    async def read(self) -> Result:
        logger.debug(f"Reading translations for {self.supported_languages} from {self.output_dir}")
        return read_all_translations(self.supported_languages, self.output_dir)

    async def write(self, translations: TranslationSet) -> Result:
        result = write_language_files(translations, self.output_dir, append=True)
        if not is_failure(result):
            for language in translations:
                logger.info(f"Successfully updated {lc.get_language_file_name(language)}")
        return result
