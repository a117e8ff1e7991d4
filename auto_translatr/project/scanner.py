"""
Codebase scanner for translation calls.

This module provides utilities to:
- Walk a source tree for files with given extensions
- Extract the string literal arguments of t('...') calls
- Build the default-language translation map (text -> text)
"""

import os
import re
from pathlib import Path
from typing import Iterable, List

from auto_translatr.core.result import Failure, Result, Success
from auto_translatr.logger import get_logger
from auto_translatr.translation.missing import Translations

logger = get_logger(__name__)

DEFAULT_EXTENSIONS = ['.js', '.jsx', '.ts', '.tsx', '.vue', '.svelte']
DEFAULT_IGNORE = ['node_modules', '.git', 'dist', 'build', '.next', 'coverage']

# t('...'), t("...") or t(`...`) with a single string literal argument
TRANSLATION_CALL_PATTERN = re.compile(r"""\bt\s*\(\s*(['"`])((?:(?!\1)[^\\]|\\.)*)\1\s*\)""", re.DOTALL)


class ScanError(Exception):
    """Codebase scan failed."""
    pass


def find_files(root: Path, extensions: Iterable[str], ignore: Iterable[str]) -> List[Path]:
    """
    Recursively collect files under root with one of the given extensions.

    Directories named in ``ignore`` are skipped. Unreadable directories are
    logged and skipped.
    """
    extensions = set(extensions)
    ignore = set(ignore)
    files: List[Path] = []

    try:
        items = sorted(os.listdir(root))
    except OSError as e:
        logger.warning(f"Could not read directory {root}: {e}")
        return files

    for item in items:
        full_path = Path(root) / item
        if full_path.is_dir():
            if item not in ignore:
                files.extend(find_files(full_path, extensions, ignore))
        elif full_path.is_file() and full_path.suffix in extensions:
            files.append(full_path)

    return files


def _unescape(text: str) -> str:
    return text.replace("\\'", "'").replace('\\"', '"').replace('\\\\', '\\')


def extract_translation_calls(content: str) -> List[str]:
    """
    Extract the literal texts passed to t() in source content.

    Examples:
        >>> extract_translation_calls("t('Hello') + t(\"World\")")
        ['Hello', 'World']
        >>> extract_translation_calls("t(name)")
        []
    """
    calls = []
    for match in TRANSLATION_CALL_PATTERN.finditer(content):
        text = _unescape(match.group(2)).strip()
        if text:
            calls.append(text)
    return calls


def read_codebase(root: Path, include: Iterable[str] = DEFAULT_EXTENSIONS,
                  ignore: Iterable[str] = DEFAULT_IGNORE) -> Result:
    """
    Scan a source tree and build the default-language map.

    Returns:
        Success({text: text}) with every unique string found,
        Failure(ScanError) if the root cannot be scanned
    """
    root = Path(root)
    if not root.is_dir():
        return Failure(ScanError(f"Scan root is not a directory: {root}"))

    logger.info("Searching for translation calls in codebase...")
    files = find_files(root, include, ignore)
    logger.info(f"Found {len(files)} files to scan")

    translations: Translations = {}
    for file_path in files:
        try:
            content = file_path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read file {file_path}: {e}")
            continue

        calls = extract_translation_calls(content)
        if calls:
            logger.debug(f"Found {len(calls)} translation calls in {file_path.relative_to(root)}")
            for text in calls:
                translations[text] = text

    logger.info(f"Found {len(translations)} unique translation strings")
    return Success(translations)
