"""
Missing translation pipeline.

Reads the translation set, works out which keys every non-default language
is missing, translates them and merges the results back through the writer:

    reader -> partition -> diff -> bind translator -> translate (fan-out) -> write (fan-out)

Every failure along the way ends up as a logged Failure; the pipeline itself
never raises to its caller.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

from auto_translatr.core.result import Result, is_failure, lift_async
from auto_translatr.logger import get_logger
from auto_translatr.translation.missing import (
    Language,
    LanguageEntry,
    TranslationSet,
    Translations,
    extract_default_and_others,
    extract_missing_translations,
)
from auto_translatr.translation.runner import translate
from auto_translatr.translation.translator import add_translator

logger = get_logger(__name__)

Reader = Callable[[], Awaitable[Result]]
Writer = Callable[[Dict[Language, Translations]], Awaitable[Result]]
Send = Callable[[str], Awaitable[str]]


@dataclass(frozen=True)
class Dependencies:
    """Collaborators injected into the pipeline."""
    reader: Reader
    writer: Writer
    translator: Send


@dataclass
class PipelineReport:
    """Outcome of one pipeline run."""
    success: bool
    languages: List[Language] = field(default_factory=list)
    translated_count: int = 0
    error: Optional[Any] = None


def _write_all(writer: Writer) -> Callable[[List[LanguageEntry]], List[Awaitable[Result]]]:
    def write(entries: List[LanguageEntry]) -> List[Awaitable[Result]]:
        return [writer({entry.language: entry.translations}) for entry in entries]

    return write


async def add_missing_translations(default_language: Language, dependencies: Dependencies) -> PipelineReport:
    """
    Fill in every translation the non-default languages are missing.

    Each language is translated key by key; languages run concurrently. One
    writer call is made per language, including languages with nothing
    missing. Any failure (read, translate, write) is logged and reported;
    this coroutine does not raise.

    Args:
        default_language: Language whose strings are the source of truth
        dependencies: reader, writer and raw translator collaborators

    Returns:
        PipelineReport describing what happened
    """
    logger.info(f"Looking for missing translations (default language: '{default_language}')")

    def partition(translations: TranslationSet):
        return extract_default_and_others(default_language, translations)

    bind_translator = add_translator(default_language, dependencies.translator)

    def log_missing(entries: List[LanguageEntry]) -> List[LanguageEntry]:
        for entry in entries:
            logger.info(f"'{entry.language}': {len(entry.translations)} missing translations")
        return entries

    result = await (
        lift_async(dependencies.reader)
        .map(partition)
        .map(extract_missing_translations)
        .map(log_missing)
        .map(lambda entries: [bind_translator(entry) for entry in entries])
        .flat_map_all(lambda bound_translators: [translate(bound) for bound in bound_translators])
        .flat_map_all_void(_write_all(dependencies.writer))
        .result()
    )

    if is_failure(result):
        logger.error(f"Failed to add missing translations: {result.error}")
        return PipelineReport(success=False, error=result.error)

    entries: List[LanguageEntry] = result.value
    report = PipelineReport(
        success=True,
        languages=[entry.language for entry in entries],
        translated_count=sum(len(entry.translations) for entry in entries),
    )
    logger.info(f"Translated {report.translated_count} strings across {len(report.languages)} languages")
    return report
