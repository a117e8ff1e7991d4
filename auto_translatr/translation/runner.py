"""
Per-language translation runner.
"""

from auto_translatr.core.result import Result, Success
from auto_translatr.logger import get_logger
from auto_translatr.translation.missing import LanguageEntry, Translations
from auto_translatr.translation.translator import BoundTranslator

logger = get_logger(__name__)


async def translate(bound: BoundTranslator) -> Result:
    """
    Translate every value of a bound entry, one key at a time.

    Keys are translated strictly sequentially. A failing translate call is not
    wrapped: the exception propagates so the caller's chain boundary turns it
    into a Failure, and no partial map is returned.

    Returns:
        Success(LanguageEntry) with a new map holding the translated values
    """
    translated: Translations = {}
    total = len(bound.translations)

    if total:
        logger.info(f"Translating {total} missing strings to '{bound.language}'")

    for index, (key, text) in enumerate(bound.translations.items(), start=1):
        translated[key] = await bound.translate(text)
        logger.debug(f"  [{bound.language}] {index}/{total}: {key!r} -> {translated[key]!r}")

    return Success(LanguageEntry(language=bound.language, translations=translated))
