"""
Translation module - Missing translation pipeline

This module provides:
- Differ and partitioner for finding missing translations
- Translator factory binding a language pair to the LLM send function
- Per-language runner translating keys sequentially
- add_missing_translations: the orchestrating pipeline
"""

from auto_translatr.translation.missing import (
    Language,
    Translations,
    TranslationSet,
    LanguageEntry,
    DefaultAndOthers,
    MissingDefaultLanguageError,
    get_missing_translations,
    extract_default_and_others,
    extract_missing_translations,
)
from auto_translatr.translation.translator import (
    BoundTranslator,
    create_prompt,
    create_translator,
    add_translator,
)
from auto_translatr.translation.runner import translate
from auto_translatr.translation.pipeline import (
    Dependencies,
    PipelineReport,
    add_missing_translations,
)
