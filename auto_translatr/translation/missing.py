"""
Missing translation detection.

Contains the differ that compares a target language against the default
language, and the partitioner that splits a translation set into the default
entry and the entries for every other language.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

Language = str
Translations = Dict[str, str]
TranslationSet = Dict[Language, Translations]


class MissingDefaultLanguageError(Exception):
    """The default language has no entry in the translation set."""

    def __init__(self, language: Language):
        super().__init__(f"Default language '{language}' not found in translations")
        self.language = language


@dataclass(frozen=True)
class LanguageEntry:
    """Translations for one language."""
    language: Language
    translations: Optional[Translations]


@dataclass(frozen=True)
class DefaultAndOthers:
    default: LanguageEntry
    others: List[LanguageEntry]


def get_missing_translations(default_translations: Optional[Translations],
                             target_translations: Optional[Translations]) -> Translations:
    """
    Return the default-language entries that the target lacks.

    A key counts as missing when it is absent from the target or its value is
    falsy (an empty string is treated like an absent key). Values are copied
    from the default map untranslated.

    Raises:
        ValueError: If default_translations is None
    """
    if default_translations is None:
        raise ValueError("default_translations must be a mapping, got None")

    target = target_translations or {}
    return {
        key: value
        for key, value in default_translations.items()
        if not target.get(key)
    }


def extract_default_and_others(default_language: Language, translations: TranslationSet) -> DefaultAndOthers:
    """
    Split a translation set into the default entry and all other entries.

    The default entry carries ``translations=None`` when the default language
    is not in the set; extract_missing_translations rejects that case.
    """
    return DefaultAndOthers(
        default=LanguageEntry(default_language, translations.get(default_language)),
        others=[
            LanguageEntry(language, translations[language])
            for language in translations
            if language != default_language
        ],
    )


def extract_missing_translations(partition: DefaultAndOthers) -> List[LanguageEntry]:
    """Reduce every non-default entry to the keys it is missing."""
    if partition.default.translations is None:
        raise MissingDefaultLanguageError(partition.default.language)

    return [
        LanguageEntry(
            language=other.language,
            translations=get_missing_translations(partition.default.translations, other.translations),
        )
        for other in partition.others
    ]
