"""
Translator factory.

Binds a (source, target) language pair to a raw ``send(prompt)`` coroutine
so the rest of the pipeline can translate text with a single argument.
"""

from dataclasses import dataclass
from typing import Awaitable, Callable

from auto_translatr import language_codes as lc
from auto_translatr.translation.missing import Language, LanguageEntry

Send = Callable[[str], Awaitable[str]]
TextTranslator = Callable[[str], Awaitable[str]]

TRANSLATION_PROMPT = """You are a professional translator for web applications.
You are given a text in {source_language} language.
Translate and localize it to {target_language} language.
Return only the translated text, without explanations, notes or quotation marks.
If there is no text, return nothing.
The text is: {text}"""


@dataclass(frozen=True)
class BoundTranslator(LanguageEntry):
    """A language entry together with the translator for its language pair."""
    translate: TextTranslator = None


def create_prompt(text: str, source_language: Language, target_language: Language) -> str:
    return TRANSLATION_PROMPT.format(
        source_language=lc.describe_language(source_language),
        target_language=lc.describe_language(target_language),
        text=text,
    )


def create_translator(source_language: Language, target_language: Language, send: Send) -> TextTranslator:
    """
    Create a one-argument translator for a language pair.

    Each call composes the prompt and performs exactly one ``send`` call.
    """
    async def translate(text: str) -> str:
        return await send(create_prompt(text, source_language, target_language))

    return translate


def add_translator(default_language: Language, send: Send) -> Callable[[LanguageEntry], BoundTranslator]:
    """Return a function binding an entry to a default -> entry.language translator."""
    def bind(entry: LanguageEntry) -> BoundTranslator:
        return BoundTranslator(
            language=entry.language,
            translations=entry.translations,
            translate=create_translator(default_language, entry.language, send),
        )

    return bind
