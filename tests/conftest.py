import pytest

from auto_translatr.core.result import Failure, Success
from auto_translatr.logger import configure_logging


@pytest.fixture(autouse=True)
def _reset_logging():
    configure_logging('info')
    yield
    configure_logging('info')


class InMemoryStore:
    """Translation store double that merges writes like the file store does."""

    def __init__(self, translations, fail_read=None, fail_write_for=None):
        self.translations = {lang: dict(values) for lang, values in translations.items()}
        self.fail_read = fail_read
        self.fail_write_for = set(fail_write_for or [])
        self.writes = []

    async def read(self):
        if self.fail_read is not None:
            return Failure(self.fail_read)
        return Success({lang: dict(values) for lang, values in self.translations.items()})

    async def write(self, partial):
        self.writes.append(partial)
        for language, values in partial.items():
            if language in self.fail_write_for:
                return Failure(IOError(f"cannot write {language}"))
            self.translations.setdefault(language, {}).update(values)
        return Success(None)


class RecordingTranslator:
    """Raw send() double: records prompts and answers from a callable."""

    def __init__(self, answer=None):
        self.prompts = []
        self.answer = answer or (lambda prompt: "TR_" + prompt.rsplit("The text is: ", 1)[-1])

    async def __call__(self, prompt):
        self.prompts.append(prompt)
        return self.answer(prompt)


@pytest.fixture
def store_factory():
    return InMemoryStore


@pytest.fixture
def recording_translator():
    return RecordingTranslator()
