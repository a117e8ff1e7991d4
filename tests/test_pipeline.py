"""End-to-end tests for add_missing_translations with in-memory collaborators."""
import logging

import pytest

from auto_translatr.core.result import Failure
from auto_translatr.translation.missing import MissingDefaultLanguageError
from auto_translatr.translation.pipeline import Dependencies, add_missing_translations


def _deps(store, translator):
    return Dependencies(reader=store.read, writer=store.write, translator=translator)


class TestAddMissingTranslations:
    @pytest.mark.asyncio
    async def test_fills_missing_and_keeps_existing(self, store_factory, recording_translator):
        store = store_factory({
            "en": {"hello": "Hello", "world": "World"},
            "fr": {"hello": "Bonjour"},
        })

        report = await add_missing_translations("en", _deps(store, recording_translator))

        assert report.success
        assert store.translations["fr"] == {"hello": "Bonjour", "world": "TR_World"}
        assert store.translations["en"] == {"hello": "Hello", "world": "World"}
        assert len(recording_translator.prompts) == 1
        assert report.translated_count == 1

    @pytest.mark.asyncio
    async def test_one_write_per_language(self, store_factory, recording_translator):
        store = store_factory({
            "en": {"Hi": "Hi"},
            "fr": {"Hi": "Salut"},
            "de": {},
        })

        report = await add_missing_translations("en", _deps(store, recording_translator))

        assert report.success
        assert sorted(report.languages) == ["de", "fr"]
        written = sorted(store.writes, key=lambda partial: next(iter(partial)))
        # fr had nothing missing but is still written (with an empty map)
        assert written == [{"de": {"Hi": "TR_Hi"}}, {"fr": {}}]

    @pytest.mark.asyncio
    async def test_second_run_makes_no_translator_calls(self, store_factory, recording_translator):
        store = store_factory({
            "en": {"Hello": "Hello", "World": "World"},
            "fr": {},
            "de": {"Hello": ""},
        })

        await add_missing_translations("en", _deps(store, recording_translator))
        first_run_calls = len(recording_translator.prompts)
        await add_missing_translations("en", _deps(store, recording_translator))

        assert first_run_calls == 4
        assert len(recording_translator.prompts) == first_run_calls

    @pytest.mark.asyncio
    async def test_read_failure_is_logged(self, store_factory, recording_translator, caplog):
        store = store_factory({}, fail_read=OSError("disk error"))

        with caplog.at_level(logging.ERROR):
            report = await add_missing_translations("en", _deps(store, recording_translator))

        assert not report.success
        assert store.writes == []
        assert recording_translator.prompts == []
        assert "disk error" in caplog.text

    @pytest.mark.asyncio
    async def test_raising_reader_is_logged(self, recording_translator, caplog):
        async def reader():
            raise OSError("disk gone")

        async def writer(partial):
            raise AssertionError("writer must not be called")

        with caplog.at_level(logging.ERROR):
            report = await add_missing_translations("en", Dependencies(reader, writer, recording_translator))

        assert not report.success
        assert isinstance(report.error, OSError)
        assert "disk gone" in caplog.text

    @pytest.mark.asyncio
    async def test_translator_failure_is_logged(self, store_factory, caplog):
        calls = []

        async def translator(prompt):
            calls.append(prompt)
            if "German" in prompt:
                raise RuntimeError("rate limited")
            return "ok"

        store = store_factory({
            "en": {"Hello": "Hello"},
            "fr": {},
            "de": {},
        })

        with caplog.at_level(logging.ERROR):
            report = await add_missing_translations("en", _deps(store, translator))

        assert not report.success
        assert isinstance(report.error, RuntimeError)
        assert store.writes == []
        assert "rate limited" in caplog.text

    @pytest.mark.asyncio
    async def test_writer_failure_is_logged(self, store_factory, recording_translator, caplog):
        store = store_factory({"en": {"Hi": "Hi"}, "fr": {}, "de": {}}, fail_write_for=["de"])

        with caplog.at_level(logging.ERROR):
            report = await add_missing_translations("en", _deps(store, recording_translator))

        assert not report.success
        assert "cannot write de" in caplog.text

    @pytest.mark.asyncio
    async def test_missing_default_language_fails_without_calls(self, store_factory, recording_translator, caplog):
        store = store_factory({"fr": {"Hi": "Salut"}, "de": {}})

        with caplog.at_level(logging.ERROR):
            report = await add_missing_translations("en", _deps(store, recording_translator))

        assert not report.success
        assert isinstance(report.error, MissingDefaultLanguageError)
        assert recording_translator.prompts == []
        assert store.writes == []
        assert "Default language 'en' not found" in caplog.text

    @pytest.mark.asyncio
    async def test_only_default_language(self, store_factory, recording_translator):
        store = store_factory({"en": {"Hi": "Hi"}})

        report = await add_missing_translations("en", _deps(store, recording_translator))

        assert report.success
        assert report.languages == []
        assert store.writes == []

    @pytest.mark.asyncio
    async def test_unicode_round_trip(self, store_factory):
        async def translator(prompt):
            return "Привет, мир ✨"

        store = store_factory({"en": {"Hello, world ✨": "Hello, world ✨"}, "ru": {}})

        await add_missing_translations("en", _deps(store, translator))
        assert store.translations["ru"] == {"Hello, world ✨": "Привет, мир ✨"}

    @pytest.mark.asyncio
    async def test_never_raises_on_writer_exception(self, store_factory, recording_translator):
        store = store_factory({"en": {"Hi": "Hi"}, "fr": {}})

        async def writer(partial):
            raise PermissionError("read-only")

        report = await add_missing_translations("en", Dependencies(store.read, writer, recording_translator))
        assert not report.success
        assert isinstance(report.error, PermissionError)
