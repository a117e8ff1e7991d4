"""Tests for the command line flow."""
import json

import httpx
import pytest

from auto_translatr.ai.service import AIService
from auto_translatr.cli import RunError, build_parser, main, translate_project
from auto_translatr.config import SETTINGS_FILE, parse_settings

FRENCH = {"Home": "Accueil", "Sign In": "Se connecter", "Loading...": "Chargement..."}


def _settings(**overrides):
    raw = {
        "default": "en",
        "supported": ["en", "fr"],
        "output": "i18n",
        "openai": {"model": "gpt-4o-mini", "api_key": "sk-test", "max_retries": 1},
    }
    raw.update(overrides)
    return parse_settings(raw, env={}).value


def _fake_llm(request):
    prompt = json.loads(request.content)["messages"][0]["content"]
    text = prompt.rsplit("The text is: ", 1)[-1]
    return httpx.Response(200, json={"choices": [{"message": {"content": FRENCH.get(text, text)}}]})


@pytest.fixture
def project(tmp_path):
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "Header.tsx").write_text(
        "<a href='/'>{t('Home')}</a><button>{t('Sign In')}</button>", encoding="utf-8"
    )
    (tmp_path / "src" / "Home.js").write_text("if (loading) return t('Loading...')", encoding="utf-8")
    return tmp_path


class TestTranslateProject:
    @pytest.mark.asyncio
    async def test_full_run(self, project, caplog):
        i18n = project / "i18n"
        i18n.mkdir()
        (i18n / "fr.json").write_text(json.dumps({"Home": "Maison"}), encoding="utf-8")
        service = AIService(_settings().openai, transport=httpx.MockTransport(_fake_llm))

        report = await translate_project(_settings(), project, service)

        assert report.success
        assert json.loads((i18n / "en.json").read_text(encoding="utf-8")) == {
            "Home": "Home", "Sign In": "Sign In", "Loading...": "Loading...",
        }
        # Existing translation survives, missing ones are added
        assert json.loads((i18n / "fr.json").read_text(encoding="utf-8")) == {
            "Home": "Maison", "Sign In": "Se connecter", "Loading...": "Chargement...",
        }
        assert service.request_count == 2
        assert "Successfully updated en.json" in caplog.text

    @pytest.mark.asyncio
    async def test_translation_failure_still_writes_default(self, project, caplog):
        service = AIService(
            _settings().openai,
            transport=httpx.MockTransport(lambda request: httpx.Response(401, json={"error": {"message": "no"}})),
        )

        report = await translate_project(_settings(), project, service)

        assert not report.success
        assert (project / "i18n" / "en.json").exists()
        assert not (project / "i18n" / "fr.json").exists()
        assert "Failed to add missing translations" in caplog.text

    @pytest.mark.asyncio
    async def test_scan_failure(self, tmp_path):
        service = AIService(_settings().openai, transport=httpx.MockTransport(_fake_llm))
        with pytest.raises(RunError):
            await translate_project(_settings(), tmp_path / "missing", service)


class TestMain:
    def test_invalid_settings_exit_code(self, tmp_path, capsys):
        (tmp_path / SETTINGS_FILE).write_text(json.dumps({"default": "en"}), encoding="utf-8")

        assert main(["--root", str(tmp_path)], env={}) == 1
        assert "supported" in capsys.readouterr().err

    def test_setup_aborted_exit_code(self, tmp_path, capsys):
        code = main(["--root", str(tmp_path)], env={"OPENAI_API_KEY": "sk"}, ask=lambda question: "n")

        assert code == 0
        assert (tmp_path / SETTINGS_FILE).exists()
        assert "supported" in capsys.readouterr().out

    def test_settings_default_is_under_root(self, tmp_path):
        assert "<root>/auto-translate.settings.json" in build_parser().format_help()

        nested = tmp_path / "project"
        nested.mkdir()
        (nested / SETTINGS_FILE).write_text(json.dumps({"default": "en"}), encoding="utf-8")

        assert main(["--root", str(nested)], env={}) == 1
        assert not (tmp_path / SETTINGS_FILE).exists()
