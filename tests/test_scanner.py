"""Tests for the t('...') codebase scanner."""
from auto_translatr.core.result import Success, is_failure
from auto_translatr.project.scanner import (
    extract_translation_calls,
    find_files,
    read_codebase,
)


def _write(path, content):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


class TestExtractTranslationCalls:
    def test_quote_styles(self):
        content = "t('Single') + t(\"Double\") + t(`Backtick`)"
        assert extract_translation_calls(content) == ["Single", "Double", "Backtick"]

    def test_escaped_quotes(self):
        content = r"t('It\'s here') + t(" + '"Say \\"hi\\""' + ")"
        assert extract_translation_calls(content) == ["It's here", 'Say "hi"']

    def test_whitespace_and_empty(self):
        content = "t(  '  Padded  '  ) t('') t('   ')"
        assert extract_translation_calls(content) == ["Padded"]

    def test_ignores_non_literals_and_other_functions(self):
        content = "t(name) format('x') alert(t('Real'))"
        assert extract_translation_calls(content) == ["Real"]

    def test_jsx(self):
        content = "<h1 className=\"title\">{t('My Awesome App')}</h1>"
        assert extract_translation_calls(content) == ["My Awesome App"]


class TestReadCodebase:
    def test_collects_unique_strings(self, tmp_path):
        _write(tmp_path / "src" / "Header.tsx", "{t('Home')} {t('About')}")
        _write(tmp_path / "src" / "pages" / "Home.js", "t('Home'); t('Loading...')")
        _write(tmp_path / "README.md", "t('Not scanned')")

        result = read_codebase(tmp_path)
        assert result == Success({"Home": "Home", "About": "About", "Loading...": "Loading..."})

    def test_no_calls(self, tmp_path):
        _write(tmp_path / "index.js", "console.log('hi')")
        assert read_codebase(tmp_path) == Success({})

    def test_ignored_directories(self, tmp_path):
        _write(tmp_path / "node_modules" / "lib" / "index.js", "t('Vendor')")
        _write(tmp_path / "app.js", "t('Mine')")
        assert read_codebase(tmp_path) == Success({"Mine": "Mine"})

    def test_custom_include_and_ignore(self, tmp_path):
        _write(tmp_path / "a.py", "t('Python')")
        _write(tmp_path / "b.js", "t('Script')")
        _write(tmp_path / "generated" / "c.py", "t('Generated')")

        result = read_codebase(tmp_path, include=[".py"], ignore=["generated"])
        assert result == Success({"Python": "Python"})

    def test_missing_root(self, tmp_path):
        assert is_failure(read_codebase(tmp_path / "nope"))

    def test_find_files_sorted(self, tmp_path):
        _write(tmp_path / "b.ts", "")
        _write(tmp_path / "a.ts", "")
        assert [p.name for p in find_files(tmp_path, [".ts"], [])] == ["a.ts", "b.ts"]
