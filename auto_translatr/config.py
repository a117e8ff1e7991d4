import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

from auto_translatr.core.result import Failure, Result, Success, is_failure
from auto_translatr.logger import LOG_MODES, get_logger
from auto_translatr.project.scanner import DEFAULT_EXTENSIONS, DEFAULT_IGNORE

logger = get_logger(__name__)

SETTINGS_FILE = "auto-translate.settings.json"
API_KEY_ENV = "OPENAI_API_KEY"

# Provider configuration defaults
OPENAI_DEFAULTS = {
    "model": "gpt-4o-mini",
    "api_key": "",
    "api_url": "https://api.openai.com/v1/chat/completions",
    "timeout": 120,
    "max_retries": 3,
}

# Default settings template (written on first run)
DEFAULT_SETTINGS = {
    "default": "en",
    "supported": ["en", "fr", "de"],
    "output": "i18n",
    "include": list(DEFAULT_EXTENSIONS),
    "ignore": list(DEFAULT_IGNORE),
    "openai": dict(OPENAI_DEFAULTS),
    "log_mode": "info",
}


class SettingsError(Exception):
    """Settings could not be loaded."""
    pass


class SettingsValidationError(SettingsError):
    """Settings file is present but invalid. ``errors`` lists every problem."""

    def __init__(self, errors: List[str], path: Optional[Path] = None):
        self.errors = list(errors)
        self.path = path
        location = f" in {path}" if path else ""
        super().__init__(f"Invalid settings{location}: " + "; ".join(self.errors))


class SetupAborted(SettingsError):
    """The user chose not to continue with the default settings."""
    pass


@dataclass(frozen=True)
class OpenAIConfig:
    model: str
    api_key: str
    api_url: str = OPENAI_DEFAULTS["api_url"]
    timeout: float = OPENAI_DEFAULTS["timeout"]
    max_retries: int = OPENAI_DEFAULTS["max_retries"]


@dataclass(frozen=True)
class Settings:
    """Fully validated settings for one run."""
    default: str
    supported: List[str]
    openai: OpenAIConfig
    output: str = DEFAULT_SETTINGS["output"]
    include: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    ignore: List[str] = field(default_factory=lambda: list(DEFAULT_IGNORE))
    log_mode: str = DEFAULT_SETTINGS["log_mode"]


def get_settings_path(cwd: Optional[Path] = None) -> Path:
    return Path(cwd or Path.cwd()) / SETTINGS_FILE


def _is_str_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) and item for item in value)


def parse_settings(raw: Any, env: Optional[Mapping[str, str]] = None, path: Optional[Path] = None) -> Result:
    """
    Validate raw settings and fill in optional fields.

    Every problem found is collected into one SettingsValidationError rather
    than stopping at the first.

    Args:
        raw: Parsed JSON content of the settings file
        env: Environment used for the API key fallback (defaults to os.environ)
        path: Settings file path, used in error messages

    Returns:
        Success(Settings) or Failure(SettingsValidationError)
    """
    env = os.environ if env is None else env

    if not isinstance(raw, dict):
        return Failure(SettingsValidationError(["settings must be a JSON object"], path))

    errors: List[str] = []

    default = raw.get("default")
    if not isinstance(default, str) or not default.strip():
        errors.append("default: required (language code string)")

    supported = raw.get("supported")
    if not _is_str_list(supported) or not supported:
        errors.append("supported: required (non-empty list of language codes)")

    output = raw.get("output") or DEFAULT_SETTINGS["output"]
    if not isinstance(output, str):
        errors.append("output: must be a directory path string")

    include = raw.get("include", DEFAULT_SETTINGS["include"])
    if not _is_str_list(include):
        errors.append("include: must be a list of file extensions")

    ignore = raw.get("ignore", DEFAULT_SETTINGS["ignore"])
    if not _is_str_list(ignore):
        errors.append("ignore: must be a list of directory names")

    log_mode = raw.get("log_mode", DEFAULT_SETTINGS["log_mode"])
    if log_mode not in LOG_MODES:
        errors.append(f"log_mode: must be one of {', '.join(LOG_MODES)}")

    openai_raw = raw.get("openai")
    if not isinstance(openai_raw, dict):
        errors.append("openai: required (object with model and api_key)")
        openai_raw = {}

    model = openai_raw.get("model")
    if not isinstance(model, str) or not model:
        errors.append("openai.model: required")

    # A non-empty key in the file wins over the environment
    api_key = openai_raw.get("api_key") or openai_raw.get("apiKey") or env.get(API_KEY_ENV, "")
    if not api_key:
        errors.append(f"openai.api_key: required (set it in the file or as {API_KEY_ENV})")

    api_url = openai_raw.get("api_url", OPENAI_DEFAULTS["api_url"])
    if not isinstance(api_url, str) or not api_url:
        errors.append("openai.api_url: must be a URL string")

    timeout = openai_raw.get("timeout", OPENAI_DEFAULTS["timeout"])
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        errors.append("openai.timeout: must be a positive number of seconds")

    max_retries = openai_raw.get("max_retries", OPENAI_DEFAULTS["max_retries"])
    if isinstance(max_retries, bool) or not isinstance(max_retries, int) or max_retries < 1:
        errors.append("openai.max_retries: must be an integer >= 1")

    if errors:
        return Failure(SettingsValidationError(errors, path))

    if default not in supported:
        logger.warning(f"Default language '{default}' not found in supported languages. Adding it automatically.")
        supported = [default, *supported]

    return Success(Settings(
        default=default,
        supported=list(supported),
        output=output,
        include=list(include),
        ignore=list(ignore),
        log_mode=log_mode,
        openai=OpenAIConfig(
            model=model,
            api_key=api_key,
            api_url=api_url,
            timeout=timeout,
            max_retries=max_retries,
        ),
    ))


def load_settings(path: Optional[Path] = None, env: Optional[Mapping[str, str]] = None) -> Result:
    """Load and validate the settings file."""
    path = Path(path) if path else get_settings_path()

    if not path.exists():
        return Failure(SettingsError(f"Settings file {path.name} not found"))

    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        return Failure(SettingsError(f"Settings file {path.name} is not valid JSON: {e}"))
    except OSError as e:
        return Failure(SettingsError(f"Could not read settings file {path.name}: {e}"))

    result = parse_settings(raw, env=env, path=path)
    if not is_failure(result):
        logger.info(f"Loaded settings from {path.name}")
    return result


def create_default_settings_file(path: Optional[Path] = None,
                                 env: Optional[Mapping[str, str]] = None,
                                 ask: Callable[[str], str] = input) -> Result:
    """
    Write the default settings file and confirm the default languages.

    The API key is never written to the file; it must come from the
    environment. The user is asked whether the default languages are fine:
    anything but yes aborts setup so the file can be edited first.
    """
    path = Path(path) if path else get_settings_path()
    env = os.environ if env is None else env

    settings_to_write: Dict[str, Any] = json.loads(json.dumps(DEFAULT_SETTINGS))
    settings_to_write["openai"]["api_key"] = ""

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(settings_to_write, f, indent=2, ensure_ascii=False)
            f.write('\n')
    except OSError as e:
        return Failure(SettingsError(f"Could not create {path.name}: {e}"))

    logger.info(f"Created {path.name} with default settings")

    if not env.get(API_KEY_ENV):
        return Failure(SettingsValidationError(
            [f"openai.api_key: required (set it in the file or as {API_KEY_ENV})"], path
        ))

    languages = ", ".join(DEFAULT_SETTINGS["supported"])
    answer = ask(f"Default supported languages: {languages}. Use these languages? (Y/N): ").strip().lower()

    if answer in ("n", "no"):
        return Failure(SetupAborted(
            f"Edit the 'supported' property in {path.name} to list your languages, then run again."
        ))
    if answer not in ("y", "yes"):
        return Failure(SetupAborted(f"Invalid response. Edit {path.name} manually if needed, then run again."))

    logger.info("Using default languages")
    return parse_settings(settings_to_write, env=env, path=path)


def initialize_settings(path: Optional[Path] = None,
                        env: Optional[Mapping[str, str]] = None,
                        ask: Callable[[str], str] = input) -> Result:
    """
    Load settings, creating the default settings file on first run.

    Only a missing or unreadable file triggers creation; a readable file that
    fails validation is reported as is.
    """
    path = Path(path) if path else get_settings_path()
    result = load_settings(path, env=env)

    if is_failure(result) and not isinstance(result.error, SettingsValidationError):
        logger.info(f"{result.error}, creating default settings...")
        return create_default_settings_file(path, env=env, ask=ask)

    return result
