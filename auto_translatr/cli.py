"""Command line entry point: scan the codebase, then fill missing translations."""

import argparse
import asyncio
import os
import sys
from pathlib import Path
from typing import Callable, List, Mapping, Optional

from auto_translatr import __version__
from auto_translatr.ai.service import AIService
from auto_translatr.config import SetupAborted, Settings, get_settings_path, initialize_settings
from auto_translatr.core.result import is_failure
from auto_translatr.logger import LOG_MODES, configure_logging, get_logger
from auto_translatr.project.scanner import read_codebase
from auto_translatr.project.store import TranslationStore, write_language_file
from auto_translatr.translation.pipeline import Dependencies, PipelineReport, add_missing_translations

logger = get_logger(__name__)


class RunError(Exception):
    """A setup step failed before translation could start."""
    pass


async def translate_project(settings: Settings, root: Path, ai_service: AIService) -> PipelineReport:
    """
    Scan ``root``, update the default language file and translate the rest.

    Raises:
        RunError: If scanning or writing the default language file fails
    """
    scan_result = read_codebase(root, settings.include, settings.ignore)
    if is_failure(scan_result):
        raise RunError(f"Codebase scan failed: {scan_result.error}")

    output_dir = root / settings.output
    write_result = write_language_file(settings.default, scan_result.value, output_dir, append=True)
    if is_failure(write_result):
        raise RunError(str(write_result.error))
    logger.info(f"Successfully updated {settings.default}.json")

    store = TranslationStore(settings.supported, output_dir)
    report = await add_missing_translations(
        settings.default,
        Dependencies(reader=store.read, writer=store.write, translator=ai_service.send),
    )

    usage = ai_service.get_total_token_usage()
    logger.info(
        f"{ai_service.request_count} model requests "
        f"(prompt tokens: {usage['prompt_tokens']}, completion tokens: {usage['completion_tokens']})"
    )
    return report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='auto-translatr',
        description="Extract t('...') strings from a codebase and translate the missing ones with an LLM",
    )
    parser.add_argument('--settings', type=Path, help='Settings file (default: <root>/auto-translate.settings.json)')
    parser.add_argument('--root', type=Path, help='Directory to scan (default: current directory)')
    parser.add_argument('--log-mode', choices=LOG_MODES, help='Override the log_mode setting')
    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv: Optional[List[str]] = None,
         env: Optional[Mapping[str, str]] = None,
         ask: Callable[[str], str] = input) -> int:
    args = build_parser().parse_args(argv)
    env = os.environ if env is None else env
    root = (args.root or Path.cwd()).resolve()
    settings_path = args.settings or get_settings_path(root)

    if args.log_mode:
        configure_logging(args.log_mode)

    settings_result = initialize_settings(settings_path, env=env, ask=ask)
    if is_failure(settings_result):
        if isinstance(settings_result.error, SetupAborted):
            print(settings_result.error)
            return 0
        print(f"Auto-translate failed: {settings_result.error}", file=sys.stderr)
        return 1

    settings = settings_result.value
    configure_logging(args.log_mode or settings.log_mode)

    try:
        asyncio.run(translate_project(settings, root, AIService(settings.openai)))
    except RunError as e:
        print(f"Auto-translate failed: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
