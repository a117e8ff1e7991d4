
import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_MODES = ('off', 'info', 'debug')

# Current mode shared by every logger handed out by get_logger
_log_mode = 'info'
_log_file: Optional[Path] = None
_managed_loggers = set()


def _level_for(log_mode: str) -> int:
    if log_mode == 'debug':
        return logging.DEBUG
    if log_mode == 'off':
        # Errors still reach the console
        return logging.ERROR
    return logging.INFO


def _apply(logger: logging.Logger) -> None:
    """Bring a logger's level and handlers in line with the current mode."""
    level = _level_for(_log_mode)
    log_format = logging.Formatter(LOG_FORMAT)
    logger.setLevel(level)

    file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
    wants_file = _log_mode != 'off' and _log_file is not None

    # Drop file handlers that point somewhere else or are no longer wanted
    for handler in list(file_handlers):
        if not wants_file or Path(handler.baseFilename) != _log_file.resolve():
            handler.close()
            logger.removeHandler(handler)
            file_handlers.remove(handler)

    if wants_file and not file_handlers:
        _log_file.parent.mkdir(parents=True, exist_ok=True)
        f_handler = logging.FileHandler(_log_file, encoding='utf-8')
        f_handler.setLevel(logging.DEBUG)
        f_handler.setFormatter(log_format)
        logger.addHandler(f_handler)

    has_console = False
    for handler in logger.handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
            handler.setLevel(level)
            has_console = True

    if not has_console:
        c_handler = logging.StreamHandler()
        c_handler.setLevel(level)
        c_handler.setFormatter(log_format)
        logger.addHandler(c_handler)


def configure_logging(log_mode: str = 'info', log_file: Optional[Path] = None) -> None:
    """Switch log mode (and optional log file) for all package loggers."""
    global _log_mode, _log_file
    if log_mode not in LOG_MODES:
        raise ValueError(f"Unknown log mode '{log_mode}', expected one of {', '.join(LOG_MODES)}")

    _log_mode = log_mode
    _log_file = Path(log_file) if log_file else None

    for name in list(_managed_loggers):
        _apply(logging.getLogger(name))


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    _managed_loggers.add(name)
    _apply(logger)
    return logger
