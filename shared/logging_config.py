"""Central logging configuration for applications embedding the SMF codec.

The codec modules only emit records through ``logging.getLogger(__name__)``;
this module decides where those records end up.  Invoking the configuration
repeatedly (as happens in tests) never installs duplicate handlers.

Two environment variables allow customising where the log file is written:

``SMF_TOOLS_LOG_FILE``
    Absolute path to the log file that should be created.

``SMF_TOOLS_LOG_DIR``
    Directory where the default log file name will be created.  Ignored when
    ``SMF_TOOLS_LOG_FILE`` is present.
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path

_LOG_FILE_ENV = "SMF_TOOLS_LOG_FILE"
_LOG_DIR_ENV = "SMF_TOOLS_LOG_DIR"
_DEFAULT_DIRNAME = ".smf_tools"
_DEFAULT_LOGNAME = "codec.log"
_CONFIGURED = False
_LOG_PATH: Path | None = None
_HANDLER_TAG = "_smf_tools_logging_handler"
_FILE_HANDLER: logging.FileHandler | None = None


class LogVerbosity(str, Enum):
    """Verbosity levels supported by the log file."""

    DISABLED = "disabled"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    VERBOSE = "verbose"


_VERBOSITY_LEVELS: dict[LogVerbosity, int] = {
    LogVerbosity.DISABLED: logging.CRITICAL + 1,
    LogVerbosity.ERROR: logging.ERROR,
    LogVerbosity.WARNING: logging.WARNING,
    LogVerbosity.INFO: logging.INFO,
    LogVerbosity.VERBOSE: logging.DEBUG,
}

_DEFAULT_VERBOSITY = LogVerbosity.INFO
_CURRENT_VERBOSITY = _DEFAULT_VERBOSITY


def ensure_app_logging(verbosity: LogVerbosity | str | None = None) -> Path:
    """Configure the root logger once and return the log file path.

    The first invocation installs a file handler at the current verbosity.
    Subsequent calls return the already configured path; a ``verbosity``
    argument is still applied.
    """

    global _CONFIGURED, _LOG_PATH, _FILE_HANDLER

    if _CONFIGURED and _LOG_PATH is not None:
        if verbosity is not None:
            set_file_log_verbosity(verbosity)
        return _LOG_PATH

    log_path = _resolve_log_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setLevel(_VERBOSITY_LEVELS[_CURRENT_VERBOSITY])
    file_handler.setFormatter(formatter)
    setattr(file_handler, _HANDLER_TAG, True)
    root.addHandler(file_handler)
    _FILE_HANDLER = file_handler

    _CONFIGURED = True
    _LOG_PATH = log_path

    if verbosity is not None:
        set_file_log_verbosity(verbosity)

    logging.getLogger(__name__).info(
        "Writing codec logs to %s (verbosity=%s)",
        log_path,
        _CURRENT_VERBOSITY.value,
    )
    return log_path


def set_file_log_verbosity(verbosity: LogVerbosity | str) -> None:
    """Adjust the minimum severity recorded in the log file."""

    global _CURRENT_VERBOSITY

    if isinstance(verbosity, str) and not isinstance(verbosity, LogVerbosity):
        try:
            verbosity = LogVerbosity(verbosity.lower())
        except ValueError as exc:
            raise ValueError(f"Unsupported log verbosity: {verbosity}") from exc

    _CURRENT_VERBOSITY = verbosity
    handler = _FILE_HANDLER
    if handler is None:
        return
    handler.setLevel(_VERBOSITY_LEVELS[verbosity])
    logging.getLogger(__name__).info("File log verbosity set to %s", verbosity.value)


def get_file_log_verbosity() -> LogVerbosity:
    return _CURRENT_VERBOSITY


def _resolve_log_path() -> Path:
    env_file = os.environ.get(_LOG_FILE_ENV)
    if env_file:
        return Path(env_file).expanduser()

    env_dir = os.environ.get(_LOG_DIR_ENV)
    if env_dir:
        return Path(env_dir).expanduser() / _DEFAULT_LOGNAME

    home = Path.home()
    return home / _DEFAULT_DIRNAME / "logs" / _DEFAULT_LOGNAME


def _reset_for_tests() -> None:
    """Remove handlers installed by :func:`ensure_app_logging`."""

    global _CONFIGURED, _LOG_PATH, _FILE_HANDLER, _CURRENT_VERBOSITY

    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_TAG, False):
            root.removeHandler(handler)
            handler.close()

    _CONFIGURED = False
    _LOG_PATH = None
    _FILE_HANDLER = None
    _CURRENT_VERBOSITY = _DEFAULT_VERBOSITY


__all__ = [
    "LogVerbosity",
    "ensure_app_logging",
    "get_file_log_verbosity",
    "set_file_log_verbosity",
]
