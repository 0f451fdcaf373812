"""Helpers for persisting codec settings as JSON."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from shared.logging_config import ensure_app_logging

from .midi_codec.meta_writers import available_meta_event_writers

logger = logging.getLogger(__name__)

_ENV_SETTINGS_PATH = "SMF_TOOLS_SETTINGS_PATH"

DEFAULT_META_EVENT_WRITER = "default"
_LOG_VERBOSITIES = {"disabled", "error", "warning", "info", "verbose"}


@dataclass(frozen=True)
class CodecSettings:
    """Options applied by the read/write facades when callers pass none."""

    disable_running_status: bool = False
    meta_event_writer: str = DEFAULT_META_EVENT_WRITER
    log_verbosity: str | None = None


def _default_settings_path() -> Path:
    """Return the configured settings path, falling back to the user home."""

    override = os.environ.get(_ENV_SETTINGS_PATH)
    if override:
        return Path(override)
    return Path.home() / ".smf_tools" / "settings.json"


def _coerce_bool(raw: Any) -> bool | None:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)):
        return bool(int(raw))
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in {"1", "true", "t", "yes", "on"}:
            return True
        if normalized in {"0", "false", "f", "no", "off", ""}:
            return False
    return None


def load_settings(path: Path | None = None) -> CodecSettings:
    """Load persisted settings, returning defaults when missing or invalid."""

    location = path or _default_settings_path()
    try:
        raw = location.read_text(encoding="utf-8")
    except FileNotFoundError:
        return CodecSettings()
    except OSError:
        logger.warning("Could not read codec settings from %s", location)
        return CodecSettings()

    try:
        data: Dict[str, Any] = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Ignoring malformed codec settings in %s", location)
        return CodecSettings()
    if not isinstance(data, dict):
        return CodecSettings()

    disable_running_status = _coerce_bool(data.get("disable_running_status"))
    if disable_running_status is None:
        disable_running_status = False

    raw_writer = data.get("meta_event_writer")
    meta_event_writer = DEFAULT_META_EVENT_WRITER
    if isinstance(raw_writer, str):
        normalized = raw_writer.strip().lower()
        if normalized in available_meta_event_writers():
            meta_event_writer = normalized
        else:
            logger.warning("Unknown meta event writer %r; using %s", raw_writer, DEFAULT_META_EVENT_WRITER)

    log_verbosity = data.get("log_verbosity")
    if not isinstance(log_verbosity, str) or log_verbosity.strip().lower() not in _LOG_VERBOSITIES:
        log_verbosity = None
    else:
        log_verbosity = log_verbosity.strip().lower()

    return CodecSettings(
        disable_running_status=disable_running_status,
        meta_event_writer=meta_event_writer,
        log_verbosity=log_verbosity,
    )


def save_settings(settings: CodecSettings, path: Path | None = None) -> None:
    """Persist settings to disk."""

    location = path or _default_settings_path()
    data: Dict[str, Any] = {
        "disable_running_status": settings.disable_running_status,
        "meta_event_writer": settings.meta_event_writer,
    }
    if settings.log_verbosity:
        data["log_verbosity"] = settings.log_verbosity

    location.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(data, indent=2, sort_keys=True) + "\n"
    location.write_text(payload, encoding="utf-8")


def apply_logging_settings(settings: CodecSettings) -> Path:
    """Install the log handlers, honouring the configured verbosity."""

    return ensure_app_logging(settings.log_verbosity)


__all__ = [
    "CodecSettings",
    "DEFAULT_META_EVENT_WRITER",
    "apply_logging_settings",
    "load_settings",
    "save_settings",
]
