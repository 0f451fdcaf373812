from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_project_root_on_path() -> None:
    """Guarantee the repository root is discoverable for absolute imports."""

    root = Path(__file__).resolve().parent.parent
    root_str = str(root)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)

    tests_dir = root / "tests"
    tests_str = str(tests_dir)
    if tests_str not in sys.path:
        sys.path.insert(1, tests_str)


_ensure_project_root_on_path()


@pytest.fixture(autouse=True)
def _isolated_settings_env(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory):
    """Keep settings and log files out of the real user home."""

    settings_dir = tmp_path_factory.mktemp("settings")
    monkeypatch.setenv("SMF_TOOLS_SETTINGS_PATH", str(settings_dir / "settings.json"))
    monkeypatch.setenv("SMF_TOOLS_LOG_DIR", str(settings_dir / "logs"))
    monkeypatch.delenv("SMF_TOOLS_LOG_FILE", raising=False)
    yield
