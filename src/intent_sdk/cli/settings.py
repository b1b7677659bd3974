"""Local settings file for the intent CLI."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from intent_sdk.types import ServiceConfig

SETTINGS_FILENAME = ".intentrc"

logger = logging.getLogger(__name__)


def default_settings_path() -> Path:
    return Path.cwd() / SETTINGS_FILENAME


def _chmod_owner_only(path: Path) -> None:
    if os.name != "posix":
        return
    path.chmod(0o600)


def load_settings(path: str | Path | None = None) -> dict[str, Any] | None:
    """Read the settings file, or ``None`` when it is missing or unusable."""
    settings_path = Path(path) if path else default_settings_path()
    if not settings_path.exists():
        return None
    try:
        payload = json.loads(settings_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.debug("ignoring unreadable settings file %s: %s", settings_path, exc)
        return None
    if not isinstance(payload, dict):
        logger.debug("ignoring settings file %s: not a JSON object", settings_path)
        return None
    return payload


def save_settings(config: ServiceConfig, path: str | Path | None = None) -> Path:
    settings_path = Path(path) if path else default_settings_path()
    settings_path.parent.mkdir(parents=True, exist_ok=True)
    settings_path.write_text(json.dumps(config.as_dict(), indent=2) + "\n", encoding="utf-8")
    _chmod_owner_only(settings_path)
    return settings_path
