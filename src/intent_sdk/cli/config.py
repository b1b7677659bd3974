"""Configuration resolution for the intent CLI.

Each field is resolved on its own from the command line, then the settings
file, then the environment. A field may come from a different source than
its siblings.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable, Mapping

from intent_sdk.cli.settings import load_settings
from intent_sdk.errors import ConfigurationError
from intent_sdk.types import CONFIG_FIELDS, ServiceConfig, endpoint_for_region

ENV_VARS = {
    "authoring_key": "INTENT_AUTHORING_KEY",
    "endpoint_base": "INTENT_ENDPOINT_BASE",
    "app_id": "INTENT_APP_ID",
    "version_id": "INTENT_VERSION_ID",
}

Lookup = Callable[[str], Any]


def _is_present(value: Any) -> bool:
    return value is not None and value != ""


def _first_present(name: str, lookups: list[Lookup]) -> Any:
    for lookup in lookups:
        value = lookup(name)
        if _is_present(value):
            return value
    return None


def resolve_config(
    arguments: Mapping[str, Any],
    settings: Mapping[str, Any] | None,
    environ: Mapping[str, str],
) -> ServiceConfig:
    file_values = settings or {}
    lookups: list[Lookup] = [
        arguments.get,
        file_values.get,
        lambda name: environ.get(ENV_VARS[name]),
    ]

    resolved = {name: _first_present(name, lookups) for name in CONFIG_FIELDS}
    missing = tuple(
        name for name, value in resolved.items() if not isinstance(value, str) or value == ""
    )
    if missing:
        raise ConfigurationError(
            f"missing required configuration: {', '.join(missing)}. "
            "Pass the matching flags, set "
            f"{', '.join(ENV_VARS[name] for name in missing)}, "
            "or run `intent --init` to create a settings file",
            missing=missing,
        )
    return ServiceConfig(**resolved)


def config_arguments(options: Mapping[str, Any]) -> dict[str, Any]:
    """Pick the configuration fields out of parsed command-line options."""
    arguments = {name: options.get(name) for name in CONFIG_FIELDS}
    region = options.get("region")
    if not _is_present(arguments["endpoint_base"]) and isinstance(region, str) and region.strip():
        arguments["endpoint_base"] = endpoint_for_region(region)
    return arguments


def load_config(
    options: Mapping[str, Any],
    *,
    settings_path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ServiceConfig:
    return resolve_config(
        config_arguments(options),
        load_settings(settings_path),
        os.environ if environ is None else environ,
    )
