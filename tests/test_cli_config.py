from __future__ import annotations

import json

import pytest

from intent_sdk.cli.config import ENV_VARS, config_arguments, load_config, resolve_config
from intent_sdk.errors import ConfigurationError
from intent_sdk.types import CONFIG_FIELDS, endpoint_for_region

_FULL_ENV = {
    "INTENT_AUTHORING_KEY": "env-key",
    "INTENT_ENDPOINT_BASE": "https://env.example",
    "INTENT_APP_ID": "env-app",
    "INTENT_VERSION_ID": "env-version",
}


@pytest.mark.parametrize(
    "sources",
    [
        ("arg", "arg", "arg", "arg"),
        ("file", "file", "file", "file"),
        ("env", "env", "env", "env"),
        ("arg", "file", "env", "arg"),
        ("env", "arg", "file", "file"),
        ("file", "env", "arg", "env"),
    ],
)
def test_each_field_resolves_from_its_highest_source(sources) -> None:
    arguments: dict[str, str] = {}
    settings: dict[str, str] = {}
    environ: dict[str, str] = {}
    for name, source in zip(CONFIG_FIELDS, sources):
        # Lower sources are always populated so precedence is actually exercised.
        environ[ENV_VARS[name]] = f"env-{name}"
        if source in ("arg", "file"):
            settings[name] = f"file-{name}"
        if source == "arg":
            arguments[name] = f"arg-{name}"

    config = resolve_config(arguments, settings, environ)

    for name, source in zip(CONFIG_FIELDS, sources):
        assert getattr(config, name) == f"{source}-{name}"


def test_missing_settings_file_falls_back_to_environment() -> None:
    config = resolve_config({}, None, _FULL_ENV)
    assert config.authoring_key == "env-key"
    assert config.version_id == "env-version"


def test_empty_argument_falls_through_to_next_source() -> None:
    config = resolve_config({"app_id": ""}, {"app_id": "file-app"}, _FULL_ENV)
    assert config.app_id == "file-app"


def test_missing_fields_are_named_in_error() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        resolve_config({"authoring_key": "k"}, {"endpoint_base": "https://x"}, {})

    assert excinfo.value.missing == ("app_id", "version_id")
    message = str(excinfo.value)
    assert "app_id" in message
    assert "version_id" in message
    assert "intent --init" in message


def test_non_string_value_is_rejected() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        resolve_config({}, {"version_id": 3}, _FULL_ENV)
    assert excinfo.value.missing == ("version_id",)


def test_whitespace_value_is_kept_as_given() -> None:
    config = resolve_config({"app_id": "   ", "authoring_key": " key "}, None, _FULL_ENV)
    assert config.app_id == "   "
    assert config.authoring_key == " key "


def test_region_derives_endpoint_when_endpoint_absent() -> None:
    arguments = config_arguments({"region": "WestUS"})
    assert arguments["endpoint_base"] == endpoint_for_region("westus")
    assert arguments["endpoint_base"].startswith("https://westus.")


def test_explicit_endpoint_wins_over_region() -> None:
    arguments = config_arguments({"region": "westus", "endpoint_base": "https://custom"})
    assert arguments["endpoint_base"] == "https://custom"


def test_load_config_reads_settings_file(tmp_path) -> None:
    settings_path = tmp_path / ".intentrc"
    settings_path.write_text(
        json.dumps({"authoring_key": "file-key", "app_id": "file-app"}),
        encoding="utf-8",
    )
    config = load_config(
        {"version_id": "arg-version"},
        settings_path=settings_path,
        environ={"INTENT_ENDPOINT_BASE": "https://env.example", "INTENT_APP_ID": "env-app"},
    )
    assert config.authoring_key == "file-key"
    assert config.endpoint_base == "https://env.example"
    assert config.app_id == "file-app"
    assert config.version_id == "arg-version"


def test_load_config_treats_malformed_settings_as_absent(tmp_path) -> None:
    settings_path = tmp_path / ".intentrc"
    settings_path.write_text("{not json", encoding="utf-8")
    config = load_config({}, settings_path=settings_path, environ=_FULL_ENV)
    assert config.app_id == "env-app"


def test_load_config_uses_process_environment_by_default(tmp_path, monkeypatch) -> None:
    for name, value in _FULL_ENV.items():
        monkeypatch.setenv(name, value)
    config = load_config({}, settings_path=tmp_path / "missing")
    assert config.endpoint_base == "https://env.example"
