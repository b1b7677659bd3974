"""SDK public types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

CONFIG_FIELDS = ("authoring_key", "endpoint_base", "app_id", "version_id")
ENDPOINT_TEMPLATE = "https://{region}.api.intent-service.net/authoring/v2.0"


def endpoint_for_region(region: str) -> str:
    return ENDPOINT_TEMPLATE.format(region=region.strip().lower())


@dataclass(frozen=True)
class ServiceConfig:
    authoring_key: str
    endpoint_base: str
    app_id: str
    version_id: str

    def as_dict(self) -> dict[str, str]:
        # Field order is the on-disk order of the settings file.
        return {name: getattr(self, name) for name in CONFIG_FIELDS}

    def redacted(self) -> dict[str, str]:
        payload = self.as_dict()
        key = payload["authoring_key"]
        payload["authoring_key"] = f"{key[:4]}..." if len(key) > 8 else "[REDACTED]"
        return payload


@dataclass(frozen=True)
class RawArguments:
    options: Mapping[str, Any] = field(default_factory=dict)
    positionals: tuple[str, ...] = ()

    def get(self, name: str, default: Any = None) -> Any:
        return self.options.get(name, default)

    @property
    def input_file(self) -> str | None:
        value = self.options.get("in")
        return value if isinstance(value, str) else None

    @property
    def output_file(self) -> str | None:
        value = self.options.get("out")
        return value if isinstance(value, str) else None


__all__ = [
    "CONFIG_FIELDS",
    "ENDPOINT_TEMPLATE",
    "RawArguments",
    "ServiceConfig",
    "endpoint_for_region",
]
