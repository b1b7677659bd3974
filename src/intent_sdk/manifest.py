"""Operation manifest lookup and pre-dispatch validation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Mapping, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from intent_sdk.errors import ArgumentError

logger = logging.getLogger(__name__)

OPERATION_MISSING_MESSAGE = "operation does not exist"


class OperationDescriptor(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    method: Literal["GET", "POST", "PUT", "PATCH", "DELETE"] = "GET"
    path: str = Field(..., min_length=1)
    entity_name: Optional[str] = None
    entity_type: Optional[str] = None
    query: list[str] = Field(default_factory=list)
    description: str = ""

    @property
    def requires_input(self) -> bool:
        return bool(self.entity_name)

    @property
    def expected_input_type(self) -> str:
        return self.entity_type or self.entity_name or "object"


@dataclass(frozen=True)
class ManifestEntry:
    resource: str
    action: str
    operation: OperationDescriptor | None


def lookup_operation(
    manifest: Mapping[str, Any],
    positionals: Sequence[str],
) -> ManifestEntry | None:
    """Select the manifest entry for ``<resource> <action>``.

    Returns ``None`` when the resource is unknown. A known resource whose
    action is missing or malformed yields an entry with ``operation=None``.
    """
    if len(positionals) < 2:
        return None
    resource, action = positionals[0].lower(), positionals[1].lower()
    actions = manifest.get(resource)
    if not isinstance(actions, Mapping):
        return None

    raw = actions.get(action)
    operation: OperationDescriptor | None = None
    if isinstance(raw, OperationDescriptor):
        operation = raw
    elif isinstance(raw, Mapping):
        try:
            operation = OperationDescriptor.model_validate(dict(raw))
        except ValidationError as exc:
            logger.debug("malformed descriptor for %s %s: %s", resource, action, exc)
    return ManifestEntry(resource=resource, action=action, operation=operation)


def validate_operation(entry: ManifestEntry | None, input_specified: bool) -> OperationDescriptor:
    if entry is None or entry.operation is None:
        raise ArgumentError(OPERATION_MISSING_MESSAGE)

    operation = entry.operation
    if not operation.requires_input and input_specified:
        raise ArgumentError(f"The {operation.name} operation does not accept an input")
    if operation.requires_input and not input_specified:
        raise ArgumentError(
            f"The {operation.name} operation requires an input of type: "
            f"{operation.expected_input_type}"
        )
    return operation


def iter_operations(manifest: Mapping[str, Any]) -> list[tuple[str, str, str]]:
    rows: list[tuple[str, str, str]] = []
    for resource in sorted(manifest):
        actions = manifest[resource]
        if not isinstance(actions, Mapping):
            continue
        for action in sorted(actions):
            raw = actions[action]
            if isinstance(raw, OperationDescriptor):
                description = raw.description
            elif isinstance(raw, Mapping):
                description = str(raw.get("description", ""))
            else:
                continue
            rows.append((resource, action, description))
    return rows


def _load_yaml_module() -> Any:
    try:
        import yaml
    except Exception as exc:  # pragma: no cover
        raise ArgumentError(
            "YAML parser not available. Install PyYAML to use `intent --manifest`."
        ) from exc
    return yaml


def load_manifest(path: str | Path) -> dict[str, Any]:
    yaml = _load_yaml_module()
    manifest_path = Path(path)
    raw = manifest_path.read_text(encoding="utf-8")
    try:
        payload = yaml.safe_load(raw) or {}
    except yaml.YAMLError as exc:
        raise ArgumentError(f"invalid manifest in {manifest_path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ArgumentError("manifest must be a mapping of resources to actions")
    return payload
