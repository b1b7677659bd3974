"""HTTP executor for authoring service operations."""

from __future__ import annotations

import logging
import string
from dataclasses import dataclass
from typing import Any, Protocol

from intent_sdk.errors import ArgumentError, RemoteOperationError
from intent_sdk.manifest import ManifestEntry
from intent_sdk.types import RawArguments, ServiceConfig

AUTHORING_KEY_HEADER = "x-authoring-key"

logger = logging.getLogger(__name__)


class OperationExecutor(Protocol):
    def execute(
        self,
        config: ServiceConfig,
        entry: ManifestEntry,
        arguments: RawArguments,
        payload: Any | None,
    ) -> Any: ...


def _template_fields(template: str) -> list[str]:
    return [name for _, name, _, _ in string.Formatter().parse(template) if name]


def _parameter(name: str, config: ServiceConfig, arguments: RawArguments) -> Any:
    value = arguments.get(name)
    if value is None or value == "":
        value = config.as_dict().get(name)
    return value


def error_message(result: Any) -> str | None:
    if not isinstance(result, dict) or not result.get("error"):
        return None
    error = result["error"]
    if isinstance(error, dict):
        message = error.get("message")
        return str(message) if message else "remote operation failed"
    return str(error)


def raise_for_error_document(result: Any) -> Any:
    message = error_message(result)
    if message is not None:
        raise RemoteOperationError(message, body=result)
    return result


@dataclass
class ServiceClient:
    timeout: float = 10.0

    def __post_init__(self) -> None:
        try:
            import requests
        except Exception as exc:  # pragma: no cover
            raise RemoteOperationError(f"requests stack unavailable: {exc}") from exc

        self._requests = requests
        self._session = requests.Session()

    def _url(self, base_url: str, path: str) -> str:
        return f"{base_url.rstrip('/')}/{path.lstrip('/')}"

    def build_path(self, template: str, config: ServiceConfig, arguments: RawArguments) -> str:
        values: dict[str, Any] = {}
        for name in _template_fields(template):
            value = _parameter(name, config, arguments)
            if value is None or value == "":
                raise ArgumentError(f"missing required option: --{name.replace('_', '-')}")
            values[name] = value
        return template.format(**values)

    def build_query(
        self, names: list[str], config: ServiceConfig, arguments: RawArguments
    ) -> dict[str, Any]:
        query: dict[str, Any] = {}
        for name in names:
            value = _parameter(name, config, arguments)
            if value is not None and value != "" and not isinstance(value, bool):
                query[name] = value
        return query

    def execute(
        self,
        config: ServiceConfig,
        entry: ManifestEntry,
        arguments: RawArguments,
        payload: Any | None,
    ) -> Any:
        operation = entry.operation
        if operation is None:
            raise ArgumentError("operation does not exist")

        url = self._url(config.endpoint_base, self.build_path(operation.path, config, arguments))
        params = self.build_query(operation.query, config, arguments)
        logger.debug("%s %s params=%s", operation.method, url, params)
        try:
            response = self._session.request(
                operation.method,
                url,
                params=params or None,
                json=payload,
                headers={AUTHORING_KEY_HEADER: config.authoring_key},
                timeout=self.timeout,
            )
        except Exception as exc:
            raise RemoteOperationError(f"service unavailable: {exc}") from exc

        body: Any = None
        if response.content:
            try:
                body = response.json()
            except ValueError:
                body = {"result": response.text}

        if response.status_code >= 400:
            if error_message(body) is not None:
                return body
            detail = response.text.strip() or "no response body"
            return {"error": {"message": f"{operation.name} failed: {response.status_code} {detail}"}}

        if body is None:
            return {"status": response.status_code}
        return body


__all__ = ["OperationExecutor", "ServiceClient", "raise_for_error_document"]
