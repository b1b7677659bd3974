"""SDK error types."""

from __future__ import annotations


class IntentSDKError(RuntimeError):
    """Base SDK error."""


class ConfigurationError(IntentSDKError):
    """A required configuration field could not be resolved."""

    def __init__(self, message: str, *, missing: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.missing = missing


class ArgumentError(IntentSDKError):
    """The requested operation or its input does not match the manifest."""


class TranscriptError(ArgumentError):
    """A dialog transcript could not be converted."""


class RemoteOperationError(IntentSDKError):
    """The authoring service reported an error for the operation."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: object | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class InputTimeoutError(TimeoutError, IntentSDKError):
    """No data arrived on standard input within the wait bound."""
