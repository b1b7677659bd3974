"""Intent SDK public surface."""

from intent_sdk.catalog import DEFAULT_MANIFEST
from intent_sdk.client import OperationExecutor, ServiceClient, raise_for_error_document
from intent_sdk.errors import (
    ArgumentError,
    ConfigurationError,
    InputTimeoutError,
    IntentSDKError,
    RemoteOperationError,
    TranscriptError,
)
from intent_sdk.manifest import (
    ManifestEntry,
    OperationDescriptor,
    load_manifest,
    lookup_operation,
    validate_operation,
)
from intent_sdk.transcript import MessageRecord, convert_transcript
from intent_sdk.types import RawArguments, ServiceConfig, endpoint_for_region

__all__ = [
    "IntentSDKError",
    "ConfigurationError",
    "ArgumentError",
    "TranscriptError",
    "RemoteOperationError",
    "InputTimeoutError",
    "DEFAULT_MANIFEST",
    "OperationExecutor",
    "ServiceClient",
    "raise_for_error_document",
    "ManifestEntry",
    "OperationDescriptor",
    "load_manifest",
    "lookup_operation",
    "validate_operation",
    "MessageRecord",
    "convert_transcript",
    "RawArguments",
    "ServiceConfig",
    "endpoint_for_region",
]
