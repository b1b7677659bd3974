"""Command-line interface for the intent authoring service."""

from __future__ import annotations

import argparse
import logging
import re
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version
from pathlib import Path
from typing import Any, Callable, Collection, Mapping, Sequence

from intent_sdk.catalog import DEFAULT_MANIFEST
from intent_sdk.cli.config import load_config
from intent_sdk.cli.payload import read_payload_file, write_result
from intent_sdk.cli.wizard import run_wizard
from intent_sdk.client import OperationExecutor, ServiceClient, raise_for_error_document
from intent_sdk.errors import ArgumentError, IntentSDKError
from intent_sdk.manifest import iter_operations, load_manifest, lookup_operation, validate_operation
from intent_sdk.types import RawArguments

EXIT_SUCCESS = 0
EXIT_ERROR = 1

_VALUE_OPTIONS = (
    "--in",
    "--out",
    "--manifest",
    "--authoring-key",
    "--endpoint-base",
    "--region",
    "--app-id",
    "--version-id",
)
_FLAG_OPTIONS = ("--init", "-h", "--help", "-v", "--version", "--verbose")

_SENSITIVE_FIELDS = (
    "authoring_key",
    "authoring-key",
    "x-authoring-key",
    "api_key",
    "token",
)

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):  # type: ignore[override]
        raise ArgumentError(message)


def _sdk_version() -> str:
    try:
        return pkg_version("intent-sdk")
    except PackageNotFoundError:
        return "0.0.0+local"


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="intent",
        usage="intent <resource> <action> [--in FILE] [--out FILE] [options]",
        description="Manage applications on the intent authoring service.",
        epilog=(
            "Operation options such as --intent-id ID go after <resource> <action>. "
            "An option placed before them is read as a flag when the next word is a resource."
        ),
        add_help=False,
    )
    parser.add_argument("operation", nargs="*", help="<resource> <action>, e.g. `apps list`")
    parser.add_argument("--init", action="store_true", help="Create a .intentrc settings file")
    parser.add_argument("-h", "--help", action="store_true", help="Show this help")
    parser.add_argument("-v", "--version", action="store_true", help="Show the CLI version")
    parser.add_argument("--verbose", action="store_true", help="Log debug output to stderr")
    parser.add_argument("--in", dest="in_file", default=None, help="JSON input payload file")
    parser.add_argument(
        "--out",
        dest="out_file",
        default=None,
        help="Write the result to this file instead of stdout",
    )
    parser.add_argument(
        "--manifest",
        default=None,
        help="YAML or JSON operation manifest replacing the built-in catalog",
    )

    config = parser.add_argument_group("configuration (overrides .intentrc and environment)")
    config.add_argument("--authoring-key", default=None, help="Authoring key [INTENT_AUTHORING_KEY]")
    config.add_argument(
        "--endpoint-base",
        default=None,
        help="Service endpoint base URL [INTENT_ENDPOINT_BASE]",
    )
    config.add_argument(
        "--region",
        default=None,
        help="Region used to derive the endpoint base when --endpoint-base is absent",
    )
    config.add_argument("--app-id", default=None, help="Application id [INTENT_APP_ID]")
    config.add_argument("--version-id", default=None, help="Version id [INTENT_VERSION_ID]")
    return parser


def _split_operation_options(
    argv: Sequence[str],
    resources: Collection[str] = (),
) -> tuple[list[str], dict[str, Any]]:
    """Separate operation parameters (``--intent-id x``) from CLI options.

    An unknown option followed by a plain token takes it as its value, unless
    that token names a resource in ``resources``: then the option is a flag.
    """
    resource_names = {str(name).lower() for name in resources}
    known: list[str] = []
    extras: dict[str, Any] = {}
    tokens = list(argv)
    index = 0
    while index < len(tokens):
        token = tokens[index]
        name = token.split("=", 1)[0]
        if not token.startswith("--") or token == "--" or name in _VALUE_OPTIONS + _FLAG_OPTIONS:
            known.append(token)
            if name in _VALUE_OPTIONS and "=" not in token and index + 1 < len(tokens):
                known.append(tokens[index + 1])
                index += 1
            index += 1
            continue

        key = name[2:].replace("-", "_")
        if "=" in token:
            extras[key] = token.split("=", 1)[1]
        elif (
            index + 1 < len(tokens)
            and not tokens[index + 1].startswith("-")
            and tokens[index + 1].lower() not in resource_names
        ):
            extras[key] = tokens[index + 1]
            index += 1
        else:
            extras[key] = True
        index += 1
    return known, extras


def check_path_options(options: Mapping[str, Any]) -> None:
    for name in ("in", "out"):
        if options.get(name) == "":
            raise ArgumentError(f"--{name} requires a file path")


def parse_arguments(
    parser: argparse.ArgumentParser,
    argv: Sequence[str],
    resources: Collection[str] = (),
) -> RawArguments:
    known, extras = _split_operation_options(argv, resources)
    namespace = parser.parse_args(known)
    options: dict[str, Any] = dict(extras)
    parsed = vars(namespace)
    positionals = tuple(parsed.pop("operation"))
    parsed["in"] = parsed.pop("in_file")
    parsed["out"] = parsed.pop("out_file")
    options.update(parsed)
    return RawArguments(options=options, positionals=positionals)


def _sanitize_error_text(value: str) -> str:
    redacted = value
    for field in _SENSITIVE_FIELDS:
        redacted = re.sub(
            rf"(?i)({re.escape(field)}['\"]?\s*[=:]\s*['\"]?)([^,'\"\s]+)",
            r"\1[REDACTED]",
            redacted,
        )
    return redacted


def _print_error(stderr, prefix: str, message: str, *, code: int) -> int:
    print(f"{prefix}: {_sanitize_error_text(message)}", file=stderr)
    return code


def _render_help(parser: argparse.ArgumentParser, manifest: Mapping[str, Any], stream) -> None:
    print(parser.format_help().rstrip(), file=stream)
    rows = iter_operations(manifest)
    if not rows:
        return
    print("\noperations:", file=stream)
    width = max(len(f"{resource} {action}") for resource, action, _ in rows)
    for resource, action, description in rows:
        print(f"  {f'{resource} {action}':<{width}}  {description}".rstrip(), file=stream)


def _active_manifest(arguments: RawArguments, manifest: Mapping[str, Any] | None) -> Mapping[str, Any]:
    if manifest is not None:
        return manifest
    manifest_path = arguments.get("manifest")
    if isinstance(manifest_path, str):
        return load_manifest(manifest_path)
    return DEFAULT_MANIFEST


def execute_operation(
    arguments: RawArguments,
    *,
    manifest: Mapping[str, Any],
    executor: OperationExecutor | None = None,
    settings_path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
    stdout=None,
) -> Path | None:
    """Resolve, validate, acquire, execute and emit, stopping at the first failure."""
    check_path_options(arguments.options)
    config = load_config(arguments.options, settings_path=settings_path, environ=environ)
    logger.debug("resolved configuration: %s", config.redacted())

    entry = lookup_operation(manifest, arguments.positionals)
    operation = validate_operation(entry, arguments.input_file is not None)
    logger.debug("validated operation %s", operation.name)

    payload = read_payload_file(arguments.input_file) if arguments.input_file else None

    active_executor = executor if executor is not None else ServiceClient()
    result = active_executor.execute(config, entry, arguments, payload)
    raise_for_error_document(result)

    return write_result(result, arguments.output_file, stdout=stdout)


def main(
    argv: Sequence[str] | None = None,
    *,
    stdout=sys.stdout,
    stderr=sys.stderr,
    environ: Mapping[str, str] | None = None,
    settings_path: str | Path | None = None,
    executor: OperationExecutor | None = None,
    manifest: Mapping[str, Any] | None = None,
    prompt: Callable[[str], str] = input,
) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = _build_parser()

    parse_manifest = manifest if manifest is not None else DEFAULT_MANIFEST
    try:
        arguments = parse_arguments(parser, argv, parse_manifest)
    except ArgumentError as exc:
        _print_error(stderr, "argument error", str(exc), code=EXIT_ERROR)
        _render_help(parser, parse_manifest, stderr)
        return EXIT_ERROR

    if arguments.get("verbose"):
        logging.basicConfig(
            level=logging.DEBUG,
            stream=stderr,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

    if arguments.get("init"):
        try:
            run_wizard(settings_path, prompt=prompt, stdout=stdout)
        except KeyboardInterrupt:
            print("\nSetup cancelled; nothing was written.", file=stdout)
        except OSError as exc:
            return _print_error(stderr, "file error", str(exc), code=EXIT_ERROR)
        return EXIT_SUCCESS

    if arguments.get("help") or not argv:
        try:
            _render_help(parser, _active_manifest(arguments, manifest), stdout)
        except (IntentSDKError, OSError) as exc:
            return _print_error(stderr, "manifest error", str(exc), code=EXIT_ERROR)
        return EXIT_SUCCESS

    if arguments.get("version"):
        print(f"intent-sdk {_sdk_version()}", file=stdout)
        return EXIT_SUCCESS

    active_manifest: Mapping[str, Any] = DEFAULT_MANIFEST
    try:
        active_manifest = _active_manifest(arguments, manifest)
        if active_manifest is not parse_manifest:
            arguments = parse_arguments(parser, argv, active_manifest)
        output_path = execute_operation(
            arguments,
            manifest=active_manifest,
            executor=executor,
            settings_path=settings_path,
            environ=environ,
            stdout=stdout,
        )
    except ArgumentError as exc:
        _print_error(stderr, "argument error", str(exc), code=EXIT_ERROR)
        _render_help(parser, active_manifest, stderr)
        return EXIT_ERROR
    except IntentSDKError as exc:
        return _print_error(stderr, "error", str(exc), code=EXIT_ERROR)
    except (OSError, ValueError) as exc:
        return _print_error(stderr, "file error", str(exc), code=EXIT_ERROR)

    if output_path is not None:
        print(f"Output written to {output_path}", file=stdout)
    return EXIT_SUCCESS


if __name__ == "__main__":
    raise SystemExit(main())
