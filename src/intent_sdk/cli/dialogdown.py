"""Command-line converter from dialog transcripts to message records."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from intent_sdk.cli.main import _ArgumentParser, _print_error, _sdk_version, check_path_options
from intent_sdk.cli.payload import STDIN_TIMEOUT_SECONDS, read_stdin, read_text_file, write_result
from intent_sdk.errors import ArgumentError, IntentSDKError
from intent_sdk.transcript import convert_transcript

EXIT_SUCCESS = 0
EXIT_ERROR = 1


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="dialogdown",
        description=(
            "Convert a dialog transcript into message records. "
            "Reads the transcript from --in or from stdin."
        ),
        add_help=False,
    )
    parser.add_argument("--in", dest="in_file", default=None, help="Transcript file to convert")
    parser.add_argument(
        "--out",
        dest="out_file",
        default=None,
        help="Write the records to this file instead of stdout",
    )
    parser.add_argument(
        "--static",
        action="store_true",
        help="Use a fixed start time and ids for reproducible output",
    )
    parser.add_argument("-h", "--help", action="store_true", help="Show this help")
    parser.add_argument("-v", "--version", action="store_true", help="Show the CLI version")
    parser.add_argument("--verbose", action="store_true", help="Log debug output to stderr")
    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    stdout=sys.stdout,
    stderr=sys.stderr,
    stdin=None,
    stdin_timeout: float = STDIN_TIMEOUT_SECONDS,
) -> int:
    parser = _build_parser()
    try:
        args = parser.parse_args(sys.argv[1:] if argv is None else list(argv))
        check_path_options({"in": args.in_file, "out": args.out_file})
    except ArgumentError as exc:
        _print_error(stderr, "argument error", str(exc), code=EXIT_ERROR)
        print(parser.format_help().rstrip(), file=stderr)
        return EXIT_ERROR

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=stderr)

    if args.help:
        print(parser.format_help().rstrip(), file=stdout)
        return EXIT_SUCCESS

    if args.version:
        print(f"dialogdown {_sdk_version()}", file=stdout)
        return EXIT_SUCCESS

    try:
        if args.in_file is not None:
            text = read_text_file(args.in_file)
        else:
            text = read_stdin(stdin, timeout=stdin_timeout)
        records = convert_transcript(text, static=args.static)
        output_path = write_result(records, args.out_file, stdout=stdout)
    except ArgumentError as exc:
        _print_error(stderr, "transcript error", str(exc), code=EXIT_ERROR)
        return EXIT_ERROR
    except IntentSDKError as exc:
        return _print_error(stderr, "error", str(exc), code=EXIT_ERROR)
    except (OSError, ValueError) as exc:
        return _print_error(stderr, "file error", str(exc), code=EXIT_ERROR)

    if output_path is not None:
        print(f"Successfully wrote {len(records)} records to {output_path}", file=stdout)
    return EXIT_SUCCESS


if __name__ == "__main__":
    raise SystemExit(main())
