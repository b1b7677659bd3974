"""Payload acquisition and result emission for the CLI tools."""

from __future__ import annotations

import codecs
import json
import logging
import os
import queue
import sys
import threading
from pathlib import Path
from typing import Any, Iterator, TextIO

from intent_sdk.errors import InputTimeoutError

STDIN_TIMEOUT_SECONDS = 1.0

logger = logging.getLogger(__name__)

_EOF = object()


def read_payload_file(path: str | Path) -> Any:
    payload_path = Path(path)
    logger.debug("reading payload from %s", payload_path)
    return json.loads(payload_path.read_text(encoding="utf-8"))


def read_text_file(path: str | Path) -> str:
    return Path(path).read_text(encoding="utf-8")


CHUNK_SIZE = 4096


def _fileno(stream: TextIO) -> int | None:
    try:
        return stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None


def _read_chunks(stream: TextIO) -> Iterator[str]:
    fd = _fileno(stream)
    if fd is None:
        # No descriptor (in-memory streams): read line by line.
        yield from iter(stream.readline, "")
        return

    encoding = getattr(stream, "encoding", None) or "utf-8"
    decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
    while True:
        data = os.read(fd, CHUNK_SIZE)
        text = decoder.decode(data, final=not data)
        if text:
            yield text
        if not data:
            return


def _pump(stream: TextIO, chunks: queue.Queue) -> None:
    try:
        for chunk in _read_chunks(stream):
            chunks.put(chunk)
    except Exception as exc:
        chunks.put(exc)
        return
    chunks.put(_EOF)


def read_stdin(stream: TextIO | None = None, *, timeout: float = STDIN_TIMEOUT_SECONDS) -> str:
    """Read all of ``stream``, failing if nothing arrives within ``timeout``.

    The stream is drained by a daemon thread. Only the wait for the first
    chunk is bounded; once data has arrived the read continues until end of
    stream. A stream error is raised as soon as it is seen.
    """
    source = sys.stdin if stream is None else stream
    chunks: queue.Queue = queue.Queue()
    reader = threading.Thread(target=_pump, args=(source, chunks), daemon=True)
    reader.start()

    try:
        item = chunks.get(timeout=timeout)
    except queue.Empty:
        raise InputTimeoutError(
            f"no input received on stdin within {timeout:g}s; pass --in <file> or pipe a transcript"
        ) from None

    received: list[str] = []
    while item is not _EOF:
        if isinstance(item, Exception):
            raise item
        received.append(item)
        item = chunks.get()
    return "".join(received)


def write_result(
    result: Any,
    destination: str | Path | None = None,
    *,
    stdout: TextIO | None = None,
) -> Path | None:
    """Serialize ``result`` to ``destination``, or to stdout when none is given.

    Returns the resolved destination path, or ``None`` when the result went
    to the console.
    """
    serialized = json.dumps(result, indent=2, ensure_ascii=False)
    if destination is None:
        print(serialized, file=sys.stdout if stdout is None else stdout)
        return None

    output_path = Path(destination).expanduser().resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(serialized + "\n", encoding="utf-8")
    logger.debug("wrote result to %s", output_path)
    return output_path
