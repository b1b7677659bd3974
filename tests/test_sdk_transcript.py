from __future__ import annotations

from datetime import datetime, timezone

import pytest

from intent_sdk.errors import ArgumentError, TranscriptError
from intent_sdk.transcript import STATIC_CONVERSATION_ID, convert_transcript

TRANSCRIPT = """\
# booking demo
user=Joe
bot=Helper

Joe: Hello!
Helper: [Typing][Delay=3000] Hi Joe,
how can I help?
joe: Book a flight
"""


def test_converts_turns_into_records() -> None:
    records = convert_transcript(TRANSCRIPT, static=True)

    assert [record["type"] for record in records] == ["message", "typing", "message", "message"]
    assert records[0]["from"] == {"id": "joe", "name": "Joe", "role": "user"}
    assert records[0]["recipient"]["name"] == "Helper"
    assert records[0]["text"] == "Hello!"
    assert "text" not in records[1]
    assert records[2]["text"] == "Hi Joe,\nhow can I help?"
    assert records[2]["from"]["role"] == "bot"
    assert records[3]["text"] == "Book a flight"
    assert all(record["conversation"] == {"id": STATIC_CONVERSATION_ID} for record in records)


def test_static_output_is_reproducible() -> None:
    assert convert_transcript(TRANSCRIPT, static=True) == convert_transcript(TRANSCRIPT, static=True)


def test_clock_advances_per_record_and_delay() -> None:
    start = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)
    records = convert_transcript(TRANSCRIPT, static=True, start=start)

    assert [record["timestamp"] for record in records] == [
        "2024-05-01T09:00:00.000Z",
        "2024-05-01T09:00:02.000Z",
        "2024-05-01T09:00:05.000Z",
        "2024-05-01T09:00:07.000Z",
    ]


def test_delay_replaces_default_step() -> None:
    start = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)
    records = convert_transcript("user: hi\nbot: [Delay=5000] hello\n", static=True, start=start)

    assert [record["timestamp"] for record in records] == [
        "2024-05-01T09:00:00.000Z",
        "2024-05-01T09:00:05.000Z",
    ]


def test_delay_before_first_record_offsets_start() -> None:
    start = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)
    records = convert_transcript("bot: [Delay=500] hello\nuser: hi\n", static=True, start=start)

    assert [record["timestamp"] for record in records] == [
        "2024-05-01T09:00:00.500Z",
        "2024-05-01T09:00:02.500Z",
    ]


def test_default_roles_without_headers() -> None:
    records = convert_transcript("user: hi\nbot: hello\n", static=True)
    assert [record["from"]["role"] for record in records] == ["user", "bot"]
    assert records[1]["recipient"]["role"] == "user"


def test_ids_are_unique_when_not_static() -> None:
    records = convert_transcript("user: hi\nbot: hello\n")
    assert records[0]["id"] != records[1]["id"]
    assert records[0]["conversation"]["id"] != STATIC_CONVERSATION_ID


def test_unknown_speaker_is_rejected() -> None:
    with pytest.raises(TranscriptError, match="unknown speaker 'Mallory'"):
        convert_transcript("user=Joe\nMallory: hi\n")


def test_text_outside_turn_is_rejected() -> None:
    with pytest.raises(TranscriptError, match="line 3"):
        convert_transcript("user: hi\n\njust some text\n")


def test_unknown_command_is_rejected() -> None:
    with pytest.raises(TranscriptError, match=r"\[Wave\]"):
        convert_transcript("bot: [Wave] hi\n")


def test_empty_transcript_is_rejected() -> None:
    with pytest.raises(ArgumentError, match="no messages"):
        convert_transcript("# nothing here\n\n")
