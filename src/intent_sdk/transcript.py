"""Dialog transcript conversion into message records.

A transcript looks like::

    user=Joe
    bot=Helper

    Joe: Hello!
    Helper: [Typing][Delay=3000] Hi Joe,
    how can I help?

Header lines name the participants, ``<name>: text`` starts a message and
following lines continue it until a blank line. ``[Typing]`` emits a typing
record and ``[Delay=<ms>]`` moves the clock forward.
"""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from intent_sdk.errors import TranscriptError

TURN_DELAY_MS = 2000
STATIC_START = datetime(2018, 1, 1, 12, 0, tzinfo=timezone.utc)
STATIC_CONVERSATION_ID = "static-conversation"

_HEADER = re.compile(r"^(user|bot)\s*=\s*(\S.*)$", re.IGNORECASE)
_TURN = re.compile(r"^([^:\[\]#\s][^:\[\]#]*?)\s*:\s?(.*)$")
_COMMAND = re.compile(r"^\[\s*(\w+)\s*(?:=\s*(\d+)\s*)?\]\s*")

Role = Literal["user", "bot"]


class ChannelAccount(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str
    name: str
    role: Role


class ConversationAccount(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str


class MessageRecord(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    type: Literal["message", "typing"]
    id: str
    timestamp: str
    from_: ChannelAccount = Field(..., alias="from")
    recipient: ChannelAccount
    conversation: ConversationAccount
    text: Optional[str] = None

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


def _timestamp(value: datetime) -> str:
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


@dataclass
class _Conversation:
    participants: dict[str, ChannelAccount]
    conversation: ConversationAccount
    clock: datetime
    static: bool
    records: list[MessageRecord] = field(default_factory=list)
    previous: datetime | None = None

    def _next_id(self) -> str:
        if self.static:
            return f"{self.conversation.id}-{len(self.records) + 1:04d}"
        return uuid.uuid4().hex

    def emit(self, kind: Literal["message", "typing"], role: Role, text: str | None = None) -> None:
        other: Role = "bot" if role == "user" else "user"
        self.records.append(
            MessageRecord(
                type=kind,
                id=self._next_id(),
                timestamp=_timestamp(self.clock),
                from_=self.participants[role],
                recipient=self.participants[other],
                conversation=self.conversation,
                text=text,
            )
        )
        self.previous = self.clock
        self.clock += timedelta(milliseconds=TURN_DELAY_MS)

    def delay(self, milliseconds: int) -> None:
        # Replaces the default step after the previous record.
        base = self.clock if self.previous is None else self.previous
        self.clock = base + timedelta(milliseconds=milliseconds)


def _account(role: Role, name: str) -> ChannelAccount:
    return ChannelAccount(id=name.strip().lower().replace(" ", "-"), name=name.strip(), role=role)


def _speaker(name: str, participants: dict[str, ChannelAccount]) -> Role | None:
    lowered = name.strip().lower()
    for role, account in participants.items():
        if lowered in (role, account.name.lower()):
            return role  # type: ignore[return-value]
    return None


def _apply_commands(text: str, role: Role, state: _Conversation, line_no: int) -> str:
    match = _COMMAND.match(text)
    while match:
        command, argument = match.group(1).lower(), match.group(2)
        if command == "typing":
            state.emit("typing", role)
        elif command == "delay":
            if argument is None:
                raise TranscriptError(f"line {line_no}: [Delay] requires a value in milliseconds")
            state.delay(int(argument))
        else:
            raise TranscriptError(f"line {line_no}: unknown command [{match.group(1)}]")
        text = text[match.end():]
        match = _COMMAND.match(text)
    return text


def convert_transcript(
    text: str,
    *,
    static: bool = False,
    start: datetime | None = None,
) -> list[dict]:
    """Convert transcript ``text`` into a list of message record documents."""
    participants = {"user": _account("user", "user"), "bot": _account("bot", "bot")}
    state = _Conversation(
        participants=participants,
        conversation=ConversationAccount(
            id=STATIC_CONVERSATION_ID if static else uuid.uuid4().hex
        ),
        clock=start or (STATIC_START if static else datetime.now(timezone.utc)),
        static=static,
    )

    speaker: Role | None = None
    buffer: list[str] = []
    started = False

    def flush() -> None:
        if speaker is not None and buffer:
            state.emit("message", speaker, "\n".join(buffer))
        buffer.clear()

    for line_no, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if line.startswith("#"):
            continue
        if not line:
            flush()
            speaker = None
            continue

        header = _HEADER.match(line)
        if header and not started:
            role: Role = header.group(1).lower()  # type: ignore[assignment]
            participants[role] = _account(role, header.group(2))
            continue

        turn = _TURN.match(line)
        turn_role = _speaker(turn.group(1), participants) if turn else None
        if turn and turn_role is not None:
            flush()
            started = True
            speaker = turn_role
            remainder = _apply_commands(turn.group(2).strip(), speaker, state, line_no)
            if remainder:
                buffer.append(remainder)
            continue

        if speaker is None:
            if turn:
                raise TranscriptError(f"line {line_no}: unknown speaker {turn.group(1)!r}")
            raise TranscriptError(f"line {line_no}: text outside of a turn")

        if _COMMAND.match(line):
            flush()
            line = _apply_commands(line, speaker, state, line_no)
            if not line:
                continue
        buffer.append(line)

    flush()
    if not state.records:
        raise TranscriptError("transcript contains no messages")
    return [record.to_document() for record in state.records]
