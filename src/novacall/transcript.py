from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterator, Optional


class Sender(Enum):
    ASSISTANT = "assistant"
    CALLER = "caller"
    NOTE = "note"


@dataclass(frozen=True)
class ConversationTurn:
    id: str
    sender: Sender
    content: str
    timestamp: datetime


class ConversationLog:
    """Ordered, append-only record of the turns in one call.

    Only the call engine appends. Everything else reads through
    iteration or snapshot(). clear() is reserved for starting a new call
    and for an explicit reset.
    """

    def __init__(self):
        self._turns: list[ConversationTurn] = []

    def append(self, turn: ConversationTurn) -> ConversationTurn:
        self._turns.append(turn)
        return turn

    def clear(self):
        self._turns = []

    def snapshot(self) -> tuple[ConversationTurn, ...]:
        return tuple(self._turns)

    def __iter__(self) -> Iterator[ConversationTurn]:
        return iter(tuple(self._turns))

    def __len__(self) -> int:
        return len(self._turns)

    def __getitem__(self, index: int) -> ConversationTurn:
        return self._turns[index]

    def __eq__(self, other):
        if not isinstance(other, ConversationLog):
            return NotImplemented
        return self._turns == other._turns


def to_plain_text(turns, assistant_name: str = "Nova") -> str:
    """Convert turns to plain text.

    Assistant lines prefixed with the assistant's name, caller lines with
    "Caller:", notes shown as "[Note: ...]".
    """
    lines = []
    for turn in turns:
        if turn.sender == Sender.ASSISTANT:
            lines.append(f"{assistant_name}: {turn.content}")
        elif turn.sender == Sender.CALLER:
            lines.append(f"Caller: {turn.content}")
        elif turn.sender == Sender.NOTE:
            lines.append(f"[Note: {turn.content}]")
    return "\n".join(lines)


def turn_to_dict(turn: ConversationTurn) -> dict:
    return {
        "id": turn.id,
        "sender": turn.sender.value,
        "content": turn.content,
        "timestamp": turn.timestamp.isoformat(),
    }


def to_json_array(turns) -> list[dict]:
    """Structured list of turns for renderers. Timestamps are ISO 8601."""
    return [turn_to_dict(turn) for turn in turns]


def to_timestamped_dump(
    turns,
    launched_at: Optional[datetime],
    phone: str,
    final_status: str,
    escalation_reason: str = "",
) -> dict:
    """Build a timestamped transcript dump dict for structured logging.

    Timestamps are converted to seconds relative to call launch. Without a
    launch time the first turn's timestamp is used as base.
    """
    turns = list(turns)
    base = launched_at
    if base is None and turns:
        base = turns[0].timestamp

    entries = []
    for turn in turns:
        entries.append({
            "t": round((turn.timestamp - base).total_seconds(), 1),
            "sender": turn.sender.value,
            "content": turn.content,
        })

    return {
        "phone": phone,
        "final_status": final_status,
        "escalation_reason": escalation_reason,
        "entries": entries,
    }
