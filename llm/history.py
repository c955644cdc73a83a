"""Role-tagged conversation turns and history bounding."""
from __future__ import annotations

from typing import Iterable, List, Literal, Protocol, Sequence, TypedDict

Role = Literal["user", "assistant"]


class ChatTurn(TypedDict):
    role: Role
    content: str


class StoredMessage(Protocol):
    direction: str
    content: str


def role_for_direction(direction: str) -> Role:
    """Inbound messages come from the user, everything else from the assistant."""
    return "user" if direction == "inbound" else "assistant"


def to_turns(messages: Iterable[StoredMessage]) -> List[ChatTurn]:
    """Map stored messages to turns."""
    return [
        ChatTurn(role=role_for_direction(m.direction), content=m.content)
        for m in messages
    ]


def bound_turns(turns: Sequence[ChatTurn], limit: int) -> List[ChatTurn]:
    """Keep only the last ``limit`` turns.

    Input is already chronological, so this is plain truncation.
    """
    if limit <= 0:
        return []
    return list(turns[-limit:])
