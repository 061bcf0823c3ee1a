"""Operation scripts: replay a sequence of contract calls against any engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, TypeVar

from .contract import TextBuffer
from .gap_buffer import GapBuffer, GapInfo

PRESET_TEXTS = ("Hello", "World", "Data Structures")

OP_NAMES = ("insert", "delete_left", "delete_right", "move_left", "move_right", "clear")

_TOKEN_OPS = {
    "bs": "delete_left",
    "del": "delete_right",
    "<": "move_left",
    ">": "move_right",
    "clear": "clear",
}

B = TypeVar("B", bound=TextBuffer)


class ScriptError(ValueError):
    """Raised when a script token or op does not name a contract operation."""

    def __init__(self, message: str, *, token: str | None = None) -> None:
        super().__init__(message)
        self.token = token


@dataclass(frozen=True, slots=True)
class EditOp:
    """One contract call; ``char`` is only meaningful for ``insert``."""

    name: str
    char: Optional[str] = None

    def __post_init__(self) -> None:
        if self.name not in OP_NAMES:
            raise ScriptError(f"Unknown operation '{self.name}'", token=self.name)
        if self.name == "insert" and not self.char:
            raise ScriptError("insert requires a character", token=self.name)

    @classmethod
    def insert(cls, char: str) -> "EditOp":
        return cls("insert", char)

    def apply(self, buffer: TextBuffer) -> None:
        if self.name == "insert":
            buffer.insert(self.char or "")
        else:
            getattr(buffer, self.name)()


@dataclass(slots=True)
class BufferSnapshot:
    """Everything a caller polls after a mutation."""

    kind: str
    text: str
    cursor: int
    memory: int
    operation_count: int
    last_operation: str
    gap: Optional[GapInfo] = None


def replay(buffer: B, ops: Iterable[EditOp]) -> B:
    for op in ops:
        op.apply(buffer)
    return buffer


def type_text(buffer: B, text: str) -> B:
    """Insert each character of ``text`` at the cursor, one operation per cell."""

    for ch in text:
        buffer.insert(ch)
    return buffer


def parse_script(source: str) -> List[EditOp]:
    """Parse whitespace-separated tokens: ``i:<ch>``, ``bs``, ``del``, ``<``, ``>``, ``clear``.

    >>> [op.name for op in parse_script("i:a i:b < bs")]
    ['insert', 'insert', 'move_left', 'delete_left']
    """

    ops: List[EditOp] = []
    for token in source.split():
        if token.startswith("i:"):
            char = token[2:]
            if not char:
                raise ScriptError("insert token needs a character", token=token)
            ops.append(EditOp.insert(char))
            continue
        name = _TOKEN_OPS.get(token)
        if name is None:
            raise ScriptError(f"Unrecognized script token '{token}'", token=token)
        ops.append(EditOp(name))
    return ops


def snapshot(buffer: TextBuffer) -> BufferSnapshot:
    return BufferSnapshot(
        kind=buffer.kind,
        text=buffer.get_text(),
        cursor=buffer.get_cursor(),
        memory=buffer.get_memory_estimate(),
        operation_count=buffer.get_operation_count(),
        last_operation=buffer.get_last_operation(),
        gap=buffer.get_gap_info() if isinstance(buffer, GapBuffer) else None,
    )


__all__ = [
    "BufferSnapshot",
    "EditOp",
    "OP_NAMES",
    "PRESET_TEXTS",
    "ScriptError",
    "parse_script",
    "replay",
    "snapshot",
    "type_text",
]
