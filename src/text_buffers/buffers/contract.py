"""Cursor-editing contract shared by every buffer engine, plus its telemetry record."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Protocol, runtime_checkable

from text_buffers.runtime import telemetry

from .tokens import DisplayToken

DISPLAY_WIDTH = 100


@runtime_checkable
class TextBuffer(Protocol):
    """Operations a caller may issue against any engine.

    Every mutating call is total: boundary conditions are silent no-ops that
    still count as one operation.
    """

    kind: str

    def insert(self, ch: str) -> None:
        ...

    def delete_left(self) -> None:
        ...

    def delete_right(self) -> None:
        ...

    def move_left(self) -> None:
        ...

    def move_right(self) -> None:
        ...

    def clear(self) -> None:
        ...

    def get_text(self) -> str:
        ...

    def get_cursor(self) -> int:
        ...

    def get_length(self) -> int:
        ...

    def get_display_tokens(self) -> Iterator[DisplayToken]:
        ...

    def get_memory_estimate(self) -> int:
        ...

    def get_operation_count(self) -> int:
        ...

    def get_last_operation(self) -> str:
        ...

    def reset_operation_tracking(self) -> None:
        ...


@dataclass(slots=True)
class OperationTracker:
    """Monotonic operation counter and latest operation description."""

    engine: str
    count: int = 0
    last_operation: str = ""

    def record(self, description: str) -> None:
        self.count += 1
        self.last_operation = description

    def reset(self) -> None:
        self.count = 0
        self.last_operation = ""

    @contextmanager
    def operation(self, name: str) -> Iterator[telemetry.SpanHandle]:
        with telemetry.span(
            f"buffer::{name}",
            component="buffers",
            metadata={"engine": self.engine},
        ) as handle:
            yield handle


__all__ = ["DISPLAY_WIDTH", "OperationTracker", "TextBuffer"]
