"""Contiguous-array engine: one list of cells, cursor is an index."""

from __future__ import annotations

from typing import Iterator, List

from .contract import DISPLAY_WIDTH, OperationTracker
from .tokens import DisplayToken, pad_tokens


class ArrayBuffer:
    """Insert/delete shift every cell right of the cursor; moves are O(1)."""

    kind = "array"

    def __init__(self, initial_text: str = "") -> None:
        self._cells: List[str] = list(initial_text)
        self._cursor = len(self._cells)
        self.tracking = OperationTracker(engine=self.kind)

    def insert(self, ch: str) -> None:
        with self.tracking.operation("insert"):
            if not ch:
                self.tracking.record("Ignored empty insert")
                return
            shifts = len(self._cells) - self._cursor
            self._cells.insert(self._cursor, ch)
            self._cursor += 1
            self.tracking.record(f"Inserted '{ch}' (with {shifts} shifts)")

    def delete_left(self) -> None:
        with self.tracking.operation("delete_left"):
            if self._cursor == 0:
                self.tracking.record("Cannot delete at beginning")
                return
            shifts = len(self._cells) - self._cursor
            del self._cells[self._cursor - 1]
            self._cursor -= 1
            self.tracking.record(f"Deleted character (with {shifts} shifts)")

    def delete_right(self) -> None:
        with self.tracking.operation("delete_right"):
            if self._cursor >= len(self._cells):
                self.tracking.record("Cannot delete at end")
                return
            shifts = len(self._cells) - self._cursor - 1
            del self._cells[self._cursor]
            self.tracking.record(
                f"Deleted character to the right (with {shifts} shifts)"
            )

    def move_left(self) -> None:
        with self.tracking.operation("move_left"):
            if self._cursor > 0:
                self._cursor -= 1
            self.tracking.record("Moved cursor left")

    def move_right(self) -> None:
        with self.tracking.operation("move_right"):
            if self._cursor < len(self._cells):
                self._cursor += 1
            self.tracking.record("Moved cursor right")

    def clear(self) -> None:
        with self.tracking.operation("clear"):
            self._cells = []
            self._cursor = 0
            self.tracking.record("Cleared all text")

    def get_text(self) -> str:
        return "".join(self._cells)

    def get_cursor(self) -> int:
        return self._cursor

    def get_length(self) -> int:
        return len(self._cells)

    def get_display_tokens(self) -> Iterator[DisplayToken]:
        cells = (
            DisplayToken.cell(ch, cursor=index == self._cursor)
            for index, ch in enumerate(self._cells)
        )
        return pad_tokens(cells, DISPLAY_WIDTH)

    def get_memory_estimate(self) -> int:
        return len(self._cells)

    def get_operation_count(self) -> int:
        return self.tracking.count

    def get_last_operation(self) -> str:
        return self.tracking.last_operation

    def reset_operation_tracking(self) -> None:
        self.tracking.reset()
