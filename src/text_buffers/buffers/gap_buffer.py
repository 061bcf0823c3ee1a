"""Gap buffer engine with a multiplicatively growing gap."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, List

from text_buffers.runtime import telemetry

from .contract import DISPLAY_WIDTH, OperationTracker
from .tokens import EMPTY_SLOT, DisplayToken, pad_tokens

DEFAULT_GAP_SIZE = 10
DEFAULT_EXPANSION_FACTOR = 2.0


@dataclass(frozen=True, slots=True)
class GapInfo:
    gap_size: int
    gap_used: int
    expansion_factor: float


class GapBuffer:
    """Cells before and after a gap; the cursor always sits at the gap.

    ``gap_used`` counts gap slots consumed by insertions since the last growth.
    Cursor moves carry cells across the gap without touching ``gap_used``.
    """

    kind = "gapbuffer"

    def __init__(
        self,
        initial_text: str = "",
        *,
        gap_size: int = DEFAULT_GAP_SIZE,
        expansion_factor: float = DEFAULT_EXPANSION_FACTOR,
    ) -> None:
        self._before: List[str] = list(initial_text)
        self._after: Deque[str] = deque()
        self._gap_size = max(int(gap_size), 1)
        self._gap_used = 0
        self._expansion_factor = max(expansion_factor, 1)
        self.tracking = OperationTracker(engine=self.kind)

    def set_expansion_factor(self, factor: float) -> None:
        self._expansion_factor = max(factor, 1)
        telemetry.record_event(
            "gap.expansion_factor",
            data={"factor": self._expansion_factor},
        )

    def get_gap_info(self) -> GapInfo:
        return GapInfo(
            gap_size=self._gap_size,
            gap_used=self._gap_used,
            expansion_factor=self._expansion_factor,
        )

    def _expand_gap(self) -> None:
        previous = self._gap_size
        self._gap_size = max(int(previous * self._expansion_factor), previous)
        self._gap_used = 0
        telemetry.record_event(
            "gap.expanded",
            data={
                "from": previous,
                "to": self._gap_size,
                "factor": self._expansion_factor,
                "after_gap": len(self._after),
            },
        )

    def insert(self, ch: str) -> None:
        with self.tracking.operation("insert") as handle:
            if not ch:
                self.tracking.record("Ignored empty insert")
                return
            expanded = self._gap_used >= self._gap_size
            if expanded:
                self._expand_gap()
                handle.add_metadata("gap_size", self._gap_size)
            self._before.append(ch)
            self._gap_used += 1
            if expanded:
                self.tracking.record(
                    f"Inserted '{ch}' (gap expanded to {self._gap_size})"
                )
            else:
                self.tracking.record(f"Inserted '{ch}' (no shifting needed)")

    def delete_left(self) -> None:
        with self.tracking.operation("delete_left"):
            if not self._before:
                self.tracking.record("Cannot delete at beginning")
                return
            self._before.pop()
            self._gap_used = max(self._gap_used - 1, 0)
            self.tracking.record("Deleted character")

    def delete_right(self) -> None:
        with self.tracking.operation("delete_right"):
            if not self._after:
                self.tracking.record("Cannot delete at end")
                return
            self._after.popleft()
            self.tracking.record("Deleted character to the right")

    def move_left(self) -> None:
        with self.tracking.operation("move_left"):
            if self._before:
                self._after.appendleft(self._before.pop())
            self.tracking.record("Moved cursor left")

    def move_right(self) -> None:
        with self.tracking.operation("move_right"):
            if self._after:
                self._before.append(self._after.popleft())
            self.tracking.record("Moved cursor right")

    def clear(self) -> None:
        with self.tracking.operation("clear"):
            self._before = []
            self._after.clear()
            self._gap_used = 0
            self.tracking.record("Cleared all text")

    def get_text(self) -> str:
        return "".join(self._before) + "".join(self._after)

    def get_cursor(self) -> int:
        return len(self._before)

    def get_length(self) -> int:
        return len(self._before) + len(self._after)

    def get_display_tokens(self) -> Iterator[DisplayToken]:
        return pad_tokens(self._slot_tokens(), DISPLAY_WIDTH)

    def _slot_tokens(self) -> Iterator[DisplayToken]:
        for ch in self._before:
            yield DisplayToken.cell(ch)
        for _ in range(self._gap_size - self._gap_used):
            yield EMPTY_SLOT
        for ch in self._after:
            yield DisplayToken.cell(ch)

    def get_memory_estimate(self) -> int:
        return len(self._before) + len(self._after) + self._gap_size

    def get_operation_count(self) -> int:
        return self.tracking.count

    def get_last_operation(self) -> str:
        return self.tracking.last_operation

    def reset_operation_tracking(self) -> None:
        self.tracking.reset()
