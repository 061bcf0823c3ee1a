"""Doubly-linked engine whose nodes each hold up to ``NODE_CAPACITY`` cells.

Nodes live in an arena keyed by integer id; ``next``/``prev`` are ids into it.
The arena owns every node, so ``prev`` is only ever used to navigate. The
cursor is the pair ``(current node id, offset within that node)``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from text_buffers.runtime import telemetry

from .contract import DISPLAY_WIDTH, OperationTracker
from .tokens import NODE_SEPARATOR, DisplayToken, pad_tokens

NODE_CAPACITY = 5


@dataclass(slots=True)
class Node:
    id: int
    cells: List[str] = field(default_factory=list)
    next: Optional[int] = None
    prev: Optional[int] = None


class LinkedNodeBuffer:
    """Chain of small nodes; inserts split full nodes, deletes drop empty ones.

    Invariants: no node holds more than ``NODE_CAPACITY`` cells, and only a sole
    remaining node may be empty.
    """

    kind = "linkedlist"

    def __init__(self, initial_text: str = "") -> None:
        self._nodes: Dict[int, Node] = {}
        self._head: Optional[int] = None
        self._next_id = 0
        self._current: Optional[int] = None
        self._offset = 0
        self.tracking = OperationTracker(engine=self.kind)
        for ch in initial_text:
            self._insert_cell(ch)

    # -- arena helpers -------------------------------------------------

    def _allocate(self, cells: List[str], *, after: Optional[int]) -> Node:
        node = Node(id=self._next_id, cells=cells)
        self._next_id += 1
        self._nodes[node.id] = node
        if after is None:
            node.next = self._head
            if self._head is not None:
                self._nodes[self._head].prev = node.id
            self._head = node.id
        else:
            previous = self._nodes[after]
            node.prev = previous.id
            node.next = previous.next
            if previous.next is not None:
                self._nodes[previous.next].prev = node.id
            previous.next = node.id
        return node

    def _unlink(self, node: Node) -> None:
        if node.prev is not None:
            self._nodes[node.prev].next = node.next
        else:
            self._head = node.next
        if node.next is not None:
            self._nodes[node.next].prev = node.prev
        del self._nodes[node.id]
        telemetry.record_event("node.removed", data={"node": node.id})

    def _iter_nodes(self) -> Iterator[Node]:
        node_id = self._head
        while node_id is not None:
            node = self._nodes[node_id]
            yield node
            node_id = node.next

    # -- contract ------------------------------------------------------

    def _insert_cell(self, ch: str) -> str:
        if self._current is None:
            node = self._allocate([], after=None)
            self._current, self._offset = node.id, 0

        node = self._nodes[self._current]
        if self._offset == 0 and node.prev is not None:
            node = self._nodes[node.prev]
            self._current, self._offset = node.id, len(node.cells)

        if len(node.cells) < NODE_CAPACITY:
            node.cells.insert(self._offset, ch)
            self._offset += 1
            return f"Inserted '{ch}' into node"

        if self._offset == len(node.cells):
            fresh = self._allocate([ch], after=node.id)
            telemetry.record_event("node.appended", data={"node": fresh.id})
            outcome = f"Inserted '{ch}' into new node"
        elif self._offset == 0:
            fresh = self._allocate([ch], after=None)
            telemetry.record_event("node.appended", data={"node": fresh.id})
            outcome = f"Inserted '{ch}' into new head node"
        else:
            suffix = node.cells[self._offset :]
            del node.cells[self._offset :]
            fresh = self._allocate([ch, *suffix], after=node.id)
            telemetry.record_event(
                "node.split",
                data={"node": node.id, "successor": fresh.id, "moved": len(suffix)},
            )
            outcome = f"Inserted '{ch}' (split node, moved {len(suffix)} cells)"
        self._current, self._offset = fresh.id, 1
        return outcome

    def insert(self, ch: str) -> None:
        with self.tracking.operation("insert"):
            if not ch:
                self.tracking.record("Ignored empty insert")
                return
            self.tracking.record(self._insert_cell(ch))

    def delete_left(self) -> None:
        with self.tracking.operation("delete_left"):
            if self._current is None:
                self.tracking.record("Cannot delete at beginning")
                return
            node = self._nodes[self._current]
            if self._offset == 0:
                if node.prev is None:
                    self.tracking.record("Cannot delete at beginning")
                    return
                node = self._nodes[node.prev]
                self._current, self._offset = node.id, len(node.cells)

            del node.cells[self._offset - 1]
            self._offset -= 1
            if not node.cells and len(self._nodes) > 1:
                if node.prev is not None:
                    target = self._nodes[node.prev]
                    self._current, self._offset = target.id, len(target.cells)
                else:
                    self._current, self._offset = node.next, 0
                self._unlink(node)
            self.tracking.record("Deleted character")

    def delete_right(self) -> None:
        with self.tracking.operation("delete_right"):
            if self._current is None:
                self.tracking.record("Cannot delete at end")
                return
            node = self._nodes[self._current]
            if self._offset == len(node.cells):
                if node.next is None:
                    self.tracking.record("Cannot delete at end")
                    return
                node = self._nodes[node.next]
                self._current, self._offset = node.id, 0

            del node.cells[self._offset]
            if not node.cells and len(self._nodes) > 1:
                if node.next is not None:
                    self._current, self._offset = node.next, 0
                else:
                    assert node.prev is not None
                    target = self._nodes[node.prev]
                    self._current, self._offset = target.id, len(target.cells)
                self._unlink(node)
            self.tracking.record("Deleted character to the right")

    def move_left(self) -> None:
        with self.tracking.operation("move_left"):
            if self._current is not None:
                node = self._nodes[self._current]
                if self._offset > 0:
                    self._offset -= 1
                elif node.prev is not None:
                    previous = self._nodes[node.prev]
                    self._current, self._offset = previous.id, len(previous.cells) - 1
            self.tracking.record("Moved cursor left")

    def move_right(self) -> None:
        with self.tracking.operation("move_right"):
            if self._current is not None:
                node = self._nodes[self._current]
                if self._offset < len(node.cells):
                    self._offset += 1
                elif node.next is not None:
                    self._current, self._offset = node.next, 1
            self.tracking.record("Moved cursor right")

    def clear(self) -> None:
        with self.tracking.operation("clear"):
            self._nodes.clear()
            self._head = None
            self._current = None
            self._offset = 0
            self.tracking.record("Cleared all text")

    def get_text(self) -> str:
        return "".join("".join(node.cells) for node in self._iter_nodes())

    def get_cursor(self) -> int:
        if self._current is None:
            return 0
        position = 0
        for node in self._iter_nodes():
            if node.id == self._current:
                break
            position += len(node.cells)
        return position + self._offset

    def get_length(self) -> int:
        return sum(len(node.cells) for node in self._nodes.values())

    def node_lengths(self) -> tuple[int, ...]:
        return tuple(len(node.cells) for node in self._iter_nodes())

    def get_display_tokens(self) -> Iterator[DisplayToken]:
        return pad_tokens(self._chain_tokens(), DISPLAY_WIDTH)

    def _chain_tokens(self) -> Iterator[DisplayToken]:
        cursor = self.get_cursor()
        position = 0
        for node in self._iter_nodes():
            for ch in node.cells:
                yield DisplayToken.cell(ch, cursor=position == cursor)
                position += 1
            if node.next is not None:
                yield NODE_SEPARATOR

    def get_memory_estimate(self) -> int:
        return self.get_length() + 2 * len(self._nodes)

    def get_operation_count(self) -> int:
        return self.tracking.count

    def get_last_operation(self) -> str:
        return self.tracking.last_operation

    def reset_operation_tracking(self) -> None:
        self.tracking.reset()
