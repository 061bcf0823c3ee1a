"""Engine selection by kind name."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from .array_buffer import ArrayBuffer
from .contract import TextBuffer
from .gap_buffer import GapBuffer
from .linked_buffer import LinkedNodeBuffer

BUFFER_KINDS = ("array", "linkedlist", "gapbuffer")

_ENGINES: Dict[str, Callable[..., TextBuffer]] = {
    ArrayBuffer.kind: ArrayBuffer,
    LinkedNodeBuffer.kind: LinkedNodeBuffer,
    GapBuffer.kind: GapBuffer,
}


class UnknownBufferKindError(ValueError):
    """Raised when a caller asks for an engine that does not exist."""

    def __init__(self, kind: str) -> None:
        super().__init__(
            f"Unknown buffer kind '{kind}'; expected one of {list(BUFFER_KINDS)}"
        )
        self.kind = kind


def create_buffer(
    kind: str, initial_text: str = "", **options: Any
) -> TextBuffer:
    """Build the engine named ``kind``, seeded with ``initial_text``.

    ``options`` are forwarded to the engine constructor (only the gap buffer
    takes any: ``gap_size`` and ``expansion_factor``).
    """

    engine: Optional[Callable[..., TextBuffer]] = _ENGINES.get(kind)
    if engine is None:
        raise UnknownBufferKindError(kind)
    return engine(initial_text, **options)


__all__ = ["BUFFER_KINDS", "UnknownBufferKindError", "create_buffer"]
