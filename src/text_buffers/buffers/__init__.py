"""Buffer engines implementing the shared cursor-editing contract."""

from .array_buffer import ArrayBuffer
from .contract import DISPLAY_WIDTH, OperationTracker, TextBuffer
from .factory import BUFFER_KINDS, UnknownBufferKindError, create_buffer
from .gap_buffer import DEFAULT_EXPANSION_FACTOR, DEFAULT_GAP_SIZE, GapBuffer, GapInfo
from .linked_buffer import NODE_CAPACITY, LinkedNodeBuffer, Node
from .script import (
    PRESET_TEXTS,
    BufferSnapshot,
    EditOp,
    ScriptError,
    parse_script,
    replay,
    snapshot,
    type_text,
)
from .tokens import DisplayToken, TokenKind, render_tokens

__all__ = [
    "ArrayBuffer",
    "LinkedNodeBuffer",
    "GapBuffer",
    "GapInfo",
    "Node",
    "TextBuffer",
    "OperationTracker",
    "DisplayToken",
    "TokenKind",
    "render_tokens",
    "BUFFER_KINDS",
    "DISPLAY_WIDTH",
    "NODE_CAPACITY",
    "DEFAULT_GAP_SIZE",
    "DEFAULT_EXPANSION_FACTOR",
    "UnknownBufferKindError",
    "create_buffer",
    "PRESET_TEXTS",
    "BufferSnapshot",
    "EditOp",
    "ScriptError",
    "parse_script",
    "replay",
    "snapshot",
    "type_text",
]
