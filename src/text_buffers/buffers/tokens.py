"""Display tokens handed to view layers, one per storage slot."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional


class TokenKind(str, Enum):
    CHAR = "char"
    CURSOR = "cursor"
    EMPTY = "empty"
    SEPARATOR = "separator"


@dataclass(frozen=True, slots=True)
class DisplayToken:
    """Opaque slot marker; only ``kind`` and ``char`` carry meaning."""

    kind: TokenKind
    char: Optional[str] = None

    @classmethod
    def cell(cls, char: str, *, cursor: bool = False) -> "DisplayToken":
        return cls(TokenKind.CURSOR if cursor else TokenKind.CHAR, char)

    def __str__(self) -> str:
        if self.kind is TokenKind.CURSOR:
            return f"[{self.char}]"
        if self.kind is TokenKind.EMPTY:
            return "_"
        if self.kind is TokenKind.SEPARATOR:
            return "→"
        return self.char or ""


EMPTY_SLOT = DisplayToken(TokenKind.EMPTY)
NODE_SEPARATOR = DisplayToken(TokenKind.SEPARATOR)


def pad_tokens(tokens: Iterable[DisplayToken], width: int) -> Iterator[DisplayToken]:
    """Yield ``tokens`` then empty slots until at least ``width`` were produced."""

    emitted = 0
    for token in tokens:
        emitted += 1
        yield token
    for _ in range(width - emitted):
        yield EMPTY_SLOT


def render_tokens(tokens: Iterable[DisplayToken]) -> str:
    return "".join(str(token) for token in tokens)


__all__ = [
    "DisplayToken",
    "EMPTY_SLOT",
    "NODE_SEPARATOR",
    "TokenKind",
    "pad_tokens",
    "render_tokens",
]
