"""Three interchangeable in-memory text buffer engines behind one cursor contract."""

__all__ = [
    "buffers",
    "runtime",
]

__version__ = "0.1.0"
