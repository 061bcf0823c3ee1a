from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Tuple

import pytest

from text_buffers.buffers import (
    BUFFER_KINDS,
    GapBuffer,
    LinkedNodeBuffer,
    create_buffer,
    type_text,
)
from text_buffers.runtime import telemetry


def test_unknown_preset_rejected() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="turbo")


def test_config_and_preset_are_exclusive() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")


def test_span_reraises_failures() -> None:
    with pytest.raises(RuntimeError):
        with telemetry.span("buffer::boom", component="buffers") as handle:
            handle.add_metadata("engine", "array")
            raise RuntimeError("boom")


def test_get_logger_is_cached() -> None:
    assert telemetry.get_logger("buffers-test") is telemetry.get_logger("buffers-test")


class RecordingHandle:
    def __init__(self) -> None:
        self.metadata: Dict[str, Any] = {}

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = value


def install_recorders(
    monkeypatch: pytest.MonkeyPatch,
) -> Tuple[List[str], List[Tuple[str, Any, Dict[str, Any]]]]:
    events: List[str] = []
    spans: List[Tuple[str, Any, Dict[str, Any]]] = []

    def fake_record_event(name: str, **kwargs: Any) -> None:
        events.append(name)

    @contextmanager
    def fake_span(name: str, **kwargs: Any) -> Iterator[RecordingHandle]:
        spans.append((name, kwargs.get("component"), dict(kwargs.get("metadata") or {})))
        yield RecordingHandle()

    monkeypatch.setattr(telemetry, "record_event", fake_record_event)
    monkeypatch.setattr(telemetry, "span", fake_span)
    return events, spans


def test_linked_buffer_emits_node_events(monkeypatch: pytest.MonkeyPatch) -> None:
    events, _ = install_recorders(monkeypatch)
    buffer = LinkedNodeBuffer()

    type_text(buffer, "abcdef")
    buffer.move_left()
    buffer.move_left()
    buffer.move_left()
    buffer.insert("X")
    buffer.move_right()
    buffer.move_right()
    buffer.move_right()
    buffer.delete_left()

    assert events == ["node.appended", "node.split", "node.removed"]


def test_gap_buffer_emits_expansion_event(monkeypatch: pytest.MonkeyPatch) -> None:
    events, _ = install_recorders(monkeypatch)

    type_text(GapBuffer(gap_size=2), "abc")

    assert events == ["gap.expanded"]


@pytest.mark.parametrize("kind", BUFFER_KINDS)
def test_mutations_run_inside_buffer_spans(
    monkeypatch: pytest.MonkeyPatch, kind: str
) -> None:
    buffer = create_buffer(kind)
    _, spans = install_recorders(monkeypatch)

    buffer.insert("a")
    buffer.move_left()
    buffer.move_right()
    buffer.delete_left()
    buffer.delete_right()
    buffer.clear()

    assert [name for name, _, _ in spans] == [
        "buffer::insert",
        "buffer::move_left",
        "buffer::move_right",
        "buffer::delete_left",
        "buffer::delete_right",
        "buffer::clear",
    ]
    assert {component for _, component, _ in spans} == {"buffers"}
    assert all(metadata == {"engine": kind} for _, _, metadata in spans)
