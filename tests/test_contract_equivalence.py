import random
from typing import List

import pytest

from text_buffers.buffers import (
    BUFFER_KINDS,
    NODE_CAPACITY,
    EditOp,
    GapBuffer,
    LinkedNodeBuffer,
    TextBuffer,
    create_buffer,
    replay,
    type_text,
)

SEQUENCE_OPS = ("insert", "insert", "insert", "delete_left", "delete_right", "move_left", "move_right")


def random_ops(seed: int, length: int, *, with_clear: bool = True) -> List[EditOp]:
    rng = random.Random(seed)
    names = SEQUENCE_OPS + (("clear",) if with_clear else ())
    ops: List[EditOp] = []
    for _ in range(length):
        name = rng.choice(names)
        if name == "clear" and rng.random() < 0.8:
            name = "move_left"
        if name == "insert":
            ops.append(EditOp.insert(rng.choice("abcdefghij XYZ")))
        else:
            ops.append(EditOp(name))
    return ops


def check_invariants(buffer: TextBuffer) -> None:
    assert 0 <= buffer.get_cursor() <= buffer.get_length()
    assert len(buffer.get_text()) == buffer.get_length()
    if isinstance(buffer, LinkedNodeBuffer):
        lengths = buffer.node_lengths()
        assert all(length <= NODE_CAPACITY for length in lengths)
        if len(lengths) > 1:
            assert 0 not in lengths
    if isinstance(buffer, GapBuffer):
        info = buffer.get_gap_info()
        assert 0 <= info.gap_used <= info.gap_size


@pytest.fixture(params=BUFFER_KINDS)
def buffer(request: pytest.FixtureRequest) -> TextBuffer:
    return create_buffer(request.param)


def test_every_engine_satisfies_protocol(buffer: TextBuffer) -> None:
    assert isinstance(buffer, TextBuffer)


def test_scenario_hello(buffer: TextBuffer) -> None:
    type_text(buffer, "Hello")

    assert buffer.get_text() == "Hello"
    assert buffer.get_cursor() == 5


def test_scenario_insert_mid_word(buffer: TextBuffer) -> None:
    type_text(buffer, "Hello")
    for _ in range(3):
        buffer.move_left()

    buffer.insert("X")

    assert buffer.get_text() == "HeXllo"
    assert buffer.get_cursor() == 3


def test_scenario_delete_left_at_start_is_noop(buffer: TextBuffer) -> None:
    type_text(buffer, "Hello")
    for _ in range(5):
        buffer.move_left()

    buffer.delete_left()

    assert buffer.get_text() == "Hello"
    assert buffer.get_cursor() == 0


def test_scenario_clear_counts_one_operation(buffer: TextBuffer) -> None:
    type_text(buffer, "Hello")
    before = buffer.get_operation_count()

    buffer.clear()

    assert buffer.get_text() == ""
    assert buffer.get_cursor() == 0
    assert buffer.get_operation_count() == before + 1
    assert buffer.get_last_operation() == "Cleared all text"


def test_boundary_noops(buffer: TextBuffer) -> None:
    buffer.delete_left()
    buffer.delete_right()
    buffer.move_left()
    buffer.move_right()
    assert (buffer.get_text(), buffer.get_cursor()) == ("", 0)

    type_text(buffer, "ab")
    buffer.delete_right()
    buffer.move_right()
    assert (buffer.get_text(), buffer.get_cursor()) == ("ab", 2)

    buffer.move_left()
    buffer.move_left()
    buffer.move_left()
    buffer.delete_left()
    assert (buffer.get_text(), buffer.get_cursor()) == ("ab", 0)


@pytest.mark.parametrize("seed", range(8))
def test_insert_then_delete_left_round_trips(buffer: TextBuffer, seed: int) -> None:
    replay(buffer, random_ops(seed, 40, with_clear=False))
    before = (buffer.get_text(), buffer.get_cursor())

    buffer.insert("Q")
    buffer.delete_left()

    assert (buffer.get_text(), buffer.get_cursor()) == before


def test_operation_tracking_reset(buffer: TextBuffer) -> None:
    type_text(buffer, "abc")
    buffer.move_left()
    assert buffer.get_operation_count() == 4
    assert buffer.get_last_operation() == "Moved cursor left"

    buffer.reset_operation_tracking()

    assert buffer.get_operation_count() == 0
    assert buffer.get_last_operation() == ""
    assert buffer.get_text() == "abc"


def test_seeded_text_puts_cursor_at_end() -> None:
    for kind in BUFFER_KINDS:
        seeded = create_buffer(kind, "Data Structures")
        assert seeded.get_text() == "Data Structures"
        assert seeded.get_cursor() == len("Data Structures")
        assert seeded.get_operation_count() == 0


@pytest.mark.parametrize("seed", range(25))
def test_engines_agree_on_random_sequences(seed: int) -> None:
    engines = [create_buffer(kind) for kind in BUFFER_KINDS]
    engines.append(create_buffer("gapbuffer", gap_size=1, expansion_factor=1.5))

    for op in random_ops(seed, 300):
        observed = set()
        for engine in engines:
            op.apply(engine)
            check_invariants(engine)
            observed.add((engine.get_text(), engine.get_cursor()))
        assert len(observed) == 1, f"engines diverged after {op}"


def test_engines_agree_from_seeded_text() -> None:
    ops = random_ops(99, 200)
    results = {
        (replay(create_buffer(kind, "The quick brown fox"), ops).get_text(),)
        for kind in BUFFER_KINDS
    }

    assert len(results) == 1


def test_display_tokens_recomputed_each_call(buffer: TextBuffer) -> None:
    type_text(buffer, "ab")
    first = list(buffer.get_display_tokens())
    buffer.insert("c")
    second = list(buffer.get_display_tokens())

    assert first != second
    assert len(first) >= 100


def test_empty_insert_is_ignored(buffer: TextBuffer) -> None:
    type_text(buffer, "ab")
    buffer.move_left()

    buffer.insert("")

    assert buffer.get_text() == "ab"
    assert buffer.get_cursor() == 1
    assert buffer.get_length() == len(buffer.get_text())
    assert buffer.get_operation_count() == 4
    assert buffer.get_last_operation() == "Ignored empty insert"
