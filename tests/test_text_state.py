from __future__ import annotations

import pytest

from keyboard_engine.text import (
    MAX_SURROUNDING_TEXT_LENGTH,
    PreeditFace,
    TextConfig,
    TextState,
)


def make_state(
    *,
    preedit: str = "",
    cursor: int | None = None,
    surrounding: str = "",
    limit: int = MAX_SURROUNDING_TEXT_LENGTH,
) -> TextState:
    state = TextState(config=TextConfig(max_surrounding_length=limit))
    state.set_preedit(preedit, cursor)
    state.set_surrounding(surrounding)
    return state


def test_new_state_is_empty() -> None:
    state = TextState()

    assert state.preedit == ""
    assert state.preedit_cursor_position == 0
    assert state.surrounding == ""
    assert state.surrounding_offset == 0
    assert state.preedit_face is PreeditFace.DEFAULT
    assert state.primary_candidate == ""
    assert state.restored_preedit is False
    assert state.max_surrounding_length == MAX_SURROUNDING_TEXT_LENGTH


@pytest.mark.parametrize(
    ("preedit", "cursor", "delete_length", "new_preedit", "expected"),
    [
        ("ab", 2, 0, "ab", False),
        ("ab", 2, 1, "a", True),
        ("ab", 2, 2, "", True),
        ("ab", 2, 3, "ab", False),
        ("ab", 1, 1, "b", True),
        ("ab", 1, 2, "ab", False),
    ],
    ids=[
        "delete 0 of 2 at end",
        "delete 1 of 2 at end",
        "delete 2 of 2 at end",
        "delete 3 of 2 at end",
        "delete 1 of 2 in middle",
        "delete 2 of 2 in middle",
    ],
)
def test_remove_from_preedit(
    preedit: str, cursor: int, delete_length: int, new_preedit: str, expected: bool
) -> None:
    state = make_state(preedit=preedit, cursor=cursor, surrounding="s")

    ok = state.remove_from_preedit(delete_length)

    assert ok is expected
    assert state.preedit == new_preedit
    assert state.surrounding == "s"


def test_remove_from_preedit_moves_cursor_back() -> None:
    state = make_state(preedit="hello", cursor=4)

    assert state.remove_from_preedit(2) is True

    assert state.preedit == "heo"
    assert state.preedit_cursor_position == 2


def test_rejected_remove_keeps_cursor_and_surrounding_offset() -> None:
    state = make_state(preedit="ab", cursor=1, surrounding="context")
    state.set_surrounding_offset(3)

    assert state.remove_from_preedit(2) is False
    assert state.remove_from_preedit(-1) is False

    assert state.preedit_cursor_position == 1
    assert state.surrounding_offset == 3


def test_set_preedit_cursor_defaults_to_end() -> None:
    state = TextState()

    state.set_preedit("word")

    assert state.preedit_cursor_position == 4
    assert state.remove_from_preedit(4) is True
    assert state.preedit == ""


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Hello world", "Hello world"),
        ("A" * MAX_SURROUNDING_TEXT_LENGTH, "A" * MAX_SURROUNDING_TEXT_LENGTH),
        ("B" * (MAX_SURROUNDING_TEXT_LENGTH + 100), "B" * MAX_SURROUNDING_TEXT_LENGTH),
        ("C" * (MAX_SURROUNDING_TEXT_LENGTH * 2), "C" * MAX_SURROUNDING_TEXT_LENGTH),
    ],
    ids=["normal text", "at limit", "overflow", "huge overflow"],
)
def test_set_surrounding_overflow(text: str, expected: str) -> None:
    state = TextState()

    state.set_surrounding(text)

    assert state.surrounding == expected
    assert len(state.surrounding) <= MAX_SURROUNDING_TEXT_LENGTH


def test_set_surrounding_keeps_leading_characters() -> None:
    state = make_state(limit=5)

    state.set_surrounding("abcdefgh")

    assert state.surrounding == "abcde"


@pytest.mark.parametrize(
    ("surrounding", "offset", "expected"),
    [
        ("Hello world", 5, 5),
        ("Hello", 5, 5),
        ("Hi", 10, 2),
        ("", 0, 0),
        ("", 1000, 0),
    ],
    ids=[
        "within bounds",
        "at boundary",
        "exceeding length",
        "empty zero offset",
        "empty large offset",
    ],
)
def test_set_surrounding_offset_bounds(
    surrounding: str, offset: int, expected: int
) -> None:
    state = make_state(surrounding=surrounding)

    state.set_surrounding_offset(offset)

    assert state.surrounding_offset == expected


@pytest.mark.parametrize("offset", [0, 1, 7, 11, 12, 500])
def test_offset_clamping_is_idempotent(offset: int) -> None:
    state = make_state(surrounding="Hello world")

    state.set_surrounding_offset(offset)
    first = state.surrounding_offset
    state.set_surrounding_offset(first)

    assert state.surrounding_offset == first == min(offset, 11)


def test_negative_offset_clamps_to_zero() -> None:
    state = make_state(surrounding="abc")

    state.set_surrounding_offset(-4)

    assert state.surrounding_offset == 0


def test_shorter_surrounding_reclamps_previous_offset() -> None:
    state = make_state(surrounding="Hello world")
    state.set_surrounding_offset(9)

    state.set_surrounding("Hi")

    assert state.surrounding_offset == 2


def test_truncation_reclamps_previous_offset() -> None:
    state = make_state(surrounding="abcdefgh", limit=8)
    state.set_surrounding_offset(8)

    state.set_surrounding("xyz" * 10)

    assert state.surrounding == "xyzxyzxy"
    assert state.surrounding_offset == 8


def test_append_to_preedit_inserts_at_cursor() -> None:
    state = make_state(preedit="hlo", cursor=1)

    state.append_to_preedit("el")

    assert state.preedit == "hello"
    assert state.preedit_cursor_position == 3


def test_commit_preedit_inserts_at_offset() -> None:
    state = make_state(preedit="big ", surrounding="a cat")
    state.set_surrounding_offset(2)
    state.set_primary_candidate("bag")
    state.set_preedit_face(PreeditFace.ACTIVE)

    committed = state.commit_preedit()

    assert committed == "big "
    assert state.surrounding == "a big cat"
    assert state.surrounding_offset == 6
    assert state.preedit == ""
    assert state.preedit_cursor_position == 0
    assert state.primary_candidate == ""
    assert state.preedit_face is PreeditFace.DEFAULT


def test_commit_preedit_respects_limit() -> None:
    state = make_state(preedit="12345", surrounding="abc", limit=6)
    state.set_surrounding_offset(3)

    state.commit_preedit()

    assert state.surrounding == "abc123"
    assert state.surrounding_offset == 6


def test_surrounding_left_and_right_split_at_offset() -> None:
    state = make_state(surrounding="Hello world")
    state.set_surrounding_offset(5)

    assert state.surrounding_left() == "Hello"
    assert state.surrounding_right() == " world"


def test_clear_preedit_resets_composition() -> None:
    state = make_state(preedit="abc")
    state.set_primary_candidate("abd")
    state.set_preedit_face("no_candidates")

    state.clear_preedit()

    assert state.preedit == ""
    assert state.preedit_cursor_position == 0
    assert state.primary_candidate == ""
    assert state.preedit_face is PreeditFace.DEFAULT


def test_restored_preedit_flag() -> None:
    state = TextState()

    state.set_restored_preedit(True)

    assert state.restored_preedit is True


def test_snapshot_reflects_current_values() -> None:
    state = make_state(preedit="ab", cursor=1, surrounding="xyz")
    state.set_surrounding_offset(2)
    state.set_preedit_face(PreeditFace.KEY_PRESS)

    mirror = state.snapshot()

    assert mirror.preedit == "ab"
    assert mirror.preedit_cursor_position == 1
    assert mirror.surrounding == "xyz"
    assert mirror.surrounding_offset == 2
    assert mirror.preedit_face == "key_press"
