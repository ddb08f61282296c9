"""Unit tests for todo models, id generation and the snapshot codec."""

from __future__ import annotations

import json
from dataclasses import FrozenInstanceError

import pytest

from todo_keeper.exceptions import LoadFailure
from todo_keeper.models import IdGenerator, TodoItem, decode_snapshot, encode_snapshot


class TestTodoItem:
    """Tests for TodoItem dataclass and serialization."""

    def test_defaults(self):
        """New items start incomplete."""
        item = TodoItem(id="1", text="Buy milk")

        assert item.completed is False

    def test_frozen(self):
        """Items cannot be mutated in place."""
        item = TodoItem(id="1", text="Buy milk")

        with pytest.raises(FrozenInstanceError):
            item.text = "Buy eggs"  # type: ignore[misc]

    def test_with_completed_returns_copy(self):
        """with_completed substitutes a new item and leaves the original alone."""
        item = TodoItem(id="1", text="Buy milk")
        done = item.with_completed(True)

        assert done is not item
        assert done == TodoItem(id="1", text="Buy milk", completed=True)
        assert item.completed is False

    def test_with_text_returns_copy(self):
        """with_text keeps id and completion."""
        item = TodoItem(id="1", text="Buy milk", completed=True)
        edited = item.with_text("Buy oat milk")

        assert edited.id == "1"
        assert edited.completed is True
        assert edited.text == "Buy oat milk"

    def test_to_dict(self):
        """Serialization uses the persisted field names."""
        item = TodoItem(id="1700000000000", text="Walk dog", completed=True)

        assert item.to_dict() == {"id": "1700000000000", "text": "Walk dog", "completed": True}

    def test_from_dict(self):
        """Deserialization restores all fields."""
        item = TodoItem.from_dict({"id": "42", "text": "Walk dog", "completed": False})

        assert item == TodoItem(id="42", text="Walk dog", completed=False)

    def test_from_dict_missing_field(self):
        """Missing fields raise KeyError."""
        with pytest.raises(KeyError):
            TodoItem.from_dict({"id": "42", "text": "Walk dog"})

    @pytest.mark.parametrize(
        "data",
        [
            {"id": 42, "text": "Walk dog", "completed": False},
            {"id": "42", "text": None, "completed": False},
            {"id": "42", "text": "Walk dog", "completed": "no"},
        ],
    )
    def test_from_dict_wrong_types(self, data):
        """Fields with the wrong type raise TypeError."""
        with pytest.raises(TypeError):
            TodoItem.from_dict(data)

    def test_from_dict_not_a_dict(self):
        """Non-object entries raise TypeError."""
        with pytest.raises(TypeError):
            TodoItem.from_dict(["42", "Walk dog", False])  # type: ignore[arg-type]

    def test_repr(self):
        """Repr shows id, completion mark and text."""
        repr_str = repr(TodoItem(id="7", text="Walk dog", completed=True))

        assert "'7'" in repr_str
        assert "[x]" in repr_str
        assert "Walk dog" in repr_str


class TestIdGenerator:
    """Tests for millisecond id generation."""

    def test_uses_milliseconds(self):
        """Ids are the clock in milliseconds, as a string."""
        generator = IdGenerator(clock=lambda: 1700000000.123)

        assert generator() == "1700000000123"

    def test_strictly_increasing_with_frozen_clock(self):
        """Ids never collide even when the clock does not advance."""
        generator = IdGenerator(clock=lambda: 1700000000.0)

        ids = [generator() for _ in range(5)]

        assert len(set(ids)) == 5
        assert [int(i) for i in ids] == sorted(int(i) for i in ids)
        assert ids[0] == "1700000000000"
        assert ids[4] == "1700000000004"

    def test_clock_going_backwards(self):
        """A clock that steps back still yields increasing ids."""
        times = iter([2.0, 1.0])
        generator = IdGenerator(clock=lambda: next(times))

        first = generator()
        second = generator()

        assert int(second) > int(first)

    def test_observe_skips_past_existing_ids(self):
        """Observed numeric ids are never reissued."""
        generator = IdGenerator(clock=lambda: 1.0)
        generator.observe(["5000", "not-a-number", "7000"])

        assert generator() == "7001"

    def test_observe_ignores_ids_int_cannot_parse(self):
        """Digit-like ids that are not plain integers are left alone."""
        generator = IdGenerator(clock=lambda: 1.0)
        generator.observe(["²", "9" * 5000, "42"])

        assert generator() == "1000"

    def test_observe_accepts_non_ascii_decimal_digits(self):
        """Unicode decimal digits count as numeric ids."""
        generator = IdGenerator(clock=lambda: 1.0)
        generator.observe(["٥٠٠٠"])

        assert generator() == "5001"


class TestSnapshotCodec:
    """Tests for encode_snapshot / decode_snapshot."""

    def test_encode_layout(self):
        """Encoded snapshot is a JSON array of {id, text, completed} in order."""
        items = [
            TodoItem(id="1", text="Buy milk", completed=True),
            TodoItem(id="2", text="Walk dog"),
        ]

        assert json.loads(encode_snapshot(items)) == [
            {"id": "1", "text": "Buy milk", "completed": True},
            {"id": "2", "text": "Walk dog", "completed": False},
        ]

    def test_encode_empty(self):
        """An empty snapshot encodes to an empty array."""
        assert encode_snapshot(()) == "[]"

    def test_round_trip_preserves_order_and_text(self):
        """Hydrating from a serialization reproduces an equal sequence."""
        items = [
            TodoItem(id="3", text="  padded  ", completed=False),
            TodoItem(id="1", text="Café ☕", completed=True),
            TodoItem(id="2", text="", completed=False),
        ]

        assert decode_snapshot(encode_snapshot(items)) == items

    def test_decode_not_json(self):
        """Malformed JSON raises LoadFailure."""
        with pytest.raises(LoadFailure):
            decode_snapshot("not json")

    def test_decode_not_array(self):
        """A JSON object instead of an array raises LoadFailure."""
        with pytest.raises(LoadFailure, match="array"):
            decode_snapshot('{"id": "1"}')

    def test_decode_bad_entry_rejects_whole_payload(self):
        """One malformed entry rejects the whole payload."""
        raw = json.dumps(
            [
                {"id": "1", "text": "Buy milk", "completed": False},
                {"id": "2", "text": "Walk dog"},
            ]
        )

        with pytest.raises(LoadFailure, match="position 1"):
            decode_snapshot(raw)
