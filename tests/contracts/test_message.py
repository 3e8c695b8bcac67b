# tests/contracts/test_message.py
"""Tests for the Message envelope."""

import pytest

from flowline.contracts import Message


class TestMessageConstruction:
    """Construction forms and defaults."""

    def test_payload_only(self) -> None:
        """Metadata defaults to an empty mapping, never None."""
        msg = Message("hello")

        assert msg.payload == "hello"
        assert msg.metadata == {}
        assert msg.metadata is not None

    def test_payload_and_metadata(self) -> None:
        msg = Message({"k": 1}, {"source_file": "a.txt", "file_size": 3})

        assert msg.payload == {"k": 1}
        assert msg.metadata == {"source_file": "a.txt", "file_size": 3}

    def test_none_metadata_becomes_empty(self) -> None:
        msg = Message("x", None)  # type: ignore[arg-type]

        assert msg.metadata == {}

    def test_absent_payload(self) -> None:
        msg = Message()

        assert msg.payload is None

    def test_non_mapping_metadata_rejected(self) -> None:
        with pytest.raises(TypeError, match="must be a mapping"):
            Message("x", [("a", 1)])  # type: ignore[arg-type]

    def test_metadata_preserves_insertion_order(self) -> None:
        msg = Message("x", {"b": 1, "a": 2, "c": 3})

        assert list(msg.metadata) == ["b", "a", "c"]


class TestMessageImmutability:
    """Messages can be shared across a fan-out safely."""

    def test_metadata_is_read_only(self) -> None:
        msg = Message("x", {"a": 1})

        with pytest.raises(TypeError):
            msg.metadata["b"] = 2  # type: ignore[index]

    def test_caller_dict_mutation_does_not_leak(self) -> None:
        """Metadata is copied on construction."""
        source = {"a": 1}
        msg = Message("x", source)

        source["a"] = 99
        source["b"] = 2

        assert msg.metadata == {"a": 1}

    def test_fields_cannot_be_reassigned(self) -> None:
        msg = Message("x")

        with pytest.raises(AttributeError):
            msg.payload = "y"  # type: ignore[misc]

    def test_metadata_dict_returns_independent_copy(self) -> None:
        msg = Message("x", {"a": 1})

        copy = msg.metadata_dict()
        copy["a"] = 2

        assert msg.metadata == {"a": 1}


class TestMessageDerivation:
    """with_metadata/with_payload build new messages."""

    def test_with_metadata_adds_entries_to_new_message(self) -> None:
        original = Message("x", {"a": 1})

        derived = original.with_metadata(b=2)

        assert derived.metadata == {"a": 1, "b": 2}
        assert original.metadata == {"a": 1}
        assert derived is not original

    def test_with_metadata_overrides_existing_key(self) -> None:
        original = Message("x", {"a": 1})

        assert original.with_metadata(a=5).metadata == {"a": 5}

    def test_with_metadata_accepts_any_key_name(self) -> None:
        derived = Message("x").with_metadata(**{"self": 1, "payload": 2})

        assert derived.metadata == {"self": 1, "payload": 2}

    def test_with_payload_keeps_metadata(self) -> None:
        original = Message("x", {"a": 1})

        derived = original.with_payload("y")

        assert derived.payload == "y"
        assert derived.metadata == {"a": 1}
        assert original.payload == "x"

    def test_metadata_accumulates_across_steps(self) -> None:
        msg = Message("x").with_metadata(source_file="in.txt").with_metadata(file_size=1)

        assert msg.metadata == {"source_file": "in.txt", "file_size": 1}


class TestMessageIdentity:
    """message_id is diagnostic and excluded from equality."""

    def test_each_message_gets_an_id(self) -> None:
        assert Message("x").message_id != Message("x").message_id

    def test_equality_ignores_message_id(self) -> None:
        assert Message("x", {"a": 1}) == Message("x", {"a": 1})

    def test_derived_message_gets_new_id(self) -> None:
        original = Message("x")

        assert original.with_metadata(a=1).message_id != original.message_id

    def test_messages_are_unhashable(self) -> None:
        with pytest.raises(TypeError):
            hash(Message("x"))
