"""Tests for filepulse/lib/records.py - typed values, headers, messages."""

import pytest

from filepulse.lib.records import (
    Header,
    HeaderSet,
    OutboundMessage,
    TypedValue,
    constant,
)


class TestTypedValue:
    def test_constant_yields_same_value(self):
        producer = constant({"id": 1}, schema="struct")
        assert producer() == TypedValue(schema="struct", value={"id": 1})
        assert producer() is producer()

    def test_is_immutable(self):
        typed = TypedValue("string", "v")
        with pytest.raises(AttributeError):
            typed.value = "other"


class TestHeaderSet:
    """Tests for HeaderSet ordering and lookup."""

    def test_add_preserves_order(self):
        """Headers are kept in insertion order."""
        headers = HeaderSet().add("a", 1).add("b", 2).add("a", 3)
        assert headers.to_list() == [("a", 1), ("b", 2), ("a", 3)]
        assert len(headers) == 3

    def test_accepts_headers_and_pairs(self):
        headers = HeaderSet([Header("a", 1), ("b", 2)])
        assert list(headers) == [Header("a", 1), Header("b", 2)]

    def test_extend_appends_other_set(self):
        """Merging appends without dropping duplicates."""
        base = HeaderSet([("a", 1), ("b", 2)])
        base.extend(HeaderSet([("b", 20), ("c", 3)]))
        assert base.to_list() == [("a", 1), ("b", 2), ("b", 20), ("c", 3)]

    def test_copy_is_independent(self):
        original = HeaderSet([("a", 1)])
        copied = original.copy()
        copied.add("b", 2)
        assert original.to_list() == [("a", 1)]
        assert copied.to_list() == [("a", 1), ("b", 2)]

    def test_last_with_name(self):
        headers = HeaderSet([("a", 1), ("b", 2), ("a", 3)])
        assert headers.last_with_name("a") == Header("a", 3)
        assert headers.last_with_name("missing") is None

    def test_all_with_name(self):
        headers = HeaderSet([("a", 1), ("b", 2), ("a", 3)])
        assert [h.value for h in headers.all_with_name("a")] == [1, 3]

    def test_keys(self):
        assert HeaderSet([("a", 1), ("b", 2)]).keys() == ["a", "b"]

    def test_empty_set_is_falsy(self):
        assert not HeaderSet()
        assert HeaderSet().add("a", 1)

    def test_equality(self):
        assert HeaderSet([("a", 1)]) == HeaderSet([Header("a", 1)])
        assert HeaderSet([("a", 1)]) != HeaderSet([("a", 2)])

    def test_iteration_snapshot(self):
        """Appending while iterating does not affect the running loop."""
        headers = HeaderSet([("a", 1)])
        for header in headers:
            headers.add(header.key + "x", header.value)
        assert headers.keys() == ["a", "ax"]


class TestOutboundMessage:
    def test_to_dict(self):
        message = OutboundMessage(
            source_position={"uri": "file:///a.csv"},
            checkpoint_position={"position": 10},
            topic="orders",
            partition=None,
            key_schema=None,
            key=None,
            value_schema="string",
            value="row",
            timestamp=1736935200000,
            headers=HeaderSet([("a", 1)]),
        )

        d = message.to_dict()

        assert d["topic"] == "orders"
        assert d["partition"] is None
        assert d["value"] == "row"
        assert d["headers"] == [("a", 1)]
        assert d["checkpoint_position"] == {"position": 10}
