"""Record building blocks: typed values, headers and outbound messages.

A record leaving the ingestion pipeline is an ``OutboundMessage``: a
destination topic and partition, a key and a value (each a schema plus
payload), an optional timestamp, an ordered header set and the two
position mappings used for checkpointing.

Example:
    >>> headers = HeaderSet().add("origin", "ingest-a")
    >>> value = constant({"id": 1}, schema="struct")
    >>> value()
    TypedValue(schema='struct', value={'id': 1})
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
    Union,
)

__all__ = [
    "TypedValue",
    "Producer",
    "constant",
    "Header",
    "HeaderSet",
    "OutboundMessage",
]


@dataclass(frozen=True)
class TypedValue:
    """A schema-tagged payload used as a message key or value.

    A ``TypedValue`` whose ``value`` is None is still a present value;
    absence is signalled by a producer returning None instead of a
    ``TypedValue``.
    """

    schema: Any
    value: Any


# Zero-argument, on-demand computation of a key or value.
Producer = Callable[[], Optional[TypedValue]]


def constant(value: Any, schema: Any = None) -> Producer:
    """Return a producer that always yields the same TypedValue."""
    typed = TypedValue(schema=schema, value=value)

    def _produce() -> Optional[TypedValue]:
        return typed

    return _produce


@dataclass(frozen=True)
class Header:
    """A single (name, value) header entry."""

    key: str
    value: Any


HeaderLike = Union[Header, Tuple[str, Any]]


class HeaderSet:
    """Ordered, append-only collection of headers.

    Duplicate names are allowed and insertion order is preserved, so
    merging two sets never drops or reorders entries.
    """

    def __init__(self, headers: Optional[Iterable[HeaderLike]] = None) -> None:
        self._headers: List[Header] = []
        if headers is not None:
            self.extend(headers)

    def add(self, key: str, value: Any) -> "HeaderSet":
        """Append a header and return this set for chaining."""
        self._headers.append(Header(key, value))
        return self

    def extend(self, headers: Iterable[HeaderLike]) -> "HeaderSet":
        """Append every header from ``headers``, keeping their order."""
        for header in headers:
            if isinstance(header, Header):
                self._headers.append(header)
            else:
                key, value = header
                self._headers.append(Header(key, value))
        return self

    def copy(self) -> "HeaderSet":
        return HeaderSet(self._headers)

    def last_with_name(self, key: str) -> Optional[Header]:
        """Return the most recently added header named ``key``, if any."""
        for header in reversed(self._headers):
            if header.key == key:
                return header
        return None

    def all_with_name(self, key: str) -> List[Header]:
        return [header for header in self._headers if header.key == key]

    def keys(self) -> List[str]:
        return [header.key for header in self._headers]

    def to_list(self) -> List[Tuple[str, Any]]:
        """Return headers as a list of ``(key, value)`` pairs."""
        return [(header.key, header.value) for header in self._headers]

    def __iter__(self) -> Iterator[Header]:
        return iter(list(self._headers))

    def __len__(self) -> int:
        return len(self._headers)

    def __bool__(self) -> bool:
        return bool(self._headers)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderSet):
            return NotImplemented
        return self._headers == other._headers

    def __repr__(self) -> str:
        return f"HeaderSet({self.to_list()!r})"


@dataclass(frozen=True)
class OutboundMessage:
    """A fully assembled message ready for the publish stage.

    ``source_position`` and ``checkpoint_position`` are the exact objects
    handed to the assembler. ``topic`` and ``partition`` may be None when
    neither an override nor a default was available; the publish stage
    (e.g. its partitioner) decides in that case.
    """

    source_position: Mapping[str, Any]
    checkpoint_position: Mapping[str, Any]
    topic: Optional[str]
    partition: Optional[int]
    key_schema: Any
    key: Any
    value_schema: Any
    value: Any
    timestamp: Optional[int]
    headers: HeaderSet = field(default_factory=HeaderSet)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for structured logging."""
        return {
            "source_position": dict(self.source_position),
            "checkpoint_position": dict(self.checkpoint_position),
            "topic": self.topic,
            "partition": self.partition,
            "key_schema": self.key_schema,
            "key": self.key,
            "value_schema": self.value_schema,
            "value": self.value,
            "timestamp": self.timestamp,
            "headers": self.headers.to_list(),
        }
