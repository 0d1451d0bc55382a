"""Record assembler: the last step before a message leaves ingestion.

Combines a lazily produced key and value, routing overrides, a
timestamp, provenance headers and position coordinates into one
``OutboundMessage``.

Routing precedence is ``override if set else default``, for topic and
partition independently. At least one of key or value must be present.

Example:
    assembler = RecordAssembler(constant({"id": 1}))
    assembler.with_topic("orders").with_headers(HeaderSet().add("origin", "a"))
    message = assembler.build(
        {"uri": "file:///data/orders.csv"},
        {"position": 42},
        FileObjectMeta.from_path("/data/orders.csv"),
        default_topic="ingest",
    )

Configuration (the ``with_*`` methods) is expected to finish before
``build`` is called, from a single thread. The assembler does not lock.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from filepulse.lib.errors import ConfigurationError, InvalidRecordError
from filepulse.lib.metadata import FileDescriptor
from filepulse.lib.records import HeaderSet, OutboundMessage, Producer

logger = logging.getLogger(__name__)

__all__ = ["RecordAssembler"]


class RecordAssembler:
    """Builds one outbound message per logical record."""

    def __init__(self, value_producer: Producer) -> None:
        if value_producer is None:
            raise ConfigurationError(
                "value_producer cannot be None", field="value_producer"
            )
        if not callable(value_producer):
            raise ConfigurationError(
                "value_producer must be callable",
                field="value_producer",
                value=type(value_producer).__name__,
            )
        self._value_producer = value_producer
        self._key_producer: Optional[Producer] = None
        self._topic: Optional[str] = None
        self._partition: Optional[int] = None
        self._timestamp: Optional[int] = None
        self._headers: Optional[HeaderSet] = None

    @property
    def topic(self) -> Optional[str]:
        return self._topic

    @property
    def partition(self) -> Optional[int]:
        return self._partition

    @property
    def timestamp(self) -> Optional[int]:
        return self._timestamp

    @property
    def headers(self) -> Optional[HeaderSet]:
        return self._headers

    @property
    def has_key_producer(self) -> bool:
        return self._key_producer is not None

    def with_key(self, key_producer: Optional[Producer]) -> "RecordAssembler":
        self._key_producer = key_producer
        return self

    def with_topic(self, topic: Optional[str]) -> "RecordAssembler":
        self._topic = topic
        return self

    def with_partition(self, partition: Optional[int]) -> "RecordAssembler":
        self._partition = partition
        return self

    def with_timestamp(self, timestamp: Optional[int]) -> "RecordAssembler":
        """Set the record timestamp in epoch milliseconds."""
        self._timestamp = timestamp
        return self

    def with_headers(self, headers: Optional[HeaderSet]) -> "RecordAssembler":
        """Set headers appended after the file metadata headers."""
        self._headers = headers
        return self

    def build(
        self,
        source_position: Mapping[str, Any],
        checkpoint_position: Mapping[str, Any],
        metadata: FileDescriptor,
        default_topic: Optional[str] = None,
        default_partition: Optional[int] = None,
    ) -> OutboundMessage:
        """Assemble the outbound message.

        Args:
            source_position: Where in the origin file the record came from
            checkpoint_position: Where reading should resume
            metadata: Source file descriptor, rendered as base headers
            default_topic: Topic used when no topic override is set
            default_partition: Partition used when no partition override is set

        Returns:
            The assembled OutboundMessage

        Raises:
            InvalidRecordError: If a required input is missing, or if both
                key and value are absent
        """
        _require(source_position, "source_position")
        _require(checkpoint_position, "checkpoint_position")
        _require(metadata, "metadata")

        key = self._key_producer() if self._key_producer is not None else None
        value = self._value_producer()

        if key is None and value is None:
            logger.debug("Rejected record at %s: no key and no value", source_position)
            raise InvalidRecordError("key and value cannot be both None")

        topic = self._topic if self._topic is not None else default_topic
        partition = (
            self._partition if self._partition is not None else default_partition
        )

        # Copy so a descriptor that caches its headers is left untouched
        headers = HeaderSet(metadata.to_headers())
        if self._headers is not None:
            headers.extend(self._headers)

        message = OutboundMessage(
            source_position=source_position,
            checkpoint_position=checkpoint_position,
            topic=topic,
            partition=partition,
            key_schema=key.schema if key is not None else None,
            key=key.value if key is not None else None,
            value_schema=value.schema if value is not None else None,
            value=value.value if value is not None else None,
            timestamp=self._timestamp,
            headers=headers,
        )
        logger.debug(
            "Assembled record topic=%s partition=%s headers=%d",
            topic,
            partition,
            len(headers),
        )
        return message


def _require(arg: Any, name: str) -> None:
    if arg is None:
        raise InvalidRecordError(f"{name} cannot be None", field=name)
