"""Record assembly for file ingestion pipelines.

Turns ingested file data (a key and value, source position and file
metadata) into outbound messages for a partitioned log.

Usage:
    from filepulse import RecordAssembler, FileObjectMeta, constant

    assembler = RecordAssembler(constant({"id": 1})).with_topic("orders")
    message = assembler.build(position, checkpoint, FileObjectMeta.from_path(p))
"""

from filepulse.lib.assembler import RecordAssembler
from filepulse.lib.errors import ConfigurationError, InvalidRecordError, RecordError
from filepulse.lib.metadata import ContentDigest, FileDescriptor, FileObjectMeta
from filepulse.lib.records import (
    Header,
    HeaderSet,
    OutboundMessage,
    Producer,
    TypedValue,
    constant,
)

__version__ = "1.0.0"

__all__ = [
    "RecordAssembler",
    "RecordError",
    "InvalidRecordError",
    "ConfigurationError",
    "ContentDigest",
    "FileDescriptor",
    "FileObjectMeta",
    "Header",
    "HeaderSet",
    "OutboundMessage",
    "Producer",
    "TypedValue",
    "constant",
]
