"""Source file metadata rendered as message headers.

Every outbound message carries provenance headers describing the file
it was read from. The assembler only needs something that can render
itself as a ``HeaderSet``; ``FileObjectMeta`` is the standard
implementation for files on a local or remote filesystem.

Header names:
    connect.file.name            - file name
    connect.file.uri             - file URI
    connect.file.contentLength   - size in bytes
    connect.file.lastModified    - modification time, epoch millis
    connect.file.hash.digest     - content digest (when known)
    connect.file.hash.algorithm  - digest algorithm (when known)
    connect.file.metadata.<key>  - one per user-defined metadata entry
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union

from filepulse.lib.records import HeaderSet

logger = logging.getLogger(__name__)

__all__ = [
    "FileDescriptor",
    "ContentDigest",
    "FileObjectMeta",
    "HEADER_PREFIX",
]

HEADER_PREFIX = "connect.file."

_CHUNK_SIZE = 1024 * 1024


class FileDescriptor(Protocol):
    """Anything that can render file provenance as a header set."""

    def to_headers(self) -> HeaderSet:
        ...


@dataclass(frozen=True)
class ContentDigest:
    """Digest of a file's content and the algorithm that produced it."""

    digest: str
    algorithm: str


@dataclass
class FileObjectMeta:
    """Descriptive attributes of a source file."""

    uri: str
    name: str
    content_length: int
    last_modified: int
    content_digest: Optional[ContentDigest] = None
    user_defined_metadata: Dict[str, Any] = field(default_factory=dict)

    def to_headers(self) -> HeaderSet:
        """Render this metadata as a new header set.

        Returns:
            A fresh HeaderSet; callers may append to it freely.
        """
        headers = HeaderSet()
        headers.add(f"{HEADER_PREFIX}name", self.name)
        headers.add(f"{HEADER_PREFIX}uri", self.uri)
        headers.add(f"{HEADER_PREFIX}contentLength", self.content_length)
        headers.add(f"{HEADER_PREFIX}lastModified", self.last_modified)
        if self.content_digest is not None:
            headers.add(f"{HEADER_PREFIX}hash.digest", self.content_digest.digest)
            headers.add(
                f"{HEADER_PREFIX}hash.algorithm", self.content_digest.algorithm
            )
        for key, value in self.user_defined_metadata.items():
            headers.add(f"{HEADER_PREFIX}metadata.{key}", value)
        return headers

    @classmethod
    def from_path(
        cls,
        path: Union[str, Path],
        *,
        algorithm: Optional[str] = "sha256",
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "FileObjectMeta":
        """Describe a local file.

        Reads the file in 1MB chunks to compute the digest.

        Args:
            path: File to describe
            algorithm: hashlib algorithm name, or None to skip hashing
            metadata: Optional user-defined metadata entries

        Returns:
            FileObjectMeta for the file

        Raises:
            FileNotFoundError: If the file does not exist
        """
        file_path = Path(path).resolve()
        stat = file_path.stat()

        digest = None
        if algorithm:
            hasher = hashlib.new(algorithm)
            with file_path.open("rb") as f:
                for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
                    hasher.update(chunk)
            digest = ContentDigest(digest=hasher.hexdigest(), algorithm=algorithm)

        logger.debug("Described %s (%d bytes)", file_path, stat.st_size)

        return cls(
            uri=file_path.as_uri(),
            name=file_path.name,
            content_length=stat.st_size,
            last_modified=int(stat.st_mtime * 1000),
            content_digest=digest,
            user_defined_metadata=dict(metadata or {}),
        )
