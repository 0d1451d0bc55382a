"""Tests for filepulse/lib/metadata.py - file provenance headers."""

import hashlib
import os
from pathlib import Path

import pytest

from filepulse.lib.metadata import ContentDigest, FileObjectMeta


def _meta(**kwargs) -> FileObjectMeta:
    defaults = dict(
        uri="file:///data/orders.csv",
        name="orders.csv",
        content_length=512,
        last_modified=1736935200000,
    )
    defaults.update(kwargs)
    return FileObjectMeta(**defaults)


class TestToHeaders:
    """Tests for FileObjectMeta.to_headers."""

    def test_base_headers(self):
        """Should render name, uri, length and modification time in order."""
        headers = _meta().to_headers()
        assert headers.to_list() == [
            ("connect.file.name", "orders.csv"),
            ("connect.file.uri", "file:///data/orders.csv"),
            ("connect.file.contentLength", 512),
            ("connect.file.lastModified", 1736935200000),
        ]

    def test_digest_headers(self):
        meta = _meta(content_digest=ContentDigest(digest="abc", algorithm="sha256"))
        headers = meta.to_headers()
        assert headers.last_with_name("connect.file.hash.digest").value == "abc"
        assert headers.last_with_name("connect.file.hash.algorithm").value == "sha256"

    def test_user_metadata_headers(self):
        """User-defined metadata is rendered last, in insertion order."""
        meta = _meta(user_defined_metadata={"owner": "retail", "region": "eu"})
        keys = meta.to_headers().keys()
        assert keys[-2:] == [
            "connect.file.metadata.owner",
            "connect.file.metadata.region",
        ]

    def test_returns_fresh_set(self):
        meta = _meta()
        first = meta.to_headers()
        first.add("extra", 1)
        assert "extra" not in meta.to_headers().keys()


class TestFromPath:
    """Tests for FileObjectMeta.from_path."""

    def test_describes_file(self, tmp_path: Path):
        file = tmp_path / "orders.csv"
        file.write_bytes(b"id,total\n1,9.99\n")
        os.utime(file, (1736935200, 1736935200))

        meta = FileObjectMeta.from_path(file, metadata={"owner": "retail"})

        assert meta.name == "orders.csv"
        assert meta.uri == file.resolve().as_uri()
        assert meta.content_length == 16
        assert meta.last_modified == 1736935200000
        assert meta.content_digest == ContentDigest(
            digest=hashlib.sha256(b"id,total\n1,9.99\n").hexdigest(),
            algorithm="sha256",
        )
        assert meta.user_defined_metadata == {"owner": "retail"}

    def test_other_algorithm(self, tmp_path: Path):
        file = tmp_path / "data.txt"
        file.write_bytes(b"hello")
        meta = FileObjectMeta.from_path(file, algorithm="md5")
        assert meta.content_digest.digest == hashlib.md5(b"hello").hexdigest()
        assert meta.content_digest.algorithm == "md5"

    def test_skip_hashing(self, tmp_path: Path):
        file = tmp_path / "data.txt"
        file.write_bytes(b"hello")
        meta = FileObjectMeta.from_path(file, algorithm=None)
        assert meta.content_digest is None
        assert "connect.file.hash.digest" not in meta.to_headers().keys()

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            FileObjectMeta.from_path(tmp_path / "missing.csv")
