"""YAML settings loader for record routing.

Lets operators define default routing and static headers without code.

Example YAML (orders.yaml):
    routing:
      topic: ${INGEST_TOPIC}
      partition: 0

    headers:
      - name: origin
        value: ingest-a

Usage:
    from filepulse.lib.config_loader import load_settings
    settings = load_settings("./orders.yaml")
    settings.configure(assembler)
    message = settings.build(assembler, source_position, checkpoint, meta)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from filepulse.lib.assembler import RecordAssembler
from filepulse.lib.env import expand_options, load_env_file
from filepulse.lib.errors import ConfigurationError
from filepulse.lib.metadata import FileDescriptor
from filepulse.lib.records import HeaderSet, OutboundMessage

logger = logging.getLogger(__name__)

__all__ = [
    "RecordSettings",
    "load_settings",
    "load_settings_from_dict",
]


@dataclass
class RecordSettings:
    """Routing defaults and static headers for an assembler."""

    default_topic: Optional[str] = None
    default_partition: Optional[int] = None
    headers: HeaderSet = field(default_factory=HeaderSet)

    def configure(self, assembler: RecordAssembler) -> RecordAssembler:
        """Apply static headers to ``assembler`` when any are defined."""
        if self.headers:
            assembler.with_headers(self.headers.copy())
        return assembler

    def build(
        self,
        assembler: RecordAssembler,
        source_position: Mapping[str, Any],
        checkpoint_position: Mapping[str, Any],
        metadata: FileDescriptor,
    ) -> OutboundMessage:
        """Assemble a message using these settings as routing defaults."""
        return assembler.build(
            source_position,
            checkpoint_position,
            metadata,
            default_topic=self.default_topic,
            default_partition=self.default_partition,
        )


def _parse_partition(value: Any) -> Optional[int]:
    if value is None:
        return None
    # YAML booleans are ints in Python; reject them explicitly
    if isinstance(value, bool):
        raise ConfigurationError(
            "routing.partition must be an integer",
            field="routing.partition",
            value=value,
        )
    try:
        partition = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            "routing.partition must be an integer",
            field="routing.partition",
            value=value,
        ) from e
    if partition < 0:
        raise ConfigurationError(
            "routing.partition must be >= 0",
            field="routing.partition",
            value=value,
        )
    return partition


def _parse_headers(value: Any) -> HeaderSet:
    headers = HeaderSet()
    if value is None:
        return headers
    if not isinstance(value, list):
        raise ConfigurationError(
            "headers must be a list of {name, value} entries", field="headers"
        )
    for i, entry in enumerate(value):
        if not isinstance(entry, dict) or "name" not in entry:
            raise ConfigurationError(
                f"headers[{i}] must be a mapping with a 'name' key",
                field=f"headers[{i}]",
            )
        headers.add(str(entry["name"]), entry.get("value"))
    return headers


def load_settings_from_dict(data: Optional[Dict[str, Any]]) -> RecordSettings:
    """Create RecordSettings from parsed YAML.

    Raises:
        ConfigurationError: If the settings are malformed
    """
    if data is None:
        return RecordSettings()
    if not isinstance(data, dict):
        raise ConfigurationError("settings must be a mapping")

    data = expand_options(data)

    routing = data.get("routing") or {}
    if not isinstance(routing, dict):
        raise ConfigurationError("routing must be a mapping", field="routing")

    topic = routing.get("topic")
    return RecordSettings(
        default_topic=str(topic) if topic is not None else None,
        default_partition=_parse_partition(routing.get("partition")),
        headers=_parse_headers(data.get("headers")),
    )


def load_settings(
    path: Union[str, Path],
    *,
    env_file: Optional[Union[str, Path]] = None,
) -> RecordSettings:
    """Load RecordSettings from a YAML file.

    Args:
        path: YAML settings file
        env_file: Optional .env file loaded before variable expansion

    Raises:
        ConfigurationError: If the file is missing, unparsable or malformed
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(
            f"Settings file not found: {path}", field="path", value=path
        )

    if env_file is not None:
        load_env_file(env_file)

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    settings = load_settings_from_dict(data)
    logger.info(
        "Loaded settings from %s (topic=%s, partition=%s, headers=%d)",
        path,
        settings.default_topic,
        settings.default_partition,
        len(settings.headers),
    )
    return settings
