"""Record assembly library modules.

This package contains the record model, file metadata rendering, the
assembler itself and the settings, logging and error utilities around it.
"""

from filepulse.lib.assembler import RecordAssembler
from filepulse.lib.config_loader import (
    RecordSettings,
    load_settings,
    load_settings_from_dict,
)
from filepulse.lib.env import expand_env_vars, expand_options, load_env_file
from filepulse.lib.errors import ConfigurationError, InvalidRecordError, RecordError
from filepulse.lib.logging import JSONFormatter, get_logger, setup_logging
from filepulse.lib.metadata import (
    HEADER_PREFIX,
    ContentDigest,
    FileDescriptor,
    FileObjectMeta,
)
from filepulse.lib.records import (
    Header,
    HeaderSet,
    OutboundMessage,
    Producer,
    TypedValue,
    constant,
)

__all__ = [
    # Assembly
    "RecordAssembler",
    # Records
    "Header",
    "HeaderSet",
    "OutboundMessage",
    "Producer",
    "TypedValue",
    "constant",
    # Metadata
    "HEADER_PREFIX",
    "ContentDigest",
    "FileDescriptor",
    "FileObjectMeta",
    # Settings
    "RecordSettings",
    "load_settings",
    "load_settings_from_dict",
    "expand_env_vars",
    "expand_options",
    "load_env_file",
    # Errors
    "RecordError",
    "InvalidRecordError",
    "ConfigurationError",
    # Logging
    "JSONFormatter",
    "get_logger",
    "setup_logging",
]
