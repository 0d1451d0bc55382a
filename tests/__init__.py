"""filepulse test suite.

- unit/test_record_assembler.py: routing precedence, key/value invariant, header merge
- unit/test_records.py: TypedValue, HeaderSet, OutboundMessage
- unit/test_file_metadata.py: file provenance headers
- unit/test_record_settings.py: YAML settings and env expansion
- unit/test_record_errors.py, unit/test_record_logging.py: ambient utilities
"""
