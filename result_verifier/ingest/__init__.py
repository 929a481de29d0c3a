"""Ingest package - byte sources, tokenizing and schema parsing.

This package handles:
- Memory-mapping result and schema files (ByteSource)
- Splitting result files into fields and records (FieldTokenizer)
- Parsing schema definitions into typed columns (SchemaParser)
- Enumerating result files and their same-named partners

Design principle:
- Readers never interpret field values; typing happens in ``analysis``
- End of record / end of file are returned as signals, not raised
"""

from .byte_source import ByteSource
from .discovery import ResultFilePair, list_result_files, resolve_pair
from .schema_parser import SchemaParser, load_schema, parse_schema
from .tokenizer import FieldTokenizer, TokenizerConfig

__all__ = [
    "ByteSource",
    "FieldTokenizer",
    "ResultFilePair",
    "SchemaParser",
    "TokenizerConfig",
    "list_result_files",
    "load_schema",
    "parse_schema",
    "resolve_pair",
]
