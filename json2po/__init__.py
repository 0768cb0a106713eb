"""
json2po - stream translation records from newline-delimited JSON to gettext PO

Each input line is one record:
    {"id": "TEST 1", "str": "TESTING 123"}

and becomes one PO entry:
    msgid "TEST 1"
    msgstr "TESTING 123"

Quick start:
    from json2po import PoEncoder
    PoEncoder().pipe(ndjson_lines, sink)
"""

__version__ = "1.0.0"

from .entry import (
    VALIDATION_ERROR,
    EncoderClosedError,
    Entry,
    EntryValidationError,
    PluralEntry,
    SingularEntry,
    ValidationIssue,
)
from .renderer import escape_quotes, format_field, render, render_block
from .stream import PoEncoder, dumps, encode, iter_records
from .validator import normalize, validate

__all__ = [
    "VALIDATION_ERROR",
    "EncoderClosedError",
    "Entry",
    "EntryValidationError",
    "PluralEntry",
    "SingularEntry",
    "ValidationIssue",
    "escape_quotes",
    "format_field",
    "render",
    "render_block",
    "PoEncoder",
    "dumps",
    "encode",
    "iter_records",
    "normalize",
    "validate",
]
