"""Core text-based stub parsing.

This package turns the contents of a `.tbd` file into a flattened
symbol table:
- `extractor` converts one YAML document into a record for a target;
- `squasher` merges re-exported sibling records into the main one;
- `parser` drives loading, extraction and squashing.

The primary public entry point is `StubParser`.
"""

from .extractor import extract_document
from .parser import StubLoader, StubParser, parse_tbd, parse_tbd_file
from .squasher import squash

__all__ = (
    'StubLoader',
    'StubParser',
    'extract_document',
    'parse_tbd',
    'parse_tbd_file',
    'squash',
)
