"""Parser for Apple text-based dynamic library stubs.

A text-based stub (`.tbd` file) is a YAML description of a dynamic
library's exported symbols and re-exported libraries, which lets a linker
link against the library without its binary being present.

The `textstub` package parses such a file for one target into a single
flattened symbol table:
- documents not applying to the target are dropped;
- Objective-C classes, exception types and ivars become symbols;
- re-exported libraries described in the same file are merged in,
  the remaining ones are reported for the linker to resolve.
"""

from textstub.core import StubParser, parse_tbd, parse_tbd_file
from textstub.errors import (
    MalformedTBDError,
    TargetNotFoundError,
    TBDError,
    TBDSyntaxError,
    UnsupportedTargetError,
)
from textstub.models import DEFAULT_TARGETS, StubSettings, TextDylib

__all__ = (
    'DEFAULT_TARGETS',
    'MalformedTBDError',
    'StubParser',
    'StubSettings',
    'TBDError',
    'TBDSyntaxError',
    'TargetNotFoundError',
    'TextDylib',
    'UnsupportedTargetError',
    'parse_tbd',
    'parse_tbd_file',
)
