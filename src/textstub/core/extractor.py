"""Conversion of a single YAML document into a symbol table.

A document describes one library and may declare its content for several
targets at once. Only blocks listing the requested target contribute to
the resulting record.
"""

import logging
from typing import TYPE_CHECKING

from textstub.models import TextDylib
from textstub.values import contains, get_string, get_string_vector, get_vector

if TYPE_CHECKING:
    from textstub.values import Node

logger = logging.getLogger(__name__)

#: Symbol blocks, in processing order.
EXPORT_KEYS = ('exports', 'reexports')

OBJC_CLASS_PREFIX = '_OBJC_CLASS_$_'
OBJC_METACLASS_PREFIX = '_OBJC_METACLASS_$_'
OBJC_EHTYPE_PREFIX = '_OBJC_EHTYPE_$_'
OBJC_IVAR_PREFIX = '_OBJC_IVAR_$_'


def matches_target(node: 'Node', target: str) -> bool:
    """Check whether a document or block lists the target in its `targets`."""
    return contains(get_vector(node, 'targets'), target)


def objc_symbols(block: 'Node') -> list[str]:
    """Synthesize symbol names for Objective-C entities of an export block.

    Each class contributes a class and a metaclass symbol, each exception
    type an EH type symbol and each instance variable an ivar symbol.

    Args:
        block: An `exports` or `reexports` entry.

    Returns:
        Synthesized symbol names in declaration order.
    """
    symbols = []

    for name in get_string_vector(block, 'objc-classes'):
        symbols.append(f'{OBJC_CLASS_PREFIX}{name}')
        symbols.append(f'{OBJC_METACLASS_PREFIX}{name}')

    symbols.extend(
        f'{OBJC_EHTYPE_PREFIX}{name}'
        for name in get_string_vector(block, 'objc-eh-types')
    )
    symbols.extend(
        f'{OBJC_IVAR_PREFIX}{name}'
        for name in get_string_vector(block, 'objc-ivars')
    )

    return symbols


def extract_document(document: 'Node', target: str) -> TextDylib | None:
    """Build a symbol table from a document for the requested target.

    Args:
        document: Loaded YAML document.
        target: Architecture-OS triple, e.g. `arm64-macos`.

    Returns:
        The populated record, or `None` if the document does not
        apply to the target.
    """
    if not matches_target(document, target):
        logger.debug('Document %r does not apply to %s',
                     get_string(document, 'install-name'), target)
        return None

    exports: list[str] = []
    weak_exports: list[str] = []
    reexported_libs: list[str] = []

    for entry in get_vector(document, 'reexported-libraries'):
        if matches_target(entry, target):
            reexported_libs.extend(get_string_vector(entry, 'libraries'))

    for key in EXPORT_KEYS:
        for block in get_vector(document, key):
            if not matches_target(block, target):
                continue
            exports.extend(get_string_vector(block, 'symbols'))
            weak_exports.extend(get_string_vector(block, 'weak-symbols'))
            exports.extend(objc_symbols(block))

    return TextDylib(
        install_name=get_string(document, 'install-name') or '',
        exports=exports,
        weak_exports=weak_exports,
        reexported_libs=reexported_libs,
    )
