"""Flattening of re-export graphs.

A single stub file may contain several documents. The first one describes
the main library, the following ones describe libraries it re-exports.
Squashing copies the symbols of every re-exported library found in the
same file into the main record, transitively, and leaves only the names
of libraries absent from the file for the linker to resolve.

Each library is merged at most once: repeated re-export edges and cycles
in the graph (including edges back to the main library) are no-ops.
"""

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from textstub.errors import MalformedTBDError
from textstub.models import TextDylib

logger = logging.getLogger(__name__)


@dataclass
class _Accumulator:
    """Mutable state of a single squash."""

    exports: list[str] = field(default_factory=list)
    weak_exports: list[str] = field(default_factory=list)
    external_libs: list[str] = field(default_factory=list)
    visited: set[str] = field(default_factory=set)


def _resolve(libraries: list[str], index: dict[str, TextDylib],
             accumulator: _Accumulator) -> None:
    """Merge re-exported libraries depth-first into the accumulator.

    Pending edges are kept on an explicit stack of iterators, so the
    depth of a re-export chain is bounded by the input size only.

    Args:
        libraries: Install names of re-exported libraries.
        index: Sibling records by install name.
        accumulator: State receiving symbols and external names.
    """
    stack: list[Iterator[str]] = [iter(libraries)]

    while stack:
        name = next(stack[-1], None)
        if name is None:
            stack.pop()
            continue

        if name in accumulator.visited:
            continue
        accumulator.visited.add(name)

        child = index.get(name)
        if child is None:
            logger.debug('Re-exported library %s is external', name)
            accumulator.external_libs.append(name)
            continue

        logger.debug('Merging re-exported library %s', name)
        accumulator.exports.extend(child.exports)
        accumulator.weak_exports.extend(child.weak_exports)

        stack.append(iter(child.reexported_libs))


def squash(records: Sequence[TextDylib]) -> TextDylib:
    """Squash a main record and its sibling records into one record.

    Args:
        records: Records extracted from one file; the first one is the
            main library and the rest are re-exported libraries.

    Returns:
        A new record holding the main library symbols followed by
        the symbols of resolved re-exports, whose `reexported_libs`
        lists only the libraries not found among the siblings.

    Raises:
        MalformedTBDError: If `records` is empty.
    """
    if not records:
        raise MalformedTBDError('nothing to squash')

    main, *siblings = records
    index = {record.install_name: record for record in siblings}

    accumulator = _Accumulator(
        exports=list(main.exports),
        weak_exports=list(main.weak_exports),
        visited={main.install_name},
    )
    _resolve(main.reexported_libs, index, accumulator)

    return TextDylib(
        install_name=main.install_name,
        exports=accumulator.exports,
        weak_exports=accumulator.weak_exports,
        reexported_libs=accumulator.external_libs,
    )
