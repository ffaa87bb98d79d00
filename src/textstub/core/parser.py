"""Text-based stub parser.

This module defines the high-level parser turning the contents of a
`.tbd` file into a single flattened symbol table for one target.

The parser coordinates:
- loading of every YAML document of the file into a generic tree,
- extraction of a record from each document applying to the target,
- squashing of the records into the main library record.

Any failure is fatal for the file and surfaces as a `TBDError`.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from yaml import BaseLoader, load_all
from yaml.error import YAMLError

from textstub.errors import (
    ErrorContext,
    MalformedTBDError,
    TargetNotFoundError,
    TBDSyntaxError,
    UnsupportedTargetError,
)
from textstub.models import StubSettings, TextDylib
from textstub.values import get_string, get_string_vector

from .extractor import extract_document
from .squasher import squash

if TYPE_CHECKING:
    from os import PathLike

if TYPE_CHECKING:
    from textstub.values import Node

logger = logging.getLogger(__name__)

#: Declared targets of one document: its install name and target triples.
type DocumentTargets = tuple[str | None, list[str]]


class StubLoader(BaseLoader):
    """YAML loader keeping every scalar as text.

    Application tags such as `!tapi-tbd` are accepted and ignored.
    """


class StubParser:
    """Text-based stub parser bound to a set of supported targets.

    The parser is stateless between calls: every call parses one file
    to completion or raises.
    """

    def __init__(self, loader: type[BaseLoader] = StubLoader, *,
                 settings: StubSettings | None = None,
                 targets: 'tuple[str, ...] | list[str] | None' = None) -> None:
        """Initialize the parser.

        Args:
            loader: YAML loader class producing the generic value tree.
            settings: Parser settings. Resolved from the environment
                if not provided.
            targets: Additional targets to accept on top of the
                configured ones.
        """
        self.loader = loader
        self.settings = settings or StubSettings()

        self.targets: tuple[str, ...] = tuple(dict.fromkeys((
            *self.settings.targets,
            *(targets or ()),
        )))

    def load(self, content: str | bytes, *,
             filename: str | None = None) -> list['Node']:
        """Load all YAML documents of a stub.

        Args:
            content: Stub contents as text or raw bytes.
            filename: Name of the file used in diagnostics.

        Returns:
            Loaded documents in file order.

        Raises:
            TBDSyntaxError: If the contents are not well-formed YAML.
            MalformedTBDError: If the contents hold no document.
        """
        text = self._decode(content, filename=filename)

        try:
            documents = list(load_all(text, Loader=self.loader))

        except YAMLError as base:
            raise TBDSyntaxError.from_yaml_error(
                base,
                text,
                filename=filename,
            ) from base

        if not documents:
            raise MalformedTBDError(context=ErrorContext(filename=filename))

        logger.debug('Loaded %d document(s) from %s',
                     len(documents), filename or '<unicode string>')

        return documents

    def parse(self, content: str | bytes, target: str, *,
              filename: str | None = None) -> TextDylib:
        """Parse a stub into a flattened symbol table.

        Args:
            content: Stub contents as text or raw bytes.
            target: Architecture-OS triple, e.g. `arm64-macos`.
            filename: Name of the file used in diagnostics.

        Returns:
            The main library record with symbols of every re-exported
            library found in the same file merged in.

        Raises:
            UnsupportedTargetError: If the target is not supported.
            TBDSyntaxError: If the contents are not well-formed YAML.
            MalformedTBDError: If the contents hold no document.
            TargetNotFoundError: If no document applies to the target.
        """
        if target not in self.targets:
            raise UnsupportedTargetError(
                target,
                self.targets,
                context=ErrorContext(filename=filename),
            )

        records = []
        for document in self.load(content, filename=filename):
            if (record := extract_document(document, target)) is not None:
                records.append(record)

        if not records:
            raise TargetNotFoundError(target, context=ErrorContext(filename=filename))

        return squash(records)

    def parse_file(self, path: 'str | PathLike[str]', target: str) -> TextDylib:
        """Read and parse a stub file.

        Args:
            path: Path to a `.tbd` file.
            target: Architecture-OS triple, e.g. `arm64-macos`.

        Returns:
            The flattened symbol table.

        Raises:
            TBDError: If the file is not a valid stub for the target.
        """
        path = Path(path)

        return self.parse(path.read_bytes(), target, filename=str(path))

    def list_targets(self, content: str | bytes, *,
                     filename: str | None = None) -> list[DocumentTargets]:
        """List targets declared by each document of a stub.

        Args:
            content: Stub contents as text or raw bytes.
            filename: Name of the file used in diagnostics.

        Returns:
            Install name and declared targets of every document.

        Raises:
            TBDSyntaxError: If the contents are not well-formed YAML.
            MalformedTBDError: If the contents hold no document.
        """
        return [
            (get_string(document, 'install-name'), get_string_vector(document, 'targets'))
            for document in self.load(content, filename=filename)
        ]

    def _decode(self, content: str | bytes, *,
                filename: str | None = None) -> str:
        """Decode raw bytes using the configured encoding."""
        if isinstance(content, str):
            return content

        try:
            return content.decode(self.settings.encoding)

        except UnicodeDecodeError as base:
            raise TBDSyntaxError.from_decode_error(
                base,
                content,
                filename=filename,
            ) from base


def parse_tbd(content: str | bytes, target: str, *,
              filename: str | None = None) -> TextDylib:
    """Parse a stub with a parser built from the environment settings.

    Args:
        content: Stub contents as text or raw bytes.
        target: Architecture-OS triple, e.g. `arm64-macos`.
        filename: Name of the file used in diagnostics.

    Returns:
        The flattened symbol table.
    """
    return StubParser().parse(content, target, filename=filename)


def parse_tbd_file(path: 'str | PathLike[str]', target: str) -> TextDylib:
    """Read and parse a stub file with a parser built from the environment settings."""
    return StubParser().parse_file(path, target)
