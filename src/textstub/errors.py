"""Core exception hierarchy.

This module defines the error types raised while parsing text-based
stubs. Every error is fatal for the file being parsed: nothing is
returned partially and the caller decides whether to stop the link.

Diagnostics are rendered in the compiler style the linker reports:
`<file>:<line>: <message>` when the line is known, otherwise
`<file>: <message>`.
"""

from os import linesep
from typing import TYPE_CHECKING, TypedDict

from yaml.error import MarkedYAMLError
from yaml.reader import ReaderError

if TYPE_CHECKING:
    from typing import Self

if TYPE_CHECKING:
    from yaml.error import YAMLError

FORMAT_FILENAME = '<unicode string>'
FORMAT_INDENT = 4


class ErrorContext(TypedDict, total=False):
    """Container describing contextual information for error formatting.

    All fields are optional; the formatter adapts output based on
    provided values.
    """

    #: Name of the source file where the error occurred.
    filename: str | None

    #: Zero-based line number in the source file.
    line_num: int | None
    #: Zero-based column number in the source file.
    column_num: int | None

    #: Underlying exception that triggered formatting.
    error: Exception | None


def count_lines(content: str | bytes, position: int) -> int:
    """Count newline characters preceding a position.

    Args:
        content: Source text or raw bytes.
        position: Offset of the erroring character or byte.

    Returns:
        Zero-based line number of the position.
    """
    if isinstance(content, bytes):
        return content.count(b'\n', 0, position)

    return content.count('\n', 0, position)


def count_columns(content: str | bytes, position: int) -> int:
    """Count characters between the preceding newline and a position.

    Args:
        content: Source text or raw bytes.
        position: Offset of the erroring character or byte.

    Returns:
        Zero-based column number of the position.
    """
    if isinstance(content, bytes):
        return position - content.rfind(b'\n', 0, position) - 1

    return position - content.rfind('\n', 0, position) - 1


class ErrorFormatter:
    """Utility class for formatting stub-related errors."""

    @classmethod
    def format(cls, message: str, context: ErrorContext | None = None) -> str:
        """Prefix an error message with its source location.

        Args:
            message: Base human-readable error message.
            context: Optional error context with location data.

        Returns:
            A diagnostic line suitable for display.
        """
        return f'{cls.get_location_string(context or {})}: {message}'

    @classmethod
    def get_location_string(cls, context: ErrorContext) -> str:
        """Format source location information.

        Args:
            context: Error context containing location metadata.

        Returns:
            The file name, followed by a one-based line number
            when available.
        """
        location = context.get('filename') or FORMAT_FILENAME
        if (line_num := context.get('line_num')) is not None:
            location += f':{line_num + 1}'

        return location

    @classmethod
    def get_snippet_string(cls, context: ErrorContext, *,
                           indent: int = FORMAT_INDENT) -> str:
        """Render the source snippet pointed to by a YAML error.

        Args:
            context: Error context containing the underlying exception.
            indent: Number of spaces to indent the snippet with.

        Returns:
            A multi-line snippet, or an empty string if the error
            carries no source mark.
        """
        error = context.get('error')
        if not isinstance(error, MarkedYAMLError) or error.problem_mark is None:
            return ''

        snippet = error.problem_mark.get_snippet(indent=0) or ''

        return linesep.join(
            f'{' ' * indent}{line}'
            for line in snippet.splitlines()
            if line.strip()
        )


class TBDError(Exception, ErrorFormatter):
    """Base exception for all textstub errors.

    All custom exceptions raised by the library inherit from this class
    to allow unified error handling by callers.
    """

    def __init__(self, message: str, *,
                 context: ErrorContext | None = None) -> None:
        """Initialize an error.

        Args:
            message: Human-readable error description.
            context: Error context containing the source location.
        """
        self.message = message
        self.context: ErrorContext = context or ErrorContext()

        super().__init__(message)

    def __str__(self) -> str:
        """String representation."""
        return self.format(self.message, self.context)

    @property
    def filename(self) -> str | None:
        """Name of the file the error relates to."""
        return self.context.get('filename')

    @property
    def lineno(self) -> int | None:
        """One-based line number of the error, if known."""
        if (line_num := self.context.get('line_num')) is not None:
            return line_num + 1

        return None

    @property
    def column(self) -> int | None:
        """One-based column number of the error, if known."""
        if (column_num := self.context.get('column_num')) is not None:
            return column_num + 1

        return None

    @property
    def snippet(self) -> str:
        """Source snippet around the error, if available."""
        return self.get_snippet_string(self.context)


class TBDSyntaxError(TBDError):
    """Error raised when a stub is not well-formed YAML."""

    @classmethod
    def from_yaml_error(cls, error: 'YAMLError', content: str, *,
                        filename: str | None = None) -> 'Self':
        """Create a syntax error from a PyYAML failure.

        The line number is derived from the error offset by counting
        newlines preceding it in `content`.

        Args:
            error: Exception raised by the YAML parser.
            content: Text that was being parsed.
            filename: Name of the parsed file.

        Returns:
            TBDSyntaxError pointing at the erroring line.
        """
        position = 0
        problem = str(error)

        if isinstance(error, MarkedYAMLError):
            if mark := (error.problem_mark or error.context_mark):
                position = mark.index
            problem = error.problem or error.context or problem

        elif isinstance(error, ReaderError):
            position = error.position
            problem = error.reason

        error_context = ErrorContext(
            filename=filename,
            line_num=count_lines(content, position),
            column_num=count_columns(content, position),
            error=error,
        )

        return cls(f'YAML parse error: {problem}', context=error_context)

    @classmethod
    def from_decode_error(cls, error: UnicodeDecodeError, content: bytes, *,
                          filename: str | None = None) -> 'Self':
        """Create a syntax error from an undecodable input.

        Args:
            error: Exception raised while decoding raw bytes.
            content: Raw bytes that were being decoded.
            filename: Name of the parsed file.

        Returns:
            TBDSyntaxError pointing at the line of the offending byte.
        """
        error_context = ErrorContext(
            filename=filename,
            line_num=count_lines(content, error.start),
            column_num=count_columns(content, error.start),
            error=error,
        )

        return cls(f'YAML parse error: {error.reason}', context=error_context)


class MalformedTBDError(TBDError):
    """Error raised when a stub contains no usable document."""

    def __init__(self, message: str = 'malformed TBD file', *,
                 context: ErrorContext | None = None) -> None:
        """Initialize an error.

        Args:
            message: Human-readable error description.
            context: Error context containing the source location.
        """
        super().__init__(message, context=context)


class TargetNotFoundError(MalformedTBDError):
    """Error raised when no document of a stub matches the requested target."""

    def __init__(self, target: str, *,
                 context: ErrorContext | None = None) -> None:
        """Initialize an error.

        Args:
            target: Requested architecture-OS triple.
            context: Error context containing the source location.
        """
        self.target = target

        super().__init__(f'no document for target {target!r}', context=context)


class UnsupportedTargetError(TBDError):
    """Error raised when a parser is asked for a target it does not support."""

    def __init__(self, target: str, supported: tuple[str, ...], *,
                 context: ErrorContext | None = None) -> None:
        """Initialize an error.

        Args:
            target: Requested architecture-OS triple.
            supported: Targets the parser accepts.
            context: Error context containing the source location.
        """
        self.target = target
        self.supported = supported

        super().__init__(
            f'unsupported target {target!r} (expected one of {', '.join(supported)})',
            context=context,
        )
