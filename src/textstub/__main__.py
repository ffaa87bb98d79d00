"""Command-line utilities for inspecting text-based stubs."""

import logging
from json import dumps
from os import linesep
from pathlib import Path

from click import Choice, ClickException, Context, argument, echo, group, option, pass_context
from click import Path as PathParam
from yaml import safe_dump

from textstub.core import StubParser
from textstub.errors import TBDError
from textstub.models import DEFAULT_TARGETS

InputFilepath = PathParam(
    exists=True,
    dir_okay=False,
    readable=True,
    path_type=Path,
)


def _fail(error: TBDError) -> ClickException:
    """Convert a parser error into a CLI failure with a source snippet."""
    message = str(error)
    if snippet := error.snippet:
        message += f'{linesep}{snippet}'

    return ClickException(message)


@group(help='Command-line utilities for text-based dynamic library stubs.')
@option('-v', '--verbose', is_flag=True, help='Log parsing details to standard error.')
@pass_context
def cli(ctx: Context, verbose: bool) -> None:
    """Root CLI group for textstub tools."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(name)s: %(message)s')

    ctx.obj = StubParser()


@cli.command(
    name='dump',
    help='Print the flattened symbol table of a stub for one target.',
)
@option(
    '-t', '--target',
    default=DEFAULT_TARGETS[0],
    show_default=True,
    help='Architecture-OS triple to select.',
)
@option(
    '-f', '--format', 'output_format',
    type=Choice(['json', 'yaml']),
    default='json',
    show_default=True,
    help='Output format.',
)
@argument('path', type=InputFilepath)
@pass_context
def dump_stub(ctx: Context, target: str, output_format: str, path: Path) -> None:
    """Parse a stub and print its symbol table.

    Args:
        ctx: Click context holding the parser.
        target: Architecture-OS triple to select.
        output_format: Either `json` or `yaml`.
        path: Path to the stub file.
    """
    parser: StubParser = ctx.obj

    try:
        dylib = parser.parse_file(path, target)

    except TBDError as error:
        raise _fail(error) from error

    content = dylib.model_dump()
    if output_format == 'yaml':
        echo(safe_dump(content, sort_keys=False), nl=False)
    else:
        echo(dumps(content, ensure_ascii=False, indent=4))


@cli.command(
    name='targets',
    help='List targets declared by each document of a stub.',
)
@argument('path', type=InputFilepath)
@pass_context
def list_targets(ctx: Context, path: Path) -> None:
    """Print install names and declared targets of every document.

    Args:
        ctx: Click context holding the parser.
        path: Path to the stub file.
    """
    parser: StubParser = ctx.obj

    try:
        documents = parser.list_targets(path.read_bytes(), filename=str(path))

    except TBDError as error:
        raise _fail(error) from error

    for install_name, targets in documents:
        echo(f'{install_name or '<unnamed>'}: {', '.join(targets) or '<none>'}')


if __name__ == '__main__':
    cli()
