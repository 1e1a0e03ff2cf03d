import importlib
import logging
import pathlib
from typing import Annotated, Any

import typer
from rich.markup import escape
from rich.table import Table

from .. import parser, read
from ..errors import GcfgError
from ..scanner import Scanner
from ..token import Position

from .console import console

LOG_LEVELS = [
    logging.CRITICAL,
    logging.ERROR,
    logging.WARNING,
    logging.INFO,
    logging.DEBUG,
]

File = Annotated[
    pathlib.Path, typer.Argument(exists=True, dir_okay=False, resolve_path=True)
]

app = typer.Typer(no_args_is_help=True)


@app.callback()
def common(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, min=0, max=5, help="set logging level"
        ),
    ] = 0
):
    """Inspect and check gcfg configuration files."""

    if verbose == 0:
        logging.disable()
    else:
        logging.basicConfig(level=LOG_LEVELS[verbose - 1])


def _error(e: Exception):
    console.print(f"error: {e}", style="red", markup=False, soft_wrap=True)
    raise typer.Exit(1)


def _where(pos: Position) -> str:
    # The file is the same for every row.
    return f"{pos.line}:{pos.column}"


def _load_class(path: str) -> type:
    module, _, name = path.partition(":")
    if not (module and name):
        raise typer.BadParameter(f"expected 'module:Class', got '{path}'")

    try:
        return getattr(importlib.import_module(module), name)
    except (ImportError, AttributeError) as e:
        raise typer.BadParameter(f"cannot load '{path}': {e}") from e


@app.command()
def tokens(
    file: File,
    comments: Annotated[bool, typer.Option(help="Show comments")] = True,
):
    """Show the tokens of a configuration file."""

    scanner = Scanner(read.decode(file.read_bytes()), str(file), scan_comments=comments)

    table = Table()
    for column in ("Position", "Token", "Literal"):
        table.add_column(column)

    for tok in scanner:
        table.add_row(_where(tok.pos), escape(str(tok.kind)), escape(repr(tok.lit)) if tok.lit else "")

    console.print(table)

    if scanner.errors:
        _error(scanner.errors)


@app.command()
def dump(file: File):
    """Show the sections and variables of a configuration file without reading them into a class."""

    table = Table()
    for column in ("Position", "Section", "Subsection", "Variable", "Value"):
        table.add_column(column)

    try:
        for request in parser.parse(read.decode(file.read_bytes()), str(file)):
            if request.name:
                value = "(blank)" if request.blank else repr(request.value)
            else:
                value = ""

            table.add_row(
                _where(request.pos),
                escape(request.section),
                escape(request.subsection),
                escape(request.name),
                escape(value),
            )
    except GcfgError as e:
        console.print(table)
        _error(e)

    console.print(table)


@app.command()
def check(
    file: File,
    target: Annotated[
        str,
        typer.Option(
            "--target", "-t", help="Class to read into, as 'module:Class'"
        ),
    ],
    strict: Annotated[
        bool, typer.Option(help="Fail on sections and variables missing from the class")
    ] = False,
):
    """Read a configuration file into a class and show the result."""

    cls = _load_class(target)

    try:
        config: Any = cls()
        read.read_file_into(config, file, stop_on_target_not_found=strict)
    except (GcfgError, TypeError, ValueError) as e:
        _error(e)

    console.print(config)
