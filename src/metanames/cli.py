# Command-line interface definition for metanames.
# This file is responsible only for argument parsing, validation,
# and dispatch into core application logic.
#
# Names are read from the arguments only; nothing here touches the filesystem.

from __future__ import annotations

from typing import List

import typer
from rich.console import Console

from metanames import __version__
from metanames.core import run_normalize, run_parse
from metanames.logs import setup_logging
from metanames.models import NameKind, Options, Schema
from metanames.rules import YEAR_MONTH_DAY, NameRules

app = typer.Typer(
    add_completion=False,
    help="Parse and format names carrying part numbers, dates and {key=value} attributes.",
)
console = Console()

# Shared option declarations for the parse and normalize commands.
_TEXTS = typer.Argument(..., help="Names to process, e.g. '~01~02 Title{a=Author}.flac'.")
_KIND = typer.Option(
    NameKind.part, "--kind",
    help="What leads the name: part numbers, a date, or nothing.",
    rich_help_panel="Grammar",
)
_SCHEMA = typer.Option(
    Schema.general, "--schema",
    help="How to read the attribute block.",
    rich_help_panel="Grammar",
)
_TOP_DIGITS = typer.Option(
    2, "--top-digits",
    help="Minimum digits written for the top part (1-9).",
    rich_help_panel="Rules",
)
_MID_DIGITS = typer.Option(
    2, "--mid-digits",
    help="Minimum digits written for the mid part (1-9).",
    rich_help_panel="Rules",
)
_BOTTOM_DIGITS = typer.Option(
    2, "--bottom-digits",
    help="Minimum digits written for the bottom part (1-9).",
    rich_help_panel="Rules",
)
_DATE_FORMAT = typer.Option(
    YEAR_MONTH_DAY, "--date-format",
    help="Template for writing attribute dates, e.g. yyyy-MM-ddTHH-mm.",
    rich_help_panel="Rules",
)
_VERBOSE = typer.Option(
    False, "--verbose", "-v",
    help="Log why names fail to parse.",
)


def _build_options(
    kind: NameKind,
    schema: Schema,
    top_digits: int,
    mid_digits: int,
    bottom_digits: int,
    date_format: str,
) -> Options:
    # Rule validation errors become usage errors.
    try:
        rules = NameRules(
            top_part_digits=top_digits,
            mid_part_digits=mid_digits,
            bottom_part_digits=bottom_digits,
            date_format=date_format,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    return Options(kind=kind, schema=schema, rules=rules)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version",
        help="Show version and exit.",
    ),
):
    # Handle version early and exit cleanly.
    if version:
        console.print(__version__)
        raise typer.Exit(code=0)
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit(code=0)


@app.command(help="Show the fields parsed out of each name.")
def parse(
    texts: List[str] = _TEXTS,
    kind: NameKind = _KIND,
    schema: Schema = _SCHEMA,
    top_digits: int = _TOP_DIGITS,
    mid_digits: int = _MID_DIGITS,
    bottom_digits: int = _BOTTOM_DIGITS,
    date_format: str = _DATE_FORMAT,
    verbose: bool = _VERBOSE,
):
    setup_logging(verbose)
    opts = _build_options(kind, schema, top_digits, mid_digits, bottom_digits, date_format)
    counters = run_parse(texts, opts)
    if counters.failed:
        raise typer.Exit(code=1)


@app.command(help="Print each name in its canonical form.")
def normalize(
    texts: List[str] = _TEXTS,
    kind: NameKind = _KIND,
    schema: Schema = _SCHEMA,
    top_digits: int = _TOP_DIGITS,
    mid_digits: int = _MID_DIGITS,
    bottom_digits: int = _BOTTOM_DIGITS,
    date_format: str = _DATE_FORMAT,
    verbose: bool = _VERBOSE,
):
    setup_logging(verbose)
    opts = _build_options(kind, schema, top_digits, mid_digits, bottom_digits, date_format)
    counters = run_normalize(texts, opts)
    if counters.failed:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
