# Core orchestration logic for metanames.
# This file coordinates parsing, normalizing and printing a batch of
# names for the cli.
#
# It intentionally contains no cli parsing and no grammar logic.

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Iterable, List, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from metanames.attributes import EMPTY_ATTRIBUTES, Attributes, DictAttributes, MusicAttributes
from metanames.dates import format_datetime
from metanames.models import NameKind, Options, ParseResult, Schema
from metanames.naming import DateName, PartName, parse_date_name, parse_name, parse_part_name
from metanames.parts import NONE

console = Console()

_PARSERS = {
    Schema.general: Attributes.try_parse,
    Schema.music: MusicAttributes.try_parse,
    Schema.dict: DictAttributes.try_parse,
}


# Simple counters used for the summary block.
@dataclass
class Counters:
    parsed: int = 0
    changed: int = 0
    unchanged: int = 0
    failed: int = 0


def parse_one(text: str, opts: Options) -> ParseResult:
    # Parse a single string according to the selected kind and schema.
    parse_attributes = _PARSERS[opts.schema]
    if opts.kind is NameKind.part:
        return parse_part_name(text, opts.rules, parse_attributes)
    if opts.kind is NameKind.date:
        return parse_date_name(text, opts.rules, parse_attributes)
    return parse_name(text, opts.rules, parse_attributes)


def run_parse(texts: Iterable[str], opts: Options) -> Counters:
    # Print the fields of each parsed name.
    # A bad name is reported and never stops the batch.
    counters = Counters()
    for text in texts:
        result = parse_one(text, opts)
        if not result.ok:
            counters.failed += 1
            _print_failure(text, result)
            continue
        counters.parsed += 1
        console.print(_name_table(text, result.value, opts))
    return counters


def run_normalize(texts: Iterable[str], opts: Options) -> Counters:
    # Print the canonical form of each name, formatted with the same rules.
    counters = Counters()
    for text in texts:
        result = parse_one(text, opts)
        if not result.ok:
            counters.failed += 1
            _print_failure(text, result)
            continue
        counters.parsed += 1
        canonical = result.value.format(opts.rules)
        if canonical == text:
            counters.unchanged += 1
            console.print(f"Unchanged: {escape(text)}")
        else:
            counters.changed += 1
            console.print(f"{escape(text)} -> {escape(canonical)}")
    _print_summary(counters)
    return counters


def _name_table(text: str, name: Any, opts: Options) -> Table:
    table = Table(title=escape(text), show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for field, value in _name_rows(name, opts):
        table.add_row(field, escape(value))
    return table


def _name_rows(name: Any, opts: Options) -> List[Tuple[str, str]]:
    rows: List[Tuple[str, str]] = []
    if isinstance(name, PartName):
        for label, value in zip(("Top part", "Mid part", "Bottom part"), name.parts):
            rows.append((label, str(value) if value != NONE else "-"))
    elif isinstance(name, DateName):
        rows.append(("Date", format_datetime(name.date, opts.rules, name.precision.template)))
    rows.append(("Title", name.title))
    rows.extend(_attribute_rows(name.attributes, opts))
    rows.append(("Suffix", name.suffix or "-"))
    return rows


def _attribute_rows(attributes: Any, opts: Options) -> List[Tuple[str, str]]:
    if attributes is EMPTY_ATTRIBUTES:
        return [("Attributes", "-")]
    if isinstance(attributes, DictAttributes):
        return [(f"Attribute {key}", attributes[key]) for key in attributes]

    rows = []
    for f in dataclasses.fields(attributes):
        value = getattr(attributes, f.name)
        if value is None or value == "" or value is False:
            continue
        if f.name == "date":
            value = format_datetime(value, opts.rules)
        rows.append((f.name.replace("_", " ").capitalize(), str(value)))
    return rows or [("Attributes", "{}")]


def _print_failure(text: str, result: ParseResult) -> None:
    console.print(f"[red]FAILED:[/red] {escape(text)} ({escape(str(result.error))})")


def _print_summary(counters: Counters) -> None:
    # Summary block printed at the end of every normalize run.
    console.print()
    console.print("[bold]Summary[/bold]")
    console.print(f"Parsed:    {counters.parsed}")
    console.print(f"Changed:   {counters.changed}")
    console.print(f"Unchanged: {counters.unchanged}")
    console.print(f"Failed:    {counters.failed}")
