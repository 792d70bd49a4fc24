# Whole-name parsing and formatting for metanames.
# Composes the part-prefix, date, structure and attribute parsers into
# Name, PartName and DateName values, and formats those values back.
#
# This module is pure logic and must remain side-effect free.

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from functools import total_ordering
from typing import Any, Generic, Optional, Tuple, TypeVar

from metanames.attributes import (
    EMPTY_ATTRIBUTES,
    AttributeParser,
    Attributes,
    format_attribute_block,
)
from metanames.dates import DatePrecision, format_datetime, parse_datetime_fragment
from metanames.models import ErrorKind, ParseResult
from metanames.parts import NONE, format_part_prefix, parse_part_prefix
from metanames.rules import DEFAULT_RULES, NameRules
from metanames.structure import find_parts

logger = logging.getLogger(__name__)

A = TypeVar("A")


def _format_tail(
    lead: str,
    title: str,
    attributes: Any,
    suffix: str,
    rules: NameRules,
) -> str:
    block = format_attribute_block(attributes, rules)
    # With no suffix, a title holding the suffix delimiter needs a block
    # after it, or parsing would split the title again.
    if not block and not suffix and rules.suffix_delimiter in title:
        block = rules.attribute_start + rules.attribute_end
    # The title delimiter only separates a non-empty title from a prefix.
    if title and lead:
        title = rules.title_delimiter + title
    return f"{lead}{title}{block}{suffix}"


@total_ordering
@dataclass(frozen=True, eq=False)
class Name(Generic[A]):
    """A title with optional attributes and suffix.

    Names compare and hash by title only.
    """

    title: str = ""
    attributes: Any = EMPTY_ATTRIBUTES
    suffix: str = ""

    def format(self, rules: Optional[NameRules] = None, prefix: str = "") -> str:
        rules = rules or DEFAULT_RULES
        return prefix + _format_tail("", self.title, self.attributes, self.suffix, rules)

    @classmethod
    def try_parse(
        cls,
        text: str,
        rules: NameRules = DEFAULT_RULES,
        parse_attributes: AttributeParser = Attributes.try_parse,
    ) -> "ParseResult[Name]":
        return parse_name(text, rules, parse_attributes)

    def __str__(self) -> str:
        return self.format()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Name):
            return NotImplemented
        return self.title == other.title

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Name):
            return NotImplemented
        return self.title < other.title

    def __hash__(self) -> int:
        return hash(self.title)


@total_ordering
@dataclass(frozen=True, eq=False)
class PartName(Generic[A]):
    """A name led by up to three nested part numbers, e.g. "~1~02~492 Title".

    Absent parts are NONE. Part names compare, order and hash by
    (top_part, mid_part, bottom_part) only.
    """

    top_part: int = NONE
    mid_part: int = NONE
    bottom_part: int = NONE
    title: str = ""
    attributes: Any = EMPTY_ATTRIBUTES
    suffix: str = ""

    def __post_init__(self) -> None:
        for name in ("top_part", "mid_part", "bottom_part"):
            value = getattr(self, name)
            if value != NONE and value < 0:
                raise ValueError(f"{name} must be non-negative or NONE, got {value}")
        # Parts fill top-down, so a lower level can not be set under a gap.
        if self.mid_part != NONE and self.top_part == NONE:
            raise ValueError("mid_part is set but top_part is NONE")
        if self.bottom_part != NONE and self.mid_part == NONE:
            raise ValueError("bottom_part is set but mid_part is NONE")

    @property
    def parts(self) -> Tuple[int, int, int]:
        return (self.top_part, self.mid_part, self.bottom_part)

    def format(self, rules: Optional[NameRules] = None, prefix: str = "") -> str:
        rules = rules or DEFAULT_RULES
        lead = format_part_prefix(self.top_part, self.mid_part, self.bottom_part, rules)
        return prefix + _format_tail(lead, self.title, self.attributes, self.suffix, rules)

    @classmethod
    def try_parse(
        cls,
        text: str,
        rules: NameRules = DEFAULT_RULES,
        parse_attributes: AttributeParser = Attributes.try_parse,
        require_parts: bool = False,
    ) -> "ParseResult[PartName]":
        return parse_part_name(text, rules, parse_attributes, require_parts)

    def __str__(self) -> str:
        return self.format()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PartName):
            return NotImplemented
        return self.parts == other.parts

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, PartName):
            return NotImplemented
        return self.parts < other.parts

    def __hash__(self) -> int:
        return hash(self.parts)


@total_ordering
@dataclass(frozen=True, eq=False)
class DateName(Generic[A]):
    """A name led by a date stamp, e.g. "2020-05-15T20 Title".

    precision decides how much of the date is written back out. Date names
    compare, order and hash by date only.
    """

    date: datetime
    precision: DatePrecision = DatePrecision.day
    title: str = ""
    attributes: Any = EMPTY_ATTRIBUTES
    suffix: str = ""

    def format(self, rules: Optional[NameRules] = None, prefix: str = "") -> str:
        rules = rules or DEFAULT_RULES
        lead = format_datetime(self.date, rules, self.precision.template)
        return prefix + _format_tail(lead, self.title, self.attributes, self.suffix, rules)

    @classmethod
    def try_parse(
        cls,
        text: str,
        rules: NameRules = DEFAULT_RULES,
        parse_attributes: AttributeParser = Attributes.try_parse,
    ) -> "ParseResult[DateName]":
        return parse_date_name(text, rules, parse_attributes)

    def __str__(self) -> str:
        return self.format()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DateName):
            return NotImplemented
        return self.date == other.date

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, DateName):
            return NotImplemented
        return self.date < other.date

    def __hash__(self) -> int:
        return hash(self.date)


def _is_blank(text: str) -> bool:
    return not text or text.isspace()


def _empty_input() -> ParseResult:
    return ParseResult.failure(ErrorKind.empty_input, "nothing to parse", 0)


def _skip_title_delimiter(text: str, i: int, rules: NameRules) -> int:
    # One title delimiter separates a prefix from the title; it is not
    # part of the title.
    if i < len(text) and text[i] == rules.title_delimiter:
        return i + 1
    return i


def _parse_tail(
    text: str,
    offset: int,
    rules: NameRules,
    parse_attributes: AttributeParser,
) -> ParseResult[Tuple[str, Any, str]]:
    # Title, attributes and suffix of text[offset:].
    found = find_parts(text[offset:], rules).with_offset(offset)
    if not found.ok:
        return found
    parts = found.value

    attributes: Any = EMPTY_ATTRIBUTES
    if parts.attributes is not None:
        parsed = parse_attributes(parts.attributes_text, rules)
        if not parsed.ok:
            return parsed.with_offset(offset + parts.attributes.start)
        attributes = parsed.value

    return ParseResult.success((parts.title_text, attributes, parts.suffix_text))


def parse_name(
    text: str,
    rules: NameRules = DEFAULT_RULES,
    parse_attributes: AttributeParser = Attributes.try_parse,
) -> ParseResult[Name]:
    """Parse text as a plain Name: title, attribute block, suffix."""
    if _is_blank(text):
        return _empty_input()

    tail = _parse_tail(text, 0, rules, parse_attributes)
    if not tail.ok:
        return tail
    title, attributes, suffix = tail.value
    return ParseResult.success(Name(title=title, attributes=attributes, suffix=suffix))


def parse_part_name(
    text: str,
    rules: NameRules = DEFAULT_RULES,
    parse_attributes: AttributeParser = Attributes.try_parse,
    require_parts: bool = False,
) -> ParseResult[PartName]:
    """Parse text as a PartName.

    Without a leading part prefix the result is a PartName with every part
    NONE, unless require_parts is set.
    """
    if _is_blank(text):
        return _empty_input()

    prefix = parse_part_prefix(text, rules, required=require_parts)
    if not prefix.ok:
        return prefix
    p = prefix.value

    i = p.consumed
    if p.present:
        i = _skip_title_delimiter(text, i, rules)

    tail = _parse_tail(text, i, rules, parse_attributes)
    if not tail.ok:
        return tail
    title, attributes, suffix = tail.value
    return ParseResult.success(
        PartName(
            top_part=p.top,
            mid_part=p.mid,
            bottom_part=p.bottom,
            title=title,
            attributes=attributes,
            suffix=suffix,
        )
    )


def parse_date_name(
    text: str,
    rules: NameRules = DEFAULT_RULES,
    parse_attributes: AttributeParser = Attributes.try_parse,
) -> ParseResult[DateName]:
    """Parse text as a DateName. At least the year is required."""
    if _is_blank(text):
        return _empty_input()

    fragment = parse_datetime_fragment(text, rules)
    if not fragment.ok:
        return fragment
    f = fragment.value

    i = _skip_title_delimiter(text, f.consumed, rules)
    tail = _parse_tail(text, i, rules, parse_attributes)
    if not tail.ok:
        return tail
    title, attributes, suffix = tail.value
    return ParseResult.success(
        DateName(
            date=f.value,
            precision=f.precision,
            title=title,
            attributes=attributes,
            suffix=suffix,
        )
    )


def format_name(name: Any, rules: NameRules = DEFAULT_RULES, prefix: str = "") -> str:
    # Works for Name, PartName and DateName alike.
    return name.format(rules, prefix)
