# Date/time fragment parsing and formatting for metanames.
# The grammar is fixed and read strictly left to right:
#   yyyy [-MM [-dd [THH [-mm [-ss]]]]]
# where "-" and "T" are the delimiters configured on the rule set.
#
# This module is pure logic and must remain side-effect free.

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from metanames.models import ErrorKind, ParseResult
from metanames.rules import (
    DEFAULT_RULES,
    YEAR,
    YEAR_MONTH,
    YEAR_MONTH_DAY,
    YEAR_MONTH_DAY_HOUR,
    YEAR_MONTH_DAY_HOUR_MINUTE,
    YEAR_MONTH_DAY_HOUR_MINUTE_SECOND,
    NameRules,
)

logger = logging.getLogger(__name__)

# Template tokens; anything else in a template is copied as-is,
# except "-" and "T" which are swapped for the rule set's delimiters.
_TEMPLATE_TOKEN_RE = re.compile(r"yyyy|MM|dd|HH|mm|ss|.", re.DOTALL)


class DatePrecision(int, Enum):
    year = 1
    month = 2
    day = 3
    hour = 4
    minute = 5
    second = 6

    @property
    def template(self) -> str:
        return _PRECISION_TEMPLATES[self]

    @property
    def length(self) -> int:
        # Characters a fragment of this precision occupies.
        return _PRECISION_LENGTHS[self]


_PRECISION_TEMPLATES = {
    DatePrecision.year: YEAR,
    DatePrecision.month: YEAR_MONTH,
    DatePrecision.day: YEAR_MONTH_DAY,
    DatePrecision.hour: YEAR_MONTH_DAY_HOUR,
    DatePrecision.minute: YEAR_MONTH_DAY_HOUR_MINUTE,
    DatePrecision.second: YEAR_MONTH_DAY_HOUR_MINUTE_SECOND,
}

_PRECISION_LENGTHS = {
    DatePrecision.year: 4,
    DatePrecision.month: 7,
    DatePrecision.day: 10,
    DatePrecision.hour: 13,
    DatePrecision.minute: 16,
    DatePrecision.second: 19,
}

# (field, offset of the delimiter before it, rule attribute of that delimiter)
_FIELDS = (
    ("month", 4, "time_unit_delimiter"),
    ("day", 7, "time_unit_delimiter"),
    ("hour", 10, "date_time_delimiter"),
    ("minute", 13, "time_unit_delimiter"),
    ("second", 16, "time_unit_delimiter"),
)


@dataclass(frozen=True)
class DateFragment:
    value: datetime
    consumed: int
    precision: DatePrecision


def _is_digits(s: str) -> bool:
    # ASCII only; str.isdigit() would also accept superscripts and other scripts.
    return bool(s) and all("0" <= ch <= "9" for ch in s)


def parse_datetime_fragment(
    text: str,
    rules: NameRules = DEFAULT_RULES,
) -> ParseResult[DateFragment]:
    """Parse a date/time fragment at the start of text.

    Parsing stops quietly at the first missing delimiter; fields that were
    never reached default to month=1, day=1 and midnight. A delimiter that is
    present but not followed by two digits is an error. The fragment's
    ``consumed`` count lets callers carry on with the rest of the text.
    """
    if len(text) < 4 or not _is_digits(text[:4]):
        logger.debug("Invalid year in date fragment %r", text)
        return ParseResult.failure(
            ErrorKind.invalid_date_component,
            "year must be 4 decimal digits",
            0,
        )

    values = {"year": int(text[:4]), "month": 1, "day": 1, "hour": 0, "minute": 0, "second": 0}
    consumed = 4
    precision = DatePrecision.year

    for name, offset, delimiter_attr in _FIELDS:
        if len(text) < offset + 3 or text[offset] != getattr(rules, delimiter_attr):
            break
        digits = text[offset + 1 : offset + 3]
        if not _is_digits(digits):
            logger.debug("Invalid %s in date fragment %r", name, text)
            return ParseResult.failure(
                ErrorKind.invalid_date_component,
                f"{name} must be 2 decimal digits",
                offset + 1,
            )
        values[name] = int(digits)
        consumed = offset + 3
        precision = DatePrecision(precision + 1)

    try:
        value = datetime(**values)
    except ValueError as exc:
        logger.debug("Out of range date fragment %r: %s", text, exc)
        return ParseResult.failure(
            ErrorKind.invalid_date_component,
            f"date out of range: {exc}",
            0,
        )

    return ParseResult.success(DateFragment(value=value, consumed=consumed, precision=precision))


def format_datetime(
    value: datetime,
    rules: NameRules = DEFAULT_RULES,
    template: Optional[str] = None,
) -> str:
    # Render value with a template such as "yyyy-MM-ddTHH".
    # Defaults to the rule set's date format.
    if template is None:
        template = rules.date_format

    out = []
    for token in _TEMPLATE_TOKEN_RE.findall(template):
        if token == "yyyy":
            out.append(f"{value.year:04d}")
        elif token == "MM":
            out.append(f"{value.month:02d}")
        elif token == "dd":
            out.append(f"{value.day:02d}")
        elif token == "HH":
            out.append(f"{value.hour:02d}")
        elif token == "mm":
            out.append(f"{value.minute:02d}")
        elif token == "ss":
            out.append(f"{value.second:02d}")
        elif token == "-":
            out.append(rules.time_unit_delimiter)
        elif token == "T":
            out.append(rules.date_time_delimiter)
        else:
            out.append(token)
    return "".join(out)
