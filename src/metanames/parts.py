# Part-number prefix parsing and formatting for metanames.
# A prefix is up to three nested numbers, e.g. "~1~02~492", read in
# top, mid, bottom order.
#
# This module is pure logic and must remain side-effect free.

from __future__ import annotations

import logging
from dataclasses import dataclass

from metanames.models import ErrorKind, ParseResult
from metanames.rules import DEFAULT_RULES, MAX_PART_DIGITS, NameRules

logger = logging.getLogger(__name__)

# Marks an absent part level. Parsed parts are never negative,
# so -1 can not be confused with a real number.
NONE = -1

_LEVELS = ("top", "mid", "bottom")


@dataclass(frozen=True)
class PartPrefix:
    top: int = NONE
    mid: int = NONE
    bottom: int = NONE
    # Characters of the input the prefix occupies.
    consumed: int = 0

    @property
    def present(self) -> bool:
        return self.top != NONE


def _digits_end(text: str, start: int) -> int:
    i = start
    while i < len(text) and "0" <= text[i] <= "9":
        i += 1
    return i


def parse_part_prefix(
    text: str,
    rules: NameRules = DEFAULT_RULES,
    required: bool = False,
) -> ParseResult[PartPrefix]:
    """Parse the leading part-number prefix of text.

    Each level is the part delimiter followed by one or more digits. A
    delimiter that is not followed by a digit ends the prefix; it and
    everything after it belong to the remainder. Fewer groups fill the
    top-most levels first, so "~492" is top part 492.

    With required=True, text that does not open with a delimiter and a digit
    is rejected as a malformed prefix instead of yielding an empty one.
    """
    delimiter = rules.part_delimiter
    values = [NONE, NONE, NONE]
    i = 0

    for level in range(len(_LEVELS)):
        start = i + 1
        if (
            i >= len(text)
            or text[i] != delimiter
            or start >= len(text)
            or not "0" <= text[start] <= "9"
        ):
            break
        end = _digits_end(text, start)
        if end - start > MAX_PART_DIGITS:
            logger.debug("Part number too long in %r", text)
            return ParseResult.failure(
                ErrorKind.part_overflow,
                f"{_LEVELS[level]} part exceeds {MAX_PART_DIGITS} digits",
                start,
            )
        values[level] = int(text[start:end])
        i = end

    if required and values[0] == NONE:
        logger.debug("Missing required part prefix in %r", text)
        return ParseResult.failure(
            ErrorKind.malformed_part_prefix,
            f"expected {delimiter!r} followed by a digit",
            0,
        )

    return ParseResult.success(PartPrefix(top=values[0], mid=values[1], bottom=values[2], consumed=i))


def format_part_prefix(
    top: int,
    mid: int = NONE,
    bottom: int = NONE,
    rules: NameRules = DEFAULT_RULES,
) -> str:
    # Zero-padding is a minimum width; wider numbers are written in full.
    out = []
    for level, value in enumerate((top, mid, bottom)):
        if value != NONE:
            out.append(f"{rules.part_delimiter}{value:0{rules.part_width(level)}d}")
    return "".join(out)
