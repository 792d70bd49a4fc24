# Rule set for metanames.
# Every delimiter and numeric width used by parsing and formatting lives here.
#
# Rules are immutable after construction and safe to share between threads.

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

# Date format templates.
# In a template, "-" stands for the time-unit delimiter and "T" for the
# date/time delimiter of the rule set the template is rendered with.
YEAR = "yyyy"
YEAR_MONTH = "yyyy-MM"
YEAR_MONTH_DAY = "yyyy-MM-dd"
YEAR_MONTH_DAY_HOUR = "yyyy-MM-ddTHH"
YEAR_MONTH_DAY_HOUR_MINUTE = "yyyy-MM-ddTHH-mm"
YEAR_MONTH_DAY_HOUR_MINUTE_SECOND = "yyyy-MM-ddTHH-mm-ss"

# Widths above 9 digits could overflow a 32-bit part number.
MIN_PART_DIGITS = 1
MAX_PART_DIGITS = 9


class InvalidRuleWidthError(ValueError):
    def __init__(self, field: str, value: int):
        self.field = field
        self.value = value
        super().__init__(
            f"{field} must be between {MIN_PART_DIGITS} and {MAX_PART_DIGITS}, got {value}"
        )


def _require_distinct(rules, *names: str) -> None:
    seen = {}
    for name in names:
        value = getattr(rules, name)
        if value in seen:
            raise ValueError(f"{name} and {seen[value]} must differ, both are {value!r}")
        seen[value] = name


@dataclass(frozen=True)
class NameRules:
    """Defines how names are parsed and formatted.

    Widths are minimum zero-padded digit counts for each part level.
    Delimiters must each be a single character, and no two delimiters that
    can meet in the same stretch of a name may be equal.
    """

    top_part_digits: int = 2
    mid_part_digits: int = 2
    bottom_part_digits: int = 2
    date_format: str = YEAR_MONTH_DAY

    part_delimiter: str = "~"
    time_unit_delimiter: str = "-"
    date_time_delimiter: str = "T"
    attribute_start: str = "{"
    attribute_end: str = "}"
    attribute_delimiter: str = ";"
    title_delimiter: str = " "
    suffix_delimiter: str = "."

    def __post_init__(self) -> None:
        for name in ("top_part_digits", "mid_part_digits", "bottom_part_digits"):
            value = getattr(self, name)
            if (
                not isinstance(value, int)
                or isinstance(value, bool)
                or not MIN_PART_DIGITS <= value <= MAX_PART_DIGITS
            ):
                raise InvalidRuleWidthError(name, value)

        for name in (
            "part_delimiter",
            "time_unit_delimiter",
            "date_time_delimiter",
            "attribute_start",
            "attribute_end",
            "attribute_delimiter",
            "title_delimiter",
            "suffix_delimiter",
        ):
            value = getattr(self, name)
            if not isinstance(value, str) or len(value) != 1:
                raise ValueError(f"{name} must be a single character, got {value!r}")

        # Date delimiters only appear inside a date, which may itself sit in
        # an attribute block, so they may reuse the title or suffix delimiter.
        _require_distinct(
            self,
            "part_delimiter",
            "attribute_start",
            "attribute_end",
            "attribute_delimiter",
            "title_delimiter",
            "suffix_delimiter",
        )
        _require_distinct(
            self,
            "time_unit_delimiter",
            "date_time_delimiter",
            "attribute_start",
            "attribute_end",
            "attribute_delimiter",
        )

        if not self.date_format:
            raise ValueError("date_format must not be empty")

    def part_width(self, level: int) -> int:
        # Level 0 is the top part, 2 the bottom part.
        return (self.top_part_digits, self.mid_part_digits, self.bottom_part_digits)[level]

    def replace(self, **changes) -> "NameRules":
        # Copy with changes applied; the copy is validated again.
        return dataclasses.replace(self, **changes)


DEFAULT_RULES = NameRules()
