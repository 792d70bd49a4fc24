# Unit tests for metanames.rules.
# These tests validate width checks and rule defaults.

from __future__ import annotations

import pytest

from metanames.rules import DEFAULT_RULES, YEAR_MONTH_DAY, InvalidRuleWidthError, NameRules


def test_default_rules_use_canonical_delimiters() -> None:
    r = DEFAULT_RULES
    assert (r.part_delimiter, r.time_unit_delimiter, r.date_time_delimiter) == ("~", "-", "T")
    assert (r.attribute_start, r.attribute_end, r.attribute_delimiter) == ("{", "}", ";")
    assert (r.title_delimiter, r.suffix_delimiter) == (" ", ".")
    assert (r.top_part_digits, r.mid_part_digits, r.bottom_part_digits) == (2, 2, 2)
    assert r.date_format == YEAR_MONTH_DAY


@pytest.mark.parametrize("field", ["top_part_digits", "mid_part_digits", "bottom_part_digits"])
@pytest.mark.parametrize("width", [0, 10, -1])
def test_rules_reject_width_outside_one_to_nine(field: str, width: int) -> None:
    with pytest.raises(InvalidRuleWidthError) as info:
        NameRules(**{field: width})
    assert info.value.field == field
    assert isinstance(info.value, ValueError)


def test_rules_accept_width_bounds() -> None:
    r = NameRules(top_part_digits=1, mid_part_digits=9, bottom_part_digits=5)
    assert [r.part_width(level) for level in range(3)] == [1, 9, 5]


def test_rules_reject_multi_character_delimiter() -> None:
    with pytest.raises(ValueError):
        NameRules(part_delimiter="~~")
    with pytest.raises(ValueError):
        NameRules(suffix_delimiter="")


def test_rules_are_immutable_and_replace_revalidates() -> None:
    with pytest.raises(Exception):
        DEFAULT_RULES.top_part_digits = 3  # type: ignore[misc]

    r = DEFAULT_RULES.replace(top_part_digits=3)
    assert r.top_part_digits == 3
    assert DEFAULT_RULES.top_part_digits == 2

    with pytest.raises(InvalidRuleWidthError):
        DEFAULT_RULES.replace(bottom_part_digits=12)


@pytest.mark.parametrize(
    "changes",
    [
        {"attribute_delimiter": "}"},
        {"title_delimiter": "."},
        {"part_delimiter": "{"},
        {"time_unit_delimiter": ";"},
        {"date_time_delimiter": "-"},
    ],
)
def test_rules_reject_colliding_delimiters(changes: dict) -> None:
    with pytest.raises(ValueError, match="must differ"):
        NameRules(**changes)


def test_date_delimiters_may_reuse_suffix_delimiter() -> None:
    r = NameRules(time_unit_delimiter=".", date_time_delimiter="_")
    assert r.time_unit_delimiter == r.suffix_delimiter
