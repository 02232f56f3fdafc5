from datetime import datetime

import pytest

from simple_cron.matcher import FieldKind, field_kind, is_valid_field, match_field, should_run, time_components


@pytest.mark.parametrize("value", [0, 1, 7, 31, 59, 1000])
def test_wildcard_matches_everything(value: int) -> None:
    assert match_field("*", value)


def test_list_matches_listed_values_only() -> None:
    assert match_field("1,5,10", 1)
    assert match_field("1,5,10", 5)
    assert match_field("1,5,10", 10)
    assert not match_field("1,5,10", 2)


def test_list_ignores_non_numeric_items() -> None:
    assert match_field("x,3", 3)
    assert not match_field("x,3", 0)


def test_range_is_inclusive() -> None:
    assert not match_field("10-20", 9)
    assert match_field("10-20", 10)
    assert match_field("10-20", 15)
    assert match_field("10-20", 20)
    assert not match_field("10-20", 21)


@pytest.mark.parametrize("value", [0, 5, 10, 20, 25])
def test_reversed_range_never_matches(value: int) -> None:
    assert not match_field("20-10", value)


@pytest.mark.parametrize("value, expected", [(0, True), (5, True), (10, True), (3, False), (11, False)])
def test_step_matches_multiples(value: int, expected: bool) -> None:
    assert match_field("*/5", value) is expected


@pytest.mark.parametrize("value", range(0, 60))
def test_step_base_is_ignored(value: int) -> None:
    assert match_field("10/5", value) == match_field("*/5", value)


def test_step_with_zero_or_invalid_divisor_never_matches() -> None:
    assert not match_field("*/0", 0)
    assert not match_field("*/x", 0)


def test_literal_matches_exact_value() -> None:
    assert match_field("7", 7)
    assert match_field("07", 7)
    assert not match_field("7", 8)


@pytest.mark.parametrize("field", ["abc", "", "7.0", "٣"])
def test_non_numeric_literal_never_matches(field: str) -> None:
    assert not match_field(field, 3)
    assert not match_field(field, 0)


def test_list_takes_priority_over_range() -> None:
    assert field_kind("1-5,7") is FieldKind.LIST
    assert match_field("1-5,7", 7)
    assert not match_field("1-5,7", 3)


def test_range_takes_priority_over_step() -> None:
    assert field_kind("0-10/2") is FieldKind.RANGE


def test_is_valid_field() -> None:
    for field in ["*", "1,2,3", "1-5", "*/5", "10/5", "42"]:
        assert is_valid_field(field), field
    for field in ["abc", "1,x", "1-", "1-2-3", "*/0", "a/5", "*/5/2", ""]:
        assert not is_valid_field(field), field


def test_time_components_use_sunday_as_zero() -> None:
    sunday = datetime(2024, 1, 7, 10, 30, 15)
    assert time_components(sunday) == (15, 30, 10, 7, 1, 0)
    saturday = datetime(2024, 1, 13, 0, 0, 0)
    assert time_components(saturday)[5] == 6


def test_should_run_requires_all_fields() -> None:
    when = datetime(2024, 1, 7, 10, 30, 15)
    assert should_run(["15", "30", "10", "7", "1", "0"], when)
    assert should_run(["*/5", "*", "9-17", "*", "1,2", "0"], when)
    assert not should_run(["15", "30", "10", "7", "1", "1"], when)
    assert not should_run(["*/4", "*", "*", "*", "*", "*"], when)
