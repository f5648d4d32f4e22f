from datetime import date, datetime

import pytest
from conftest import make_activity

from stridekit.date_range import filter_by_date_range, preset_range

NOW = datetime(2024, 8, 31, 15, 30)


@pytest.fixture
def activities():
    return [
        make_activity("1", datetime(2024, 1, 1, 0, 0)),
        make_activity("2", datetime(2024, 1, 15, 23, 59)),
        make_activity("3", datetime(2024, 1, 16, 0, 0)),
    ]


def test_end_day_is_inclusive(activities):
    kept = filter_by_date_range(activities, date(2024, 1, 1), date(2024, 1, 15))

    assert [a.id for a in kept] == ["1", "2"]


def test_open_bounds(activities):
    assert [a.id for a in filter_by_date_range(activities)] == ["1", "2", "3"]
    assert [a.id for a in filter_by_date_range(activities, start=date(2024, 1, 2))] == ["2", "3"]
    assert [a.id for a in filter_by_date_range(activities, end=date(2024, 1, 1))] == ["1"]


def test_datetime_start_is_exact(activities):
    kept = filter_by_date_range(activities, start=datetime(2024, 1, 15, 23, 59))

    assert [a.id for a in kept] == ["2", "3"]


@pytest.mark.parametrize(
    "preset, expected_start",
    [
        ("3m", datetime(2024, 5, 31, 15, 30)),
        ("6m", datetime(2024, 2, 29, 15, 30)),
        ("ytd", datetime(2024, 1, 1)),
        ("1y", datetime(2023, 8, 31, 15, 30)),
    ],
)
def test_presets(preset, expected_start):
    assert preset_range(preset, now=NOW) == (expected_start, NOW)


def test_all_preset_is_unbounded():
    assert preset_range("all", now=NOW) == (None, None)


def test_unknown_preset():
    with pytest.raises(ValueError):
        preset_range("2w", now=NOW)
