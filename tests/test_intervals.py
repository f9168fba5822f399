import pytest

from plga_calendar.domain import Activity, DateWindow, ValidationError, normalize_range, parse_day, sort_activities


def _activity(activity_id: str, start_date: str, start_time: str = "", created_at: str = "2025-01-01T00:00:00.000000Z"):
    return Activity(
        id=activity_id,
        start_date=start_date,
        end_date=start_date,
        title=activity_id,
        created_at=created_at,
        start_time=start_time,
    )


def test_normalize_range_defaults_missing_end_to_start():
    assert normalize_range("2025-03-10", None) == ("2025-03-10", "2025-03-10")
    assert normalize_range("2025-03-10", "") == ("2025-03-10", "2025-03-10")


def test_normalize_range_clamps_inverted_range():
    assert normalize_range("2025-03-10", "2025-03-05") == ("2025-03-10", "2025-03-10")


def test_normalize_range_keeps_valid_range():
    assert normalize_range("2025-03-10", "2025-04-02") == ("2025-03-10", "2025-04-02")


@pytest.mark.parametrize(
    "month, expected_end",
    [
        ("2024-02", "2024-02-29"),
        ("2023-02", "2023-02-28"),
        ("2000-02", "2000-02-29"),
        ("1900-02", "1900-02-28"),
        ("2025-04", "2025-04-30"),
        ("2025-12", "2025-12-31"),
    ],
)
def test_month_window_uses_calendar_month_length(month, expected_end):
    window = DateWindow.for_month(month)
    assert window.start == f"{month}-01"
    assert window.end == expected_end


@pytest.mark.parametrize("month", ["2025-13", "2025-00", "2025-2", "March", "", "2025-02-01"])
def test_month_window_rejects_malformed_month(month):
    with pytest.raises(ValidationError):
        DateWindow.for_month(month)


@pytest.mark.parametrize("day", ["2025-02-30", "2025-2-01", "20250201", "tomorrow"])
def test_parse_day_rejects_invalid_dates(day):
    with pytest.raises(ValidationError):
        parse_day(day)


def test_day_window_contains_only_that_day():
    window = DateWindow.for_day("2025-02-01")
    assert window.contains("2025-02-01")
    assert not window.contains("2025-01-31")
    assert not window.contains("2025-02-02")


def test_overlap_includes_intervals_crossing_window_edges():
    window = DateWindow.for_month("2025-02")
    assert window.overlaps("2025-01-30", "2025-02-02")
    assert window.overlaps("2025-02-27", "2025-03-03")
    assert window.overlaps("2025-01-01", "2025-12-31")
    assert window.overlaps("2025-02-28", "2025-02-28")


def test_overlap_excludes_disjoint_intervals():
    window = DateWindow.for_month("2025-02")
    assert not window.overlaps("2025-01-01", "2025-01-31")
    assert not window.overlaps("2025-03-01", "2025-03-02")


def test_sort_puts_untimed_activities_first_then_created_at():
    later_timed = _activity("b", "2025-03-10", "09:00", "2025-01-01T00:00:00.000001Z")
    untimed = _activity("a", "2025-03-10", "", "2025-01-02T00:00:00.000000Z")
    earlier_day = _activity("c", "2025-03-09", "18:00")
    same_slot_first = _activity("d", "2025-03-10", "09:00", "2025-01-01T00:00:00.000000Z")

    ordered = sort_activities([later_timed, untimed, earlier_day, same_slot_first])

    assert [item.id for item in ordered] == ["c", "a", "d", "b"]
