"""Tests for expense aggregations."""

from datetime import timedelta
from decimal import Decimal

import pytest

from conftest import NOW, TODAY, make_expense
from expensetrack.domain import stats
from expensetrack.domain.entities import ArchiveRange, CategoryTotal


def _expenses(*rows):
    return [
        make_expense(id=f"{index:032x}", category=category, amount=Decimal(amount), date=day)
        for index, (category, amount, day) in enumerate(rows)
    ]


SAMPLE = _expenses(
    ("Food", "3.50", TODAY),
    ("Transport", "15.00", TODAY - timedelta(days=1)),
    ("Entertainment", "12.50", TODAY - timedelta(days=2)),
    ("Food", "45.75", TODAY - timedelta(days=3)),
    ("Food", "-5.00", TODAY - timedelta(days=3)),
)


class TestCategoryBreakdown:
    def test_groups_and_sorts_by_total(self):
        assert stats.category_breakdown(SAMPLE) == [
            CategoryTotal("Food", Decimal("44.25")),
            CategoryTotal("Transport", Decimal("15.00")),
            CategoryTotal("Entertainment", Decimal("12.50")),
        ]

    def test_conserves_total(self):
        breakdown = stats.category_breakdown(SAMPLE)
        assert sum(item.total for item in breakdown) == sum(e.amount for e in SAMPLE)

    def test_ties_sorted_by_name(self):
        expenses = _expenses(("Travel", "5", TODAY), ("Housing", "5", TODAY))
        assert [item.category for item in stats.category_breakdown(expenses)] == [
            "Housing",
            "Travel",
        ]

    def test_is_deterministic_for_reordered_input(self):
        assert stats.category_breakdown(SAMPLE) == stats.category_breakdown(list(reversed(SAMPLE)))

    def test_empty(self):
        assert stats.category_breakdown([]) == []


class TestTotals:
    def test_total_and_daily_average(self):
        total, average = stats.total_and_daily_average(SAMPLE)

        assert total == Decimal("71.75")
        # four distinct days
        assert average == Decimal("71.75") / 4

    def test_single_day(self):
        expenses = _expenses(("Food", "2", TODAY), ("Food", "4", TODAY))
        assert stats.total_and_daily_average(expenses) == (Decimal("6"), Decimal("6"))

    def test_empty(self):
        assert stats.total_and_daily_average([]) == (Decimal("0"), Decimal("0"))

    def test_spending_stats(self):
        result = stats.spending_stats(SAMPLE)

        assert result.count == 5
        assert result.total == Decimal("71.75")
        assert result.breakdown[0].category == "Food"


class TestPieAngles:
    def test_spans_sum_to_full_circle(self):
        expenses = _expenses(
            ("Food", "3.50", TODAY),
            ("Transport", "15.00", TODAY),
            ("Other", "0.01", TODAY),
            ("Food", "1234.56", TODAY),
        )
        slices = stats.pie_angles(expenses)

        assert sum(s.span for s in slices) == pytest.approx(360.0)
        assert slices[0].start_angle == 0.0
        assert slices[-1].end_angle == 360.0

    def test_slices_abut(self):
        slices = stats.pie_angles(SAMPLE[:4])
        for previous, current in zip(slices, slices[1:]):
            assert current.start_angle == previous.end_angle

    def test_follows_input_order_and_proportions(self):
        expenses = _expenses(("Food", "1", TODAY), ("Transport", "3", TODAY))
        slices = stats.pie_angles(expenses)

        assert [s.category for s in slices] == ["Food", "Transport"]
        assert slices[0].end_angle == pytest.approx(90.0)
        assert slices[1].span == pytest.approx(270.0)

    def test_refund_among_expenses(self):
        expenses = _expenses(
            ("Food", "10", TODAY),
            ("Shopping", "-2", TODAY),
            ("Transport", "4", TODAY),
        )
        slices = stats.pie_angles(expenses)

        assert [s.category for s in slices] == ["Food", "Shopping", "Transport"]
        assert slices[0].start_angle == 0.0
        assert slices[1].span == pytest.approx(-60.0)
        for previous, current in zip(slices, slices[1:]):
            assert current.start_angle == previous.end_angle
        assert slices[-1].end_angle == 360.0
        assert sum(s.span for s in slices) == pytest.approx(360.0)

    def test_zero_total_yields_no_slices(self):
        expenses = _expenses(("Food", "5", TODAY), ("Food", "-5", TODAY))
        assert stats.pie_angles(expenses) == []
        assert stats.pie_angles([]) == []

    def test_slice_at_angle(self):
        expenses = _expenses(("Food", "1", TODAY), ("Transport", "3", TODAY))
        slices = stats.pie_angles(expenses)

        assert stats.slice_at_angle(slices, 45) == "Food"
        assert stats.slice_at_angle(slices, 90) == "Transport"
        assert stats.slice_at_angle(slices, -10) == "Transport"
        assert stats.slice_at_angle([], 10) is None


class TestTimeline:
    def test_weekly_timeline_filters_archived_and_old(self):
        recent = make_expense(id="1" * 32, date=TODAY - timedelta(days=7))
        archived = make_expense(id="2" * 32, date=TODAY, is_archived=True)
        old = make_expense(id="3" * 32, date=TODAY - timedelta(days=8))

        assert stats.weekly_timeline([recent, archived, old], NOW) == [recent]

    def test_daily_category_totals(self):
        cells = stats.daily_category_totals(SAMPLE)

        assert [(c.day, c.category, c.total) for c in cells] == [
            (TODAY - timedelta(days=3), "Food", Decimal("40.75")),
            (TODAY - timedelta(days=2), "Entertainment", Decimal("12.50")),
            (TODAY - timedelta(days=1), "Transport", Decimal("15.00")),
            (TODAY, "Food", Decimal("3.50")),
        ]


class TestRanges:
    def test_range_start(self):
        assert stats.range_start(ArchiveRange.WEEK, NOW) == TODAY - timedelta(days=7)
        assert stats.range_start(ArchiveRange.MONTH, NOW) == TODAY.replace(month=7)
        assert stats.range_start(ArchiveRange.YEAR, NOW) == TODAY.replace(year=2024)
        assert stats.range_start(ArchiveRange.ALL, NOW) is None

    def test_archive_cutoff(self):
        assert stats.archive_cutoff(NOW) == TODAY - timedelta(days=7)
        assert stats.archive_cutoff(TODAY) == TODAY - timedelta(days=7)
