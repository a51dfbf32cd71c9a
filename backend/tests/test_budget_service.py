"""Tests for budget-vs-actual and spending insight calculations."""

import math

import pytest
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from app.models.budget import Budget
from app.models.transaction import Transaction
from app.schemas.budget import BudgetStatus, ChangeDirection
from app.services.budget_service import (
    round2,
    month_bounds,
    previous_month,
    classify_budget_status,
    classify_change,
    compute_budget_report,
    compute_insights,
    get_month_category_totals,
    get_budget_status,
    get_budgets_with_spent,
    get_spending_insights,
)

OWNER = "user-1"


def budget(category="Food", amount="500", month=6, year=2024):
    return Budget(owner=OWNER, category=category, amount=Decimal(amount), month=month, year=year)


def expense(category, amount, occurred_on, is_income=False):
    return Transaction(
        owner=OWNER,
        category=category,
        amount=Decimal(amount),
        occurred_on=occurred_on,
        is_income=is_income,
        tags=[]
    )


class TestDateHelpers:
    """Test month window helpers."""

    def test_month_bounds_inclusive(self):
        """Window should span the first to the last instant of the month."""
        start, end = month_bounds(2024, 2)
        assert start == datetime(2024, 2, 1)
        assert end.date() == date(2024, 2, 29)
        assert (end.hour, end.minute, end.second) == (23, 59, 59)

    def test_month_bounds_december(self):
        start, end = month_bounds(2023, 12)
        assert start == datetime(2023, 12, 1)
        assert end.date() == date(2023, 12, 31)

    def test_previous_month_rolls_over_year(self):
        """January's previous month is December of the prior year."""
        assert previous_month(2024, 1) == (2023, 12)
        assert previous_month(2024, 7) == (2024, 6)

    def test_round2(self):
        assert round2(66.6666) == 66.67
        assert round2(84) == 84.0
        assert round2(2.675) == 2.68

    def test_round2_large_values(self):
        """Values far beyond the default decimal precision still round."""
        assert round2(1e27) == 1e27
        assert round2(-1e300) == -1e300

    def test_round2_non_finite(self):
        assert round2(float("inf")) == float("inf")
        assert math.isnan(round2(float("nan")))


class TestClassification:
    """Test status and direction thresholds."""

    @pytest.mark.parametrize("pct,expected", [
        (0, BudgetStatus.safe),
        (59.99, BudgetStatus.safe),
        (60, BudgetStatus.caution),
        (79.99, BudgetStatus.caution),
        (80, BudgetStatus.warning),
        (99.99, BudgetStatus.warning),
        (100, BudgetStatus.over),
        (250, BudgetStatus.over),
    ])
    def test_budget_status_boundaries(self, pct, expected):
        """Boundaries are closed: 80 is warning, 100 is over."""
        assert classify_budget_status(pct) == expected

    @pytest.mark.parametrize("pct,expected", [
        (10, ChangeDirection.stable),
        (10.01, ChangeDirection.increase),
        (-10, ChangeDirection.stable),
        (-10.01, ChangeDirection.decrease),
        (0, ChangeDirection.stable),
    ])
    def test_change_direction_dead_zone(self, pct, expected):
        assert classify_change(pct) == expected


class TestBudgetReport:
    """Test compute_budget_report."""

    def test_empty_budgets(self):
        """No budgets should give no reports."""
        assert compute_budget_report([], [expense("Food", "10", datetime(2024, 6, 1))]) == []

    def test_no_matching_transactions(self):
        """Budget with nothing spent is safe at 0%."""
        report = compute_budget_report([budget()], [])[0]
        assert report.spent_amount == 0
        assert report.percentage_spent == 0
        assert report.remaining_amount == 500
        assert report.status == BudgetStatus.safe

    def test_food_scenario(self):
        """Three June expenses count, the May one does not."""
        transactions = [
            expense("Food", "150.00", datetime(2024, 6, 3, 12, 30)),
            expense("Food", "200.00", datetime(2024, 6, 15)),
            expense("Food", "70.00", datetime(2024, 6, 30, 23, 59, 59)),
            expense("Food", "50.00", datetime(2024, 5, 31, 23, 59)),
        ]

        report = compute_budget_report([budget()], transactions)[0]

        assert report.category == "Food"
        assert report.budget_amount == 500
        assert report.spent_amount == 420
        assert report.remaining_amount == 80
        assert report.percentage_spent == 84.00
        assert report.status == BudgetStatus.warning
        assert (report.month, report.year) == (6, 2024)

    def test_ignores_income_and_other_categories(self):
        transactions = [
            expense("Food", "100", datetime(2024, 6, 10), is_income=True),
            expense("Rent", "900", datetime(2024, 6, 1)),
            expense("Food", "25", datetime(2024, 6, 10)),
        ]

        report = compute_budget_report([budget()], transactions)[0]
        assert report.spent_amount == 25

    def test_date_only_values_accepted(self):
        report = compute_budget_report([budget()], [expense("Food", "10", date(2024, 6, 1))])[0]
        assert report.spent_amount == 10

    def test_timezone_aware_values_accepted(self):
        """Aware datetimes are compared in UTC against the month window."""
        transactions = [
            expense("Food", "10", datetime(2024, 6, 3, 12, 0, tzinfo=timezone.utc)),
            # 2024-07-01 01:00 at UTC+2 is still June 30th in UTC
            expense("Food", "5", datetime(2024, 7, 1, 1, 0, tzinfo=timezone(timedelta(hours=2)))),
            # 2024-06-01 01:00 at UTC+3 is May 31st in UTC
            expense("Food", "7", datetime(2024, 6, 1, 1, 0, tzinfo=timezone(timedelta(hours=3)))),
        ]

        report = compute_budget_report([budget()], transactions)[0]
        assert report.spent_amount == 15

    def test_exactly_80_percent_is_warning(self):
        report = compute_budget_report([budget()], [expense("Food", "400", datetime(2024, 6, 5))])[0]
        assert report.percentage_spent == 80.00
        assert report.status == BudgetStatus.warning

    def test_exactly_100_percent_is_over(self):
        report = compute_budget_report([budget()], [expense("Food", "500", datetime(2024, 6, 5))])[0]
        assert report.percentage_spent == 100.00
        assert report.status == BudgetStatus.over

    def test_overspend_goes_negative(self):
        """Remaining is unrounded and may be negative."""
        report = compute_budget_report(
            [budget(amount="100")],
            [expense("Food", "133.33", datetime(2024, 6, 5))]
        )[0]
        assert report.remaining_amount == pytest.approx(100 - 133.33)
        assert report.percentage_spent == 133.33
        assert report.status == BudgetStatus.over

    @pytest.mark.parametrize("amount", ["0", "-50"])
    def test_non_positive_budget(self, amount):
        """Zero or negative budgets report 0% instead of dividing."""
        report = compute_budget_report(
            [budget(amount=amount)],
            [expense("Food", "20", datetime(2024, 6, 5))]
        )[0]
        assert report.percentage_spent == 0
        assert report.status == BudgetStatus.safe
        assert report.remaining_amount == float(amount) - 20

    def test_duplicate_budgets_reported_separately(self):
        transactions = [expense("Food", "300", datetime(2024, 6, 5))]
        reports = compute_budget_report([budget(amount="500"), budget(amount="300")], transactions)

        assert len(reports) == 2
        assert [r.status for r in reports] == [BudgetStatus.caution, BudgetStatus.over]

    def test_uses_budget_month_not_today(self):
        report = compute_budget_report(
            [budget(month=1, year=2023)],
            [expense("Food", "60", datetime(2023, 1, 31, 22, 0)), expense("Food", "5", datetime(2023, 2, 1))]
        )[0]
        assert report.spent_amount == 60

    def test_idempotent(self):
        budgets = [budget(), budget(category="Fun", amount="50")]
        transactions = [expense("Food", "12.5", datetime(2024, 6, 1)), expense("Fun", "49", datetime(2024, 6, 2))]

        assert compute_budget_report(budgets, transactions) == compute_budget_report(budgets, transactions)


class TestInsights:
    """Test compute_insights."""

    def test_increase_with_alert(self):
        """Food up from 90 to 150 should alert."""
        result = compute_insights({"Food": 150}, {"Food": 90})

        insight = result.insights[0]
        assert insight.percent_change == 66.67
        assert insight.change_direction == ChangeDirection.increase
        assert insight.previous_month_total == 90
        assert len(result.alerts) == 1
        assert result.alerts[0].severity == "warning"
        assert result.alerts[0].category == "Food"
        assert result.alerts[0].message == "Your Food spending increased by 66.7% compared to last month"

    def test_no_previous_month(self):
        """A category with no prior spending is stable at 0% with no alert."""
        result = compute_insights({"Rent": 1000}, {})

        insight = result.insights[0]
        assert insight.percent_change == 0
        assert insight.change_direction == ChangeDirection.stable
        assert result.alerts == []

    def test_empty_previous_for_every_category(self):
        result = compute_insights({"Rent": 1000, "Food": 300, "Fun": 20}, {})

        assert all(i.percent_change == 0 for i in result.insights)
        assert all(i.change_direction == ChangeDirection.stable for i in result.insights)
        assert result.alerts == []

    def test_decrease_has_no_alert(self):
        result = compute_insights({"Food": 40}, {"Food": 100})

        assert result.insights[0].percent_change == -60
        assert result.insights[0].change_direction == ChangeDirection.decrease
        assert result.alerts == []

    def test_exactly_50_percent_does_not_alert(self):
        result = compute_insights({"Food": 150}, {"Food": 100})
        assert result.insights[0].change_direction == ChangeDirection.increase
        assert result.alerts == []

    def test_previous_only_categories_dropped(self):
        """Categories with no spending this month produce no row but still count in totals."""
        result = compute_insights({"Food": 100}, {"Food": 100, "Travel": 800})

        assert [i.category for i in result.insights] == ["Food"]
        assert result.total_current == 100
        assert result.total_previous == 900

    def test_sorted_by_current_total_descending(self):
        """Order comes from the amounts, not the mapping's insertion order."""
        result = compute_insights({"Fun": 20, "Rent": 1000, "Food": 300, "Books": 300}, {})
        assert [i.category for i in result.insights] == ["Rent", "Books", "Food", "Fun"]

    def test_one_alert_per_category(self):
        result = compute_insights({"Food": 200, "Fun": 90, "Rent": 1000}, {"Food": 100, "Fun": 50, "Rent": 1000})

        assert [a.category for a in result.alerts] == ["Food", "Fun"]
        assert result.alerts[1].message == "Your Fun spending increased by 80.0% compared to last month"

    def test_huge_totals_do_not_overflow_rounding(self):
        result = compute_insights({"Food": 1e25}, {"Food": 1})

        assert result.insights[0].percent_change == pytest.approx(1e27)
        assert result.insights[0].change_direction == ChangeDirection.increase
        assert len(result.alerts) == 1

    def test_empty_inputs(self):
        result = compute_insights({}, {})
        assert result.insights == []
        assert result.alerts == []
        assert result.total_current == 0
        assert result.total_previous == 0


class TestDatabaseQueries:
    """Test the database-facing wrappers."""

    def test_month_category_totals(self, db_session, make_transaction):
        make_transaction("Food", "10.50", datetime(2024, 6, 1))
        make_transaction("Food", "4.50", datetime(2024, 6, 30, 23, 0))
        make_transaction("Rent", "900", datetime(2024, 6, 2))
        make_transaction("Salary", "3000", datetime(2024, 6, 2), is_income=True)
        make_transaction("Food", "99", datetime(2024, 7, 1))
        make_transaction("Food", "77", datetime(2024, 6, 5), owner="someone-else")

        totals = get_month_category_totals(db_session, OWNER, 2024, 6)
        assert totals == {"Food": 15.0, "Rent": 900.0}

    def test_budget_status_for_month(self, db_session, make_budget, make_transaction):
        make_budget("Food", "500", 6, 2024)
        make_budget("Food", "100", 5, 2024)
        make_transaction("Food", "420", datetime(2024, 6, 10))

        reports = get_budget_status(db_session, OWNER, year=2024, month=6)
        assert len(reports) == 1
        assert reports[0].spent_amount == 420
        assert reports[0].status == BudgetStatus.warning

    def test_budget_status_without_budgets(self, db_session):
        assert get_budget_status(db_session, OWNER, year=2024, month=6) == []

    def test_budgets_with_spent(self, db_session, make_budget, make_transaction):
        make_budget("Food", "500", 6, 2024)
        make_budget("Food", "200", 5, 2024)
        make_transaction("Food", "120", datetime(2024, 6, 10))
        make_transaction("Food", "80", datetime(2024, 5, 10))

        results = get_budgets_with_spent(db_session, OWNER)
        by_month = {r.month: r for r in results}
        assert by_month[6].spent == 120
        assert by_month[6].remaining == 380
        assert by_month[5].spent == 80
        assert by_month[5].remaining == 120

    def test_spending_insights_january_compares_december(self, db_session, make_transaction):
        make_transaction("Food", "150", datetime(2024, 1, 10))
        make_transaction("Food", "90", datetime(2023, 12, 20))

        result = get_spending_insights(db_session, OWNER, year=2024, month=1)
        assert result.insights[0].percent_change == 66.67
        assert result.total_previous == 90
        assert len(result.alerts) == 1
