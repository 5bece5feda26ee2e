from datetime import date
from unittest.mock import AsyncMock

import pytest

from team_productivity.schemas.report import ReportEntry, TeamReport
from team_productivity.schemas.team import Level
from team_productivity.services.productivity_summary import (
    ProductivitySummaryService,
    month_window,
)


def team_report(*entries):
    return TeamReport(
        issues=list(entries),
        total_issue_product=0,
        total_issue_tech_debt=0,
        product_percentage="0.00%",
        tech_debt_percentage="0.00%",
        average_productivity="0.00%",
    )


def entry(member, level, target, working_days, wp_product, wp_tech):
    return ReportEntry(
        member=member,
        level=level,
        total_point=1,
        weight_points_product=wp_product,
        weight_points_tech_debt=wp_tech,
        total_weight_points=wp_product + wp_tech,
        target_weight_points=target,
        working_days=working_days,
    )


@pytest.mark.parametrize(
    "month,year,expected",
    [
        (1, 2025, (date(2025, 1, 1), date(2025, 1, 31))),
        (2, 2024, (date(2024, 2, 1), date(2024, 2, 29))),
        (2, 2025, (date(2025, 2, 1), date(2025, 2, 28))),
    ],
)
def test_month_window(month, year, expected):
    assert month_window(month, year) == expected


def test_month_window_rejects_invalid_month():
    with pytest.raises(ValueError):
        month_window(13, 2025)


@pytest.mark.asyncio
async def test_summary_combines_both_teams():
    report_service = AsyncMock()

    async def by_date_range(start, end, team):
        if team == "DS":
            return team_report(entry("Citra", Level.MEDIOR, 68, 17, 20, 14))
        return team_report(entry("alice", Level.JUNIOR, 56, 20, 30, 10))

    report_service.generate_report_by_date_range.side_effect = by_date_range

    result = await ProductivitySummaryService(report_service).generate_productivity_summary(3, 2025)

    calls = report_service.generate_report_by_date_range.await_args_list
    assert {c.args for c in calls} == {
        (date(2025, 3, 1), date(2025, 3, 31), "DS"),
        (date(2025, 3, 1), date(2025, 3, 31), "SLS"),
    }

    assert (result.month, result.year) == (3, 2025)
    assert [(d.name, d.team) for d in result.details] == [("alice", "SLS"), ("Citra", "DS")]

    alice = result.details[0]
    assert alice.wp_total == 40
    assert alice.average_wp == 2
    assert alice.expected_average_wp == pytest.approx(2.8)

    summary = result.summary
    assert summary.total_days_of_works == 37
    assert summary.total_wp_produced == 74
    assert summary.total_wp_expected == pytest.approx(124)
    assert summary.average_wp_produced == pytest.approx(2)
    assert summary.productivity_produced == pytest.approx(0.25)
    expected = 124 / 37 / 8
    assert summary.productivity_expected == pytest.approx(expected)
    assert summary.productivity_produce_vs_expected == pytest.approx((0.25 - expected) / expected)


@pytest.mark.asyncio
async def test_summary_without_working_days_is_zeroed():
    report_service = AsyncMock()
    report_service.generate_report_by_date_range.return_value = team_report(
        entry("Budi", Level.SENIOR, 80, None, 5, 0)
    )

    result = await ProductivitySummaryService(report_service).generate_productivity_summary(1, 2025)

    assert result.summary.total_days_of_works == 0
    assert result.summary.average_wp_produced == 0
    assert result.summary.productivity_produce_vs_expected == 0
    assert all(d.average_wp == 0 for d in result.details)
    assert result.model_dump(by_alias=True)["summary"]["totalDaysOfWorks"] == 0
