import asyncio
import calendar
import logging
from datetime import date
from typing import List

from team_productivity.constants.team_members import TEAM_FUNDING, TEAM_LENDING
from team_productivity.schemas.report import (
    ProductivitySummary,
    ProductivitySummaryMember,
    ProductivitySummaryStats,
    TeamReport,
)
from team_productivity.services.aggregator import HOURS_PER_DAY
from team_productivity.services.report_service import ReportService

log = logging.getLogger(__name__)


def month_window(month: int, year: int) -> tuple[date, date]:
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def _member_details(report: TeamReport, team: str) -> List[ProductivitySummaryMember]:
    details = []
    for entry in report.issues:
        working_days = entry.working_days or 0
        details.append(
            ProductivitySummaryMember(
                name=entry.member,
                team=team,
                wp_product=entry.weight_points_product,
                wp_tech=entry.weight_points_tech_debt,
                wp_total=entry.total_weight_points,
                working_days=working_days,
                average_wp=entry.total_weight_points / working_days if working_days else 0,
                expected_average_wp=(
                    entry.target_weight_points / working_days if working_days else 0
                ),
            )
        )
    return details


class ProductivitySummaryService:
    """Monthly weight-point summary across both teams."""

    def __init__(self, report_service: ReportService):
        self.report_service = report_service

    async def generate_productivity_summary(self, month: int, year: int) -> ProductivitySummary:
        start, end = month_window(month, year)

        funding, lending = await asyncio.gather(
            self.report_service.generate_report_by_date_range(start, end, TEAM_FUNDING),
            self.report_service.generate_report_by_date_range(start, end, TEAM_LENDING),
        )

        details = _member_details(funding, TEAM_FUNDING) + _member_details(lending, TEAM_LENDING)
        details.sort(key=lambda member: member.name.lower())

        total_days = sum(member.working_days for member in details)
        total_wp_expected = sum(
            member.expected_average_wp * member.working_days for member in details
        )
        total_wp_produced = sum(member.wp_total for member in details)
        average_wp_expected = total_wp_expected / total_days if total_days else 0
        average_wp_produced = total_wp_produced / total_days if total_days else 0
        productivity_expected = average_wp_expected / HOURS_PER_DAY
        productivity_produced = average_wp_produced / HOURS_PER_DAY

        summary = ProductivitySummaryStats(
            total_days_of_works=total_days,
            total_wp_expected=total_wp_expected,
            average_wp_expected=average_wp_expected,
            productivity_expected=productivity_expected,
            total_wp_produced=total_wp_produced,
            average_wp_produced=average_wp_produced,
            productivity_produced=productivity_produced,
            productivity_produce_vs_expected=(
                (productivity_produced - productivity_expected) / productivity_expected
                if productivity_expected
                else 0
            ),
        )
        log.info(f"Built productivity summary for {month}/{year} with {len(details)} member(s)")
        return ProductivitySummary(month=month, year=year, summary=summary, details=details)
