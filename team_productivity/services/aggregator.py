import logging
from datetime import date
from typing import Dict, Iterable, List, Optional

from team_productivity.schemas.jira import JiraIssue
from team_productivity.schemas.leave import LeaveRecord
from team_productivity.schemas.report import ReportEntry, TeamReport
from team_productivity.schemas.team import TeamMember
from team_productivity.services.strategies import resolve_strategies
from team_productivity.utils.working_days import calculate_working_days, leave_for_member

log = logging.getLogger(__name__)

HOURS_PER_DAY = 8
DEFAULT_CAPACITY_POINTS = 80


def dev_defect_rate(defects: int) -> str:
    if defects <= 2:
        return "100%"
    if defects <= 5:
        return "80%"
    if defects <= 7:
        return "50%"
    return "0%"


def _percent(value: float) -> str:
    return f"{value:.2f}%"


class MemberTally:
    """Running totals for one member while issues are being processed."""

    def __init__(self, member: TeamMember):
        self.member = member
        self.product_point = 0.0
        self.tech_debt_point = 0.0
        self.total_point = 0.0
        self.weight_points_product = 0.0
        self.weight_points_tech_debt = 0.0
        self.dev_defect = 0
        self.working_days: Optional[int] = None

    @property
    def total_weight_points(self) -> float:
        return self.weight_points_product + self.weight_points_tech_debt


class ReportAggregator:
    """
    Accumulates per-member metrics for one team from a stream of issues.

    Issues whose assignee is not a configured member of the team are
    dropped without error.
    """

    def __init__(self, members: Iterable[TeamMember]):
        self.tallies: Dict[str, MemberTally] = {}
        self._by_account: Dict[str, MemberTally] = {}
        for member in members:
            tally = MemberTally(member)
            self.tallies[member.name] = tally
            self._by_account[member.account_id.lower()] = tally
        self.dropped = 0

    def add_issue(self, issue: JiraIssue) -> bool:
        account_id = issue.assignee_account_id
        tally = self._by_account.get(account_id.lower()) if account_id else None
        if tally is None:
            self.dropped += 1
            return False

        strategies = resolve_strategies(issue)
        category = strategies.categorizer.categorize(issue)
        points = issue.fields.story_points or 0
        weight = strategies.weight.weight(issue)

        setattr(tally, category.point_field, getattr(tally, category.point_field) + points)
        tally.total_point += points
        setattr(tally, category.weight_field, getattr(tally, category.weight_field) + weight)

        if issue.issue_type == "Bug":
            tally.dev_defect += 1
        return True

    def add_issues(self, issues: Iterable[JiraIssue]) -> None:
        for issue in issues:
            self.add_issue(issue)
        if self.dropped:
            log.debug(f"Skipped {self.dropped} issue(s) assigned outside the team")

    def apply_working_days(
        self,
        start: date,
        end: date,
        leave_records: List[LeaveRecord],
        holiday_dates: List[str],
    ) -> None:
        for tally in self.tallies.values():
            tally.working_days = calculate_working_days(
                start,
                end,
                leave_for_member(leave_records, tally.member.name),
                holiday_dates,
            )

    def _finalize_entry(self, tally: MemberTally) -> ReportEntry:
        member = tally.member
        if tally.total_point == 0:
            return ReportEntry(
                member=member.name,
                level=member.level,
                target_weight_points=member.minimum_weight_points,
                working_days=tally.working_days,
            )

        capacity = (
            tally.working_days * HOURS_PER_DAY if tally.working_days else DEFAULT_CAPACITY_POINTS
        )
        wp_to_hours = None
        if tally.working_days:
            wp_to_hours = round(tally.total_weight_points / (tally.working_days * HOURS_PER_DAY), 2)

        return ReportEntry(
            member=member.name,
            level=member.level,
            product_point=tally.product_point,
            tech_debt_point=tally.tech_debt_point,
            total_point=tally.total_point,
            weight_points_product=tally.weight_points_product,
            weight_points_tech_debt=tally.weight_points_tech_debt,
            total_weight_points=tally.total_weight_points,
            target_weight_points=member.minimum_weight_points,
            dev_defect=tally.dev_defect,
            working_days=tally.working_days,
            productivity_rate=_percent(tally.total_point / capacity * 100),
            dev_defect_rate=dev_defect_rate(tally.dev_defect),
            average_complexity=f"{tally.total_weight_points / member.minimum_weight_points:.2f}",
            wp_to_hours=wp_to_hours,
        )

    def finalize(self) -> List[ReportEntry]:
        """Every member's entry, including those reset for having no points."""
        return [self._finalize_entry(tally) for tally in self.tallies.values()]

    def build_report(self, sprint_name: Optional[str] = None) -> TeamReport:
        entries = [entry for entry in self.finalize() if entry.total_point > 0]
        return summarize(entries, sprint_name=sprint_name)


def summarize(entries: List[ReportEntry], sprint_name: Optional[str] = None) -> TeamReport:
    total_product = sum(entry.product_point for entry in entries)
    total_tech_debt = sum(entry.tech_debt_point for entry in entries)
    total = total_product + total_tech_debt

    product_percentage = total_product / total * 100 if total else 0
    tech_debt_percentage = total_tech_debt / total * 100 if total else 0

    rates = [float(entry.productivity_rate.rstrip("%")) for entry in entries]
    average_productivity = sum(rates) / len(rates) if rates else 0

    day_counts = [entry.working_days for entry in entries if entry.working_days is not None]
    total_working_days = sum(day_counts) if day_counts else None
    average_working_days = round(sum(day_counts) / len(day_counts), 2) if day_counts else None

    per_hour = [entry.wp_to_hours for entry in entries if entry.wp_to_hours is not None]
    average_wp_per_hour = round(sum(per_hour) / len(per_hour), 2) if per_hour else None

    return TeamReport(
        issues=entries,
        total_issue_product=total_product,
        total_issue_tech_debt=total_tech_debt,
        product_percentage=_percent(product_percentage),
        tech_debt_percentage=_percent(tech_debt_percentage),
        average_productivity=_percent(average_productivity),
        total_working_days=total_working_days,
        average_working_days=average_working_days,
        total_weight_points=sum(entry.total_weight_points for entry in entries),
        average_wp_per_hour=average_wp_per_hour,
        sprint_name=sprint_name,
    )
