import asyncio
import logging
from datetime import date
from typing import List, Optional, Tuple

from team_productivity.constants.team_members import TEAM_MEMBERS, members_of
from team_productivity.schemas.leave import LeaveRecord
from team_productivity.schemas.report import TeamReport
from team_productivity.schemas.team import TeamMember
from team_productivity.services.aggregator import ReportAggregator
from team_productivity.services.holidays import HolidayService
from team_productivity.services.jira_client import JiraClient
from team_productivity.services.leave import LeaveService
from team_productivity.services.sprint_service import SprintService

log = logging.getLogger(__name__)


def _assignee_clause(members: List[TeamMember]) -> str:
    return ", ".join(f'"{member.account_id}"' for member in members)


def build_sprint_jql(project: str, sprint_id: int, members: List[TeamMember]) -> str:
    return (
        f"project = {project} "
        f"AND sprint = {sprint_id} "
        f"AND assignee IN ({_assignee_clause(members)}) "
        f"AND type IN standardIssueTypes() "
        f"AND resolution = Done "
        f"ORDER BY created DESC"
    )


def build_date_range_jql(
    project: str, start: date, end: date, members: List[TeamMember]
) -> str:
    return (
        f"project = {project} "
        f'AND resolved >= "{start.isoformat()}" '
        f'AND resolved <= "{end.isoformat()}" '
        f"AND assignee IN ({_assignee_clause(members)}) "
        f"AND type IN standardIssueTypes() "
        f"AND resolution = Done "
        f"ORDER BY created DESC"
    )


class ReportService:
    """
    Builds team productivity reports from Jira issues, leave records and
    the national holiday calendar.
    Relies on injected Jira, sprint, leave and holiday services.
    """

    def __init__(
        self,
        jira_client: JiraClient,
        sprint_service: SprintService,
        leave_service: LeaveService,
        holiday_service: HolidayService,
        members: Optional[List[TeamMember]] = None,
    ):
        self.jira_client = jira_client
        self.sprint_service = sprint_service
        self.leave_service = leave_service
        self.holiday_service = holiday_service
        self.members = TEAM_MEMBERS if members is None else members

    async def _calendar_inputs(
        self, start: date, end: date
    ) -> Tuple[List[LeaveRecord], List[str]]:
        leave_records, holiday_dates = await asyncio.gather(
            self.leave_service.get_leave_records(start, end),
            self.holiday_service.get_national_holidays(start, end),
        )
        return leave_records, holiday_dates

    async def _build(
        self,
        jql: str,
        team_members: List[TeamMember],
        window: Optional[Tuple[date, date]],
        sprint_name: Optional[str] = None,
    ) -> TeamReport:
        aggregator = ReportAggregator(team_members)

        leave_records: List[LeaveRecord] = []
        holiday_dates: List[str] = []
        if window:
            leave_records, holiday_dates = await self._calendar_inputs(*window)

        aggregator.add_issues(await self.jira_client.search_issues(jql))
        if window:
            aggregator.apply_working_days(window[0], window[1], leave_records, holiday_dates)

        report = aggregator.build_report(sprint_name=sprint_name)
        if window:
            report = report.model_copy(update={"start_date": window[0], "end_date": window[1]})
        return report

    async def generate_report(self, sprint_id: int, team: str) -> TeamReport:
        """
        Report for one team over a sprint.

        If the sprint cannot be found on any known board the report is
        produced without working days.
        """
        team_members = members_of(team, self.members)
        if not team_members:
            raise ValueError(f"Unknown team: {team}")

        sprint = await self.sprint_service.find_sprint(sprint_id)
        window = None
        sprint_name = None
        if sprint is None:
            log.warning(f"Sprint {sprint_id} not found on known boards; skipping working days")
        elif sprint.start_date is None or sprint.end_date is None:
            log.warning(f"Sprint {sprint_id} has no start/end dates; skipping working days")
            sprint_name = sprint.name
        else:
            window = (sprint.start_date, sprint.end_date)
            sprint_name = sprint.name

        log.info(f"Generating {team} report for sprint {sprint_id}")
        jql = build_sprint_jql(team, sprint_id, team_members)
        return await self._build(jql, team_members, window, sprint_name)

    async def generate_report_by_date_range(
        self, start: date, end: date, team: str
    ) -> TeamReport:
        """Report for one team over issues resolved within [start, end]."""
        if start > end:
            raise ValueError("start date must not be after end date")
        team_members = members_of(team, self.members)
        if not team_members:
            raise ValueError(f"Unknown team: {team}")

        log.info(f"Generating {team} report for {start}..{end}")
        jql = build_date_range_jql(team, start, end, team_members)
        return await self._build(jql, team_members, (start, end))
