from typing import Annotated, AsyncGenerator

import httpx
from fastapi import Depends

from team_productivity.config import settings
from team_productivity.services.holidays import HolidayService
from team_productivity.services.jira_client import JiraClient, create_jira_http_client
from team_productivity.services.leave import LeaveService
from team_productivity.services.productivity_summary import ProductivitySummaryService
from team_productivity.services.report_service import ReportService
from team_productivity.services.sprint_service import SprintService
from team_productivity.utils.ttl_cache import TTLCache

# Shared across requests; sprint metadata changes rarely
sprint_cache = TTLCache(ttl_seconds=settings.sprint_cache_ttl_seconds)


async def get_jira_client() -> AsyncGenerator[JiraClient, None]:
    """
    Jira client bound to a per-request HTTP session.
    """
    http_client = create_jira_http_client(settings)
    try:
        yield JiraClient(http_client, settings)
    finally:
        await http_client.aclose()

JiraDep = Annotated[JiraClient, Depends(get_jira_client)]

async def get_provider_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    http_client = httpx.AsyncClient(timeout=settings.jira_request_timeout_ms / 1000)
    try:
        yield http_client
    finally:
        await http_client.aclose()

ProviderHttp = Annotated[httpx.AsyncClient, Depends(get_provider_http_client)]

def get_sprint_service(jira_client: JiraDep):
    return SprintService(jira_client, sprint_cache)

SprintSvc = Annotated[SprintService, Depends(get_sprint_service)]

def get_report_service(jira_client: JiraDep, sprint_service: SprintSvc, http_client: ProviderHttp):
    return ReportService(
        jira_client,
        sprint_service,
        LeaveService(http_client, settings),
        HolidayService(http_client, settings),
    )

ReportSvc = Annotated[ReportService, Depends(get_report_service)]

def get_productivity_summary_service(report_service: ReportSvc):
    return ProductivitySummaryService(report_service)

SummarySvc = Annotated[ProductivitySummaryService, Depends(get_productivity_summary_service)]
