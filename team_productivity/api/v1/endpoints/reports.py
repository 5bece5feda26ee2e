import logging
from datetime import date

from fastapi import APIRouter, HTTPException, Query, status

from team_productivity.api.deps import ReportSvc, SummarySvc
from team_productivity.exceptions import (
    AuthenticationError,
    ReportGenerationError,
    ValidationError,
)
from team_productivity.schemas.report import ProductivitySummary, TeamReport

log = logging.getLogger(__name__)

router = APIRouter()


def report_error_to_http(error: ReportGenerationError) -> HTTPException:
    """Maps an engine failure to the status returned to API callers."""
    cause = error.__cause__
    if isinstance(cause, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(cause, AuthenticationError):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(error))
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(error))


@router.get(
    "",
    response_model=TeamReport,
    summary="Team productivity report for a sprint",
    responses={
        200: {"description": "Report generated"},
        400: {"description": "Unknown team or rejected query"},
        502: {"description": "Jira rejected the configured credentials"},
        503: {"description": "Jira unavailable"},
    },
)
async def get_sprint_report(
    reports: ReportSvc,
    sprint: int = Query(..., description="Sprint id"),
    project: str = Query(..., description="Team / project key, e.g. DS or SLS"),
) -> TeamReport:
    """
    Generates the productivity report of a team for one sprint.

    Working days are included when the sprint is found on a known board.
    """
    try:
        return await reports.generate_report(sprint, project)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ReportGenerationError as e:
        log.error(f"Error generating sprint report: {e}")
        raise report_error_to_http(e)


@router.get(
    "/date-range",
    response_model=TeamReport,
    summary="Team productivity report for issues resolved in a date range",
)
async def get_date_range_report(
    reports: ReportSvc,
    start_date: date = Query(..., alias="startDate"),
    end_date: date = Query(..., alias="endDate"),
    project: str = Query(...),
) -> TeamReport:
    try:
        return await reports.generate_report_by_date_range(start_date, end_date, project)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ReportGenerationError as e:
        log.error(f"Error generating date range report: {e}")
        raise report_error_to_http(e)


@router.get(
    "/productivity-summary",
    response_model=ProductivitySummary,
    summary="Monthly weight point summary across both teams",
)
async def get_productivity_summary(
    summaries: SummarySvc,
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=2000),
) -> ProductivitySummary:
    try:
        return await summaries.generate_productivity_summary(month, year)
    except ReportGenerationError as e:
        log.error(f"Error generating productivity summary: {e}")
        raise report_error_to_http(e)
