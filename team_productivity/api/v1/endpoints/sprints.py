import logging

from fastapi import APIRouter, HTTPException, Query, status

from team_productivity.api.deps import SprintSvc
from team_productivity.exceptions import ReportGenerationError
from team_productivity.schemas.jira import Sprint

log = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=list[Sprint],
    summary="Recent and active sprints of a board",
)
async def get_board_sprints(
    sprints: SprintSvc,
    board_id: int = Query(..., alias="boardId"),
):
    """Last closed sprints followed by the active ones, cached per board."""
    try:
        return await sprints.get_board_sprints(board_id)
    except ReportGenerationError as e:
        log.error(f"Error fetching sprints for board {board_id}: {e}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
