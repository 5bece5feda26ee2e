import logging
from typing import Iterable, List, Optional

from team_productivity.constants.team_members import KNOWN_BOARDS
from team_productivity.exceptions import ReportGenerationError
from team_productivity.schemas.jira import Sprint
from team_productivity.services.jira_client import JiraClient
from team_productivity.utils.ttl_cache import TTLCache

log = logging.getLogger(__name__)


class SprintService:
    """Sprint metadata lookups, memoized per board in a TTL cache."""

    def __init__(
        self,
        jira_client: JiraClient,
        cache: TTLCache,
        boards: Iterable[int] = KNOWN_BOARDS,
    ):
        self.jira_client = jira_client
        self.cache = cache
        self.boards = tuple(boards)

    async def get_board_sprints(self, board_id: int) -> List[Sprint]:
        cached = self.cache.get(board_id)
        if cached is not None:
            log.debug(f"Using cached sprints for board {board_id}")
            return cached

        sprints = await self.jira_client.fetch_board_sprints(board_id)
        self.cache.set(board_id, sprints)
        return sprints

    async def find_sprint(self, sprint_id: int) -> Optional[Sprint]:
        """
        Looks the sprint up across the known boards.

        Boards that cannot be read are skipped; None means the sprint
        was not found anywhere.
        """
        for board_id in self.boards:
            try:
                sprints = await self.get_board_sprints(board_id)
            except ReportGenerationError as e:
                log.warning(f"Skipping board {board_id} during sprint lookup: {e}")
                continue
            for sprint in sprints:
                if sprint.id == sprint_id:
                    return sprint
        return None
