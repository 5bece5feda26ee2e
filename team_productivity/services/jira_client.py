import asyncio
import logging
from typing import List, Optional

import httpx

from team_productivity.config import Settings, settings as default_settings
from team_productivity.exceptions import ReportEngineError, ReportGenerationError
from team_productivity.schemas.jira import ISSUE_FIELDS, JiraIssue, JiraSearchPage, Sprint
from team_productivity.services.retry import (
    Sleep,
    classify_response,
    classify_transport_error,
    exponential_delay,
    with_retry,
)

log = logging.getLogger(__name__)

REDACTED = "[REDACTED]"
CLOSED_SPRINT_LIMIT = 6


def create_jira_http_client(config: Settings = default_settings) -> httpx.AsyncClient:
    """HTTP transport for Jira with basic auth and the configured per-request timeout."""
    return httpx.AsyncClient(
        base_url=config.jira_url.rstrip("/"),
        auth=(config.jira_username, config.jira_api_token),
        headers={"Accept": "application/json"},
        timeout=config.jira_request_timeout_ms / 1000,
    )


class JiraClient:
    """
    Jira REST client used by the report engine.

    Every request goes through the retry policy. Issue search follows the
    enhanced search cursor (nextPageToken) and sleeps the rate-limit
    interval between pages.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        config: Settings = default_settings,
        sleep: Sleep = asyncio.sleep,
    ):
        self.http_client = http_client
        self.page_size = config.jira_page_size
        self.rate_limit_delay = config.jira_rate_limit_delay_ms / 1000
        self.max_attempts = config.jira_retry_attempts
        self.base_delay = config.jira_retry_base_delay_ms / 1000
        self._sleep = sleep

    async def _get_json(self, url: str, params: dict, description: str):
        async def attempt():
            try:
                response = await self.http_client.get(url, params=params)
            except httpx.TransportError as e:
                raise classify_transport_error(e) from e
            classify_response(response)
            return response.json()

        return await with_retry(
            attempt,
            max_attempts=self.max_attempts,
            delay=exponential_delay(self.base_delay),
            sleep=self._sleep,
            description=description,
        )

    async def search_issues(
        self, jql: str, fields: Optional[List[str]] = None
    ) -> List[JiraIssue]:
        """Fetches every issue matching jql, preserving page order."""
        params = {
            "jql": jql,
            "maxResults": self.page_size,
            "fields": ",".join(fields or ISSUE_FIELDS),
        }
        issues: List[JiraIssue] = []
        token: Optional[str] = None
        page_number = 0

        try:
            while True:
                page_number += 1
                page_params = dict(params)
                if token:
                    page_params["nextPageToken"] = token

                data = await self._get_json(
                    "/rest/api/3/search/jql", page_params, f"Jira search page {page_number}"
                )
                page = JiraSearchPage.model_validate(data)
                issues.extend(page.issues)

                # A page claiming more results without a cursor is treated as last
                has_next = not page.is_last and bool(page.next_page_token)
                log.info(
                    f"Fetched Jira page {page_number}: issues={len(page.issues)} "
                    f"has_next={has_next} next_page_token={REDACTED if has_next else None}"
                )
                if not has_next:
                    break

                token = page.next_page_token
                log.warning(
                    f"Rate limit: waiting {self.rate_limit_delay:.1f}s before page {page_number + 1}"
                )
                await self._sleep(self.rate_limit_delay)
        except ReportEngineError as e:
            log.error(f"Jira issue search failed on page {page_number}: {e}")
            raise ReportGenerationError("fetch issues", getattr(e, "detail", None)) from e
        except (httpx.HTTPError, ValueError) as e:
            # ValueError covers undecodable bodies and pages that fail schema validation
            log.error(f"Jira issue search failed on page {page_number}: {type(e).__name__}")
            raise ReportGenerationError("fetch issues") from e

        log.info(f"Fetched {len(issues)} issues from Jira in {page_number} page(s)")
        return issues

    async def fetch_board_sprints(self, board_id: int) -> List[Sprint]:
        """Last closed sprints followed by the active ones for a board."""
        url = f"/rest/agile/1.0/board/{board_id}/sprint"
        try:
            active, closed_probe = await asyncio.gather(
                self._get_json(url, {"state": "active"}, f"active sprints of board {board_id}"),
                self._get_json(
                    url, {"state": "closed", "maxResults": 1}, f"closed sprints of board {board_id}"
                ),
            )
            closed_total = closed_probe.get("total", 0)
            closed = await self._get_json(
                url,
                {
                    "state": "closed",
                    "maxResults": CLOSED_SPRINT_LIMIT,
                    "startAt": max(0, closed_total - CLOSED_SPRINT_LIMIT),
                },
                f"closed sprints of board {board_id}",
            )
            values = closed.get("values", []) + active.get("values", [])
            return [Sprint.model_validate(sprint) for sprint in values]
        except ReportEngineError as e:
            log.error(f"Failed to fetch sprints for board {board_id}: {e}")
            raise ReportGenerationError("fetch sprints") from e
        except (httpx.HTTPError, ValueError, TypeError, AttributeError) as e:
            # non-JSON bodies, non-object payloads and sprints failing validation
            log.error(f"Failed to fetch sprints for board {board_id}: {type(e).__name__}")
            raise ReportGenerationError("fetch sprints") from e
