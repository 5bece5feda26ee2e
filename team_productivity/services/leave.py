import logging
from datetime import date
from typing import List

import httpx

from team_productivity.config import Settings, settings as default_settings
from team_productivity.exceptions import DataUnavailable
from team_productivity.schemas.leave import LeaveRecord

log = logging.getLogger(__name__)


class LeaveService:
    """Reads leave records overlapping a date window from the leave store API."""

    def __init__(self, http_client: httpx.AsyncClient, config: Settings = default_settings):
        self.http_client = http_client
        self.base_url = config.leave_api_url

    async def _request(self, start: date, end: date) -> List[LeaveRecord]:
        try:
            response = await self.http_client.get(
                self.base_url,
                params={"startDate": start.isoformat(), "endDate": end.isoformat()},
            )
            response.raise_for_status()
            return [LeaveRecord(**item) for item in response.json()]
        except (httpx.HTTPError, ValueError, TypeError) as e:
            raise DataUnavailable(str(e)) from e

    async def get_leave_records(self, start: date, end: date) -> List[LeaveRecord]:
        """
        Leave records whose ranges overlap [start, end].

        Ranges outside the window are dropped. Any failure yields an empty
        list so reports degrade to calendar-only working days.
        """
        try:
            records = await self._request(start, end)
        except DataUnavailable as e:
            log.error(f"Failed to fetch leave records for {start}..{end}: {e}")
            return []

        filtered = []
        for record in records:
            ranges = [
                leave for leave in record.leave_date
                if leave.date_from <= end and leave.date_to >= start
            ]
            if ranges:
                filtered.append(record.model_copy(update={"leave_date": ranges}))

        log.info(f"Loaded leave for {len(filtered)} talent(s) between {start} and {end}")
        return filtered
