import asyncio
import logging
from datetime import date
from typing import List, Tuple

import httpx

from team_productivity.config import Settings, settings as default_settings
from team_productivity.exceptions import DataUnavailable
from team_productivity.schemas.holiday import Holiday

log = logging.getLogger(__name__)


def months_between(start: date, end: date) -> List[Tuple[int, int]]:
    """(month, year) pairs covering [start, end]."""
    pairs = []
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        pairs.append((month, year))
        month += 1
        if month > 12:
            month = 1
            year += 1
    return pairs


def parse_holiday_date(value: str) -> date:
    # the provider does not zero-pad, e.g. "2025-1-1"
    year, month, day = value.split("T")[0].split("-")
    return date(int(year), int(month), int(day))


class HolidayService:
    """National holiday dates from the public holiday API."""

    def __init__(self, http_client: httpx.AsyncClient, config: Settings = default_settings):
        self.http_client = http_client
        self.base_url = config.holiday_api_url
        self.timeout = config.holiday_request_timeout_ms / 1000

    async def _request_month(self, month: int, year: int) -> List[Holiday]:
        try:
            response = await self.http_client.get(
                self.base_url, params={"month": month, "year": year}, timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
            if not isinstance(data, list):
                raise DataUnavailable(f"unexpected holiday payload for {month}/{year}")
            return [Holiday(**item) for item in data]
        except (httpx.HTTPError, ValueError, TypeError) as e:
            raise DataUnavailable(f"holidays for {month}/{year}: {e}") from e

    async def _fetch_month(self, month: int, year: int) -> List[Holiday]:
        try:
            return await self._request_month(month, year)
        except DataUnavailable as e:
            log.error(f"Failed to fetch {e}")
            return []

    async def get_national_holidays(self, start: date, end: date) -> List[str]:
        """
        Sorted, de-duplicated YYYY-MM-DD dates of national holidays in
        [start, end]. Months that fail to load contribute nothing.
        """
        if start > end:
            return []
        results = await asyncio.gather(
            *(self._fetch_month(month, year) for month, year in months_between(start, end))
        )

        dates = set()
        for holidays in results:
            for holiday in holidays:
                if not holiday.is_national_holiday:
                    continue
                try:
                    day = parse_holiday_date(holiday.date)
                except ValueError:
                    log.warning(f"Ignoring holiday with malformed date {holiday.date!r}")
                    continue
                if start <= day <= end:
                    dates.add(day.isoformat())

        log.info(f"Found {len(dates)} national holiday(s) between {start} and {end}")
        return sorted(dates)
