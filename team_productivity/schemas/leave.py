from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _date_part(value):
    # Providers send either "2025-01-06" or full ISO timestamps
    if isinstance(value, str):
        return value.split("T")[0]
    return value


class LeaveRange(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    date_from: date = Field(alias="dateFrom")
    date_to: date = Field(alias="dateTo")
    status: str

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def strip_time(cls, value):
        return _date_part(value)


class LeaveRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    team: Optional[str] = None
    leave_date: List[LeaveRange] = Field(alias="leaveDate", default_factory=list)
