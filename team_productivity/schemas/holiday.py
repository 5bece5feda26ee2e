from typing import Optional

from pydantic import BaseModel, Field


class Holiday(BaseModel):
    date: str = Field(alias="holiday_date")
    name: Optional[str] = Field(alias="holiday_name", default=None)
    is_national_holiday: bool = False
