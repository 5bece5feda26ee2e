from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from team_productivity.schemas.team import Level


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ReportEntry(CamelModel):
    member: str
    level: Level
    product_point: float = 0
    tech_debt_point: float = 0
    total_point: float = 0
    weight_points_product: float = 0
    weight_points_tech_debt: float = 0
    total_weight_points: float = 0
    target_weight_points: float = 0
    dev_defect: int = 0
    working_days: Optional[int] = None
    productivity_rate: str = "0%"
    dev_defect_rate: str = "0%"
    average_complexity: str = "0"
    wp_to_hours: Optional[float] = None

    model_config = ConfigDict(frozen=True)


class TeamReport(CamelModel):
    issues: List[ReportEntry]
    total_issue_product: float
    total_issue_tech_debt: float
    product_percentage: str
    tech_debt_percentage: str
    average_productivity: str
    total_working_days: Optional[int] = None
    average_working_days: Optional[float] = None
    total_weight_points: float = 0
    average_wp_per_hour: Optional[float] = None
    sprint_name: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class ProductivitySummaryMember(CamelModel):
    name: str
    team: str
    wp_product: float
    wp_tech: float
    wp_total: float
    working_days: int
    average_wp: float
    expected_average_wp: float


class ProductivitySummaryStats(CamelModel):
    total_days_of_works: int
    total_wp_expected: float
    average_wp_expected: float
    productivity_expected: float
    total_wp_produced: float
    average_wp_produced: float
    productivity_produced: float
    productivity_produce_vs_expected: float


class ProductivitySummary(CamelModel):
    month: int
    year: int
    summary: ProductivitySummaryStats
    details: List[ProductivitySummaryMember]
