from enum import Enum
from typing import FrozenSet

from pydantic import BaseModel, ConfigDict


class Level(str, Enum):
    JUNIOR = "junior"
    MEDIOR = "medior"
    SENIOR = "senior"
    INDIVIDUAL_CONTRIBUTOR = "individual contributor"


# Minimum weight points expected from each level over a ten-day sprint
LEVEL_MINIMUM_WEIGHT_POINTS = {
    Level.JUNIOR: 56,
    Level.MEDIOR: 68,
    Level.SENIOR: 80,
    Level.INDIVIDUAL_CONTRIBUTOR: 80,
}


class TeamMember(BaseModel):
    name: str
    account_id: str
    email: str
    teams: FrozenSet[str]
    level: Level

    model_config = ConfigDict(frozen=True)

    @property
    def minimum_weight_points(self) -> int:
        return LEVEL_MINIMUM_WEIGHT_POINTS[self.level]
