"""
Versioned interpretation of Jira issue fields.

Complexity weight lives in one of three field generations and the product /
tech debt signal in one of two. Which generation applies is decided from the
populated fields of each issue alone.
"""

import re
from enum import Enum
from typing import NamedTuple, Optional, Protocol

from team_productivity.schemas.jira import JiraIssue

WEIGHT_BY_LABEL = {
    "Very Low": 1.5,
    "Low": 2,
    "Medium": 4,
    "High": 8,
}

WEIGHT_BY_COMPLEXITY_ID = {
    "10650": 1.5,  # Very Low
    "10651": 2,  # Low
    "10652": 4,  # Medium
    "10653": 8,  # High
}

DEFAULT_WEIGHT = 1.5

# Appendix options are labelled "<description>-<level>"
_APPENDIX_SUFFIX = re.compile(r"-\s*(Very Low|Low|Medium|High)\s*$")


def parse_weight_label(label: Optional[str]) -> Optional[str]:
    """Level name carried by an option label, or None when unrecognized."""
    if not label:
        return None
    label = label.strip()
    if label in WEIGHT_BY_LABEL:
        return label
    match = _APPENDIX_SUFFIX.search(label)
    return match.group(1) if match else None


class IssueCategory(Enum):
    """Which point bucket and which weight bucket an issue feeds."""

    PRODUCT = ("product_point", "weight_points_product")
    TECH_DEBT = ("tech_debt_point", "weight_points_tech_debt")

    @property
    def point_field(self) -> str:
        return self.value[0]

    @property
    def weight_field(self) -> str:
        return self.value[1]


class ComplexityWeightStrategy(Protocol):
    name: str

    def weight(self, issue: JiraIssue) -> float: ...


class IssueCategorizer(Protocol):
    name: str

    def categorize(self, issue: JiraIssue) -> IssueCategory: ...


class LegacyComplexityWeight:
    name = "v1"

    def weight(self, issue: JiraIssue) -> float:
        complexity = issue.fields.complexity
        complexity_id = complexity.id if complexity and complexity.id else "10650"
        return WEIGHT_BY_COMPLEXITY_ID.get(complexity_id, DEFAULT_WEIGHT)


class AppendixComplexityWeight:
    name = "v2"

    def weight(self, issue: JiraIssue) -> float:
        option = issue.fields.appendix_weight
        level = parse_weight_label(option.value if option else None)
        return WEIGHT_BY_LABEL[level] if level else DEFAULT_WEIGHT


class MultiAppendixComplexityWeight:
    name = "v3"

    def weight(self, issue: JiraIssue) -> float:
        total = 0.0
        for option in issue.fields.appendix_weights_v3 or []:
            level = parse_weight_label(option.value if option else None)
            if level:
                total += WEIGHT_BY_LABEL[level]
        return total


class LegacyCategorizer:
    name = "legacy"

    def categorize(self, issue: JiraIssue) -> IssueCategory:
        option = issue.fields.story_point_type
        if option and option.value == "SP Product":
            return IssueCategory.PRODUCT
        return IssueCategory.TECH_DEBT


class StoryPointTypeCategorizer:
    name = "v2"

    def categorize(self, issue: JiraIssue) -> IssueCategory:
        option = issue.fields.story_point_type_v2
        if option and option.value == "Product":
            return IssueCategory.PRODUCT
        return IssueCategory.TECH_DEBT


LEGACY_WEIGHT = LegacyComplexityWeight()
APPENDIX_WEIGHT = AppendixComplexityWeight()
MULTI_APPENDIX_WEIGHT = MultiAppendixComplexityWeight()
LEGACY_CATEGORIZER = LegacyCategorizer()
STORY_POINT_TYPE_CATEGORIZER = StoryPointTypeCategorizer()


class IssueStrategies(NamedTuple):
    weight: ComplexityWeightStrategy
    categorizer: IssueCategorizer


def select_weight_strategy(issue: JiraIssue) -> ComplexityWeightStrategy:
    if issue.fields.appendix_weights_v3:
        return MULTI_APPENDIX_WEIGHT
    if issue.fields.appendix_weight is not None:
        return APPENDIX_WEIGHT
    return LEGACY_WEIGHT


def select_categorizer(issue: JiraIssue) -> IssueCategorizer:
    if issue.fields.story_point_type_v2 is not None:
        return STORY_POINT_TYPE_CATEGORIZER
    return LEGACY_CATEGORIZER


def resolve_strategies(issue: JiraIssue) -> IssueStrategies:
    return IssueStrategies(select_weight_strategy(issue), select_categorizer(issue))
