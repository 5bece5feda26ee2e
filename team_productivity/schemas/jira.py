from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Custom fields requested on every issue search
STORY_POINTS_FIELD = "customfield_10005"
STORY_POINT_TYPE_FIELD = "customfield_10796"
COMPLEXITY_FIELD = "customfield_11015"
APPENDIX_WEIGHT_FIELD = "customfield_11444"
STORY_POINT_TYPE_V2_FIELD = "customfield_11312"
APPENDIX_WEIGHTS_V3_FIELD = "customfield_11543"

ISSUE_FIELDS = [
    "summary",
    STORY_POINTS_FIELD,
    STORY_POINT_TYPE_FIELD,
    COMPLEXITY_FIELD,
    APPENDIX_WEIGHT_FIELD,
    STORY_POINT_TYPE_V2_FIELD,
    APPENDIX_WEIGHTS_V3_FIELD,
    "assignee",
    "issuetype",
    "created",
    "resolutiondate",
]


class JiraOption(BaseModel):
    id: Optional[str] = None
    value: Optional[str] = None

    model_config = ConfigDict(coerce_numbers_to_str=True)


class JiraAssignee(BaseModel):
    account_id: Optional[str] = Field(alias="accountId", default=None)
    display_name: Optional[str] = Field(alias="displayName", default=None)

    model_config = ConfigDict(populate_by_name=True)


class JiraIssueType(BaseModel):
    name: str


class JiraIssueFields(BaseModel):
    summary: Optional[str] = None
    story_points: Optional[float] = Field(alias=STORY_POINTS_FIELD, default=None)
    story_point_type: Optional[JiraOption] = Field(alias=STORY_POINT_TYPE_FIELD, default=None)
    complexity: Optional[JiraOption] = Field(alias=COMPLEXITY_FIELD, default=None)
    appendix_weight: Optional[JiraOption] = Field(alias=APPENDIX_WEIGHT_FIELD, default=None)
    story_point_type_v2: Optional[JiraOption] = Field(
        alias=STORY_POINT_TYPE_V2_FIELD, default=None
    )
    appendix_weights_v3: Optional[List[Optional[JiraOption]]] = Field(
        alias=APPENDIX_WEIGHTS_V3_FIELD, default=None
    )
    assignee: Optional[JiraAssignee] = None
    issuetype: Optional[JiraIssueType] = None
    created: Optional[str] = None
    resolutiondate: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class JiraIssue(BaseModel):
    id: str
    key: str
    fields: JiraIssueFields

    model_config = ConfigDict(frozen=True)

    @property
    def assignee_account_id(self) -> Optional[str]:
        return self.fields.assignee.account_id if self.fields.assignee else None

    @property
    def issue_type(self) -> Optional[str]:
        return self.fields.issuetype.name if self.fields.issuetype else None


class JiraSearchPage(BaseModel):
    is_last: bool = Field(alias="isLast", default=True)
    next_page_token: Optional[str] = Field(alias="nextPageToken", default=None)
    issues: List[JiraIssue] = Field(default_factory=list)


class Sprint(BaseModel):
    id: int
    name: str
    state: Optional[str] = None
    start_date: Optional[date] = Field(alias="startDate", default=None)
    end_date: Optional[date] = Field(alias="endDate", default=None)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def strip_time(cls, value):
        if isinstance(value, str):
            return value.split("T")[0]
        return value
