"""Shared fixtures for report engine tests."""

import httpx
import pytest

from team_productivity.config import Settings
from team_productivity.schemas.jira import JiraIssue
from team_productivity.schemas.team import Level, TeamMember

ALICE_ID = "712020:aaaa-1111"
BUDI_ID = "712020:bbbb-2222"
CITRA_ID = "712020:cccc-3333"


class FakeSleep:
    """Records requested delays instead of waiting."""

    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


@pytest.fixture
def fake_sleep():
    return FakeSleep()


@pytest.fixture
def members():
    return [
        TeamMember(
            name="Alice",
            account_id=ALICE_ID,
            email="alice@example.com",
            teams=frozenset({"SLS"}),
            level=Level.JUNIOR,
        ),
        TeamMember(
            name="Budi",
            account_id=BUDI_ID,
            email="budi@example.com",
            teams=frozenset({"SLS", "DS"}),
            level=Level.SENIOR,
        ),
        TeamMember(
            name="Citra",
            account_id=CITRA_ID,
            email="citra@example.com",
            teams=frozenset({"DS"}),
            level=Level.MEDIOR,
        ),
    ]


@pytest.fixture
def test_settings():
    return Settings(
        jira_url="https://jira.test",
        jira_username="bot@example.com",
        jira_api_token="super-secret-token",
        leave_api_url="https://leave.test/api/talent-leave",
        holiday_api_url="https://holidays.test/api",
    )


def make_issue(
    key="PROJ-1",
    assignee=ALICE_ID,
    points=5,
    issue_type="Story",
    **custom_fields,
) -> JiraIssue:
    """Builds a Jira issue from its raw JSON shape."""
    fields = {
        "summary": f"Summary of {key}",
        "customfield_10005": points,
        "issuetype": {"id": "10004", "name": issue_type},
    }
    if assignee is not None:
        fields["assignee"] = {"accountId": assignee, "displayName": key}
    fields.update(custom_fields)
    return JiraIssue(id=key.split("-")[-1], key=key, fields=fields)


def raw_issue(key, assignee=ALICE_ID, points=3):
    return {
        "id": key.split("-")[-1],
        "key": key,
        "fields": {
            "summary": key,
            "customfield_10005": points,
            "assignee": {"accountId": assignee},
            "issuetype": {"name": "Story"},
        },
    }


def mock_http_client(handler, base_url="https://jira.test") -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=base_url)
