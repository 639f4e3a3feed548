import json
from typing import Any

import pytest

from epicpoints.errors import RemoteError
from epicpoints.models.reconciliation import JiraComment
from epicpoints.models.webhooks.jira import JiraIssue

STORY_POINTS = "customfield_10021"
EPIC_LINK = "customfield_10025"


def make_payload(
    event_type: str = "issue_created",
    description: str | None = "please @bot subtract these",
    key: str = "PROJ-7",
    **custom: Any,
) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "description": description,
        "created": "2024-03-01T10:00:00.000+0000",
        "issuetype": {"id": "10001", "name": "Story", "subtask": False},
        "priority": {"id": "3", "name": "Medium"},
        "reporter": {"name": "jdoe", "displayName": "J. Doe", "active": True},
        "watches": {"watchCount": 1, "isWatching": True},
        "duedate": None,
    }
    fields.update(custom)
    return {
        "webhookEvent": "jira:issue_created",
        "issue_event_type_name": event_type,
        "timestamp": 1709287200000,
        "user": {"name": "jdoe", "key": "jdoe"},
        "issue": {"id": "10042", "key": key, "self": "https://jira/rest/api/2/issue/10042", "fields": fields},
    }


def make_body(**kwargs: Any) -> bytes:
    return json.dumps(make_payload(**kwargs)).encode()


def make_epic(key: str = "EPIC-1", points: Any = 8.0) -> JiraIssue:
    custom = {} if points is None else {STORY_POINTS: points}
    return JiraIssue.model_validate(
        {"id": "9000", "key": key, "fields": {}}, context={"custom_fields": custom}
    )


class FakeTracker:
    def __init__(self, epic: JiraIssue | None = None, fail_on: str | None = None) -> None:
        self.epic = epic if epic is not None else make_epic()
        self.fail_on = fail_on
        self.calls: list[tuple] = []

    def _maybe_fail(self, name: str) -> None:
        if self.fail_on == name:
            raise RemoteError(f"{name} exploded")

    async def get_issue(self, key: str) -> JiraIssue:
        self.calls.append(("get_issue", key))
        self._maybe_fail("get_issue")
        return self.epic

    async def update_issue(self, key: str, fields: dict[str, Any]) -> int:
        self.calls.append(("update_issue", key, fields))
        self._maybe_fail("update_issue")
        return 204

    async def add_comment(self, key: str, body: str) -> JiraComment:
        self.calls.append(("add_comment", key, body))
        self._maybe_fail("add_comment")
        return JiraComment(id="555", self_url="https://jira/comment/555", body=body)

    def names(self) -> list[str]:
        return [c[0] for c in self.calls]


@pytest.fixture
def tracker() -> FakeTracker:
    return FakeTracker()
