from enum import Enum
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

CustomFieldValue = float | str


class IssueEventType(str, Enum):
    CREATED = "issue_created"
    UPDATED = "issue_updated"


class JiraModel(BaseModel):
    """Frozen base for webhook objects; JSON ``null`` falls back to the field default."""

    model_config = {"frozen": True, "populate_by_name": True}

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class JiraUser(JiraModel):
    active: bool = False
    avatarUrls: dict[str, str] = Field(default_factory=dict)
    displayName: str = ""
    emailAddress: str = ""
    key: str = ""
    name: str = ""
    self_url: str = Field("", alias="self")
    timeZone: str = ""


class JiraPriority(JiraModel):
    id: str = ""
    name: str = ""
    iconUrl: str = ""
    self_url: str = Field("", alias="self")


class JiraIssueType(JiraModel):
    id: str = ""
    name: str = ""
    description: str = ""
    iconUrl: str = ""
    avatarId: int = 0
    subtask: bool = False
    self_url: str = Field("", alias="self")


class JiraFixVersion(JiraModel):
    id: str = ""
    name: str = ""
    description: str = ""
    archived: bool = False
    released: bool = False
    releaseDate: str = ""
    self_url: str = Field("", alias="self")


class JiraWatches(JiraModel):
    watchCount: float = 0
    isWatching: bool = False
    self_url: str = Field("", alias="self")


class JiraWorklog(JiraModel):
    startAt: float = 0
    maxResults: float = 0
    total: float = 0
    worklogs: list[Any] = Field(default_factory=list)


class JiraAggregateProgress(JiraModel):
    progress: float = 0
    total: float = 0


class JiraFields(JiraModel):
    """Static issue fields plus the ``customfield_*`` values found by the extractor.

    ``custom_fields`` is never read from the payload itself. It is filled from
    the ``custom_fields`` entry of the validation context, which is how
    :func:`epicpoints.normalizers.jira.decode_event` hands over the output of
    :func:`epicpoints.normalizers.custom_fields.extract_custom_fields`.
    """

    aggregateprogress: JiraAggregateProgress = Field(default_factory=JiraAggregateProgress)
    created: str = ""
    creator: JiraUser = Field(default_factory=JiraUser)
    description: str = ""
    duedate: str | None = None
    fixVersions: list[JiraFixVersion] = Field(default_factory=list)
    issuetype: JiraIssueType = Field(
        default_factory=JiraIssueType,
        validation_alias=AliasChoices("issuetype", "issueType"),
    )
    priority: JiraPriority = Field(default_factory=JiraPriority)
    reporter: JiraUser = Field(default_factory=JiraUser)
    timespent: float | None = None
    timeestimate: float | None = None
    watches: JiraWatches = Field(default_factory=JiraWatches)
    worklog: JiraWorklog = Field(default_factory=JiraWorklog)
    custom_fields: dict[str, CustomFieldValue] = Field(
        default_factory=dict, validate_default=True
    )

    @field_validator("custom_fields", mode="before")
    @classmethod
    def _custom_fields_from_context(cls, value: Any, info: ValidationInfo) -> Any:
        context = info.context or {}
        return dict(context.get("custom_fields", {}))


# Keys owned by the static schema; the extractor never reports them.
STATIC_FIELD_KEYS: frozenset[str] = frozenset(
    {name for name in JiraFields.model_fields if name != "custom_fields"}
    | {"issueType"}
)


class JiraIssue(JiraModel):
    id: str = ""
    key: str = ""
    self_url: str = Field("", alias="self")
    fields: JiraFields = Field(default_factory=JiraFields)


class JiraChangelogItem(JiraModel):
    field: str = ""
    fieldtype: str = Field("", validation_alias=AliasChoices("fieldtype", "fieldType"))
    from_: str = Field("", alias="from")
    fromString: str = ""
    to: str = ""
    toString: str = ""


class JiraChangelog(JiraModel):
    id: str = ""
    items: list[JiraChangelogItem] = Field(default_factory=list)


class JiraWebhookEvent(JiraModel):
    webhookEvent: str = ""
    issue_event_type_name: str = ""
    timestamp: float = 0
    issue: JiraIssue = Field(default_factory=JiraIssue)
    user: JiraUser = Field(default_factory=JiraUser)
    changelog: JiraChangelog | None = None
