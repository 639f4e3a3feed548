from pydantic import BaseModel, Field


class ReconciliationRequest(BaseModel):
    issue_key: str
    story_points: float
    epic_key: str

    model_config = {"frozen": True}


class ReconciliationResult(BaseModel):
    issue_key: str
    epic_key: str
    subtracted: float
    remaining: float
    comment_id: str


class JiraComment(BaseModel):
    id: str = ""
    self_url: str = Field("", alias="self")
    body: str = ""

    model_config = {"populate_by_name": True}
