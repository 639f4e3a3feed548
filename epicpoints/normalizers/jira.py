from pydantic import ValidationError

from epicpoints.errors import DecodeError
from epicpoints.models.webhooks.jira import JiraIssue, JiraWebhookEvent
from epicpoints.normalizers.custom_fields import (
    CUSTOM_FIELD_PREFIX,
    EVENT_FIELDS_PATH,
    extract_custom_fields,
    load_json,
)


def decode_event(body: bytes | str, prefix: str = CUSTOM_FIELD_PREFIX) -> JiraWebhookEvent:
    custom_fields = extract_custom_fields(body, EVENT_FIELDS_PATH, prefix)
    raw = load_json(body)
    if not isinstance(raw, dict):
        raise DecodeError(f"expected a JSON object, got {type(raw).__name__}")
    try:
        return JiraWebhookEvent.model_validate(
            raw, context={"custom_fields": custom_fields}
        )
    except ValidationError as exc:
        raise DecodeError(f"payload does not match the webhook schema: {exc}") from exc


def decode_issue(body: bytes | str, prefix: str = CUSTOM_FIELD_PREFIX) -> JiraIssue:
    custom_fields = extract_custom_fields(body, ("fields",), prefix)
    raw = load_json(body)
    if not isinstance(raw, dict):
        raise DecodeError(f"expected a JSON object, got {type(raw).__name__}")
    try:
        return JiraIssue.model_validate(raw, context={"custom_fields": custom_fields})
    except ValidationError as exc:
        raise DecodeError(f"issue does not match the Jira schema: {exc}") from exc
