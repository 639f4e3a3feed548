import logging

from epicpoints.errors import InputError, ReconciliationError, RemoteError
from epicpoints.models.reconciliation import ReconciliationRequest, ReconciliationResult
from epicpoints.models.webhooks.jira import CustomFieldValue, JiraWebhookEvent
from epicpoints.services.tracker import TrackerClient

logger = logging.getLogger(__name__)

STORY_POINTS_FIELD = "customfield_10021"
EPIC_LINK_FIELD = "customfield_10025"


def _require_number(fields: dict[str, CustomFieldValue], name: str, what: str) -> float:
    if name not in fields:
        raise InputError(f"{what} ({name}) is missing")
    value = fields[name]
    if not isinstance(value, float):
        raise InputError(f"{what} ({name}) must be a number, got {value!r}")
    return value


def _require_text(fields: dict[str, CustomFieldValue], name: str, what: str) -> str:
    if name not in fields:
        raise InputError(f"{what} ({name}) is missing")
    value = fields[name]
    if not isinstance(value, str):
        raise InputError(f"{what} ({name}) must be an issue key, got {value!r}")
    return value


def build_request(
    event: JiraWebhookEvent,
    story_points_field: str = STORY_POINTS_FIELD,
    epic_link_field: str = EPIC_LINK_FIELD,
) -> ReconciliationRequest:
    fields = event.issue.fields.custom_fields
    return ReconciliationRequest(
        issue_key=event.issue.key,
        story_points=_require_number(fields, story_points_field, "story points"),
        epic_key=_require_text(fields, epic_link_field, "epic link"),
    )


def format_comment(story_points: float, epic_key: str, remaining: float) -> str:
    return (
        f"subtracted {int(story_points)} story points from epic {epic_key}. "
        f"the epic has {int(remaining)} story points left."
    )


async def reconcile(
    event: JiraWebhookEvent,
    tracker: TrackerClient,
    *,
    story_points_field: str = STORY_POINTS_FIELD,
    epic_link_field: str = EPIC_LINK_FIELD,
) -> ReconciliationResult:
    """Subtract the new issue's story points from its epic and report back.

    The epic update and the confirmation comment are separate Jira calls. If
    the comment fails, the epic keeps its new total.
    """
    request = build_request(event, story_points_field, epic_link_field)

    epic = await tracker.get_issue(request.epic_key)
    logger.info("Epic found", extra={"id": epic.id, "key": epic.key})
    try:
        epic_points = _require_number(
            epic.fields.custom_fields,
            story_points_field,
            f"story points of epic {request.epic_key}",
        )
    except InputError as exc:
        raise RemoteError(str(exc)) from exc

    # Negative totals are passed through as-is.
    remaining = epic_points - request.story_points

    status_code = await tracker.update_issue(
        request.epic_key, {story_points_field: remaining}
    )
    logger.info(
        "Epic updated",
        extra={"key": request.epic_key, "status_code": status_code, "story_points": remaining},
    )

    comment = await tracker.add_comment(
        request.issue_key,
        format_comment(request.story_points, request.epic_key, remaining),
    )
    logger.info("Comment added", extra={"id": comment.id, "self": comment.self_url})

    return ReconciliationResult(
        issue_key=request.issue_key,
        epic_key=request.epic_key,
        subtracted=request.story_points,
        remaining=remaining,
        comment_id=comment.id,
    )


async def run_reconciliation(
    event: JiraWebhookEvent,
    tracker: TrackerClient,
    *,
    story_points_field: str = STORY_POINTS_FIELD,
    epic_link_field: str = EPIC_LINK_FIELD,
) -> ReconciliationResult | None:
    """Background-task wrapper: failures end up in the log, not in the response."""
    try:
        result = await reconcile(
            event,
            tracker,
            story_points_field=story_points_field,
            epic_link_field=epic_link_field,
        )
    except ReconciliationError as exc:
        logger.error(
            "Reconciliation failed",
            extra={"issue": event.issue.key, "error_kind": exc.kind, "error": str(exc)},
        )
        return None
    except Exception:
        logger.exception("Reconciliation crashed", extra={"issue": event.issue.key})
        return None

    logger.info("Reconciliation completed", extra=result.model_dump())
    return result
