import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from epicpoints.api.dependencies import get_tracker
from epicpoints.config import settings
from epicpoints.errors import DecodeError
from epicpoints.normalizers.jira import decode_event
from epicpoints.services.reconciler import run_reconciliation
from epicpoints.services.tracker import TrackerClient
from epicpoints.services.trigger import should_reconcile

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/webhooks", status_code=202)
async def jira_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    tracker: TrackerClient = Depends(get_tracker),
) -> JSONResponse:
    body = await request.body()
    try:
        event = decode_event(body, settings.custom_field_prefix)
    except DecodeError as exc:
        logger.warning("Failed to decode Jira payload", extra={"error": str(exc)})
        raise HTTPException(status_code=400, detail=str(exc))

    changelog_items = len(event.changelog.items) if event.changelog else 0
    logger.info(
        "Webhook received",
        extra={
            "event": event.issue_event_type_name,
            "issue": event.issue.key,
            "description": event.issue.fields.description,
            "custom_fields": sorted(event.issue.fields.custom_fields),
            "changelog_items": changelog_items,
        },
    )

    if should_reconcile(event, settings.trigger_phrase):
        background_tasks.add_task(
            run_reconciliation,
            event,
            tracker,
            story_points_field=settings.story_points_field,
            epic_link_field=settings.epic_link_field,
        )
    else:
        logger.info("Reconciliation skipped", extra={"issue": event.issue.key})

    return JSONResponse(status_code=202, content={"result": "accepted"})
