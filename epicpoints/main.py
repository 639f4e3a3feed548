import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI

from epicpoints.api.routers import health, webhooks
from epicpoints.config import settings
from epicpoints.logging_config import setup_logging
from epicpoints.services.tracker import JiraClient, TrackerClient

logger = logging.getLogger(__name__)


def create_app(tracker: TrackerClient | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned: JiraClient | None = None
        if tracker is None:
            owned = JiraClient(
                settings.jira_base_url,
                settings.jira_username,
                settings.jira_password,
                custom_field_prefix=settings.custom_field_prefix,
            )
            app.state.tracker = owned
        else:
            app.state.tracker = tracker
        logger.info("Epic points bot started", extra={"jira": settings.jira_base_url})
        yield
        if owned is not None:
            await owned.aclose()
        logger.info("Epic points bot stopped")

    app = FastAPI(title="Epic Points Bot", lifespan=lifespan)
    app.include_router(health.router)
    app.include_router(webhooks.router)
    return app


setup_logging()
app = create_app()
