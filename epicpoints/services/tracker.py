import logging
from typing import Any, Protocol

import httpx

from epicpoints.errors import DecodeError, RemoteError
from epicpoints.models.reconciliation import JiraComment
from epicpoints.models.webhooks.jira import JiraIssue
from epicpoints.normalizers.custom_fields import CUSTOM_FIELD_PREFIX
from epicpoints.normalizers.jira import decode_issue

logger = logging.getLogger(__name__)

API_PREFIX = "/rest/api/2"


class TrackerClient(Protocol):
    async def get_issue(self, key: str) -> JiraIssue: ...

    async def update_issue(self, key: str, fields: dict[str, Any]) -> int: ...

    async def add_comment(self, key: str, body: str) -> JiraComment: ...


class JiraClient:
    """Jira REST v2 client shared by all in-flight requests."""

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        custom_field_prefix: str = CUSTOM_FIELD_PREFIX,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._prefix = custom_field_prefix
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + API_PREFIX,
            auth=httpx.BasicAuth(username, password),
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def get_issue(self, key: str) -> JiraIssue:
        resp = await self._request("GET", f"/issue/{key}")
        try:
            return decode_issue(resp.content, self._prefix)
        except DecodeError as exc:
            raise RemoteError(f"malformed issue {key}: {exc}") from exc

    async def update_issue(self, key: str, fields: dict[str, Any]) -> int:
        resp = await self._request("PUT", f"/issue/{key}", json={"fields": fields})
        return resp.status_code

    async def add_comment(self, key: str, body: str) -> JiraComment:
        resp = await self._request("POST", f"/issue/{key}/comment", json={"body": body})
        try:
            return JiraComment.model_validate(resp.json())
        except ValueError as exc:
            raise RemoteError(f"malformed comment response for {key}: {exc}") from exc

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            resp = await self._client.request(method, path, **kwargs)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise RemoteError(
                f"{method} {path} failed with {exc.response.status_code}: "
                f"{exc.response.text[:200]}"
            ) from exc
        except httpx.HTTPError as exc:
            raise RemoteError(f"{method} {path} failed: {exc}") from exc
        logger.debug(
            "Jira call completed",
            extra={"method": method, "path": path, "status_code": resp.status_code},
        )
        return resp
