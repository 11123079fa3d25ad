"""Async client for the configuration backend REST API."""

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from ccdash.config import settings
from ccdash.models.schemas import ServiceList, ServicePayload

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """The backend could not be reached or returned something unusable."""


class BackendClient:
    """Thin wrapper around the three backend endpoints.

    Usage::

        client = BackendClient("http://127.0.0.1:3000")
        services = await client.list_services()
        payload = await client.get_service(services[0])
        await client.put_key(services[0], "example", "42")
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.backend_url).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.request_timeout_seconds,
            transport=transport,
        )

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            resp = await self._client.request(method, path, **kwargs)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("[BACKEND] %s %s failed: %s", method, path, e)
            raise BackendError(f"{method} {path}: {e}") from e
        return resp

    async def _get_json(self, path: str) -> Any:
        resp = await self._request("GET", path)
        try:
            return resp.json()
        except ValueError as e:
            logger.warning("[BACKEND] GET %s returned invalid JSON", path)
            raise BackendError(f"GET {path}: invalid JSON") from e

    async def list_services(self) -> list[str]:
        """GET /api/1/services."""
        data = await self._get_json("/api/1/services")
        try:
            return ServiceList.model_validate(data).services
        except ValidationError as e:
            raise BackendError(f"Malformed service list: {e}") from e

    async def get_service(self, service: str) -> ServicePayload:
        """GET /api/1/services/{service}."""
        data = await self._get_json(f"/api/1/services/{service}")
        try:
            return ServicePayload.model_validate(data)
        except ValidationError as e:
            raise BackendError(f"Malformed payload for {service}: {e}") from e

    async def put_key(self, service: str, key: str, value: Any):
        """PUT the raw value of one configuration key."""
        body = "" if value is None else str(value)
        await self._request(
            "PUT",
            f"/api/1/services/{service}/keys/{key}",
            content=body.encode("utf-8"),
        )
        logger.info("[SAVE] %s/%s = %s", service, key, body)

    async def aclose(self):
        await self._client.aclose()
