"""
Transport protocol for sidecar REST calls.

Defines the seam where concrete HTTP implementations plug in. The
sidecar client depends on this protocol, not on httpx directly, so the
transport can be swapped for test fakes without editing parsing logic.

Concrete implementations:
    - HttpxTransport (default, uses httpx.AsyncClient)
    - FakeTransport (tests, returns canned responses)
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

import httpx

from asset_transfer.config import settings
from asset_transfer.logger import get_logger

log = get_logger(__name__)


@runtime_checkable
class HttpTransport(Protocol):
    """Async transport for JSON GET requests."""

    async def get_json(
        self, url: str, params: Mapping[str, Any] | None = None
    ) -> dict[str, Any] | list[Any] | None:
        """Send a GET request and return the parsed JSON body.

        Returns:
            Parsed JSON, or None when the resource does not exist (404).

        Raises:
            Exception: On transport-level failures and non-404 error
                statuses. The sidecar client lets these propagate.
        """
        ...


class HttpxTransport:
    """Default transport using httpx.AsyncClient."""

    def __init__(self, timeout: float | None = None) -> None:
        self._timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_S

    async def get_json(
        self, url: str, params: Mapping[str, Any] | None = None
    ) -> dict[str, Any] | list[Any] | None:
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            response = await client.get(url, params=params, headers={"Accept": "application/json"})
            if response.status_code == 404:
                log.debug("[SIDECAR][GET] not found url=%s", url)
                return None
            try:
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                log.warning(
                    "[SIDECAR][GET] failed url=%s status=%s body=%s",
                    url,
                    exc.response.status_code,
                    exc.response.text[:200],
                )
                raise
            result: dict[str, Any] | list[Any] = response.json()
            return result
