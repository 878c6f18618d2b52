"""Shared request handling for upstream service clients."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.domain.exceptions import UpstreamServiceError

logger = logging.getLogger(__name__)


class UpstreamClient:
    """Issue bounded GET requests against one upstream service.

    Timeouts and transport errors are raised as
    :class:`UpstreamServiceError` tagged with ``service_name``; HTTP error
    statuses are returned so each client can decide what they mean.
    """

    service_name = "upstream"

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def _get(self, path: str, *, params: dict[str, str] | None = None) -> httpx.Response:
        url = f"{self._base_url}{path}"
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                return client.get(url, params=params)
        except httpx.TimeoutException as exc:
            logger.warning("%s service timed out calling %s", self.service_name, path)
            raise UpstreamServiceError(
                f"Timed out communicating with {self.service_name} service",
                service=self.service_name,
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("%s service request failed: %s", self.service_name, exc)
            raise UpstreamServiceError(
                f"Error communicating with {self.service_name} service: {exc}",
                service=self.service_name,
            ) from exc

    def _unexpected_status(self, response: httpx.Response) -> UpstreamServiceError:
        logger.warning(
            "%s service responded with status %s", self.service_name, response.status_code
        )
        return UpstreamServiceError(
            f"Error communicating with {self.service_name} service: "
            f"status {response.status_code}",
            service=self.service_name,
        )

    @staticmethod
    def _body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text


__all__ = ["UpstreamClient"]
