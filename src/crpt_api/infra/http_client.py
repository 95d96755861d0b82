from __future__ import annotations

import logging
from typing import Mapping, Optional

import httpx

from ..core.errors import TransportError
from ..core.ports.transport_port import TransportPort, TransportResponse

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


class HttpClient(TransportPort):
    def __init__(
        self,
        base_headers: Optional[Mapping[str, str]] = None,
        timeout_seconds: float = 5.0,
    ) -> None:
        self._timeout = timeout_seconds
        self._client = httpx.Client(
            timeout=timeout_seconds,
            headers=dict(base_headers or {}),
        )

    def post_json(
        self,
        url: str,
        body: str,
        *,
        headers: Mapping[str, str] | None = None,
        timeout_seconds: float | None = None,
    ) -> TransportResponse:
        timeout = self._timeout if timeout_seconds is None else timeout_seconds
        request_headers = {**JSON_HEADERS, **dict(headers or {})}
        logger.debug(f"POST {url} ({len(body)} chars, timeout={timeout}s)")
        try:
            resp = self._client.post(
                url,
                content=body.encode("utf-8"),
                headers=request_headers,
                timeout=timeout,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"POST {url} failed: {e}") from e
        except UnicodeEncodeError as e:
            # header values must be ASCII
            raise TransportError(f"POST {url} has a non-encodable header: {e}") from e
        return TransportResponse(status_code=resp.status_code, body=resp.text)

    def close(self) -> None:
        self._client.close()
