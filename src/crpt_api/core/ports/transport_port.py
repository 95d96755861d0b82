from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Protocol


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    body: str


class TransportPort(Protocol):
    def post_json(
        self,
        url: str,
        body: str,
        *,
        headers: Mapping[str, str] | None = None,
        timeout_seconds: float | None = None,
    ) -> TransportResponse:
        """POST an already-encoded JSON body. Raises TransportError on I/O failure."""
        ...
