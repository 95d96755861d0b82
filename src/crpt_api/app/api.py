from __future__ import annotations

from pathlib import Path

from dependency_injector import providers

from .container import Container
from ..config.settings import AppConfig
from ..core.domain.enums import SchedulerState, WindowUnit
from ..core.domain.models import Document, SubmissionOutcome, SubmissionRequest
from ..core.ports.transport_port import TransportPort


class CrptApiClient:
    """Rate-limited client for the document registration API.

    At most ``request_limit`` submissions hold a permit at a time. A background
    scheduler refills the permits once per window (``window_length`` units of
    ``window_unit``). Callers that find no permit block until one is released or
    the window is replenished.

    Example:
        # 10 submissions per second against the default endpoint
        with CrptApiClient("seconds", 10) as client:
            doc = client.load_document("document.json")
            outcome = client.submit(doc, "signature")
            if not outcome.ok:
                print(outcome.status, outcome.status_code)

        # Custom endpoint, 100 per minute, injected transport for tests
        client = CrptApiClient(WindowUnit.MINUTES, 100, "https://example.test/create", transport=fake)
        try:
            client.submit(doc, "sig", acquire_timeout=2.0)
        finally:
            client.close()
    """

    def __init__(
        self,
        window_unit: WindowUnit | str,
        request_limit: int,
        api_url: str | None = None,
        *,
        window_length: int | None = None,
        initial_delay_seconds: float | None = None,
        http_timeout_seconds: float | None = None,
        hold_permits_until_window: bool | None = None,
        signature_header: str | None = None,
        transport: TransportPort | None = None,
    ):
        """Initialize the client and start the replenishment scheduler.

        Args:
            window_unit: Time unit of the window (WindowUnit or its name, e.g. "seconds").
            request_limit: Permits per window. Must be positive.
            api_url: Registration endpoint. If None, uses CRPT_API_API_URL or the default URL.
            window_length: Window length in window_unit. If None, uses CRPT_API_WINDOW_LENGTH or 1.
            initial_delay_seconds: Delay before the first replenishment. If None, one window.
            http_timeout_seconds: Per-call HTTP timeout. If None, uses CRPT_API_HTTP_TIMEOUT_SECONDS or 5.
            hold_permits_until_window: If True, permits are only returned by replenishment,
                                       so the limit counts requests per window instead of
                                       concurrent requests.
            signature_header: If set, the signature is sent in this HTTP header.
            transport: Optional TransportPort replacing the default httpx client.

        Raises:
            ValueError: If request_limit or window_length is not positive, or window_unit
                        is unknown. Raised before any permit pool or scheduler is created.
        """
        config_dict: dict[str, object] = {
            "window_unit": window_unit,
            "request_limit": request_limit,
        }
        if api_url is not None:
            config_dict["api_url"] = api_url
        if window_length is not None:
            config_dict["window_length"] = window_length
        if initial_delay_seconds is not None:
            config_dict["initial_delay_seconds"] = initial_delay_seconds
        if http_timeout_seconds is not None:
            config_dict["http_timeout_seconds"] = http_timeout_seconds
        if hold_permits_until_window is not None:
            config_dict["hold_permits_until_window"] = hold_permits_until_window
        if signature_header is not None:
            config_dict["signature_header"] = signature_header

        config = AppConfig(**config_dict)

        self._container = Container()
        self._container.config.from_pydantic(config)
        if transport is not None:
            self._container.transport.override(providers.Object(transport))
        try:
            self._container.init_resources()
        except BaseException:
            # a scheduler started before the failure must not keep ticking
            self._container.shutdown_resources()
            raise
        self._scheduler = self._container.scheduler()

    @property
    def config(self) -> dict:
        return self._container.config()

    @property
    def available_permits(self) -> int:
        return self._container.permit_pool().available

    @property
    def scheduler_state(self) -> SchedulerState:
        return self._scheduler.state

    def submit(
        self,
        document: Document,
        signature: str,
        *,
        acquire_timeout: float | None = None,
    ) -> SubmissionOutcome:
        """Submit one document, blocking until a permit is available.

        Args:
            document: Document to register.
            signature: Document signature.
            acquire_timeout: Maximum seconds to wait for a permit. None waits indefinitely.

        Returns:
            SubmissionOutcome. Serialization, transport and HTTP failures are reported
            through the outcome status, not raised.
        """
        uc = self._container.submit_uc()
        return uc.execute(SubmissionRequest(document=document, signature=signature), acquire_timeout=acquire_timeout)

    def encode(self, document: Document) -> str:
        """Return the canonical JSON payload sent for document."""
        return self._container.codec().encode(document)

    def load_document(self, path: str | Path) -> Document:
        """Load a document from a JSON file.

        Raises:
            OSError: If the file cannot be read.
            SerializationError: If the file is not a valid document.
        """
        uc = self._container.load_uc()
        return uc.execute(path)

    def shutdown(self) -> None:
        """Stop the replenishment scheduler. Safe to call more than once.

        Submissions still in flight complete; callers blocked on a permit stay
        blocked unless they passed an acquire_timeout.
        """
        self._scheduler.stop()

    def close(self) -> None:
        """Stop the scheduler and release the HTTP client."""
        self.shutdown()
        self._container.shutdown_resources()

    def __enter__(self) -> CrptApiClient:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()


__all__ = [
    "CrptApiClient",
    "AppConfig",
]
