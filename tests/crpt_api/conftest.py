"""tests/crpt_api/conftest.py

Common fixtures for the entire test suite.
"""

import threading
import time

import httpx
import pytest
from typer.testing import CliRunner

from crpt_api.core.domain.models import Description, Document, Product
from crpt_api.core.errors import TransportError
from crpt_api.core.ports.transport_port import TransportResponse


@pytest.fixture(scope="session")
def runner() -> CliRunner:
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture
def sample_document() -> Document:
    return Document(
        description=Description(participant_inn="7700000001"),
        doc_id="doc-1",
        doc_status="DRAFT",
        doc_type="LP_INTRODUCE_GOODS",
        import_request=True,
        owner_inn="7700000002",
        participant_inn="7700000001",
        producer_inn="7700000003",
        production_date="2024-01-15",
        production_type="OWN_PRODUCTION",
        products=(
            Product(
                certificate_document="CONFORMITY_CERTIFICATE",
                certificate_document_date="2024-01-10",
                certificate_document_number="CERT-1",
                owner_inn="7700000002",
                producer_inn="7700000003",
                production_date="2024-01-15",
                tnved_code="6403990000",
                uit_code="010463003407001221SxMGorvNuq6Wk91fgr92sxMG",
                uitu_code="UITU-1",
            ),
            Product(tnved_code="6404110000", uit_code="0104630034070012XXXX"),
        ),
        reg_date="2024-01-16",
        reg_number="REG-1",
    )


class FakeTransport:
    """In-memory TransportPort that records calls.

    ``responses`` is consumed in order; an Exception entry is raised instead of
    returned. ``delay`` keeps each call in flight for that many seconds.
    """

    def __init__(self, responses=None, *, delay: float = 0.0) -> None:
        self.responses = list(responses or [])
        self.delay = delay
        self.calls: list[dict] = []
        self.sent_at: list[float] = []
        self._lock = threading.Lock()

    def post_json(self, url, body, *, headers=None, timeout_seconds=None):
        with self._lock:
            self.sent_at.append(time.monotonic())
            self.calls.append({"url": url, "body": body, "headers": dict(headers or {}), "timeout": timeout_seconds})
            nxt = self.responses.pop(0) if self.responses else TransportResponse(200, "{}")
        if self.delay:
            time.sleep(self.delay)
        if isinstance(nxt, Exception):
            raise nxt
        return nxt


@pytest.fixture
def fake_transport_cls():
    return FakeTransport


@pytest.fixture
def transport_error():
    return TransportError("connection refused")


@pytest.fixture
def mock_httpx_client(monkeypatch):
    """
    Replaces httpx.Client with a mock that uses a MockTransport.

    Returns a handler function that tests can use to register mock responses.
    Each recorded call is a (method, url, headers, body) tuple.
    """
    responses = {}
    calls_log: list[tuple[str, str, httpx.Headers, bytes]] = []
    original_client = httpx.Client

    def add_response(
        url: str,
        method: str = "POST",
        status_code: int = 200,
        text: str = "",
        exc: Exception | None = None,
    ):
        """Register a mock response (or an exception to raise) for a given URL and method."""
        responses[(method.upper(), url)] = (status_code, text, exc)

    def mock_transport(request: httpx.Request) -> httpx.Response:
        method = request.method
        url = str(request.url)
        calls_log.append((method, url, request.headers, request.read()))
        key = (method, url)
        if key in responses:
            status, text, exc = responses[key]
            if exc is not None:
                raise exc
            return httpx.Response(status, text=text)

        return httpx.Response(404, text=f"Mock URL not found: {request.method} {request.url}")

    def patched_client(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(mock_transport)
        return original_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "Client", patched_client)
    add_response.calls = calls_log  # type: ignore[attr-defined]
    return add_response
