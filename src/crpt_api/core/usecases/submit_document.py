from __future__ import annotations

import logging
from typing import Mapping

from ..domain.enums import SubmissionStatus
from ..domain.models import SubmissionOutcome, SubmissionRequest
from ..errors import SerializationError, TransportError
from ..ports.codec_port import DocumentCodecPort
from ..ports.permit_port import PermitGatePort
from ..ports.transport_port import TransportPort

logger = logging.getLogger(__name__)

SUCCESS_STATUS = 200


class SubmitDocumentUseCase:
    """Admission gate -> codec -> transport for one document submission.

    Every acquired permit is released in a ``finally`` block, unless
    ``hold_permits_until_window`` is set: then the permit stays consumed until
    the next replenishment tick, which makes the gate a strict
    N-requests-per-window limiter instead of a bounded-concurrency one.
    """

    def __init__(
        self,
        gate: PermitGatePort,
        codec: DocumentCodecPort,
        transport: TransportPort,
        api_url: str,
        *,
        timeout_seconds: float = 5.0,
        hold_permits_until_window: bool = False,
        signature_header: str | None = None,
    ) -> None:
        self._gate = gate
        self._codec = codec
        self._transport = transport
        self._api_url = api_url
        self._timeout = timeout_seconds
        self._hold = hold_permits_until_window
        self._signature_header = signature_header

    def execute(self, request: SubmissionRequest, *, acquire_timeout: float | None = None) -> SubmissionOutcome:
        doc_id = getattr(request.document, "doc_id", None)
        if not self._gate.acquire(timeout=acquire_timeout):
            logger.warning(f"No permit for document {doc_id!r} within {acquire_timeout}s")
            return SubmissionOutcome(
                status=SubmissionStatus.ADMISSION_TIMEOUT,
                error=f"no permit available within {acquire_timeout}s",
            )
        try:
            return self._submit(request)
        finally:
            if not self._hold:
                self._gate.release()

    def _submit(self, request: SubmissionRequest) -> SubmissionOutcome:
        try:
            body = self._codec.encode(request.document)
        except SerializationError as e:
            logger.error(f"Serialization failed: {e}")
            return SubmissionOutcome(status=SubmissionStatus.SERIALIZATION_ERROR, error=str(e))

        try:
            resp = self._transport.post_json(
                self._api_url,
                body,
                headers=self._headers(request.signature),
                timeout_seconds=self._timeout,
            )
        except TransportError as e:
            logger.error(f"Transport failed: {e}")
            return SubmissionOutcome(status=SubmissionStatus.TRANSPORT_ERROR, error=str(e))

        if resp.status_code == SUCCESS_STATUS:
            logger.info(f"Success: {resp.body}")
            return SubmissionOutcome(status=SubmissionStatus.SUCCESS, status_code=resp.status_code, body=resp.body)
        logger.warning(f"Error: {resp.status_code}")
        return SubmissionOutcome(status=SubmissionStatus.REJECTED, status_code=resp.status_code, body=resp.body)

    def _headers(self, signature: str) -> Mapping[str, str]:
        if self._signature_header and signature:
            return {self._signature_header: signature}
        return {}
