from __future__ import annotations

import logging
from dataclasses import asdict

from pydantic import ValidationError

from ..core.domain.models import Document
from ..core.errors import SerializationError
from ..core.ports.codec_port import DocumentCodecPort
from .schemas import DocumentSchema

logger = logging.getLogger(__name__)


class JsonDocumentCodec(DocumentCodecPort):
    """Canonical JSON codec for registration documents.

    Keys are emitted in schema field order with their wire names
    (``importRequest``, ``participantInn``). Null fields are omitted;
    ``importRequest`` is always present.
    """

    def encode(self, document: Document) -> str:
        if not isinstance(document, Document):
            raise SerializationError(f"expected Document, got {type(document).__name__}")
        try:
            schema = DocumentSchema.model_validate(asdict(document))
        except (TypeError, ValidationError) as e:
            raise SerializationError(f"malformed document {document.doc_id!r}: {e}") from e
        return schema.model_dump_json(by_alias=True, exclude_none=True)

    def decode(self, payload: str | bytes) -> Document:
        try:
            schema = DocumentSchema.model_validate_json(payload)
        except ValidationError as e:
            raise SerializationError(f"invalid document payload: {e}") from e
        logger.debug(f"Decoded document {schema.doc_id!r} with {len(schema.products or [])} products")
        return schema.to_domain()
