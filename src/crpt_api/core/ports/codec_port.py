from __future__ import annotations

from typing import Protocol

from ..domain.models import Document


class DocumentCodecPort(Protocol):
    def encode(self, document: Document) -> str:
        """Return the canonical JSON payload for document. Raises SerializationError."""
        ...

    def decode(self, payload: str | bytes) -> Document:
        """Parse a JSON payload into a Document. Raises SerializationError."""
        ...
