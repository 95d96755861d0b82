from __future__ import annotations

import logging
from pathlib import Path

from ..domain.models import Document
from ..ports.codec_port import DocumentCodecPort

logger = logging.getLogger(__name__)


class LoadDocumentUseCase:
    def __init__(self, codec: DocumentCodecPort) -> None:
        self._codec = codec

    def execute(self, path: str | Path) -> Document:
        p = Path(path)
        logger.info(f"Loading document from {p}")
        return self._codec.decode(p.read_bytes())
