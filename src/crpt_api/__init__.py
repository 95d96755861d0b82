"""crpt_api package: app/core/infra/config.

Expose the rate-limited registration client at the package level.
"""

from .app.api import AppConfig, CrptApiClient
from .core.domain.enums import SubmissionStatus, WindowUnit
from .core.domain.models import Description, Document, Product, SubmissionOutcome

import logging

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

__all__ = [
    "CrptApiClient",
    "AppConfig",
    "Description",
    "Document",
    "Product",
    "SubmissionOutcome",
    "SubmissionStatus",
    "WindowUnit",
]
