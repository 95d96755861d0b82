from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .enums import SubmissionStatus, WindowUnit


@dataclass(frozen=True)
class Description:
    participant_inn: Optional[str] = None


@dataclass(frozen=True)
class Product:
    certificate_document: Optional[str] = None
    certificate_document_date: Optional[str] = None
    certificate_document_number: Optional[str] = None
    owner_inn: Optional[str] = None
    producer_inn: Optional[str] = None
    production_date: Optional[str] = None
    tnved_code: Optional[str] = None
    uit_code: Optional[str] = None
    uitu_code: Optional[str] = None


@dataclass(frozen=True)
class Document:
    description: Optional[Description] = None
    doc_id: Optional[str] = None
    doc_status: Optional[str] = None
    doc_type: Optional[str] = None
    import_request: bool = False
    owner_inn: Optional[str] = None
    participant_inn: Optional[str] = None
    producer_inn: Optional[str] = None
    production_date: Optional[str] = None
    production_type: Optional[str] = None
    products: tuple[Product, ...] = field(default_factory=tuple)
    reg_date: Optional[str] = None
    reg_number: Optional[str] = None


@dataclass(frozen=True)
class Window:
    """Replenishment cadence: `length` units of `unit`."""

    unit: WindowUnit
    length: int = 1

    def __post_init__(self) -> None:
        if not isinstance(self.unit, WindowUnit):
            object.__setattr__(self, "unit", WindowUnit.from_str(str(self.unit)))
        if self.length <= 0:
            raise ValueError(f"window length must be positive, got {self.length}")

    @property
    def seconds(self) -> float:
        return self.unit.seconds * self.length


@dataclass(frozen=True)
class SubmissionRequest:
    document: Document
    signature: str


@dataclass(frozen=True)
class SubmissionOutcome:
    status: SubmissionStatus
    status_code: Optional[int] = None
    body: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is SubmissionStatus.SUCCESS
