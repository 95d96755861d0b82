from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..core.domain.models import Description, Document, Product


class DescriptionSchema(BaseModel):
	"""Document description block"""
	model_config = ConfigDict(populate_by_name=True, extra="ignore")

	participant_inn: Optional[str] = Field(default=None, alias="participantInn")


class ProductSchema(BaseModel):
	"""Single product entry of a registration document"""
	model_config = ConfigDict(extra="ignore")

	certificate_document: Optional[str] = None
	certificate_document_date: Optional[str] = None
	certificate_document_number: Optional[str] = None
	owner_inn: Optional[str] = None
	producer_inn: Optional[str] = None
	production_date: Optional[str] = None
	tnved_code: Optional[str] = None
	uit_code: Optional[str] = None
	uitu_code: Optional[str] = None

	def to_domain(self) -> Product:
		return Product(**self.model_dump())


class DocumentSchema(BaseModel):
	"""Wire form of a registration document. Field order is the payload key order."""
	model_config = ConfigDict(populate_by_name=True, extra="ignore")

	description: Optional[DescriptionSchema] = None
	doc_id: Optional[str] = None
	doc_status: Optional[str] = None
	doc_type: Optional[str] = None
	import_request: bool = Field(default=False, alias="importRequest")
	owner_inn: Optional[str] = None
	participant_inn: Optional[str] = None
	producer_inn: Optional[str] = None
	production_date: Optional[str] = None
	production_type: Optional[str] = None
	products: Optional[list[ProductSchema]] = None
	reg_date: Optional[str] = None
	reg_number: Optional[str] = None

	def to_domain(self) -> Document:
		description = None
		if self.description is not None:
			description = Description(participant_inn=self.description.participant_inn)
		return Document(
			description=description,
			doc_id=self.doc_id,
			doc_status=self.doc_status,
			doc_type=self.doc_type,
			import_request=self.import_request,
			owner_inn=self.owner_inn,
			participant_inn=self.participant_inn,
			producer_inn=self.producer_inn,
			production_date=self.production_date,
			production_type=self.production_type,
			products=tuple(p.to_domain() for p in (self.products or [])),
			reg_date=self.reg_date,
			reg_number=self.reg_number,
		)
