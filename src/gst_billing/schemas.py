"""Pydantic v2 schemas for documents exchanged with the persistence boundary.

Incoming documents are read leniently: the quote, challan, sales-order,
purchase-order and vendor-credit screens each saved slightly different field
names, and numeric fields may hold strings, blanks or garbage that the
engine coerces later. Outgoing payloads use the camelCase names the stored
JSON documents carry.
"""

from typing import Any, Mapping

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from gst_billing.domain.documents import DocumentInput, LineItemInput
from gst_billing.domain.value_objects import DocumentType, TaxRegime, WithholdingType
from gst_billing.exceptions import (
    InvalidDocumentPayloadError,
    InvalidTaxRegimeError,
    UnknownDocumentTypeError,
)


def _is_filled(value: Any) -> bool:
    return value is not None and str(value).strip() != ""


# Incoming Schemas
class LineItemPayload(BaseModel):
    """Schema for a stored line item."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    quantity: Any = Field(default=None, validation_alias=AliasChoices("quantity", "qty"))
    rate: Any = Field(
        default=0, validation_alias=AliasChoices("rate", "unitPrice", "price")
    )
    discount: Any = Field(
        default=0, validation_alias=AliasChoices("discount", "discountValue")
    )
    discount_type: Any = Field(
        default=None, validation_alias=AliasChoices("discountType", "discount_type")
    )
    # taxName carries the label when "tax" holds the resolved percentage
    tax_name: Any = Field(default=None, validation_alias=AliasChoices("taxName", "tax_name"))
    tax: Any = Field(default=None, validation_alias=AliasChoices("tax", "taxRate", "gstRate"))
    item_id: str | int | None = Field(
        default=None, validation_alias=AliasChoices("itemId", "item_id")
    )
    name: str | None = Field(default=None, validation_alias=AliasChoices("name", "itemName"))
    description: str | None = None
    hsn_sac: str | None = Field(default=None, validation_alias=AliasChoices("hsnSac", "hsn_sac"))

    def to_input(self) -> LineItemInput:
        return LineItemInput(
            quantity=self.quantity,
            rate=self.rate,
            discount_value=self.discount,
            discount_type=self.discount_type,
            tax=self.tax_name if _is_filled(self.tax_name) else self.tax,
            item_id=None if self.item_id is None else str(self.item_id),
            name=self.name or "",
            description=self.description or "",
            hsn_sac=self.hsn_sac,
        )


class DocumentPayload(BaseModel):
    """Schema for a stored transactional document."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    document_type: str | None = Field(
        default=None, validation_alias=AliasChoices("documentType", "document_type")
    )
    items: list[LineItemPayload] = Field(
        default_factory=list, validation_alias=AliasChoices("items", "lineItems")
    )
    shipping_charges: Any = Field(
        default=0, validation_alias=AliasChoices("shippingCharges", "shipping")
    )
    adjustment: Any = 0
    adjustment_reason: str | None = Field(
        default=None,
        validation_alias=AliasChoices("adjustmentReason", "adjustmentDescription"),
    )
    source_state: str | None = Field(
        default=None, validation_alias=AliasChoices("sourceState", "sourceOfSupply")
    )
    destination_state: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "destinationState", "destinationOfSupply", "placeOfSupply"
        ),
    )
    tax_regime: str | None = Field(default=None, validation_alias=AliasChoices("taxRegime"))
    discount_value: Any = Field(
        default=0, validation_alias=AliasChoices("discountValue", "discount")
    )
    discount_type: Any = Field(default=None, validation_alias=AliasChoices("discountType"))
    tds_value: Any = Field(default=0, validation_alias=AliasChoices("tdsValue", "tds"))
    tcs_value: Any = Field(default=0, validation_alias=AliasChoices("tcsValue", "tcs"))
    tds_rate: Any = Field(default=None, validation_alias=AliasChoices("tdsRate", "tdsType"))
    tcs_rate: Any = Field(default=None, validation_alias=AliasChoices("tcsRate", "tcsType"))
    # Vendor credits store one selection plus whether it is TDS or TCS
    tds_tcs: Any = Field(default=None, validation_alias=AliasChoices("tdsTcs"))
    tax_type: str | None = Field(default=None, validation_alias=AliasChoices("taxType"))

    @classmethod
    def parse(cls, data: object, source: str | None = None) -> "DocumentPayload":
        if not isinstance(data, Mapping):
            raise InvalidDocumentPayloadError("document must be a JSON object", source)
        try:
            return cls.model_validate(dict(data))
        except PydanticValidationError as e:
            raise InvalidDocumentPayloadError(str(e), source) from e

    def resolve_document_type(
        self, document_type: DocumentType | str | None = None
    ) -> DocumentType:
        value = document_type or self.document_type or DocumentType.QUOTE
        if isinstance(value, DocumentType):
            return value
        key = value.strip().lower().replace("-", "_").replace(" ", "_")
        try:
            return DocumentType(key)
        except ValueError as e:
            raise UnknownDocumentTypeError(value) from e

    def to_input(self, document_type: DocumentType | str | None = None) -> DocumentInput:
        tax_regime = None
        if self.tax_regime:
            try:
                tax_regime = TaxRegime.parse(self.tax_regime)
            except ValueError as e:
                raise InvalidTaxRegimeError(self.tax_regime) from e

        tds_rate, tcs_rate = self.tds_rate, self.tcs_rate
        if self.tds_tcs:
            if (self.tax_type or WithholdingType.TDS.value).lower() == WithholdingType.TCS.value:
                tcs_rate = tcs_rate or self.tds_tcs
            else:
                tds_rate = tds_rate or self.tds_tcs

        return DocumentInput(
            document_type=self.resolve_document_type(document_type),
            items=tuple(item.to_input() for item in self.items),
            shipping_charges=self.shipping_charges,
            adjustment=self.adjustment,
            adjustment_reason=self.adjustment_reason or "",
            source_state=self.source_state,
            destination_state=self.destination_state,
            tax_regime=tax_regime,
            document_discount_value=self.discount_value,
            document_discount_type=self.discount_type,
            tds_value=self.tds_value,
            tcs_value=self.tcs_value,
            tds_rate=tds_rate,
            tcs_rate=tcs_rate,
        )


# Outgoing Schemas
class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LineItemTotalsPayload(_CamelModel):
    """Computed fields written back onto each stored line item."""

    item_id: str | None = None
    name: str = ""
    quantity: float
    rate: float
    discount: float
    discount_type: str
    discount_amount: float
    tax: float
    tax_name: str
    amount: float
    tax_amount: float
    total: float


class TaxBreakdownPayload(_CamelModel):
    name: str
    component: str
    rate: float
    amount: float


class DocumentTotalsPayload(_CamelModel):
    """Computed document fields merged into the save payload."""

    document_type: str
    tax_regime: str
    items: list[LineItemTotalsPayload]
    sub_total: float
    discount_amount: float
    tax_amount: float
    cgst: float
    sgst: float
    igst: float
    tax_breakdown: list[TaxBreakdownPayload] = Field(default_factory=list)
    shipping_charges: float
    adjustment: float
    adjustment_reason: str = ""
    tds_amount: float
    tcs_amount: float
    total: float
    balance_due: float
