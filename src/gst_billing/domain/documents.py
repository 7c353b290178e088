from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Any

from gst_billing.domain.tax_codes import NO_TAX, TaxCode, parse_tax_code
from gst_billing.domain.value_objects import (
    DiscountType,
    DocumentType,
    TaxRegime,
    coerce_amount,
    parse_amount,
)

ZERO = Decimal("0")


def _non_negative(value: object) -> Decimal:
    return max(coerce_amount(value), ZERO)


@dataclass(frozen=True, slots=True)
class LineItemInput:
    """One editable row of a transactional document.

    ``quantity`` stays None when the field was empty or unusable; the
    calculator resolves it with the document type's quantity policy.
    """

    quantity: Decimal | None = None
    rate: Decimal = ZERO
    discount_value: Decimal = ZERO
    discount_type: DiscountType = DiscountType.PERCENTAGE
    tax: TaxCode = NO_TAX
    item_id: str | None = None
    name: str = ""
    description: str = ""
    hsn_sac: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "quantity", parse_amount(self.quantity))
        object.__setattr__(self, "rate", _non_negative(self.rate))
        object.__setattr__(self, "discount_value", _non_negative(self.discount_value))
        object.__setattr__(self, "discount_type", DiscountType.parse(self.discount_type))
        object.__setattr__(self, "tax", parse_tax_code(self.tax))


@dataclass(frozen=True, slots=True)
class LineItemResult:
    item: LineItemInput
    quantity: Decimal
    base_amount: Decimal
    discount_amount: Decimal
    taxable_amount: Decimal
    tax_amount: Decimal

    @property
    def line_total(self) -> Decimal:
        return self.taxable_amount + self.tax_amount

    @property
    def tax_rate(self) -> Decimal:
        return self.item.tax.rate if self.item.tax.taxable else ZERO

    @property
    def tax_name(self) -> str:
        return self.item.tax.label


@dataclass(frozen=True, slots=True)
class DocumentInput:
    """A document's calculation inputs as an immutable value.

    Edits go through ``add_item``/``replace_item``/``remove_item``/
    ``with_changes``, each returning a new DocumentInput so totals are
    always recomputed from scratch.
    """

    document_type: DocumentType = DocumentType.QUOTE
    items: tuple[LineItemInput, ...] = ()
    shipping_charges: Decimal = ZERO
    adjustment: Decimal = ZERO
    adjustment_reason: str = ""
    source_state: str | None = None
    destination_state: str | None = None
    tax_regime: TaxRegime | None = None
    document_discount_value: Decimal = ZERO
    document_discount_type: DiscountType = DiscountType.PERCENTAGE
    tds_value: Decimal = ZERO
    tcs_value: Decimal = ZERO
    tds_rate: Any = None
    tcs_rate: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "document_type", DocumentType(self.document_type))
        object.__setattr__(self, "items", tuple(self.items))
        object.__setattr__(self, "shipping_charges", _non_negative(self.shipping_charges))
        object.__setattr__(self, "adjustment", coerce_amount(self.adjustment))
        if self.tax_regime is not None:
            object.__setattr__(self, "tax_regime", TaxRegime.parse(self.tax_regime))
        object.__setattr__(
            self, "document_discount_value", _non_negative(self.document_discount_value)
        )
        object.__setattr__(
            self, "document_discount_type", DiscountType.parse(self.document_discount_type)
        )
        object.__setattr__(self, "tds_value", _non_negative(self.tds_value))
        object.__setattr__(self, "tcs_value", _non_negative(self.tcs_value))

    def add_item(self, item: LineItemInput) -> "DocumentInput":
        return replace(self, items=self.items + (item,))

    def replace_item(self, index: int, **changes: Any) -> "DocumentInput":
        items = list(self.items)
        items[index] = replace(items[index], **changes)
        return replace(self, items=tuple(items))

    def remove_item(self, index: int) -> "DocumentInput":
        items = list(self.items)
        del items[index]
        return replace(self, items=tuple(items))

    def with_changes(self, **changes: Any) -> "DocumentInput":
        return replace(self, **changes)


@dataclass(frozen=True, slots=True)
class TaxSplit:
    cgst: Decimal = ZERO
    sgst: Decimal = ZERO
    igst: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.cgst + self.sgst + self.igst


@dataclass(frozen=True, slots=True)
class TaxBreakdownEntry:
    component: str
    rate: Decimal
    amount: Decimal

    @property
    def name(self) -> str:
        return f"{self.component}{self.rate.normalize():f}"


@dataclass(frozen=True, slots=True)
class DocumentTotals:
    sub_total: Decimal
    total_tax: Decimal
    cgst: Decimal
    sgst: Decimal
    igst: Decimal
    shipping_charges: Decimal
    adjustment: Decimal
    grand_total: Decimal
    balance_due: Decimal
    document_discount: Decimal = ZERO
    tcs: Decimal = ZERO
    tds: Decimal = ZERO


@dataclass(frozen=True, slots=True)
class DocumentCalculation:
    document: DocumentInput
    lines: tuple[LineItemResult, ...]
    regime: TaxRegime
    split: TaxSplit
    totals: DocumentTotals
    breakdown: tuple[TaxBreakdownEntry, ...] = field(default=())


__all__ = [
    "DocumentCalculation",
    "DocumentInput",
    "DocumentTotals",
    "LineItemInput",
    "LineItemResult",
    "TaxBreakdownEntry",
    "TaxSplit",
]
