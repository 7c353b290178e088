"""Single entry point for every document flow's totals calculation.

Quote, sales order, delivery challan, invoice, purchase order and vendor
credit screens all call ``DocumentCalculationServiceImpl.calculate`` with the
document they hold in memory, and merge ``to_payload`` into the save request.
The flows differ only through ``DocumentPolicy``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping

from gst_billing.config import Settings, get_settings
from gst_billing.domain.documents import DocumentCalculation, DocumentInput
from gst_billing.domain.value_objects import (
    DocumentType,
    QuantityPolicy,
    SplitGranularity,
    coerce_amount,
)
from gst_billing.logging_config import get_logger, log_context
from gst_billing.schemas import (
    DocumentPayload,
    DocumentTotalsPayload,
    LineItemTotalsPayload,
    TaxBreakdownPayload,
)
from gst_billing.services.aggregation import aggregate
from gst_billing.services.gst_split import determine_regime, split_document
from gst_billing.services.interfaces import DocumentCalculationService, SnapshotDrift
from gst_billing.services.line_items import compute_lines
from gst_billing.services.totals import (
    compute_totals,
    resolve_document_discount,
    resolve_withholding,
)

logger = get_logger(__name__)

ZERO = Decimal("0")


@dataclass(frozen=True)
class DocumentPolicy:
    """What a document flow is allowed to contribute to its totals.

    ``quantity_policy`` and ``split_granularity`` fall back to settings when
    left as None.
    """

    supports_withholding: bool = False
    supports_document_discount: bool = False
    quantity_policy: QuantityPolicy | None = None
    split_granularity: SplitGranularity | None = None


DOCUMENT_POLICIES: dict[DocumentType, DocumentPolicy] = {
    DocumentType.QUOTE: DocumentPolicy(),
    DocumentType.SALES_ORDER: DocumentPolicy(),
    DocumentType.DELIVERY_CHALLAN: DocumentPolicy(),
    DocumentType.INVOICE: DocumentPolicy(),
    DocumentType.PURCHASE_ORDER: DocumentPolicy(
        supports_withholding=True, supports_document_discount=True
    ),
    DocumentType.VENDOR_CREDIT: DocumentPolicy(
        supports_withholding=True, supports_document_discount=True
    ),
}

# Stored field name -> alternatives older documents used for the same value
_SNAPSHOT_FIELDS: dict[str, tuple[str, ...]] = {
    "subTotal": ("subTotal", "subtotal"),
    "taxAmount": ("taxAmount", "totalTax"),
    "cgst": ("cgst",),
    "sgst": ("sgst",),
    "igst": ("igst",),
    "total": ("total", "amount"),
    "balanceDue": ("balanceDue",),
}


class DocumentCalculationServiceImpl(DocumentCalculationService):
    def __init__(
        self,
        settings: Settings | None = None,
        policies: Mapping[DocumentType, DocumentPolicy] | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._policies = dict(DOCUMENT_POLICIES)
        if policies:
            self._policies.update(policies)

    def policy_for(self, document_type: DocumentType) -> DocumentPolicy:
        return self._policies.get(document_type, DocumentPolicy())

    def calculate(self, document: DocumentInput) -> DocumentCalculation:
        with log_context(document_type=document.document_type.value):
            return self._calculate(document)

    def _calculate(self, document: DocumentInput) -> DocumentCalculation:
        policy = self.policy_for(document.document_type)
        quantity_policy = policy.quantity_policy or self._settings.quantity_policy
        granularity = policy.split_granularity or self._settings.split_granularity

        lines = compute_lines(document.items, quantity_policy)
        sums = aggregate(lines)

        source_state, destination_state = self._supply_states(document)
        regime = determine_regime(source_state, destination_state, document.tax_regime)
        split, breakdown = split_document(lines, sums.total_tax, regime, granularity)

        document_discount = ZERO
        if policy.supports_document_discount:
            document_discount = resolve_document_discount(
                sums.sub_total,
                document.document_discount_value,
                document.document_discount_type,
            )
        elif document.document_discount_value > 0:
            logger.warning(
                "document_discount_ignored",
                discount_value=document.document_discount_value,
            )

        tds = tcs = ZERO
        if policy.supports_withholding:
            base = sums.sub_total - document_discount
            tds = resolve_withholding(document.tds_value, document.tds_rate, base)
            tcs = resolve_withholding(document.tcs_value, document.tcs_rate, base)
        elif self._has_withholding(document):
            logger.warning("withholding_ignored_for_sales_document")

        totals = compute_totals(
            taxable_subtotal=sums.sub_total,
            total_tax=sums.total_tax,
            shipping_charges=document.shipping_charges,
            adjustment=document.adjustment,
            tcs=tcs,
            tds=tds,
            document_discount=document_discount,
            split=split,
        )

        logger.debug(
            "document_calculated",
            line_count=len(lines),
            tax_regime=regime.value,
            sub_total=totals.sub_total,
            total_tax=totals.total_tax,
            grand_total=totals.grand_total,
        )

        return DocumentCalculation(
            document=document,
            lines=lines,
            regime=regime,
            split=split,
            totals=totals,
            breakdown=breakdown,
        )

    def to_payload(self, calculation: DocumentCalculation) -> dict[str, Any]:
        totals = calculation.totals
        items = [
            LineItemTotalsPayload(
                item_id=line.item.item_id,
                name=line.item.name,
                quantity=float(line.quantity),
                rate=float(line.item.rate),
                discount=float(line.item.discount_value),
                discount_type=line.item.discount_type.value,
                discount_amount=float(line.discount_amount),
                tax=float(line.tax_rate),
                tax_name=line.tax_name,
                amount=float(line.taxable_amount),
                tax_amount=float(line.tax_amount),
                total=float(line.line_total),
            )
            for line in calculation.lines
        ]
        breakdown = [
            TaxBreakdownPayload(
                name=entry.name,
                component=entry.component,
                rate=float(entry.rate),
                amount=float(entry.amount),
            )
            for entry in calculation.breakdown
        ]
        payload = DocumentTotalsPayload(
            document_type=calculation.document.document_type.value,
            tax_regime=calculation.regime.value,
            items=items,
            sub_total=float(totals.sub_total),
            discount_amount=float(totals.document_discount),
            tax_amount=float(totals.total_tax),
            cgst=float(totals.cgst),
            sgst=float(totals.sgst),
            igst=float(totals.igst),
            tax_breakdown=breakdown,
            shipping_charges=float(totals.shipping_charges),
            adjustment=float(totals.adjustment),
            adjustment_reason=calculation.document.adjustment_reason,
            tds_amount=float(totals.tds),
            tcs_amount=float(totals.tcs),
            total=float(totals.grand_total),
            balance_due=float(totals.balance_due),
        )
        return payload.model_dump(by_alias=True)

    def calculate_payload(
        self,
        payload: Mapping[str, Any],
        document_type: DocumentType | str | None = None,
    ) -> dict[str, Any]:
        document = DocumentPayload.parse(payload).to_input(document_type)
        return self.to_payload(self.calculate(document))

    def check_snapshot(
        self,
        payload: Mapping[str, Any],
        document_type: DocumentType | str | None = None,
        tolerance: Decimal | None = None,
    ) -> list[SnapshotDrift]:
        """Compare a stored document's totals with a fresh recomputation.

        Stored totals are a snapshot taken at save time; this reports every
        stored figure that drifted beyond ``tolerance`` without touching the
        stored document.
        """
        if tolerance is None:
            tolerance = self._settings.snapshot_tolerance
        document = DocumentPayload.parse(payload).to_input(document_type)
        calculation = self.calculate(document)
        fresh = self.to_payload(calculation)

        drifts: list[SnapshotDrift] = []
        for field, aliases in _SNAPSHOT_FIELDS.items():
            stored_key = next((key for key in aliases if key in payload), None)
            if stored_key is None:
                continue
            drift = self._compare(field, payload[stored_key], fresh[field], tolerance)
            if drift is not None:
                drifts.append(drift)

        stored_items = payload.get("items") or []
        if isinstance(stored_items, list):
            for index, (stored, line) in enumerate(zip(stored_items, fresh["items"])):
                if isinstance(stored, Mapping) and "amount" in stored:
                    drift = self._compare(
                        f"items[{index}].amount", stored["amount"], line["amount"], tolerance
                    )
                    if drift is not None:
                        drifts.append(drift)

        if drifts:
            with log_context(document_type=document.document_type.value):
                logger.warning("stale_document_totals", fields=[drift.field for drift in drifts])
        return drifts

    def _supply_states(self, document: DocumentInput) -> tuple[str | None, str | None]:
        organization_state = self._settings.organization_state
        if document.document_type.is_vendor_side:
            # Vendor supplies into the organization's state
            return document.source_state, document.destination_state or organization_state
        return document.source_state or organization_state, document.destination_state

    @staticmethod
    def _has_withholding(document: DocumentInput) -> bool:
        return bool(
            document.tds_value > 0
            or document.tcs_value > 0
            or document.tds_rate
            or document.tcs_rate
        )

    @staticmethod
    def _compare(
        field: str, stored_value: object, recomputed_value: float, tolerance: Decimal
    ) -> SnapshotDrift | None:
        stored = coerce_amount(stored_value)
        recomputed = coerce_amount(recomputed_value)
        if abs(recomputed - stored) <= tolerance:
            return None
        return SnapshotDrift(field=field, stored=stored, recomputed=recomputed)
