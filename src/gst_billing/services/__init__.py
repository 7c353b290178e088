from gst_billing.services.aggregation import Aggregate, aggregate, group_by_rate
from gst_billing.services.calculator import (
    DOCUMENT_POLICIES,
    DocumentCalculationServiceImpl,
    DocumentPolicy,
)
from gst_billing.services.formatting import (
    amount_in_words,
    format_amount,
    format_currency,
    format_percentage,
    round_for_display,
)
from gst_billing.services.gst_split import (
    determine_regime,
    normalize_state,
    split_by_rate,
    split_document,
    split_tax,
)
from gst_billing.services.interfaces import DocumentCalculationService, SnapshotDrift
from gst_billing.services.line_items import compute_line, compute_lines, resolve_quantity
from gst_billing.services.totals import (
    compute_totals,
    resolve_document_discount,
    resolve_withholding,
)

__all__ = [
    "Aggregate",
    "DOCUMENT_POLICIES",
    "DocumentCalculationService",
    "DocumentCalculationServiceImpl",
    "DocumentPolicy",
    "SnapshotDrift",
    "aggregate",
    "amount_in_words",
    "compute_line",
    "compute_lines",
    "compute_totals",
    "determine_regime",
    "format_amount",
    "format_currency",
    "format_percentage",
    "group_by_rate",
    "normalize_state",
    "resolve_document_discount",
    "resolve_quantity",
    "resolve_withholding",
    "round_for_display",
    "split_by_rate",
    "split_document",
    "split_tax",
]
