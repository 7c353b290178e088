from gst_billing.domain.documents import (
    DocumentCalculation,
    DocumentInput,
    DocumentTotals,
    LineItemInput,
    LineItemResult,
    TaxBreakdownEntry,
    TaxSplit,
)
from gst_billing.domain.tax_codes import (
    GST_SLABS,
    NO_TAX,
    WITHHOLDING_CATEGORIES,
    TaxCode,
    WithholdingCategory,
    parse_tax_code,
    parse_withholding_rate,
)
from gst_billing.domain.value_objects import (
    DiscountType,
    DocumentType,
    QuantityPolicy,
    SplitGranularity,
    TaxRegime,
    WithholdingType,
    coerce_amount,
    parse_amount,
)

__all__ = [
    "DiscountType",
    "DocumentCalculation",
    "DocumentInput",
    "DocumentTotals",
    "DocumentType",
    "GST_SLABS",
    "LineItemInput",
    "LineItemResult",
    "NO_TAX",
    "QuantityPolicy",
    "SplitGranularity",
    "TaxBreakdownEntry",
    "TaxCode",
    "TaxRegime",
    "TaxSplit",
    "WITHHOLDING_CATEGORIES",
    "WithholdingCategory",
    "WithholdingType",
    "coerce_amount",
    "parse_amount",
    "parse_tax_code",
    "parse_withholding_rate",
]
