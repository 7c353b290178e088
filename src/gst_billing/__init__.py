from gst_billing.domain.documents import (
    DocumentCalculation,
    DocumentInput,
    DocumentTotals,
    LineItemInput,
    LineItemResult,
    TaxSplit,
)
from gst_billing.domain.tax_codes import TaxCode, parse_tax_code
from gst_billing.domain.value_objects import (
    DiscountType,
    DocumentType,
    QuantityPolicy,
    SplitGranularity,
    TaxRegime,
)

__all__ = [
    "DiscountType",
    "DocumentCalculation",
    "DocumentInput",
    "DocumentTotals",
    "DocumentType",
    "LineItemInput",
    "LineItemResult",
    "QuantityPolicy",
    "SplitGranularity",
    "TaxCode",
    "TaxRegime",
    "TaxSplit",
    "parse_tax_code",
]

__version__ = "0.1.0"
