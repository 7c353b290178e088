import re
import sys
from decimal import Decimal, InvalidOperation
from enum import Enum

_NUMBER_NOISE = re.compile(r"[,\s₹]|^Rs\.?", re.IGNORECASE)

# Largest magnitude a browser number field can hold; anything beyond reads as infinite
_MAX_AMOUNT = Decimal(sys.float_info.max)


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FLAT = "flat"

    @classmethod
    def parse(cls, value: "DiscountType | str | None") -> "DiscountType":
        if isinstance(value, DiscountType):
            return value
        key = str(value or "").strip().lower()
        if key in ("flat", "amount", "fixed", "value", "₹", "inr"):
            return cls.FLAT
        return cls.PERCENTAGE


class TaxRegime(str, Enum):
    INTRA_STATE = "intra-state"
    INTER_STATE = "inter-state"

    @classmethod
    def parse(cls, value: "TaxRegime | str") -> "TaxRegime":
        if isinstance(value, TaxRegime):
            return value
        key = str(value).strip().lower().replace("_", "-")
        if key in ("intra", "intra-state", "intrastate"):
            return cls.INTRA_STATE
        if key in ("inter", "inter-state", "interstate"):
            return cls.INTER_STATE
        raise ValueError(f"Invalid tax regime: {value}")


class DocumentType(str, Enum):
    QUOTE = "quote"
    SALES_ORDER = "sales_order"
    DELIVERY_CHALLAN = "delivery_challan"
    INVOICE = "invoice"
    PURCHASE_ORDER = "purchase_order"
    VENDOR_CREDIT = "vendor_credit"

    @property
    def is_vendor_side(self) -> bool:
        return self in (DocumentType.PURCHASE_ORDER, DocumentType.VENDOR_CREDIT)


class QuantityPolicy(str, Enum):
    DEFAULT_TO_ONE = "default_to_one"
    ALLOW_ZERO = "allow_zero"


class SplitGranularity(str, Enum):
    DOCUMENT = "document"
    BY_RATE = "by_rate"


class WithholdingType(str, Enum):
    TDS = "tds"
    TCS = "tcs"


def parse_amount(value: object) -> Decimal | None:
    """Convert an untrusted field value to a finite Decimal, or None.

    Strings may carry thousands separators or a rupee prefix. Anything that
    is missing, unparseable, NaN, infinite or beyond the float range yields
    None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, int):
        number = Decimal(value)
    elif isinstance(value, float):
        number = Decimal(str(value))
    else:
        text = _NUMBER_NOISE.sub("", str(value).strip())
        if not text:
            return None
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
    if not number.is_finite() or number.copy_abs() > _MAX_AMOUNT:
        return None
    return number


def coerce_amount(value: object, default: Decimal | int = 0) -> Decimal:
    """Like parse_amount, but substitutes ``default`` for unusable values."""
    number = parse_amount(value)
    if number is None:
        return Decimal(default)
    return number


__all__ = [
    "DiscountType",
    "DocumentType",
    "QuantityPolicy",
    "SplitGranularity",
    "TaxRegime",
    "WithholdingType",
    "coerce_amount",
    "parse_amount",
]
