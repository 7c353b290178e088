"""Tax code and TDS/TCS category resolution.

Line items arrive with whatever tax label the originating screen used:
``GST18`` from quotes and challans, ``gst_18`` / ``igst_18`` from vendor
credits, ``none`` for untaxed rows, or a bare rate pulled from the item
master. Everything is normalised to a TaxCode here. Slab values are opaque
configuration; no rate is validated against tax authority rules.
"""

import re
from dataclasses import dataclass
from decimal import Decimal

import structlog

from gst_billing.domain.value_objects import coerce_amount

logger = structlog.stdlib.get_logger(__name__)

GST_SLABS: tuple[Decimal, ...] = tuple(
    Decimal(rate) for rate in ("0", "0.25", "3", "5", "12", "18", "28")
)

NON_TAXABLE_LABELS = frozenset(
    {
        "",
        "none",
        "no tax",
        "notax",
        "non-taxable",
        "non taxable",
        "nontaxable",
        "exempt",
        "nil",
        "nil rated",
        "nil-rated",
        "out of scope",
        "non-gst",
        "non gst",
    }
)

_LABEL_WITH_RATE = re.compile(
    r"^(?P<prefix>[a-z]*)\s*[_\s]*[\(\[]?\s*(?P<rate>\d+(?:\.\d+)?)\s*%?\s*[\)\]]?$"
)
_RATE_IN_TEXT = re.compile(r"(\d+(?:\.\d+)?)\s*%?\s*\]?\s*$")


@dataclass(frozen=True, slots=True)
class TaxCode:
    """A resolved line tax: a percentage, or the non-taxable sentinel."""

    label: str
    rate: Decimal = Decimal("0")
    taxable: bool = True

    def __post_init__(self) -> None:
        rate = coerce_amount(self.rate)
        if rate < 0:
            rate = Decimal("0")
        object.__setattr__(self, "rate", rate)

    @property
    def applies(self) -> bool:
        return self.taxable and self.rate > 0

    @classmethod
    def gst(cls, rate: Decimal | int | str) -> "TaxCode":
        value = coerce_amount(rate)
        return cls(label=f"GST{value.normalize():f}", rate=value)

    @classmethod
    def non_taxable(cls, label: str = "none") -> "TaxCode":
        return cls(label=label, rate=Decimal("0"), taxable=False)


NO_TAX = TaxCode.non_taxable()


def parse_tax_code(value: object) -> TaxCode:
    """Resolve a line's tax field to a TaxCode without ever raising."""
    if isinstance(value, TaxCode):
        return value
    if value is None:
        return NO_TAX
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return TaxCode.gst(coerce_amount(value))

    text = str(value).strip()
    key = " ".join(text.lower().split())
    if key in NON_TAXABLE_LABELS:
        return TaxCode.non_taxable(text or "none")

    match = _LABEL_WITH_RATE.match(key)
    if match and match.group("prefix") in ("", "gst", "igst", "tax", "vat"):
        return TaxCode(label=text, rate=Decimal(match.group("rate")))

    logger.warning("unknown_tax_code", tax_code=text)
    return TaxCode.non_taxable(text)


@dataclass(frozen=True, slots=True)
class WithholdingCategory:
    key: str
    label: str
    rate: Decimal


WITHHOLDING_CATEGORIES: tuple[WithholdingCategory, ...] = (
    WithholdingCategory("commission_brokerage_2", "Commission or Brokerage [2%]", Decimal("2")),
    WithholdingCategory("professional_fees_10", "Professional Fees [10%]", Decimal("10")),
    WithholdingCategory("rent_10", "Rent [10%]", Decimal("10")),
    WithholdingCategory("contractor_1", "Payment to Contractor [1%]", Decimal("1")),
    WithholdingCategory("contractor_2", "Payment to Contractor [2%]", Decimal("2")),
)

_CATEGORIES_BY_KEY = {category.key: category for category in WITHHOLDING_CATEGORIES}


def parse_withholding_rate(value: object) -> Decimal | None:
    """Resolve a TDS/TCS percentage from a category key, label or number.

    Returns None when nothing was selected or no percentage can be found.
    """
    if value is None:
        return None
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        rate = coerce_amount(value)
        return rate if rate > 0 else None

    text = str(value).strip()
    if not text:
        return None
    category = _CATEGORIES_BY_KEY.get(text.lower())
    if category is not None:
        return category.rate

    match = _RATE_IN_TEXT.search(text)
    if match is None:
        logger.warning("unknown_withholding_category", category=text)
        return None
    rate = Decimal(match.group(1))
    return rate if rate > 0 else None


__all__ = [
    "GST_SLABS",
    "NO_TAX",
    "NON_TAXABLE_LABELS",
    "TaxCode",
    "WITHHOLDING_CATEGORIES",
    "WithholdingCategory",
    "parse_tax_code",
    "parse_withholding_rate",
]
