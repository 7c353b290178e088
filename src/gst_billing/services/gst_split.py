"""CGST/SGST versus IGST split.

The regime is decided once per document by comparing the supply states, and
the split is applied to aggregated tax rather than line by line so that
halving never accumulates rounding drift across rows.
"""

import re
from decimal import Decimal
from typing import Iterable

from gst_billing.domain.documents import LineItemResult, TaxBreakdownEntry, TaxSplit
from gst_billing.domain.value_objects import SplitGranularity, TaxRegime
from gst_billing.logging_config import get_logger
from gst_billing.services.aggregation import group_by_rate

logger = get_logger(__name__)

ZERO = Decimal("0")
TWO = Decimal("2")

GST_STATE_CODES: dict[str, str] = {
    "01": "Jammu and Kashmir",
    "02": "Himachal Pradesh",
    "03": "Punjab",
    "04": "Chandigarh",
    "05": "Uttarakhand",
    "06": "Haryana",
    "07": "Delhi",
    "08": "Rajasthan",
    "09": "Uttar Pradesh",
    "10": "Bihar",
    "11": "Sikkim",
    "12": "Arunachal Pradesh",
    "13": "Nagaland",
    "14": "Manipur",
    "15": "Mizoram",
    "16": "Tripura",
    "17": "Meghalaya",
    "18": "Assam",
    "19": "West Bengal",
    "20": "Jharkhand",
    "21": "Odisha",
    "22": "Chhattisgarh",
    "23": "Madhya Pradesh",
    "24": "Gujarat",
    "26": "Dadra and Nagar Haveli and Daman and Diu",
    "27": "Maharashtra",
    "28": "Andhra Pradesh",
    "29": "Karnataka",
    "30": "Goa",
    "31": "Lakshadweep",
    "32": "Kerala",
    "33": "Tamil Nadu",
    "34": "Puducherry",
    "35": "Andaman and Nicobar Islands",
    "36": "Telangana",
    "37": "Andhra Pradesh",
    "38": "Ladakh",
    "97": "Other Territory",
}

# "27 - Maharashtra", "27", or a GSTIN such as "27AABCT1234F1ZP"
_LEADING_STATE_CODE = re.compile(r"^(\d{2})(?:\D|$)")


def normalize_state(value: str | None) -> str | None:
    """Canonical comparison key for a supply state, or None when blank."""
    if value is None:
        return None
    text = " ".join(str(value).split())
    if not text:
        return None
    match = _LEADING_STATE_CODE.match(text)
    if match and match.group(1) in GST_STATE_CODES:
        text = GST_STATE_CODES[match.group(1)]
    return text.lower()


def determine_regime(
    source_state: str | None,
    destination_state: str | None,
    tax_regime: TaxRegime | str | None = None,
) -> TaxRegime:
    if tax_regime is not None:
        return TaxRegime.parse(tax_regime)

    source = normalize_state(source_state)
    destination = normalize_state(destination_state)
    if source is None or destination is None:
        logger.debug(
            "tax_regime_defaulted",
            source_state=source_state,
            destination_state=destination_state,
        )
        return TaxRegime.INTRA_STATE
    if source == destination:
        return TaxRegime.INTRA_STATE
    return TaxRegime.INTER_STATE


def split_tax(total_tax: Decimal, regime: TaxRegime) -> TaxSplit:
    if total_tax <= 0:
        return TaxSplit()
    if regime is TaxRegime.INTER_STATE:
        return TaxSplit(igst=total_tax)
    half = total_tax / TWO
    return TaxSplit(cgst=half, sgst=half)


def split_by_rate(
    lines: Iterable[LineItemResult], regime: TaxRegime
) -> list[TaxBreakdownEntry]:
    """Per-rate components, e.g. CGST9 + SGST9 for an intra-state 18% group."""
    entries: list[TaxBreakdownEntry] = []
    for rate, amount in group_by_rate(lines):
        if regime is TaxRegime.INTER_STATE:
            entries.append(TaxBreakdownEntry("IGST", rate, amount))
        else:
            entries.append(TaxBreakdownEntry("CGST", rate / TWO, amount / TWO))
            entries.append(TaxBreakdownEntry("SGST", rate / TWO, amount / TWO))
    return entries


def split_document(
    lines: Iterable[LineItemResult],
    total_tax: Decimal,
    regime: TaxRegime,
    granularity: SplitGranularity = SplitGranularity.DOCUMENT,
) -> tuple[TaxSplit, tuple[TaxBreakdownEntry, ...]]:
    """Split a document's tax using exactly one aggregation granularity.

    DOCUMENT halves (or keeps whole) the aggregated total and returns no
    per-rate breakdown. BY_RATE derives the document components by summing
    the per-rate entries it returns.
    """
    if granularity is SplitGranularity.DOCUMENT:
        return split_tax(total_tax, regime), ()

    entries = tuple(split_by_rate(lines, regime))
    totals = {"CGST": ZERO, "SGST": ZERO, "IGST": ZERO}
    for entry in entries:
        totals[entry.component] += entry.amount
    split = TaxSplit(cgst=totals["CGST"], sgst=totals["SGST"], igst=totals["IGST"])
    return split, entries
