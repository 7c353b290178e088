"""Document totals: shipping, adjustment, TDS/TCS, grand total and balance due."""

from decimal import Decimal

from gst_billing.domain.documents import DocumentTotals, TaxSplit
from gst_billing.domain.tax_codes import parse_withholding_rate
from gst_billing.domain.value_objects import DiscountType, TaxRegime, coerce_amount
from gst_billing.services.gst_split import split_tax
from gst_billing.services.line_items import compute_discount

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def resolve_document_discount(
    subtotal: Decimal,
    value: object,
    discount_type: DiscountType | str = DiscountType.PERCENTAGE,
) -> Decimal:
    """Document-level discount, capped to the subtotal it is taken from."""
    return compute_discount(
        max(coerce_amount(subtotal), ZERO),
        max(coerce_amount(value), ZERO),
        DiscountType.parse(discount_type),
    )


def resolve_withholding(flat_value: object, rate: object, base: Decimal) -> Decimal:
    """Turn a TDS/TCS selection into a flat amount.

    A positive flat value is used as entered. Otherwise a percentage (or a
    category label carrying one) is applied to ``base``, the subtotal net of
    document discount. Nothing selected resolves to zero.
    """
    flat = coerce_amount(flat_value)
    if flat > 0:
        return flat
    percent = parse_withholding_rate(rate)
    if percent is None:
        return ZERO
    return max(coerce_amount(base), ZERO) * percent / HUNDRED


def compute_totals(
    taxable_subtotal: Decimal,
    total_tax: Decimal,
    shipping_charges: object = ZERO,
    adjustment: object = ZERO,
    tcs: object = ZERO,
    tds: object = ZERO,
    document_discount: object = ZERO,
    split: TaxSplit | None = None,
    regime: TaxRegime = TaxRegime.INTRA_STATE,
) -> DocumentTotals:
    """Combine aggregated amounts into grand total and balance due.

    TCS is added to the grand total. TDS is only taken off the balance due,
    so ``grand_total`` and ``balance_due`` stay distinct figures. Without an
    explicit ``split`` the tax is split for ``regime``, so the CGST, SGST and
    IGST figures always add up to ``total_tax``.
    """
    subtotal = max(coerce_amount(taxable_subtotal), ZERO)
    tax = max(coerce_amount(total_tax), ZERO)
    shipping = max(coerce_amount(shipping_charges), ZERO)
    adjust = coerce_amount(adjustment)
    tcs_amount = max(coerce_amount(tcs), ZERO)
    tds_amount = max(coerce_amount(tds), ZERO)
    discount = min(max(coerce_amount(document_discount), ZERO), subtotal)
    if split is None:
        split = split_tax(tax, regime)

    grand_total = subtotal - discount + tax + shipping + adjust + tcs_amount
    return DocumentTotals(
        sub_total=subtotal,
        total_tax=tax,
        cgst=split.cgst,
        sgst=split.sgst,
        igst=split.igst,
        shipping_charges=shipping,
        adjustment=adjust,
        grand_total=grand_total,
        balance_due=grand_total - tds_amount,
        document_discount=discount,
        tcs=tcs_amount,
        tds=tds_amount,
    )
