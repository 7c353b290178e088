"""Document-level sums over computed lines, overall and per tax rate."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from gst_billing.domain.documents import LineItemResult

ZERO = Decimal("0")


@dataclass(frozen=True, slots=True)
class Aggregate:
    """Document-level sums over computed lines.

    ``sub_total`` is the post-discount, pre-tax figure shown as "Sub Total";
    ``base_total`` and ``discount_total`` are kept for summary panels.
    """

    sub_total: Decimal
    total_tax: Decimal
    base_total: Decimal = ZERO
    discount_total: Decimal = ZERO

    @property
    def taxable_subtotal(self) -> Decimal:
        return self.sub_total


def aggregate(lines: Iterable[LineItemResult]) -> Aggregate:
    sub_total = ZERO
    total_tax = ZERO
    base_total = ZERO
    discount_total = ZERO
    for line in lines:
        sub_total += line.taxable_amount
        total_tax += line.tax_amount
        base_total += line.base_amount
        discount_total += line.discount_amount
    return Aggregate(
        sub_total=sub_total,
        total_tax=total_tax,
        base_total=base_total,
        discount_total=discount_total,
    )


def group_by_rate(lines: Iterable[LineItemResult]) -> list[tuple[Decimal, Decimal]]:
    """Sum tax per rate over taxed lines, ordered by rate.

    Lines under the non-taxable sentinel or a 0% rate carry no tax and are
    left out.
    """
    groups: dict[Decimal, Decimal] = {}
    for line in lines:
        if not line.item.tax.applies:
            continue
        rate = line.item.tax.rate.normalize()
        groups[rate] = groups.get(rate, ZERO) + line.tax_amount
    return sorted(groups.items())
