"""Per-line discount, taxable amount and GST computation."""

from decimal import Decimal

from gst_billing.domain.documents import LineItemInput, LineItemResult
from gst_billing.domain.value_objects import DiscountType, QuantityPolicy

ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")


def resolve_quantity(
    quantity: Decimal | None,
    policy: QuantityPolicy = QuantityPolicy.DEFAULT_TO_ONE,
) -> Decimal:
    """Apply the quantity policy to a parsed (possibly missing) quantity.

    DEFAULT_TO_ONE treats missing, zero and negative quantities as 1, the
    behaviour of the sales-side create screens. ALLOW_ZERO keeps an entered
    0 and maps missing or negative quantities to 0.
    """
    if policy is QuantityPolicy.ALLOW_ZERO:
        if quantity is None or quantity < 0:
            return ZERO
        return quantity
    if quantity is None or quantity <= 0:
        return ONE
    return quantity


def compute_discount(base_amount: Decimal, value: Decimal, discount_type: DiscountType) -> Decimal:
    """Discount on ``base_amount``, never more than the base itself."""
    if base_amount <= 0 or value <= 0:
        return ZERO
    if discount_type is DiscountType.PERCENTAGE:
        discount = base_amount * min(value, HUNDRED) / HUNDRED
    else:
        discount = value
    return min(discount, base_amount)


def compute_line(
    item: LineItemInput,
    quantity_policy: QuantityPolicy = QuantityPolicy.DEFAULT_TO_ONE,
) -> LineItemResult:
    quantity = resolve_quantity(item.quantity, quantity_policy)
    base_amount = quantity * item.rate
    discount_amount = compute_discount(base_amount, item.discount_value, item.discount_type)
    taxable_amount = max(ZERO, base_amount - discount_amount)

    if item.tax.applies:
        tax_amount = taxable_amount * item.tax.rate / HUNDRED
    else:
        tax_amount = ZERO

    return LineItemResult(
        item=item,
        quantity=quantity,
        base_amount=base_amount,
        discount_amount=discount_amount,
        taxable_amount=taxable_amount,
        tax_amount=tax_amount,
    )


def compute_lines(
    items: tuple[LineItemInput, ...] | list[LineItemInput],
    quantity_policy: QuantityPolicy = QuantityPolicy.DEFAULT_TO_ONE,
) -> tuple[LineItemResult, ...]:
    return tuple(compute_line(item, quantity_policy) for item in items)
