"""Display formatting for computed amounts.

Calculation results stay unrounded; these helpers only round at the output
boundary (summary panels, printed documents, CLI output).
"""

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Literal

from gst_billing.domain.value_objects import coerce_amount

Grouping = Literal["indian", "international"]

_ONES = [
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine",
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen",
    "Seventeen", "Eighteen", "Nineteen",
]
_TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]


def round_for_display(value: object, places: int = 2) -> Decimal:
    """Round half away from zero to ``places`` decimals."""
    number = coerce_amount(value)
    exponent = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        # quantize needs every integer digit plus the requested places
        ctx.prec = max(28, number.adjusted() + places + 2)
        return number.quantize(exponent, rounding=ROUND_HALF_UP)


def _group_digits(digits: str, grouping: Grouping) -> str:
    if len(digits) <= 3:
        return digits
    if grouping == "international":
        groups = []
        while digits:
            groups.insert(0, digits[-3:])
            digits = digits[:-3]
        return ",".join(groups)

    # Indian grouping: last three digits, then pairs (12,34,567)
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while head:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    return ",".join(pairs + [tail])


def format_amount(value: object, places: int = 2, grouping: Grouping = "indian") -> str:
    rounded = round_for_display(value, places)
    sign = "-" if rounded < 0 else ""
    text = f"{rounded.copy_abs():f}"
    whole, _, fraction = text.partition(".")
    grouped = _group_digits(whole, grouping)
    if places > 0:
        return f"{sign}{grouped}.{fraction}"
    return f"{sign}{grouped}"


def format_currency(
    value: object,
    symbol: str = "₹",
    places: int = 2,
    grouping: Grouping = "indian",
) -> str:
    """Format an amount as currency, e.g. ``₹1,23,456.78`` or ``-₹10.00``."""
    formatted = format_amount(value, places, grouping)
    if formatted.startswith("-"):
        return f"-{symbol}{formatted[1:]}"
    return f"{symbol}{formatted}"


def format_percentage(value: object, places: int = 2) -> str:
    return f"{round_for_display(value, places):f}%"


def _below_hundred(n: int) -> str:
    if n < 20:
        return _ONES[n]
    return _TENS[n // 10] + (" " + _ONES[n % 10] if n % 10 else "")


def _below_thousand(n: int) -> str:
    if n < 100:
        return _below_hundred(n)
    words = _ONES[n // 100] + " Hundred"
    if n % 100:
        words += " " + _below_hundred(n % 100)
    return words


def _rupees_in_words(rupees: int) -> str:
    if rupees == 0:
        return "Zero"
    parts = []
    crore, rupees = divmod(rupees, 10_000_000)
    lakh, rupees = divmod(rupees, 100_000)
    thousand, hundred = divmod(rupees, 1_000)
    if crore:
        # Amounts above 99 crore read as "One Hundred Twenty Crore"
        parts.append(_rupees_in_words(crore) + " Crore")
    if lakh:
        parts.append(_below_hundred(lakh) + " Lakh")
    if thousand:
        parts.append(_below_hundred(thousand) + " Thousand")
    if hundred:
        parts.append(_below_thousand(hundred))
    return " ".join(parts)


def amount_in_words(value: object) -> str:
    """Spell an amount the way Indian invoices print it.

    Example: 1692.50 -> "One Thousand Six Hundred Ninety Two Rupees and
    Fifty Paise Only".
    """
    rounded = round_for_display(value, 2)
    prefix = "Minus " if rounded < 0 else ""
    rounded = rounded.copy_abs()
    rupees = int(rounded)
    paise = int((rounded - rupees) * 100)

    words = f"{prefix}{_rupees_in_words(rupees)} Rupees"
    if paise:
        words += f" and {_below_hundred(paise)} Paise"
    return words + " Only"
