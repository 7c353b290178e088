"""Command-line interface for GST Billing."""

import argparse
import json
import sys
from decimal import Decimal
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from gst_billing import __version__
from gst_billing.config import Settings, get_settings
from gst_billing.container import get_container
from gst_billing.domain.documents import DocumentCalculation
from gst_billing.domain.tax_codes import GST_SLABS, WITHHOLDING_CATEGORIES
from gst_billing.domain.value_objects import DocumentType, TaxRegime, coerce_amount
from gst_billing.exceptions import GSTBillingError, InvalidDocumentPayloadError
from gst_billing.logging_config import configure_logging, log_context
from gst_billing.schemas import DocumentPayload
from gst_billing.services.formatting import amount_in_words, format_currency


def load_document(path: str) -> dict[str, Any]:
    """Read a stored document from a JSON file, or stdin when path is '-'."""
    try:
        if path == "-":
            data = json.load(sys.stdin)
        else:
            with Path(path).open(encoding="utf-8") as f:
                data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidDocumentPayloadError(f"not valid JSON ({e.msg})", path) from e
    if not isinstance(data, dict):
        raise InvalidDocumentPayloadError("document must be a JSON object", path)
    return data


def _money(value: Decimal, settings: Settings) -> str:
    return format_currency(
        value,
        symbol=settings.currency_symbol,
        places=settings.display_precision,
        grouping=settings.number_grouping,
    )


def print_summary(calculation: DocumentCalculation, settings: Settings) -> None:
    totals = calculation.totals
    title = calculation.document.document_type.value.replace("_", " ").title()
    print(settings.organization_name)
    print(f"{title} totals ({calculation.regime.value})")
    print("=" * 78)
    print(f"{'#':<4} {'Item':<24} {'Qty':>8} {'Rate':>12} {'Taxable':>14} {'Tax':>12}")
    print("-" * 78)
    for index, line in enumerate(calculation.lines, 1):
        name = (line.item.name or line.item.item_id or "-")[:24]
        print(
            f"{index:<4} {name:<24} {line.quantity:>8} "
            f"{_money(line.item.rate, settings):>12} "
            f"{_money(line.taxable_amount, settings):>14} "
            f"{_money(line.tax_amount, settings):>12}"
        )
    print("-" * 78)

    rows: list[tuple[str, Decimal]] = [("Sub Total", totals.sub_total)]
    if totals.document_discount:
        rows.append(("Discount", -totals.document_discount))
    if calculation.breakdown:
        rows.extend((entry.name, entry.amount) for entry in calculation.breakdown)
    elif calculation.regime is TaxRegime.INTER_STATE:
        rows.append(("IGST", totals.igst))
    else:
        rows.extend([("CGST", totals.cgst), ("SGST", totals.sgst)])
    if totals.shipping_charges:
        rows.append(("Shipping Charges", totals.shipping_charges))
    if totals.adjustment:
        rows.append(("Adjustment", totals.adjustment))
    if totals.tcs:
        rows.append(("TCS", totals.tcs))
    rows.append(("Total", totals.grand_total))
    if totals.tds:
        rows.append(("TDS", -totals.tds))
    rows.append(("Balance Due", totals.balance_due))

    for label, value in rows:
        print(f"  {label + ':':<20} {_money(value, settings):>18}")
    print(f"\n  {amount_in_words(totals.balance_due)}")


def cmd_calculate(args: argparse.Namespace) -> int:
    """Calculate totals for a stored document."""
    container = get_container()
    service = container.calculation_service
    try:
        data = load_document(args.file)
        if args.regime:
            data = {**data, "taxRegime": args.regime}
        document = DocumentPayload.parse(data, args.file).to_input(args.type)
        with log_context(actor=container.settings.default_actor, source=args.file):
            calculation = service.calculate(document)
    except (OSError, GSTBillingError) as e:
        print(f"Error: {e}")
        return 1

    if args.json:
        print(json.dumps(service.to_payload(calculation), indent=2, ensure_ascii=False))
    else:
        print_summary(calculation, container.settings)
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Report stored totals that no longer match their line items."""
    container = get_container()
    tolerance = coerce_amount(args.tolerance) if args.tolerance is not None else None
    try:
        data = load_document(args.file)
        with log_context(actor=container.settings.default_actor, source=args.file):
            drifts = container.calculation_service.check_snapshot(data, args.type, tolerance)
    except (OSError, GSTBillingError) as e:
        print(f"Error: {e}")
        return 1

    if not drifts:
        print("Stored totals are up to date")
        return 0

    print(f"{'Field':<20} {'Stored':>16} {'Recomputed':>16} {'Difference':>16}")
    print("-" * 71)
    for drift in drifts:
        print(
            f"{drift.field:<20} {drift.stored:>16.2f} "
            f"{drift.recomputed:>16.2f} {drift.difference:>16.2f}"
        )
    print(f"\n{len(drifts)} stale field(s)")
    return 1


def cmd_tax_codes(args: argparse.Namespace) -> int:
    """List the configured GST slabs and TDS/TCS categories."""
    print("GST slabs")
    print("-" * 40)
    for rate in GST_SLABS:
        half = rate / 2
        print(
            f"  GST{rate.normalize():f}".ljust(12)
            + f"CGST {half.normalize():f}% + SGST {half.normalize():f}%"
            + f" | IGST {rate.normalize():f}%"
        )
    print("  none".ljust(12) + "Non-taxable")
    print("\nTDS/TCS categories")
    print("-" * 40)
    for category in WITHHOLDING_CATEGORIES:
        print(f"  {category.key:<24} {category.label}")
    return 0


def cmd_version(args: argparse.Namespace) -> int:
    """Show version information."""
    print(f"gst-billing {__version__}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="gst-billing",
        description="GST Billing - line-item tax and document totals for billing documents",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    document_types = [t.value for t in DocumentType]

    calculate_parser = subparsers.add_parser(
        "calculate", help="Calculate totals for a stored document"
    )
    calculate_parser.add_argument("file", help="Document JSON file ('-' for stdin)")
    calculate_parser.add_argument(
        "--type", "-t", choices=document_types, default=None, help="Document type"
    )
    calculate_parser.add_argument(
        "--regime",
        "-r",
        choices=[r.value for r in TaxRegime],
        default=None,
        help="Force the tax regime instead of comparing supply states",
    )
    calculate_parser.add_argument(
        "--json", action="store_true", help="Print the save payload as JSON"
    )
    calculate_parser.set_defaults(func=cmd_calculate)

    check_parser = subparsers.add_parser(
        "check", help="Check stored totals against their line items"
    )
    check_parser.add_argument("file", help="Document JSON file ('-' for stdin)")
    check_parser.add_argument(
        "--type", "-t", choices=document_types, default=None, help="Document type"
    )
    check_parser.add_argument(
        "--tolerance", default=None, help="Allowed difference (default from settings)"
    )
    check_parser.set_defaults(func=cmd_check)

    tax_codes_parser = subparsers.add_parser(
        "tax-codes", help="List GST slabs and TDS/TCS categories"
    )
    tax_codes_parser.set_defaults(func=cmd_tax_codes)

    version_parser = subparsers.add_parser("version", help="Show version")
    version_parser.set_defaults(func=cmd_version)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        settings = get_settings()
    except PydanticValidationError as e:
        print(f"Error: Invalid settings: {e}")
        return 1
    # Must run before the container is built
    configure_logging(settings)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
