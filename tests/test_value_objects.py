from decimal import Decimal

import pytest

from gst_billing.domain.value_objects import (
    DiscountType,
    DocumentType,
    QuantityPolicy,
    SplitGranularity,
    TaxRegime,
    coerce_amount,
    parse_amount,
)


class TestDiscountType:
    def test_is_string_enum(self):
        assert isinstance(DiscountType.FLAT, str)
        assert DiscountType.PERCENTAGE == "percentage"

    @pytest.mark.parametrize("value", ["flat", "FLAT", " amount ", "fixed", "₹", "INR"])
    def test_flat_aliases(self, value):
        assert DiscountType.parse(value) is DiscountType.FLAT

    @pytest.mark.parametrize("value", ["percentage", "%", None, "", "whatever"])
    def test_anything_else_is_percentage(self, value):
        assert DiscountType.parse(value) is DiscountType.PERCENTAGE

    def test_parse_passes_enum_through(self):
        assert DiscountType.parse(DiscountType.FLAT) is DiscountType.FLAT


class TestTaxRegime:
    @pytest.mark.parametrize("value", ["intra-state", "intra", "INTRA_STATE", "intrastate"])
    def test_parse_intra_state(self, value):
        assert TaxRegime.parse(value) is TaxRegime.INTRA_STATE

    @pytest.mark.parametrize("value", ["inter-state", "Inter", "inter_state", "interstate"])
    def test_parse_inter_state(self, value):
        assert TaxRegime.parse(value) is TaxRegime.INTER_STATE

    def test_parse_rejects_unknown(self):
        with pytest.raises(ValueError, match="Invalid tax regime"):
            TaxRegime.parse("export")


class TestDocumentType:
    def test_vendor_side_documents(self):
        assert DocumentType.PURCHASE_ORDER.is_vendor_side
        assert DocumentType.VENDOR_CREDIT.is_vendor_side

    @pytest.mark.parametrize(
        "document_type",
        [
            DocumentType.QUOTE,
            DocumentType.SALES_ORDER,
            DocumentType.DELIVERY_CHALLAN,
            DocumentType.INVOICE,
        ],
    )
    def test_sales_side_documents(self, document_type):
        assert not document_type.is_vendor_side


class TestPolicyEnums:
    def test_quantity_policy_values(self):
        assert {p.value for p in QuantityPolicy} == {"default_to_one", "allow_zero"}

    def test_split_granularity_values(self):
        assert {g.value for g in SplitGranularity} == {"document", "by_rate"}


class TestParseAmount:
    def test_numbers(self):
        assert parse_amount(5) == Decimal("5")
        assert parse_amount(2.5) == Decimal("2.5")
        assert parse_amount(Decimal("1.10")) == Decimal("1.10")

    def test_float_keeps_its_decimal_text(self):
        assert parse_amount(0.1) == Decimal("0.1")

    def test_numeric_strings(self):
        assert parse_amount("42") == Decimal("42")
        assert parse_amount(" -10.5 ") == Decimal("-10.5")

    def test_strips_grouping_and_rupee_prefix(self):
        assert parse_amount("1,23,456.78") == Decimal("123456.78")
        assert parse_amount("₹ 1,000") == Decimal("1000")
        assert parse_amount("Rs. 250") == Decimal("250")

    @pytest.mark.parametrize("value", [None, "", "   ", "abc", "12abc", True, "NaN", "Infinity"])
    def test_unusable_values_give_none(self, value):
        assert parse_amount(value) is None

    def test_non_finite_float_gives_none(self):
        assert parse_amount(float("nan")) is None
        assert parse_amount(float("inf")) is None

    @pytest.mark.parametrize("value", ["1e500000", "-1e9999999", Decimal("1e400"), 10**400])
    def test_beyond_float_range_gives_none(self, value):
        assert parse_amount(value) is None

    def test_largest_float_is_kept(self):
        assert parse_amount("1e308") == Decimal("1e308")


class TestCoerceAmount:
    def test_unusable_values_default_to_zero(self):
        assert coerce_amount(None) == Decimal("0")
        assert coerce_amount("garbage") == Decimal("0")

    def test_custom_default(self):
        assert coerce_amount("", default=1) == Decimal("1")

    def test_valid_value_is_returned(self):
        assert coerce_amount("18") == Decimal("18")
