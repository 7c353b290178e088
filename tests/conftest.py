import os
from decimal import Decimal

import pytest

from gst_billing.config import Settings
from gst_billing.container import reset_container
from gst_billing.domain.documents import DocumentInput, LineItemInput
from gst_billing.domain.tax_codes import TaxCode
from gst_billing.domain.value_objects import DiscountType, DocumentType
from gst_billing.services.calculator import DocumentCalculationServiceImpl


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep GSTB_ variables from the developer's shell out of every test."""
    for key in list(os.environ):
        if key.startswith("GSTB_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("GSTB_ENVIRONMENT", "testing")
    reset_container()
    yield
    reset_container()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def service(settings: Settings) -> DocumentCalculationServiceImpl:
    return DocumentCalculationServiceImpl(settings)


@pytest.fixture
def discounted_line() -> LineItemInput:
    return LineItemInput(
        quantity=Decimal("10"),
        rate=Decimal("100"),
        discount_value=Decimal("10"),
        discount_type=DiscountType.PERCENTAGE,
        tax=TaxCode.gst(18),
        name="Steel Rod",
    )


@pytest.fixture
def plain_line() -> LineItemInput:
    return LineItemInput(
        quantity=Decimal("5"),
        rate=Decimal("100"),
        tax=TaxCode.gst(18),
        name="Fastener Kit",
    )


@pytest.fixture
def quote(discounted_line: LineItemInput, plain_line: LineItemInput) -> DocumentInput:
    """Two 18% lines: taxable 900 + 500, tax 162 + 90."""
    return DocumentInput(
        document_type=DocumentType.QUOTE,
        items=(discounted_line, plain_line),
        shipping_charges=Decimal("50"),
        adjustment=Decimal("-10"),
        source_state="Maharashtra",
        destination_state="Maharashtra",
    )


@pytest.fixture
def purchase_order(discounted_line: LineItemInput, plain_line: LineItemInput) -> DocumentInput:
    return DocumentInput(
        document_type=DocumentType.PURCHASE_ORDER,
        items=(discounted_line, plain_line),
        shipping_charges=Decimal("50"),
        adjustment=Decimal("-10"),
        source_state="Maharashtra",
        destination_state="Maharashtra",
    )


@pytest.fixture
def stored_quote() -> dict:
    """A quote as the quote screen persists it."""
    return {
        "documentType": "quote",
        "sourceOfSupply": "27 - Maharashtra",
        "placeOfSupply": "27 - Maharashtra",
        "items": [
            {
                "itemId": 101,
                "itemName": "Steel Rod",
                "quantity": "10",
                "rate": "100",
                "discount": 10,
                "discountType": "percentage",
                "taxName": "GST18",
                "amount": 900,
            },
            {
                "itemId": 102,
                "itemName": "Fastener Kit",
                "quantity": 5,
                "rate": 100,
                "discount": 0,
                "taxName": "GST18",
                "amount": 500,
            },
        ],
        "shippingCharges": "50",
        "adjustment": "-10",
        "adjustmentDescription": "Round off",
        "subTotal": 1400,
        "taxAmount": 252,
        "cgst": 126,
        "sgst": 126,
        "igst": 0,
        "total": 1692,
        "balanceDue": 1692,
    }
