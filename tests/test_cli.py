"""Tests for CLI module."""

import io
import json

import pytest

from gst_billing import __version__
from gst_billing.cli import (
    cmd_tax_codes,
    cmd_version,
    load_document,
    main,
)
from gst_billing.exceptions import InvalidDocumentPayloadError


@pytest.fixture
def quote_file(tmp_path, stored_quote):
    path = tmp_path / "quote.json"
    path.write_text(json.dumps(stored_quote), encoding="utf-8")
    return path


class TestLoadDocument:
    def test_reads_file(self, quote_file):
        data = load_document(str(quote_file))

        assert data["documentType"] == "quote"

    def test_reads_stdin(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO('{"items": []}'))

        assert load_document("-") == {"items": []}

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(InvalidDocumentPayloadError, match="not valid JSON"):
            load_document(str(path))

    def test_json_array_rejected(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(InvalidDocumentPayloadError, match="JSON object"):
            load_document(str(path))


class TestCmdCalculate:
    def test_summary(self, quote_file, capsys):
        result = main(["calculate", str(quote_file)])

        assert result == 0
        captured = capsys.readouterr()
        assert "My Organization" in captured.out
        assert "Quote totals (intra-state)" in captured.out
        assert "Steel Rod" in captured.out
        assert "₹1,400.00" in captured.out
        assert "CGST" in captured.out
        assert "₹1,692.00" in captured.out
        assert "One Thousand Six Hundred Ninety Two Rupees Only" in captured.out

    def test_json_output(self, quote_file, capsys):
        result = main(["calculate", str(quote_file), "--json"])

        assert result == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["total"] == 1692.0
        assert payload["cgst"] == 126.0
        assert payload["adjustmentReason"] == "Round off"

    def test_regime_override(self, quote_file, capsys):
        result = main(["calculate", str(quote_file), "--regime", "inter-state", "--json"])

        assert result == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["igst"] == 252.0
        assert payload["cgst"] == 0.0

    def test_document_type_option(self, quote_file, capsys):
        result = main(["calculate", str(quote_file), "--type", "purchase_order", "--json"])

        assert result == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["documentType"] == "purchase_order"

    def test_inter_state_summary_shows_igst(self, tmp_path, stored_quote, capsys):
        stored_quote["placeOfSupply"] = "29 - Karnataka"
        path = tmp_path / "quote.json"
        path.write_text(json.dumps(stored_quote), encoding="utf-8")

        result = main(["calculate", str(path)])

        assert result == 0
        captured = capsys.readouterr()
        assert "IGST" in captured.out
        assert "CGST" not in captured.out

    def test_summary_of_very_large_amounts(self, tmp_path, capsys):
        path = tmp_path / "large.json"
        document = {"items": [{"quantity": 1, "rate": "1e30", "taxName": "GST18"}]}
        path.write_text(json.dumps(document), encoding="utf-8")

        result = main(["calculate", str(path)])

        assert result == 0
        captured = capsys.readouterr()
        assert "₹10,00,00," in captured.out
        assert "Rupees Only" in captured.out

    def test_missing_file(self, tmp_path, capsys):
        result = main(["calculate", str(tmp_path / "missing.json")])

        assert result == 1
        assert "Error:" in capsys.readouterr().out

    def test_invalid_document(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"documentType": "receipt"}), encoding="utf-8")

        result = main(["calculate", str(path)])

        assert result == 1
        assert "Unknown document type: receipt" in capsys.readouterr().out


class TestCmdCheck:
    def test_up_to_date(self, quote_file, capsys):
        result = main(["check", str(quote_file)])

        assert result == 0
        assert "Stored totals are up to date" in capsys.readouterr().out

    def test_stale(self, tmp_path, stored_quote, capsys):
        stored_quote["total"] = 1700
        path = tmp_path / "stale.json"
        path.write_text(json.dumps(stored_quote), encoding="utf-8")

        result = main(["check", str(path)])

        assert result == 1
        captured = capsys.readouterr()
        assert "total" in captured.out
        assert "-8.00" in captured.out
        assert "1 stale field(s)" in captured.out

    def test_tolerance_option(self, tmp_path, stored_quote, capsys):
        stored_quote["total"] = 1700
        path = tmp_path / "stale.json"
        path.write_text(json.dumps(stored_quote), encoding="utf-8")

        result = main(["check", str(path), "--tolerance", "10"])

        assert result == 0


class TestCmdTaxCodes:
    def test_lists_slabs_and_categories(self, capsys):
        result = cmd_tax_codes(None)

        assert result == 0
        captured = capsys.readouterr()
        assert "GST18" in captured.out
        assert "CGST 9% + SGST 9% | IGST 18%" in captured.out
        assert "CGST 0.125% + SGST 0.125%" in captured.out
        assert "professional_fees_10" in captured.out


class TestCmdVersion:
    def test_prints_version(self, capsys):
        result = cmd_version(None)

        assert result == 0
        assert __version__ in capsys.readouterr().out


class TestMain:
    def test_no_command_prints_help(self, capsys):
        result = main([])

        assert result == 0
        assert "usage" in capsys.readouterr().out.lower()

    def test_version_command(self, capsys):
        assert main(["version"]) == 0
        assert "gst-billing" in capsys.readouterr().out

    def test_invalid_settings(self, monkeypatch, capsys):
        monkeypatch.setenv("GSTB_QUANTITY_POLICY", "sometimes")

        result = main(["version"])

        assert result == 1
        assert "Invalid settings" in capsys.readouterr().out
