"""Tests for the public API and the command-line interface."""

import io
import json

import pytest
from PyPDF2 import PdfReader

from exportdocs import __version__, document_filename, load_record, render_document
from exportdocs.api import RECORD_TYPES
from exportdocs.assemblers import ASSEMBLERS, get_assembler
from exportdocs.cli import create_parser, main
from exportdocs.config import RenderConfig
from exportdocs.exceptions import MalformedValueError, MissingEntityError
from exportdocs.records import ExportDocumentRecord, PurchaseOrderRecord


class TestRenderDocument:
    """Test suite for render_document."""

    @pytest.mark.parametrize(
        "kind,fixture,marker",
        [
            ("trade_invoice", "trade_invoice_data", "PROFORMA INVOICE"),
            ("purchase_order", "purchase_order_data", "PURCHASE ORDER"),
            ("annexure", "export_document_data", "ANNEXURE"),
            ("vgm", "export_document_data", "VERIFIED GROSS MASS"),
            ("custom_invoice", "export_document_data", "CUSTOM INVOICE"),
            ("packing_list", "export_document_data", "PACKING LIST"),
        ],
    )
    def test_every_kind_from_dict(self, kind, fixture, marker, request):
        """Test that each document kind renders from stored JSON."""
        pdf = render_document(kind, request.getfixturevalue(fixture))
        assert pdf.startswith(b"%PDF")
        assert marker in PdfReader(io.BytesIO(pdf)).pages[0].extract_text()

    def test_record_object(self, export_document, assets):
        """Test rendering a record that is already resolved."""
        assert render_document("vgm", export_document, assets=assets).startswith(b"%PDF")

    def test_unknown_kind(self, export_document_data):
        """Test that an unknown document kind is rejected."""
        with pytest.raises(ValueError):
            render_document("bill_of_lading", export_document_data)

    def test_strict_config(self, export_document_data):
        """Test that strict mode rejects malformed values."""
        export_document_data["exportInvoiceDate"] = "soon"
        with pytest.raises(MalformedValueError):
            render_document("vgm", export_document_data, config=RenderConfig(strict=True))

    def test_missing_entity(self, export_document_data):
        """Test that missing parties are reported by name."""
        del export_document_data["manufacturer"]
        with pytest.raises(MissingEntityError) as info:
            render_document("annexure", export_document_data)
        assert info.value.entity == "manufacturer"
        assert info.value.document == "annexure"

    @pytest.mark.parametrize(
        "kind,fixture,key",
        [
            ("trade_invoice", "trade_invoice_data", "currencyType"),
            ("custom_invoice", "export_document_data", "currency"),
        ],
    )
    def test_unknown_currency(self, kind, fixture, key, request):
        """Test that a currency that cannot be written out is rejected before drawing."""
        data = request.getfixturevalue(fixture)
        data[key] = "GBP"
        with pytest.raises(MalformedValueError) as info:
            render_document(kind, data)
        assert info.value.field == "currency"
        assert info.value.value == "GBP"

    @pytest.mark.parametrize("kind", ["packing_list", "vgm", "annexure"])
    def test_unpriced_documents_ignore_currency(self, kind, export_document_data):
        """Test that documents without prices render whatever the currency."""
        export_document_data["currency"] = "GBP"
        assert render_document(kind, export_document_data).startswith(b"%PDF")


class TestRegistry:
    """Test suite for the kind registry."""

    def test_kinds(self):
        """Test that records and assemblers cover the same kinds."""
        assert set(ASSEMBLERS) == set(RECORD_TYPES)
        assert set(ASSEMBLERS) == {"trade_invoice", "purchase_order", "annexure", "vgm", "custom_invoice", "packing_list"}

    def test_get_assembler(self):
        """Test assembler lookup."""
        assert get_assembler("vgm").kind == "vgm"
        with pytest.raises(ValueError):
            get_assembler("nope")

    def test_load_record(self, purchase_order_data, export_document_data):
        """Test conversion of stored JSON per kind."""
        assert isinstance(load_record("purchase_order", purchase_order_data), PurchaseOrderRecord)
        assert isinstance(load_record("custom_invoice", export_document_data), ExportDocumentRecord)


class TestDocumentFilename:
    """Test suite for document_filename."""

    @pytest.mark.parametrize(
        "kind,number,expected",
        [
            ("trade_invoice", "HEM/PI/24-25/7", "Performa_Invoice_HEM_PI_24-25_7.pdf"),
            ("purchase_order", "HEM/PO/24-25/004", "Purchase_Order_HEM_PO_24-25_004.pdf"),
            ("annexure", "EXP/001/24-25", "ANNEXURE_EXP_001_24-25.pdf"),
            ("vgm", 'A:B*C?"D"', "VGM_A_B_C__D_.pdf"),
            ("custom_invoice", "", "Custom_Invoice_.pdf"),
            ("packing_list", "EXP/001/24-25", "Packing_List_EXP_001_24-25.pdf"),
        ],
    )
    def test_names(self, kind, number, expected):
        """Test prefixes and replacement of unsafe characters."""
        assert document_filename(kind, number) == expected

    def test_unknown_kind(self):
        """Test that an unknown kind is rejected."""
        with pytest.raises(ValueError):
            document_filename("bill_of_lading", "1")


class TestCLI:
    """Test suite for the command-line interface."""

    def test_parser(self):
        """Test argument parsing for the render command."""
        args = create_parser().parse_args(["render", "in.json", "-k", "vgm", "--strict"])
        assert args.command == "render"
        assert args.kind == "vgm"
        assert args.strict
        assert args.log_level == "INFO"

    def test_render(self, tmp_path, export_document_data, capsys):
        """Test rendering a JSON file to the given output path."""
        source = tmp_path / "record.json"
        source.write_text(json.dumps(export_document_data), encoding="utf-8")
        output = tmp_path / "vgm.pdf"
        assert main(["render", str(source), "--kind", "vgm", "-o", str(output), "--log-level", "ERROR"]) == 0
        assert output.read_bytes().startswith(b"%PDF")
        assert "Saved:" in capsys.readouterr().out

    def test_default_output_name(self, tmp_path, export_document_data, monkeypatch):
        """Test that the standard file name is used without --output."""
        monkeypatch.chdir(tmp_path)
        source = tmp_path / "record.json"
        source.write_text(json.dumps(export_document_data), encoding="utf-8")
        assert main(["render", str(source), "-k", "annexure", "--log-level", "ERROR"]) == 0
        assert (tmp_path / "ANNEXURE_EXP_001_24-25.pdf").exists()

    def test_missing_file(self, tmp_path, capsys):
        """Test the error for a missing input file."""
        assert main(["render", str(tmp_path / "none.json"), "-k", "vgm"]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_invalid_json(self, tmp_path, capsys):
        """Test the error for a file that is not JSON."""
        source = tmp_path / "record.json"
        source.write_text("{not json", encoding="utf-8")
        assert main(["render", str(source), "-k", "vgm"]) == 1
        assert "not valid JSON" in capsys.readouterr().err

    def test_document_error(self, tmp_path, export_document_data, capsys):
        """Test that document errors give exit code 2."""
        del export_document_data["exporter"]
        source = tmp_path / "record.json"
        source.write_text(json.dumps(export_document_data), encoding="utf-8")
        assert main(["render", str(source), "-k", "vgm", "--log-level", "ERROR"]) == 2
        assert "Missing required entity 'exporter'" in capsys.readouterr().err

    def test_unknown_currency(self, tmp_path, trade_invoice_data, capsys):
        """Test that an unknown currency gives exit code 2 and no output file."""
        trade_invoice_data["currencyType"] = "GBP"
        source = tmp_path / "record.json"
        source.write_text(json.dumps(trade_invoice_data), encoding="utf-8")
        output = tmp_path / "invoice.pdf"
        code = main(["render", str(source), "-k", "trade_invoice", "-o", str(output), "--log-level", "ERROR"])
        assert code == 2
        assert "Malformed value for field 'currency'" in capsys.readouterr().err
        assert not output.exists()

    def test_version(self, capsys):
        """Test the version command."""
        assert main(["version"]) == 0
        assert __version__ in capsys.readouterr().out
