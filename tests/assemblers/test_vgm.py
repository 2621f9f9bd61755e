"""Tests for the VGM certificate assembler."""

import io
from dataclasses import replace

import pytest
from PyPDF2 import PdfReader

from exportdocs.assemblers import VgmAssembler
from exportdocs.assemblers.vgm import ATTACHED
from exportdocs.exceptions import MissingEntityError
from exportdocs.records import ExportDocumentRecord


@pytest.fixture
def assembler(config):
    return VgmAssembler(config)


@pytest.fixture
def single(export_document):
    return replace(export_document, containers=export_document.containers[:1])


def values(rows):
    return {number: value for number, _, value in rows}


class TestVgmInformation:
    """Test suite for the numbered information rows."""

    def test_thirteen_rows(self, assembler, export_document):
        """Test that all rows are present in order."""
        rows = assembler.information(export_document)
        assert [row[0] for row in rows] == [f"{n}*" for n in range(1, 12)] + ["12", "13"]

    def test_shipper(self, assembler, export_document):
        """Test the shipper rows."""
        info = values(assembler.information(export_document))
        assert info["1*"] == "Hemal Ceramics Pvt Ltd"
        assert info["2*"] == "2412003456"
        assert info["3*"] == "R. Patel"
        assert info["7*"] == "30480"
        assert info["8*"] == "Lakhdhirpur Road, Morbi, Gujarat"
        assert info["13"] == "N/A"

    def test_several_containers_attached(self, assembler, export_document):
        """Test that per-container rows point to the attached sheet."""
        info = values(assembler.information(export_document))
        for number in ("5*", "6*", "10*", "11*"):
            assert info[number] == ATTACHED

    def test_single_container(self, assembler, single):
        """Test that a single container is printed inline."""
        info = values(assembler.information(single))
        assert info["5*"] == "MSCU1234567"
        assert info["6*"] == "20'"
        assert info["10*"] == "01/07/2024 10:15:00"
        assert info["11*"] == "WS-567"

    def test_no_containers(self, assembler, export_document):
        """Test placeholders when no container is loaded."""
        info = values(assembler.information(replace(export_document, containers=())))
        assert info["5*"] == "N/A"
        assert info["10*"] == "N/A"

    def test_missing_manufacturer_address(self, assembler, export_document):
        """Test that the weighbridge row tolerates a missing manufacturer."""
        info = values(assembler.information(replace(export_document, manufacturer=None)))
        assert info["8*"] == "N/A"


class TestVgmLayout:
    """Test suite for the VGM certificate layout."""

    def test_weights_table(self, assembler, export_document, compose, text_of):
        """Test the cargo + tare = total rows."""
        text = text_of(compose(assembler, export_document))
        assert "VERIFIED GROSS MASS" in text
        assert "28,280.00 + 2,200.00 = 30,480.00" in text
        assert "28,000.00 + 2,200.00 = 30,200.00" in text
        assert "BK-9001" in text

    def test_render_pdf(self, assembler, export_document_factory):
        """Test that a readable PDF is produced for many containers."""
        record = ExportDocumentRecord.from_dict(export_document_factory(30))
        reader = PdfReader(io.BytesIO(assembler.render(record)))
        assert len(reader.pages) >= 1
        assert "VERIFIED GROSS MASS" in reader.pages[0].extract_text()

    def test_missing_exporter(self, assembler, export_document):
        """Test that the shipper is required."""
        with pytest.raises(MissingEntityError):
            assembler.render(replace(export_document, exporter=None))

    def test_filename(self, assembler, export_document):
        """Test the generated file name."""
        assert assembler.filename(export_document) == "VGM_EXP_001_24-25.pdf"
