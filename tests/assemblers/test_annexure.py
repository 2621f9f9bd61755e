"""Tests for the customs annexure assembler and its padding choice."""

import io
import logging
from dataclasses import replace

import pytest
from PyPDF2 import PdfReader

from exportdocs.assemblers import AnnexureAssembler
from exportdocs.config import RenderConfig
from exportdocs.engine.geometry import A4_WIDTH, Size
from exportdocs.exceptions import MissingEntityError
from exportdocs.records import ExportDocumentRecord


@pytest.fixture
def assembler(config):
    return AnnexureAssembler(config)


@pytest.fixture
def crowded(export_document_factory):
    """An annexure whose container table cannot fit on one page."""
    return ExportDocumentRecord.from_dict(export_document_factory(45))


class TestAnnexureContent:
    """Test suite for the annexure layout."""

    def test_particulars(self, assembler, export_document, compose, text_of):
        """Test exporter, manufacturer and consignee particulars."""
        text = text_of(compose(assembler, export_document))
        assert "ANNEXURE" in text
        assert "AABCH1234K" in text
        assert "2412003456" in text
        assert "PERM-2024-77" in text
        assert "EXP/001/24-25" in text
        assert "02/07/2024" in text
        assert "Davare Floors, Inc." in text
        assert "2010" in text

    def test_containers_and_weights(self, assembler, export_document, compose, text_of):
        """Test container rows and weight totals."""
        text = text_of(compose(assembler, export_document))
        assert "MSCU1234567" in text
        assert "LS4567" in text
        assert "1 to 20" in text
        assert "56,280.00" in text
        assert "57,080.00" in text

    def test_statutory_text(self, assembler, export_document, compose, text_of):
        """Test the self-sealing circular and signature lines."""
        surface = compose(assembler, export_document)
        text = text_of(surface)
        assert "SIGNATURE OF EXPORTER" in text
        circular = [
            op
            for index in range(surface.page_count)
            for op in surface.ops(index, "text")
            if "Circular No.: 59/2010" in op.text
        ]
        assert circular and all(op.style.underline for op in circular)

    def test_missing_client(self, assembler, export_document):
        """Test that the consignee is required."""
        with pytest.raises(MissingEntityError) as info:
            assembler.render(replace(export_document, client=None))
        assert info.value.entity == "client"


class TestPaddingChoice:
    """Test suite for the two-pass padding decision."""

    def test_generous_when_one_page(self, export_document):
        """Test that generous padding is kept when it fits on one page."""
        tall = AnnexureAssembler(RenderConfig(page_size=Size(A4_WIDTH, 4000)))
        params = tall.choose_params(export_document)
        assert params.name == "generous"
        assert params.cell_padding == tall.config.generous_padding

    def test_compact_when_overflowing(self, assembler, crowded, caplog):
        """Test that compact padding is chosen when generous needs more pages."""
        with caplog.at_level(logging.INFO, logger="exportdocs"):
            params = assembler.choose_params(crowded)
        assert params.name == "compact"
        assert params.cell_padding == assembler.config.compact_padding
        assert "using compact padding" in caplog.text

    def test_decision_follows_dry_run(self, assembler, export_document):
        """Test that the choice matches the generous dry run."""
        plan = assembler.dry_run(export_document, assembler.default_params())
        expected = "generous" if plan.page_count <= 1 else "compact"
        assert assembler.choose_params(export_document).name == expected

    def test_compact_is_denser(self, assembler, crowded):
        """Test that compact padding never needs more pages than generous."""
        generous = assembler.dry_run(crowded, assembler.default_params())
        compact = assembler.dry_run(crowded, assembler.compact_params())
        assert compact.page_count <= generous.page_count

    def test_dry_run_is_repeatable(self, assembler, crowded):
        """Test that dry runs share no layout state."""
        first = assembler.dry_run(crowded, assembler.default_params())
        second = assembler.dry_run(crowded, assembler.default_params())
        assert first == second

    def test_committed_render_uses_choice(self, assembler, crowded):
        """Test that the PDF is laid out with the chosen padding."""
        expected = assembler.dry_run(crowded, assembler.compact_params()).page_count
        reader = PdfReader(io.BytesIO(assembler.render(crowded)))
        assert len(reader.pages) == expected

    def test_render_pdf(self, assembler, export_document):
        """Test that a readable PDF is produced."""
        reader = PdfReader(io.BytesIO(assembler.render(export_document)))
        assert "ANNEXURE" in reader.pages[0].extract_text()
        assert assembler.filename(export_document) == "ANNEXURE_EXP_001_24-25.pdf"
