"""Tests for the purchase order assembler."""

import base64
import io
import logging
from dataclasses import replace

import pytest
from PyPDF2 import PdfReader

from exportdocs.assemblers import PurchaseOrderAssembler
from exportdocs.assemblers.purchase_order import IMAGE_ROW_HEIGHT
from exportdocs.assets import DocumentAssets
from exportdocs.engine.table_renderer import MAX_CELL_IMAGE
from exportdocs.exceptions import MissingEntityError
from exportdocs.records import PurchaseOrderRecord


@pytest.fixture
def assembler(config, assets):
    return PurchaseOrderAssembler(config, assets)


def image_names(surface, page_index):
    return [op.text for op in surface.ops(page_index, "image")]


class TestPurchaseOrderContent:
    """Test suite for the purchase order layout."""

    def test_details(self, assembler, purchase_order, compose, text_of):
        """Test manufacturer, order details and totals."""
        text = text_of(compose(assembler, purchase_order))
        assert "PURCHASE ORDER" in text
        assert "SUNRISE VITRIFIED LLP" in text
        assert "24AAQFS9876L1Z2" in text
        assert "HEM/PO/24-25/004" in text
        assert "20/06/2024" in text
        assert "HEM/PI/24-25/7" in text
        assert "Total Box:" in text
        assert "1200" in text

    def test_items(self, assembler, purchase_order, compose, text_of):
        """Test item rows with size prefix and image placeholder."""
        text = text_of(compose(assembler, purchase_order))
        assert "600x1200 Statuario Gold" in text
        assert "AS PER SAMPLE" in text
        assert "ONYX-01" in text
        assert "28.50" in text

    def test_without_source_invoice(self, assembler, purchase_order, compose, text_of):
        """Test that the PI reference line is dropped when absent."""
        text = text_of(compose(assembler, replace(purchase_order, source_pi_number="")))
        assert "Ref. PI No.:" not in text

    def test_letterhead_on_every_page(self, assembler, purchase_order_data, compose):
        """Test that header and footer images are drawn on each page."""
        purchase_order_data["items"] = [
            {"designName": f"Design {index}", "weightPerBox": "28", "boxes": 10, "thickness": "9 MM"}
            for index in range(60)
        ]
        surface = compose(assembler, PurchaseOrderRecord.from_dict(purchase_order_data))
        assert surface.page_count >= 2
        for page_index in range(surface.page_count):
            names = image_names(surface, page_index)
            assert "header" in names
            assert "footer" in names

    def test_terms_and_signature_together(self, assembler, purchase_order_data, compose):
        """Test that the terms box and the signature land on the same page."""
        for count in (2, 20, 24, 28, 32):
            purchase_order_data["items"] = [
                {"designName": f"Design {index}", "weightPerBox": "28", "boxes": 10, "thickness": "9 MM"}
                for index in range(count)
            ]
            surface = compose(assembler, PurchaseOrderRecord.from_dict(purchase_order_data))
            terms_pages = [i for i in range(surface.page_count) if "Terms & Conditions:" in surface.texts(i)]
            signature_pages = [i for i in range(surface.page_count) if "AUTHORISED SIGNATURE" in surface.texts(i)]
            assert terms_pages == signature_pages

    def test_signature_image(self, assembler, purchase_order, compose):
        """Test that the signature image is drawn above the signature line."""
        surface = compose(assembler, purchase_order)
        assert "signature" in image_names(surface, surface.page_count - 1)

    def test_without_assets(self, config, purchase_order, compose):
        """Test that the order renders without any images."""
        surface = compose(PurchaseOrderAssembler(config), purchase_order)
        assert all(image_names(surface, index) == [] for index in range(surface.page_count))


class TestProductImages:
    """Test suite for product images in the item table."""

    def test_image_centred_in_cell(self, assembler, purchase_order_data, png_bytes, compose, text_of):
        """Test that a product image replaces the design text, centred and capped in size."""
        purchase_order_data["items"][1]["image"] = png_bytes
        surface = compose(assembler, PurchaseOrderRecord.from_dict(purchase_order_data))
        cells = [op for op in surface.ops(0, "image") if op.text == "cell"]
        assert len(cells) == 1
        image = cells[0]
        assert image.width == pytest.approx(MAX_CELL_IMAGE)
        assert image.height == pytest.approx(MAX_CELL_IMAGE)
        frames = [
            op
            for op in surface.ops(0, "rect")
            if op.width == pytest.approx(60)
            and op.height >= IMAGE_ROW_HEIGHT
            and op.x == pytest.approx(image.x - 5)
            and op.y == pytest.approx(image.y - (op.height - MAX_CELL_IMAGE) / 2)
        ]
        assert frames
        text = text_of(surface)
        assert "ONYX-01" not in text
        assert "AS PER SAMPLE" in text

    def test_base64_data_uri(self, assembler, purchase_order_data, png_bytes, compose):
        """Test that a base64 data URI is accepted as the product image."""
        encoded = base64.b64encode(png_bytes).decode("ascii")
        purchase_order_data["items"][0]["imageData"] = f"data:image/png;base64,{encoded}"
        record = PurchaseOrderRecord.from_dict(purchase_order_data)
        assert record.items[0].image == png_bytes
        surface = compose(assembler, record)
        assert [op.text for op in surface.ops(0, "image")].count("cell") == 1

    @pytest.mark.parametrize("value", ["not base64 !!", base64.b64encode(b"plain text").decode("ascii")])
    def test_undecodable_image_falls_back_to_text(self, assembler, purchase_order_data, value, compose, text_of, caplog):
        """Test that an image that does not decode is dropped and the design text is printed."""
        purchase_order_data["items"][1]["imageData"] = value
        with caplog.at_level(logging.WARNING):
            record = PurchaseOrderRecord.from_dict(purchase_order_data)
        assert record.items[1].image is None
        assert "Onyx Blue" in caplog.text
        surface = compose(assembler, record)
        assert "cell" not in image_names(surface, 0)
        assert "ONYX-01" in text_of(surface)

    def test_broken_image_left_blank_in_pdf(self, assembler, purchase_order, caplog):
        """Test that an image failing to draw leaves its cell blank and the PDF is still written."""
        items = (replace(purchase_order.items[0], image=b"broken"),) + purchase_order.items[1:]
        with caplog.at_level(logging.WARNING):
            pdf = assembler.render(replace(purchase_order, items=items))
        assert pdf.startswith(b"%PDF")
        assert "leaving image cell blank" in caplog.text

    def test_row_height_without_images(self, assembler, purchase_order, compose):
        """Test that rows keep the compact height when no item has an image."""
        surface = compose(assembler, purchase_order)
        item_cells = [op for op in surface.ops(0, "rect") if op.width == pytest.approx(60)]
        assert item_cells
        assert all(op.height < IMAGE_ROW_HEIGHT for op in item_cells)


class TestPurchaseOrderRender:
    """Test suite for the committed PDF."""

    def test_render_pdf(self, assembler, purchase_order):
        """Test that a readable PDF is produced."""
        reader = PdfReader(io.BytesIO(assembler.render(purchase_order)))
        assert "PURCHASE ORDER" in reader.pages[0].extract_text()

    def test_broken_letterhead_skipped(self, config, purchase_order, caplog):
        """Test that an undecodable header image is left out with a warning."""
        assembler = PurchaseOrderAssembler(config, DocumentAssets(header_image=b"not an image"))
        with caplog.at_level(logging.WARNING):
            pdf = assembler.render(purchase_order)
        assert pdf.startswith(b"%PDF")
        assert "Skipping letterhead header" in caplog.text

    def test_missing_manufacturer(self, assembler, purchase_order):
        """Test that a missing manufacturer stops the render."""
        with pytest.raises(MissingEntityError):
            assembler.render(replace(purchase_order, manufacturer=None))

    def test_filename(self, assembler, purchase_order):
        """Test the generated file name."""
        assert assembler.filename(purchase_order) == "Purchase_Order_HEM_PO_24-25_004.pdf"
