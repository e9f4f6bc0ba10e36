import pytest

from intake.pdf.exceptions import PdfRenderError
from intake.pdf.rasterizer import PyMuPdfRasterizer

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class TestPyMuPdfRasterizer:
    def test_renders_one_png_per_page(self, multi_page_pdf_bytes: bytes) -> None:
        pages = PyMuPdfRasterizer().render_pages(multi_page_pdf_bytes)
        assert len(pages) == 3
        assert all(page.startswith(PNG_SIGNATURE) for page in pages)

    def test_respects_max_pages(self, multi_page_pdf_bytes: bytes) -> None:
        pages = PyMuPdfRasterizer(max_pages=2).render_pages(multi_page_pdf_bytes)
        assert len(pages) == 2

    def test_higher_dpi_gives_larger_image(self, sample_pdf_bytes: bytes) -> None:
        low = PyMuPdfRasterizer(dpi=36).render_pages(sample_pdf_bytes)[0]
        high = PyMuPdfRasterizer(dpi=144).render_pages(sample_pdf_bytes)[0]
        assert len(high) > len(low)

    def test_invalid_pdf_raises(self) -> None:
        with pytest.raises(PdfRenderError, match="pymupdf rendering failed"):
            PyMuPdfRasterizer().render_pages(b"definitely not a pdf")
