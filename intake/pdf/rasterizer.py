import pymupdf

from intake.pdf.exceptions import PdfRenderError


class PyMuPdfRasterizer:
    """Renders PDF pages to PNG for model services without native PDF input."""

    def __init__(self, max_pages: int = 10, dpi: int = 144) -> None:
        self._max_pages = max_pages
        self._dpi = dpi

    def render_pages(self, pdf_bytes: bytes) -> list[bytes]:
        """Return one PNG per page, up to max_pages.

        Raises:
            PdfRenderError: if the document cannot be opened or has no pages.
        """
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                images = [
                    page.get_pixmap(dpi=self._dpi).tobytes("png")
                    for index, page in enumerate(doc)
                    if index < self._max_pages
                ]
        except Exception as exc:
            raise PdfRenderError(f"pymupdf rendering failed: {exc}") from exc
        if not images:
            raise PdfRenderError("PDF has no pages to render")
        return images
