import io

import pandas as pd
import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Contrato de prestacao de servicos")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a three-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for page in ("Page one content", "Page two content", "Page three content"):
        c.drawString(72, 720, page)
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_xlsx_bytes() -> bytes:
    """Workbook with a data sheet, an empty sheet, then a second data sheet."""
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        pd.DataFrame(
            {
                "Cliente": ["João Silva", "Empresa XYZ"],
                "Projeto": ["Casa Nova", "Loja Centro"],
                "Valor": [50000, 120000],
            }
        ).to_excel(writer, sheet_name="Contratos", index=False)
        pd.DataFrame().to_excel(writer, sheet_name="Vazia", index=False)
        pd.DataFrame(
            {"Descrição": ["Cimento"], "Valor": [1500.5]}
        ).to_excel(writer, sheet_name="Despesas", index=False)
    return buf.getvalue()


@pytest.fixture()
def empty_xlsx_bytes() -> bytes:
    """Workbook whose only sheet has no cells."""
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        pd.DataFrame().to_excel(writer, sheet_name="Planilha1", index=False)
    return buf.getvalue()


@pytest.fixture()
def png_bytes() -> bytes:
    """Bytes that start with the PNG signature."""
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
