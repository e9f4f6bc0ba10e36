import csv
import io
from collections.abc import Iterable
from datetime import date, datetime

import openpyxl

from intake.spreadsheet.base import BaseSpreadsheetMaterializer
from intake.spreadsheet.exceptions import SpreadsheetMaterializationError


class OpenpyxlSpreadsheetAdapter(BaseSpreadsheetMaterializer):
    """Reads .xlsx workbooks cell by cell with openpyxl."""

    def read_sheets(self, workbook_bytes: bytes) -> list[tuple[str, str]]:
        try:
            workbook = openpyxl.load_workbook(
                io.BytesIO(workbook_bytes), read_only=True, data_only=True
            )
        except Exception as exc:
            raise SpreadsheetMaterializationError(f"openpyxl read failed: {exc}") from exc

        try:
            return [
                (sheet.title, self._sheet_to_csv(sheet.iter_rows(values_only=True)))
                for sheet in workbook.worksheets
            ]
        finally:
            workbook.close()

    def _sheet_to_csv(self, rows: Iterable[tuple[object, ...]]) -> str:
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        for row in rows:
            cells = [self._cell_text(value) for value in row]
            while cells and cells[-1] == "":
                cells.pop()
            if cells:
                writer.writerow(cells)
        return buf.getvalue().strip()

    @staticmethod
    def _cell_text(value: object) -> str:
        if value is None:
            return ""
        if isinstance(value, datetime):
            if value.time() == datetime.min.time():
                return value.date().isoformat()
            return value.isoformat(sep=" ")
        if isinstance(value, date):
            return value.isoformat()
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value).strip()
