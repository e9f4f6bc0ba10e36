import io

import pandas as pd

from intake.spreadsheet.base import BaseSpreadsheetMaterializer
from intake.spreadsheet.exceptions import SpreadsheetMaterializationError


class PandasSpreadsheetAdapter(BaseSpreadsheetMaterializer):
    """Reads workbooks with pandas.read_excel."""

    def read_sheets(self, workbook_bytes: bytes) -> list[tuple[str, str]]:
        try:
            frames = pd.read_excel(
                io.BytesIO(workbook_bytes),
                sheet_name=None,
                header=None,
                dtype=object,
            )
        except Exception as exc:
            raise SpreadsheetMaterializationError(f"pandas read failed: {exc}") from exc

        return [(str(name), self._frame_to_csv(frame)) for name, frame in frames.items()]

    @staticmethod
    def _frame_to_csv(frame: pd.DataFrame) -> str:
        trimmed = frame.dropna(how="all").dropna(axis=1, how="all")
        if trimmed.empty:
            return ""
        return trimmed.to_csv(index=False, header=False, lineterminator="\n").strip()
