from abc import ABC, abstractmethod

from intake.documents.models import InputFile
from intake.logging.logger import Log
from intake.spreadsheet.exceptions import SpreadsheetMaterializationError


class BaseSpreadsheetMaterializer(ABC):
    """Contract for all workbook-to-text adapters."""

    @abstractmethod
    def read_sheets(self, workbook_bytes: bytes) -> list[tuple[str, str]]:
        """Decode a workbook into (sheet name, delimited text) pairs.

        Sheets are returned in workbook order, including empty ones as "".

        Raises:
            SpreadsheetMaterializationError: if the workbook cannot be read.
        """

    def materialize(self, file: InputFile) -> str:
        """Serialize every non-empty sheet into one labeled text document.

        Returns "" when the workbook is unreadable; callers treat short
        output as a signal to resubmit the original binary instead.
        """
        try:
            sheets = self.read_sheets(file.content)
        except SpreadsheetMaterializationError as exc:
            Log.warning(f"Spreadsheet {file.name} could not be materialized: {exc}")
            return ""

        blocks = [
            f"Sheet {ordinal}: {name}\n{text}\n\n"
            for ordinal, (name, text) in enumerate(sheets, start=1)
            if text.strip()
        ]
        if not blocks:
            return ""
        return f"Spreadsheet File: {file.name}\n\n" + "".join(blocks)
