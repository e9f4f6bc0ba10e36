class SpreadsheetMaterializationError(Exception):
    """Raised when a workbook cannot be decoded into sheets."""
