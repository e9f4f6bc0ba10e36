from intake.config.settings import Settings
from intake.spreadsheet.base import BaseSpreadsheetMaterializer
from intake.spreadsheet.openpyxl_adapter import OpenpyxlSpreadsheetAdapter
from intake.spreadsheet.pandas_adapter import PandasSpreadsheetAdapter


class SpreadsheetMaterializerFactory:
    """Creates the workbook adapter selected in settings."""

    ADAPTERS: dict[str, type[BaseSpreadsheetMaterializer]] = {
        "pandas": PandasSpreadsheetAdapter,
        "openpyxl": OpenpyxlSpreadsheetAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseSpreadsheetMaterializer:
        engine = settings.spreadsheet_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown spreadsheet engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
