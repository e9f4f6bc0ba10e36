from dataclasses import dataclass, field
from enum import Enum


class ExtractionStrategy(str, Enum):
    """How one input file is turned into model input."""

    VISION_DOCUMENT = "vision-document"
    STRUCTURED_TEXT = "structured-text"
    FILENAME_HEURISTIC = "filename-heuristic"


class FileFormat(str, Enum):
    """Concrete format family recognised by the classifier."""

    IMAGE = "image"
    PDF = "pdf"
    DELIMITED_TEXT = "delimited-text"
    SPREADSHEET = "spreadsheet"
    UNKNOWN = "unknown"


class ExtractionFocus(str, Enum):
    """Which entity types the caller wants extracted."""

    AUTO = "auto"
    CONTRACTS = "contracts"
    EXPENSES = "expenses"
    RECEIVABLES = "receivables"


@dataclass(frozen=True)
class InputFile:
    """One uploaded document, already decoded from base64."""

    name: str
    media_type: str
    content: bytes
    size_bytes: int

    @property
    def extension(self) -> str:
        _, dot, ext = self.name.rpartition(".")
        return ext.lower() if dot else ""


@dataclass(frozen=True)
class IntakeRequest:
    """Validated upstream request."""

    files: list[InputFile] = field(default_factory=list)
    focus: ExtractionFocus = ExtractionFocus.AUTO
    user_guidance: str = ""
