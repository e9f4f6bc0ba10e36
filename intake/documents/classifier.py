"""Maps an uploaded file to the extraction strategy used for it.

Classification looks at the declared media type first, then the file
extension, and only when both are uninformative at the leading magic bytes.
It never raises: anything unrecognised falls through to the filename
heuristic.
"""

from intake.documents.models import ExtractionStrategy, FileFormat, InputFile

_IMAGE_EXTENSIONS: dict[str, str] = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "webp": "image/webp",
}
_SPREADSHEET_EXTENSIONS = frozenset({"xlsx", "xlsm", "xls", "ods"})
_DELIMITED_EXTENSIONS = frozenset({"csv", "tsv", "txt"})

_SPREADSHEET_MEDIA_TYPES = frozenset({
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-excel",
    "application/vnd.ms-excel.sheet.macroenabled.12",
    "application/vnd.oasis.opendocument.spreadsheet",
})
_DELIMITED_MEDIA_TYPES = frozenset({
    "text/csv",
    "application/csv",
    "text/tab-separated-values",
    "text/plain",
})
_GENERIC_MEDIA_TYPES = frozenset({
    "",
    "application/octet-stream",
    "binary/octet-stream",
    "application/unknown",
})

_MAGIC_SIGNATURES: tuple[tuple[bytes, FileFormat], ...] = (
    (b"%PDF", FileFormat.PDF),
    (b"\x89PNG", FileFormat.IMAGE),
    (b"\xff\xd8\xff", FileFormat.IMAGE),
    (b"GIF8", FileFormat.IMAGE),
)

_STRATEGY_BY_FORMAT: dict[FileFormat, ExtractionStrategy] = {
    FileFormat.IMAGE: ExtractionStrategy.VISION_DOCUMENT,
    FileFormat.PDF: ExtractionStrategy.VISION_DOCUMENT,
    FileFormat.DELIMITED_TEXT: ExtractionStrategy.STRUCTURED_TEXT,
    FileFormat.SPREADSHEET: ExtractionStrategy.STRUCTURED_TEXT,
    FileFormat.UNKNOWN: ExtractionStrategy.FILENAME_HEURISTIC,
}


def classify(file: InputFile) -> ExtractionStrategy:
    """Select the extraction strategy for a file.

    Spreadsheets map to STRUCTURED_TEXT; the materialization step may still
    fall back to VISION_DOCUMENT when the workbook yields no usable text.
    """
    return _STRATEGY_BY_FORMAT[detect_format(file)]


def detect_format(file: InputFile) -> FileFormat:
    """Return the format family of a file."""
    from_media_type = _format_from_media_type(file.media_type)
    if from_media_type is not None:
        return from_media_type
    from_extension = _format_from_extension(file.extension)
    if from_extension is not None:
        return from_extension
    if file.media_type in _GENERIC_MEDIA_TYPES:
        return _format_from_magic_bytes(file.content)
    return FileFormat.UNKNOWN


def attachment_media_type(file: InputFile) -> str:
    """Media type to declare when the file is sent as a binary attachment."""
    fmt = detect_format(file)
    if fmt == FileFormat.PDF:
        return "application/pdf"
    if fmt == FileFormat.IMAGE:
        if file.media_type.startswith("image/"):
            return file.media_type
        if file.extension in _IMAGE_EXTENSIONS:
            return _IMAGE_EXTENSIONS[file.extension]
        return _media_type_from_magic_bytes(file.content)
    return file.media_type or "application/octet-stream"


def _format_from_media_type(media_type: str) -> FileFormat | None:
    if media_type.startswith("image/"):
        return FileFormat.IMAGE
    if media_type == "application/pdf":
        return FileFormat.PDF
    if media_type in _SPREADSHEET_MEDIA_TYPES:
        return FileFormat.SPREADSHEET
    if media_type in _DELIMITED_MEDIA_TYPES:
        return FileFormat.DELIMITED_TEXT
    return None


def _format_from_extension(extension: str) -> FileFormat | None:
    if extension in _IMAGE_EXTENSIONS:
        return FileFormat.IMAGE
    if extension == "pdf":
        return FileFormat.PDF
    if extension in _SPREADSHEET_EXTENSIONS:
        return FileFormat.SPREADSHEET
    if extension in _DELIMITED_EXTENSIONS:
        return FileFormat.DELIMITED_TEXT
    return None


def _format_from_magic_bytes(content: bytes) -> FileFormat:
    for signature, fmt in _MAGIC_SIGNATURES:
        if content.startswith(signature):
            return fmt
    if content[:4] == b"RIFF" and content[8:12] == b"WEBP":
        return FileFormat.IMAGE
    return FileFormat.UNKNOWN


def _media_type_from_magic_bytes(content: bytes) -> str:
    if content.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if content.startswith(b"GIF8"):
        return "image/gif"
    if content[:4] == b"RIFF" and content[8:12] == b"WEBP":
        return "image/webp"
    return "image/png"
