"""Parses the upstream JSON request into validated InputFile objects."""

import base64
import binascii
from typing import Any

from intake.documents.exceptions import (
    EmptyBatchError,
    IntakeRequestError,
    InvalidInputFileError,
)
from intake.documents.models import ExtractionFocus, InputFile, IntakeRequest

_DEFAULT_MAX_UPLOAD_BYTES = 20 * 1024 * 1024


def parse_request(
    payload: dict[str, Any],
    max_upload_bytes: int = _DEFAULT_MAX_UPLOAD_BYTES,
) -> IntakeRequest:
    """Validate a request payload and decode its files.

    Raises:
        EmptyBatchError: if 'files' is missing or empty.
        InvalidInputFileError: if any file entry is malformed.
        IntakeRequestError: if the focus or guidance fields are malformed.
    """
    raw_files = payload.get("files")
    if raw_files is None or (isinstance(raw_files, list) and not raw_files):
        raise EmptyBatchError("No files provided for processing")
    if not isinstance(raw_files, list):
        raise IntakeRequestError("'files' must be a list")

    files = [_build_file(item, i, max_upload_bytes) for i, item in enumerate(raw_files)]
    return IntakeRequest(
        files=files,
        focus=_build_focus(payload.get("extractionType")),
        user_guidance=_build_guidance(payload.get("userGuidance")),
    )


def _build_file(raw: Any, index: int, max_upload_bytes: int) -> InputFile:
    if not isinstance(raw, dict):
        raise InvalidInputFileError(f"File at index {index} must be an object")
    name = raw.get("name")
    if not name or not isinstance(name, str):
        raise InvalidInputFileError(f"File at index {index}: 'name' must be a non-empty string")
    media_type = raw.get("mediaType", raw.get("type"))
    if not media_type or not isinstance(media_type, str):
        raise InvalidInputFileError(f"File {name}: 'type' must be a non-empty string")
    encoded = raw.get("base64", raw.get("content"))
    if not encoded or not isinstance(encoded, str):
        raise InvalidInputFileError(f"File {name}: 'base64' must be a non-empty string")
    try:
        content = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidInputFileError(f"File {name}: content is not valid base64") from exc
    if len(content) > max_upload_bytes:
        raise InvalidInputFileError(
            f"File {name}: {len(content)} bytes exceeds the {max_upload_bytes} byte limit"
        )
    size = raw.get("size")
    if size is not None and (isinstance(size, bool) or not isinstance(size, int) or size < 0):
        raise InvalidInputFileError(f"File {name}: 'size' must be a non-negative integer")
    return InputFile(
        name=name,
        media_type=media_type.strip().lower(),
        content=content,
        size_bytes=size if size is not None else len(content),
    )


def _build_focus(raw: Any) -> ExtractionFocus:
    if raw is None:
        return ExtractionFocus.AUTO
    try:
        return ExtractionFocus(raw)
    except ValueError as exc:
        choices = [f.value for f in ExtractionFocus]
        raise IntakeRequestError(
            f"'extractionType' must be one of {choices}, got {raw!r}"
        ) from exc


def _build_guidance(raw: Any) -> str:
    if raw is None:
        return ""
    if not isinstance(raw, str):
        raise IntakeRequestError("'userGuidance' must be a string")
    return raw.strip()
