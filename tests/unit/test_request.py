import base64

import pytest

from intake.documents.exceptions import EmptyBatchError, IntakeRequestError, InvalidInputFileError
from intake.documents.models import ExtractionFocus
from intake.documents.request import parse_request


def _encoded(content: bytes = b"hello") -> str:
    return base64.b64encode(content).decode("ascii")


def _make_file(**overrides: object) -> dict[str, object]:
    entry: dict[str, object] = {"name": "recibo.pdf", "type": "application/pdf", "base64": _encoded()}
    entry.update(overrides)
    return entry


class TestParseRequestSuccess:
    def test_decodes_files(self) -> None:
        request = parse_request({"files": [_make_file()]})
        assert len(request.files) == 1
        assert request.files[0].name == "recibo.pdf"
        assert request.files[0].content == b"hello"
        assert request.files[0].size_bytes == 5

    def test_accepts_media_type_alias(self) -> None:
        entry = _make_file()
        del entry["type"]
        entry["mediaType"] = " Application/PDF "
        request = parse_request({"files": [entry]})
        assert request.files[0].media_type == "application/pdf"

    def test_declared_size_is_kept(self) -> None:
        request = parse_request({"files": [_make_file(size=99)]})
        assert request.files[0].size_bytes == 99

    def test_defaults_to_auto_focus(self) -> None:
        request = parse_request({"files": [_make_file()]})
        assert request.focus == ExtractionFocus.AUTO
        assert request.user_guidance == ""

    def test_reads_focus_and_guidance(self) -> None:
        request = parse_request({
            "files": [_make_file()],
            "extractionType": "expenses",
            "userGuidance": "  valores em reais  ",
        })
        assert request.focus == ExtractionFocus.EXPENSES
        assert request.user_guidance == "valores em reais"


class TestParseRequestRejections:
    def test_missing_files_is_empty_batch(self) -> None:
        with pytest.raises(EmptyBatchError):
            parse_request({})

    def test_empty_files_is_empty_batch(self) -> None:
        with pytest.raises(EmptyBatchError) as exc_info:
            parse_request({"files": []})
        assert exc_info.value.code == "NO_FILES"

    def test_files_not_a_list(self) -> None:
        with pytest.raises(IntakeRequestError, match="must be a list"):
            parse_request({"files": "a.pdf"})

    def test_missing_name(self) -> None:
        with pytest.raises(InvalidInputFileError, match="'name'"):
            parse_request({"files": [_make_file(name="")]})

    def test_missing_media_type(self) -> None:
        with pytest.raises(InvalidInputFileError, match="'type'"):
            parse_request({"files": [_make_file(type=None)]})

    def test_invalid_base64(self) -> None:
        with pytest.raises(InvalidInputFileError, match="not valid base64"):
            parse_request({"files": [_make_file(base64="***not base64***")]})

    def test_oversized_file(self) -> None:
        with pytest.raises(InvalidInputFileError, match="exceeds"):
            parse_request({"files": [_make_file(base64=_encoded(b"x" * 11))]}, max_upload_bytes=10)

    def test_negative_size(self) -> None:
        with pytest.raises(InvalidInputFileError, match="'size'"):
            parse_request({"files": [_make_file(size=-1)]})

    def test_unknown_focus(self) -> None:
        with pytest.raises(IntakeRequestError, match="extractionType"):
            parse_request({"files": [_make_file()], "extractionType": "invoices"})

    def test_non_string_guidance(self) -> None:
        with pytest.raises(IntakeRequestError, match="userGuidance"):
            parse_request({"files": [_make_file()], "userGuidance": 42})

    def test_entry_not_an_object(self) -> None:
        with pytest.raises(InvalidInputFileError, match="index 0"):
            parse_request({"files": ["recibo.pdf"]})
