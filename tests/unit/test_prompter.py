"""Tests for the ExtractionPrompter."""

from unittest.mock import MagicMock

import pytest

from intake.documents.models import ExtractionFocus, ExtractionStrategy, InputFile
from intake.extraction.exceptions import ExtractionError, ExtractionNetworkError
from intake.extraction.prompter import ExtractionPrompter, decode_text


def _make_prompter(client: MagicMock | None = None, **kwargs: object) -> ExtractionPrompter:
    if client is None:
        client = MagicMock()
        client.create_completion.return_value = "[]"
    return ExtractionPrompter(client=client, model="test-model", **kwargs)  # type: ignore[arg-type]


def _make_file(name: str, media_type: str, content: bytes = b"data") -> InputFile:
    return InputFile(name=name, media_type=media_type, content=content, size_bytes=len(content))


class TestVisionPrompt:
    def test_attaches_image_binary(self) -> None:
        client = MagicMock()
        client.create_completion.return_value = "[]"
        prompter = _make_prompter(client)
        prompter.extract(_make_file("nota.jpg", "image/jpeg", b"\xff\xd8\xff"), ExtractionStrategy.VISION_DOCUMENT)
        attachments = client.create_completion.call_args.kwargs["attachments"]
        assert len(attachments) == 1
        assert attachments[0].media_type == "image/jpeg"
        assert attachments[0].data == b"\xff\xd8\xff"

    def test_attaches_pdf_natively_by_default(self) -> None:
        payload = _make_prompter().build_payload(
            _make_file("c.pdf", "application/pdf"), ExtractionStrategy.VISION_DOCUMENT
        )
        assert [a.media_type for a in payload.attachments] == ["application/pdf"]
        assert payload.attachments[0].filename == "c.pdf"

    def test_rasterizes_pdf_in_image_mode(self) -> None:
        rasterizer = MagicMock()
        rasterizer.render_pages.return_value = [b"p1", b"p2"]
        prompter = _make_prompter(pdf_attachment_mode="images", rasterizer=rasterizer)
        payload = prompter.build_payload(
            _make_file("c.pdf", "application/pdf", b"%PDF"), ExtractionStrategy.VISION_DOCUMENT
        )
        rasterizer.render_pages.assert_called_once_with(b"%PDF")
        assert [a.media_type for a in payload.attachments] == ["image/png", "image/png"]
        assert [a.data for a in payload.attachments] == [b"p1", b"p2"]

    def test_image_mode_without_rasterizer_raises(self) -> None:
        prompter = _make_prompter(pdf_attachment_mode="images")
        with pytest.raises(ExtractionError, match="rasterizer"):
            prompter.build_payload(_make_file("c.pdf", "application/pdf"), ExtractionStrategy.VISION_DOCUMENT)

    def test_unknown_pdf_mode_raises(self) -> None:
        with pytest.raises(ValueError, match="pdf attachment mode"):
            _make_prompter(pdf_attachment_mode="ocr")

    def test_instruction_lists_vocabularies(self) -> None:
        payload = _make_prompter().build_payload(
            _make_file("a.png", "image/png"), ExtractionStrategy.VISION_DOCUMENT
        )
        assert "Residencial, Comercial, Restaurante, Loja" in payload.user_prompt
        assert "mão-de-obra" in payload.user_prompt


class TestStructuredTextPrompt:
    def test_embeds_decoded_csv(self) -> None:
        csv_bytes = "Descrição,Valor\nCimento,\"1.500,00\"\n".encode()
        payload = _make_prompter().build_payload(
            _make_file("gastos.csv", "text/csv", csv_bytes), ExtractionStrategy.STRUCTURED_TEXT
        )
        assert "DOCUMENT CONTENT (gastos.csv):" in payload.user_prompt
        assert 'Cimento,"1.500,00"' in payload.user_prompt
        assert payload.attachments == []

    def test_includes_locale_hints(self) -> None:
        payload = _make_prompter(locale="pt-BR").build_payload(
            _make_file("a.csv", "text/csv"), ExtractionStrategy.STRUCTURED_TEXT
        )
        assert "Brazilian Portuguese" in payload.user_prompt

    def test_unknown_locale_has_no_hints(self) -> None:
        payload = _make_prompter(locale="xx-YY").build_payload(
            _make_file("a.csv", "text/csv"), ExtractionStrategy.STRUCTURED_TEXT
        )
        assert "Brazilian Portuguese" not in payload.user_prompt

    def test_prefers_materialized_text(self) -> None:
        payload = _make_prompter().build_payload(
            _make_file("p.xlsx", "application/vnd.ms-excel", b"PK\x03\x04"),
            ExtractionStrategy.STRUCTURED_TEXT,
            materialized_text="Spreadsheet File: p.xlsx\n\nSheet 1: A\nx,y\n\n",
        )
        assert "Sheet 1: A\nx,y" in payload.user_prompt

    def test_filename_heuristic_is_rejected(self) -> None:
        with pytest.raises(ExtractionError, match="does not use the model"):
            _make_prompter().build_payload(_make_file("a", "x/y"), ExtractionStrategy.FILENAME_HEURISTIC)


class TestFocusAndGuidance:
    def test_auto_focus_adds_nothing(self) -> None:
        payload = _make_prompter().build_payload(_make_file("a.png", "image/png"), ExtractionStrategy.VISION_DOCUMENT)
        assert "Extract ONLY" not in payload.user_prompt

    def test_focus_instruction_is_appended(self) -> None:
        payload = _make_prompter().build_payload(
            _make_file("a.png", "image/png"),
            ExtractionStrategy.VISION_DOCUMENT,
            focus=ExtractionFocus.RECEIVABLES,
        )
        assert payload.user_prompt.endswith("Extract ONLY receivables. Ignore contracts and expenses.")

    def test_guidance_is_appended(self) -> None:
        payload = _make_prompter().build_payload(
            _make_file("a.png", "image/png"),
            ExtractionStrategy.VISION_DOCUMENT,
            user_guidance="Os valores estão em milhares",
        )
        assert "ADDITIONAL CONTEXT FROM THE USER:\nOs valores estão em milhares" in payload.user_prompt


class TestModelCall:
    def test_returns_raw_reply(self) -> None:
        client = MagicMock()
        client.create_completion.return_value = "```json\n[]\n```"
        result = _make_prompter(client).extract(_make_file("a.png", "image/png"), ExtractionStrategy.VISION_DOCUMENT)
        assert result == "```json\n[]\n```"

    def test_passes_model_and_limits(self) -> None:
        client = MagicMock()
        client.create_completion.return_value = "[]"
        _make_prompter(client, max_tokens=1234).extract(
            _make_file("a.png", "image/png"), ExtractionStrategy.VISION_DOCUMENT
        )
        kwargs = client.create_completion.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["max_tokens"] == 1234
        assert kwargs["system_prompt"]

    def test_temperature_is_clamped(self) -> None:
        client = MagicMock()
        client.create_completion.return_value = "[]"
        _make_prompter(client, temperature=0.9).extract(
            _make_file("a.png", "image/png"), ExtractionStrategy.VISION_DOCUMENT
        )
        assert client.create_completion.call_args.kwargs["temperature"] == 0.2

    def test_network_error_propagates(self) -> None:
        client = MagicMock()
        client.create_completion.side_effect = ExtractionNetworkError("timeout")
        with pytest.raises(ExtractionNetworkError):
            _make_prompter(client).extract(_make_file("a.png", "image/png"), ExtractionStrategy.VISION_DOCUMENT)


class TestDecodeText:
    def test_utf8_with_bom(self) -> None:
        assert decode_text("\ufeffDescrição".encode()) == "Descrição"

    def test_latin1_fallback(self) -> None:
        assert decode_text("Descrição".encode("latin-1")) == "Descrição"
