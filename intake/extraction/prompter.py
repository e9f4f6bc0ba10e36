"""Builds extraction prompts and sends them to the model service."""

from pathlib import Path

from intake.documents.classifier import attachment_media_type, detect_format
from intake.documents.models import ExtractionFocus, ExtractionStrategy, FileFormat, InputFile
from intake.entities.vocabulary import CONTRACT_CATEGORIES, EXPENSE_CATEGORIES
from intake.extraction.base import BaseExtractionPrompter
from intake.extraction.client_base import BaseExtractionClient
from intake.extraction.exceptions import ExtractionError
from intake.extraction.models import Attachment, PromptPayload
from intake.extraction.prompt_loader import load_locale_hints, load_prompt_template
from intake.logging.logger import Log
from intake.pdf.rasterizer import PyMuPdfRasterizer

DEFAULT_SYSTEM_PROMPT = (
    "You are a meticulous financial data extraction assistant for small "
    "businesses. You only answer with JSON."
)

FOCUS_INSTRUCTIONS: dict[ExtractionFocus, str] = {
    ExtractionFocus.CONTRACTS: "Extract ONLY contracts. Ignore expenses and receivables.",
    ExtractionFocus.EXPENSES: "Extract ONLY expenses. Ignore contracts and receivables.",
    ExtractionFocus.RECEIVABLES: "Extract ONLY receivables. Ignore contracts and expenses.",
}

PDF_ATTACHMENT_MODES = ("native", "images")


class ExtractionPrompter(BaseExtractionPrompter):
    """Sends one file per request to a multimodal model service."""

    def __init__(
        self,
        *,
        client: BaseExtractionClient,
        model: str,
        temperature: float = 0.1,
        max_tokens: int = 4000,
        locale: str = "pt-BR",
        pdf_attachment_mode: str = "native",
        rasterizer: PyMuPdfRasterizer | None = None,
        prompt_template_path: Path | None = None,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
    ) -> None:
        if pdf_attachment_mode not in PDF_ATTACHMENT_MODES:
            raise ValueError(
                f"Unknown pdf attachment mode '{pdf_attachment_mode}'. "
                f"Choose from: {list(PDF_ATTACHMENT_MODES)}"
            )
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._max_tokens = max_tokens
        self._system_prompt = system_prompt
        self._pdf_attachment_mode = pdf_attachment_mode
        self._rasterizer = rasterizer
        self._instructions = load_prompt_template(prompt_template_path).format(
            contract_categories=", ".join(CONTRACT_CATEGORIES),
            expense_categories=", ".join(EXPENSE_CATEGORIES),
        )
        self._locale_hints = load_locale_hints(locale)

    def extract(
        self,
        file: InputFile,
        strategy: ExtractionStrategy,
        *,
        materialized_text: str | None = None,
        focus: ExtractionFocus = ExtractionFocus.AUTO,
        user_guidance: str = "",
    ) -> str:
        payload = self.build_payload(
            file,
            strategy,
            materialized_text=materialized_text,
            focus=focus,
            user_guidance=user_guidance,
        )
        Log.debug(f"Extraction prompt for {file.name}:\n{payload.user_prompt}")

        raw_response = self._client.create_completion(
            model=self._model,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
            system_prompt=payload.system_prompt,
            user_prompt=payload.user_prompt,
            attachments=payload.attachments,
        )
        Log.debug(f"Model raw response for {file.name}:\n{raw_response}")
        Log.info(
            f"Extraction call complete for {file.name} ({strategy.value}, "
            f"{len(payload.attachments)} attachments, {len(raw_response)} chars)"
        )
        return raw_response

    def build_payload(
        self,
        file: InputFile,
        strategy: ExtractionStrategy,
        *,
        materialized_text: str | None = None,
        focus: ExtractionFocus = ExtractionFocus.AUTO,
        user_guidance: str = "",
    ) -> PromptPayload:
        """Assemble the prompt and attachments for one file."""
        if strategy == ExtractionStrategy.VISION_DOCUMENT:
            sections = [self._instructions, f"Document file name: {file.name}"]
            attachments = self._attachments_for(file)
        elif strategy == ExtractionStrategy.STRUCTURED_TEXT:
            text = materialized_text if materialized_text is not None else decode_text(file.content)
            sections = [self._instructions, f"DOCUMENT CONTENT ({file.name}):\n{text}"]
            if self._locale_hints:
                sections.append(self._locale_hints)
            attachments = []
        else:
            raise ExtractionError(f"Strategy {strategy.value} does not use the model service")

        focus_instruction = FOCUS_INSTRUCTIONS.get(focus)
        if focus_instruction:
            sections.append(focus_instruction)
        if user_guidance:
            sections.append(f"ADDITIONAL CONTEXT FROM THE USER:\n{user_guidance}")

        return PromptPayload(
            system_prompt=self._system_prompt,
            user_prompt="\n\n".join(sections),
            attachments=attachments,
        )

    def _attachments_for(self, file: InputFile) -> list[Attachment]:
        if detect_format(file) == FileFormat.PDF and self._pdf_attachment_mode == "images":
            if self._rasterizer is None:
                raise ExtractionError("PDF image mode requires a rasterizer")
            pages = self._rasterizer.render_pages(file.content)
            Log.info(f"Rasterized {len(pages)} pages of {file.name}")
            return [
                Attachment(media_type="image/png", data=page, filename=f"{file.name}-p{i}.png")
                for i, page in enumerate(pages, start=1)
            ]
        return [
            Attachment(
                media_type=attachment_media_type(file),
                data=file.content,
                filename=file.name,
            )
        ]


def decode_text(content: bytes) -> str:
    """Decode delimited text, falling back to Latin-1 for legacy exports."""
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError:
        return content.decode("latin-1")
