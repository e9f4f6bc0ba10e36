from abc import ABC, abstractmethod

from intake.documents.models import ExtractionFocus, ExtractionStrategy, InputFile


class BaseExtractionPrompter(ABC):
    """Contract for all model-backed extractors."""

    @abstractmethod
    def extract(
        self,
        file: InputFile,
        strategy: ExtractionStrategy,
        *,
        materialized_text: str | None = None,
        focus: ExtractionFocus = ExtractionFocus.AUTO,
        user_guidance: str = "",
    ) -> str:
        """Ask the model service to extract entities from one file.

        Args:
            file: The uploaded file.
            strategy: VISION_DOCUMENT or STRUCTURED_TEXT.
            materialized_text: Pre-serialized spreadsheet text, if any.
            focus: Restricts the entity types the model is asked for.
            user_guidance: Free-text context appended to the prompt.

        Returns:
            The model's raw reply, untrusted and unparsed.

        Raises:
            ExtractionError: on any failure, including network errors.
        """
