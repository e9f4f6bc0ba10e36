from abc import ABC, abstractmethod

from intake.extraction.models import Attachment


class BaseExtractionClient(ABC):
    """Contract for provider-specific multimodal model clients."""

    @abstractmethod
    def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        system_prompt: str,
        user_prompt: str,
        attachments: list[Attachment],
    ) -> str:
        """Return the provider's reply as plain text.

        Raises:
            ExtractionNetworkError: on timeouts, connection or API errors.
            ExtractionError: when the provider returns no content.
        """
