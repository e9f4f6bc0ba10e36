import base64
from typing import Any

import httpx
import openai

from intake.extraction.client_base import BaseExtractionClient
from intake.extraction.exceptions import ExtractionError, ExtractionNetworkError
from intake.extraction.models import Attachment


class OpenAIClientAdapter(BaseExtractionClient):
    """Extraction client built on the OpenAI-compatible chat completions API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

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
        messages: list[dict[str, Any]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": self._user_content(user_prompt, attachments)})
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                messages=messages,  # type: ignore[arg-type]
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ExtractionNetworkError(f"Model service network error: {exc}") from exc
        except openai.APIError as exc:
            raise ExtractionNetworkError(f"Model service API error: {exc}") from exc

        if not response.choices:
            raise ExtractionError("Model service returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise ExtractionError("Model service returned empty response")
        return content

    @staticmethod
    def _user_content(
        user_prompt: str, attachments: list[Attachment]
    ) -> str | list[dict[str, Any]]:
        if not attachments:
            return user_prompt
        parts: list[dict[str, Any]] = [{"type": "text", "text": user_prompt}]
        for attachment in attachments:
            data_url = (
                f"data:{attachment.media_type};base64,"
                f"{base64.b64encode(attachment.data).decode('ascii')}"
            )
            if attachment.is_image:
                parts.append({"type": "image_url", "image_url": {"url": data_url}})
            else:
                parts.append({
                    "type": "file",
                    "file": {"filename": attachment.filename or "document", "file_data": data_url},
                })
        return parts
