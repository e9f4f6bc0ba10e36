"""Example extraction client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseExtractionClient and register the provider in ExtractionPrompterFactory.
"""

import json
from typing import ClassVar

from intake.extraction.client_base import BaseExtractionClient
from intake.extraction.models import Attachment


class ExampleClientAdapter(BaseExtractionClient):
    """Example adapter that returns a fixed, valid extraction reply.

    No network calls. Useful for local development, tests, and as a template
    for building real provider adapters.
    """

    DEFAULT_RESPONSE: ClassVar[list[dict[str, object]]] = [
        {
            "type": "expense",
            "confidence": 0.9,
            "data": {
                "description": "Material de construção",
                "amount": 1500.0,
                "dueDate": "2024-03-15",
                "category": "materiais",
            },
        }
    ]

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
        _ = model, temperature, max_tokens, system_prompt, user_prompt, attachments
        return json.dumps(self.DEFAULT_RESPONSE, ensure_ascii=False)
