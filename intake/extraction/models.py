from dataclasses import dataclass, field
from typing import Any

from intake.documents.models import ExtractionStrategy
from intake.entities.models import EntityType


@dataclass(frozen=True)
class CandidateSource:
    """Where a candidate entity came from."""

    file_name: str
    extraction_method: ExtractionStrategy


@dataclass(frozen=True)
class CandidateEntity:
    """An extracted, not yet validated, financial record.

    fields is the model's loosely-typed field map, keyed by the camelCase
    names used in the extraction prompt.
    """

    entity_type: EntityType
    confidence: float
    fields: dict[str, Any]
    source: CandidateSource


@dataclass(frozen=True)
class Attachment:
    """Binary content sent to the model alongside the prompt."""

    media_type: str
    data: bytes
    filename: str = ""

    @property
    def is_image(self) -> bool:
        return self.media_type.startswith("image/")


@dataclass(frozen=True)
class PromptPayload:
    """Everything one model request needs."""

    system_prompt: str
    user_prompt: str
    attachments: list[Attachment] = field(default_factory=list)
