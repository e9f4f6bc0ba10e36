from dataclasses import dataclass, field

from intake.entities.models import EntityType, FinancialEntity


@dataclass(frozen=True)
class ClarificationRequest:
    """A question about one missing or invalid required field."""

    file_name: str
    entity_type: EntityType
    field: str
    question: str
    suggestions: tuple[str, ...] = ()

    def to_payload(self) -> dict[str, object]:
        return {
            "fileName": self.file_name,
            "entityType": self.entity_type.value,
            "field": self.field,
            "question": self.question,
            "suggestions": list(self.suggestions),
        }


@dataclass(frozen=True)
class ValidationOutcome:
    """Either a complete entity or the clarifications it still needs."""

    entity: FinancialEntity | None = None
    clarifications: list[ClarificationRequest] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return self.entity is not None
