from dataclasses import dataclass, field

from intake.validation.models import ClarificationRequest


@dataclass(frozen=True)
class ProcessingResult:
    """The single output of one pipeline invocation."""

    total_files: int
    processed_files: int
    extracted_entity_count: int
    created_entity_count: int
    contracts_created: int = 0
    expenses_created: int = 0
    receivables_created: int = 0
    errors: tuple[str, ...] = ()
    clarification_requests: tuple[ClarificationRequest, ...] = field(default_factory=tuple)

    def to_payload(self) -> dict[str, object]:
        """JSON-ready mapping with the upstream camelCase keys."""
        return {
            "totalFiles": self.total_files,
            "processedFiles": self.processed_files,
            "extractedEntityCount": self.extracted_entity_count,
            "createdEntityCount": self.created_entity_count,
            "errors": list(self.errors),
            "summary": {
                "contractsCreated": self.contracts_created,
                "expensesCreated": self.expenses_created,
                "receivablesCreated": self.receivables_created,
            },
            "clarificationRequests": [c.to_payload() for c in self.clarification_requests],
        }
