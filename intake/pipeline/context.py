from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from intake.documents.models import ExtractionFocus, ExtractionStrategy, InputFile
from intake.entities.models import EntityType, FinancialEntity
from intake.extraction.models import CandidateEntity
from intake.logging.logger import Log
from intake.pipeline.models import ProcessingResult
from intake.validation.models import ClarificationRequest


class PipelineState(str, Enum):
    IDLE = "idle"
    EXTRACTING = "extracting"
    RECONCILING = "reconciling"
    VALIDATING = "validating"
    COMMITTING = "committing"
    DONE = "done"


@dataclass(slots=True)
class FileContext:
    file: InputFile
    focus: ExtractionFocus = ExtractionFocus.AUTO
    user_guidance: str = ""
    strategy: ExtractionStrategy | None = None
    materialized_text: str | None = None
    raw_response: str | None = None
    candidates: list[CandidateEntity] = field(default_factory=list)


@dataclass(slots=True)
class BatchContext:
    """Everything one invocation accumulates; discarded once the result is built."""

    total_files: int
    state: PipelineState = PipelineState.IDLE
    state_history: list[tuple[PipelineState, int | None]] = field(
        default_factory=lambda: [(PipelineState.IDLE, None)]
    )
    processed_files: int = 0
    candidates: list[CandidateEntity] = field(default_factory=list)
    entities: dict[EntityType, list[FinancialEntity]] = field(
        default_factory=lambda: {entity_type: [] for entity_type in EntityType}
    )
    clarifications: list[ClarificationRequest] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    result: ProcessingResult | None = None

    def enter(self, state: PipelineState, file_index: int | None = None) -> None:
        self.state = state
        self.state_history.append((state, file_index))
        Log.debug(f"Pipeline state -> {state.value}" + ("" if file_index is None else f" [{file_index}]"))


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: FileContext) -> FileContext:
        raise NotImplementedError
