"""Last-resort extraction from the file name alone.

Used for files no model strategy can read. Produces at most one low-confidence
placeholder whose unknown required fields are left absent, so the candidate
always ends up as clarification requests rather than a created entity.
"""

from datetime import date

from intake.documents.models import ExtractionStrategy
from intake.entities.models import EntityType
from intake.extraction.models import CandidateEntity, CandidateSource
from intake.logging.logger import Log

HEURISTIC_CONFIDENCE = 0.3

KEYWORDS: tuple[tuple[EntityType, tuple[str, ...]], ...] = (
    (EntityType.CONTRACT, ("contrato", "proposta", "contract", "proposal")),
    (EntityType.EXPENSE, ("despesa", "gasto", "expense", "recibo", "receipt")),
    (EntityType.RECEIVABLE, ("recebivel", "recebível", "receivable", "fatura", "invoice", "boleto")),
)


def infer_from_filename(file_name: str, today: date | None = None) -> list[CandidateEntity]:
    """Guess an entity type from keywords in the file name.

    Returns an empty list when no keyword matches.
    """
    entity_type = match_entity_type(file_name)
    if entity_type is None:
        Log.info(f"No filename pattern matched for {file_name}")
        return []
    day = (today or date.today()).isoformat()
    candidate = CandidateEntity(
        entity_type=entity_type,
        confidence=HEURISTIC_CONFIDENCE,
        fields=_placeholder_fields(entity_type, file_name, day),
        source=CandidateSource(
            file_name=file_name,
            extraction_method=ExtractionStrategy.FILENAME_HEURISTIC,
        ),
    )
    Log.info(f"Filename pattern matched {entity_type.value} for {file_name}")
    return [candidate]


def match_entity_type(file_name: str) -> EntityType | None:
    lowered = file_name.lower()
    for entity_type, keywords in KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return entity_type
    return None


def _placeholder_fields(entity_type: EntityType, file_name: str, day: str) -> dict[str, object]:
    if entity_type == EntityType.CONTRACT:
        return {
            "projectName": f"Projeto - {file_name}",
            "signedDate": day,
            "description": f"Contrato importado de arquivo: {file_name}",
        }
    if entity_type == EntityType.EXPENSE:
        return {"description": f"Despesa - {file_name}", "dueDate": day}
    return {"description": f"Recebível - {file_name}", "expectedDate": day}
