"""Static questions and example answers for each required field."""

from intake.entities.models import EntityType
from intake.entities.vocabulary import CONTRACT_CATEGORIES
from intake.validation.models import ClarificationRequest

QUESTIONS: dict[EntityType, dict[str, tuple[str, tuple[str, ...]]]] = {
    EntityType.CONTRACT: {
        "clientName": (
            "What is the client name for this contract?",
            ("Cliente A", "João Silva", "Empresa XYZ"),
        ),
        "projectName": (
            "What is the project name for this contract?",
            ("Projeto Residencial", "Reforma Apartamento", "Casa Nova"),
        ),
        "totalValue": (
            "What is the total contract value?",
            ("R$ 50.000", "R$ 100.000", "R$ 200.000"),
        ),
        "signedDate": (
            "When was this contract signed?",
            ("2024-01-15", "2024-03-01", "2024-06-30"),
        ),
        "category": (
            "What type of project is this contract for?",
            CONTRACT_CATEGORIES,
        ),
    },
    EntityType.EXPENSE: {
        "description": (
            "What is this expense for?",
            ("Material de construção", "Mão de obra", "Equipamentos"),
        ),
        "amount": (
            "What is the expense amount?",
            ("R$ 500", "R$ 1.000", "R$ 2.500"),
        ),
        "category": (
            "What category does this expense belong to?",
            ("materiais", "mão-de-obra", "equipamentos", "outros"),
        ),
    },
    EntityType.RECEIVABLE: {
        "clientName": (
            "Who is the client for this receivable?",
            ("Cliente A", "João Silva", "Empresa XYZ"),
        ),
        "amount": (
            "What is the receivable amount?",
            ("R$ 5.000", "R$ 10.000", "R$ 25.000"),
        ),
        "description": (
            "What is this receivable for?",
            ("Pagamento do projeto", "Consultoria", "Comissão"),
        ),
    },
}


def clarification_for(file_name: str, entity_type: EntityType, field: str) -> ClarificationRequest:
    """Build the request for one field; unknown fields get a generic question."""
    question, suggestions = QUESTIONS[entity_type].get(
        field,
        (f"Please provide the {field} for this {entity_type.value}.", ()),
    )
    return ClarificationRequest(
        file_name=file_name,
        entity_type=entity_type,
        field=field,
        question=question,
        suggestions=suggestions,
    )
