"""Checks candidates for required data and builds typed entities (presence rules only).

Dates are normalized to YYYY-MM-DD and amounts rounded to cents while building.
Full shape conformance (impossible dates, statuses, text limits) belongs to the
entity services; their rejections surface as commit errors, not clarifications.
"""

from collections.abc import Callable
from typing import Any

from intake.entities.models import Contract, EntityType, Expense, FinancialEntity, Receivable
from intake.entities.vocabulary import CONTRACT_CATEGORIES, EXPENSE_CATEGORIES
from intake.extraction.models import CandidateEntity
from intake.validation.amounts import parse_amount
from intake.validation.clarifications import clarification_for
from intake.validation.dates import normalize_date
from intake.validation.models import ValidationOutcome

Check = Callable[[Any], Any]


def _text(value: Any) -> str | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _cents(value: Any) -> float | None:
    amount = parse_amount(value)
    return None if amount is None else round(amount, 2)


def _positive_amount(value: Any) -> float | None:
    amount = _cents(value)
    if amount is None or amount <= 0:
        return None
    return amount


def _one_of(choices: tuple[str, ...]) -> Check:
    by_key = {choice.casefold(): choice for choice in choices}

    def check(value: Any) -> str | None:
        if not isinstance(value, str):
            return None
        return by_key.get(value.strip().casefold())

    return check


REQUIRED_FIELDS: dict[EntityType, tuple[tuple[str, Check], ...]] = {
    EntityType.CONTRACT: (
        ("clientName", _text),
        ("projectName", _text),
        ("totalValue", _positive_amount),
        ("signedDate", normalize_date),
        ("category", _one_of(CONTRACT_CATEGORIES)),
    ),
    EntityType.EXPENSE: (
        ("description", _text),
        ("amount", _positive_amount),
        ("category", _one_of(EXPENSE_CATEGORIES)),
    ),
    EntityType.RECEIVABLE: (
        ("clientName", _text),
        ("amount", _positive_amount),
        ("description", _text),
    ),
}


def validate(candidate: CandidateEntity) -> ValidationOutcome:
    """Return the entity, or one clarification per missing/invalid required field.

    A candidate with any clarification is never turned into an entity.
    """
    checked: dict[str, Any] = {}
    clarifications = []
    for field, check in REQUIRED_FIELDS[candidate.entity_type]:
        value = check(candidate.fields.get(field))
        if value is None:
            clarifications.append(
                clarification_for(candidate.source.file_name, candidate.entity_type, field)
            )
        else:
            checked[field] = value
    if clarifications:
        return ValidationOutcome(clarifications=clarifications)
    return ValidationOutcome(entity=_build_entity(candidate.entity_type, checked, candidate.fields))


def _build_entity(
    entity_type: EntityType,
    checked: dict[str, Any],
    fields: dict[str, Any],
) -> FinancialEntity:
    if entity_type == EntityType.CONTRACT:
        return Contract(
            client_name=checked["clientName"],
            project_name=checked["projectName"],
            total_value=checked["totalValue"],
            signed_date=checked["signedDate"],
            category=checked["category"],
            description=_text(fields.get("description")),
            status=_text(fields.get("status")),
            notes=_text(fields.get("notes")),
        )
    if entity_type == EntityType.EXPENSE:
        return Expense(
            description=checked["description"],
            amount=checked["amount"],
            category=checked["category"],
            due_date=normalize_date(fields.get("dueDate")),
            vendor=_text(fields.get("vendor")),
            status=_text(fields.get("status")),
            paid_date=normalize_date(fields.get("paidDate")),
            invoice_number=_text(fields.get("invoiceNumber")),
            notes=_text(fields.get("notes")),
        )
    return Receivable(
        client_name=checked["clientName"],
        amount=checked["amount"],
        description=checked["description"],
        expected_date=normalize_date(fields.get("expectedDate")),
        contract_name=_text(fields.get("contractName")),
        status=_text(fields.get("status")),
        received_date=normalize_date(fields.get("receivedDate")),
        received_amount=_cents(fields.get("receivedAmount")),
        category=_text(fields.get("category")),
    )
