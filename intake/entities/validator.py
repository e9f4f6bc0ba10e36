"""Field-level shape rules enforced before an entity is stored."""

import math
from datetime import date

from intake.entities.exceptions import EntityValidationError
from intake.entities.models import Contract, Expense, FinancialEntity, Receivable
from intake.entities.vocabulary import (
    CONTRACT_CATEGORIES,
    CONTRACT_STATUSES,
    EXPENSE_CATEGORIES,
    EXPENSE_STATUSES,
    RECEIVABLE_STATUSES,
)

_MAX_TEXT_LENGTH = 500


def check_entity(entity: FinancialEntity) -> FinancialEntity:
    """Validate an entity and return it with dates normalized to YYYY-MM-DD.

    Raises:
        EntityValidationError: on the first rule the entity breaks.
    """
    if isinstance(entity, Contract):
        return _check_contract(entity)
    if isinstance(entity, Expense):
        return _check_expense(entity)
    return _check_receivable(entity)


def _check_contract(contract: Contract) -> Contract:
    _require_text("clientName", contract.client_name)
    _require_text("projectName", contract.project_name)
    _require_amount("totalValue", contract.total_value)
    _require_choice("category", contract.category, CONTRACT_CATEGORIES)
    _optional_choice("status", contract.status, CONTRACT_STATUSES)
    return Contract(
        client_name=contract.client_name,
        project_name=contract.project_name,
        total_value=contract.total_value,
        signed_date=_require_date("signedDate", contract.signed_date),
        category=contract.category,
        description=contract.description,
        status=contract.status,
        notes=contract.notes,
    )


def _check_expense(expense: Expense) -> Expense:
    _require_text("description", expense.description)
    _require_amount("amount", expense.amount)
    _require_choice("category", expense.category, EXPENSE_CATEGORIES)
    _optional_choice("status", expense.status, EXPENSE_STATUSES)
    return Expense(
        description=expense.description,
        amount=expense.amount,
        category=expense.category,
        due_date=_optional_date("dueDate", expense.due_date),
        vendor=expense.vendor,
        status=expense.status,
        paid_date=_optional_date("paidDate", expense.paid_date),
        invoice_number=expense.invoice_number,
        notes=expense.notes,
    )


def _check_receivable(receivable: Receivable) -> Receivable:
    _require_text("clientName", receivable.client_name)
    _require_amount("amount", receivable.amount)
    _require_text("description", receivable.description)
    _optional_choice("status", receivable.status, RECEIVABLE_STATUSES)
    if receivable.received_amount is not None:
        _require_amount("receivedAmount", receivable.received_amount)
    return Receivable(
        client_name=receivable.client_name,
        amount=receivable.amount,
        description=receivable.description,
        expected_date=_optional_date("expectedDate", receivable.expected_date),
        contract_name=receivable.contract_name,
        status=receivable.status,
        received_date=_optional_date("receivedDate", receivable.received_date),
        received_amount=receivable.received_amount,
        category=receivable.category,
    )


def _require_text(field: str, value: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise EntityValidationError(f"'{field}' must be a non-empty string")
    if len(value) > _MAX_TEXT_LENGTH:
        raise EntityValidationError(
            f"'{field}' must be at most {_MAX_TEXT_LENGTH} characters"
        )


def _require_amount(field: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise EntityValidationError(f"'{field}' must be a number")
    if not math.isfinite(value) or value <= 0:
        raise EntityValidationError(f"'{field}' must be a positive finite number")


def _require_choice(field: str, value: str, choices: tuple[str, ...]) -> None:
    if value not in choices:
        raise EntityValidationError(
            f"'{field}' must be one of {list(choices)}, got {value!r}"
        )


def _optional_choice(field: str, value: str | None, choices: frozenset[str]) -> None:
    if value is not None and value not in choices:
        raise EntityValidationError(
            f"'{field}' must be one of {sorted(choices)}, got {value!r}"
        )


def _require_date(field: str, value: str) -> str:
    if not isinstance(value, str):
        raise EntityValidationError(f"'{field}' must be an ISO date string")
    # "2024-01-15T00:00:00.000Z" keeps its calendar day
    day = value.strip()[:10]
    try:
        return date.fromisoformat(day).isoformat()
    except ValueError as exc:
        raise EntityValidationError(
            f"'{field}' must be a YYYY-MM-DD date, got {value!r}"
        ) from exc


def _optional_date(field: str, value: str | None) -> str | None:
    if value is None:
        return None
    return _require_date(field, value)
