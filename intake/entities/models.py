from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Generic, TypeVar


class EntityType(str, Enum):
    """Financial entity kinds the pipeline can create."""

    CONTRACT = "contract"
    EXPENSE = "expense"
    RECEIVABLE = "receivable"


@dataclass(frozen=True)
class Contract:
    """A signed project contract with a client."""

    client_name: str
    project_name: str
    total_value: float
    signed_date: str
    category: str
    description: str | None = None
    status: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class Expense:
    """A payable cost of the business."""

    description: str
    amount: float
    category: str
    due_date: str | None = None
    vendor: str | None = None
    status: str | None = None
    paid_date: str | None = None
    invoice_number: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class Receivable:
    """An amount a client owes.

    contract_name holds the project name of the contract it belongs to;
    the entity service resolves it to a stored contract, if any.
    """

    client_name: str
    amount: float
    description: str
    expected_date: str | None = None
    contract_name: str | None = None
    status: str | None = None
    received_date: str | None = None
    received_amount: float | None = None
    category: str | None = None


FinancialEntity = Contract | Expense | Receivable

ENTITY_CLASSES: dict[EntityType, type[Contract] | type[Expense] | type[Receivable]] = {
    EntityType.CONTRACT: Contract,
    EntityType.EXPENSE: Expense,
    EntityType.RECEIVABLE: Receivable,
}


def as_payload(entity: FinancialEntity) -> dict[str, object]:
    """Column/value mapping of an entity with unset optional fields left out."""
    return {key: value for key, value in asdict(entity).items() if value is not None}


T = TypeVar("T")


@dataclass(frozen=True)
class BulkOperationResult(Generic[T]):
    """Outcome of a continue-on-error bulk write.

    Every submitted item lands in exactly one of succeeded or failed.
    """

    succeeded: list[T] = field(default_factory=list)
    failed: list[tuple[T, str]] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.succeeded)

    @property
    def failure_count(self) -> int:
        return len(self.failed)

    @property
    def errors(self) -> list[str]:
        return [reason for _, reason in self.failed]
