from dataclasses import dataclass, field
from typing import Any

from intake.entities.base import BaseEntityService
from intake.entities.factory import EntityServices
from intake.entities.models import EntityType, FinancialEntity
from intake.logging.logger import Log

COMMIT_ORDER: tuple[EntityType, ...] = (
    EntityType.CONTRACT,
    EntityType.EXPENSE,
    EntityType.RECEIVABLE,
)


@dataclass(frozen=True)
class TypeCommitOutcome:
    success_count: int = 0
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class CommitReport:
    per_type: dict[EntityType, TypeCommitOutcome]

    @property
    def total_created(self) -> int:
        return sum(outcome.success_count for outcome in self.per_type.values())

    @property
    def errors(self) -> list[str]:
        return [error for entity_type in COMMIT_ORDER for error in self.per_type[entity_type].errors]


class BulkCommitter:
    """Submits validated entities to the entity services, one bulk call per type.

    Contracts go first so receivables referring to a project by name can be
    linked by the receivable service. Failures are reported, never raised.
    """

    def __init__(self, services: EntityServices) -> None:
        self._services: dict[EntityType, BaseEntityService[Any]] = {
            EntityType.CONTRACT: services.contracts,
            EntityType.EXPENSE: services.expenses,
            EntityType.RECEIVABLE: services.receivables,
        }

    def commit(self, entities_by_type: dict[EntityType, list[FinancialEntity]]) -> CommitReport:
        per_type: dict[EntityType, TypeCommitOutcome] = {}
        for entity_type in COMMIT_ORDER:
            items = entities_by_type.get(entity_type, [])
            per_type[entity_type] = self._commit_type(entity_type, items)
        report = CommitReport(per_type=per_type)
        Log.info(f"Commit complete: {report.total_created} entities created")
        return report

    def _commit_type(self, entity_type: EntityType, items: list[FinancialEntity]) -> TypeCommitOutcome:
        if not items:
            return TypeCommitOutcome()
        label = entity_type.value.capitalize()
        try:
            result = self._services[entity_type].bulk_create(items, continue_on_error=True)
        except Exception as exc:
            Log.error(f"{label} bulk create failed: {exc}")
            return TypeCommitOutcome(errors=[f"{label} bulk create failed: {exc}"])
        for error in result.errors:
            Log.warning(f"{label} rejected: {error}")
        Log.info(f"Created {result.success_count} of {len(items)} {entity_type.value} entities")
        return TypeCommitOutcome(success_count=result.success_count, errors=result.errors)
