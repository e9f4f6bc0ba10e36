from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Generic, TypeVar

from intake.entities.exceptions import EntityServiceError
from intake.entities.models import (
    BulkOperationResult,
    Contract,
    EntityType,
    Expense,
    FinancialEntity,
    Receivable,
)

E = TypeVar("E", Contract, Expense, Receivable)


class BaseEntityService(ABC, Generic[E]):
    """Contract for downstream services that persist one entity type."""

    entity_type: EntityType

    @abstractmethod
    def bulk_create(
        self,
        items: list[E],
        *,
        continue_on_error: bool = True,
    ) -> BulkOperationResult[E]:
        """Create every item independently and report each outcome.

        Each item is accepted or rejected atomically. With continue_on_error
        a rejected item never stops the remaining ones; without it, items
        after the first rejection are reported as skipped. Rejections are
        returned in the result, not raised.
        """

    def _run_items(
        self,
        items: list[E],
        create_one: Callable[[E], E],
        continue_on_error: bool,
    ) -> BulkOperationResult[E]:
        succeeded: list[E] = []
        failed: list[tuple[E, str]] = []
        halted = False
        for index, item in enumerate(items):
            if halted:
                failed.append((item, self._describe(index, item, "skipped after earlier failure")))
                continue
            try:
                succeeded.append(create_one(item))
            except EntityServiceError as exc:
                failed.append((item, self._describe(index, item, str(exc))))
                halted = not continue_on_error
        return BulkOperationResult(succeeded=succeeded, failed=failed)

    def _describe(self, index: int, item: E, reason: str) -> str:
        return f"{self.entity_type.value.capitalize()} {index + 1} ({entity_label(item)}): {reason}"


def entity_label(entity: FinancialEntity) -> str:
    """Short human-readable identifier used in error messages."""
    if isinstance(entity, Contract):
        return entity.project_name
    if isinstance(entity, Expense):
        return entity.description
    return entity.client_name
