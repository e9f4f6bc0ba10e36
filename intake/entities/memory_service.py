from dataclasses import dataclass
from typing import Generic

from intake.entities.base import BaseEntityService, E
from intake.entities.models import BulkOperationResult, Contract, EntityType, Receivable
from intake.entities.validator import check_entity
from intake.logging.logger import Log


@dataclass(frozen=True)
class StoredEntity(Generic[E]):
    """An accepted entity with its assigned identifier."""

    id: int
    entity: E
    contract_id: int | None = None


class InMemoryEntityService(BaseEntityService[E]):
    """Process-local entity store applying the same shape rules as PostgreSQL.

    A receivable service may be given the contract service so that
    receivables naming a project are linked to the matching contract.
    """

    def __init__(
        self,
        entity_type: EntityType,
        contracts: "InMemoryEntityService[Contract] | None" = None,
    ) -> None:
        self.entity_type = entity_type
        self._contracts = contracts
        self._rows: list[StoredEntity[E]] = []

    @property
    def rows(self) -> list[StoredEntity[E]]:
        return list(self._rows)

    def bulk_create(
        self,
        items: list[E],
        *,
        continue_on_error: bool = True,
    ) -> BulkOperationResult[E]:
        return self._run_items(items, self._store, continue_on_error)

    def find_contract_id(self, project_name: str) -> int | None:
        """Latest stored contract whose project name matches, case-insensitively."""
        wanted = project_name.strip().lower()
        for row in reversed(self._rows):
            if isinstance(row.entity, Contract) and row.entity.project_name.lower() == wanted:
                return row.id
        return None

    def _store(self, item: E) -> E:
        checked: E = check_entity(item)  # type: ignore[assignment]
        contract_id = None
        if isinstance(checked, Receivable) and checked.contract_name:
            contract_id = self._resolve_contract(checked.contract_name)
        self._rows.append(StoredEntity(id=len(self._rows) + 1, entity=checked, contract_id=contract_id))
        return checked

    def _resolve_contract(self, project_name: str) -> int | None:
        if self._contracts is None:
            return None
        contract_id = self._contracts.find_contract_id(project_name)
        if contract_id is None:
            Log.warning(f"No contract for project '{project_name}', receivable stored standalone")
        return contract_id
