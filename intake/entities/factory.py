from dataclasses import dataclass

from intake.config.settings import Settings
from intake.database.entity_repository import (
    PostgresContractRepository,
    PostgresExpenseRepository,
    PostgresReceivableRepository,
)
from intake.entities.base import BaseEntityService
from intake.entities.memory_service import InMemoryEntityService
from intake.entities.models import Contract, EntityType, Expense, Receivable


@dataclass(frozen=True)
class EntityServices:
    """The three downstream services the committer writes through."""

    contracts: BaseEntityService[Contract]
    expenses: BaseEntityService[Expense]
    receivables: BaseEntityService[Receivable]


class EntityServicesFactory:
    """Creates the configured entity store."""

    STORES = ("memory", "postgres")

    @classmethod
    def create(cls, settings: Settings) -> EntityServices:
        store = settings.entity_store.lower()
        if store == "memory":
            contracts: InMemoryEntityService[Contract] = InMemoryEntityService(
                EntityType.CONTRACT
            )
            return EntityServices(
                contracts=contracts,
                expenses=InMemoryEntityService(EntityType.EXPENSE),
                receivables=InMemoryEntityService(EntityType.RECEIVABLE, contracts=contracts),
            )
        if store == "postgres":
            return EntityServices(
                contracts=PostgresContractRepository(),
                expenses=PostgresExpenseRepository(),
                receivables=PostgresReceivableRepository(),
            )
        raise ValueError(f"Unknown entity store '{store}'. Choose from: {list(cls.STORES)}")
