from typing import Any, ClassVar

import psycopg
from psycopg import sql

from intake.database.connection import get_connection
from intake.entities.base import BaseEntityService, E
from intake.entities.exceptions import EntityServiceError
from intake.entities.models import (
    BulkOperationResult,
    Contract,
    EntityType,
    Expense,
    Receivable,
    as_payload,
)
from intake.entities.validator import check_entity
from intake.logging.logger import Log


class PostgresEntityRepository(BaseEntityService[E]):
    """Bulk inserts into one table, one savepoint per row.

    The whole batch shares a transaction; a rejected row rolls back to its
    own savepoint, so accepted rows are committed together at the end.
    """

    TABLE: ClassVar[str]

    def bulk_create(
        self,
        items: list[E],
        *,
        continue_on_error: bool = True,
    ) -> BulkOperationResult[E]:
        if not items:
            return BulkOperationResult()
        with get_connection() as conn:
            result = self._run_items(
                items,
                lambda item: self._insert_one(conn, item),
                continue_on_error,
            )
            conn.commit()
        Log.info(
            f"Inserted {result.success_count} of {len(items)} rows into {self.TABLE}"
        )
        return result

    def _insert_one(self, conn: psycopg.Connection[Any], item: E) -> E:
        checked: E = check_entity(item)  # type: ignore[assignment]
        try:
            with conn.transaction():
                self._insert_row(conn, self._row_values(conn, checked))
        except psycopg.Error as exc:
            raise EntityServiceError(f"database rejected row: {exc}") from exc
        return checked

    def _row_values(self, conn: psycopg.Connection[Any], entity: E) -> dict[str, object]:
        _ = conn
        return as_payload(entity)

    def _insert_row(self, conn: psycopg.Connection[Any], values: dict[str, object]) -> None:
        columns = list(values)
        query = sql.SQL("INSERT INTO {table} ({columns}) VALUES ({values})").format(
            table=sql.Identifier(self.TABLE),
            columns=sql.SQL(", ").join(sql.Identifier(c) for c in columns),
            values=sql.SQL(", ").join(sql.Placeholder() * len(columns)),
        )
        with conn.cursor() as cur:
            cur.execute(query, [values[c] for c in columns])


class PostgresContractRepository(PostgresEntityRepository[Contract]):
    """Database operations for the contracts table."""

    TABLE = "contracts"
    entity_type = EntityType.CONTRACT


class PostgresExpenseRepository(PostgresEntityRepository[Expense]):
    """Database operations for the expenses table."""

    TABLE = "expenses"
    entity_type = EntityType.EXPENSE


class PostgresReceivableRepository(PostgresEntityRepository[Receivable]):
    """Database operations for the receivables table.

    A receivable's contract_name is matched case-insensitively against
    contracts.project_name; the newest match wins, no match stores NULL.
    """

    TABLE = "receivables"
    entity_type = EntityType.RECEIVABLE

    def _row_values(self, conn: psycopg.Connection[Any], entity: Receivable) -> dict[str, object]:
        values = as_payload(entity)
        contract_name = values.pop("contract_name", None)
        if isinstance(contract_name, str):
            values["contract_id"] = self._find_contract_id(conn, contract_name)
        return values

    def _find_contract_id(self, conn: psycopg.Connection[Any], project_name: str) -> int | None:
        with conn.cursor() as cur:
            cur.execute(
                """
                SELECT id
                FROM contracts
                WHERE LOWER(project_name) = LOWER(%s)
                ORDER BY id DESC
                LIMIT 1
                """,
                (project_name.strip(),),
            )
            row = cur.fetchone()
        if row is None:
            Log.warning(f"No contract for project '{project_name}', receivable stored standalone")
            return None
        return int(row[0])
