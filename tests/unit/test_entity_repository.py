from unittest.mock import MagicMock, patch

import psycopg

from intake.database.entity_repository import (
    PostgresExpenseRepository,
    PostgresReceivableRepository,
)
from intake.entities.models import Expense, Receivable


def _mock_connection(mock_get_conn: MagicMock) -> tuple[MagicMock, MagicMock]:
    """Wire up a mock connection + cursor and return (mock_conn, mock_cursor)."""
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    mock_get_conn.return_value.__enter__ = MagicMock(return_value=mock_conn)
    mock_get_conn.return_value.__exit__ = MagicMock(return_value=False)
    return mock_conn, mock_cursor


def _make_expense(amount: float = 10.0) -> Expense:
    return Expense(description="Cimento", amount=amount, category="materiais", due_date="2024-03-15")


class TestBulkCreate:
    @patch("intake.database.entity_repository.get_connection")
    def test_inserts_each_row_and_commits_once(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)

        result = PostgresExpenseRepository().bulk_create([_make_expense(), _make_expense(20.0)])

        assert result.success_count == 2
        assert mock_cursor.execute.call_count == 2
        assert mock_conn.transaction.call_count == 2
        mock_conn.commit.assert_called_once()

    @patch("intake.database.entity_repository.get_connection")
    def test_passes_non_null_values_only(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)

        PostgresExpenseRepository().bulk_create([_make_expense()])

        params = mock_cursor.execute.call_args.args[1]
        assert params == ["Cimento", 10.0, "materiais", "2024-03-15"]

    @patch("intake.database.entity_repository.get_connection")
    def test_rejected_row_does_not_stop_others(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.execute.side_effect = [psycopg.Error("duplicate key"), None]

        result = PostgresExpenseRepository().bulk_create([_make_expense(), _make_expense(20.0)])

        assert result.success_count == 1
        assert result.errors == ["Expense 1 (Cimento): database rejected row: duplicate key"]
        mock_conn.commit.assert_called_once()

    @patch("intake.database.entity_repository.get_connection")
    def test_shape_violation_never_reaches_database(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)

        result = PostgresExpenseRepository().bulk_create([_make_expense(-5.0)])

        assert result.failure_count == 1
        mock_cursor.execute.assert_not_called()

    @patch("intake.database.entity_repository.get_connection")
    def test_empty_batch_skips_database(self, mock_get_conn: MagicMock) -> None:
        result = PostgresExpenseRepository().bulk_create([])
        assert result.success_count == 0
        mock_get_conn.assert_not_called()


class TestReceivableContractLookup:
    @patch("intake.database.entity_repository.get_connection")
    def test_resolves_contract_id(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = (7,)

        PostgresReceivableRepository().bulk_create(
            [Receivable(client_name="Ana", amount=5.0, description="Parcela", contract_name="Casa Nova ")]
        )

        lookup, insert = mock_cursor.execute.call_args_list
        assert "LOWER(project_name) = LOWER(%s)" in lookup.args[0]
        assert lookup.args[1] == ("Casa Nova",)
        assert insert.args[1] == ["Ana", 5.0, "Parcela", 7]

    @patch("intake.database.entity_repository.get_connection")
    def test_unmatched_contract_stores_null(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = None

        result = PostgresReceivableRepository().bulk_create(
            [Receivable(client_name="Ana", amount=5.0, description="Parcela", contract_name="Nada")]
        )

        assert result.success_count == 1
        assert mock_cursor.execute.call_args.args[1] == ["Ana", 5.0, "Parcela", None]

    @patch("intake.database.entity_repository.get_connection")
    def test_receivable_without_contract_skips_lookup(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)

        PostgresReceivableRepository().bulk_create(
            [Receivable(client_name="Ana", amount=5.0, description="Parcela")]
        )

        assert mock_cursor.execute.call_count == 1
