"""
SQL Store
Prepare/bind/execute capability over SQLAlchemy with per-statement outcomes
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import insert as sa_insert, update as sa_update, Table
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.engine import RowMapping
from sqlalchemy.orm import sessionmaker
from sqlalchemy.sql.expression import Executable, ColumnElement

from gaitlab.core.exceptions import StoreError
from gaitlab.logger import logger


@dataclass
class StoreResult:
    """Outcome of one write statement"""
    success: bool
    error: Optional[str] = None
    rows_affected: int = 0


# (table, column values) for one row
PreparedInsert = Tuple[Table, Dict[str, Any]]


def describe_error(exc: Exception) -> str:
    """Driver-level message of a SQLAlchemy error, if there is one"""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


class SqlStore:
    """
    Backing store used by the repositories

    Write statements report failure through StoreResult instead of raising,
    so callers can inspect the cause (e.g. a uniqueness violation). Reads
    raise StoreError.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def insert(self, table: Table, values: Dict[str, Any]) -> StoreResult:
        """
        Insert a single row

        Args:
            table: Target table
            values: Column values

        Returns:
            StoreResult
        """
        with self._session_factory() as session:
            try:
                result = session.execute(sa_insert(table).values(**values))
                session.commit()
                return StoreResult(success=True, rows_affected=result.rowcount or 1)
            except SQLAlchemyError as e:
                session.rollback()
                logger.debug(f"STORE: insert into {table.name} failed: {describe_error(e)}")
                return StoreResult(success=False, error=describe_error(e))

    def batch_insert(self, statements: Sequence[PreparedInsert]) -> List[StoreResult]:
        """
        Insert many rows in one transaction with independent outcomes

        Each row runs in its own savepoint, so a rejected row does not undo
        the others. If the final commit fails, every row is reported failed.

        Args:
            statements: (table, values) pairs

        Returns:
            One StoreResult per statement, in order
        """
        results: List[StoreResult] = []
        with self._session_factory() as session:
            for table, values in statements:
                try:
                    with session.begin_nested():
                        session.execute(sa_insert(table).values(**values))
                    results.append(StoreResult(success=True, rows_affected=1))
                except SQLAlchemyError as e:
                    results.append(StoreResult(success=False, error=describe_error(e)))

            try:
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                message = describe_error(e)
                logger.error(f"STORE: batch commit failed: {message}")
                return [StoreResult(success=False, error=message) for _ in statements]

        return results

    def update(self, table: Table, values: Dict[str, Any], where: ColumnElement) -> StoreResult:
        """
        Update rows matching a condition

        Args:
            table: Target table
            values: Columns to set
            where: Row filter

        Returns:
            StoreResult with rows_affected
        """
        with self._session_factory() as session:
            try:
                result = session.execute(sa_update(table).where(where).values(**values))
                session.commit()
                return StoreResult(success=True, rows_affected=result.rowcount)
            except SQLAlchemyError as e:
                session.rollback()
                logger.debug(f"STORE: update of {table.name} failed: {describe_error(e)}")
                return StoreResult(success=False, error=describe_error(e))

    def select_one(self, statement: Executable) -> Optional[RowMapping]:
        """
        Run a query expected to return at most one row

        Raises:
            StoreError: If the query fails
        """
        with self._session_factory() as session:
            try:
                return session.execute(statement).mappings().first()
            except SQLAlchemyError as e:
                raise StoreError("Database query failed.", details=describe_error(e)) from e

    def select_many(self, statement: Executable) -> List[RowMapping]:
        """
        Run a query returning any number of rows, in statement order

        Raises:
            StoreError: If the query fails
        """
        with self._session_factory() as session:
            try:
                return list(session.execute(statement).mappings().all())
            except SQLAlchemyError as e:
                raise StoreError("Database query failed.", details=describe_error(e)) from e
