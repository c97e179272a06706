# This file wraps database access so API services can run parameterized SQL safely.
# It exists to keep engine construction, pooling, and SSL options out of router code.
# Every query borrows one pooled connection and returns it on every exit path.
# Keeping this layer small makes connection lifecycle easier to audit and troubleshoot.

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError


class DatabaseClient:
    """Minimal SQLAlchemy wrapper for read-only API access."""

    def __init__(
        self,
        *,
        database_url: str,
        ssl: bool = False,
        pool_size: int = 5,
        max_overflow: int = 10,
    ) -> None:
        connect_args: dict[str, Any] = {}
        if ssl:
            # Encrypted transport without certificate verification.
            connect_args["sslmode"] = "require"
        self._engine: Engine = create_engine(
            database_url,
            pool_pre_ping=True,
            pool_size=pool_size,
            max_overflow=max_overflow,
            connect_args=connect_args,
            future=True,
        )

    @property
    def engine(self) -> Engine:
        return self._engine

    @contextmanager
    def connection(self) -> Iterator[Connection]:
        """Borrow one pooled connection and always hand it back to the pool."""

        connection = self._engine.connect()
        try:
            yield connection
        finally:
            connection.close()

    def can_connect(self) -> bool:
        try:
            with self.connection() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            return False

    def current_database(self) -> str:
        with self.connection() as connection:
            return str(connection.execute(text("SELECT current_database()")).scalar_one())

    def fetch_all(self, query: str, params: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        with self.connection() as connection:
            rows = connection.execute(text(query), dict(params or {})).mappings().all()
        return [dict(row) for row in rows]

    def checked_out_connections(self) -> int:
        """Number of pooled connections currently lent out."""

        return int(self._engine.pool.checkedout())

    def dispose(self) -> None:
        self._engine.dispose()
