"""Member Store: parameterized SQL against the members table.

Invariants:
    - Every statement is parameterized (sqlalchemy.text + bound params), never interpolated values
    - all() returns plain dict rows; run() returns a MutationSummary
    - Each write commits immediately: one statement per request, no multi-statement transactions
    - Any SQLAlchemyError rolls back and is re-raised as StoreError / StoreConstraintError

Design Decisions:
    - Raw SQL over ORM queries: the UPDATE SET clause is built dynamically in core/member_rules
    - INSERT ... RETURNING id instead of cursor.lastrowid: portable across SQLite and asyncpg
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from member_api.core.domain_types import JoinDate, MemberId, MutationSummary
from member_api.core.member_rules import UpdateStatement
from member_api.infrastructure.database import translate_store_error

logger = logging.getLogger(__name__)

LIST_MEMBERS_SQL = "SELECT * FROM members ORDER BY joined_date DESC"
GET_MEMBER_SQL = "SELECT * FROM members WHERE id = :id"
INSERT_MEMBER_SQL = (
    "INSERT INTO members (name, email, joined_date) "
    "VALUES (:name, :email, :joined_date) RETURNING id"
)
DELETE_MEMBER_SQL = "DELETE FROM members WHERE id = :id"


class MemberStore:
    """Store facade over one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    @asynccontextmanager
    async def _guard(self, operation: str) -> AsyncGenerator[None, None]:
        """Roll back and translate driver errors for one statement."""
        try:
            yield
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(
                f"Store {operation} failed: {e}",
                extra={"operation": operation},
            )
            raise translate_store_error(e, operation) from e

    async def all(
        self, sql: str, params: dict | None = None, operation: str = "query",
    ) -> list[dict]:
        """Run a read statement and return every row as a dict."""
        async with self._guard(operation):
            result = await self._db.execute(text(sql), params or {})
            return [dict(row) for row in result.mappings().all()]

    async def run(
        self, sql: str, params: dict | None = None, operation: str = "execute",
    ) -> MutationSummary:
        """Run a write statement, commit, and report rows affected."""
        async with self._guard(operation):
            result = await self._db.execute(text(sql), params or {})
            await self._db.commit()
        return MutationSummary(success=True, changes=result.rowcount)

    # ─── Member statements ─────────────────────────────────────────

    async def list_members(self) -> list[dict]:
        return await self.all(LIST_MEMBERS_SQL, operation="list")

    async def get_member(self, member_id: MemberId) -> dict | None:
        rows = await self.all(GET_MEMBER_SQL, {"id": member_id}, operation="get")
        return rows[0] if rows else None

    async def insert_member(
        self, name: str, email: str, joined_date: JoinDate,
    ) -> MutationSummary:
        params = {"name": name, "email": email, "joined_date": joined_date}
        async with self._guard("insert"):
            result = await self._db.execute(text(INSERT_MEMBER_SQL), params)
            new_id = result.scalar_one()
            await self._db.commit()
        return MutationSummary(
            success=True, changes=1, last_row_id=MemberId(new_id),
        )

    async def update_member(self, statement: UpdateStatement) -> MutationSummary:
        return await self.run(statement.sql, statement.params, operation="update")

    async def delete_member(self, member_id: MemberId) -> MutationSummary:
        return await self.run(
            DELETE_MEMBER_SQL, {"id": member_id}, operation="delete",
        )
