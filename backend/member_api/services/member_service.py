"""Member Service: the five member operations and their store failure boundary.

Invariants:
    - Validation (core/member_rules) runs before any store call
    - Each operation issues exactly one statement through MemberStore
    - Rows affected == 0 on update/delete ⇒ MemberNotFoundError (no pre-read)
    - Ids outside the id column range ⇒ MemberNotFoundError without a store call
    - Store errors never escape: UNIQUE constraint ⇒ EmailConflictError,
      anything else ⇒ StoreFailureError with the operation's generic message
    - joined_date comes from the server clock only

Design Decisions:
    - Impureim sandwich: pure rules in core, clock + store IO here, HTTP shaping in routes
    - current_join_date() is module-level so tests can pin the clock
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

from member_api.core.domain_types import (
    ConstraintKind, JoinDate, MemberId, MutationSummary,
)
from member_api.core.errors import (
    EmailConflictError, MemberNotFoundError, StoreConstraintError,
    StoreError, StoreFailureError,
)
from member_api.core.member_rules import (
    build_update_statement, is_storable_id, join_date_for,
    validate_member_changes, validate_new_member,
)
from member_api.infrastructure.member_store import MemberStore

logger = logging.getLogger(__name__)

FETCH_MEMBERS_FAILED = "Failed to fetch members"
FETCH_MEMBER_FAILED = "Failed to fetch member"
CREATE_MEMBER_FAILED = "Failed to create member"
UPDATE_MEMBER_FAILED = "Failed to update member"
DELETE_MEMBER_FAILED = "Failed to delete member"


def current_join_date() -> JoinDate:
    """Today's UTC date as YYYY-MM-DD."""
    return join_date_for(datetime.now(timezone.utc))


def _require_storable_id(member_id: MemberId) -> None:
    """Ids the id column cannot hold match no row."""
    if not is_storable_id(member_id):
        raise MemberNotFoundError(member_id)


@asynccontextmanager
async def store_boundary(failure_message: str) -> AsyncGenerator[None, None]:
    """Map store errors raised inside the block to API errors."""
    try:
        yield
    except StoreConstraintError as e:
        if e.constraint is ConstraintKind.UNIQUE:
            raise EmailConflictError() from e
        raise StoreFailureError(failure_message) from e
    except StoreError as e:
        raise StoreFailureError(failure_message) from e


async def list_members(store: MemberStore) -> list[dict]:
    async with store_boundary(FETCH_MEMBERS_FAILED):
        return await store.list_members()


async def get_member(store: MemberStore, member_id: MemberId) -> dict:
    _require_storable_id(member_id)
    async with store_boundary(FETCH_MEMBER_FAILED):
        member = await store.get_member(member_id)
    if member is None:
        raise MemberNotFoundError(member_id)
    return member


async def create_member(
    store: MemberStore, name: str | None, email: str | None,
) -> MemberId:
    """Insert a member joined today. Returns the store-assigned id."""
    validate_new_member(name, email)
    async with store_boundary(CREATE_MEMBER_FAILED):
        summary = await store.insert_member(name, email, current_join_date())
    if not summary.success or summary.last_row_id is None:
        raise StoreFailureError(CREATE_MEMBER_FAILED)
    logger.info(
        f"Member {summary.last_row_id} created",
        extra={"member_id": summary.last_row_id},
    )
    return summary.last_row_id


async def update_member(
    store: MemberStore,
    member_id: MemberId,
    name: str | None,
    email: str | None,
) -> MutationSummary:
    """Apply the supplied (truthy) fields to one member."""
    validate_member_changes(name, email)
    _require_storable_id(member_id)
    statement = build_update_statement(member_id, name=name, email=email)
    async with store_boundary(UPDATE_MEMBER_FAILED):
        summary = await store.update_member(statement)
    if summary.changes == 0:
        raise MemberNotFoundError(member_id)
    logger.info(
        f"Member {member_id} updated ({', '.join(statement.assignments)})",
        extra={"member_id": member_id},
    )
    return summary


async def delete_member(store: MemberStore, member_id: MemberId) -> MutationSummary:
    _require_storable_id(member_id)
    async with store_boundary(DELETE_MEMBER_FAILED):
        summary = await store.delete_member(member_id)
    if summary.changes == 0:
        raise MemberNotFoundError(member_id)
    logger.info(f"Member {member_id} deleted", extra={"member_id": member_id})
    return summary
