"""Member Service: failure boundary and rows-affected semantics against a mocked store.

Tests cover:
    - UNIQUE constraint ⇒ EmailConflictError; other store errors ⇒ StoreFailureError
    - changes == 0 ⇒ MemberNotFoundError on update and delete
    - Validation runs before the store is touched
    - Ids outside the 64-bit id range are not found and never reach the store
    - joined_date comes from current_join_date(), never from the caller
"""

import pytest
from unittest.mock import AsyncMock

from member_api.core.domain_types import ConstraintKind, MemberId, MutationSummary
from member_api.core.errors import (
    EmailConflictError, InvalidMemberInputError, MemberNotFoundError,
    StoreConstraintError, StoreError, StoreFailureError,
)
from member_api.services import member_service


def _make_mock_store():
    store = AsyncMock()
    store.list_members = AsyncMock(return_value=[])
    store.get_member = AsyncMock(return_value=None)
    store.insert_member = AsyncMock(
        return_value=MutationSummary(success=True, changes=1, last_row_id=MemberId(1)),
    )
    store.update_member = AsyncMock(return_value=MutationSummary(success=True, changes=1))
    store.delete_member = AsyncMock(return_value=MutationSummary(success=True, changes=1))
    return store


async def test_create_uses_server_join_date(monkeypatch):
    monkeypatch.setattr(member_service, "current_join_date", lambda: "2025-01-01")
    store = _make_mock_store()

    new_id = await member_service.create_member(store, "Ada", "ada@example.com")

    assert new_id == 1
    store.insert_member.assert_awaited_once_with("Ada", "ada@example.com", "2025-01-01")


async def test_create_validation_skips_store():
    store = _make_mock_store()
    with pytest.raises(InvalidMemberInputError):
        await member_service.create_member(store, "Ada", "bad-email")
    store.insert_member.assert_not_awaited()


async def test_create_unique_violation_is_conflict():
    store = _make_mock_store()
    store.insert_member.side_effect = StoreConstraintError(
        ConstraintKind.UNIQUE, "insert", column="email",
    )
    with pytest.raises(EmailConflictError):
        await member_service.create_member(store, "Ada", "ada@example.com")


async def test_create_other_constraint_is_store_failure():
    store = _make_mock_store()
    store.insert_member.side_effect = StoreConstraintError(ConstraintKind.NOT_NULL, "insert")
    with pytest.raises(StoreFailureError) as exc:
        await member_service.create_member(store, "Ada", "ada@example.com")
    assert exc.value.message == member_service.CREATE_MEMBER_FAILED


async def test_create_unsuccessful_summary_is_store_failure():
    store = _make_mock_store()
    store.insert_member.return_value = MutationSummary(success=False, changes=0)
    with pytest.raises(StoreFailureError):
        await member_service.create_member(store, "Ada", "ada@example.com")


async def test_list_store_error_is_store_failure():
    store = _make_mock_store()
    store.list_members.side_effect = StoreError("down", "list")
    with pytest.raises(StoreFailureError) as exc:
        await member_service.list_members(store)
    assert exc.value.message == member_service.FETCH_MEMBERS_FAILED


async def test_get_missing_member_is_not_found():
    with pytest.raises(MemberNotFoundError) as exc:
        await member_service.get_member(_make_mock_store(), MemberId(42))
    assert exc.value.member_id == 42


async def test_get_store_error_is_store_failure():
    store = _make_mock_store()
    store.get_member.side_effect = StoreError("down", "get")
    with pytest.raises(StoreFailureError) as exc:
        await member_service.get_member(store, MemberId(1))
    assert exc.value.message == member_service.FETCH_MEMBER_FAILED


async def test_update_zero_changes_is_not_found():
    store = _make_mock_store()
    store.update_member.return_value = MutationSummary(success=True, changes=0)
    with pytest.raises(MemberNotFoundError):
        await member_service.update_member(store, MemberId(99999), "Ada", None)


async def test_update_passes_built_statement():
    store = _make_mock_store()
    await member_service.update_member(store, MemberId(3), None, "new@x.com")
    statement = store.update_member.await_args.args[0]
    assert statement.params == {"email": "new@x.com", "id": 3}


async def test_update_unique_violation_is_conflict():
    store = _make_mock_store()
    store.update_member.side_effect = StoreConstraintError(ConstraintKind.UNIQUE, "update")
    with pytest.raises(EmailConflictError):
        await member_service.update_member(store, MemberId(3), None, "taken@x.com")


async def test_update_other_store_error_is_store_failure():
    store = _make_mock_store()
    store.update_member.side_effect = StoreConstraintError(ConstraintKind.NOT_NULL, "update")
    with pytest.raises(StoreFailureError) as exc:
        await member_service.update_member(store, MemberId(3), "Ada", None)
    assert exc.value.message == member_service.UPDATE_MEMBER_FAILED


async def test_update_without_fields_skips_store():
    store = _make_mock_store()
    with pytest.raises(InvalidMemberInputError):
        await member_service.update_member(store, MemberId(3), None, None)
    store.update_member.assert_not_awaited()


async def test_delete_zero_changes_is_not_found():
    store = _make_mock_store()
    store.delete_member.return_value = MutationSummary(success=True, changes=0)
    with pytest.raises(MemberNotFoundError):
        await member_service.delete_member(store, MemberId(99999))


async def test_delete_store_error_is_store_failure():
    store = _make_mock_store()
    store.delete_member.side_effect = StoreError("down", "delete")
    with pytest.raises(StoreFailureError) as exc:
        await member_service.delete_member(store, MemberId(1))
    assert exc.value.message == member_service.DELETE_MEMBER_FAILED


@pytest.mark.parametrize("member_id", [2 ** 63, -(2 ** 63) - 1])
async def test_out_of_range_id_is_not_found_without_store_call(member_id):
    store = _make_mock_store()
    with pytest.raises(MemberNotFoundError):
        await member_service.get_member(store, MemberId(member_id))
    with pytest.raises(MemberNotFoundError):
        await member_service.update_member(store, MemberId(member_id), "Ada", None)
    with pytest.raises(MemberNotFoundError):
        await member_service.delete_member(store, MemberId(member_id))
    store.get_member.assert_not_awaited()
    store.update_member.assert_not_awaited()
    store.delete_member.assert_not_awaited()


async def test_out_of_range_id_still_validates_update_body():
    store = _make_mock_store()
    with pytest.raises(InvalidMemberInputError):
        await member_service.update_member(store, MemberId(2 ** 63), None, None)


def test_current_join_date_format():
    value = member_service.current_join_date()
    assert len(value) == 10
    assert value[4] == "-" and value[7] == "-"
