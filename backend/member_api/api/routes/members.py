"""Member Routes: CRUD endpoints under /api/members.

Invariants:
    - Handlers are thin: parse path/body, call member_service, shape the envelope
    - Path id is an int; anything else is a request validation error (400)
    - Errors propagate as MemberApiError and are rendered by api/error_handlers

Design Decisions:
    - MemberStore built per request from the get_db session (no shared state)
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from member_api.core.domain_types import MemberId
from member_api.infrastructure.database import get_db
from member_api.infrastructure.member_store import MemberStore
from member_api.schemas.member import (
    MemberCreate, MemberCreatedResponse, MemberDetailResponse,
    MemberListResponse, MemberUpdate, MessageResponse,
)
from member_api.services import member_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/members", tags=["members"])


async def get_store(db: AsyncSession = Depends(get_db)) -> MemberStore:
    return MemberStore(db)


@router.get("", response_model=MemberListResponse)
async def list_members(store: MemberStore = Depends(get_store)):
    """List members, most recently joined first."""
    members = await member_service.list_members(store)
    return {"success": True, "members": members}


@router.get("/{member_id}", response_model=MemberDetailResponse)
async def get_member(member_id: int, store: MemberStore = Depends(get_store)):
    member = await member_service.get_member(store, MemberId(member_id))
    return {"success": True, "member": member}


@router.post(
    "", response_model=MemberCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_member(
    body: MemberCreate, store: MemberStore = Depends(get_store),
):
    new_id = await member_service.create_member(store, body.name, body.email)
    return {
        "success": True,
        "message": "Member created successfully",
        "id": new_id,
    }


@router.put("/{member_id}", response_model=MessageResponse)
async def update_member(
    member_id: int, body: MemberUpdate, store: MemberStore = Depends(get_store),
):
    """Update name and/or email. Empty strings are treated as not supplied."""
    await member_service.update_member(
        store, MemberId(member_id), body.name, body.email,
    )
    return {"success": True, "message": "Member updated successfully"}


@router.delete("/{member_id}", response_model=MessageResponse)
async def delete_member(member_id: int, store: MemberStore = Depends(get_store)):
    await member_service.delete_member(store, MemberId(member_id))
    return {"success": True, "message": "Member deleted successfully"}
