"""Member Schemas: Pydantic models for request bodies and response envelopes.

Invariants:
    - Request bodies accept name/email as optional strings; presence rules live in
      core/member_rules so the 400 messages match the public contract
    - Unknown body keys (id, joined_date) are ignored: neither is client-writable
    - Every success envelope carries success=True

Design Decisions:
    - Optional fields over required ones: a missing field must produce
      "Name and email are required", not a generic validation error
"""

from pydantic import BaseModel


class MemberCreate(BaseModel):
    """POST /api/members body."""
    name: str | None = None
    email: str | None = None


class MemberUpdate(BaseModel):
    """PUT /api/members/{id} body. Empty strings count as absent."""
    name: str | None = None
    email: str | None = None


class MemberOut(BaseModel):
    """Member row as returned to clients."""
    id: int
    name: str
    email: str
    joined_date: str


class MemberListResponse(BaseModel):
    success: bool = True
    members: list[MemberOut]


class MemberDetailResponse(BaseModel):
    success: bool = True
    member: MemberOut


class MemberCreatedResponse(BaseModel):
    success: bool = True
    message: str
    id: int


class MessageResponse(BaseModel):
    success: bool = True
    message: str
