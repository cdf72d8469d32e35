"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - MemberId wraps the store-generated integer primary key
    - JoinDate is always an ISO calendar date string (YYYY-MM-DD)
    - MutationSummary.changes is the store's rows-affected count (0 ⇒ no match)

Design Decisions:
    - NewType over wrapper classes: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and log extras without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

MemberId = NewType("MemberId", int)


# ─── Value Types ─────────────────────────────────────────────────

JoinDate = NewType("JoinDate", str)   # YYYY-MM-DD


# ─── Enums ───────────────────────────────────────────────────────

class MemberColumn(str, Enum):
    """Columns a client may change. Order is the SET clause order."""
    NAME = "name"
    EMAIL = "email"


class ConstraintKind(str, Enum):
    """Kind of table constraint a rejected statement violated."""
    UNIQUE = "unique"
    NOT_NULL = "not_null"
    OTHER = "other"


# ─── Store results ───────────────────────────────────────────────

@dataclass(frozen=True)
class MutationSummary:
    """Store report of a write statement."""
    success: bool
    changes: int
    last_row_id: MemberId | None = None
