"""Member Rules: input validation and dynamic UPDATE construction.

Invariants:
    - All functions are PURE: no IO, no clock, no DB
    - A field is "supplied" only when it is truthy: "" and None are both absent
    - SET clause columns come from MemberColumn only, in declaration order (name, email)
    - The target id is always the last bound parameter (WHERE id = :id)
    - is_storable_id bounds ids to the signed 64-bit id column

Design Decisions:
    - Falsy-field policy kept from the public API contract: an empty string in PUT
      is ignored rather than clearing the column (name/email are NOT NULL anyway)
    - Email check is deliberately minimal ("@" and "." present), not RFC 5322
    - Validation raises InvalidMemberInputError; the shell never re-checks
"""

from dataclasses import dataclass, field
from datetime import datetime

from member_api.core.domain_types import JoinDate, MemberColumn, MemberId
from member_api.core.errors import InvalidMemberInputError


REQUIRED_FIELDS_MESSAGE = "Name and email are required"
NO_FIELDS_MESSAGE = "At least one field (name or email) is required"
INVALID_EMAIL_MESSAGE = "Invalid email format"

# INTEGER primary keys are signed 64-bit in SQLite and Postgres BIGINT
MIN_MEMBER_ID = -(2 ** 63)
MAX_MEMBER_ID = 2 ** 63 - 1


@dataclass(frozen=True)
class UpdateStatement:
    """Parameterized UPDATE for one member."""
    sql: str
    params: dict = field(default_factory=dict)
    assignments: tuple[str, ...] = ()


def is_storable_id(member_id: int) -> bool:
    """True if member_id fits the 64-bit id column. No row can hold any other id."""
    return MIN_MEMBER_ID <= member_id <= MAX_MEMBER_ID


def check_email_format(email: str) -> bool:
    """True if email contains both '@' and '.'."""
    return "@" in email and "." in email


def validate_new_member(name: str | None, email: str | None) -> None:
    """POST rule: name and email both supplied, email well-formed."""
    if not name or not email:
        raise InvalidMemberInputError(REQUIRED_FIELDS_MESSAGE)
    if not check_email_format(email):
        raise InvalidMemberInputError(INVALID_EMAIL_MESSAGE, field="email")


def validate_member_changes(name: str | None, email: str | None) -> None:
    """PUT rule: at least one field supplied, email well-formed if supplied."""
    if not name and not email:
        raise InvalidMemberInputError(NO_FIELDS_MESSAGE)
    if email and not check_email_format(email):
        raise InvalidMemberInputError(INVALID_EMAIL_MESSAGE, field="email")


def build_update_statement(
    member_id: MemberId, name: str | None = None, email: str | None = None,
) -> UpdateStatement:
    """Build `UPDATE members SET ... WHERE id = :id` from the supplied fields."""
    supplied = {MemberColumn.NAME: name, MemberColumn.EMAIL: email}

    assignments: list[str] = []
    params: dict = {}
    for column in MemberColumn:
        value = supplied[column]
        if value:
            assignments.append(f"{column.value} = :{column.value}")
            params[column.value] = value

    if not assignments:
        raise InvalidMemberInputError(NO_FIELDS_MESSAGE)

    params["id"] = member_id
    return UpdateStatement(
        sql=f"UPDATE members SET {', '.join(assignments)} WHERE id = :id",
        params=params,
        assignments=tuple(assignments),
    )


def join_date_for(moment: datetime) -> JoinDate:
    """Calendar date of `moment` as YYYY-MM-DD."""
    return JoinDate(moment.date().isoformat())
