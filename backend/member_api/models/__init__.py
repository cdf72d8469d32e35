"""ORM Models: imported here so Base.metadata is populated before create_all."""

from member_api.models.member import Member  # noqa: F401
