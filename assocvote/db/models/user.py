"""User model (identity only, managed by the users service)."""
from sqlalchemy import Column, String, ForeignKey, Index

from assocvote.db.base import Base
from assocvote.db.models.enums import UserRole
from assocvote.db.models.types import enum_column, uuid_pk


class User(Base):
    __tablename__ = "users"

    id = uuid_pk()
    email = Column(String(254), unique=True, nullable=False)
    first_name = Column(String(100), nullable=False, default="")
    last_name = Column(String(100), nullable=False, default="")
    role = enum_column(UserRole, nullable=False, default=UserRole.MEMBER)
    association_id = Column(String(36), ForeignKey("associations.id", ondelete="CASCADE"), nullable=True)

    __table_args__ = (Index("idx_users_association", "association_id"),)
