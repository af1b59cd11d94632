"""Association model."""
from sqlalchemy import Column, String

from assocvote.db.base import Base
from assocvote.db.models.types import uuid_pk


class Association(Base):
    __tablename__ = "associations"

    id = uuid_pk()
    name = Column(String(200), nullable=False)
