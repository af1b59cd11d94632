"""Meeting model."""
from sqlalchemy import Column, String, Text, ForeignKey
from sqlalchemy.orm import relationship

from assocvote.db.base import Base
from assocvote.db.models.types import uuid_pk


class Meeting(Base):
    __tablename__ = "meetings"

    id = uuid_pk()
    agendum = Column(Text, nullable=False, default="")
    presence_code = Column(String(50), nullable=False, default="")
    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), unique=True, nullable=False)

    event = relationship("Event")
