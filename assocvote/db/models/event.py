"""Event and enrollment models."""
from sqlalchemy import Boolean, Column, String, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from assocvote.db.base import Base
from assocvote.db.models.types import uuid_pk


class Event(Base):
    __tablename__ = "events"

    id = uuid_pk()
    name = Column(String(200), nullable=False)
    association_id = Column(String(36), ForeignKey("associations.id", ondelete="CASCADE"), nullable=False)

    enrollments = relationship("EventUserEnrollment", back_populates="event")


class EventUserEnrollment(Base):
    __tablename__ = "event_user_enrollments"

    id = uuid_pk()
    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    present = Column(Boolean, nullable=False, default=False)

    event = relationship("Event", back_populates="enrollments")

    __table_args__ = (
        Index("idx_enrollments_event", "event_id"),
        UniqueConstraint("event_id", "user_id", name="uq_event_user"),
    )
