"""Recorded answers to poll questions."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, String, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from assocvote.db.base import Base
from assocvote.db.models.types import uuid_pk


class PollResponse(Base):
    """One row per (question, responder): the unique key makes answering one-shot."""

    __tablename__ = "poll_responses"

    id = uuid_pk()
    question_id = Column(String(36), ForeignKey("poll_questions.id", ondelete="CASCADE"), nullable=False)
    responder_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    answers = relationship("PollAnswer", back_populates="response")

    __table_args__ = (
        Index("idx_poll_responses_question", "question_id"),
        UniqueConstraint("question_id", "responder_id", name="uq_question_responder"),
    )


class PollAnswer(Base):
    """A selected option within a response."""

    __tablename__ = "poll_answers"

    id = uuid_pk()
    response_id = Column(String(36), ForeignKey("poll_responses.id", ondelete="CASCADE"), nullable=False)
    option_id = Column(String(36), ForeignKey("poll_options.id", ondelete="CASCADE"), nullable=False)
    responder_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    # Relationships
    response = relationship("PollResponse", back_populates="answers")

    __table_args__ = (
        Index("idx_poll_answers_option", "option_id"),
        UniqueConstraint("response_id", "option_id", name="uq_response_option"),
    )
