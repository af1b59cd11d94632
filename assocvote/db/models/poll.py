"""Poll question and option models."""
from sqlalchemy import Column, Integer, String, ForeignKey, Index
from sqlalchemy.orm import relationship

from assocvote.db.base import Base
from assocvote.db.models.enums import PollQuestionType
from assocvote.db.models.types import enum_column, uuid_pk


class PollQuestion(Base):
    __tablename__ = "poll_questions"

    id = uuid_pk()
    prompt = Column(String(500), nullable=False)
    type = enum_column(PollQuestionType, nullable=False)
    position = Column(Integer, nullable=False, default=0)
    # Set for survey questions; ballot questions are referenced from the ballot
    survey_id = Column(String(36), ForeignKey("surveys.id", ondelete="CASCADE"), nullable=True)

    # Relationships
    options = relationship("PollOption", back_populates="question", order_by="PollOption.position")
    survey = relationship("Survey", back_populates="questions")

    __table_args__ = (Index("idx_poll_questions_survey", "survey_id"),)


class PollOption(Base):
    __tablename__ = "poll_options"

    id = uuid_pk()
    content = Column(String(200), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    question_id = Column(String(36), ForeignKey("poll_questions.id", ondelete="CASCADE"), nullable=False)

    # Relationships
    question = relationship("PollQuestion", back_populates="options")
    responders = relationship(
        "User",
        secondary="poll_answers",
        primaryjoin="PollOption.id == PollAnswer.option_id",
        secondaryjoin="PollAnswer.responder_id == User.id",
        viewonly=True,
    )

    __table_args__ = (Index("idx_poll_options_question", "question_id"),)
