"""Vote and ballot models."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from assocvote.db.base import Base
from assocvote.db.models.enums import VoteAcceptanceCriteria, VoteStatus, Visibility
from assocvote.db.models.types import enum_column, uuid_pk


class Vote(Base):
    __tablename__ = "votes"

    id = uuid_pk()
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    status = enum_column(VoteStatus, nullable=False, default=VoteStatus.NOT_STARTED)
    visibility = enum_column(Visibility, nullable=False, default=Visibility.PUBLIC)
    min_percent_answers = Column(Integer, nullable=False, default=0)
    acceptance_criteria = enum_column(VoteAcceptanceCriteria, nullable=False, default=VoteAcceptanceCriteria.MAJORITY)
    association_id = Column(String(36), ForeignKey("associations.id", ondelete="CASCADE"), nullable=False)
    meeting_id = Column(String(36), ForeignKey("meetings.id", ondelete="SET NULL"), nullable=True)
    # Only advanced together with the insert of the matching ballot
    current_ballot = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    ballots = relationship("Ballot", back_populates="vote", order_by="Ballot.number")
    meeting = relationship("Meeting")

    __table_args__ = (Index("idx_votes_association", "association_id"),)


class Ballot(Base):
    __tablename__ = "ballots"

    id = uuid_pk()
    number = Column(Integer, nullable=False)
    vote_id = Column(String(36), ForeignKey("votes.id", ondelete="CASCADE"), nullable=False)
    question_id = Column(String(36), ForeignKey("poll_questions.id", ondelete="CASCADE"), unique=True, nullable=False)

    # Relationships
    vote = relationship("Vote", back_populates="ballots")
    question = relationship("PollQuestion")

    __table_args__ = (
        Index("idx_ballots_vote", "vote_id"),
        UniqueConstraint("vote_id", "number", name="uq_vote_ballot_number"),
    )
