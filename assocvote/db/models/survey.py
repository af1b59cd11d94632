"""Survey model."""
from sqlalchemy import Column, String, Text, ForeignKey, Index
from sqlalchemy.orm import relationship

from assocvote.db.base import Base
from assocvote.db.models.enums import Visibility
from assocvote.db.models.types import enum_column, uuid_pk


class Survey(Base):
    __tablename__ = "surveys"

    id = uuid_pk()
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    visibility = enum_column(Visibility, nullable=False, default=Visibility.PUBLIC)
    association_id = Column(String(36), ForeignKey("associations.id", ondelete="CASCADE"), nullable=False)

    # Relationships
    questions = relationship("PollQuestion", back_populates="survey", order_by="PollQuestion.position")

    __table_args__ = (Index("idx_surveys_association", "association_id"),)
