"""Database models."""
from assocvote.db.models.enums import (
    PollQuestionType,
    UserRole,
    Visibility,
    VoteAcceptanceCriteria,
    VoteStatus,
)
from assocvote.db.models.association import Association
from assocvote.db.models.user import User
from assocvote.db.models.event import Event, EventUserEnrollment
from assocvote.db.models.meeting import Meeting
from assocvote.db.models.poll import PollQuestion, PollOption
from assocvote.db.models.poll_answer import PollResponse, PollAnswer
from assocvote.db.models.survey import Survey
from assocvote.db.models.vote import Vote, Ballot

__all__ = [
    "Association",
    "User",
    "Event",
    "EventUserEnrollment",
    "Meeting",
    "PollQuestion",
    "PollOption",
    "PollResponse",
    "PollAnswer",
    "Survey",
    "Vote",
    "Ballot",
    "PollQuestionType",
    "UserRole",
    "Visibility",
    "VoteAcceptanceCriteria",
    "VoteStatus",
]
