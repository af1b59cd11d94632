"""Enumerations shared by models and schemas."""
import enum


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    MEMBER = "member"


class Visibility(str, enum.Enum):
    PUBLIC = "public"
    PRIVATE = "private"


class PollQuestionType(str, enum.Enum):
    SINGLE_CHOICE = "single_choice"
    MULTIPLE_CHOICE = "multiple_choice"


class VoteStatus(str, enum.Enum):
    NOT_STARTED = "not_started"
    OPEN = "open"
    DONE = "done"


class VoteAcceptanceCriteria(str, enum.Enum):
    MAJORITY = "majority"
    TWO_THIRDS = "two_thirds"
    UNANIMITY = "unanimity"
