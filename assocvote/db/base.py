"""Database base class and model imports."""
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Import all models here for Alembic to detect them
from assocvote.db.models.association import Association  # noqa: F401, E402
from assocvote.db.models.user import User  # noqa: F401, E402
from assocvote.db.models.event import Event, EventUserEnrollment  # noqa: F401, E402
from assocvote.db.models.meeting import Meeting  # noqa: F401, E402
from assocvote.db.models.poll import PollQuestion, PollOption  # noqa: F401, E402
from assocvote.db.models.poll_answer import PollResponse, PollAnswer  # noqa: F401, E402
from assocvote.db.models.survey import Survey  # noqa: F401, E402
from assocvote.db.models.vote import Vote, Ballot  # noqa: F401, E402
