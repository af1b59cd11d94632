"""Meeting lookups used for quorum computation."""
from sqlalchemy import func
from sqlalchemy.orm import Session

from assocvote.core.exceptions import NotFoundError
from assocvote.db.models import EventUserEnrollment, Meeting


def get_meeting(db: Session, meeting_id: str) -> Meeting:
    meeting = db.query(Meeting).filter(Meeting.id == meeting_id).first()
    if not meeting:
        raise NotFoundError("Meeting not found")
    return meeting


def count_meeting_enrollments(db: Session, meeting_id: str) -> int:
    """
    Count the people enrolled to the event a meeting belongs to.

    Every enrollment counts, whether or not the person was marked present.
    """
    meeting = get_meeting(db, meeting_id)

    count = db.query(func.count(EventUserEnrollment.id)).filter(
        EventUserEnrollment.event_id == meeting.event_id
    ).scalar()

    return count or 0
