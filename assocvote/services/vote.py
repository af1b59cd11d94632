"""Vote and ballot business logic.

A vote is a sequence of ballots, each wrapping one poll question. Only the
ballot whose number equals ``Vote.current_ballot`` is answered and counted;
run-offs are new ballots with fresh questions, earlier tallies are kept as is.
"""
from typing import Dict, List, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from assocvote.core.constants import FIRST_BALLOT_NUMBER
from assocvote.core.exceptions import (
    ConflictError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
    UnprocessableEntityError,
)
from assocvote.core.logging_config import get_logger
from assocvote.db.models import (
    Ballot,
    PollQuestion,
    UserRole,
    Visibility,
    Vote,
    VoteAcceptanceCriteria,
    VoteStatus,
)
from assocvote.services.meeting import count_meeting_enrollments, get_meeting
from assocvote.services.poll import (
    NewQuestion,
    add_question,
    get_answers_count,
    get_question,
    remove_questions,
    send_answers,
    snapshot_question,
)

logger = get_logger(__name__)

VOTE_NOT_OPEN = "Vote is not open"
VOTE_CLOSED = "Vote is already closed"
BALLOT_CONFLICT = "Another ballot was opened concurrently"

UPDATABLE_FIELDS = (
    "title",
    "description",
    "visibility",
    "min_percent_answers",
    "acceptance_criteria",
    "meeting_id",
    "status",
)


def _add_ballot(db: Session, vote_id: str, question: NewQuestion, number: int) -> Ballot:
    """Stage a ballot and its question in the current transaction (no commit)."""
    poll_question = add_question(db, question)

    ballot = Ballot(vote_id=vote_id, number=number, question_id=poll_question.id)
    db.add(ballot)
    db.flush()

    if not ballot.id:
        raise InternalError("Failed to create ballot")

    return ballot


def create_vote(
    db: Session,
    title: str,
    description: str,
    association_id: str,
    visibility: Visibility,
    min_percent_answers: int,
    acceptance_criteria: VoteAcceptanceCriteria,
    question: NewQuestion,
    meeting_id: Optional[str] = None,
) -> Vote:
    """Create a vote, not started yet, with its first ballot."""
    if meeting_id is not None:
        get_meeting(db, meeting_id)

    vote = Vote(
        title=title,
        description=description,
        association_id=association_id,
        visibility=Visibility(visibility),
        min_percent_answers=min_percent_answers,
        acceptance_criteria=VoteAcceptanceCriteria(acceptance_criteria),
        meeting_id=meeting_id,
        status=VoteStatus.NOT_STARTED,
        current_ballot=FIRST_BALLOT_NUMBER,
    )
    db.add(vote)
    db.flush()

    if not vote.id:
        raise InternalError("Vote not created")

    _add_ballot(db, vote.id, question, FIRST_BALLOT_NUMBER)

    db.commit()
    db.refresh(vote)

    logger.info("vote_created", vote_id=vote.id, association_id=association_id)
    return vote


def get_vote(db: Session, vote_id: str) -> Vote:
    vote = db.query(Vote).filter(Vote.id == vote_id).first()
    if not vote:
        raise NotFoundError("Vote not found")
    return vote


def get_votes_for_association(db: Session, association_id: str, user_role: UserRole) -> List[Vote]:
    """List an association's votes. Members only see public ones."""
    query = db.query(Vote).filter(Vote.association_id == association_id)

    if UserRole(user_role) != UserRole.ADMIN:
        query = query.filter(Vote.visibility == Visibility.PUBLIC)

    return query.order_by(Vote.created_at.desc()).all()


def get_vote_for_user(db: Session, vote_id: str, association_id: str, user_role: UserRole) -> Vote:
    """
    Get a vote the way a user may see it.

    Votes of other associations, and private votes for members, are
    reported as missing, like in ``get_votes_for_association``.
    """
    vote = get_vote(db, vote_id)

    if vote.association_id != association_id:
        raise NotFoundError("Vote not found")
    if UserRole(user_role) != UserRole.ADMIN and vote.visibility != Visibility.PUBLIC:
        raise NotFoundError("Vote not found")

    return vote


def _get_current_ballot(db: Session, vote: Vote) -> Ballot:
    ballot = db.query(Ballot).options(
        selectinload(Ballot.question).selectinload(PollQuestion.options)
    ).filter(
        Ballot.vote_id == vote.id,
        Ballot.number == vote.current_ballot
    ).first()

    if not ballot:
        raise NotFoundError("Last ballot not found")

    return ballot


def _snapshot_vote(vote: Vote) -> Dict:
    return {
        "id": vote.id,
        "title": vote.title,
        "description": vote.description,
        "status": vote.status,
        "visibility": vote.visibility,
        "min_percent_answers": vote.min_percent_answers,
        "acceptance_criteria": vote.acceptance_criteria,
        "current_ballot": vote.current_ballot,
        "meeting_id": vote.meeting_id,
    }


def get_full_vote(db: Session, vote_id: str) -> Dict:
    """Get a vote together with the question of its current ballot."""
    vote = get_vote(db, vote_id)
    ballot = _get_current_ballot(db, vote)

    full = _snapshot_vote(vote)
    full["question"] = snapshot_question(ballot.question)
    return full


def _set_status(db: Session, vote_id: str, status: VoteStatus) -> None:
    """
    Stage a status change as one conditional UPDATE (no commit).

    not_started -> open -> done; done is terminal. The check runs in the
    database, so a vote closed by another session is never moved back.
    On refusal the whole transaction is rolled back.
    """
    query = update(Vote).where(Vote.id == vote_id)
    if status != VoteStatus.DONE:
        query = query.where(Vote.status != VoteStatus.DONE)

    result = db.execute(
        query.values(status=status).execution_options(synchronize_session=False)
    )

    if result.rowcount == 0:
        db.rollback()
        get_vote(db, vote_id)
        raise UnprocessableEntityError(VOTE_CLOSED)


def update_vote(db: Session, vote_id: str, **fields) -> Vote:
    """Patch scalar fields of a vote. ``None`` values are left untouched."""
    vote = get_vote(db, vote_id)
    status = None

    for name, value in fields.items():
        if name not in UPDATABLE_FIELDS:
            raise ValueError(f"Vote field '{name}' cannot be updated")
        if value is None:
            continue
        if name == "status":
            status = VoteStatus(value)
            continue
        if name == "meeting_id":
            get_meeting(db, value)
        setattr(vote, name, value)

    if status is not None:
        db.flush()
        _set_status(db, vote.id, status)

    db.commit()
    db.refresh(vote)
    return vote


def delete_vote(db: Session, vote_id: str) -> Dict:
    """Delete a vote, its ballots and their questions.

    Returns:
        Snapshot of the vote as it was before deletion
    """
    vote = get_vote(db, vote_id)
    snapshot = _snapshot_vote(vote)

    question_ids = [
        question_id for (question_id,) in
        db.query(Ballot.question_id).filter(Ballot.vote_id == vote.id).all()
    ]

    db.query(Ballot).filter(Ballot.vote_id == vote.id).delete(synchronize_session=False)
    remove_questions(db, question_ids)
    db.query(Vote).filter(Vote.id == vote.id).delete(synchronize_session=False)
    db.commit()
    db.expire_all()

    logger.info("vote_deleted", vote_id=vote_id, ballot_count=len(question_ids))
    return snapshot


def open_new_ballot(db: Session, vote_id: str, question: NewQuestion) -> PollQuestion:
    """
    Start a new round of a vote with a fresh question.

    The ballot insert and the ``current_ballot`` increment happen in one
    transaction; the increment only applies if nobody advanced the counter
    or closed the vote in between, and (vote_id, number) is unique.

    Raises:
        NotFoundError: vote does not exist
        UnprocessableEntityError: vote is closed, possibly by another session
        ConflictError: another ballot was opened at the same time
    """
    vote = get_vote(db, vote_id)

    if vote.status == VoteStatus.DONE:
        raise UnprocessableEntityError(VOTE_CLOSED)

    expected_number = vote.current_ballot
    next_number = expected_number + 1

    try:
        ballot = _add_ballot(db, vote.id, question, next_number)
        result = db.execute(
            update(Vote)
            .where(
                Vote.id == vote.id,
                Vote.current_ballot == expected_number,
                Vote.status != VoteStatus.DONE,
            )
            .values(current_ballot=next_number)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            db.rollback()
            if get_vote(db, vote_id).status == VoteStatus.DONE:
                raise UnprocessableEntityError(VOTE_CLOSED)
            raise ConflictError(BALLOT_CONFLICT)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(BALLOT_CONFLICT)

    logger.info("ballot_opened", vote_id=vote_id, ballot_number=next_number)
    return get_question(db, ballot.question_id)


def answer_vote(db: Session, vote_id: str, responder_id: str, option_ids: List[str]) -> None:
    """Answer the current ballot of an open vote."""
    vote = get_vote(db, vote_id)

    if vote.status != VoteStatus.OPEN:
        raise UnauthorizedError(VOTE_NOT_OPEN)

    ballot = _get_current_ballot(db, vote)
    send_answers(db, ballot.question_id, responder_id, option_ids)


def get_current_ballot_results(db: Session, vote_id: str) -> Dict:
    """Answer counts of the current ballot only."""
    vote = get_vote(db, vote_id)
    ballot = _get_current_ballot(db, vote)
    return get_answers_count(db, ballot.question_id)


def is_acceptance_criteria_met(
    acceptance_criteria: VoteAcceptanceCriteria,
    winning_count: int,
    total_votes_count: int,
) -> bool:
    """
    Whether the leading option gathered enough of the votes cast.

    - majority: strictly more than half
    - two thirds: at least two thirds
    - unanimity: every vote

    A ballot nobody answered never meets any criteria.
    """
    if total_votes_count <= 0:
        return False

    criteria = VoteAcceptanceCriteria(acceptance_criteria)
    if criteria == VoteAcceptanceCriteria.MAJORITY:
        return winning_count * 2 > total_votes_count
    if criteria == VoteAcceptanceCriteria.TWO_THIRDS:
        return winning_count * 3 >= total_votes_count * 2
    return winning_count == total_votes_count


def is_min_percent_answers_met(
    total_votes_count: int,
    eligible_voters_count: Optional[int],
    min_percent_answers: int,
) -> bool:
    """Quorum check. Without a meeting there is nobody to count, so it passes."""
    if eligible_voters_count is None:
        return True
    return total_votes_count * 100 >= eligible_voters_count * min_percent_answers


def get_winning_option(db: Session, vote_id: str) -> Dict:
    """
    Compute the leading option of the current ballot and whether it is adopted.

    A tie for first place has no winner: ``option_id`` is None and the
    result is not valid.

    Returns:
        {
            "option_id", "is_valid", "is_tie",
            "is_acceptance_criteria_met", "is_min_percent_answers_met",
            "total_votes_count", "eligible_voters_count", "last_ballot_results"
        }
    """
    vote = get_vote(db, vote_id)
    results = get_current_ballot_results(db, vote_id)

    option_counts = results["option_counts"]
    total_votes_count = sum(option_count["count"] for option_count in option_counts)

    ranked = sorted(option_counts, key=lambda option_count: option_count["count"], reverse=True)
    leader = ranked[0] if ranked else None
    is_tie = len(ranked) > 1 and ranked[0]["count"] == ranked[1]["count"]

    acceptance_met = (
        leader is not None
        and not is_tie
        and is_acceptance_criteria_met(vote.acceptance_criteria, leader["count"], total_votes_count)
    )

    eligible_voters_count = None
    if vote.meeting_id is not None:
        eligible_voters_count = count_meeting_enrollments(db, vote.meeting_id)

    quorum_met = is_min_percent_answers_met(
        total_votes_count, eligible_voters_count, vote.min_percent_answers
    )

    return {
        "option_id": leader["option_id"] if leader and not is_tie else None,
        "is_valid": acceptance_met and quorum_met,
        "is_tie": is_tie,
        "is_acceptance_criteria_met": acceptance_met,
        "is_min_percent_answers_met": quorum_met,
        "total_votes_count": total_votes_count,
        "eligible_voters_count": eligible_voters_count,
        "last_ballot_results": results,
    }


def open_vote(db: Session, vote_id: str) -> Vote:
    """Open a vote for answers. A closed vote cannot be reopened."""
    _set_status(db, vote_id, VoteStatus.OPEN)
    db.commit()

    logger.info("vote_opened", vote_id=vote_id)
    return get_vote(db, vote_id)


def close_vote(db: Session, vote_id: str) -> Vote:
    """Close a vote. Closing is final."""
    _set_status(db, vote_id, VoteStatus.DONE)
    db.commit()

    logger.info("vote_closed", vote_id=vote_id)
    return get_vote(db, vote_id)
