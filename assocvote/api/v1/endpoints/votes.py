"""Vote endpoints."""
from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from assocvote.api.deps import get_current_user, get_db, to_new_question, verify_admin
from assocvote.core.logging_config import get_logger
from assocvote.core.rate_limit import limiter, RATE_LIMITS
from assocvote.schemas import (
    CurrentUser,
    FullVoteResponse,
    PollQuestionCreate,
    PollQuestionResponse,
    QuestionAnswersCount,
    SuccessResponse,
    VoteAnswerRequest,
    VoteCreate,
    VoteResponse,
    VoteUpdate,
    WinningOptionResponse,
)
from assocvote.services import vote as vote_service

logger = get_logger(__name__)
router = APIRouter()


@router.get("", response_model=List[VoteResponse])
async def list_votes_endpoint(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the votes of the caller's association. Members only see public votes."""
    votes = vote_service.get_votes_for_association(db, user.association_id, user.role)
    return [VoteResponse.model_validate(vote) for vote in votes]


@router.post("", response_model=VoteResponse)
async def create_vote_endpoint(
    vote: VoteCreate,
    admin: CurrentUser = Depends(verify_admin),
    db: Session = Depends(get_db)
):
    """
    Create a vote with its first ballot (admin only).

    The vote starts in the "not_started" status; open it with
    POST /api/v1/votes/{vote_id}/open.

    Example:
        Request:
            POST /api/v1/votes
            {
                "title": "Budget 2025",
                "description": "Approve the yearly budget",
                "visibility": "public",
                "min_percent_answers": 50,
                "acceptance_criteria": "two_thirds",
                "meeting_id": "3c1d...",
                "question": {
                    "prompt": "Do you approve the budget?",
                    "type": "single_choice",
                    "options": [{"content": "Yes"}, {"content": "No"}]
                }
            }
    """
    created = vote_service.create_vote(
        db,
        title=vote.title,
        description=vote.description,
        association_id=admin.association_id,
        visibility=vote.visibility,
        min_percent_answers=vote.min_percent_answers,
        acceptance_criteria=vote.acceptance_criteria,
        question=to_new_question(vote.question),
        meeting_id=vote.meeting_id,
    )
    return VoteResponse.model_validate(created)


@router.get("/{vote_id}", response_model=FullVoteResponse)
async def get_vote_endpoint(
    vote_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a vote with the question of its current ballot."""
    vote_service.get_vote_for_user(db, vote_id, user.association_id, user.role)
    return vote_service.get_full_vote(db, vote_id)


@router.patch("/{vote_id}", response_model=VoteResponse)
async def update_vote_endpoint(
    vote_id: str,
    vote: VoteUpdate,
    admin: CurrentUser = Depends(verify_admin),
    db: Session = Depends(get_db)
):
    """Update a vote (admin only). A closed vote cannot be moved out of "done"."""
    vote_service.get_vote_for_user(db, vote_id, admin.association_id, admin.role)
    updated = vote_service.update_vote(db, vote_id, **vote.model_dump(exclude_unset=True))
    return VoteResponse.model_validate(updated)


@router.delete("/{vote_id}", response_model=VoteResponse)
async def delete_vote_endpoint(
    vote_id: str,
    admin: CurrentUser = Depends(verify_admin),
    db: Session = Depends(get_db)
):
    """Delete a vote with all of its ballots and answers (admin only)."""
    vote_service.get_vote_for_user(db, vote_id, admin.association_id, admin.role)
    return vote_service.delete_vote(db, vote_id)


@router.post("/{vote_id}/ballots", response_model=PollQuestionResponse)
@limiter.limit(RATE_LIMITS["admin_write"])
async def open_ballot_endpoint(
    request: Request,
    vote_id: str,
    question: PollQuestionCreate,
    admin: CurrentUser = Depends(verify_admin),
    db: Session = Depends(get_db)
):
    """
    Start a new round of a vote with a new question (admin only).

    Answers and results then apply to the new ballot; previous rounds are
    left untouched.

    Raises:
        HTTPException: 409 if another ballot was opened at the same time
        HTTPException: 422 if the vote is closed
    """
    vote_service.get_vote_for_user(db, vote_id, admin.association_id, admin.role)
    created = vote_service.open_new_ballot(db, vote_id, to_new_question(question))
    logger.info("ballot_open_requested", vote_id=vote_id, admin_id=admin.id)
    return PollQuestionResponse.model_validate(created)


@router.post("/{vote_id}/open", response_model=VoteResponse)
async def open_vote_endpoint(
    vote_id: str,
    admin: CurrentUser = Depends(verify_admin),
    db: Session = Depends(get_db)
):
    """Open a vote (admin only)."""
    vote_service.get_vote_for_user(db, vote_id, admin.association_id, admin.role)
    return VoteResponse.model_validate(vote_service.open_vote(db, vote_id))


@router.post("/{vote_id}/close", response_model=VoteResponse)
async def close_vote_endpoint(
    vote_id: str,
    admin: CurrentUser = Depends(verify_admin),
    db: Session = Depends(get_db)
):
    """Close a vote for good (admin only)."""
    vote_service.get_vote_for_user(db, vote_id, admin.association_id, admin.role)
    return VoteResponse.model_validate(vote_service.close_vote(db, vote_id))


@router.post("/{vote_id}/answers", response_model=SuccessResponse)
@limiter.limit(RATE_LIMITS["answer"])
async def answer_vote_endpoint(
    request: Request,
    vote_id: str,
    body: VoteAnswerRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> SuccessResponse:
    """
    Answer the current ballot of an open vote.

    Raises:
        HTTPException: 401 if the vote is not open or the user already answered
        HTTPException: 404 if the vote is not visible to the user
        HTTPException: 422 if several options are sent for a single choice question
    """
    vote_service.get_vote_for_user(db, vote_id, user.association_id, user.role)
    vote_service.answer_vote(db, vote_id, user.id, body.option_ids)
    return SuccessResponse(success=True)


@router.get("/{vote_id}/results", response_model=QuestionAnswersCount)
@limiter.limit(RATE_LIMITS["results"])
async def vote_results_endpoint(
    request: Request,
    vote_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Answer counts of the current ballot."""
    vote_service.get_vote_for_user(db, vote_id, user.association_id, user.role)
    return vote_service.get_current_ballot_results(db, vote_id)


@router.get("/{vote_id}/winning-option", response_model=WinningOptionResponse)
@limiter.limit(RATE_LIMITS["results"])
async def winning_option_endpoint(
    request: Request,
    vote_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Leading option of the current ballot, with acceptance criteria and quorum checks."""
    vote_service.get_vote_for_user(db, vote_id, user.association_id, user.role)
    return vote_service.get_winning_option(db, vote_id)
