"""Survey endpoints."""
from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from assocvote.api.deps import get_current_user, get_db, to_new_question, to_new_questions, verify_admin
from assocvote.core.logging_config import get_logger
from assocvote.core.rate_limit import limiter, RATE_LIMITS
from assocvote.schemas import (
    CurrentUser,
    FullSurveyResponse,
    PollQuestionCreate,
    PollQuestionResponse,
    QuestionAnswersCount,
    SuccessResponse,
    SurveyAnswerRequest,
    SurveyCreate,
    SurveyResponse,
    SurveyUpdate,
)
from assocvote.services import survey as survey_service

logger = get_logger(__name__)
router = APIRouter()


@router.get("", response_model=List[SurveyResponse])
async def list_surveys_endpoint(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the surveys of the caller's association."""
    surveys = survey_service.get_surveys_for_association(db, user.association_id)
    return [SurveyResponse.model_validate(survey) for survey in surveys]


@router.post("", response_model=SurveyResponse)
async def create_survey_endpoint(
    survey: SurveyCreate,
    admin: CurrentUser = Depends(verify_admin),
    db: Session = Depends(get_db)
):
    """
    Create a survey with its questions (admin only).

    The survey belongs to the admin's association. All questions are
    created before the response is sent.

    Example:
        Request:
            POST /api/v1/surveys
            {
                "title": "Annual satisfaction",
                "description": "",
                "visibility": "public",
                "questions": [
                    {
                        "prompt": "Should we keep the Friday meetups?",
                        "type": "single_choice",
                        "options": [{"content": "Yes"}, {"content": "No"}]
                    }
                ]
            }
    """
    created = survey_service.create_survey(
        db,
        title=survey.title,
        description=survey.description,
        association_id=admin.association_id,
        visibility=survey.visibility,
        questions=to_new_questions(survey.questions),
    )
    logger.info("survey_create_requested", survey_id=created.id, admin_id=admin.id)
    return SurveyResponse.model_validate(created)


@router.get("/{survey_id}", response_model=FullSurveyResponse)
async def get_survey_endpoint(
    survey_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a survey with its questions and options."""
    survey_service.get_survey_for_association(db, survey_id, user.association_id)
    return survey_service.get_full_survey(db, survey_id)


@router.patch("/{survey_id}", response_model=SurveyResponse)
async def update_survey_endpoint(
    survey_id: str,
    survey: SurveyUpdate,
    admin: CurrentUser = Depends(verify_admin),
    db: Session = Depends(get_db)
):
    """Update title, description or visibility of a survey (admin only)."""
    survey_service.get_survey_for_association(db, survey_id, admin.association_id)
    updated = survey_service.update_survey(db, survey_id, **survey.model_dump(exclude_unset=True))
    return SurveyResponse.model_validate(updated)


@router.put("/{survey_id}", response_model=FullSurveyResponse)
async def replace_survey_endpoint(
    survey_id: str,
    survey: SurveyCreate,
    admin: CurrentUser = Depends(verify_admin),
    db: Session = Depends(get_db)
):
    """
    Replace a survey (admin only).

    The previous survey and all of its answers are deleted; the new survey
    gets a new id.
    """
    survey_service.get_survey_for_association(db, survey_id, admin.association_id)
    return survey_service.replace_survey(
        db,
        survey_id,
        title=survey.title,
        description=survey.description,
        association_id=admin.association_id,
        visibility=survey.visibility,
        questions=to_new_questions(survey.questions),
    )


@router.delete("/{survey_id}", response_model=SurveyResponse)
async def delete_survey_endpoint(
    survey_id: str,
    admin: CurrentUser = Depends(verify_admin),
    db: Session = Depends(get_db)
):
    """Delete a survey with its questions and answers (admin only)."""
    survey_service.get_survey_for_association(db, survey_id, admin.association_id)
    return survey_service.delete_survey(db, survey_id)


@router.post("/{survey_id}/questions", response_model=List[PollQuestionResponse])
async def add_question_endpoint(
    survey_id: str,
    question: PollQuestionCreate,
    admin: CurrentUser = Depends(verify_admin),
    db: Session = Depends(get_db)
):
    """Add a question to a survey (admin only)."""
    survey_service.get_survey_for_association(db, survey_id, admin.association_id)
    questions = survey_service.add_question(db, survey_id, to_new_question(question))
    return [PollQuestionResponse.model_validate(q) for q in questions]


@router.delete("/{survey_id}/questions/{question_id}", response_model=List[PollQuestionResponse])
async def remove_question_endpoint(
    survey_id: str,
    question_id: str,
    admin: CurrentUser = Depends(verify_admin),
    db: Session = Depends(get_db)
):
    """Remove a question from a survey (admin only)."""
    survey_service.get_survey_for_association(db, survey_id, admin.association_id)
    questions = survey_service.remove_question(db, survey_id, question_id)
    return [PollQuestionResponse.model_validate(q) for q in questions]


@router.post("/{survey_id}/answers", response_model=SuccessResponse)
@limiter.limit(RATE_LIMITS["answer"])
async def answer_survey_endpoint(
    request: Request,
    survey_id: str,
    body: SurveyAnswerRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> SuccessResponse:
    """
    Answer questions of a survey as the authenticated user.

    Every answer is recorded independently. If one is rejected (already
    answered, too many options on a single choice question, unknown
    question) the others are still kept and the first error is returned.
    """
    survey_service.get_survey_for_association(db, survey_id, user.association_id)
    survey_service.answer_survey(
        db,
        survey_id,
        user.id,
        [answer.model_dump() for answer in body.answers],
    )
    return SuccessResponse(success=True)


@router.get("/{survey_id}/results", response_model=List[QuestionAnswersCount])
@limiter.limit(RATE_LIMITS["results"])
async def survey_results_endpoint(
    request: Request,
    survey_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Answer counts per option for every question of a survey."""
    survey_service.get_survey_for_association(db, survey_id, user.association_id)
    return survey_service.get_survey_results(db, survey_id)
