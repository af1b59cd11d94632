"""Survey business logic."""
from typing import Dict, List

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from assocvote.core.exceptions import InternalError, NotFoundError, ServiceError
from assocvote.core.logging_config import get_logger
from assocvote.db.models import PollQuestion, Survey, Visibility
from assocvote.services.poll import (
    NewQuestion,
    add_question as add_poll_question,
    get_answers_count_bulk,
    remove_questions,
    send_answers,
    snapshot_question,
)

logger = get_logger(__name__)

UPDATABLE_FIELDS = ("title", "description", "visibility")


def create_survey(
    db: Session,
    title: str,
    description: str,
    association_id: str,
    visibility: Visibility,
    questions: List[NewQuestion],
) -> Survey:
    """Create a survey and all of its questions in one transaction."""
    survey = Survey(
        title=title,
        description=description,
        visibility=Visibility(visibility),
        association_id=association_id,
    )
    db.add(survey)
    db.flush()

    if not survey.id:
        raise InternalError("Survey not created")

    for position, question in enumerate(questions):
        add_poll_question(db, question, survey_id=survey.id, position=position)

    db.commit()
    db.refresh(survey)

    logger.info("survey_created", survey_id=survey.id, question_count=len(questions))
    return survey


def get_survey(db: Session, survey_id: str) -> Survey:
    survey = db.query(Survey).filter(Survey.id == survey_id).first()
    if not survey:
        raise NotFoundError("Survey not found")
    return survey


def _get_survey_with_questions(db: Session, survey_id: str) -> Survey:
    survey = db.query(Survey).options(
        selectinload(Survey.questions).selectinload(PollQuestion.options)
    ).filter(Survey.id == survey_id).first()

    if not survey:
        raise NotFoundError("Survey not found")

    return survey


def get_surveys_for_association(db: Session, association_id: str) -> List[Survey]:
    return db.query(Survey).filter(
        Survey.association_id == association_id
    ).order_by(Survey.title).all()


def get_survey_for_association(db: Session, survey_id: str, association_id: str) -> Survey:
    """Surveys of other associations are reported as missing."""
    survey = get_survey(db, survey_id)
    if survey.association_id != association_id:
        raise NotFoundError("Survey not found")
    return survey


def _snapshot_survey(survey: Survey) -> Dict:
    return {
        "id": survey.id,
        "title": survey.title,
        "description": survey.description,
        "visibility": survey.visibility,
    }


def get_full_survey(db: Session, survey_id: str) -> Dict:
    """Get a survey with its questions and their options."""
    survey = _get_survey_with_questions(db, survey_id)

    full = _snapshot_survey(survey)
    full["questions"] = [snapshot_question(question) for question in survey.questions]
    return full


def update_survey(db: Session, survey_id: str, **fields) -> Survey:
    """Patch the title, description or visibility of a survey."""
    survey = get_survey(db, survey_id)

    for name, value in fields.items():
        if name not in UPDATABLE_FIELDS:
            raise ValueError(f"Survey field '{name}' cannot be updated")
        if value is not None:
            setattr(survey, name, value)

    db.commit()
    db.refresh(survey)
    return survey


def delete_survey(db: Session, survey_id: str) -> Dict:
    """Delete a survey and its questions.

    Returns:
        Snapshot of the survey as it was before deletion
    """
    survey = _get_survey_with_questions(db, survey_id)
    snapshot = _snapshot_survey(survey)

    remove_questions(db, [question.id for question in survey.questions])
    db.query(Survey).filter(Survey.id == survey.id).delete(synchronize_session=False)
    db.commit()
    db.expire_all()

    logger.info("survey_deleted", survey_id=survey_id)
    return snapshot


def replace_survey(
    db: Session,
    survey_id: str,
    title: str,
    description: str,
    association_id: str,
    visibility: Visibility,
    questions: List[NewQuestion],
) -> Dict:
    """Drop a survey with its answers and create a new one in its place."""
    delete_survey(db, survey_id)
    recreated = create_survey(db, title, description, association_id, visibility, questions)
    return get_full_survey(db, recreated.id)


def add_question(db: Session, survey_id: str, question: NewQuestion) -> List[PollQuestion]:
    """Append a question to a survey and return the survey's questions."""
    survey = get_survey(db, survey_id)

    last_position = db.query(func.max(PollQuestion.position)).filter(
        PollQuestion.survey_id == survey.id
    ).scalar()
    position = 0 if last_position is None else last_position + 1

    add_poll_question(db, question, survey_id=survey.id, position=position)
    db.commit()

    return _get_survey_with_questions(db, survey_id).questions


def remove_question(db: Session, survey_id: str, question_id: str) -> List[PollQuestion]:
    """Delete one question of a survey and return the remaining ones."""
    survey = _get_survey_with_questions(db, survey_id)

    if question_id not in {question.id for question in survey.questions}:
        raise NotFoundError("Question not found")

    remove_questions(db, [question_id])
    db.commit()
    db.expire_all()

    return _get_survey_with_questions(db, survey_id).questions


def answer_survey(db: Session, survey_id: str, responder_id: str, answers: List[Dict]) -> None:
    """
    Answer several questions of a survey.

    Each answer is recorded on its own: a rejected answer does not undo the
    others. Every answer is attempted, then the first failure is raised.

    Args:
        answers: [{"question_id": ..., "option_ids": [...]}, ...]
    """
    survey = _get_survey_with_questions(db, survey_id)
    question_ids = {question.id for question in survey.questions}

    errors = []
    for answer in answers:
        try:
            if answer["question_id"] not in question_ids:
                raise NotFoundError("Question not found")
            send_answers(db, answer["question_id"], responder_id, answer["option_ids"])
        except ServiceError as e:
            logger.info(
                "survey_answer_rejected",
                survey_id=survey_id,
                question_id=answer["question_id"],
                reason=e.message,
            )
            errors.append(e)

    if errors:
        raise errors[0]


def get_survey_results(db: Session, survey_id: str) -> List[Dict]:
    """Answer counts for every question of a survey."""
    survey = _get_survey_with_questions(db, survey_id)
    return get_answers_count_bulk(db, survey.questions)
