"""Poll question business logic.

Questions are shared by surveys and vote ballots. Answers are stored as one
``PollResponse`` per (question, responder) plus one ``PollAnswer`` per selected
option, so an option's responder set is a join and counting is a group-by.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from assocvote.core.exceptions import (
    InternalError,
    NotFoundError,
    UnauthorizedError,
    UnprocessableEntityError,
)
from assocvote.core.logging_config import get_logger
from assocvote.db.models import PollAnswer, PollOption, PollQuestion, PollQuestionType, PollResponse
from assocvote.services.user import get_user

logger = get_logger(__name__)

ALREADY_ANSWERED = "You have already answered this question"
SINGLE_CHOICE_CARDINALITY = "Single choice question can only have one answer"


@dataclass
class NewQuestion:
    """Prompt, type and option labels of a question to create."""

    prompt: str
    type: PollQuestionType
    options: List[str] = field(default_factory=list)


def add_question(
    db: Session,
    question: NewQuestion,
    survey_id: Optional[str] = None,
    position: int = 0,
) -> PollQuestion:
    """Stage a question and its options in the current transaction (no commit)."""
    record = PollQuestion(
        prompt=question.prompt,
        type=PollQuestionType(question.type),
        survey_id=survey_id,
        position=position,
    )
    db.add(record)
    db.flush()

    if not record.id:
        raise InternalError("Failed to create question")

    for index, content in enumerate(question.options):
        _add_option(db, record.id, content, index)

    db.flush()
    return record


def _add_option(db: Session, question_id: str, content: str, position: int) -> PollOption:
    option = PollOption(content=content, question_id=question_id, position=position)
    db.add(option)
    db.flush()

    if not option.id:
        raise InternalError("Failed to create option")

    return option


def create_question(db: Session, question: NewQuestion, survey_id: Optional[str] = None) -> PollQuestion:
    """Create a question together with its options."""
    record = add_question(db, question, survey_id=survey_id)
    db.commit()
    db.refresh(record)
    return record


def create_option(db: Session, question_id: str, content: str) -> PollOption:
    """Append an option to an existing question."""
    question = get_question(db, question_id)
    option = _add_option(db, question.id, content, len(question.options))
    db.commit()
    db.refresh(option)
    return option


def get_question(db: Session, question_id: str) -> PollQuestion:
    """Get a question with its options loaded."""
    question = db.query(PollQuestion).options(
        selectinload(PollQuestion.options)
    ).filter(PollQuestion.id == question_id).first()

    if not question:
        raise NotFoundError("Question not found")

    return question


def get_option(db: Session, option_id: str) -> PollOption:
    option = db.query(PollOption).filter(PollOption.id == option_id).first()
    if not option:
        raise NotFoundError("Option not found")
    return option


def send_answers(db: Session, question_id: str, responder_id: str, option_ids: List[str]) -> None:
    """
    Record a responder's answer to a question.

    Option ids that do not belong to the question are ignored. A responder
    can answer a question only once, whatever its type.

    Raises:
        NotFoundError: question or responder does not exist
        UnprocessableEntityError: several options given to a single choice question
        UnauthorizedError: the responder already answered this question
    """
    question = get_question(db, question_id)

    if question.type == PollQuestionType.SINGLE_CHOICE and len(option_ids) > 1:
        raise UnprocessableEntityError(SINGLE_CHOICE_CARDINALITY)

    possible_option_ids = {option.id for option in question.options}
    valid_option_ids = []
    for option_id in option_ids:
        if option_id in possible_option_ids and option_id not in valid_option_ids:
            valid_option_ids.append(option_id)

    already_answered = db.query(PollResponse.id).filter(
        PollResponse.question_id == question_id,
        PollResponse.responder_id == responder_id
    ).first()

    if already_answered:
        raise UnauthorizedError(ALREADY_ANSWERED)

    if not valid_option_ids:
        return

    get_user(db, responder_id)

    response = PollResponse(question_id=question_id, responder_id=responder_id)
    response.answers = [
        PollAnswer(option_id=option_id, responder_id=responder_id)
        for option_id in valid_option_ids
    ]

    try:
        db.add(response)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        # A concurrent request for the same responder won the race;
        # the unique constraint (question_id, responder_id) rejected this one
        if "uq_question_responder" in str(e) or "unique constraint" in str(e).lower():
            raise UnauthorizedError(ALREADY_ANSWERED)
        raise

    logger.info(
        "answers_recorded",
        question_id=question_id,
        responder_id=responder_id,
        option_count=len(valid_option_ids),
    )


def get_answer_count(db: Session, option_id: str) -> Dict:
    """Number of responders who selected an option."""
    option = get_option(db, option_id)

    count = db.query(func.count(PollAnswer.id)).filter(
        PollAnswer.option_id == option.id
    ).scalar()

    return {"option_id": option.id, "count": count or 0}


def _count_by_option(db: Session, option_ids: List[str]) -> Dict[str, int]:
    if not option_ids:
        return {}

    return dict(
        db.query(PollAnswer.option_id, func.count(PollAnswer.id))
        .filter(PollAnswer.option_id.in_(option_ids))
        .group_by(PollAnswer.option_id)
        .all()
    )


def get_answers_count(db: Session, question_id: str) -> Dict:
    """
    Get answer counts for every option of a question.

    Returns:
        {"question_id": ..., "option_counts": [{"option_id": ..., "count": ...}]}
        in option order, untouched options counted as 0.
    """
    question = get_question(db, question_id)
    counts = _count_by_option(db, [option.id for option in question.options])

    return {
        "question_id": question.id,
        "option_counts": [
            {"option_id": option.id, "count": counts.get(option.id, 0)}
            for option in question.options
        ],
    }


def get_answers_count_bulk(db: Session, questions: List[PollQuestion]) -> List[Dict]:
    """
    Get answer counts for several already-loaded questions with one query.

    Args:
        db: Database session
        questions: Questions with their options loaded

    Returns:
        One get_answers_count()-shaped dict per question, in the given order
    """
    option_ids = [option.id for question in questions for option in question.options]
    counts = _count_by_option(db, option_ids)

    return [
        {
            "question_id": question.id,
            "option_counts": [
                {"option_id": option.id, "count": counts.get(option.id, 0)}
                for option in question.options
            ],
        }
        for question in questions
    ]


def snapshot_question(question: PollQuestion) -> Dict:
    return {
        "id": question.id,
        "prompt": question.prompt,
        "type": question.type,
        "options": [
            {"id": option.id, "content": option.content}
            for option in question.options
        ],
    }


def remove_questions(db: Session, question_ids: List[str]) -> None:
    """Delete questions bottom-up: answers, responses, options, questions (no commit)."""
    if not question_ids:
        return

    option_ids = [
        option_id for (option_id,) in
        db.query(PollOption.id).filter(PollOption.question_id.in_(question_ids)).all()
    ]
    response_ids = [
        response_id for (response_id,) in
        db.query(PollResponse.id).filter(PollResponse.question_id.in_(question_ids)).all()
    ]

    if response_ids:
        db.query(PollAnswer).filter(
            PollAnswer.response_id.in_(response_ids)
        ).delete(synchronize_session=False)
    if option_ids:
        db.query(PollAnswer).filter(
            PollAnswer.option_id.in_(option_ids)
        ).delete(synchronize_session=False)

    db.query(PollResponse).filter(
        PollResponse.question_id.in_(question_ids)
    ).delete(synchronize_session=False)
    db.query(PollOption).filter(
        PollOption.question_id.in_(question_ids)
    ).delete(synchronize_session=False)
    db.query(PollQuestion).filter(
        PollQuestion.id.in_(question_ids)
    ).delete(synchronize_session=False)


def delete_question(db: Session, question_id: str) -> Dict:
    """Delete a question with its options and recorded answers.

    Returns:
        Snapshot of the question as it was before deletion
    """
    question = get_question(db, question_id)
    snapshot = snapshot_question(question)

    remove_questions(db, [question.id])
    db.commit()
    db.expire_all()

    return snapshot
