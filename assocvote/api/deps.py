"""Shared API dependencies."""
from typing import List

from assocvote.db import get_db, get_db_context
from assocvote.core.security import get_current_user, verify_admin
from assocvote.services.poll import NewQuestion
from assocvote.schemas import PollQuestionCreate

__all__ = ["get_db", "get_db_context", "get_current_user", "verify_admin", "to_new_question", "to_new_questions"]


def to_new_question(question: PollQuestionCreate) -> NewQuestion:
    """Convert a validated request body into the service-layer question."""
    return NewQuestion(
        prompt=question.prompt,
        type=question.type,
        options=[option.content for option in question.options],
    )


def to_new_questions(questions: List[PollQuestionCreate]) -> List[NewQuestion]:
    return [to_new_question(question) for question in questions]
