"""Pydantic schemas for request/response validation."""
from assocvote.schemas.auth import CurrentUser
from assocvote.schemas.poll import (
    PollOptionCreate,
    PollQuestionCreate,
    PollOptionResponse,
    PollQuestionResponse,
    OptionAnswerCount,
    QuestionAnswersCount,
    QuestionAnswer,
)
from assocvote.schemas.survey import (
    SurveyCreate,
    SurveyUpdate,
    SurveyResponse,
    FullSurveyResponse,
    SurveyAnswerRequest,
)
from assocvote.schemas.vote import (
    VoteCreate,
    VoteUpdate,
    VoteResponse,
    FullVoteResponse,
    VoteAnswerRequest,
    WinningOptionResponse,
)
from assocvote.schemas.common import SuccessResponse, ErrorResponse

__all__ = [
    "CurrentUser",
    "PollOptionCreate",
    "PollQuestionCreate",
    "PollOptionResponse",
    "PollQuestionResponse",
    "OptionAnswerCount",
    "QuestionAnswersCount",
    "QuestionAnswer",
    "SurveyCreate",
    "SurveyUpdate",
    "SurveyResponse",
    "FullSurveyResponse",
    "SurveyAnswerRequest",
    "VoteCreate",
    "VoteUpdate",
    "VoteResponse",
    "FullVoteResponse",
    "VoteAnswerRequest",
    "WinningOptionResponse",
    "SuccessResponse",
    "ErrorResponse",
]
