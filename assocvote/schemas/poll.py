"""Poll question schemas."""
from typing import List
from pydantic import BaseModel, ConfigDict, Field, field_validator

from assocvote.core.constants import (
    LEGACY_MULTIPLE_CHOICE_VALUE,
    MAX_OPTIONS_PER_QUESTION,
    MIN_OPTIONS_PER_QUESTION,
)
from assocvote.core.sanitization import sanitize_option_content, sanitize_prompt
from assocvote.db.models.enums import PollQuestionType


class PollOptionCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=200)

    @field_validator('content')
    @classmethod
    def sanitize_content_field(cls, v: str) -> str:
        return sanitize_option_content(v)


class PollQuestionCreate(BaseModel):
    prompt: str = Field(..., min_length=1, max_length=500)
    type: PollQuestionType
    options: List[PollOptionCreate] = Field(
        ..., min_length=MIN_OPTIONS_PER_QUESTION, max_length=MAX_OPTIONS_PER_QUESTION
    )

    @field_validator('prompt')
    @classmethod
    def sanitize_prompt_field(cls, v: str) -> str:
        return sanitize_prompt(v)

    @field_validator('type', mode='before')
    @classmethod
    def normalize_legacy_type(cls, v):
        """Accept the misspelled multiple choice value sent by older clients."""
        if v == LEGACY_MULTIPLE_CHOICE_VALUE:
            return PollQuestionType.MULTIPLE_CHOICE
        return v


class PollOptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    content: str


class PollQuestionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    prompt: str
    type: PollQuestionType
    options: List[PollOptionResponse]


class OptionAnswerCount(BaseModel):
    option_id: str
    count: int


class QuestionAnswersCount(BaseModel):
    question_id: str
    option_counts: List[OptionAnswerCount]


class QuestionAnswer(BaseModel):
    question_id: str = Field(..., min_length=1)
    option_ids: List[str] = Field(default_factory=list)
