"""Survey schemas."""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from assocvote.core.sanitization import sanitize_description, sanitize_title
from assocvote.db.models.enums import Visibility
from assocvote.schemas.poll import PollQuestionCreate, PollQuestionResponse, QuestionAnswer


class SurveyCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=2000)
    visibility: Visibility = Visibility.PUBLIC
    questions: List[PollQuestionCreate] = Field(default_factory=list)

    @field_validator('title')
    @classmethod
    def sanitize_title_field(cls, v: str) -> str:
        return sanitize_title(v)

    @field_validator('description')
    @classmethod
    def sanitize_description_field(cls, v: str) -> str:
        return sanitize_description(v)


class SurveyUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    visibility: Optional[Visibility] = None

    @field_validator('title')
    @classmethod
    def sanitize_title_field(cls, v: Optional[str]) -> Optional[str]:
        return sanitize_title(v) if v is not None else v

    @field_validator('description')
    @classmethod
    def sanitize_description_field(cls, v: Optional[str]) -> Optional[str]:
        return sanitize_description(v) if v is not None else v


class SurveyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    visibility: Visibility


class FullSurveyResponse(SurveyResponse):
    questions: List[PollQuestionResponse]


class SurveyAnswerRequest(BaseModel):
    answers: List[QuestionAnswer] = Field(..., min_length=1)
