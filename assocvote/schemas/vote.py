"""Vote schemas."""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from assocvote.core.sanitization import sanitize_description, sanitize_title
from assocvote.db.models.enums import VoteAcceptanceCriteria, VoteStatus, Visibility
from assocvote.schemas.poll import PollQuestionCreate, PollQuestionResponse, QuestionAnswersCount


class VoteCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=2000)
    visibility: Visibility = Visibility.PUBLIC
    min_percent_answers: int = Field(0, ge=0, le=100)
    acceptance_criteria: VoteAcceptanceCriteria = VoteAcceptanceCriteria.MAJORITY
    meeting_id: Optional[str] = None
    question: PollQuestionCreate

    @field_validator('title')
    @classmethod
    def sanitize_title_field(cls, v: str) -> str:
        return sanitize_title(v)

    @field_validator('description')
    @classmethod
    def sanitize_description_field(cls, v: str) -> str:
        return sanitize_description(v)


class VoteUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    visibility: Optional[Visibility] = None
    min_percent_answers: Optional[int] = Field(None, ge=0, le=100)
    acceptance_criteria: Optional[VoteAcceptanceCriteria] = None
    meeting_id: Optional[str] = None
    status: Optional[VoteStatus] = None

    @field_validator('title')
    @classmethod
    def sanitize_title_field(cls, v: Optional[str]) -> Optional[str]:
        return sanitize_title(v) if v is not None else v

    @field_validator('description')
    @classmethod
    def sanitize_description_field(cls, v: Optional[str]) -> Optional[str]:
        return sanitize_description(v) if v is not None else v


class VoteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    status: VoteStatus
    visibility: Visibility
    min_percent_answers: int
    acceptance_criteria: VoteAcceptanceCriteria
    current_ballot: int
    meeting_id: Optional[str] = None


class FullVoteResponse(VoteResponse):
    question: PollQuestionResponse


class VoteAnswerRequest(BaseModel):
    option_ids: List[str] = Field(..., min_length=1)


class WinningOptionResponse(BaseModel):
    option_id: Optional[str] = None
    is_valid: bool
    is_tie: bool
    is_acceptance_criteria_met: bool
    is_min_percent_answers_met: bool
    total_votes_count: int
    eligible_voters_count: Optional[int] = None
    last_ballot_results: QuestionAnswersCount
