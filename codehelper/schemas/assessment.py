"""Pydantic schemas for assessments and post-assessment eligibility."""
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class AssessmentQuestionOutSchema(BaseModel):
    id: str
    question: str
    type: str
    options: list[str] | None
    category: str
    difficulty: str
    language: str | None

    class Config:
        from_attributes = True


class AnswerSchema(BaseModel):
    question_id: str
    answer: str = Field(max_length=2000)


class AssessmentSubmitSchema(BaseModel):
    type: Literal["pre", "post"]
    language: str | None = None
    confidence: int = Field(ge=1, le=5)
    answers: list[AnswerSchema] = Field(min_length=1, max_length=100)


class AssessmentOutSchema(BaseModel):
    id: str
    type: str
    language: str | None
    score: int | None
    total_questions: int
    confidence: int
    completed_at: datetime

    class Config:
        from_attributes = True


class PostAssessmentEligibility(BaseModel):
    is_eligible: bool
    minutes_since_registration: int
    min_minutes_required: int
    progress_percentage: int


class EligibilityOutSchema(PostAssessmentEligibility):
    message: str
    has_post_assessment: bool = False
