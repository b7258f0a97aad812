"""Pydantic schemas for profile, onboarding and role lookups."""
from typing import Annotated, Literal

from pydantic import BaseModel, Field, StringConstraints

from codehelper.schemas.stats import LanguageProgressOutSchema

LanguageKey = Annotated[str, StringConstraints(strip_whitespace=True, to_lower=True, min_length=1, max_length=32)]


class ProfileOutSchema(BaseModel):
    id: str
    role: str
    experience: str | None
    focus_areas: list[str]
    confidence: int | None
    ai_experience: str | None
    preferred_languages: list[str]
    primary_language: str | None
    profile_completed: bool
    language_progress: list[LanguageProgressOutSchema] = []

    class Config:
        from_attributes = True


class ProfileUpdateSchema(BaseModel):
    experience: Literal["beginner", "intermediate", "advanced"]
    focus_areas: list[str] = Field(default_factory=list, max_length=20)
    confidence: int = Field(ge=1, le=5)
    ai_experience: str | None = Field(default=None, max_length=32)
    primary_language: LanguageKey | None = None


class LanguagesUpdateSchema(BaseModel):
    languages: list[LanguageKey] = Field(min_length=1, max_length=20)
    primary_language: LanguageKey | None = None


class OnboardingStatusSchema(BaseModel):
    profile_completed: bool
    pre_assessment_completed: bool
    tour_completed: bool
    onboarding_completed: bool


class RoleOutSchema(BaseModel):
    role: str


class BlockedOutSchema(BaseModel):
    is_blocked: bool
