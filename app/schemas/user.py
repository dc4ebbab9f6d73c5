# app/schemas/user.py
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class UserStats(BaseModel):
    questions_asked: int
    answers_given: int
    best_answers_count: int

    model_config = {"from_attributes": True}


class UserSummary(BaseModel):
    """Author info embedded in questions and answers."""
    id: int
    name: str
    role: str
    department: str
    year: int | None = None
    avatar: str
    best_answers_count: int

    model_config = {"from_attributes": True}


class UserPublic(BaseModel):
    id: int
    email: EmailStr
    name: str
    role: str
    department: str
    year: int | None = None
    avatar: str
    bio: str | None = None
    college_id: int
    questions_asked: int
    answers_given: int
    best_answers_count: int
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class UserUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=50)
    department: str | None = Field(default=None, min_length=1, max_length=100)
    year: int | None = Field(default=None, ge=1, le=6)
    avatar: str | None = None
    bio: str | None = Field(default=None, max_length=500)
