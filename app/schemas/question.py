# app/schemas/question.py
from datetime import datetime
from typing import List, Literal

from pydantic import BaseModel, Field

from app.schemas.answer import AnswerPublic
from app.schemas.user import UserSummary

Category = Literal[
    "lost-and-found",
    "roommate",
    "academic-help",
    "campus-info",
    "general",
    "events",
    "career",
    "hostel",
    "transport",
]


class Image(BaseModel):
    url: str
    description: str | None = None


class LostFoundDetails(BaseModel):
    item_type: str | None = None
    location: str | None = None
    date_time: datetime | None = None
    contact_info: str | None = None
    is_found: bool = False


class RoommateDetails(BaseModel):
    room_type: str | None = None
    preferences: str | None = None
    budget: str | None = None
    location: str | None = None


class QuestionBase(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1, max_length=2000)
    category: Category
    tags: List[str] = []
    images: List[Image] = []
    lost_found_details: LostFoundDetails | None = None
    roommate_details: RoommateDetails | None = None

    model_config = {"str_strip_whitespace": True}


class QuestionCreate(QuestionBase):
    pass


class QuestionUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    content: str | None = Field(default=None, min_length=1, max_length=2000)
    tags: List[str] | None = None
    images: List[Image] | None = None
    lost_found_details: LostFoundDetails | None = None
    roommate_details: RoommateDetails | None = None

    model_config = {"str_strip_whitespace": True}


class ResolveRequest(BaseModel):
    best_answer_id: int | None = None


class QuestionPublic(QuestionBase):
    id: int
    author_id: int
    college_id: int
    author: UserSummary | None = None
    best_answer_id: int | None = None
    is_resolved: bool
    views: int
    is_pinned: bool
    answer_count: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class QuestionDetail(QuestionPublic):
    answers: List[AnswerPublic] = []
