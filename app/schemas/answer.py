# app/schemas/answer.py
from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from app.schemas.user import UserSummary


class AnswerImage(BaseModel):
    url: str
    description: str | None = None


class AnswerCreate(BaseModel):
    content: str = Field(min_length=1, max_length=2000)
    images: List[AnswerImage] = []

    model_config = {"str_strip_whitespace": True}


class AnswerUpdate(AnswerCreate):
    images: List[AnswerImage] | None = None


class AnswerPublic(BaseModel):
    id: int
    question_id: int
    author_id: int
    author: UserSummary | None = None
    content: str
    images: List[AnswerImage] = []
    helpful_count: int
    is_best_answer: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class HelpfulResult(BaseModel):
    message: str
    helpful_count: int


class BestAnswerResult(BaseModel):
    message: str
    question_id: int
    best_answer_id: int
    is_resolved: bool
