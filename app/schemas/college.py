# app/schemas/college.py
from datetime import datetime

from pydantic import BaseModel, Field


class CollegeBase(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    email_domain: str = Field(min_length=3, max_length=255)
    city: str
    state: str
    country: str


class CollegeCreate(CollegeBase):
    pass


class CollegeUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    email_domain: str | None = Field(default=None, min_length=3, max_length=255)
    city: str | None = None
    state: str | None = None
    country: str | None = None
    is_active: bool | None = None


class CollegePublic(CollegeBase):
    id: int
    is_active: bool
    total_students: int
    total_questions: int
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
