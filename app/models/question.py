# app/models/question.py
from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base_class import Base

QUESTION_CATEGORIES = (
    "lost-and-found",
    "roommate",
    "academic-help",
    "campus-info",
    "general",
    "events",
    "career",
    "hostel",
    "transport",
)


class Question(Base):
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, index=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    college_id = Column(Integer, ForeignKey("colleges.id"), nullable=False, index=True)

    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    category = Column(String(30), nullable=False, index=True)
    tags = Column(JSON, nullable=False, default=list)
    images = Column(JSON, nullable=False, default=list)

    # answers.id; no FK to keep questions <-> answers acyclic
    best_answer_id = Column(Integer, nullable=True)
    is_resolved = Column(Boolean, nullable=False, default=False)

    views = Column(Integer, nullable=False, default=0)
    is_pinned = Column(Boolean, nullable=False, default=False)
    is_reported = Column(Boolean, nullable=False, default=False)

    # category-specific details
    lost_found_details = Column(JSON, nullable=True)
    roommate_details = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    author = relationship("User")
    answers = relationship(
        "Answer",
        back_populates="question",
        order_by="Answer.id",
        cascade="all, delete-orphan",
    )

    @property
    def answer_count(self) -> int:
        return len(self.answers)
