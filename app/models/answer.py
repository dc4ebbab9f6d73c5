# app/models/answer.py
from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base_class import Base


class Answer(Base):
    __tablename__ = "answers"

    id = Column(Integer, primary_key=True, index=True)
    question_id = Column(
        Integer,
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    content = Column(Text, nullable=False)
    images = Column(JSON, nullable=False, default=list)

    # always equals len(helpful_marks)
    helpful_count = Column(Integer, nullable=False, default=0)
    is_best_answer = Column(Boolean, nullable=False, default=False)
    is_reported = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    author = relationship("User")
    question = relationship("Question", back_populates="answers")
    helpful_marks = relationship(
        "HelpfulMark",
        back_populates="answer",
        cascade="all, delete-orphan",
    )


class HelpfulMark(Base):
    __tablename__ = "answer_helpful_marks"
    __table_args__ = (
        UniqueConstraint("answer_id", "user_id", name="uq_helpful_mark_answer_user"),
    )

    id = Column(Integer, primary_key=True, index=True)
    answer_id = Column(
        Integer,
        ForeignKey("answers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    marked_at = Column(DateTime(timezone=True), server_default=func.now())

    answer = relationship("Answer", back_populates="helpful_marks")
