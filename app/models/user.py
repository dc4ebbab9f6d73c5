# app/models/user.py
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base_class import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(50), nullable=False)
    college_id = Column(Integer, ForeignKey("colleges.id"), nullable=False, index=True)
    role = Column(String(20), nullable=False, default="student")  # student / faculty / admin
    department = Column(String(100), nullable=False)
    year = Column(Integer, nullable=True)  # only students, 1-6
    avatar = Column(String(255), nullable=False, default="default-avatar.png")
    bio = Column(Text, nullable=True)

    # stats
    questions_asked = Column(Integer, nullable=False, default=0)
    answers_given = Column(Integer, nullable=False, default=0)
    best_answers_count = Column(Integer, nullable=False, default=0)

    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    college = relationship("College", back_populates="users")
