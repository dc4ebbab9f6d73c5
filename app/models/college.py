# app/models/college.py
from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base_class import Base


class College(Base):
    __tablename__ = "colleges"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), unique=True, nullable=False, index=True)
    # "john@harvard.edu" -> "harvard.edu"
    email_domain = Column(String(255), unique=True, nullable=False, index=True)

    city = Column(String(100), nullable=False)
    state = Column(String(100), nullable=False)
    country = Column(String(100), nullable=False)

    is_active = Column(Boolean, nullable=False, default=True)

    # denormalized; kept in step on register, ask and question delete
    total_students = Column(Integer, nullable=False, default=0)
    total_questions = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    users = relationship("User", back_populates="college")
