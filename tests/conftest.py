"""
Shared fixtures: an in-memory SQLite database per test, one college with
a handful of users, and a question with two answers created through the
services so every counter starts out consistent.
"""

import os

# Must be set before the app settings are imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.security import RequestContext, create_access_token
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models.answer import Answer
from app.models.college import College
from app.models.question import Question
from app.models.user import User
from app.schemas.answer import AnswerCreate
from app.schemas.question import QuestionCreate
from app.services import answer_service, question_service

# Test database (in-memory SQLite, one shared connection)
TEST_DATABASE_URL = "sqlite://"


def ctx_for(user: User) -> RequestContext:
    return RequestContext(user_id=user.id, college_id=user.college_id, role=user.role)


def auth_headers(user: User) -> dict:
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


def assert_resolution_invariants(db, question_id: int) -> None:
    """At most one best answer, and it is the one the question points at."""
    question = db.get(Question, question_id)
    best = (
        db.query(Answer)
        .filter(Answer.question_id == question_id, Answer.is_best_answer.is_(True))
        .all()
    )
    assert len(best) <= 1
    if question.best_answer_id is not None:
        assert question.is_resolved is True
        assert [a.id for a in best] == [question.best_answer_id]
    else:
        assert best == []


@pytest.fixture(scope="function")
def session_factory():
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def db_session(session_factory):
    """Create a test database session."""
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _make_user(db, college, email, name, role="student", year=2):
    user = User(
        email=email,
        # Pre-hashed password to avoid running bcrypt in tests
        password_hash="$2b$12$hashed_password_001",
        name=name,
        college_id=college.id,
        role=role,
        department="Computer Science",
        year=year if role == "student" else None,
    )
    db.add(user)
    college.total_students += 1
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def college(db_session):
    college = College(
        name="Test Institute of Technology",
        email_domain="tit.edu",
        city="Cambridge",
        state="MA",
        country="USA",
    )
    db_session.add(college)
    db_session.commit()
    db_session.refresh(college)
    return college


@pytest.fixture
def other_college(db_session):
    college = College(
        name="Other State University",
        email_domain="osu.edu",
        city="Columbus",
        state="OH",
        country="USA",
    )
    db_session.add(college)
    db_session.commit()
    db_session.refresh(college)
    return college


@pytest.fixture
def asker(db_session, college):
    return _make_user(db_session, college, "asker@tit.edu", "Asker")


@pytest.fixture
def answerer1(db_session, college):
    return _make_user(db_session, college, "first@tit.edu", "First Answerer", year=3)


@pytest.fixture
def answerer2(db_session, college):
    return _make_user(db_session, college, "second@tit.edu", "Second Answerer", role="faculty")


@pytest.fixture
def helper(db_session, college):
    return _make_user(db_session, college, "helper@tit.edu", "Helper", year=1)


@pytest.fixture
def admin(db_session, college):
    return _make_user(db_session, college, "admin@tit.edu", "Admin", role="admin")


@pytest.fixture
def outsider(db_session, other_college):
    return _make_user(db_session, other_college, "outsider@osu.edu", "Outsider")


@pytest.fixture
def question(db_session, asker):
    return question_service.create_question(
        db_session,
        ctx=ctx_for(asker),
        obj_in=QuestionCreate(
            title="Where is the lost and found office?",
            content="I lost my ID card near the library yesterday.",
            category="campus-info",
            tags=["ID-Card ", "library"],
        ),
    )


@pytest.fixture
def a1(db_session, question, answerer1):
    return answer_service.create_answer(
        db_session,
        ctx=ctx_for(answerer1),
        question_id=question.id,
        obj_in=AnswerCreate(content="Ground floor of the admin block."),
    )


@pytest.fixture
def a2(db_session, question, answerer2):
    return answer_service.create_answer(
        db_session,
        ctx=ctx_for(answerer2),
        question_id=question.id,
        obj_in=AnswerCreate(content="Ask at the library front desk first."),
    )
