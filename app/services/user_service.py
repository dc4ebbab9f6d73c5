# app/services/user_service.py
import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.core.exceptions import InvalidStateError, NotFoundError
from app.core.security import get_password_hash
from app.models.user import User
from app.schemas.auth import RegisterRequest
from app.schemas.user import UserUpdate
from app.services import college_service, counters

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.lower()).first()


def register_user(db: Session, *, obj_in: RegisterRequest) -> User:
    """
    Register with a college email; the email domain picks the college.
    """
    email = obj_in.email.lower()
    if get_user_by_email(db, email):
        raise InvalidStateError("User with this email already exists")

    domain = email.split("@")[1]
    college = college_service.get_college_by_domain(db, domain)
    if college is None:
        raise InvalidStateError(
            f"College with domain {domain} is not registered. Please contact admin."
        )
    if not college.is_active:
        raise InvalidStateError("This college is currently inactive. Please contact admin.")

    user = User(
        name=obj_in.name.strip(),
        email=email,
        password_hash=get_password_hash(obj_in.password),
        college_id=college.id,
        role=obj_in.role,
        department=obj_in.department.strip(),
        year=obj_in.year if obj_in.role == "student" else None,
    )
    db.add(user)
    counters.bump_college(db, college.id, total_students=1)
    db.commit()
    db.refresh(user)

    logger.info(f"Registered user {user.id} in college {college.id}")
    return user


def update_profile(db: Session, *, user_id: int, obj_in: UserUpdate) -> User:
    user = get_user(db, user_id)
    if user is None:
        raise NotFoundError("User not found")

    update_data = obj_in.model_dump(exclude_unset=True)
    if user.role != "student":
        update_data.pop("year", None)
    for field, value in update_data.items():
        if value is not None:
            setattr(user, field, value)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
