# app/services/college_service.py
import logging
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidStateError, NotFoundError
from app.models.college import College
from app.schemas.college import CollegeCreate, CollegeUpdate

logger = logging.getLogger(__name__)


def get_college(db: Session, college_id: int) -> Optional[College]:
    return db.get(College, college_id)


def get_college_or_404(db: Session, college_id: int) -> College:
    college = get_college(db, college_id)
    if college is None:
        raise NotFoundError("College not found")
    return college


def get_college_by_domain(db: Session, email_domain: str) -> Optional[College]:
    return (
        db.query(College)
        .filter(College.email_domain == email_domain.strip().lower())
        .first()
    )


def list_colleges(
    db: Session,
    *,
    search: str | None = None,
    include_inactive: bool = False,
    skip: int = 0,
    limit: int = 100,
) -> List[College]:
    query = db.query(College)
    if not include_inactive:
        query = query.filter(College.is_active.is_(True))
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(College.name.ilike(pattern), College.city.ilike(pattern)))
    return query.order_by(College.name.asc()).offset(skip).limit(limit).all()


def _ensure_unique(db: Session, *, name: str | None, email_domain: str | None, exclude_id: int | None = None):
    if name is not None:
        q = db.query(College).filter(College.name == name)
        if exclude_id is not None:
            q = q.filter(College.id != exclude_id)
        if q.first():
            raise InvalidStateError("College with this name already exists")
    if email_domain is not None:
        q = db.query(College).filter(College.email_domain == email_domain)
        if exclude_id is not None:
            q = q.filter(College.id != exclude_id)
        if q.first():
            raise InvalidStateError("College with this email domain already exists")


def create_college(db: Session, *, obj_in: CollegeCreate) -> College:
    """
    admin creates a college
    """
    name = obj_in.name.strip()
    domain = obj_in.email_domain.strip().lower()
    _ensure_unique(db, name=name, email_domain=domain)

    db_obj = College(
        name=name,
        email_domain=domain,
        city=obj_in.city.strip(),
        state=obj_in.state.strip(),
        country=obj_in.country.strip(),
    )
    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)
    logger.info(f"Created college {db_obj.id} ({db_obj.email_domain})")
    return db_obj


def update_college(db: Session, *, db_obj: College, obj_in: CollegeUpdate) -> College:
    update_data = obj_in.model_dump(exclude_unset=True)
    if "name" in update_data and update_data["name"] is not None:
        update_data["name"] = update_data["name"].strip()
    if "email_domain" in update_data and update_data["email_domain"] is not None:
        update_data["email_domain"] = update_data["email_domain"].strip().lower()
    _ensure_unique(
        db,
        name=update_data.get("name"),
        email_domain=update_data.get("email_domain"),
        exclude_id=db_obj.id,
    )

    for field, value in update_data.items():
        if value is not None:
            setattr(db_obj, field, value)
    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)
    return db_obj
