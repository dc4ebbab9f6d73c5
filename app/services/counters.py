# app/services/counters.py
"""
Denormalized counter maintenance.

Counters are bumped with ``col = col + delta`` in SQL so two requests
touching the same row never overwrite each other's increment. Callers
commit; nothing here commits.
"""
from sqlalchemy.orm import Session

from app.models.college import College
from app.models.user import User


def bump(db: Session, model, pk: int, **deltas: int) -> int:
    """Apply ``field += delta`` for each keyword on row ``pk``; returns rows matched."""
    values = {
        getattr(model, field): getattr(model, field) + delta
        for field, delta in deltas.items()
        if delta
    }
    if not values:
        return 0
    return (
        db.query(model)
        .filter(model.id == pk)
        .update(values, synchronize_session="fetch")
    )


def bump_user(db: Session, user_id: int | None, **deltas: int) -> int:
    if user_id is None:
        return 0
    return bump(db, User, user_id, **deltas)


def bump_college(db: Session, college_id: int, **deltas: int) -> int:
    return bump(db, College, college_id, **deltas)
