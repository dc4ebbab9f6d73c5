# app/services/maintenance_service.py
import logging
from typing import Dict

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.answer import Answer, HelpfulMark
from app.models.college import College
from app.models.question import Question
from app.models.user import User
from app.services import counters

logger = logging.getLogger(__name__)


def purge_orphaned_answers(db: Session) -> int:
    """
    Remove answers whose question no longer exists.

    Question deletion already cascades; this catches rows left behind by
    out-of-band deletes or older data. Each removed answer gives back its
    author's answers_given (and best_answers_count if it was flagged).
    """
    existing_questions = select(Question.id)
    orphans = (
        db.query(Answer)
        .filter(~Answer.question_id.in_(existing_questions))
        .all()
    )

    try:
        for answer in orphans:
            deltas = {"answers_given": -1}
            if answer.is_best_answer:
                deltas["best_answers_count"] = -1
            counters.bump_user(db, answer.author_id, **deltas)
            db.delete(answer)
        db.commit()
    except Exception:
        db.rollback()
        raise

    if orphans:
        logger.info(f"Purged {len(orphans)} orphaned answers")
    return len(orphans)


def _fix(obj, field: str, expected: int) -> int:
    if getattr(obj, field) != expected:
        logger.warning(
            f"{type(obj).__name__} {obj.id}: {field} drifted "
            f"({getattr(obj, field)} -> {expected})"
        )
        setattr(obj, field, expected)
        return 1
    return 0


def reconcile_counters(db: Session) -> int:
    """
    Recompute every denormalized counter from the rows and fix the ones
    that drifted. Returns how many fields were corrected.
    """
    questions_by_author: Dict[int, int] = dict(
        db.query(Question.author_id, func.count(Question.id)).group_by(Question.author_id).all()
    )
    answers_by_author: Dict[int, int] = dict(
        db.query(Answer.author_id, func.count(Answer.id)).group_by(Answer.author_id).all()
    )
    best_by_author: Dict[int, int] = dict(
        db.query(Answer.author_id, func.count(Answer.id))
        .filter(Answer.is_best_answer.is_(True))
        .group_by(Answer.author_id)
        .all()
    )
    marks_by_answer: Dict[int, int] = dict(
        db.query(HelpfulMark.answer_id, func.count(HelpfulMark.id))
        .group_by(HelpfulMark.answer_id)
        .all()
    )
    questions_by_college: Dict[int, int] = dict(
        db.query(Question.college_id, func.count(Question.id)).group_by(Question.college_id).all()
    )
    users_by_college: Dict[int, int] = dict(
        db.query(User.college_id, func.count(User.id)).group_by(User.college_id).all()
    )

    fixed = 0
    try:
        for user in db.query(User).all():
            fixed += _fix(user, "questions_asked", questions_by_author.get(user.id, 0))
            fixed += _fix(user, "answers_given", answers_by_author.get(user.id, 0))
            fixed += _fix(user, "best_answers_count", best_by_author.get(user.id, 0))

        for answer in db.query(Answer).all():
            fixed += _fix(answer, "helpful_count", marks_by_answer.get(answer.id, 0))

        for college in db.query(College).all():
            fixed += _fix(college, "total_questions", questions_by_college.get(college.id, 0))
            fixed += _fix(college, "total_students", users_by_college.get(college.id, 0))

        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Counter reconciliation finished, {fixed} fields corrected")
    return fixed
