# app/services/answer_service.py
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import ForbiddenError, NotFoundError
from app.core.security import RequestContext
from app.models.answer import Answer
from app.schemas.answer import AnswerCreate, AnswerUpdate
from app.services import counters
from app.services.question_service import get_question_in_college

logger = logging.getLogger(__name__)


def get_answer(db: Session, answer_id: int) -> Optional[Answer]:
    return db.get(Answer, answer_id)


def create_answer(
    db: Session,
    *,
    ctx: RequestContext,
    question_id: int,
    obj_in: AnswerCreate,
) -> Answer:
    """
    Answer a question from the caller's college; appended to the
    question's answer list and counted in the author's stats.
    """
    question = get_question_in_college(db, ctx=ctx, question_id=question_id)

    answer = Answer(
        author_id=ctx.user_id,
        content=obj_in.content,
        images=[img.model_dump() for img in obj_in.images],
    )
    question.answers.append(answer)
    db.flush()

    counters.bump_user(db, ctx.user_id, answers_given=1)

    db.commit()
    db.refresh(answer)
    logger.info(f"User {ctx.user_id} answered question {question.id} (answer {answer.id})")
    return answer


def list_answers_for_question(
    db: Session,
    *,
    ctx: RequestContext,
    question_id: int,
    skip: int = 0,
    limit: int = 10,
) -> List[Answer]:
    """
    active answers of one question, best answer first
    """
    get_question_in_college(db, ctx=ctx, question_id=question_id)
    return (
        db.query(Answer)
        .filter(Answer.question_id == question_id, Answer.is_active.is_(True))
        .order_by(Answer.is_best_answer.desc(), Answer.created_at.asc(), Answer.id.asc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def list_answers_for_author(
    db: Session,
    *,
    ctx: RequestContext,
    skip: int = 0,
    limit: int = 10,
) -> List[Answer]:
    return (
        db.query(Answer)
        .filter(Answer.author_id == ctx.user_id, Answer.is_active.is_(True))
        .order_by(Answer.created_at.desc(), Answer.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def update_answer(
    db: Session,
    *,
    ctx: RequestContext,
    answer_id: int,
    obj_in: AnswerUpdate,
) -> Answer:
    answer = get_answer(db, answer_id)
    if answer is None:
        raise NotFoundError("Answer not found")
    if answer.author_id != ctx.user_id:
        raise ForbiddenError("Access denied. You can only update your own answers.")

    answer.content = obj_in.content
    if obj_in.images is not None:
        answer.images = [img.model_dump() for img in obj_in.images]
    db.add(answer)
    db.commit()
    db.refresh(answer)
    return answer
