# app/services/resolution_service.py
"""
Best-answer / helpful-mark workflow.

Every public function here touches more than one table (question,
answers, user stats, college stats). Each one runs as a single
transaction: the writes are committed together at the end, and any
error rolls all of them back, so callers never observe half an update.

Invariants kept after every commit:
  - at most one answer of a question has ``is_best_answer`` set, and it
    is the question's ``best_answer_id``;
  - ``is_resolved`` is true whenever ``best_answer_id`` is set;
  - ``answer.helpful_count == len(answer.helpful_marks)``;
  - ``user.best_answers_count`` counts the user's answers currently
    flagged best.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import (
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
)
from app.core.security import RequestContext
from app.models.answer import Answer, HelpfulMark
from app.models.question import Question
from app.services import counters

logger = logging.getLogger(__name__)


@contextmanager
def _transaction(db: Session) -> Iterator[None]:
    try:
        yield
        db.commit()
    except Exception:
        db.rollback()
        raise


def _lock_question(db: Session, question_id: int) -> Optional[Question]:
    # FOR UPDATE serializes concurrent best-answer changes (no-op on SQLite)
    return (
        db.query(Question)
        .filter(Question.id == question_id)
        .with_for_update()
        .populate_existing()
        .first()
    )


def _lock_answer(db: Session, answer_id: int) -> Optional[Answer]:
    # fresh row under FOR UPDATE; toggles on the same answer recount one at a time
    return (
        db.query(Answer)
        .filter(Answer.id == answer_id)
        .with_for_update()
        .populate_existing()
        .first()
    )


def _count_helpful_marks(db: Session, answer_id: int) -> int:
    return (
        db.query(func.count(HelpfulMark.id))
        .filter(HelpfulMark.answer_id == answer_id)
        .scalar()
    )


def _get_answer_or_404(db: Session, answer_id: int) -> Answer:
    answer = db.get(Answer, answer_id)
    if answer is None:
        raise NotFoundError("Answer not found")
    return answer


def _get_owned_question(db: Session, ctx: RequestContext, question_id: int, message: str) -> Question:
    question = _lock_question(db, question_id)
    if question is None:
        raise NotFoundError("Question not found")
    if question.author_id != ctx.user_id:
        raise ForbiddenError(message)
    return question


def _clear_best_answer(db: Session, question: Question) -> Optional[Answer]:
    """
    Unflag the question's current best answer and take the point back
    from its author. Returns the answer that lost the flag, if any.
    """
    previous: Optional[Answer] = None
    if question.best_answer_id is not None:
        previous = db.get(Answer, question.best_answer_id)
        if previous is not None and previous.is_best_answer:
            counters.bump_user(db, previous.author_id, best_answers_count=-1)
        elif previous is None:
            logger.debug(
                f"Previous best answer {question.best_answer_id} of question "
                f"{question.id} no longer exists, skipping decrement"
            )

    db.query(Answer).filter(
        Answer.question_id == question.id,
        Answer.is_best_answer.is_(True),
    ).update({Answer.is_best_answer: False}, synchronize_session="fetch")

    question.best_answer_id = None
    return previous


def assign_best_answer(
    db: Session,
    ctx: RequestContext,
    answer_id: int,
    question_id: int | None = None,
) -> Tuple[Question, Answer]:
    """
    Question author picks ``answer_id`` as the best answer.

    The previous best answer is read before anything is overwritten so
    that re-picking the current best answer changes no counters.
    """
    with _transaction(db):
        answer = _get_answer_or_404(db, answer_id)
        if question_id is not None and answer.question_id != question_id:
            raise NotFoundError("Answer not found for this question")

        question = _get_owned_question(
            db,
            ctx,
            answer.question_id,
            "Access denied. Only question author can select best answer.",
        )

        previous_best_id = question.best_answer_id

        if previous_best_id == answer.id and answer.is_best_answer:
            # already the best answer: make sure the question says so, nothing else
            question.is_resolved = True
            logger.info(f"Answer {answer.id} is already best for question {question.id}")
        else:
            if previous_best_id is not None and previous_best_id != answer.id:
                previous = db.get(Answer, previous_best_id)
                if previous is not None and previous.is_best_answer:
                    counters.bump_user(db, previous.author_id, best_answers_count=-1)

            db.query(Answer).filter(
                Answer.question_id == question.id,
                Answer.id != answer.id,
            ).update({Answer.is_best_answer: False}, synchronize_session="fetch")

            answer.is_best_answer = True
            question.best_answer_id = answer.id
            question.is_resolved = True

            counters.bump_user(db, answer.author_id, best_answers_count=1)

            logger.info(
                f"Question {question.id}: best answer {previous_best_id} -> {answer.id} "
                f"(by user {ctx.user_id})"
            )

    db.refresh(question)
    db.refresh(answer)
    return question, answer


def toggle_helpful(
    db: Session,
    ctx: RequestContext,
    answer_id: int,
    add: bool,
) -> int:
    """
    Add or remove the caller's helpful mark; returns the new helpful count.
    """
    try:
        with _transaction(db):
            answer = _lock_answer(db, answer_id)
            if answer is None:
                raise NotFoundError("Answer not found")
            existing = (
                db.query(HelpfulMark)
                .filter(HelpfulMark.answer_id == answer.id, HelpfulMark.user_id == ctx.user_id)
                .first()
            )

            if add:
                question = db.get(Question, answer.question_id)
                if question is not None and question.college_id != ctx.college_id:
                    raise ForbiddenError("Access denied. Answer not from your college.")
                if answer.author_id == ctx.user_id:
                    raise InvalidStateError("You cannot mark your own answer as helpful")
                if existing is not None:
                    raise InvalidStateError("Already marked as helpful")

                db.add(HelpfulMark(answer_id=answer.id, user_id=ctx.user_id))
            else:
                if existing is None:
                    raise InvalidStateError("Not marked as helpful yet")
                db.delete(existing)

            db.flush()
            answer.helpful_count = _count_helpful_marks(db, answer.id)
    except IntegrityError:
        # concurrent duplicate insert tripped uq_helpful_mark_answer_user
        raise InvalidStateError("Already marked as helpful")

    db.refresh(answer)
    logger.debug(
        f"User {ctx.user_id} {'marked' if add else 'unmarked'} answer {answer.id} helpful "
        f"(count={answer.helpful_count})"
    )
    return answer.helpful_count


def delete_answer(db: Session, ctx: RequestContext, answer_id: int) -> None:
    with _transaction(db):
        answer = _get_answer_or_404(db, answer_id)
        if answer.author_id != ctx.user_id:
            raise ForbiddenError("Access denied. You can only delete your own answers.")

        question = _lock_question(db, answer.question_id)
        # re-read under the question lock; a best-answer pick may have just committed
        answer = _lock_answer(db, answer_id)
        if answer is None:
            raise NotFoundError("Answer not found")
        was_best = answer.is_best_answer

        if question is not None:
            if was_best or question.best_answer_id == answer.id:
                if was_best:
                    counters.bump_user(db, answer.author_id, best_answers_count=-1)
                question.best_answer_id = None
                question.is_resolved = False
            if answer in question.answers:
                question.answers.remove(answer)

        db.delete(answer)
        counters.bump_user(db, answer.author_id, answers_given=-1)

    logger.info(f"User {ctx.user_id} deleted answer {answer_id} (was_best={was_best})")


def delete_question(db: Session, ctx: RequestContext, question_id: int) -> None:
    """
    Delete a question together with its answers and helpful marks,
    and roll back every counter they contributed to.
    """
    with _transaction(db):
        question = _get_owned_question(
            db,
            ctx,
            question_id,
            "Access denied. You can only delete your own questions.",
        )

        removed = 0
        for answer in list(question.answers):
            deltas = {"answers_given": -1}
            if answer.is_best_answer:
                deltas["best_answers_count"] = -1
            counters.bump_user(db, answer.author_id, **deltas)
            removed += 1

        counters.bump_user(db, question.author_id, questions_asked=-1)
        counters.bump_college(db, question.college_id, total_questions=-1)

        # cascade="all, delete-orphan" removes answers and their marks
        db.delete(question)

    logger.info(f"User {ctx.user_id} deleted question {question_id} with {removed} answers")


def resolve_question(
    db: Session,
    ctx: RequestContext,
    question_id: int,
    best_answer_id: int | None = None,
) -> Question:
    """
    Mark a question resolved.

    With ``best_answer_id`` this is the best-answer assignment. Without
    one the question is flagged resolved and its best answer, if any, is
    left as is.
    """
    if best_answer_id is not None:
        question, _ = assign_best_answer(db, ctx, best_answer_id, question_id=question_id)
        return question

    with _transaction(db):
        question = _get_owned_question(
            db,
            ctx,
            question_id,
            "Access denied. Only question author can mark as resolved.",
        )
        question.is_resolved = True

    db.refresh(question)
    logger.info(f"Question {question_id} marked resolved (best_answer={question.best_answer_id})")
    return question


def reopen_question(db: Session, ctx: RequestContext, question_id: int) -> Question:
    """Back to open: no best answer, not resolved."""
    with _transaction(db):
        question = _get_owned_question(
            db,
            ctx,
            question_id,
            "Access denied. Only question author can reopen the question.",
        )
        _clear_best_answer(db, question)
        question.is_resolved = False

    db.refresh(question)
    logger.info(f"Question {question_id} reopened by user {ctx.user_id}")
    return question
