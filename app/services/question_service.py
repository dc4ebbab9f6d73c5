# app/services/question_service.py
import logging
from typing import List, Optional

from sqlalchemy import String, cast, or_
from sqlalchemy.orm import Session

from app.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from app.core.security import RequestContext
from app.models.question import QUESTION_CATEGORIES, Question
from app.schemas.question import QuestionCreate, QuestionUpdate
from app.services import counters

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {
    "created_at": Question.created_at,
    "views": Question.views,
    "title": Question.title,
}


def _clean_tags(tags: List[str]) -> List[str]:
    cleaned = []
    for tag in tags:
        tag = tag.strip().lower()
        if tag and tag not in cleaned:
            cleaned.append(tag)
    return cleaned


def _category_details(category: str, obj_in) -> dict:
    """Only keep the detail record that matches the question's category."""
    details = {}
    if category == "lost-and-found" and obj_in.lost_found_details is not None:
        details["lost_found_details"] = obj_in.lost_found_details.model_dump(mode="json")
    if category == "roommate" and obj_in.roommate_details is not None:
        details["roommate_details"] = obj_in.roommate_details.model_dump(mode="json")
    return details


def create_question(
    db: Session,
    *,
    ctx: RequestContext,
    obj_in: QuestionCreate,
) -> Question:
    """
    student / faculty asks a question in their own college
    """
    db_obj = Question(
        author_id=ctx.user_id,
        college_id=ctx.college_id,
        title=obj_in.title,
        content=obj_in.content,
        category=obj_in.category,
        tags=_clean_tags(obj_in.tags),
        images=[img.model_dump() for img in obj_in.images],
        **_category_details(obj_in.category, obj_in),
    )
    db.add(db_obj)
    db.flush()

    counters.bump_user(db, ctx.user_id, questions_asked=1)
    counters.bump_college(db, ctx.college_id, total_questions=1)

    db.commit()
    db.refresh(db_obj)
    logger.info(f"User {ctx.user_id} created question {db_obj.id} ({db_obj.category})")
    return db_obj


def get_question(db: Session, question_id: int) -> Optional[Question]:
    return db.get(Question, question_id)


def get_question_in_college(
    db: Session,
    *,
    ctx: RequestContext,
    question_id: int,
) -> Question:
    question = get_question(db, question_id)
    if question is None:
        raise NotFoundError("Question not found")
    if question.college_id != ctx.college_id:
        raise ForbiddenError("Access denied. Question not from your college.")
    return question


def view_question(db: Session, *, ctx: RequestContext, question_id: int) -> Question:
    """
    Fetch a question for display; counts a view unless the author is looking.
    """
    question = get_question_in_college(db, ctx=ctx, question_id=question_id)
    if question.author_id != ctx.user_id:
        db.query(Question).filter(Question.id == question.id).update(
            {Question.views: Question.views + 1},
            synchronize_session=False,
        )
        db.commit()
        db.refresh(question)
    return question


def list_questions_for_college(
    db: Session,
    *,
    ctx: RequestContext,
    category: str | None = None,
    search: str | None = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    skip: int = 0,
    limit: int = 10,
) -> List[Question]:
    """
    questions visible to the caller: same college only
    """
    query = db.query(Question).filter(Question.college_id == ctx.college_id)

    if category and category != "all":
        if category not in QUESTION_CATEGORIES:
            raise ValidationError("Invalid category provided")
        query = query.filter(Question.category == category)

    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(
                Question.title.ilike(pattern),
                Question.content.ilike(pattern),
                cast(Question.tags, String).ilike(pattern),
            )
        )

    column = SORTABLE_FIELDS.get(sort_by, Question.created_at)
    ordering = column.asc() if sort_order == "asc" else column.desc()

    return (
        query.order_by(Question.is_pinned.desc(), ordering, Question.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def list_questions_for_author(
    db: Session,
    *,
    ctx: RequestContext,
    skip: int = 0,
    limit: int = 10,
) -> List[Question]:
    return (
        db.query(Question)
        .filter(Question.author_id == ctx.user_id)
        .order_by(Question.created_at.desc(), Question.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def update_question(
    db: Session,
    *,
    ctx: RequestContext,
    question_id: int,
    obj_in: QuestionUpdate,
) -> Question:
    """
    author edits title / content / tags / images / matching details
    """
    db_obj = get_question(db, question_id)
    if db_obj is None:
        raise NotFoundError("Question not found")
    if db_obj.author_id != ctx.user_id:
        raise ForbiddenError("Access denied. You can only update your own questions.")

    update_data = obj_in.model_dump(exclude_unset=True)
    if update_data.get("title"):
        db_obj.title = update_data["title"]
    if update_data.get("content"):
        db_obj.content = update_data["content"]
    if obj_in.tags is not None:
        db_obj.tags = _clean_tags(obj_in.tags)
    if obj_in.images is not None:
        db_obj.images = [img.model_dump() for img in obj_in.images]
    for field, value in _category_details(db_obj.category, obj_in).items():
        setattr(db_obj, field, value)

    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)
    return db_obj
