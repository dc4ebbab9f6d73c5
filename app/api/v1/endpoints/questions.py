# app/api/v1/endpoints/questions.py
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.security import RequestContext, get_request_context
from app.db.session import get_db
from app.schemas.question import (
    QuestionCreate,
    QuestionDetail,
    QuestionPublic,
    QuestionUpdate,
    ResolveRequest,
)
from app.services import question_service, resolution_service

router = APIRouter(prefix="/questions", tags=["questions"])


@router.post("/", response_model=QuestionPublic, status_code=status.HTTP_201_CREATED)
def create_question(
    obj_in: QuestionCreate,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    return question_service.create_question(db, ctx=ctx, obj_in=obj_in)


@router.get("/", response_model=List[QuestionPublic])
def list_questions(
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
    category: str | None = None,
    search: str | None = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    skip: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
):
    """
    Questions of the caller's college, filtered / searched / paged.
    """
    return question_service.list_questions_for_college(
        db,
        ctx=ctx,
        category=category,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
        skip=skip,
        limit=limit,
    )


@router.get("/mine", response_model=List[QuestionPublic])
def list_my_questions(
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
    skip: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
):
    return question_service.list_questions_for_author(db, ctx=ctx, skip=skip, limit=limit)


@router.get("/{question_id}", response_model=QuestionDetail)
def get_question(
    question_id: int,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    return question_service.view_question(db, ctx=ctx, question_id=question_id)


@router.put("/{question_id}", response_model=QuestionPublic)
def update_question(
    question_id: int,
    obj_in: QuestionUpdate,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    return question_service.update_question(db, ctx=ctx, question_id=question_id, obj_in=obj_in)


@router.delete("/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_question(
    question_id: int,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    resolution_service.delete_question(db, ctx, question_id)
    return None


@router.post("/{question_id}/resolve", response_model=QuestionPublic)
def resolve_question(
    question_id: int,
    payload: ResolveRequest | None = None,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    best_answer_id = payload.best_answer_id if payload else None
    return resolution_service.resolve_question(db, ctx, question_id, best_answer_id)


@router.post("/{question_id}/reopen", response_model=QuestionPublic)
def reopen_question(
    question_id: int,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    return resolution_service.reopen_question(db, ctx, question_id)
