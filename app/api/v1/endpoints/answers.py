# app/api/v1/endpoints/answers.py
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.security import RequestContext, get_request_context
from app.db.session import get_db
from app.schemas.answer import (
    AnswerCreate,
    AnswerPublic,
    AnswerUpdate,
    BestAnswerResult,
    HelpfulResult,
)
from app.services import answer_service, resolution_service

router = APIRouter(prefix="/answers", tags=["answers"])


@router.get("/mine", response_model=List[AnswerPublic])
def list_my_answers(
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
    skip: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
):
    return answer_service.list_answers_for_author(db, ctx=ctx, skip=skip, limit=limit)


@router.post(
    "/question/{question_id}",
    response_model=AnswerPublic,
    status_code=status.HTTP_201_CREATED,
)
def create_answer(
    question_id: int,
    obj_in: AnswerCreate,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    return answer_service.create_answer(db, ctx=ctx, question_id=question_id, obj_in=obj_in)


@router.get("/question/{question_id}", response_model=List[AnswerPublic])
def list_answers(
    question_id: int,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
    skip: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
):
    return answer_service.list_answers_for_question(
        db, ctx=ctx, question_id=question_id, skip=skip, limit=limit
    )


@router.put("/{answer_id}", response_model=AnswerPublic)
def update_answer(
    answer_id: int,
    obj_in: AnswerUpdate,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    return answer_service.update_answer(db, ctx=ctx, answer_id=answer_id, obj_in=obj_in)


@router.delete("/{answer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_answer(
    answer_id: int,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    resolution_service.delete_answer(db, ctx, answer_id)
    return None


@router.post("/{answer_id}/helpful", response_model=HelpfulResult)
def mark_helpful(
    answer_id: int,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    count = resolution_service.toggle_helpful(db, ctx, answer_id, add=True)
    return HelpfulResult(message="Marked as helpful", helpful_count=count)


@router.delete("/{answer_id}/helpful", response_model=HelpfulResult)
def remove_helpful_mark(
    answer_id: int,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    count = resolution_service.toggle_helpful(db, ctx, answer_id, add=False)
    return HelpfulResult(message="Helpful mark removed", helpful_count=count)


@router.post("/{answer_id}/best", response_model=BestAnswerResult)
def set_best_answer(
    answer_id: int,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    """
    Only the question author can pick the best answer.
    """
    question, answer = resolution_service.assign_best_answer(db, ctx, answer_id)
    return BestAnswerResult(
        message="Answer set as best answer successfully",
        question_id=question.id,
        best_answer_id=answer.id,
        is_resolved=question.is_resolved,
    )
