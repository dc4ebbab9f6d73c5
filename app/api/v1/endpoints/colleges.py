# app/api/v1/endpoints/colleges.py
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.security import get_current_admin, get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.college import CollegeCreate, CollegePublic, CollegeUpdate
from app.services import college_service

router = APIRouter(prefix="/colleges", tags=["colleges"])


@router.get("/", response_model=List[CollegePublic])
def list_colleges(
    db: Session = Depends(get_db),
    search: str | None = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=100),
):
    """
    Public list of active colleges (registration dropdown / autocomplete).
    """
    return college_service.list_colleges(db, search=search, skip=skip, limit=limit)


@router.get("/mine", response_model=CollegePublic)
def get_my_college(current_user: User = Depends(get_current_user)):
    return current_user.college


@router.get("/{college_id}", response_model=CollegePublic)
def get_college(college_id: int, db: Session = Depends(get_db)):
    return college_service.get_college_or_404(db, college_id)


@router.post("/", response_model=CollegePublic, status_code=status.HTTP_201_CREATED)
def create_college(
    obj_in: CollegeCreate,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    return college_service.create_college(db, obj_in=obj_in)


@router.put("/{college_id}", response_model=CollegePublic)
def update_college(
    college_id: int,
    obj_in: CollegeUpdate,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    college = college_service.get_college_or_404(db, college_id)
    return college_service.update_college(db, db_obj=college, obj_in=obj_in)
