from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from .. import categories as category_store
from ..database import get_db
from ..models import INT_MAX, INT_MIN
from ..schemas import CategoryIn, CategoryOut, ErrorOut, MessageOut

router = APIRouter(
    prefix="/api/categories",
    tags=["categories"],
    responses={400: {"model": ErrorOut}, 404: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)


@router.get("", response_model=List[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return category_store.list_categories(db)


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(
    category_id: int = Path(..., ge=INT_MIN, le=INT_MAX),
    db: Session = Depends(get_db),
):
    return category_store.get_category(db, category_id)


@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(payload: CategoryIn, db: Session = Depends(get_db)):
    return category_store.create_category(db, payload)


@router.put("/{category_id}", response_model=CategoryOut)
def update_category(
    payload: CategoryIn,
    category_id: int = Path(..., ge=INT_MIN, le=INT_MAX),
    db: Session = Depends(get_db),
):
    return category_store.update_category(db, category_id, payload)


@router.delete("/{category_id}", response_model=MessageOut)
def delete_category(
    category_id: int = Path(..., ge=INT_MIN, le=INT_MAX),
    db: Session = Depends(get_db),
) -> MessageOut:
    category_store.delete_category(db, category_id)
    return MessageOut(message="Category deleted successfully")
