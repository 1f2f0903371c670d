from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from .. import transactions as engine
from ..database import get_db
from ..models import INT_MAX, INT_MIN
from ..schemas import ErrorOut, MessageOut, TransactionCreate, TransactionOut

router = APIRouter(
    prefix="/api/transactions",
    tags=["transactions"],
    responses={400: {"model": ErrorOut}, 404: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)


@router.get("", response_model=List[TransactionOut])
def list_transactions(db: Session = Depends(get_db)):
    return engine.list_transactions(db)


@router.get("/{transaction_id}", response_model=TransactionOut)
def get_transaction(
    transaction_id: int = Path(..., ge=INT_MIN, le=INT_MAX),
    db: Session = Depends(get_db),
):
    return engine.get_transaction(db, transaction_id)


@router.post("", response_model=TransactionOut, status_code=status.HTTP_201_CREATED)
def create_transaction(payload: TransactionCreate, db: Session = Depends(get_db)):
    return engine.create_transaction(db, payload.items)


@router.delete("/{transaction_id}", response_model=MessageOut)
def delete_transaction(
    transaction_id: int = Path(..., ge=INT_MIN, le=INT_MAX),
    db: Session = Depends(get_db),
) -> MessageOut:
    engine.delete_transaction(db, transaction_id)
    return MessageOut(message="Transaction deleted successfully")
