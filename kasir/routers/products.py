from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from .. import products as product_store
from ..database import get_db
from ..models import INT_MAX, INT_MIN
from ..schemas import ErrorOut, MessageOut, ProductFilter, ProductIn, ProductOut

router = APIRouter(
    prefix="/api/products",
    tags=["products"],
    responses={400: {"model": ErrorOut}, 404: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)


@router.get("", response_model=List[ProductOut])
def list_products(
    name: Optional[str] = Query(None),
    category_id: Optional[int] = Query(None, ge=INT_MIN, le=INT_MAX),
    min_price: Optional[Decimal] = Query(None),
    max_price: Optional[Decimal] = Query(None),
    db: Session = Depends(get_db),
):
    product_filter = ProductFilter(
        name=name,
        category_id=category_id,
        min_price=min_price,
        max_price=max_price,
    )
    return product_store.list_products(db, product_filter)


@router.get("/{product_id}", response_model=ProductOut)
def get_product(
    product_id: int = Path(..., ge=INT_MIN, le=INT_MAX),
    db: Session = Depends(get_db),
):
    return product_store.get_product(db, product_id)


@router.post("", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_product(payload: ProductIn, db: Session = Depends(get_db)):
    return product_store.create_product(db, payload)


@router.put("/{product_id}", response_model=ProductOut)
def update_product(
    payload: ProductIn,
    product_id: int = Path(..., ge=INT_MIN, le=INT_MAX),
    db: Session = Depends(get_db),
):
    return product_store.update_product(db, product_id, payload)


@router.delete("/{product_id}", response_model=MessageOut)
def delete_product(
    product_id: int = Path(..., ge=INT_MIN, le=INT_MAX),
    db: Session = Depends(get_db),
) -> MessageOut:
    product_store.delete_product(db, product_id)
    return MessageOut(message="Product deleted successfully")
