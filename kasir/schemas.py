from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, conint, condecimal, constr

from .models import INT_MAX, INT_MIN

# integers that fit the Integer columns
DbInt = conint(ge=INT_MIN, le=INT_MAX)


class CategoryIn(BaseModel):
    name: constr(min_length=1, max_length=255)
    description: Optional[str] = None

    class Config:
        extra = "ignore"


class CategoryOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None

    class Config:
        from_attributes = True


class ProductIn(BaseModel):
    name: constr(min_length=1, max_length=255)
    price: condecimal(ge=0, max_digits=12, decimal_places=2)
    stock: DbInt = 0
    category_id: Optional[DbInt] = None

    class Config:
        # a GET response, id included, can be sent back as a PUT body
        extra = "ignore"


class ProductOut(BaseModel):
    id: int
    name: str
    price: float
    stock: int
    category_id: Optional[int] = None

    class Config:
        from_attributes = True


class ProductFilter(BaseModel):
    """Optional listing predicates; a missing or non-positive value means no filter."""

    name: Optional[str] = None
    category_id: Optional[int] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None


class TransactionItemIn(BaseModel):
    product_id: DbInt
    quantity: DbInt

    class Config:
        extra = "ignore"


class TransactionCreate(BaseModel):
    # emptiness and quantity are checked by the engine so the errors carry its messages
    items: List[TransactionItemIn]

    class Config:
        extra = "forbid"


class TransactionDetailOut(BaseModel):
    id: int
    transaction_id: int
    product_id: int
    quantity: int
    subtotal: int

    class Config:
        from_attributes = True


class TransactionOut(BaseModel):
    id: int
    total_amount: int
    created_at: datetime
    details: List[TransactionDetailOut] = []

    class Config:
        from_attributes = True


class BestSeller(BaseModel):
    name: str = Field(alias="nama")
    quantity_sold: int = Field(alias="qty_terjual")

    class Config:
        populate_by_name = True


class SalesReport(BaseModel):
    total_revenue: int = 0
    total_transaction_count: int = Field(default=0, alias="total_transaksi")
    best_seller: Optional[BestSeller] = Field(default=None, alias="produk_terlaris")
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    class Config:
        populate_by_name = True


class MessageOut(BaseModel):
    message: str


class ErrorOut(BaseModel):
    error: str


class HealthOut(BaseModel):
    status: str
    message: str

    class Config:
        extra = "forbid"
