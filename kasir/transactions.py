import logging
import math
from typing import Dict, List, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from .database import translate_store_errors
from .errors import NotFoundError, UnknownItemError, ValidationError
from .models import BIGINT_MAX, Product, Transaction, TransactionDetail
from .schemas import TransactionItemIn

logger = logging.getLogger(__name__)


def unit_price(product: Product) -> int:
    """
    Price used for subtotals: the product price truncated to a whole currency unit.

    Totals are stored as integers, so the fractional part of the price is dropped
    before multiplying by the quantity.
    """
    return math.floor(product.price)


def create_transaction(db: Session, items: Sequence[TransactionItemIn]) -> Transaction:
    """
    Price the requested items and persist the transaction with its details.

    Items are validated in input order. Nothing is written unless every item is
    valid, and the parent row and all detail rows are committed together.
    """
    if not items:
        raise ValidationError("transaction must have at least one item")

    product_ids = {item.product_id for item in items}
    with translate_store_errors(db, "load products"):
        stmt = select(Product).where(Product.id.in_(product_ids))
        products: Dict[int, Product] = {product.id: product for product in db.execute(stmt).scalars()}

    total_amount = 0
    details: List[TransactionDetail] = []
    for item in items:
        product = products.get(item.product_id)
        if product is None:
            raise UnknownItemError(f"product with ID {item.product_id} not found")
        if item.quantity <= 0:
            raise ValidationError("quantity must be greater than 0")

        subtotal = unit_price(product) * item.quantity
        total_amount += subtotal
        if total_amount > BIGINT_MAX:
            raise ValidationError("transaction total is too large")
        details.append(
            TransactionDetail(
                product_id=product.id,
                quantity=item.quantity,
                subtotal=subtotal,
            )
        )

    transaction = Transaction(total_amount=total_amount)
    transaction.details.extend(details)

    with translate_store_errors(db, "create transaction"):
        db.add(transaction)
        db.flush()
        db.commit()
        db.refresh(transaction)

    logger.info(
        "Recorded transaction %s lines=%d total_amount=%s",
        transaction.id,
        len(transaction.details),
        transaction.total_amount,
    )
    return transaction


def list_transactions(db: Session) -> List[Transaction]:
    stmt = (
        select(Transaction)
        .options(selectinload(Transaction.details))
        .order_by(Transaction.created_at.desc(), Transaction.id.desc())
    )
    with translate_store_errors(db, "list transactions"):
        return list(db.execute(stmt).scalars())


def get_transaction(db: Session, transaction_id: int) -> Transaction:
    stmt = (
        select(Transaction)
        .options(selectinload(Transaction.details))
        .where(Transaction.id == transaction_id)
    )
    with translate_store_errors(db, "get transaction"):
        transaction = db.execute(stmt).scalar_one_or_none()
    if transaction is None:
        raise NotFoundError(f"Transaction with ID {transaction_id} not found")
    return transaction


def delete_transaction(db: Session, transaction_id: int) -> None:
    """Delete a transaction; its details go with it through the ORM cascade."""
    transaction = get_transaction(db, transaction_id)
    with translate_store_errors(db, "delete transaction"):
        db.delete(transaction)
        db.commit()
    logger.info("Deleted transaction %s", transaction_id)
