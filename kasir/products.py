import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from .database import translate_store_errors
from .errors import NotFoundError
from .models import Product
from .schemas import ProductFilter, ProductIn

logger = logging.getLogger(__name__)


def _not_found(product_id: int) -> NotFoundError:
    return NotFoundError(f"Product with ID {product_id} not found")


def list_products(db: Session, product_filter: Optional[ProductFilter] = None) -> List[Product]:
    """
    Return products matching every supplied predicate, ordered by id.

    ``name`` is a case-insensitive literal substring match. ``category_id``,
    ``min_price`` and ``max_price`` are ignored when missing or not positive;
    price bounds are inclusive.
    """
    stmt = select(Product)
    if product_filter is not None:
        if product_filter.name:
            stmt = stmt.where(Product.name.icontains(product_filter.name, autoescape=True))
        if product_filter.category_id is not None and product_filter.category_id > 0:
            stmt = stmt.where(Product.category_id == product_filter.category_id)
        if product_filter.min_price is not None and product_filter.min_price > 0:
            stmt = stmt.where(Product.price >= product_filter.min_price)
        if product_filter.max_price is not None and product_filter.max_price > 0:
            stmt = stmt.where(Product.price <= product_filter.max_price)
    stmt = stmt.order_by(Product.id)

    with translate_store_errors(db, "list products"):
        return list(db.execute(stmt).scalars())


def get_product(db: Session, product_id: int) -> Product:
    with translate_store_errors(db, "get product"):
        product = db.get(Product, product_id)
    if product is None:
        raise _not_found(product_id)
    return product


def create_product(db: Session, data: ProductIn) -> Product:
    product = Product(
        name=data.name,
        price=data.price,
        stock=data.stock,
        category_id=data.category_id,
    )
    with translate_store_errors(db, "create product"):
        db.add(product)
        db.commit()
        db.refresh(product)
    logger.info("Created product %s (%s)", product.id, product.name)
    return product


def update_product(db: Session, product_id: int, data: ProductIn) -> Product:
    product = get_product(db, product_id)
    product.name = data.name
    product.price = data.price
    product.stock = data.stock
    product.category_id = data.category_id
    with translate_store_errors(db, "update product"):
        db.commit()
        db.refresh(product)
    return product


def delete_product(db: Session, product_id: int) -> None:
    product = get_product(db, product_id)
    with translate_store_errors(db, "delete product"):
        db.delete(product)
        db.commit()
    logger.info("Deleted product %s", product_id)
