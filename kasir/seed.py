import logging
from decimal import Decimal
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from .models import Category, Product

logger = logging.getLogger(__name__)

DEMO_CATEGORY = {"name": "Buah", "description": "Buah segar"}

DEMO_PRODUCTS: Iterable[dict[str, object]] = (
    {"name": "Apple", "price": Decimal("0.5"), "stock": 100},
    {"name": "Banana", "price": Decimal("0.3"), "stock": 150},
    {"name": "Orange", "price": Decimal("0.7"), "stock": 200},
)


def seed_demo_data(session: Session) -> bool:
    """
    Insert the demo category and products when they are missing.
    Existing rows are matched by name and left untouched. Returns True when
    anything was inserted.
    """
    inserted = False

    category = session.scalars(select(Category).where(Category.name == DEMO_CATEGORY["name"])).first()
    if category is None:
        category = Category(**DEMO_CATEGORY)
        session.add(category)
        session.flush()
        inserted = True

    existing = set(session.scalars(select(Product.name)))
    for row in DEMO_PRODUCTS:
        if row["name"] not in existing:
            session.add(Product(category_id=category.id, **row))
            inserted = True

    if inserted:
        session.commit()
        logger.info("Seeded demo catalog")
    return inserted
