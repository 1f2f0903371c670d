from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from .database import translate_store_errors
from .errors import NotFoundError
from .models import Category
from .schemas import CategoryIn


def list_categories(db: Session) -> List[Category]:
    with translate_store_errors(db, "list categories"):
        return list(db.execute(select(Category).order_by(Category.id)).scalars())


def get_category(db: Session, category_id: int) -> Category:
    with translate_store_errors(db, "get category"):
        category = db.get(Category, category_id)
    if category is None:
        raise NotFoundError(f"Category with ID {category_id} not found")
    return category


def create_category(db: Session, data: CategoryIn) -> Category:
    category = Category(name=data.name, description=data.description)
    with translate_store_errors(db, "create category"):
        db.add(category)
        db.commit()
        db.refresh(category)
    return category


def update_category(db: Session, category_id: int, data: CategoryIn) -> Category:
    category = get_category(db, category_id)
    category.name = data.name
    category.description = data.description
    with translate_store_errors(db, "update category"):
        db.commit()
        db.refresh(category)
    return category


def delete_category(db: Session, category_id: int) -> None:
    # products keep their category_id; the reference is not enforced
    category = get_category(db, category_id)
    with translate_store_errors(db, "delete category"):
        db.delete(category)
        db.commit()
