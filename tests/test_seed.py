from sqlalchemy import select

from kasir.models import Category, Product
from kasir.seed import seed_demo_data


def test_seed_is_idempotent(db) -> None:
    assert seed_demo_data(db) is True
    assert seed_demo_data(db) is False

    category = db.scalars(select(Category)).one()
    products = db.scalars(select(Product).order_by(Product.id)).all()
    assert [p.name for p in products] == ["Apple", "Banana", "Orange"]
    assert all(p.category_id == category.id for p in products)
