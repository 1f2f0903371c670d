from decimal import Decimal

import pytest

from kasir import categories, products
from kasir.errors import NotFoundError
from kasir.schemas import CategoryIn, ProductFilter, ProductIn


def test_category_round_trip(db) -> None:
    created = categories.create_category(db, CategoryIn(name="Minuman", description="Kopi dan teh"))
    assert created.id > 0

    fetched = categories.get_category(db, created.id)
    assert (fetched.id, fetched.name, fetched.description) == (created.id, "Minuman", "Kopi dan teh")

    updated = categories.update_category(db, created.id, CategoryIn(name="Makanan"))
    assert updated.id == created.id
    assert categories.get_category(db, created.id).name == "Makanan"
    assert categories.get_category(db, created.id).description is None

    categories.delete_category(db, created.id)
    with pytest.raises(NotFoundError, match=f"Category with ID {created.id} not found"):
        categories.get_category(db, created.id)


def test_category_missing_ids(db) -> None:
    with pytest.raises(NotFoundError):
        categories.update_category(db, 77, CategoryIn(name="x"))
    with pytest.raises(NotFoundError):
        categories.delete_category(db, 77)


def test_deleting_category_leaves_products_pointing_at_it(db, make_category, make_product) -> None:
    drinks = make_category()
    coffee = make_product(category_id=drinks.id)

    categories.delete_category(db, drinks.id)

    db.expire_all()
    assert products.get_product(db, coffee.id).category_id == drinks.id


def test_product_round_trip(db) -> None:
    created = products.create_product(db, ProductIn(name="Kopi", price=Decimal("90000"), stock=5, category_id=1))
    assert created.id > 0

    updated = products.update_product(
        db, created.id, ProductIn(name="Kopi Gula Aren", price=Decimal("95000.50"), stock=7)
    )
    assert updated.id == created.id
    fetched = products.get_product(db, created.id)
    assert fetched.name == "Kopi Gula Aren"
    assert fetched.price == Decimal("95000.50")
    assert fetched.stock == 7
    assert fetched.category_id is None

    products.delete_product(db, created.id)
    with pytest.raises(NotFoundError):
        products.get_product(db, created.id)
    with pytest.raises(NotFoundError):
        products.delete_product(db, created.id)


def test_product_ids_are_unique_and_listing_is_ordered(db, make_product) -> None:
    first = make_product(name="A")
    second = make_product(name="B")
    products.delete_product(db, second.id)
    third = make_product(name="C")

    assert len({first.id, second.id, third.id}) == 3
    assert [p.name for p in products.list_products(db)] == ["A", "C"]


def test_product_filters(db, make_product) -> None:
    make_product(name="Kopi Hitam", price="8000", category_id=1)
    make_product(name="kopi susu", price="12000", category_id=1)
    make_product(name="Teh Manis", price="5000", category_id=2)
    make_product(name="Roti Bakar", price="15000", category_id=3)

    def names(**kwargs) -> list[str]:
        return [p.name for p in products.list_products(db, ProductFilter(**kwargs))]

    assert names() == ["Kopi Hitam", "kopi susu", "Teh Manis", "Roti Bakar"]
    assert names(name="KOPI") == ["Kopi Hitam", "kopi susu"]
    assert names(category_id=1) == ["Kopi Hitam", "kopi susu"]
    assert names(category_id=0) == names()
    assert names(min_price=Decimal("8000"), max_price=Decimal("12000")) == ["Kopi Hitam", "kopi susu"]
    assert names(min_price=Decimal("-1"), max_price=Decimal("0")) == names()
    assert names(name="kopi", category_id=1, max_price=Decimal("10000")) == ["Kopi Hitam"]
    assert names(name="es") == []


def test_name_filter_treats_wildcards_literally(db, make_product) -> None:
    make_product(name="Kopi")
    make_product(name="Teh")
    make_product(name="Diskon 50%")
    make_product(name="paket_hemat")

    def names(name: str) -> list[str]:
        return [p.name for p in products.list_products(db, ProductFilter(name=name))]

    assert names("%") == ["Diskon 50%"]
    assert names("_") == ["paket_hemat"]
    assert names("0%") == ["Diskon 50%"]
    assert names("k_p") == []
