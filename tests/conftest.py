"""
Pytest fixtures for the Kasir API tests.

Every test gets its own SQLite file under ``tmp_path`` so sessions opened by
the test and by the app see committed data through separate connections.
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from kasir.config import load_settings
from kasir.database import Base, create_db_engine, create_session_factory
from kasir.main import create_app
from kasir.models import Category, Product


@pytest.fixture()
def engine(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'kasir-test.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def db(engine):
    session = create_session_factory(engine)()
    yield session
    session.close()


@pytest.fixture()
def client(engine):
    settings = load_settings({"CORS_ORIGINS": "http://testserver"})
    app = create_app(engine, settings)
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def make_product(db):
    def _make(name="Kopi Susu", price="90000", stock=10, category_id=None) -> Product:
        product = Product(name=name, price=Decimal(price), stock=stock, category_id=category_id)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make


@pytest.fixture()
def make_category(db):
    def _make(name="Minuman", description=None) -> Category:
        category = Category(name=name, description=description)
        db.add(category)
        db.commit()
        db.refresh(category)
        return category

    return _make
