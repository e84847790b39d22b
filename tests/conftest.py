from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from retail_orders.database import Base, create_store_engine, get_db, init_db
from retail_orders.schemas.product import ProductCreate
from retail_orders.schemas.staff import StaffCreate
from retail_orders.services.catalog_service import CatalogService
from retail_orders.services.order_service import OrderService
from retail_orders.services.report_service import ReportService
from retail_orders.services.staff_service import StaffService


@pytest.fixture
def engine():
    """Fresh in-memory store per test, foreign keys enforced"""
    engine = create_store_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = Session(bind=engine, autoflush=False, expire_on_commit=False)
    yield session
    session.close()


@pytest.fixture
def order_service(db):
    return OrderService(db)


@pytest.fixture
def catalog_service(db):
    return CatalogService(db)


@pytest.fixture
def report_service(db):
    return ReportService(db)


@pytest.fixture
def staff(db):
    """Three staff members: Alice (1001), Bob (1002), Carol (1003)"""
    service = StaffService(db)
    return [
        service.create_staff(StaffCreate(first_name=first, last_name=last))
        for first, last in (("Alice", "Archer"), ("Bob", "Baker"), ("Carol", "Cooper"))
    ]


@pytest.fixture
def make_product(catalog_service):
    def _make(description="Widget", price="5.00", stock=10):
        return catalog_service.create_product(
            ProductCreate(description=description, price=Decimal(price), stock=stock)
        )
    return _make


@pytest.fixture
def client(engine):
    from retail_orders.main import app

    def override_get_db():
        session = Session(bind=engine, autoflush=False, expire_on_commit=False)
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
