from datetime import datetime, timezone
from decimal import Decimal

import fakeredis
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import storefront.data.models  # noqa: F401
from storefront.api.deps import get_cart_store, get_notifier
from storefront.data.database import Base, get_db
from storefront.data.models import (
    CategoryModel,
    OrderModel,
    ProductModel,
    ProfileModel,
    PromotionModel,
    UserRoleModel,
)
from storefront.main import create_app
from storefront.services.cart_store import CartStore
from storefront.services.notification_service import NotificationService


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def store():
    return CartStore(client=fakeredis.FakeRedis(decode_responses=True))


@pytest.fixture()
def notifier():
    # no webhook configured
    return NotificationService(url="", secret="", timeout=1, use_queue=False)


@pytest.fixture()
def client(session_factory, store, notifier):
    app = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cart_store] = lambda: store
    app.dependency_overrides[get_notifier] = lambda: notifier
    return TestClient(app)


@pytest.fixture()
def snacks(db):
    category = CategoryModel(name="Lanches", slug="lanches", type="snacks")
    db.add(category)
    db.commit()
    return category


@pytest.fixture()
def market(db):
    category = CategoryModel(name="Hortifruti", slug="hortifruti", type="supermarket")
    db.add(category)
    db.commit()
    return category


@pytest.fixture()
def hotdog(db, snacks):
    product = ProductModel(
        name="Cachorro-Quente",
        price=Decimal("12.75"),
        unit="un",
        stock=20,
        category_id=snacks.id,
        ingredients=["Pão", "Salsicha", "Molho", "Batata Palha"],
    )
    db.add(product)
    db.commit()
    return product


@pytest.fixture()
def banana(db, market):
    product = ProductModel(name="Banana Prata", price=Decimal("6.99"), unit="kg", stock=5, category_id=market.id)
    db.add(product)
    db.commit()
    return product


@pytest.fixture()
def bundle(db, banana):
    promotion = PromotionModel(
        title="Leve 3",
        product_id=banana.id,
        special_price=Decimal("15.00"),
        quantity=3,
        is_active=True,
    )
    db.add(promotion)
    db.commit()
    return promotion


@pytest.fixture()
def discount(db):
    promotion = PromotionModel(title="Semana do Hortifruti", discount_percentage=15, is_active=True)
    db.add(promotion)
    db.commit()
    return promotion


@pytest.fixture()
def customer(db):
    profile = ProfileModel(id="user-1", full_name="Maria Souza", phone="11999990000", approved=True)
    db.add(profile)
    db.commit()
    return profile


@pytest.fixture()
def admin(db):
    profile = ProfileModel(id="admin-1", full_name="Admin", approved=True)
    db.add(profile)
    db.add(UserRoleModel(user_id="admin-1", role="admin"))
    db.commit()
    return profile


@pytest.fixture()
def admin_headers(admin):
    return {"X-User-Id": admin.id, "X-User-Email": "admin@loja.com"}


@pytest.fixture()
def make_order(db):
    def _make(**overrides):
        data = dict(
            customer_name="Maria Souza",
            customer_phone="11999990000",
            customer_email="maria@example.com",
            customer_address="Rua A, 10",
            order_type="delivery",
            payment_method="pix",
            status="pending",
            total=Decimal("10.00"),
            created_at=datetime.now(timezone.utc),
        )
        data.update(overrides)
        order = OrderModel(**data)
        db.add(order)
        db.commit()
        return order

    return _make
