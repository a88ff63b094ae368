import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret")

from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from stampit.db import Base, get_db
from stampit.main import app
from stampit.models.business import Business
from stampit.models.customer import Customer
from stampit.services import view_cache


# Test database setup
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Fresh schema and session for every test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clear_view_cache():
    view_cache.clear()
    yield
    view_cache.clear()


@pytest.fixture
def client(db_session: Session):
    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def business(db_session: Session) -> Business:
    business = Business(
        business_name="Sunset Salon",
        business_type="Salon",
        visits_required_for_reward=3,
        reward_description="Free haircut",
    )
    db_session.add(business)
    db_session.commit()
    db_session.refresh(business)
    return business


@pytest.fixture
def customer(db_session: Session) -> Customer:
    customer = Customer(phone="555-0100", name="Ada")
    db_session.add(customer)
    db_session.commit()
    db_session.refresh(customer)
    return customer


@pytest.fixture
def business_token(client: TestClient) -> str:
    response = client.post(
        "/auth/business/sign-up",
        json={
            "email": "owner@example.com",
            "password": "secret123",
            "business_name": "Corner Cafe",
            "business_type": "Cafe",
        },
    )
    assert response.status_code == 200, response.text
    return response.json()["access_token"]


@pytest.fixture
def customer_token(client: TestClient) -> str:
    response = client.post("/auth/customer", json={"phone": "555-0199", "name": "Grace"})
    assert response.status_code == 200, response.text
    return response.json()["access_token"]
