"""
Pytest Configuration and Fixtures
"""

import os
from datetime import date, datetime, timedelta
from typing import Generator

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("FLAG_STORE_PATH", "")

import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import crm.database as crm_database
from crm.database import Base, get_db
from crm.dependencies.repositories import get_flag_store
from crm.main import app
from crm.models.customer import Customer
from crm.schemas.enquiry import Assignee, EnquiryCreate, EnquiryResponse, EnquiryStatus, Segment
from crm.services.customer_repository import CustomerRepository
from crm.services.enquiry_repository import EnquiryRepository
from crm.services.flag_store import LocalFlagStore
from crm.services.store_gateway import TableGateway
from crm.services.task_repository import TaskRepository

fake = Faker()

# One in-memory database shared by every connection
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Startup's init_db() creates tables on this engine too
crm_database._engine = engine


# Fixed clock: Monday 2026-10-19, 10:30 local time
NOW = datetime(2026, 10, 19, 10, 30)
TODAY = NOW.date()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Fresh schema for every test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def gateway(db: Session) -> TableGateway:
    return TableGateway(db)


@pytest.fixture
def flag_store() -> LocalFlagStore:
    return LocalFlagStore()


@pytest.fixture
def customer_repository(gateway: TableGateway) -> CustomerRepository:
    return CustomerRepository(gateway)


@pytest.fixture
def enquiry_repository(
    gateway: TableGateway, customer_repository: CustomerRepository, flag_store: LocalFlagStore
) -> EnquiryRepository:
    return EnquiryRepository(gateway, customer_repository, flag_store)


@pytest.fixture
def task_repository(gateway: TableGateway, enquiry_repository: EnquiryRepository) -> TaskRepository:
    return TaskRepository(gateway, enquiry_repository)


@pytest.fixture(scope="function")
def client(db: Session, flag_store: LocalFlagStore) -> Generator[TestClient, None, None]:
    """Create a test client with database override"""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_flag_store] = lambda: flag_store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def test_customer(db: Session) -> Customer:
    """Create a test customer with no meeting person on record"""
    customer = Customer(
        name="Sharma Agro Traders",
        contact_number="9876543210",
        location="Nashik",
        meeting_person=None,
    )
    db.add(customer)
    db.commit()
    db.refresh(customer)
    return customer


def make_draft(**override) -> EnquiryCreate:
    """Build a valid enquiry draft with random customer details"""
    data = {
        "date": TODAY,
        "segment": Segment.AGRI,
        "customer_name": fake.company(),
        "contact_number": fake.numerify("9#########"),
        "location": fake.city(),
        "requirement_details": fake.sentence(),
        "status": EnquiryStatus.LEAD,
        "remarks": None,
        "assigned_to": Assignee.AMIT,
    }
    data.update(override)
    return EnquiryCreate(**data)


def make_enquiry(**override) -> EnquiryResponse:
    """Build an in-memory decoded enquiry for the pure aggregation functions"""
    data = {
        "id": fake.uuid4(cast_to=None),
        "customer_id": None,
        "date": TODAY,
        "segment": Segment.AGRI,
        "customer_name": fake.company(),
        "contact_number": fake.numerify("9#########"),
        "status": EnquiryStatus.LEAD,
        "assigned_to": Assignee.AMIT,
        "created_at": NOW,
    }
    data.update(override)
    return EnquiryResponse(**data)


def days_ago(days: int) -> date:
    return TODAY - timedelta(days=days)


def enquiry_payload(**override) -> dict:
    """JSON body for POST /enquiries/ dated today on the real clock"""
    data = {
        "date": date.today().isoformat(),
        "segment": "Agri",
        "customer_name": fake.company(),
        "contact_number": fake.numerify("9#########"),
        "location": fake.city(),
        "status": "Lead",
        "assigned_to": "Amit",
    }
    data.update(override)
    return data
