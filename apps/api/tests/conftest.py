import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

from datetime import datetime, time, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shopqueue.core.database import Base, get_db
from shopqueue.main import app
from shopqueue.models.ad import Ad
from shopqueue.models.booking import Booking, BookingStatus
from shopqueue.models.customer import Customer
from shopqueue.models.employee import Employee
from shopqueue.models.queue_entry import QueueEntry, QueueStatus
from shopqueue.models.service import Service
from shopqueue.models.shop import Shop
from shopqueue.models.shop_hours import ShopHours
from shopqueue.routers.auth import get_pin_hash
from shopqueue.scheduling.time_utils import utcnow

# Monday; 2030-01-06 is the Sunday before it
FIXED_NOW = datetime(2030, 1, 7, 9, 30, tzinfo=timezone.utc)
MONDAY = "2030-01-07"
SUNDAY = "2030-01-06"


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def parse_ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[utcnow] = lambda: FIXED_NOW
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


class Seed:
    """Writes rows straight to the test database; every helper commits."""

    def __init__(self, db):
        self.db = db
        self._tick = 0

    def _save(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def shop(self, name="Fade Street", open_time=time(9, 0), close_time=time(12, 0), **kwargs) -> Shop:
        shop = self._save(Shop(name=name, suburb="Newtown", **kwargs))
        # Mon-Sat open, Sunday closed
        for dow in range(7):
            closed = dow == 0
            self.db.add(
                ShopHours(
                    shop_id=shop.shop_id,
                    day_of_week=dow,
                    open_time=None if closed else open_time,
                    close_time=None if closed else close_time,
                    is_closed=closed,
                )
            )
        self.db.commit()
        return shop

    def bare_shop(self, name="No Hours", **kwargs) -> Shop:
        return self._save(Shop(name=name, **kwargs))

    def service(self, shop, name="Haircut", duration=30, price=35, is_active=True) -> Service:
        return self._save(
            Service(shop_id=shop.shop_id, name=name, duration_minutes=duration, price=price, is_active=is_active)
        )

    def customer(self, first="Ada", last="Lovelace", phone="0400000001") -> Customer:
        return self._save(Customer(first_name=first, last_name=last, phone=phone))

    def queue_entry(self, shop, service, customer, status=QueueStatus.queued, created_at=None) -> QueueEntry:
        if created_at is None:
            self._tick += 1
            created_at = FIXED_NOW - timedelta(hours=1) + timedelta(minutes=self._tick)
        return self._save(
            QueueEntry(
                shop_id=shop.shop_id,
                customer_id=customer.customer_id,
                service_id=service.service_id if service else None,
                status=status,
                created_at=created_at,
            )
        )

    def booking(self, shop, service, customer, start, minutes=30, status=BookingStatus.booked) -> Booking:
        return self._save(
            Booking(
                shop_id=shop.shop_id,
                service_id=service.service_id,
                customer_id=customer.customer_id,
                start_at=start,
                end_at=start + timedelta(minutes=minutes),
                status=status,
            )
        )

    def employee(self, shop, name="Sam", pin="4321", role="staff", is_active=True) -> Employee:
        return self._save(
            Employee(shop_id=shop.shop_id, name=name, role=role, pin_hash=get_pin_hash(pin), is_active=is_active)
        )

    def ad(self, shop, title="Half price Tuesdays", is_active=True, created_at=None) -> Ad:
        kwargs = {"created_at": created_at} if created_at else {}
        return self._save(Ad(shop_id=shop.shop_id, title=title, is_active=is_active, **kwargs))


@pytest.fixture
def seed(db):
    return Seed(db)
