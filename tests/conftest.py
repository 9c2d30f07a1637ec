"""
테스트 공통 fixture

- DB: 임시 파일 SQLite (aiosqlite)
- Razorpay / SMTP / Redis: 메모리 fake
"""
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, func, select

from app.application.container import ServiceContainer
from app.core.config import Settings
from app.core.exceptions import NotificationError, PaymentGatewayError
from app.domain.registration.signature import compute_payment_signature
from app.infrastructure.persistence.models.participants import Participant
from app.infrastructure.persistence.session import Base, Database
from app.main import create_app


KEY_ID = "rzp_test_key"
KEY_SECRET = "test_key_secret"
WEBHOOK_SECRET = "test_webhook_secret"


class FakeGateway:
    """Razorpay fake (주문 생성 / 결제 조회 기록)"""

    def __init__(self):
        self.orders: List[Dict[str, Any]] = []
        self.fetched: List[str] = []
        self.payments: Dict[str, str] = {}  # payment_id -> status
        self.order_error: Optional[Exception] = None
        self.fetch_error: Optional[Exception] = None
        self.closed = False

    def capture(self, payment_id: str) -> None:
        self.payments[payment_id] = "captured"

    async def create_order(self, amount: int, currency: str, receipt: str) -> Dict[str, Any]:
        if self.order_error:
            raise self.order_error
        order = {
            "id": f"order_test{len(self.orders) + 1}",
            "amount": amount,
            "currency": currency,
            "receipt": receipt,
            "status": "created",
        }
        self.orders.append(order)
        return order

    async def fetch_payment(self, payment_id: str) -> Dict[str, Any]:
        self.fetched.append(payment_id)
        if self.fetch_error:
            raise self.fetch_error
        return {"id": payment_id, "status": self.payments.get(payment_id, "created")}

    async def close(self):
        self.closed = True


class FakeMailer:
    """SMTP fake"""

    def __init__(self):
        self.sent: List[Dict[str, str]] = []
        self.fail = False

    async def send(self, to: str, subject: str, body: str) -> None:
        if self.fail:
            raise NotificationError("SMTP delivery failed: relay unavailable")
        self.sent.append({"to": to, "subject": subject, "body": body})


class FakeRedis:
    """Redis fake (rate limit 카운터, SET NX)"""

    def __init__(self):
        self.store: Dict[str, str] = {}
        self.counters: Dict[str, int] = {}

    async def connect(self):
        pass

    async def close(self):
        pass

    async def ping(self) -> bool:
        return True

    async def set_if_absent(self, key: str, value: str, ttl_seconds: int) -> bool:
        if key in self.store:
            return False
        self.store[key] = value
        return True

    async def incr_window(self, key: str, window_seconds: int) -> int:
        self.counters[key] = self.counters.get(key, 0) + 1
        return self.counters[key]


def make_settings(tmp_path, **overrides) -> Settings:
    values = dict(
        RAZORPAY_KEY_ID=KEY_ID,
        RAZORPAY_KEY_SECRET=KEY_SECRET,
        RAZORPAY_WEBHOOK_SECRET=WEBHOOK_SECRET,
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'marathon.db'}",
        REDIS_ENABLED=False,
        RATE_LIMIT_ENABLED=False,
        EMAIL_USER="marathon@example.com",
        EMAIL_PASS="secret",
        DEBUG=False,
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_payload(
    payment_id: str = "pay_test1",
    order_id: str = "order_test1",
    secret: str = KEY_SECRET,
    **overrides,
) -> Dict[str, Any]:
    """서명이 포함된 등록 요청 payload"""
    payload = {
        "name": "Arun Kumar",
        "email": "arun@example.com",
        "phone": "9876543210",
        "age": 29,
        "gender": "male",
        "category": "10km",
        "paymentId": payment_id,
        "orderId": order_id,
        "signature": compute_payment_signature(order_id, payment_id, secret),
    }
    payload.update(overrides)
    return payload


def _sync_engine(database: Database):
    # 이벤트 루프 밖에서 같은 SQLite 파일에 접근
    return create_engine(database.url.replace("sqlite+aiosqlite", "sqlite"))


def count_participants(database: Database) -> int:
    engine = _sync_engine(database)
    try:
        with engine.connect() as conn:
            return conn.execute(select(func.count()).select_from(Participant)).scalar_one()
    finally:
        engine.dispose()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def database(settings) -> Database:
    """테이블이 생성된 테스트 DB"""
    db = Database(settings.POSTGRES_URL)
    engine = _sync_engine(db)
    Base.metadata.create_all(engine)
    engine.dispose()
    return db


@pytest.fixture
def container(settings, database, gateway, mailer) -> ServiceContainer:
    return ServiceContainer.build(settings, database=database, gateway=gateway, mailer=mailer)


@pytest.fixture
def client(settings, container):
    """테스트 클라이언트 생성 (lifespan 포함)"""
    app = create_app(settings, container=container)
    with TestClient(app) as test_client:
        yield test_client
