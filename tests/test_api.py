"""
API 엔드포인트 테스트
"""
import pytest
from fastapi.testclient import TestClient

from app.application.container import ServiceContainer
from app.core.exceptions import PaymentGatewayError
from app.main import create_app

from tests.conftest import KEY_ID, FakeRedis, count_participants, make_payload, make_settings


class TestHealthEndpoints:
    """헬스 체크 엔드포인트 테스트"""

    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["components"] == {"database": True}
        assert "timestamp" in data

    def test_info(self, client):
        response = client.get("/info")
        assert response.status_code == 200
        assert response.json()["name"] == "Polo Marathon Registration"


class TestPaymentEndpoints:
    """결제 키 / 주문 생성"""

    def test_get_key(self, client):
        response = client.get("/get-razorpay-key")
        assert response.status_code == 200
        assert response.json() == {"key": KEY_ID}

    def test_create_order(self, client, gateway):
        response = client.post("/createOrder", json={"amount": 1})
        assert response.status_code == 201
        assert response.json() == {"id": "order_test1", "amount": 100, "currency": "INR"}
        assert gateway.orders[0]["receipt"].startswith("order_")

    @pytest.mark.parametrize("body", [
        {"amount": 0},
        {"amount": -5},
        {"amount": "abc"},
        {"amount": True},
        {},
    ])
    def test_create_order_invalid_amount(self, client, gateway, body):
        response = client.post("/createOrder", json=body)
        assert response.status_code == 400
        data = response.json()
        assert data["error"] is True
        assert data["error_code"] == "INVALID_AMOUNT"
        assert data["error_message"] == "Valid amount required"
        assert gateway.orders == []

    def test_create_order_gateway_error(self, client, gateway):
        gateway.order_error = PaymentGatewayError(
            "Payment gateway timed out", {"reason": "timeout"}
        )
        response = client.post("/createOrder", json={"amount": 1})
        assert response.status_code == 500
        data = response.json()
        assert data["error_code"] == "PAYMENT_GATEWAY_ERROR"
        assert data["details"] is None


class TestRegisterEndpoint:
    """POST /api/auth/register"""

    def test_register_success(self, client, gateway, mailer, database):
        gateway.capture("pay_test1")

        response = client.post("/api/auth/register", json=make_payload())

        assert response.status_code == 201
        assert response.json() == {
            "msg": "User registered successfully after payment.",
            "chestNumber": 1000,
        }
        assert len(mailer.sent) == 1
        assert count_participants(database) == 1

    def test_register_missing_phone(self, client, gateway, database):
        payload = make_payload()
        del payload["phone"]

        response = client.post("/api/auth/register", json=payload)

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert data["details"]["errors"][0]["field"] == "phone"
        assert gateway.fetched == []
        assert count_participants(database) == 0

    def test_register_name_too_long(self, client, gateway, mailer, database):
        gateway.capture("pay_test1")

        response = client.post("/api/auth/register", json=make_payload(name="A" * 150))

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert data["details"]["errors"][0]["field"] == "name"
        assert gateway.fetched == []
        assert mailer.sent == []
        assert count_participants(database) == 0

    def test_register_bad_signature(self, client, gateway, mailer, database):
        gateway.capture("pay_test1")

        response = client.post("/api/auth/register", json=make_payload(secret="tampered"))

        assert response.status_code == 400
        assert response.json()["error_code"] == "SIGNATURE_MISMATCH"
        assert gateway.fetched == []
        assert mailer.sent == []
        assert count_participants(database) == 0

    def test_register_payment_failed(self, client, gateway, mailer, database):
        gateway.payments["pay_test1"] = "failed"

        response = client.post("/api/auth/register", json=make_payload())

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "PAYMENT_NOT_CAPTURED"
        assert data["error_message"] == "Payment verification failed: Payment not captured."
        assert mailer.sent == []
        assert count_participants(database) == 0

    def test_register_mail_outage_same_response(self, client, gateway, mailer, database):
        gateway.capture("pay_test1")
        mailer.fail = True

        response = client.post("/api/auth/register", json=make_payload())

        assert response.status_code == 201
        assert response.json() == {
            "msg": "User registered successfully after payment.",
            "chestNumber": 1000,
        }
        assert count_participants(database) == 1

    def test_register_duplicate_payment(self, client, gateway, database):
        gateway.capture("pay_test1")
        assert client.post("/api/auth/register", json=make_payload()).status_code == 201

        response = client.post("/api/auth/register", json=make_payload())

        assert response.status_code == 400
        assert response.json()["error_code"] == "DUPLICATE_PAYMENT"
        assert count_participants(database) == 1

    def test_register_sequential_chest_numbers(self, client, gateway):
        numbers = []
        for i in range(1, 4):
            gateway.capture(f"pay_{i}")
            response = client.post(
                "/api/auth/register",
                json=make_payload(payment_id=f"pay_{i}", order_id=f"order_{i}"),
            )
            numbers.append(response.json()["chestNumber"])
        assert numbers == [1000, 1001, 1002]

    def test_malformed_json(self, client):
        response = client.post(
            "/api/auth/register",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"


class TestParticipantLookup:
    """GET /api/user/{email}"""

    def test_lookup_found(self, client, gateway):
        gateway.capture("pay_test1")
        client.post("/api/auth/register", json=make_payload())

        response = client.get("/api/user/Arun@Example.com")

        assert response.status_code == 200
        data = response.json()
        assert data["chestNumber"] == 1000
        assert data["category"] == "10km"
        assert data["email"] == "arun@example.com"

    def test_lookup_not_found(self, client):
        response = client.get("/api/user/nobody@example.com")
        assert response.status_code == 404
        assert response.json()["error_code"] == "PARTICIPANT_NOT_FOUND"


class TestRateLimit:

    def test_limit_exceeded(self, tmp_path, database, gateway, mailer):
        settings = make_settings(tmp_path, RATE_LIMIT_ENABLED=True, RATE_LIMIT_MAX_CALLS=2)
        container = ServiceContainer.build(
            settings, database=database, gateway=gateway, mailer=mailer, redis=FakeRedis()
        )

        with TestClient(create_app(settings, container=container)) as test_client:
            first = test_client.get("/get-razorpay-key")
            second = test_client.get("/get-razorpay-key")
            third = test_client.get("/get-razorpay-key")
            health = test_client.get("/health")

        assert first.status_code == 200
        assert first.headers["RateLimit-Remaining"] == "1"
        assert second.status_code == 200
        assert third.status_code == 429
        assert third.json()["error_code"] == "RATE_LIMITED"
        assert health.status_code == 200

    def test_no_redis_no_limit(self, tmp_path, database, gateway, mailer):
        settings = make_settings(tmp_path, RATE_LIMIT_ENABLED=True, RATE_LIMIT_MAX_CALLS=1)
        container = ServiceContainer.build(settings, database=database, gateway=gateway, mailer=mailer)

        with TestClient(create_app(settings, container=container)) as test_client:
            responses = [test_client.get("/get-razorpay-key") for _ in range(3)]

        assert all(r.status_code == 200 for r in responses)


class TestCors:
    """CORS origin 설정"""

    def test_configured_origin_allowed(self, client):
        response = client.get("/get-razorpay-key", headers={"Origin": "http://localhost:3000"})
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"

    def test_unknown_origin_not_allowed(self, client):
        response = client.get("/get-razorpay-key", headers={"Origin": "http://evil.test"})
        assert "access-control-allow-origin" not in response.headers

    def test_request_without_origin(self, client):
        response = client.get("/get-razorpay-key")
        assert response.status_code == 200

    def test_null_origin_when_configured(self, tmp_path, database, gateway, mailer):
        settings = make_settings(
            tmp_path, CORS_ALLOWED_ORIGINS=["http://localhost:3000", "null"]
        )
        container = ServiceContainer.build(settings, database=database, gateway=gateway, mailer=mailer)

        with TestClient(create_app(settings, container=container)) as test_client:
            response = test_client.get("/get-razorpay-key", headers={"Origin": "null"})

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "null"
