"""
등록 입력 검증 테스트
"""
import pytest

from app.core.exceptions import ValidationError
from app.domain.registration.validation import (
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PAYMENT_TOKEN_MAX_LENGTH,
    validate_registration,
)
from app.infrastructure.persistence.models.participants import Participant

from tests.conftest import make_payload


class TestValidateRegistration:

    def test_valid_payload(self):
        data = validate_registration(make_payload(email=" Arun@Example.com "))
        assert data.name == "Arun Kumar"
        assert data.email == "arun@example.com"
        assert data.age == 29
        assert data.payment_id == "pay_test1"

    def test_numeric_phone_and_string_age_accepted(self):
        data = validate_registration(make_payload(phone=9876543210, age="40"))
        assert data.phone == "9876543210"
        assert data.age == 40

    def test_missing_phone_names_field(self):
        payload = make_payload()
        del payload["phone"]
        with pytest.raises(ValidationError) as exc_info:
            validate_registration(payload)
        assert exc_info.value.fields == ["phone"]
        assert exc_info.value.status_code == 400

    @pytest.mark.parametrize("field,value", [
        ("name", "   "),
        ("email", "not-an-email"),
        ("phone", "98765"),
        ("phone", "98765432101"),
        ("phone", "98765abcde"),
        ("age", 17),
        ("age", 101),
        ("age", "abc"),
        ("age", True),
        ("gender", ""),
        ("category", "42km"),
        ("paymentId", ""),
        ("paymentId", "N/A"),
        ("orderId", None),
        ("signature", "  "),
    ])
    def test_invalid_field(self, field, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_registration(make_payload(**{field: value}))
        assert field in exc_info.value.fields

    def test_reports_all_invalid_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_registration({})
        assert set(exc_info.value.fields) == {
            "name", "email", "phone", "age", "gender", "category",
            "paymentId", "orderId", "signature",
        }

    def test_name_longer_than_column(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_registration(make_payload(name="A" * (NAME_MAX_LENGTH + 1)))
        assert exc_info.value.fields == ["name"]

    def test_name_at_column_limit(self):
        data = validate_registration(make_payload(name="A" * NAME_MAX_LENGTH))
        assert len(data.name) == NAME_MAX_LENGTH

    def test_email_longer_than_column(self):
        email = "b" * EMAIL_MAX_LENGTH + "@example.com"
        with pytest.raises(ValidationError) as exc_info:
            validate_registration(make_payload(email=email))
        assert exc_info.value.fields == ["email"]

    @pytest.mark.parametrize("field", ["paymentId", "orderId"])
    def test_payment_token_longer_than_column(self, field):
        payload = make_payload()
        payload[field] = "x" * (PAYMENT_TOKEN_MAX_LENGTH + 1)
        with pytest.raises(ValidationError) as exc_info:
            validate_registration(payload)
        assert field in exc_info.value.fields

    def test_limits_match_table_columns(self):
        columns = Participant.__table__.c
        assert columns["name"].type.length == NAME_MAX_LENGTH
        assert columns["email"].type.length == EMAIL_MAX_LENGTH
        assert columns["payment_id"].type.length == PAYMENT_TOKEN_MAX_LENGTH
        assert columns["order_id"].type.length == PAYMENT_TOKEN_MAX_LENGTH
