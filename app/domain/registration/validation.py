"""
참가 등록 입력 검증 (서버 측, 최종 판정)

클라이언트 검증과 같은 규칙을 적용하지만 클라이언트 검증 여부와 무관하게 항상 수행합니다.
"""
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from app.core.exceptions import ValidationError
from app.domain.registration.states import Gender, RaceCategory


EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$")
PHONE_PATTERN = re.compile(r"^\d{10}$")

MIN_AGE = 18
MAX_AGE = 100

# participants 컬럼 길이와 동일
NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255
PAYMENT_TOKEN_MAX_LENGTH = 64

# 결제 위젯이 값을 못 준 경우 클라이언트가 채워 보내던 값
PLACEHOLDER_TOKEN = "N/A"


@dataclass(frozen=True)
class RegistrationData:
    """검증 완료된 등록 요청"""
    name: str
    email: str
    phone: str
    age: int
    gender: str
    category: str
    payment_id: str
    order_id: str
    signature: str


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if not isinstance(value, str):
        return ""
    return value.strip()


def _parse_age(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def validate_registration(payload: Mapping[str, Any]) -> RegistrationData:
    """
    등록 요청 검증

    Args:
        payload: camelCase 키의 요청 데이터 (name, email, phone, age, gender,
            category, paymentId, orderId, signature)

    Returns:
        RegistrationData

    Raises:
        ValidationError: 하나 이상의 필드가 잘못된 경우 (모든 오류 필드 포함)
    """
    errors: List[Dict[str, str]] = []

    def fail(field: str, message: str) -> None:
        errors.append({"field": field, "message": message})

    name = _text(payload.get("name"))
    if not name:
        fail("name", "Name is required")
    elif len(name) > NAME_MAX_LENGTH:
        fail("name", f"Name must be at most {NAME_MAX_LENGTH} characters")

    email = _text(payload.get("email"))
    if len(email) > EMAIL_MAX_LENGTH or not EMAIL_PATTERN.match(email):
        fail("email", "Valid email is required")

    phone = _text(payload.get("phone"))
    if not PHONE_PATTERN.match(phone):
        fail("phone", "Valid phone number is required")

    age = _parse_age(payload.get("age"))
    if age is None or not MIN_AGE <= age <= MAX_AGE:
        fail("age", f"Age must be between {MIN_AGE} and {MAX_AGE}")

    gender = _text(payload.get("gender")).lower()
    if gender not in {g.value for g in Gender}:
        fail("gender", "Gender is required")

    category = _text(payload.get("category")).lower()
    if category not in {c.value for c in RaceCategory}:
        fail("category", "Category is required")

    tokens = {}
    for field, label in (
        ("paymentId", "Payment ID"),
        ("orderId", "Order ID"),
        ("signature", "Signature"),
    ):
        value = _text(payload.get(field))
        if not value or value == PLACEHOLDER_TOKEN:
            fail(field, f"{label} is required")
        elif field != "signature" and len(value) > PAYMENT_TOKEN_MAX_LENGTH:
            fail(field, f"{label} is too long")
        tokens[field] = value

    if errors:
        raise ValidationError(errors)

    return RegistrationData(
        name=name,
        email=email.lower(),
        phone=phone,
        age=age,
        gender=gender,
        category=category,
        payment_id=tokens["paymentId"],
        order_id=tokens["orderId"],
        signature=tokens["signature"],
    )
