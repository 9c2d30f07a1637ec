"""
참가 신청 클라이언트

[역할]
- 신청 폼 클라이언트 검증 (서버 검증과 동일한 규칙, 왕복 횟수 절감용)
- 결제 키 조회 / 주문 생성
- 결제 위젯 옵션 구성
- 결제 결과(성공/실패)를 받아 서버 등록 요청 전달

[결제 위젯 결과]
- CheckoutSuccess: payment_id, order_id, signature 를 그대로 서버에 전달
- CheckoutFailure: 서버를 호출하지 않고 실패 메시지 반환
- payment_id 가 없는 성공 결과는 취소로 간주
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import httpx
from pydantic import BaseModel, Field, field_validator

from app.domain.registration.states import Gender, RaceCategory


logger = logging.getLogger(__name__)

PAYMENT_CANCELLED_MESSAGE = "Payment failed or cancelled. Please try again."
RETRY_MESSAGE = "An error occurred. Please try again later."
SUCCESS_MESSAGE = "Registration and Payment Successful!"
REGISTRATION_FEE = 1  # major unit (INR)


class RegistrationForm(BaseModel):
    """참가 신청 폼 (클라이언트 검증)"""

    name: str = Field(..., pattern=r"^[A-Za-z][A-Za-z .'-]{1,99}$")
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$")
    phone: str = Field(..., pattern=r"^[6-9]\d{9}$")
    age: int = Field(..., ge=18, le=100)
    gender: Gender
    category: RaceCategory

    @field_validator("name", "email", "phone", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value


@dataclass(frozen=True)
class CheckoutSuccess:
    """결제 위젯 성공 결과"""
    payment_id: Optional[str]
    order_id: Optional[str]
    signature: Optional[str]


@dataclass(frozen=True)
class CheckoutFailure:
    """결제 위젯 실패/취소 결과"""
    reason: str


CheckoutOutcome = Union[CheckoutSuccess, CheckoutFailure]


@dataclass
class RegistrationOutcome:
    """클라이언트 요청 최종 상태"""
    success: bool
    message: str
    chest_number: Optional[int] = None


class CheckoutUnavailable(Exception):
    """결제 준비(키 조회/주문 생성) 실패"""
    pass


class RegistrationClient:
    """등록 API 클라이언트"""

    def __init__(
        self,
        base_url: str,
        event_name: str = "Polo Marathon",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.event_name = event_name
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def close(self):
        await self._client.aclose()

    async def __aenter__(self) -> "RegistrationClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def fetch_key(self) -> str:
        """결제 위젯 키 조회"""
        response = await self._client.get("/get-razorpay-key")
        response.raise_for_status()
        return response.json()["key"]

    async def create_order(self, amount: float) -> Dict[str, Any]:
        """주문 생성 (id, amount, currency)"""
        response = await self._client.post("/createOrder", json={"amount": amount})
        response.raise_for_status()
        order = response.json()
        if not order.get("id"):
            raise ValueError("Error creating order. Please try again.")
        return order

    def checkout_options(
        self,
        key: str,
        order: Dict[str, Any],
        form: RegistrationForm,
    ) -> Dict[str, Any]:
        """결제 위젯 옵션"""
        return {
            "key": key,
            "amount": order["amount"],
            "currency": order.get("currency", "INR"),
            "name": self.event_name,
            "description": "Marathon Registration Fee",
            "order_id": order["id"],
            "prefill": {
                "name": form.name,
                "email": form.email,
                "contact": form.phone,
            },
            "theme": {"color": "#3399cc"},
        }

    async def start_checkout(
        self,
        form: RegistrationForm,
        amount: float = REGISTRATION_FEE,
    ) -> Dict[str, Any]:
        """
        결제 준비: 키 조회 → 주문 생성 → 위젯 옵션

        Raises:
            CheckoutUnavailable: 통신 실패 또는 서버 오류
        """
        try:
            key = await self.fetch_key()
            order = await self.create_order(amount)
        except (httpx.HTTPError, ValueError, KeyError) as e:
            logger.error(f"[Client] 결제 준비 실패: {str(e)}")
            raise CheckoutUnavailable(RETRY_MESSAGE) from e
        return self.checkout_options(key, order, form)

    async def complete(
        self,
        form: RegistrationForm,
        outcome: CheckoutOutcome,
    ) -> RegistrationOutcome:
        """
        결제 결과 처리

        Returns:
            RegistrationOutcome (서버 메시지 또는 재시도 안내 포함)
        """
        if isinstance(outcome, CheckoutFailure):
            logger.info(f"[Client] 결제 실패 - reason: {outcome.reason}")
            return RegistrationOutcome(False, f"Payment failed: {outcome.reason}")

        if not outcome.payment_id:
            return RegistrationOutcome(False, PAYMENT_CANCELLED_MESSAGE)

        payload = form.model_dump(mode="json")
        payload.update({
            "paymentId": outcome.payment_id,
            "orderId": outcome.order_id,
            "signature": outcome.signature,
        })

        try:
            response = await self._client.post("/api/auth/register", json=payload)
        except httpx.HTTPError as e:
            logger.error(f"[Client] 등록 요청 실패: {str(e)}")
            return RegistrationOutcome(False, RETRY_MESSAGE)

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.is_success:
            return RegistrationOutcome(True, SUCCESS_MESSAGE, chest_number=body.get("chestNumber"))

        message = body.get("error_message") or "Unknown error"
        return RegistrationOutcome(False, f"Registration failed: {message}")
