"""
주문 생성 서비스

[처리 과정]
1. 금액 검증 (숫자, 최소 금액 이상)
2. minor unit 변환 (x100, 반올림)
3. 고유 receipt 생성 후 Razorpay 주문 생성
4. 주문 정보 (id, amount, currency) 반환

금액이 잘못된 경우 게이트웨이를 호출하지 않습니다.
"""
import logging
import math
import time
from typing import Any, Dict

from app.core.exceptions import InvalidAmount
from app.infrastructure.payment.razorpay_client import RazorpayClient


logger = logging.getLogger(__name__)


def parse_amount(raw: Any, minimum: float) -> float:
    """
    요청 금액 파싱

    Raises:
        InvalidAmount: 누락, 숫자가 아님, NaN/inf, 최소 금액 미만
    """
    if raw is None or isinstance(raw, bool):
        raise InvalidAmount()
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            raise InvalidAmount()
    try:
        amount = float(raw)
    except (TypeError, ValueError):
        raise InvalidAmount()
    if not math.isfinite(amount) or amount < minimum:
        raise InvalidAmount()
    return amount


def make_receipt() -> str:
    """주문 생성 시각 기반 receipt 토큰"""
    return f"order_{time.time_ns() // 1_000_000}"


class OrderService:
    """Razorpay 주문 생성"""

    def __init__(self, gateway: RazorpayClient, currency: str = "INR", min_amount: float = 1.0):
        self.gateway = gateway
        self.currency = currency
        self.min_amount = min_amount

    async def create_order(self, raw_amount: Any) -> Dict[str, Any]:
        """
        주문 생성

        Args:
            raw_amount: 요청 금액 (major unit)

        Returns:
            {"id", "amount", "currency"}

        Raises:
            InvalidAmount: 금액 오류 (게이트웨이 미호출)
            PaymentGatewayError: 게이트웨이 통신/서비스 오류
        """
        amount = parse_amount(raw_amount, self.min_amount)
        minor_amount = int(round(amount * 100))
        receipt = make_receipt()

        order = await self.gateway.create_order(
            amount=minor_amount,
            currency=self.currency,
            receipt=receipt,
        )
        logger.info(
            f"[CreateOrder] 주문 생성 완료 - order_id: {order.get('id')}, "
            f"amount: {minor_amount}, receipt: {receipt}"
        )
        return {
            "id": order["id"],
            "amount": order.get("amount", minor_amount),
            "currency": order.get("currency", self.currency),
        }
