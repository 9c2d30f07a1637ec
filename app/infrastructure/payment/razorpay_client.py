"""
Razorpay REST API 클라이언트

[역할]
- 주문 생성: POST /orders
- 결제 조회: GET /payments/{payment_id}

[참고]
- HTTP Basic 인증 (key_id / key_secret)
- 모든 요청은 timeout으로 제한 (GATEWAY_TIMEOUT_SECONDS)
- 통신 실패, 타임아웃, 4xx/5xx 응답은 PaymentGatewayError로 변환
"""
import logging
from typing import Any, Dict, Optional

import httpx

from app.core.exceptions import PaymentGatewayError


logger = logging.getLogger(__name__)


class RazorpayClient:
    """Razorpay 비동기 클라이언트"""

    def __init__(
        self,
        key_id: str,
        key_secret: str,
        base_url: str = "https://api.razorpay.com/v1",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.key_id = key_id
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=base_url,
            auth=(key_id, key_secret),
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def create_order(
        self,
        amount: int,
        currency: str,
        receipt: str,
    ) -> Dict[str, Any]:
        """
        주문 생성

        Args:
            amount: 금액 (minor unit, 예: paise)
            currency: 통화 코드
            receipt: 주문별 고유 영수증 토큰

        Returns:
            Razorpay 주문 객체 (id, amount, currency, receipt, status ...)
        """
        payload = {"amount": amount, "currency": currency, "receipt": receipt}
        return await self._request("POST", "/orders", json=payload)

    async def fetch_payment(self, payment_id: str) -> Dict[str, Any]:
        """결제 조회 (status: created/authorized/captured/refunded/failed)"""
        return await self._request("GET", f"/payments/{payment_id}")

    async def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.error(f"[Razorpay] 타임아웃: {method} {path}")
            raise PaymentGatewayError("Payment gateway timed out", {"reason": "timeout"}) from e
        except httpx.HTTPError as e:
            logger.error(f"[Razorpay] 통신 오류: {method} {path} - {str(e)}")
            raise PaymentGatewayError("Payment gateway unreachable", {"reason": str(e)}) from e

        if response.status_code >= 400:
            logger.warning(
                f"[Razorpay] 요청 실패: {method} {path} "
                f"status={response.status_code}, body={response.text[:500]}"
            )
            raise PaymentGatewayError(
                "Payment gateway rejected the request",
                {"status_code": response.status_code, "body": response.text[:500]},
            )

        try:
            return response.json()
        except ValueError as e:
            raise PaymentGatewayError("Invalid payment gateway response") from e

    async def close(self):
        """HTTP 커넥션 종료"""
        await self._client.aclose()
