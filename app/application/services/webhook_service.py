"""
Razorpay Webhook 처리 서비스

[처리 과정]
1. X-Razorpay-Signature 헤더를 원문(body) HMAC과 비교
2. 이벤트 ID 중복 확인 (Redis SET NX, Redis 미사용 시 생략)
3. 이벤트 타입별 핸들러 실행
   - payment.captured / payment.failed: 결제 ID와 상태 로그
   - 그 외: 로그만 남김

등록 플로우는 /api/auth/register 에서 완결되며 webhook은 보조 확인 경로입니다.
"""
import json
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from app.domain.registration.signature import verify_webhook_signature
from app.infrastructure.cache.redis_client import RedisClient


logger = logging.getLogger(__name__)

EventHandler = Callable[[Dict[str, Any]], Awaitable[None]]


class WebhookSignatureError(Exception):
    """Webhook 서명 검증 실패"""
    pass


class WebhookService:
    """Webhook 검증 및 이벤트 분기"""

    def __init__(
        self,
        webhook_secret: str,
        redis: Optional[RedisClient] = None,
        event_ttl_seconds: int = 86400,
    ):
        self.webhook_secret = webhook_secret
        self.redis = redis
        self.event_ttl_seconds = event_ttl_seconds
        self.handlers: Dict[str, EventHandler] = {
            "payment.captured": self._on_payment_captured,
            "payment.failed": self._on_payment_failed,
        }

    async def handle(
        self,
        body: bytes,
        signature: Optional[str],
        event_id: Optional[str] = None,
    ) -> str:
        """
        Webhook 처리

        Args:
            body: 원문 요청 body
            signature: X-Razorpay-Signature 헤더
            event_id: X-Razorpay-Event-Id 헤더 (중복 제거용)

        Returns:
            처리 결과 ("processed", "ignored", "duplicate")

        Raises:
            WebhookSignatureError: 서명 불일치 (서명이 유효하면 body 형식과 무관하게 200)
        """
        if not verify_webhook_signature(body, signature, self.webhook_secret):
            logger.warning("[Webhook] 서명 검증 실패")
            raise WebhookSignatureError("Invalid webhook signature")

        try:
            payload = json.loads(body)
        except ValueError:
            payload = None
        if not isinstance(payload, dict):
            logger.warning("[Webhook] 서명은 유효하나 body 파싱 실패, 무시")
            return "ignored"

        if event_id and await self._is_duplicate(event_id):
            logger.info(f"[Webhook] 중복 이벤트 무시 - event_id: {event_id}")
            return "duplicate"

        event = payload.get("event")
        handler = self.handlers.get(event) if isinstance(event, str) else None
        if handler is None:
            logger.info(f"[Webhook] 처리하지 않는 이벤트: {event}")
            return "ignored"

        await handler(payload)
        return "processed"

    async def _is_duplicate(self, event_id: str) -> bool:
        if self.redis is None:
            return False
        try:
            stored = await self.redis.set_if_absent(
                RedisClient.webhook_event_key(event_id), "1", self.event_ttl_seconds
            )
        except Exception as e:
            # Redis 장애 시 중복 제거 없이 처리
            logger.warning(f"[Webhook] 중복 확인 실패: {str(e)}")
            return False
        return not stored

    @staticmethod
    def _payment_entity(payload: Dict[str, Any]) -> Dict[str, Any]:
        return payload.get("payload", {}).get("payment", {}).get("entity", {}) or {}

    async def _on_payment_captured(self, payload: Dict[str, Any]) -> None:
        payment = self._payment_entity(payload)
        logger.info(
            f"[Webhook] 결제 captured - payment_id: {payment.get('id')}, "
            f"order_id: {payment.get('order_id')}, amount: {payment.get('amount')}"
        )

    async def _on_payment_failed(self, payload: Dict[str, Any]) -> None:
        payment = self._payment_entity(payload)
        logger.warning(
            f"[Webhook] 결제 실패 - payment_id: {payment.get('id')}, "
            f"order_id: {payment.get('order_id')}, reason: {payment.get('error_description')}"
        )
