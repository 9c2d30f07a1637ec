"""
Razorpay 서명 검증

[서명 규칙]
- 결제 완료 서명: HMAC-SHA256(key_secret, "{order_id}|{payment_id}") 의 hex 문자열
- Webhook 서명: HMAC-SHA256(webhook_secret, raw_body) 의 hex 문자열

비교는 hmac.compare_digest로 수행 (타이밍 공격 방지)
"""
import hashlib
import hmac
from typing import Optional, Union


def _hex_hmac(secret: str, message: Union[str, bytes]) -> str:
    if isinstance(message, str):
        message = message.encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def compute_payment_signature(order_id: str, payment_id: str, secret: str) -> str:
    """결제 완료 서명 생성 (테스트 및 클라이언트 시뮬레이션용)"""
    return _hex_hmac(secret, f"{order_id}|{payment_id}")


def verify_payment_signature(
    order_id: str,
    payment_id: str,
    signature: Optional[str],
    secret: str,
) -> bool:
    """
    결제 완료 서명 검증

    Args:
        order_id: Razorpay 주문 ID
        payment_id: Razorpay 결제 ID
        signature: 클라이언트가 전달한 서명
        secret: Razorpay key secret

    Returns:
        서명 일치 여부
    """
    if not isinstance(signature, str) or not signature or not secret:
        return False
    expected = compute_payment_signature(order_id, payment_id, secret)
    return hmac.compare_digest(expected, signature)


def verify_webhook_signature(body: bytes, signature: Optional[str], secret: str) -> bool:
    """Webhook 원문(body) 서명 검증"""
    if not isinstance(signature, str) or not signature or not secret:
        return False
    return hmac.compare_digest(_hex_hmac(secret, body), signature)
