"""
도메인 예외 정의

[분류]
- ValidationError (400): 입력 누락/형식 오류
- InvalidAmount (400): 주문 금액 오류
- SignatureMismatch (400): 결제 서명 불일치
- PaymentNotCaptured (400): 결제 상태가 captured가 아님 (조회 실패/타임아웃 포함)
- PaymentGatewayError (500): 게이트웨이 통신/서비스 오류 (재시도 가능)
- PersistenceError (500): 결제 확인 후 저장 실패 (수동 대사 필요)
- NotificationError: 메일 발송 실패 (로그만 남기고 응답에 노출하지 않음)
"""
from typing import Any, Dict, List, Optional


class MarathonError(Exception):
    """모든 도메인 예외의 베이스"""

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"
    default_message: str = "Something went wrong"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(MarathonError):
    status_code = 400
    error_code = "VALIDATION_ERROR"
    default_message = "Invalid registration data"

    def __init__(
        self,
        errors: Optional[List[Dict[str, str]]] = None,
        message: Optional[str] = None,
    ):
        self.errors = errors or []
        super().__init__(message, {"errors": self.errors} if self.errors else None)

    @property
    def fields(self) -> List[str]:
        return [e["field"] for e in self.errors]


class DuplicatePayment(ValidationError):
    error_code = "DUPLICATE_PAYMENT"
    default_message = "This payment has already been used for a registration."


class InvalidAmount(MarathonError):
    status_code = 400
    error_code = "INVALID_AMOUNT"
    default_message = "Valid amount required"


class SignatureMismatch(MarathonError):
    status_code = 400
    error_code = "SIGNATURE_MISMATCH"
    default_message = "Payment verification failed: Invalid signature."


class PaymentNotCaptured(MarathonError):
    status_code = 400
    error_code = "PAYMENT_NOT_CAPTURED"
    default_message = "Payment verification failed: Payment not captured."


class PaymentGatewayError(MarathonError):
    status_code = 500
    error_code = "PAYMENT_GATEWAY_ERROR"
    default_message = "Error creating order"


class PersistenceError(MarathonError):
    status_code = 500
    error_code = "PERSISTENCE_ERROR"
    default_message = "Server error"


class ParticipantNotFound(MarathonError):
    status_code = 404
    error_code = "PARTICIPANT_NOT_FOUND"
    default_message = "No registration found for this email."


class NotificationError(MarathonError):
    """메일 발송 실패 - API 응답으로 전파되지 않음"""

    error_code = "NOTIFICATION_ERROR"
    default_message = "Failed to send confirmation email"
