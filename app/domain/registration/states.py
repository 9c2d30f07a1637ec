"""
참가 등록 처리 상태
"""
import enum


class RegistrationState(str, enum.Enum):
    """등록 트랜잭션 상태 (ABORTED는 모든 단계에서 도달 가능)"""
    VALIDATING = "validating"
    SIGNATURE_CHECKING = "signature_checking"
    STATUS_CHECKING = "status_checking"
    PERSISTING = "persisting"
    NOTIFYING = "notifying"
    DONE = "done"
    ABORTED = "aborted"


class PaymentStatus(str, enum.Enum):
    """Razorpay 결제 상태"""
    CREATED = "created"
    AUTHORIZED = "authorized"
    CAPTURED = "captured"
    REFUNDED = "refunded"
    FAILED = "failed"


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class RaceCategory(str, enum.Enum):
    """참가 코스"""
    KM_5 = "5km"
    KM_10 = "10km"
    KM_20 = "20km"
