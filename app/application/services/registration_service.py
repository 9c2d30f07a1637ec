"""
참가 등록 서비스 (Registration Service)

[목적]
- 결제 완료된 참가자만 등록하고 배번(chest number)을 발급

[처리 흐름]
VALIDATING → SIGNATURE_CHECKING → STATUS_CHECKING → PERSISTING → NOTIFYING → DONE
(각 단계 실패 시 ABORTED)

1. VALIDATING: 입력 검증 (실패 시 ValidationError, 부수효과 없음)
2. SIGNATURE_CHECKING: HMAC 서명 검증 (실패 시 SignatureMismatch)
   - 게이트웨이 조회보다 반드시 먼저 수행 (임의 payment_id 조회 방지)
3. STATUS_CHECKING: Razorpay 결제 상태 조회, captured가 아니면 PaymentNotCaptured
   - 조회 실패/타임아웃도 PaymentNotCaptured (등록하지 않음)
4. PERSISTING: 배번 발급 + 저장 (실패 시 PersistenceError)
   - 결제는 captured 상태로 남으므로 수동 대사 필요 (ERROR 로그에 payment_id/order_id 기록)
5. NOTIFYING: 확인 메일 발송 (실패해도 등록은 성공)
6. DONE: 배번 반환

[배번 발급 직렬화]
- 프로세스 내: asyncio.Lock 으로 "최대값 조회 → +1 → 저장" 구간 직렬화
- 프로세스 간: chest_number unique 제약 + IntegrityError 시 재시도
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Mapping

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.core.exceptions import (
    DuplicatePayment,
    PaymentGatewayError,
    PaymentNotCaptured,
    PersistenceError,
    SignatureMismatch,
)
from app.application.services.notification_service import NotificationService
from app.domain.registration.signature import verify_payment_signature
from app.domain.registration.states import PaymentStatus, RegistrationState
from app.domain.registration.validation import RegistrationData, validate_registration
from app.infrastructure.payment.razorpay_client import RazorpayClient
from app.infrastructure.persistence.models.participants import Participant
from app.infrastructure.persistence.session import Database
from app.infrastructure.repositories.participant_repository import ParticipantRepository


logger = logging.getLogger(__name__)


@dataclass
class RegistrationResult:
    """등록 결과"""
    chest_number: int
    participant_id: int
    notified: bool
    state: RegistrationState = RegistrationState.DONE


class RegistrationService:
    """
    참가 등록 트랜잭션

    [구성 요소]
    - database: 참가자 저장소
    - gateway: Razorpay 클라이언트 (결제 상태 조회)
    - notifier: 확인 메일 서비스
    - key_secret: 결제 서명 검증용 Razorpay key secret

    [생명주기]
    - 프로세스당 1개 (ServiceContainer가 보유)
    - 배번 Lock을 공유해야 하므로 요청마다 생성하지 않음
    """

    def __init__(
        self,
        database: Database,
        gateway: RazorpayClient,
        notifier: NotificationService,
        key_secret: str,
        chest_number_start: int = 1000,
        max_retries: int = 5,
    ):
        self.database = database
        self.gateway = gateway
        self.notifier = notifier
        self.key_secret = key_secret
        self.chest_number_start = chest_number_start
        self.max_retries = max_retries
        self._chest_lock = asyncio.Lock()

    async def register(self, payload: Mapping[str, Any]) -> RegistrationResult:
        """
        참가 등록

        Args:
            payload: 요청 데이터 (camelCase 키)

        Returns:
            RegistrationResult

        Raises:
            ValidationError, SignatureMismatch, PaymentNotCaptured, PersistenceError
        """
        state = RegistrationState.VALIDATING
        try:
            data = validate_registration(payload)

            state = self._enter(RegistrationState.SIGNATURE_CHECKING, data.payment_id)
            self._check_signature(data)

            state = self._enter(RegistrationState.STATUS_CHECKING, data.payment_id)
            await self._check_captured(data)

            state = self._enter(RegistrationState.PERSISTING, data.payment_id)
            participant = await self._persist(data)
        except Exception as e:
            logger.warning(
                f"[Register] {RegistrationState.ABORTED.value} at {state.value} - "
                f"{type(e).__name__}: {str(e)}"
            )
            raise

        logger.info(
            f"[Register] 등록 완료 - chest_number: {participant.chest_number}, "
            f"payment_id: {participant.payment_id}"
        )

        self._enter(RegistrationState.NOTIFYING, participant.payment_id)
        notified = await self.notifier.send_confirmation(participant)
        logger.info(
            f"[Register] {RegistrationState.DONE.value} - chest_number: {participant.chest_number}, "
            f"notified: {notified}"
        )

        return RegistrationResult(
            chest_number=participant.chest_number,
            participant_id=participant.id,
            notified=notified,
        )

    @staticmethod
    def _enter(state: RegistrationState, payment_id: str) -> RegistrationState:
        logger.info(f"[Register] {state.value} - payment_id: {payment_id}")
        return state

    def _check_signature(self, data: RegistrationData) -> None:
        if not verify_payment_signature(
            data.order_id, data.payment_id, data.signature, self.key_secret
        ):
            logger.error(
                f"[Register] 서명 불일치 - order_id: {data.order_id}, payment_id: {data.payment_id}"
            )
            raise SignatureMismatch()

    async def _check_captured(self, data: RegistrationData) -> None:
        try:
            payment = await self.gateway.fetch_payment(data.payment_id)
        except (PaymentGatewayError, asyncio.TimeoutError) as e:
            logger.error(f"[Register] 결제 조회 실패 - payment_id: {data.payment_id}, error: {str(e)}")
            raise PaymentNotCaptured() from e

        if not isinstance(payment, dict):
            logger.error(f"[Register] 결제 조회 응답 형식 오류 - payment_id: {data.payment_id}")
            raise PaymentNotCaptured()

        status = payment.get("status")
        logger.info(f"[Register] 결제 상태 - payment_id: {data.payment_id}, status: {status}")
        if status != PaymentStatus.CAPTURED.value:
            raise PaymentNotCaptured(details={"status": status})

    async def _persist(self, data: RegistrationData) -> Participant:
        async with self._chest_lock:
            for attempt in range(1, self.max_retries + 1):
                try:
                    async with self.database.session() as db:
                        repo = ParticipantRepository(db)
                        if await repo.get_by_payment_id(data.payment_id):
                            raise DuplicatePayment()

                        chest_number = await repo.next_chest_number(self.chest_number_start)
                        participant = Participant(
                            name=data.name,
                            email=data.email,
                            phone=data.phone,
                            age=data.age,
                            gender=data.gender,
                            category=data.category,
                            payment_id=data.payment_id,
                            order_id=data.order_id,
                            chest_number=chest_number,
                        )
                        await repo.add(participant)
                    return participant
                except IntegrityError:
                    # 다른 프로세스가 같은 배번을 먼저 저장함
                    logger.warning(
                        f"[Register] 배번 충돌, 재시도 {attempt}/{self.max_retries} - "
                        f"payment_id: {data.payment_id}"
                    )
                except (SQLAlchemyError, OSError) as e:
                    logger.error(
                        f"[Register] 저장 실패 (대사 필요) - payment_id: {data.payment_id}, "
                        f"order_id: {data.order_id}, error: {str(e)}",
                        exc_info=True,
                    )
                    raise PersistenceError(details={"reason": str(e)}) from e

        logger.error(
            f"[Register] 배번 발급 재시도 초과 (대사 필요) - payment_id: {data.payment_id}, "
            f"order_id: {data.order_id}"
        )
        raise PersistenceError(details={"reason": "chest number assignment retries exhausted"})
