"""
참가 등록 API 라우터
"""
import logging

from fastapi import APIRouter, Depends, status

from app.application.container import ServiceContainer, get_container
from app.presentation.schemas.common import ErrorResponse
from app.presentation.schemas.registration import RegisterRequest, RegisterResponse


router = APIRouter(prefix="/auth", tags=["Registration"])
logger = logging.getLogger(__name__)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "입력 오류 / 서명 불일치 / 결제 미완료"},
        500: {"model": ErrorResponse, "description": "저장 실패"}
    },
    summary="참가 등록 (결제 확인 후)",
    description="""
    결제 완료 후 참가자를 등록하고 배번을 발급합니다.

    **처리 과정:**
    1. 입력 검증
    2. 결제 서명 검증 (HMAC-SHA256)
    3. Razorpay 결제 상태 확인 (captured)
    4. 배번 발급 및 저장
    5. 확인 메일 발송 (실패해도 등록은 유지)
    """
)
async def register(
    request: RegisterRequest,
    container: ServiceContainer = Depends(get_container),
) -> RegisterResponse:
    logger.info(
        f"[Register] 등록 요청 - orderId: {request.orderId}, paymentId: {request.paymentId}"
    )
    result = await container.registrations.register(request.model_dump())
    return RegisterResponse(
        msg="User registered successfully after payment.",
        chestNumber=result.chest_number,
    )
