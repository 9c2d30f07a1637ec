"""
결제 API 라우터
결제 위젯용 키 조회 및 Razorpay 주문 생성
"""
import logging

from fastapi import APIRouter, Depends, status

from app.application.container import ServiceContainer, get_container
from app.presentation.schemas.common import ErrorResponse
from app.presentation.schemas.payment import (
    CreateOrderRequest, OrderResponse, RazorpayKeyResponse
)


router = APIRouter(tags=["Payment"])
logger = logging.getLogger(__name__)


@router.get(
    "/get-razorpay-key",
    response_model=RazorpayKeyResponse,
    summary="결제 키 조회",
    description="결제 위젯 초기화에 필요한 Razorpay key id를 반환합니다."
)
async def get_razorpay_key(
    container: ServiceContainer = Depends(get_container),
) -> RazorpayKeyResponse:
    return RazorpayKeyResponse(key=container.settings.RAZORPAY_KEY_ID)


@router.post(
    "/createOrder",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "금액 오류"},
        500: {"model": ErrorResponse, "description": "결제 게이트웨이 오류 (재시도 가능)"}
    },
    summary="주문 생성",
    description="""
    결제 위젯에서 사용할 Razorpay 주문을 생성합니다.

    **처리 과정:**
    1. 금액 검증 (숫자, 1 이상)
    2. minor unit 변환 (x100)
    3. Razorpay 주문 생성 (receipt: order_<timestamp>)
    """
)
async def create_order(
    request: CreateOrderRequest,
    container: ServiceContainer = Depends(get_container),
) -> OrderResponse:
    order = await container.orders.create_order(request.amount)
    return OrderResponse(**order)
