"""
결제(주문/키) 관련 스키마
"""
from typing import Any, Optional
from pydantic import BaseModel, Field, ConfigDict


class RazorpayKeyResponse(BaseModel):
    """결제 위젯용 공개 키"""
    key: str = Field(..., description="Razorpay key id")


class CreateOrderRequest(BaseModel):
    """주문 생성 요청"""
    model_config = ConfigDict(
        json_schema_extra={"example": {"amount": 1}}
    )

    # 숫자 검증은 OrderService에서 수행 (InvalidAmount 응답 형식 통일)
    amount: Optional[Any] = Field(None, description="금액 (major unit, 최소 1)")


class OrderResponse(BaseModel):
    """주문 생성 응답"""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {"id": "order_Nx1abc", "amount": 100, "currency": "INR"}
        }
    )

    id: str = Field(..., description="Razorpay 주문 ID")
    amount: int = Field(..., description="금액 (minor unit)")
    currency: str = Field(..., description="통화")
