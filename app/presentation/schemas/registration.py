"""
참가 등록 관련 스키마
"""
from datetime import datetime
from typing import Optional, Union
from pydantic import BaseModel, Field, ConfigDict


class RegisterRequest(BaseModel):
    """
    참가 등록 요청

    필드 형식 검증은 RegistrationService(VALIDATING 단계)에서 수행합니다.
    여기서는 누락을 허용하고 타입만 느슨하게 받습니다.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Arun Kumar",
                "email": "arun@example.com",
                "phone": "9876543210",
                "age": 29,
                "gender": "male",
                "category": "10km",
                "paymentId": "pay_Nx1abc",
                "orderId": "order_Nx1abc",
                "signature": "5f0c...e21"
            }
        }
    )

    name: Optional[str] = Field(None, description="이름")
    email: Optional[str] = Field(None, description="이메일")
    phone: Optional[Union[str, int]] = Field(None, description="전화번호 (10자리)")
    age: Optional[Union[int, str]] = Field(None, description="나이 (18-100)")
    gender: Optional[str] = Field(None, description="성별 (male/female/other)")
    category: Optional[str] = Field(None, description="코스 (5km/10km/20km)")
    paymentId: Optional[str] = Field(None, description="Razorpay 결제 ID")
    orderId: Optional[str] = Field(None, description="Razorpay 주문 ID")
    signature: Optional[str] = Field(None, description="Razorpay 결제 서명")


class RegisterResponse(BaseModel):
    """참가 등록 응답"""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "msg": "User registered successfully after payment.",
                "chestNumber": 1000
            }
        }
    )

    msg: str = Field(..., description="결과 메시지")
    chestNumber: int = Field(..., description="배번")


class ParticipantResponse(BaseModel):
    """참가자 조회 응답"""
    name: str = Field(..., description="이름")
    email: str = Field(..., description="이메일")
    category: str = Field(..., description="코스")
    chestNumber: int = Field(..., description="배번")
    createdAt: datetime = Field(..., description="등록 시각")
