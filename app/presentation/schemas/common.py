"""
공통 스키마
"""
from datetime import datetime
from typing import Optional, Dict, Any
from pydantic import BaseModel, Field, ConfigDict


class HealthResponse(BaseModel):
    """헬스 체크 응답"""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "ok",
                "timestamp": "2025-03-01T10:00:00+00:00",
                "version": "0.1.0",
                "components": {
                    "database": True,
                    "redis": True
                }
            }
        }
    )

    status: str = Field("ok", description="상태 (ok / degraded)")
    timestamp: datetime = Field(..., description="응답 시각 (UTC)")
    version: str = Field(..., description="버전")
    components: Dict[str, bool] = Field(
        default_factory=dict,
        description="컴포넌트 상태"
    )


class ErrorResponse(BaseModel):
    """에러 응답"""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": True,
                "error_code": "VALIDATION_ERROR",
                "error_message": "Invalid registration data",
                "details": {
                    "errors": [{"field": "phone", "message": "Valid phone number is required"}]
                }
            }
        }
    )

    error: bool = Field(True, description="에러 여부")
    error_code: str = Field(..., description="에러 코드")
    error_message: str = Field(..., description="에러 메시지 (클라이언트 표시용)")
    details: Optional[Dict[str, Any]] = Field(None, description="상세 정보")
