"""
Razorpay Webhook API 라우터
RAZORPAY_WEBHOOK_SECRET 이 설정된 경우에만 등록됩니다.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request, status
from fastapi.responses import JSONResponse

from app.application.container import ServiceContainer, get_container
from app.application.services.webhook_service import WebhookSignatureError
from app.presentation.api.errors import error_response


router = APIRouter(tags=["Webhook"])
logger = logging.getLogger(__name__)


@router.post(
    "/razorpay-webhook",
    summary="Razorpay Webhook",
    description="서명 검증 후 payment.captured / payment.failed 이벤트를 처리합니다."
)
async def razorpay_webhook(
    request: Request,
    x_razorpay_signature: Optional[str] = Header(None),
    x_razorpay_event_id: Optional[str] = Header(None),
    container: ServiceContainer = Depends(get_container),
) -> JSONResponse:
    body = await request.body()
    try:
        result = await container.webhooks.handle(
            body, x_razorpay_signature, event_id=x_razorpay_event_id
        )
    except WebhookSignatureError as e:
        return error_response(status.HTTP_400_BAD_REQUEST, "INVALID_SIGNATURE", str(e))

    return JSONResponse(status_code=status.HTTP_200_OK, content={"status": "ok", "result": result})
