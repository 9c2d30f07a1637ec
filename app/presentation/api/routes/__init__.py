"""
API 라우터 모듈
"""
from app.presentation.api.routes.auth import router as auth_router
from app.presentation.api.routes.health import router as health_router
from app.presentation.api.routes.payment import router as payment_router
from app.presentation.api.routes.user import router as user_router
from app.presentation.api.routes.webhook import router as webhook_router

__all__ = ["auth_router", "health_router", "payment_router", "user_router", "webhook_router"]
