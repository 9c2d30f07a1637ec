"""
FastAPI 메인 애플리케이션
Marathon Registration API

[목적]
- 참가 신청 폼 → Razorpay 결제 → 결제 검증 후 참가자 등록 (배번 발급) → 확인 메일

[주요 역할]
1. 애플리케이션 초기화 (lifespan 이벤트)
   - ServiceContainer 생성 (DB, Razorpay, SMTP, Redis)
   - 종료 시 모든 연결 정리

2. API 라우터 등록
   - /get-razorpay-key, /createOrder: 결제 준비
   - /api/auth/register: 참가 등록
   - /api/user/{email}: 등록 조회
   - /razorpay-webhook: Webhook (secret 설정 시)
   - /health: 헬스 체크

3. CORS / Rate limit 설정 (모두 Settings 기반)

[실행 방법]
1. 직접 실행: python app/main.py
2. uvicorn: uvicorn app.main:app --reload
3. 스크립트: python scripts/run_dev.py
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.application.container import ServiceContainer
from app.core.config import Settings, settings as default_settings
from app.core.logging import setup_logging
from app.presentation.api.errors import register_exception_handlers
from app.presentation.api.middleware import RateLimitMiddleware
from app.presentation.api.routes import (
    auth_router,
    health_router,
    payment_router,
    user_router,
    webhook_router,
)


logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[ServiceContainer] = None,
) -> FastAPI:
    """
    애플리케이션 생성

    Args:
        settings: 환경 설정 (기본: .env 기반 전역 설정)
        container: 미리 구성한 ServiceContainer (테스트용). 없으면 startup 시 생성

    [설정 기반 분기]
    - CORS_ALLOWED_ORIGINS: 허용 origin 목록
    - RATE_LIMIT_ENABLED / WINDOW_SECONDS / MAX_CALLS: rate limit
    - RAZORPAY_WEBHOOK_SECRET: 있으면 webhook 라우트 등록
    """
    settings = settings or default_settings
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        애플리케이션 라이프사이클 관리

        [Startup 단계]
        - ServiceContainer 생성 및 외부 연결 초기화

        [Shutdown 단계]
        - 모든 연결 정리 (uvicorn이 SIGINT/SIGTERM 시 호출)
        """
        # ===== Startup =====
        logger.info(f"Starting {settings.APP_NAME}...")
        if getattr(app.state, "container", None) is None:
            app.state.container = ServiceContainer.build(settings)
        await app.state.container.start()
        logger.info(f"서버 시작 완료: http://{settings.API_HOST}:{settings.API_PORT}")

        yield  # 애플리케이션 실행

        # ===== Shutdown =====
        logger.info("Shutting down...")
        await app.state.container.close()
        logger.info("서버 종료 완료")

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="""
## Marathon Registration API

결제 검증 후 참가자를 등록하고 배번(chest number)을 발급합니다.

### 흐름
1. `GET /get-razorpay-key` → 결제 위젯 키
2. `POST /createOrder` → Razorpay 주문
3. 결제 위젯 (외부)
4. `POST /api/auth/register` → 서명 검증 → 결제 상태 확인 → 배번 발급 → 확인 메일
""",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.container = container

    # ===== CORS 설정 =====
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # ===== Rate limit =====
    if settings.RATE_LIMIT_ENABLED:
        app.add_middleware(
            RateLimitMiddleware,
            window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
            max_calls=settings.RATE_LIMIT_MAX_CALLS,
        )

    register_exception_handlers(app, debug=settings.DEBUG)

    # ===== 라우터 등록 =====
    app.include_router(health_router)  # /health: 헬스 체크
    app.include_router(payment_router)  # /get-razorpay-key, /createOrder
    app.include_router(auth_router, prefix="/api")  # /api/auth/register
    app.include_router(user_router, prefix="/api")  # /api/user/{email}
    if settings.RAZORPAY_WEBHOOK_SECRET:
        app.include_router(webhook_router)  # /razorpay-webhook

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=default_settings.API_HOST,
        port=default_settings.API_PORT,
        reload=default_settings.DEBUG,  # 코드 변경 시 자동 재시작 (개발 모드에서만)
        log_level="debug" if default_settings.DEBUG else "info",
    )
