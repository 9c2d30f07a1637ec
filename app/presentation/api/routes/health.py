"""
헬스 체크 API 라우터
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app.application.container import ServiceContainer, get_container
from app.presentation.schemas.common import HealthResponse


router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="헬스 체크",
    description="서버 및 의존 서비스 상태를 확인합니다."
)
async def health_check(
    container: ServiceContainer = Depends(get_container),
) -> HealthResponse:
    """헬스 체크"""
    components = {}

    # DB 상태 확인
    try:
        components["database"] = await container.database.ping()
    except Exception:
        components["database"] = False

    # Redis 상태 확인 (사용하는 경우에만)
    if container.redis is not None:
        try:
            components["redis"] = bool(await container.redis.ping())
        except Exception:
            components["redis"] = False

    overall_status = "ok" if all(components.values()) else "degraded"

    return HealthResponse(
        status=overall_status,
        timestamp=datetime.now(timezone.utc),
        version=container.settings.APP_VERSION,
        components=components,
    )


@router.get(
    "/info",
    summary="API 정보",
    description="API 정보를 반환합니다."
)
async def api_info(container: ServiceContainer = Depends(get_container)):
    """API 정보 엔드포인트"""
    return {
        "name": container.settings.APP_NAME,
        "version": container.settings.APP_VERSION,
        "docs": "/docs",
        "health": "/health",
    }
