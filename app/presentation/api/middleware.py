"""
Rate limit 미들웨어 (Redis 고정 윈도우)

- 클라이언트 IP 기준, RATE_LIMIT_WINDOW_SECONDS 동안 RATE_LIMIT_MAX_CALLS 회 허용
- Redis를 사용할 수 없으면 제한 없이 통과
- /health 는 제한하지 않음
"""
import logging
import time
from typing import Callable, Optional

from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware

from app.infrastructure.cache.redis_client import RedisClient
from app.presentation.api.errors import error_response


logger = logging.getLogger(__name__)

EXEMPT_PATHS = {"/health"}


class RateLimitMiddleware(BaseHTTPMiddleware):

    def __init__(self, app, window_seconds: int, max_calls: int):
        super().__init__(app)
        self.window_seconds = window_seconds
        self.max_calls = max_calls

    @staticmethod
    def _redis(request: Request) -> Optional[RedisClient]:
        container = getattr(request.app.state, "container", None)
        return getattr(container, "redis", None)

    async def dispatch(self, request: Request, call_next: Callable):
        redis = self._redis(request)
        if redis is None or request.url.path in EXEMPT_PATHS:
            return await call_next(request)

        client_id = request.client.host if request.client else "unknown"
        window = int(time.time()) // self.window_seconds
        try:
            count = await redis.incr_window(
                RedisClient.rate_limit_key(client_id, window), self.window_seconds
            )
        except Exception as e:
            logger.warning(f"[RateLimit] Redis 오류, 제한 없이 통과: {str(e)}")
            return await call_next(request)

        if count > self.max_calls:
            logger.warning(f"[RateLimit] 제한 초과 - client: {client_id}, count: {count}")
            response = error_response(
                status.HTTP_429_TOO_MANY_REQUESTS,
                "RATE_LIMITED",
                "Too many requests, please try again later.",
            )
        else:
            response = await call_next(request)

        response.headers["RateLimit-Limit"] = str(self.max_calls)
        response.headers["RateLimit-Remaining"] = str(max(self.max_calls - count, 0))
        return response
