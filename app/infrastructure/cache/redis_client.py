"""
Redis 클라이언트 관리
Rate limit 카운터 및 Webhook 이벤트 중복 제거에 사용
"""
from typing import Optional

import redis.asyncio as redis
from redis.asyncio.connection import ConnectionPool


class RedisClient:
    """Redis 비동기 클라이언트 래퍼"""

    def __init__(self, url: str):
        self.url = url
        self._pool: Optional[ConnectionPool] = None
        self._client: Optional[redis.Redis] = None

    async def connect(self):
        """Redis 연결 초기화"""
        self._pool = ConnectionPool.from_url(
            self.url,
            max_connections=20,
            decode_responses=True,
        )
        self._client = redis.Redis(connection_pool=self._pool)
        # 연결 테스트
        await self._client.ping()

    async def close(self):
        """Redis 연결 종료"""
        if self._client:
            await self._client.aclose()
        if self._pool:
            await self._pool.aclose()

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            raise RuntimeError("Redis client not initialized. Call connect() first.")
        return self._client

    async def ping(self) -> bool:
        return await self.client.ping()

    # ===== 기본 Key-Value 연산 =====

    async def get(self, key: str) -> Optional[str]:
        """키 값 조회"""
        return await self.client.get(key)

    async def set_if_absent(self, key: str, value: str, ttl_seconds: int) -> bool:
        """키가 없을 때만 저장 (SET NX EX) - 저장했으면 True"""
        return bool(await self.client.set(key, value, ex=ttl_seconds, nx=True))

    async def delete(self, key: str) -> int:
        """키 삭제"""
        return await self.client.delete(key)

    # ===== 카운터 =====

    async def incr_window(self, key: str, window_seconds: int) -> int:
        """
        고정 윈도우 카운터 증가

        첫 증가 시에만 TTL을 설정하여 윈도우가 끝나면 카운터가 사라지도록 함

        Returns:
            증가 후 카운트
        """
        async with self.client.pipeline(transaction=True) as pipe:
            pipe.incr(key)
            pipe.expire(key, window_seconds, nx=True)
            count, _ = await pipe.execute()
        return int(count)

    # ===== 키 생성 =====

    @staticmethod
    def rate_limit_key(client_id: str, window: int) -> str:
        return f"ratelimit:{client_id}:{window}"

    @staticmethod
    def webhook_event_key(event_id: str) -> str:
        return f"webhook:razorpay:{event_id}"
