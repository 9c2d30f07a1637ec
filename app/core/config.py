"""
환경 설정 모듈
PostgreSQL, Redis, Razorpay, SMTP 등의 설정을 관리합니다.
"""
from functools import lru_cache
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 환경 설정"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"  # 알 수 없는 환경 변수는 무시
    )

    # 앱 기본 설정
    APP_NAME: str = "Polo Marathon Registration"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False  # True면 500 응답에 내부 에러 상세 포함

    # FastAPI 설정
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # PostgreSQL 설정
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "marathon"
    DATABASE_URL: Optional[str] = None  # 지정 시 POSTGRES_* 대신 사용 (예: sqlite+aiosqlite:///./dev.db)

    @property
    def POSTGRES_URL(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # Redis 설정 (Rate limit, Webhook 중복 제거)
    REDIS_ENABLED: bool = True
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_PASSWORD: Optional[str] = None
    REDIS_DB: int = 0

    @property
    def REDIS_URL(self) -> str:
        if self.REDIS_PASSWORD:
            return f"redis://:{self.REDIS_PASSWORD}@{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    # Razorpay 설정
    RAZORPAY_KEY_ID: str = ""
    RAZORPAY_KEY_SECRET: str = ""
    RAZORPAY_WEBHOOK_SECRET: Optional[str] = None  # 없으면 webhook 라우트 미등록
    RAZORPAY_API_URL: str = "https://api.razorpay.com/v1"
    GATEWAY_TIMEOUT_SECONDS: float = 10.0
    PAYMENT_CURRENCY: str = "INR"
    MIN_ORDER_AMOUNT: float = 1.0  # 주문 최소 금액 (major unit)

    # SMTP 설정 (참가 확인 메일)
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SMTP_STARTTLS: bool = True
    EMAIL_USER: Optional[str] = None
    EMAIL_PASS: Optional[str] = None
    MAIL_TIMEOUT_SECONDS: float = 10.0

    # 대회 정보 (메일 본문)
    EVENT_NAME: str = "Polo Marathon"
    EVENT_DATE: str = "16-03-2025"
    EVENT_VENUE: str = "MOLAPALAYAM, Coimbatore"

    # 배번(chest number) 설정
    CHEST_NUMBER_START: int = 1000
    CHEST_NUMBER_MAX_RETRIES: int = 5  # unique 충돌 시 재시도 횟수

    # CORS 설정 (Origin 헤더 없는 요청은 항상 허용, file:// 테스트는 "null" 추가)
    CORS_ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "https://bhogan.vercel.app",
        "https://bhogan-hpdi.vercel.app",
    ]

    # Rate limit 설정 (Redis 기반 고정 윈도우)
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_WINDOW_SECONDS: int = 900  # 15분
    RATE_LIMIT_MAX_CALLS: int = 100

    # Webhook 설정
    WEBHOOK_EVENT_TTL_SECONDS: int = 86400  # 처리한 이벤트 ID 보관 기간 (24시간)


@lru_cache()
def get_settings() -> Settings:
    """싱글톤 설정 객체 반환"""
    return Settings()


settings = get_settings()
