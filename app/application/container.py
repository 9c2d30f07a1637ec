"""
서비스 컨테이너

[역할]
- 게이트웨이 클라이언트, DB, 메일러, Redis 를 애플리케이션 시작 시 1회 생성
- 라우터는 Depends(get_container)로 주입받아 사용
- 종료 시 close()로 모든 연결 정리
"""
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from app.core.config import Settings
from app.application.services.notification_service import NotificationService
from app.application.services.order_service import OrderService
from app.application.services.registration_service import RegistrationService
from app.application.services.webhook_service import WebhookService
from app.infrastructure.cache.redis_client import RedisClient
from app.infrastructure.mail.mailer import SmtpMailer
from app.infrastructure.payment.razorpay_client import RazorpayClient
from app.infrastructure.persistence.session import Database


logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    settings: Settings
    database: Database
    gateway: RazorpayClient
    orders: OrderService
    registrations: RegistrationService
    notifications: NotificationService
    webhooks: Optional[WebhookService] = None
    redis: Optional[RedisClient] = None

    @classmethod
    def build(
        cls,
        settings: Settings,
        database: Optional[Database] = None,
        gateway: Optional[RazorpayClient] = None,
        mailer: Optional[SmtpMailer] = None,
        redis: Optional[RedisClient] = None,
    ) -> "ServiceContainer":
        """설정으로부터 서비스 그래프 생성 (테스트에서는 일부 구성 요소 교체)"""
        database = database or Database(settings.POSTGRES_URL, echo=settings.DEBUG)
        gateway = gateway or RazorpayClient(
            key_id=settings.RAZORPAY_KEY_ID,
            key_secret=settings.RAZORPAY_KEY_SECRET,
            base_url=settings.RAZORPAY_API_URL,
            timeout=settings.GATEWAY_TIMEOUT_SECONDS,
        )
        mailer = mailer or SmtpMailer(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.EMAIL_USER,
            password=settings.EMAIL_PASS,
            start_tls=settings.SMTP_STARTTLS,
            timeout=settings.MAIL_TIMEOUT_SECONDS,
        )
        if redis is None and settings.REDIS_ENABLED:
            redis = RedisClient(settings.REDIS_URL)

        notifications = NotificationService(
            mailer,
            event_name=settings.EVENT_NAME,
            event_date=settings.EVENT_DATE,
            event_venue=settings.EVENT_VENUE,
        )
        webhooks = None
        if settings.RAZORPAY_WEBHOOK_SECRET:
            webhooks = WebhookService(
                settings.RAZORPAY_WEBHOOK_SECRET,
                redis=redis,
                event_ttl_seconds=settings.WEBHOOK_EVENT_TTL_SECONDS,
            )

        return cls(
            settings=settings,
            database=database,
            gateway=gateway,
            orders=OrderService(
                gateway,
                currency=settings.PAYMENT_CURRENCY,
                min_amount=settings.MIN_ORDER_AMOUNT,
            ),
            registrations=RegistrationService(
                database,
                gateway,
                notifications,
                key_secret=settings.RAZORPAY_KEY_SECRET,
                chest_number_start=settings.CHEST_NUMBER_START,
                max_retries=settings.CHEST_NUMBER_MAX_RETRIES,
            ),
            notifications=notifications,
            webhooks=webhooks,
            redis=redis,
        )

    async def start(self) -> None:
        """
        외부 연결 초기화

        - Redis 연결 실패: 경고 후 Redis 없이 계속 (rate limit / webhook 중복 제거 비활성)
        - PostgreSQL 연결 실패: 경고 후 계속 (요청 시점에 PersistenceError)
        """
        if self.redis is not None:
            try:
                await self.redis.connect()
                logger.info("Redis 연결 성공")
            except Exception as e:
                logger.warning(f"Redis 연결 실패 (Redis 없이 계속): {str(e)}")
                await self.redis.close()
                self.redis = None
                if self.webhooks is not None:
                    self.webhooks.redis = None

        try:
            await self.database.ping()
            logger.info("Database 연결 성공")
        except Exception as e:
            logger.warning(f"Database 연결 실패: {str(e)}")

    async def close(self) -> None:
        """모든 연결 정리"""
        await self.gateway.close()
        if self.redis is not None:
            await self.redis.close()
        await self.database.close()


def get_container(request: Request) -> ServiceContainer:
    """ServiceContainer 의존성 주입"""
    return request.app.state.container
