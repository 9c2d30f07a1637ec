"""
로깅 설정
DEBUG 모드에서는 상세 로그, 프로덕션에서는 INFO 레벨로 설정
"""
import logging

from app.core.config import Settings


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format=LOG_FORMAT,
    )
    # 프로덕션에서는 httpx 요청 로그 생략
    if not settings.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)
