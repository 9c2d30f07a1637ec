#!/usr/bin/env python
"""
개발 서버 실행 스크립트
"""
import os
import sys
import logging

# 프로젝트 루트를 Python 경로에 추가
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

# 로깅 설정
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def run_uvicorn():
    """Uvicorn 서버 실행"""
    import uvicorn
    from dotenv import load_dotenv

    # 환경 변수 로드
    load_dotenv()

    from app.core.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
    )


if __name__ == "__main__":
    try:
        run_uvicorn()
    except KeyboardInterrupt:
        logger.info("[Dev Server] 서버 종료 요청 수신")
    except Exception as e:
        logger.error(f"[Dev Server] 서버 실행 오류: {str(e)}", exc_info=True)
