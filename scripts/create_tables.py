#!/usr/bin/env python
"""
participants 테이블 생성 스크립트

[사용법]
python scripts/create_tables.py
"""
import asyncio
import logging
import os
import sys

project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from dotenv import load_dotenv

load_dotenv()

from app.core.config import get_settings
from app.infrastructure.persistence.session import Database


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def main():
    settings = get_settings()
    database = Database(settings.POSTGRES_URL)
    try:
        await database.create_tables()
        logger.info("participants 테이블 생성 완료")
    finally:
        await database.close()


if __name__ == "__main__":
    asyncio.run(main())
