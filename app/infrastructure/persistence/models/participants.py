"""
참가자 테이블 모델
"""
from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.registration.validation import (
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PAYMENT_TOKEN_MAX_LENGTH,
)
from app.infrastructure.persistence.session import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Participant(Base):
    """
    참가자 테이블

    - 결제 서명 검증 + captured 확인 후에만 생성
    - 생성 후 수정/삭제 없음
    - chest_number, payment_id 는 unique
    """
    __tablename__ = "participants"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    email: Mapped[str] = mapped_column(String(EMAIL_MAX_LENGTH), nullable=False, index=True)
    phone: Mapped[str] = mapped_column(String(10), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    gender: Mapped[str] = mapped_column(String(10), nullable=False)
    category: Mapped[str] = mapped_column(String(10), nullable=False)
    payment_id: Mapped[str] = mapped_column(String(PAYMENT_TOKEN_MAX_LENGTH), nullable=False, unique=True)
    order_id: Mapped[str] = mapped_column(String(PAYMENT_TOKEN_MAX_LENGTH), nullable=False)
    chest_number: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow
    )
