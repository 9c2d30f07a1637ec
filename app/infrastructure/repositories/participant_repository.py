"""
참가자 Repository
"""
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.models.participants import Participant


class ParticipantRepository:
    """참가자 데이터 접근 계층"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_max_chest_number(self) -> Optional[int]:
        """현재 최대 배번 조회 (참가자가 없으면 None)"""
        query = select(func.max(Participant.chest_number))
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def next_chest_number(self, start: int) -> int:
        """다음 배번 = 최대 배번 + 1 (없으면 start)"""
        current = await self.get_max_chest_number()
        return start if current is None else current + 1

    async def get_by_payment_id(self, payment_id: str) -> Optional[Participant]:
        """결제 ID로 조회"""
        query = select(Participant).where(Participant.payment_id == payment_id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[Participant]:
        """이메일로 조회 (가장 먼저 등록된 참가자)"""
        query = (
            select(Participant)
            .where(Participant.email == email.lower())
            .order_by(Participant.chest_number.asc())
            .limit(1)
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(Participant))
        return result.scalar_one()

    async def add(self, participant: Participant) -> Participant:
        """참가자 추가 (flush 시 unique 제약 위반은 IntegrityError로 전파)"""
        self.db.add(participant)
        await self.db.flush()  # ID 생성을 위해 flush
        return participant
