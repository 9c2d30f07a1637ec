"""
리포지토리 모듈
"""
from app.infrastructure.repositories.participant_repository import ParticipantRepository

__all__ = [
    "ParticipantRepository",
]
