"""
참가자 조회 API 라우터
"""
from fastapi import APIRouter, Depends

from app.application.container import ServiceContainer, get_container
from app.core.exceptions import ParticipantNotFound
from app.infrastructure.repositories.participant_repository import ParticipantRepository
from app.presentation.schemas.common import ErrorResponse
from app.presentation.schemas.registration import ParticipantResponse


router = APIRouter(prefix="/user", tags=["Participant"])


@router.get(
    "/{email}",
    response_model=ParticipantResponse,
    responses={
        404: {"model": ErrorResponse, "description": "등록 내역 없음"}
    },
    summary="참가 등록 조회",
    description="이메일로 등록 내역(배번, 코스)을 조회합니다."
)
async def get_participant(
    email: str,
    container: ServiceContainer = Depends(get_container),
) -> ParticipantResponse:
    async with container.database.session() as db:
        participant = await ParticipantRepository(db).get_by_email(email)

    if participant is None:
        raise ParticipantNotFound(details={"email": email})

    return ParticipantResponse(
        name=participant.name,
        email=participant.email,
        category=participant.category,
        chestNumber=participant.chest_number,
        createdAt=participant.created_at,
    )
