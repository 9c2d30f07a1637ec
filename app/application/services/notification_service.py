"""
참가 확인 메일 서비스
메일 발송 실패는 로그만 남기고 호출자에게 전파하지 않습니다.
"""
import logging

from app.core.exceptions import NotificationError
from app.infrastructure.mail.mailer import SmtpMailer
from app.infrastructure.persistence.models.participants import Participant


logger = logging.getLogger(__name__)


class NotificationService:
    """참가 확인 메일 발송"""

    def __init__(
        self,
        mailer: SmtpMailer,
        event_name: str,
        event_date: str,
        event_venue: str,
    ):
        self.mailer = mailer
        self.event_name = event_name
        self.event_date = event_date
        self.event_venue = event_venue

    def build_message(self, participant: Participant) -> tuple:
        """(subject, body) 생성"""
        subject = f"{self.event_name} Registration Confirmation"
        body = (
            f"Hello {participant.name},\n"
            f"\n"
            f"Thank you for registering for the {self.event_name}!\n"
            f"\n"
            f"Your Chest Number: {participant.chest_number}\n"
            f"Category: {participant.category}\n"
            f"\n"
            f"Event Details:\n"
            f"- Date: {self.event_date}\n"
            f"- Venue: {self.event_venue}\n"
            f"\n"
            f"See you at the event!\n"
            f"\n"
            f"Warm Regards,\n"
            f"{self.event_name} Team\n"
        )
        return subject, body

    async def send_confirmation(self, participant: Participant) -> bool:
        """
        참가 확인 메일 발송

        Returns:
            성공 여부 (실패해도 예외를 던지지 않음)
        """
        subject, body = self.build_message(participant)
        try:
            await self.mailer.send(participant.email, subject, body)
        except NotificationError as e:
            logger.error(
                f"[Notification] 확인 메일 발송 실패 - "
                f"chest_number: {participant.chest_number}, error: {e.message}"
            )
            return False
        except Exception as e:
            logger.error(
                f"[Notification] 확인 메일 발송 오류 - "
                f"chest_number: {participant.chest_number}, error: {str(e)}",
                exc_info=True,
            )
            return False
        logger.info(f"[Notification] 확인 메일 발송 - chest_number: {participant.chest_number}")
        return True
