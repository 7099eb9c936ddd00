import logging

from fastapi import Depends
from fastapi_mail import ConnectionConfig, FastMail, MessageSchema, MessageType
from fastapi_mail.errors import ConnectionErrors

from core.config import Settings, get_settings
from core.errors import DeliveryError

logger = logging.getLogger(__name__)

MAGIC_LINK_SUBJECT = "Verify your email"


def render_magic_link_email(email: str, link: str) -> str:
    """HTML body for the sign-in email."""
    return (
        f'<font color="black"><strong>Hi {email},</strong> welcome aboard.</font>'
        "<br /><br />Use the link below to sign in. It expires in a few minutes"
        " and can only be used once.<br/><br/>"
        f'<a style="background-color:#0084C8; color:white; padding:10px 20px;'
        f' border-radius:30px; text-align:center; text-decoration:none" href="{link}">'
        "Verify Email</a><br/><br/>"
    )


class MagicLinkMailer:
    """Sends magic links through SMTP using fastapi-mail."""

    def __init__(self, settings: Settings):
        self.conf = ConnectionConfig(
            MAIL_USERNAME=settings.smtp_email,
            MAIL_PASSWORD=settings.smtp_password,
            MAIL_FROM=settings.smtp_email,
            MAIL_FROM_NAME=settings.smtp_sender_name,
            MAIL_PORT=settings.smtp_port,
            MAIL_SERVER=settings.smtp_host,
            MAIL_STARTTLS=settings.smtp_port == 587,
            MAIL_SSL_TLS=settings.smtp_port == 465,
            USE_CREDENTIALS=bool(settings.smtp_password),
            SUPPRESS_SEND=1 if settings.smtp_suppress_send else 0,
        )
        self.client = FastMail(self.conf)

    def build_message(self, address: str, link: str) -> MessageSchema:
        return MessageSchema(
            subject=MAGIC_LINK_SUBJECT,
            recipients=[address],
            body=render_magic_link_email(address, link),
            subtype=MessageType.html,
        )

    async def send(self, address: str, link: str) -> None:
        try:
            await self.client.send_message(self.build_message(address, link))
        except ConnectionErrors as e:
            logger.error(f"Failed to deliver magic link to {address}: {e}")
            raise DeliveryError("Failed to send magic link email")
        logger.info(f"Magic link sent to {address}")


def get_mailer(settings: Settings = Depends(get_settings)) -> MagicLinkMailer:
    return MagicLinkMailer(settings)
