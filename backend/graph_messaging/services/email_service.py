import logging
import os
from dataclasses import dataclass
from email.utils import parseaddr
from typing import Optional

from fastapi_mail import FastMail, MessageSchema, ConnectionConfig, MessageType

from graph_messaging.utils.logger import log_error

logger = logging.getLogger(__name__)

PRIVATE_MESSAGE_SUBJECT = "Private Message"


@dataclass
class Notification:
    from_address: str
    to_address: str
    body: str
    subject: str = PRIVATE_MESSAGE_SUBJECT


def mail_domain() -> str:
    return os.getenv("MAIL_DOMAIN", "example.com")


def postmaster_address(display_name: str) -> str:
    """From line for mail relayed on behalf of a registered user."""
    return f"{display_name} <postmaster@{mail_domain()}>"


def get_mail_config() -> ConnectionConfig:
    server = os.getenv("SMTP_SERVER")
    suppress = os.getenv("MAIL_SUPPRESS_SEND", "0") == "1"
    if not server:
        logger.warning("SMTP_SERVER is not set; outgoing message notifications are suppressed")
        suppress = True
    return ConnectionConfig(
        MAIL_USERNAME=os.getenv("SMTP_USER", ""),
        MAIL_PASSWORD=os.getenv("SMTP_PASSWORD", ""),
        MAIL_FROM=os.getenv("MAIL_FROM", f"postmaster@{mail_domain()}"),
        MAIL_PORT=int(os.getenv("SMTP_PORT", "587")),
        MAIL_SERVER=server or "localhost",
        MAIL_STARTTLS=True,
        MAIL_SSL_TLS=False,
        USE_CREDENTIALS=bool(os.getenv("SMTP_USER")),
        SUPPRESS_SEND=1 if suppress else 0,
    )


class EmailNotifier:
    """Delivers message notifications by email.

    Delivery is best effort: failures are logged and reported as False,
    never raised into the send that triggered them.
    """

    def __init__(self, conf: Optional[ConnectionConfig] = None):
        self.conf = conf or get_mail_config()
        self.fm = FastMail(self.conf)

    async def dispatch(self, notification: Notification) -> bool:
        try:
            _, reply_address = parseaddr(notification.from_address)
            message = MessageSchema(
                subject=notification.subject,
                recipients=[notification.to_address],
                body=notification.body,
                subtype=MessageType.plain,
                reply_to=[notification.from_address] if "@" in reply_address else [],
            )
            await self.fm.send_message(message)
            return True
        except Exception as e:
            log_error(f"Failed to deliver notification to {notification.to_address}", e)
            return False


_notifier: Optional[EmailNotifier] = None

def get_notifier() -> EmailNotifier:
    global _notifier
    if _notifier is None:
        _notifier = EmailNotifier()
    return _notifier
