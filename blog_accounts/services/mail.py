"""Outbound email over SMTP."""

import logging
import smtplib
from email.message import EmailMessage
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from blog_accounts.config import get_settings
from blog_accounts.errors import UpstreamFailure

logger = logging.getLogger("blog_accounts")

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

_templates = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
)


def render_email(template_name: str, **context) -> str:
    """Render an HTML email body from the templates directory."""
    return _templates.get_template(template_name).render(**context)


class MailService:
    """Sends HTML email through the configured SMTP server."""

    def __init__(self) -> None:
        settings = get_settings()
        self.host = settings.SMTP_HOST
        self.port = settings.SMTP_PORT
        self.username = settings.SMTP_USERNAME
        self.password = settings.SMTP_PASSWORD
        self.use_tls = settings.SMTP_USE_TLS
        self.sender = settings.MAIL_FROM

    def build_message(self, recipient: str, subject: str, html: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = recipient
        message["Subject"] = subject
        message.set_content("This message requires an HTML capable mail client.")
        message.add_alternative(html, subtype="html")
        return message

    def send_html(self, recipient: str, subject: str, html: str) -> None:
        """Send one HTML message. Raises UpstreamFailure if the SMTP exchange fails."""
        message = self.build_message(recipient, subject, html)
        try:
            with smtplib.SMTP(host=self.host, port=self.port) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.username:
                    smtp.login(self.username, self.password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.warning("SMTP delivery to %s:%s failed: %s", self.host, self.port, e)
            raise UpstreamFailure("Failed to send email") from e


_mail_service: MailService | None = None


def get_mail_service() -> MailService:
    """Get singleton mail service instance."""
    global _mail_service
    if _mail_service is None:
        _mail_service = MailService()
    return _mail_service
