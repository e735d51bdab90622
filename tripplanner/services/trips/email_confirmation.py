import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.utils import formataddr
from typing import Optional
from uuid import UUID

from tripplanner.core.config import settings
from tripplanner.core.errors import DependencyFailureError
from tripplanner.services.trips.notification import ConfirmationContext, DeliveryResult


def build_trip_confirmation_link(api_base_url: str, trip_id: UUID) -> str:
    return f"{api_base_url.rstrip('/')}/trips/{trip_id}/confirm"


def build_participant_confirmation_link(api_base_url: str, participant_id: UUID) -> str:
    return f"{api_base_url.rstrip('/')}/participants/{participant_id}/confirm"


def render_confirmation_html(context: ConfirmationContext) -> str:
    if context.is_owner:
        intro = (
            f"You requested a trip to <strong>{context.destination}</strong> "
            f"from <strong>{context.starts_on}</strong> to <strong>{context.ends_on}</strong>."
        )
        action = "Confirm trip"
    else:
        intro = (
            f"You have been invited to join a trip to <strong>{context.destination}</strong> "
            f"from <strong>{context.starts_on}</strong> to <strong>{context.ends_on}</strong>."
        )
        action = "Confirm attendance"

    return f"""
    <div style="font-family: sans-serif; font-size: 16px; line-height:1.6">
        <p>{intro}</p>
        <br>
        <p>To confirm, click the link below:</p>
        <br>
        <p>
            <a href="{context.confirmation_link}">{action}</a>
        </p>
        <br>
        <p>If you don't know what this email is about, just ignore it.</p>
    </div>
    """.strip()


class SmtpConfirmationNotifier:
    def __init__(
        self,
        host: str,
        port: int,
        user: Optional[str] = None,
        password: Optional[str] = None,
        use_ssl: bool = True,
        sender_name: str = settings.MAIL_SENDER_NAME,
        sender_address: str = settings.MAIL_SENDER_ADDRESS,
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.use_ssl = use_ssl
        self.sender_name = sender_name
        self.sender_address = sender_address

    @classmethod
    def from_settings(cls) -> "SmtpConfirmationNotifier":
        return cls(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            user=settings.SMTP_USER,
            password=settings.SMTP_PASSWORD,
            use_ssl=settings.SMTP_USE_SSL,
            sender_name=settings.MAIL_SENDER_NAME,
            sender_address=settings.MAIL_SENDER_ADDRESS,
        )

    def build_message(
        self,
        recipient_name: str,
        recipient_email: str,
        subject: str,
        context: ConfirmationContext,
    ) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["From"] = formataddr((self.sender_name, self.sender_address))
        message["To"] = formataddr((recipient_name, recipient_email)) if recipient_name else recipient_email
        message["Subject"] = subject
        message.attach(MIMEText(render_confirmation_html(context), "html"))
        return message

    def _connect(self) -> smtplib.SMTP:
        if self.use_ssl:
            return smtplib.SMTP_SSL(self.host, self.port)
        return smtplib.SMTP(self.host, self.port)

    def send_confirmation(
        self,
        recipient_name: str,
        recipient_email: str,
        subject: str,
        context: ConfirmationContext,
    ) -> DeliveryResult:
        message = self.build_message(recipient_name, recipient_email, subject, context)

        try:
            with self._connect() as server:
                if self.user:
                    server.login(self.user, self.password or "")
                server.sendmail(self.sender_address, [recipient_email], message.as_string())
        except (smtplib.SMTPException, OSError) as e:
            raise DependencyFailureError(f"SMTP delivery to {recipient_email} failed: {e}") from e

        return DeliveryResult(recipient_email=recipient_email, subject=subject)
