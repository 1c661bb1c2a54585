"""
SMTP delivery of meeting summaries.
"""
import smtplib
from email.mime.application import MIMEApplication
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import List, Optional

from recap.config import (
    SMTP_HOST,
    SMTP_PORT,
    SMTP_USER,
    SMTP_PASSWORD,
    SMTP_FROM_ADDRESS,
    SMTP_USE_TLS,
)
from recap.email.generator import EmailGenerator
from recap.errors import DeliveryFailed
from recap.utils.logger import get_logger

logger = get_logger(__name__)


class SmtpDispatcher:
    """Sends summaries by email through an SMTP relay."""

    def __init__(self, renderer, host: str = SMTP_HOST, port: int = SMTP_PORT,
                 user: str = SMTP_USER, password: str = SMTP_PASSWORD,
                 from_address: str = SMTP_FROM_ADDRESS, use_tls: bool = SMTP_USE_TLS):
        """
        Initialize the dispatcher.

        Args:
            renderer: ExportRenderer used for the PDF attachment
            host: SMTP host
            port: SMTP port
            user: SMTP username, empty for an unauthenticated relay
            password: SMTP password
            from_address: Envelope and header sender
            use_tls: Whether to issue STARTTLS before sending
        """
        self.renderer = renderer
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.from_address = from_address
        self.use_tls = use_tls
        self.generator = EmailGenerator()

    def build_message(self, summary, sender, recipients: List[str], subject: str,
                      email_format: str, cc: Optional[str] = None) -> MIMEMultipart:
        """Assemble the MIME message for a summary."""
        include_html = email_format in ("html", "both")
        include_pdf = email_format in ("pdf", "both")
        sender_name = sender.full_name or sender.email

        msg = MIMEMultipart("mixed")
        msg["Subject"] = subject
        msg["From"] = f"{sender_name} <{self.from_address}>"
        msg["To"] = ", ".join(recipients)
        msg["Reply-To"] = sender.email
        if cc:
            msg["Cc"] = cc

        body = MIMEMultipart("alternative")
        body.attach(MIMEText(self.generator.generate_text(summary, sender_name), "plain", "utf-8"))
        if include_html:
            html_content = self.generator.generate_html(summary, sender_name, pdf_attached=include_pdf)
            body.attach(MIMEText(html_content, "html", "utf-8"))
        msg.attach(body)

        if include_pdf:
            document = self.renderer.render(summary, "pdf")
            attachment = MIMEApplication(document.content, _subtype="pdf")
            attachment.add_header("Content-Disposition", "attachment", filename=document.filename)
            msg.attach(attachment)

        return msg

    def send_summary(self, summary, sender, recipients: List[str], subject: str,
                     email_format: str, cc_self: bool = False) -> None:
        """
        Send a summary to the recipients.

        Raises:
            DeliveryFailed: if the message could not be built or delivered
        """
        cc = sender.email if cc_self else None
        try:
            msg = self.build_message(summary, sender, recipients, subject, email_format, cc=cc)
            envelope_to = list(recipients) + ([cc] if cc else [])

            with smtplib.SMTP(self.host, self.port) as server:
                if self.use_tls:
                    server.starttls()
                if self.user and self.password:
                    server.login(self.user, self.password)
                server.send_message(msg, from_addr=self.from_address, to_addrs=envelope_to)
        except Exception as e:
            logger.error(f"Failed to send summary {summary.id} to {len(recipients)} recipient(s): {e}")
            raise DeliveryFailed(f"Failed to send email: {e}")

        logger.info(f"Sent summary {summary.id} to {len(recipients)} recipient(s)")
