"""
Outbound email service.

Builds MIME messages for the authentication and contact flows and delivers
them over SMTP with aiosmtplib. When SMTP is not configured the message is
not sent: OTP codes are logged so local development keeps working, and an
:class:`EmailDeliveryError` is raised to the caller.
"""

from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, formatdate, make_msgid
from html import escape
from typing import Optional

import aiosmtplib

from lanmic_site.core.logging_config import get_logger
from lanmic_site.server.core.config import SMTPConfig, settings

logger = get_logger(__name__)


class EmailDeliveryError(Exception):
    """Raised when an email could not be handed to the SMTP server."""


def _otp_html(heading: str, intro: str, otp: str, expires_in_minutes: int) -> str:
    return f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
      <h2 style="color: #1f2937;">{escape(heading)}</h2>
      <p>{escape(intro)}</p>
      <div style="font-size: 32px; font-weight: bold; letter-spacing: 8px; padding: 16px;
                  background: #f3f4f6; text-align: center;">{escape(otp)}</div>
      <p>This code expires in {expires_in_minutes} minutes.</p>
      <p style="color: #6b7280;">If you did not request this code you can ignore this email.</p>
    </div>
    """


class EmailService:
    """Send transactional emails through the configured SMTP server."""

    def __init__(self, config: Optional[SMTPConfig] = None) -> None:
        self.config = config or settings.smtp

    @property
    def is_configured(self) -> bool:
        return self.config.is_configured

    def build_message(
        self,
        to: str,
        subject: str,
        html: str,
        text: Optional[str] = None,
        from_name: Optional[str] = None,
        reply_to: Optional[str] = None,
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["From"] = formataddr((from_name or self.config.from_name, self.config.sender_address or ""))
        msg["To"] = to
        msg["Subject"] = subject
        msg["Date"] = formatdate(localtime=True)
        msg["Message-ID"] = make_msgid()
        if reply_to:
            msg["Reply-To"] = reply_to
        if text:
            msg.attach(MIMEText(text, "plain", "utf-8"))
        msg.attach(MIMEText(html, "html", "utf-8"))
        return msg

    async def send(self, msg: MIMEMultipart) -> None:
        """Deliver a message, raising :class:`EmailDeliveryError` on any failure."""
        if not self.is_configured:
            raise EmailDeliveryError("Email service not configured")

        smtp = aiosmtplib.SMTP(
            hostname=self.config.host,
            port=self.config.port,
            use_tls=self.config.use_tls,
            timeout=30,
        )
        try:
            async with smtp:
                await smtp.login(self.config.user, self.config.password)
                await smtp.send_message(msg)
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {msg['To']}: {e}", exc_info=True)
            raise EmailDeliveryError(f"Failed to send email: {e}") from e
        logger.info(f"Email '{msg['Subject']}' sent to {msg['To']}")

    async def _send_otp(self, email: str, otp: str, subject: str, heading: str, intro: str, minutes: int) -> None:
        if not self.is_configured:
            logger.warning(f"SMTP not configured; OTP for {email} is {otp}")
            raise EmailDeliveryError("Email service not configured")
        html = _otp_html(heading, intro, otp, minutes)
        text = f"{intro}\n\nYour code: {otp}\nIt expires in {minutes} minutes."
        await self.send(self.build_message(email, subject, html, text))

    async def send_registration_otp(self, email: str, otp: str, expires_in_minutes: int) -> None:
        await self._send_otp(
            email,
            otp,
            "Complete Your Registration - LANMIC Admin Panel",
            "Verify your email",
            "Use the code below to complete your registration.",
            expires_in_minutes,
        )

    async def send_password_reset_otp(self, email: str, otp: str, expires_in_minutes: int) -> None:
        await self._send_otp(
            email,
            otp,
            "Password Reset OTP - LANMIC Admin",
            "Password reset",
            "Use the code below to reset your password.",
            expires_in_minutes,
        )

    async def send_email_change_otp(self, email: str, otp: str, expires_in_minutes: int) -> None:
        await self._send_otp(
            email,
            otp,
            "Email Change Verification - LANMIC Admin",
            "Confirm your email change",
            "Use the code below to confirm this address for your account.",
            expires_in_minutes,
        )

    async def send_password_reset_success(self, email: str) -> None:
        """Notify the user of a password reset. Failures are logged, never raised."""
        if not self.is_configured:
            logger.warning(f"SMTP not configured; skipping password reset confirmation for {email}")
            return
        html = (
            "<div style=\"font-family: Arial, sans-serif;\"><h2>Password reset successful</h2>"
            "<p>Your LANMIC Admin password has been changed. If this was not you, contact an "
            "administrator immediately.</p></div>"
        )
        try:
            await self.send(self.build_message(email, "Password Reset Successful - LANMIC Admin", html))
        except EmailDeliveryError as e:
            logger.error(f"Password reset confirmation to {email} failed: {e}")

    async def send_contact_notification(
        self,
        name: str,
        email: str,
        message: str,
        phone: Optional[str] = None,
        company: Optional[str] = None,
    ) -> None:
        recipient = self.config.contact_recipient or self.config.sender_address
        if not self.is_configured or not recipient:
            logger.warning(f"Email service not ready; contact form from {email}: {message!r}")
            raise EmailDeliveryError("Company email not configured")
        rows = [("Name", name), ("Email", email), ("Phone", phone or "-"), ("Company", company or "-")]
        table = "".join(f"<tr><td><strong>{k}</strong></td><td>{escape(v)}</td></tr>" for k, v in rows)
        html = (
            f"<div style=\"font-family: Arial, sans-serif;\"><h2>New contact form submission</h2>"
            f"<table>{table}</table><h3>Message</h3><p>{escape(message)}</p></div>"
        )
        msg = self.build_message(
            recipient,
            f"New Contact Form Submission from {name}",
            html,
            from_name="LANMIC Contact Form",
            reply_to=email,
        )
        await self.send(msg)

    async def send_contact_confirmation(self, name: str, email: str) -> None:
        html = (
            f"<div style=\"font-family: Arial, sans-serif;\"><h2>Thank you, {escape(name)}!</h2>"
            "<p>We have received your message and will get back to you within 24 hours.</p>"
            "<p>LANMIC Polymers</p></div>"
        )
        msg = self.build_message(email, "Thank you for contacting LANMIC Polymers", html, from_name="LANMIC Polymers")
        await self.send(msg)


_email_service: Optional[EmailService] = None


def get_email_service() -> EmailService:
    global _email_service
    if _email_service is None:
        _email_service = EmailService()
    return _email_service
