"""Email service for sending one-time verification codes"""

import asyncio
import logging
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Optional

from ...core.config import settings
from ...domain.enums import CodePurpose

logger = logging.getLogger(__name__)

SUBJECTS = {
    CodePurpose.LOGIN: "Your Knotty login code",
    CodePurpose.MFA_SETUP: "Two-Factor Authentication Setup",
    CodePurpose.PASSWORD_RESET: "Reset your Knotty password",
}


class EmailService:

    def __init__(self):
        self.smtp_host = settings.SMTP_HOST
        self.smtp_port = settings.SMTP_PORT
        self.smtp_username = settings.SMTP_USERNAME
        self.smtp_password = settings.SMTP_PASSWORD
        self.smtp_use_tls = settings.SMTP_USE_TLS
        self.from_email = settings.FROM_EMAIL
        self.from_name = settings.FROM_NAME
        self.code_ttl_minutes = settings.VERIFICATION_CODE_EXPIRE_MINUTES

    @property
    def simulate(self) -> bool:
        """Accept mail without sending it when SMTP is unconfigured or simulation is switched on"""
        return settings.EMAIL_SIMULATE or not settings.smtp_configured

    async def send_email(self,
                         to_email: str,
                         subject: str,
                         html_content: str,
                         text_content: Optional[str] = None) -> bool:
        """Send email with HTML content; False when the SMTP server refuses it"""
        if self.simulate:
            logger.info("Email delivery simulated for %s: %s", to_email, subject)
            return True

        msg = MIMEMultipart('alternative')
        msg['Subject'] = subject
        msg['From'] = f"{self.from_name} <{self.from_email}>"
        msg['To'] = to_email

        if text_content:
            msg.attach(MIMEText(text_content, 'plain'))
        msg.attach(MIMEText(html_content, 'html'))

        try:
            await self._send_smtp_email(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Error sending email to %s: %s", to_email, e)
            return False

        logger.info("Email sent to %s: %s", to_email, subject)
        return True

    async def _send_smtp_email(self, msg: MIMEMultipart):
        """Send email via SMTP"""
        def send_sync():
            with smtplib.SMTP(self.smtp_host, self.smtp_port) as server:
                if self.smtp_use_tls:
                    server.starttls()
                server.login(self.smtp_username, self.smtp_password)
                server.send_message(msg)

        # Run in thread pool to avoid blocking
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, send_sync)

    async def send_verification_code(self, to_email: str, code: str, purpose: CodePurpose) -> bool:
        """Send a one-time code for login, MFA enrollment or password reset"""
        purpose = CodePurpose(purpose)
        subject = SUBJECTS[purpose]

        if self.simulate:
            # Only record of a simulated code
            logger.debug("Simulated %s code for %s: %s", purpose.value, to_email, code)

        html_content = f"""
        <div style="font-family: Arial, sans-serif; padding: 20px; max-width: 600px; margin: 0 auto;">
            <h2 style="color: #333;">{subject}</h2>
            <p style="font-size: 16px; color: #666;">Your verification code is:</p>
            <div style="background-color: #f5f5f5; padding: 15px; border-radius: 5px; text-align: center; margin: 20px 0;">
                <h1 style="color: #2196F3; margin: 0; letter-spacing: 5px;">{code}</h1>
            </div>
            <p style="color: #666; font-size: 14px;">This code will expire in {self.code_ttl_minutes} minutes.</p>
            <p style="color: #999; font-size: 12px;">If you didn't request this code, please ignore this email.</p>
        </div>
        """

        text_content = (
            f"Your verification code is: {code}\n"
            f"This code will expire in {self.code_ttl_minutes} minutes."
        )

        return await self.send_email(to_email, subject, html_content, text_content)
