"""Contact form delivery."""

from lanmic_site.core.logging_config import get_logger
from lanmic_site.core.models.io.misc import ContactRequest

from .email_service import EmailDeliveryError, EmailService

logger = get_logger(__name__)

SUCCESS_MESSAGE = "Thank you for your message! We will get back to you within 24 hours."
FAILURE_MESSAGE = (
    "We apologize, but there was an error processing your message. "
    "Please try again or contact us directly."
)


class ContactService:
    def __init__(self, email_service: EmailService) -> None:
        self.email_service = email_service

    async def submit(self, form: ContactRequest) -> bool:
        """Notify the company, then thank the sender.

        Returns:
            True when the company notification was delivered. A failed
            confirmation to the sender is logged but does not fail the
            submission.
        """
        try:
            await self.email_service.send_contact_notification(
                name=form.name,
                email=form.email,
                message=form.message,
                phone=form.phone,
                company=form.company,
            )
        except EmailDeliveryError as e:
            logger.error(f"Failed to deliver contact form from {form.email}: {e}")
            return False

        try:
            await self.email_service.send_contact_confirmation(form.name, form.email)
        except EmailDeliveryError as e:
            logger.error(f"Failed to send contact confirmation to {form.email}: {e}")

        logger.info(f"Contact form submitted successfully from {form.email}")
        return True
