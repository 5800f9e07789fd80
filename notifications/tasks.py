import logging

from celery import shared_task
from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    autoretry_for=(Exception,),
    retry_backoff=True,
    retry_backoff_max=600,
    retry_jitter=True,
    retry_kwargs={"max_retries": 4},
    ignore_result=True,
    queue='high_priority'
)
def send_email_notification(self, subject, message, recipient_list):
    """
    Sends a plain-text email, retrying with backoff while the mail server is unreachable.
    """
    if not isinstance(recipient_list, list):
        recipient_list = [recipient_list]

    logger.info(
        f"Attempting to send email to {recipient_list} with subject '{subject}'"
    )
    try:
        send_mail(
            subject,
            message,
            settings.EMAIL_HOST_USER or settings.DEFAULT_FROM_EMAIL,
            recipient_list,
            fail_silently=False,
        )
        logger.info(f"Successfully sent email to {recipient_list}")
    except Exception as e:
        logger.error(
            f"Failed to send email to {recipient_list} with subject '{subject}'. Error: {e}",
            exc_info=True,
        )
        # Re-raised so Celery can retry.
        raise
