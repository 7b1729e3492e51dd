"""
SendGrid integration.

Sends transactional HTML email through the SendGrid v3 Mail Send API.
"""

import logging
from typing import Any, Dict, Optional

import requests

from config import Settings
from domain.errors import EmailDeliveryError
from domain.models import EmailMessage
from integrations import is_success

logger = logging.getLogger(__name__)

SENDER_EMAIL = 'info@bonilifecoaching.com.au'
SENDER_NAME = 'Boni Life Coaching'
REPLY_TO_EMAIL = 'bonilifecoaching@gmail.com.ar'


def build_payload(message: EmailMessage) -> Dict[str, Any]:
    """
    Convert an EmailMessage into SendGrid's personalization/content schema.

    Args:
        message: Message to send

    Returns:
        Dict ready to be sent as the JSON request body
    """
    return {
        'personalizations': [
            {
                'to': [{'email': message.recipient}],
                'subject': message.subject,
            }
        ],
        'from': {'email': SENDER_EMAIL, 'name': SENDER_NAME},
        'reply_to': {'email': REPLY_TO_EMAIL},
        'content': [
            {
                'type': 'text/html',
                'value': message.html_body,
            }
        ],
    }


class SendGridMailer:
    """Mailer backed by the SendGrid REST API."""

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.url = f"{settings.sendgrid_api_base}/v3/mail/send"
        self.timeout = settings.http_timeout
        self.http = session or requests.Session()
        self.http.headers.update({
            'Authorization': f"Bearer {settings.sendgrid_api_key}",
            'Content-Type': 'application/json',
        })

    def send(self, message: EmailMessage) -> None:
        """
        Send an email.

        Raises:
            EmailDeliveryError: If SendGrid answers with a non-2xx status
        """
        response = self.http.post(self.url, json=build_payload(message), timeout=self.timeout)

        if not is_success(response):
            logger.error(
                f"❌ SendGrid email error: status={response.status_code}, "
                f"error={response.text}"
            )
            raise EmailDeliveryError(
                f"SendGrid error: {response.text}",
                error_text=response.text,
                status_code=response.status_code
            )

        logger.info(f"SendGrid accepted email for {message.recipient} (status={response.status_code})")
