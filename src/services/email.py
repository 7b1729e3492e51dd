"""
Download email composition.

Builds the message sent to a purchaser once their payment is confirmed.
"""

import html
import logging

from domain.models import EmailMessage, SignedDownloadLink
from services import templates as template_service

logger = logging.getLogger(__name__)

DOWNLOAD_EMAIL_TEMPLATE = 'download_email.html'
DOWNLOAD_EMAIL_SUBJECT = '📘 Your digital book is ready to download!'


def build_download_email(recipient: str, link: SignedDownloadLink) -> EmailMessage:
    """
    Build the email carrying the signed download link.

    Args:
        recipient: Purchaser email address
        link: Signed download link to embed

    Returns:
        EmailMessage: Message ready for the mailer

    Raises:
        ValueError: If the template can't be loaded or formatted

    Example:
        >>> link = SignedDownloadLink(url="https://abc.supabase.co/storage/v1/object/sign/x")
        >>> message = build_download_email("buyer@example.com", link)
        >>> message.subject
        '📘 Your digital book is ready to download!'
    """
    if not recipient:
        raise ValueError("Email recipient cannot be empty")

    template = template_service.load_template(DOWNLOAD_EMAIL_TEMPLATE)
    html_body = template_service.format_template(
        template,
        download_url=html.escape(link.url, quote=True),
        expires_in=link.expiry_text
    )

    logger.info(f"Built download email for {recipient}: {len(html_body)} characters")

    return EmailMessage(
        recipient=recipient,
        subject=DOWNLOAD_EMAIL_SUBJECT,
        html_body=html_body
    )
