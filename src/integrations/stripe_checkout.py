"""
Stripe Checkout integration.

Confirms that a checkout session is paid and yields the purchaser's email.

Usage:
    from integrations.stripe_checkout import StripeCheckoutClient

    client = StripeCheckoutClient(settings)
    session = client.retrieve_session("cs_test_a1b2c3")
    print(session.payment_status)
"""

import logging
from typing import Optional
from urllib.parse import quote

import requests

from config import Settings
from domain.errors import PaymentVerificationError
from domain.models import PaymentSession
from integrations import is_success

logger = logging.getLogger(__name__)


class StripeCheckoutClient:
    """PaymentVerifier backed by the Stripe REST API."""

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.base_url = settings.stripe_api_base
        self.timeout = settings.http_timeout
        self.http = session or requests.Session()
        self.http.headers.update({'Authorization': f"Bearer {settings.stripe_secret_key}"})

    def retrieve_session(self, session_id: str) -> PaymentSession:
        """
        Retrieve a checkout session.

        Args:
            session_id: Stripe Checkout session id (e.g. "cs_test_...")

        Returns:
            PaymentSession: Email and payment status of the session

        Raises:
            PaymentVerificationError: If Stripe answers with a non-2xx status
        """
        url = f"{self.base_url}/v1/checkout/sessions/{quote(session_id, safe='')}"
        logger.info(f"Retrieving Stripe checkout session: {session_id}")

        response = self.http.get(url, timeout=self.timeout)

        if not is_success(response):
            logger.error(
                f"Stripe session lookup failed: status={response.status_code}, "
                f"error={response.text}"
            )
            raise PaymentVerificationError(
                f"Stripe returned {response.status_code} for session {session_id}",
                error_text=response.text,
                status_code=response.status_code
            )

        return PaymentSession.from_stripe(response.json())
