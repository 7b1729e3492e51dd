"""
Purchase fulfillment pipeline - core business logic.

This module handles the end-to-end fulfillment of a checkout session:
1. Parse the request body
2. Verify the payment with Stripe
3. Sign a time-limited download URL with Supabase Storage
4. Email the link to the purchaser with SendGrid
5. Return a FulfillmentResponse (success or failure)

All errors are caught and returned as a FulfillmentResponse.
No exceptions propagate out of process().
"""

import logging
import time
from typing import Optional

from config import SIGNED_URL_EXPIRY_SECONDS, Settings
from .errors import PaymentVerificationError
from .models import FulfillmentRequest, FulfillmentResponse, PaymentSession, SignedDownloadLink
from .ports import LinkSigner, Mailer, PaymentVerifier
from services import email as email_service

logger = logging.getLogger(__name__)

VERIFICATION_FAILED_MESSAGE = 'Stripe session verification failed'
PAYMENT_NOT_CONFIRMED_MESSAGE = 'Payment not confirmed or email not found'


class FulfillmentProcessor:
    """
    Handles the verify -> sign -> send pipeline for one checkout session.

    Each step is a single upstream call; the first failure ends the request.
    Nothing is retried and nothing is remembered between requests.
    """

    def __init__(
        self,
        settings: Settings,
        verifier: PaymentVerifier,
        signer: LinkSigner,
        mailer: Mailer
    ):
        self.settings = settings
        self.verifier = verifier
        self.signer = signer
        self.mailer = mailer

    def process(self, raw_body: Optional[str]) -> FulfillmentResponse:
        """
        Fulfill the purchase described by a request body.

        Args:
            raw_body: JSON request body, expected to be {"session_id": "..."}

        Returns:
            FulfillmentResponse: 200 with download URL, 400 if the payment is
            not confirmed, 500 on any upstream or unexpected failure
        """
        start_time = time.time()

        try:
            request = FulfillmentRequest.from_json(raw_body)
            logger.info(f"Starting fulfillment for session_id: {request.session_id}")

            try:
                session = self._verify_payment(request.session_id)
            except PaymentVerificationError as e:
                logger.error(f"❌ Stripe session verification failed: {e.error_text}")
                return FulfillmentResponse.text(500, VERIFICATION_FAILED_MESSAGE)

            if not session.can_fulfill:
                logger.warning(
                    f"⚠ Payment not confirmed or email missing: "
                    f"email={session.customer_email}, payment_status={session.payment_status}"
                )
                return FulfillmentResponse.text(400, PAYMENT_NOT_CONFIRMED_MESSAGE)

            link = self._sign_download_link()
            self._send_email(session.customer_email, link)

            logger.info(
                f"✓ Fulfillment complete for {session.customer_email} "
                f"in {time.time() - start_time:.3f}s"
            )
            return FulfillmentResponse.ok(link.url)

        except Exception as e:
            logger.error(f"🔥 Fulfillment failed: {e}", exc_info=True)
            return FulfillmentResponse.text(500, f"Internal error: {e}")

    def _verify_payment(self, session_id: Optional[str]) -> PaymentSession:
        """
        Look up the checkout session with the payment processor.

        Raises:
            PaymentVerificationError: If the session cannot be retrieved
        """
        if not session_id:
            raise PaymentVerificationError(
                "No session_id in request",
                error_text="Request body has no session_id"
            )

        session = self.verifier.retrieve_session(session_id)

        logger.info(f"Customer email: {session.customer_email}")
        logger.info(f"Payment status: {session.payment_status}")
        return session

    def _sign_download_link(self) -> SignedDownloadLink:
        """
        Request a signed URL for the fixed asset.

        Raises:
            SignedUrlError: If storage refuses to sign (caught by process())
        """
        link = self.signer.create_signed_url(
            self.settings.pdf_bucket,
            self.settings.pdf_path,
            SIGNED_URL_EXPIRY_SECONDS,
        )
        logger.info(f"Signed URL generated: {link.url}")
        return link

    def _send_email(self, recipient: str, link: SignedDownloadLink) -> None:
        """
        Compose and send the download email.

        Raises:
            EmailDeliveryError: If the provider rejects the email (caught by process())
        """
        message = email_service.build_download_email(recipient, link)

        logger.info(f"Sending email to: {recipient}")
        self.mailer.send(message)
        logger.info("✓ Email sent successfully")
