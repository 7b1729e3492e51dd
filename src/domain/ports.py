"""
Capabilities the fulfillment workflow depends on.

Concrete implementations live in the integrations package; tests substitute
in-memory fakes.
"""

from typing import Protocol

from .models import EmailMessage, PaymentSession, SignedDownloadLink


class PaymentVerifier(Protocol):
    def retrieve_session(self, session_id: str) -> PaymentSession:
        """Fetch a checkout session. Raises PaymentVerificationError on failure."""
        ...


class LinkSigner(Protocol):
    def create_signed_url(self, bucket: str, object_path: str, expires_in: int) -> SignedDownloadLink:
        """Sign a download URL. Raises SignedUrlError on failure."""
        ...


class Mailer(Protocol):
    def send(self, message: EmailMessage) -> None:
        """Deliver an email. Raises EmailDeliveryError on failure."""
        ...
