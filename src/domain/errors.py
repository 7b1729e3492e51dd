"""
Error taxonomy for the fulfillment workflow.

Each upstream API failure maps to one exception type so the processor can
decide how it is surfaced to the caller.
"""

from typing import Optional


class UpstreamError(Exception):
    """
    Raised when an upstream API call does not succeed.

    Attributes:
        error_text: Response text returned by the provider
        status_code: HTTP status returned by the provider (None if no call was made)
    """

    def __init__(self, message: str, error_text: str = '', status_code: Optional[int] = None):
        super().__init__(message)
        self.error_text = error_text
        self.status_code = status_code


class PaymentVerificationError(UpstreamError):
    """Raised when the Stripe checkout session cannot be retrieved."""
    pass


class SignedUrlError(UpstreamError):
    """Raised when Supabase Storage refuses to sign the download URL."""
    pass


class EmailDeliveryError(UpstreamError):
    """Raised when SendGrid rejects the email."""
    pass
