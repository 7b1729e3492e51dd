"""
Data models for the purchase fulfillment domain.

These type-safe data structures define clear contracts between components.
None of them outlive a single request.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

PAID_STATUS = 'paid'

SUCCESS_MESSAGE = 'Email sent ✅'


@dataclass
class FulfillmentRequest:
    """
    Inbound fulfillment request.

    Attributes:
        session_id: Stripe Checkout session id (None if the caller omitted it)
    """
    session_id: Optional[str] = None

    @classmethod
    def from_json(cls, raw_body: Optional[str]) -> 'FulfillmentRequest':
        """
        Parse the request body.

        Args:
            raw_body: JSON text of the request body (None treated as empty)

        Returns:
            FulfillmentRequest: Parsed request

        Raises:
            json.JSONDecodeError: If the body is not valid JSON
        """
        payload = json.loads(raw_body or '')

        if not isinstance(payload, dict):
            return cls(session_id=None)

        session_id = payload.get('session_id')
        if session_id is not None and not isinstance(session_id, str):
            session_id = str(session_id)

        return cls(session_id=session_id)


@dataclass
class PaymentSession:
    """
    Read-only projection of a Stripe Checkout session.

    Attributes:
        customer_email: Purchaser email (customer_details.email), may be absent
        payment_status: Stripe payment_status value (e.g. "paid", "unpaid")
    """
    customer_email: Optional[str]
    payment_status: Optional[str]

    @classmethod
    def from_stripe(cls, data: Dict[str, Any]) -> 'PaymentSession':
        """Build from a Stripe checkout session JSON object."""
        customer_details = data.get('customer_details') or {}
        return cls(
            customer_email=customer_details.get('email'),
            payment_status=data.get('payment_status'),
        )

    @property
    def is_paid(self) -> bool:
        """Strict check: only "paid" counts as paid."""
        return self.payment_status == PAID_STATUS

    @property
    def can_fulfill(self) -> bool:
        """True when the session is paid and has an email to deliver to."""
        return bool(self.customer_email) and self.is_paid


@dataclass
class SignedDownloadLink:
    """
    Time-limited download URL for the purchased asset.

    Attributes:
        url: Absolute signed URL
        expires_in_seconds: Validity window requested from storage
    """
    url: str
    expires_in_seconds: int = 3600

    @property
    def expiry_text(self) -> str:
        """Human-readable validity window, e.g. "1 hour" or "30 minutes"."""
        seconds = self.expires_in_seconds
        if seconds % 3600 == 0:
            hours = seconds // 3600
            return f"{hours} hour" if hours == 1 else f"{hours} hours"
        if seconds % 60 == 0:
            minutes = seconds // 60
            return f"{minutes} minute" if minutes == 1 else f"{minutes} minutes"
        return f"{seconds} seconds"


@dataclass
class EmailMessage:
    """
    Email ready for dispatch.

    Attributes:
        recipient: Purchaser email address
        subject: Subject line
        html_body: Rendered HTML body
    """
    recipient: str
    subject: str
    html_body: str


@dataclass
class FulfillmentResponse:
    """
    Result of a fulfillment attempt, ready to be returned over HTTP.

    This explicit result type keeps the HTTP mapping in one place.

    Attributes:
        status_code: HTTP status code
        body: Response body text
        content_type: MIME type of the body
    """
    status_code: int
    body: str
    content_type: str = 'text/plain;charset=UTF-8'

    @classmethod
    def ok(cls, download_url: str) -> 'FulfillmentResponse':
        """200 response carrying the download URL."""
        return cls(
            status_code=200,
            body=json.dumps({'message': SUCCESS_MESSAGE, 'downloadUrl': download_url}),
            content_type='application/json',
        )

    @classmethod
    def text(cls, status_code: int, message: str) -> 'FulfillmentResponse':
        """Plain-text response (used for every failure)."""
        return cls(status_code=status_code, body=message)

    @property
    def success(self) -> bool:
        return self.status_code == 200

    def __repr__(self) -> str:
        """Human-readable representation for logging."""
        if self.success:
            return "FulfillmentResponse(status_code=200)"
        return f"FulfillmentResponse(status_code={self.status_code}, body={self.body})"
