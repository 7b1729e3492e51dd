"""
Upstream API integrations: Stripe (payment verification), Supabase Storage
(signed download links) and SendGrid (email delivery).
"""


def is_success(response) -> bool:
    """True only for 2xx responses (requests' .ok also accepts 3xx)."""
    return 200 <= response.status_code < 300
