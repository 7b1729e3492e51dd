"""
Runtime configuration for the fulfillment Lambda.

Settings are read from environment variables once per cold start and passed
explicitly to the components that need them.

Usage:
    from config import load_settings

    settings = load_settings()
    print(settings.storage_base_url)
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

# Fixed asset delivered to every purchaser
PDF_BUCKET = 'downloads'
PDF_PATH = 'STEPPING GEMSTONES - Ideas to guide your way.pdf'

# Signed download links are valid for one hour
SIGNED_URL_EXPIRY_SECONDS = 60 * 60

DEFAULT_STRIPE_API_BASE = 'https://api.stripe.com'
DEFAULT_SENDGRID_API_BASE = 'https://api.sendgrid.com'

REQUIRED_VARIABLES = (
    'STRIPE_SECRET_KEY',
    'SUPABASE_URL',
    'SUPABASE_SERVICE_ROLE_KEY',
    'SENDGRID_API_KEY',
)


class ConfigurationError(Exception):
    """Raised when required configuration is invalid or missing."""
    pass


@dataclass(frozen=True)
class Settings:
    """
    Connection strings and secrets for the three upstream APIs.

    Attributes:
        stripe_secret_key: Stripe secret API key (bearer token)
        supabase_url: Supabase project URL, without trailing slash
        supabase_service_role_key: Supabase service role key (bearer token)
        sendgrid_api_key: SendGrid API key (bearer token)
        stripe_api_base: Stripe API root
        sendgrid_api_base: SendGrid API root
        http_timeout: Per-call transport timeout in seconds (None = no timeout)
        environment: Deployment stage label, used in logs and health checks
        pdf_bucket: Storage bucket holding the asset
        pdf_path: Object path of the asset inside the bucket
    """
    stripe_secret_key: str
    supabase_url: str
    supabase_service_role_key: str
    sendgrid_api_key: str
    stripe_api_base: str = DEFAULT_STRIPE_API_BASE
    sendgrid_api_base: str = DEFAULT_SENDGRID_API_BASE
    http_timeout: Optional[float] = None
    environment: str = 'dev'
    pdf_bucket: str = PDF_BUCKET
    pdf_path: str = PDF_PATH

    @property
    def storage_base_url(self) -> str:
        """Root of the Supabase Storage REST API."""
        return f"{self.supabase_url}/storage/v1"

    def __repr__(self) -> str:
        """Representation safe for logging (no secrets)."""
        return (
            f"Settings(supabase_url={self.supabase_url}, "
            f"stripe_api_base={self.stripe_api_base}, "
            f"sendgrid_api_base={self.sendgrid_api_base}, "
            f"http_timeout={self.http_timeout}, environment={self.environment})"
        )


def _read_timeout(environ: Mapping[str, str]) -> Optional[float]:
    raw = (environ.get('HTTP_TIMEOUT_SECONDS') or '').strip()
    if not raw:
        return None

    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigurationError(
            f"HTTP_TIMEOUT_SECONDS must be a number of seconds, got: '{raw}'"
        )

    if timeout <= 0:
        raise ConfigurationError(
            f"HTTP_TIMEOUT_SECONDS must be positive, got: {timeout}"
        )
    return timeout


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Read and validate settings from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Settings: Validated settings

    Raises:
        ConfigurationError: If any required variable is missing or blank,
                            or an optional value is malformed

    Example:
        >>> settings = load_settings({
        ...     'STRIPE_SECRET_KEY': 'sk_test_123',
        ...     'SUPABASE_URL': 'https://abc.supabase.co/',
        ...     'SUPABASE_SERVICE_ROLE_KEY': 'service-role',
        ...     'SENDGRID_API_KEY': 'SG.key',
        ... })
        >>> settings.storage_base_url
        'https://abc.supabase.co/storage/v1'
    """
    if environ is None:
        environ = os.environ

    values = {name: (environ.get(name) or '').strip() for name in REQUIRED_VARIABLES}
    missing = [name for name, value in values.items() if not value]

    if missing:
        raise ConfigurationError(
            f"Missing required environment variable(s): {', '.join(missing)}. "
            f"Please configure them in the Lambda environment."
        )

    settings = Settings(
        stripe_secret_key=values['STRIPE_SECRET_KEY'],
        supabase_url=values['SUPABASE_URL'].rstrip('/'),
        supabase_service_role_key=values['SUPABASE_SERVICE_ROLE_KEY'],
        sendgrid_api_key=values['SENDGRID_API_KEY'],
        stripe_api_base=(environ.get('STRIPE_API_BASE') or DEFAULT_STRIPE_API_BASE).rstrip('/'),
        sendgrid_api_base=(environ.get('SENDGRID_API_BASE') or DEFAULT_SENDGRID_API_BASE).rstrip('/'),
        http_timeout=_read_timeout(environ),
        environment=environ.get('ENVIRONMENT', 'dev'),
    )

    logger.info(f"Configuration loaded: {settings!r}")
    return settings
