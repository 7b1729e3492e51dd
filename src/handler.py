"""
AWS Lambda handler for fulfilling digital book purchases.

Receives {"session_id": "..."} from an API Gateway / function URL proxy event,
verifies the Stripe payment, signs a Supabase download link and emails it
with SendGrid. Thin layer that delegates to FulfillmentProcessor.
"""

import base64
import json
import logging
import os
from typing import Dict, Any

from config import ConfigurationError, load_settings
from domain.fulfillment import FulfillmentProcessor
from domain.models import FulfillmentResponse
from integrations.sendgrid_mail import SendGridMailer
from integrations.stripe_checkout import StripeCheckoutClient
from integrations.supabase_storage import SupabaseStorageClient

# Configure logging
logger = logging.getLogger()
log_level = logging.getLevelName(os.environ.get('LOG_LEVEL', 'INFO').upper())
logger.setLevel(log_level if isinstance(log_level, int) else logging.INFO)

# Add console handler for local testing (AWS Lambda provides handlers automatically)
if not logger.handlers:
    console_handler = logging.StreamHandler()
    formatter = logging.Formatter('%(levelname)s - %(message)s')
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

# Read configuration once per cold start; missing secrets stop the function here
try:
    settings = load_settings()
except ConfigurationError as e:
    logger.error(f"❌ Handler initialization failed: {e}")
    raise

# Initialize processor once at module level (reused across invocations)
fulfillment_processor = FulfillmentProcessor(
    settings=settings,
    verifier=StripeCheckoutClient(settings),
    signer=SupabaseStorageClient(settings),
    mailer=SendGridMailer(settings)
)


def _request_body(event: Dict[str, Any]) -> str:
    """Extract the raw body text from a proxy event."""
    body = event.get('body') or ''
    if event.get('isBase64Encoded') and body:
        body = base64.b64decode(body).decode('utf-8')
    return body


def _to_proxy_response(response: FulfillmentResponse) -> Dict[str, Any]:
    return {
        'statusCode': response.status_code,
        'headers': {
            'Content-Type': response.content_type
        },
        'body': response.body
    }


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Fulfill a purchase for a Stripe checkout session.

    Expected request body:
    {
        "session_id": "cs_live_..."
    }

    Returns:
        API Gateway proxy response: 200 JSON {message, downloadUrl},
        400 or 500 plain text
    """
    logger.info(f"📥 Request received (environment: {settings.environment})")

    try:
        raw_body = _request_body(event)
    except Exception as e:
        logger.error(f"🔥 Could not read request body: {e}", exc_info=True)
        return _to_proxy_response(FulfillmentResponse.text(500, f"Internal error: {e}"))

    response = fulfillment_processor.process(raw_body)
    logger.info(f"Responding with {response!r}")

    return _to_proxy_response(response)


def health_check(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Simple health check endpoint for monitoring.
    """
    return {
        'statusCode': 200,
        'body': json.dumps({
            'status': 'healthy',
            'environment': settings.environment,
            'bucket': settings.pdf_bucket
        })
    }
