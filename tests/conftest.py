"""
Pytest configuration and fixtures for all tests.
"""

import os
import sys
from unittest.mock import Mock

import pytest

# Add src to Python path before any imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))

# Set up test environment variables before importing any modules
os.environ.setdefault('STRIPE_SECRET_KEY', 'sk_test_123')
os.environ.setdefault('SUPABASE_URL', 'https://test-project.supabase.co')
os.environ.setdefault('SUPABASE_SERVICE_ROLE_KEY', 'service-role-test-key')
os.environ.setdefault('SENDGRID_API_KEY', 'SG.test-key')
os.environ.setdefault('ENVIRONMENT', 'test')
os.environ.setdefault('LOG_LEVEL', 'INFO')


def make_http_response(status_code=200, json_data=None, text=''):
    """Build a stand-in for requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.text = text
    response.json.return_value = json_data
    return response


@pytest.fixture
def settings():
    """Settings built from a fixed environment."""
    from config import load_settings

    return load_settings({
        'STRIPE_SECRET_KEY': 'sk_test_123',
        'SUPABASE_URL': 'https://test-project.supabase.co',
        'SUPABASE_SERVICE_ROLE_KEY': 'service-role-test-key',
        'SENDGRID_API_KEY': 'SG.test-key',
        'ENVIRONMENT': 'test',
    })


@pytest.fixture
def lambda_context():
    """Mock Lambda context."""
    context = Mock()
    context.aws_request_id = "test-request-id"
    context.invoked_function_arn = "arn:aws:lambda:us-west-2:123456789012:function:fulfillment-test"
    context.function_name = "fulfillment-test"
    return context
