"""
Tests for the Supabase Storage integration.
"""

import pytest
from unittest.mock import Mock
import requests
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))

from conftest import make_http_response
from domain.errors import SignedUrlError
from integrations.supabase_storage import SupabaseStorageClient

SIGNED_PATH = '/object/sign/downloads/STEPPING%20GEMSTONES%20-%20Ideas%20to%20guide%20your%20way.pdf?token=eyJhbGciOi'


@pytest.fixture
def http_session():
    session = requests.Session()
    session.post = Mock()
    return session


class TestCreateSignedUrl:
    """Test signing download URLs."""

    def test_create_signed_url_success(self, settings, http_session):
        http_session.post.return_value = make_http_response(200, {'signedURL': SIGNED_PATH})
        client = SupabaseStorageClient(settings, session=http_session)

        link = client.create_signed_url(
            'downloads', 'STEPPING GEMSTONES - Ideas to guide your way.pdf', 3600
        )

        assert link.url == f"https://test-project.supabase.co/storage/v1{SIGNED_PATH}"
        assert link.expires_in_seconds == 3600

    def test_request_targets_encoded_path(self, settings, http_session):
        http_session.post.return_value = make_http_response(200, {'signedURL': SIGNED_PATH})
        client = SupabaseStorageClient(settings, session=http_session)

        client.create_signed_url('downloads', 'STEPPING GEMSTONES - Ideas to guide your way.pdf', 3600)

        http_session.post.assert_called_once_with(
            'https://test-project.supabase.co/storage/v1/object/sign/downloads/'
            'STEPPING%20GEMSTONES%20-%20Ideas%20to%20guide%20your%20way.pdf',
            json={'expiresIn': 3600},
            timeout=None
        )

    def test_uses_service_role_bearer_auth(self, settings, http_session):
        SupabaseStorageClient(settings, session=http_session)

        assert http_session.headers['Authorization'] == 'Bearer service-role-test-key'
        assert http_session.headers['Content-Type'] == 'application/json'

    def test_relative_path_without_leading_slash(self, settings, http_session):
        http_session.post.return_value = make_http_response(200, {'signedURL': 'object/sign/downloads/a.pdf?token=t'})
        client = SupabaseStorageClient(settings, session=http_session)

        link = client.create_signed_url('downloads', 'a.pdf', 3600)

        assert link.url == 'https://test-project.supabase.co/storage/v1/object/sign/downloads/a.pdf?token=t'

    def test_redirect_status_is_a_failure(self, settings, http_session):
        http_session.post.return_value = make_http_response(301, text='Moved Permanently')
        client = SupabaseStorageClient(settings, session=http_session)

        with pytest.raises(SignedUrlError):
            client.create_signed_url('downloads', 'a.pdf', 3600)

    def test_non_2xx_raises_signed_url_error(self, settings, http_session):
        http_session.post.return_value = make_http_response(
            400, text='{"statusCode":"404","error":"not_found","message":"Object not found"}'
        )
        client = SupabaseStorageClient(settings, session=http_session)

        with pytest.raises(SignedUrlError, match='^Supabase signed URL failed$') as exc_info:
            client.create_signed_url('downloads', 'missing.pdf', 3600)

        assert 'Object not found' in exc_info.value.error_text
        assert exc_info.value.status_code == 400


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
