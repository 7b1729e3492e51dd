"""
Supabase Storage integration.

Exchanges a storage object path for a time-limited signed download URL.
"""

import logging
from typing import Optional
from urllib.parse import quote

import requests

from config import SIGNED_URL_EXPIRY_SECONDS, Settings
from domain.errors import SignedUrlError
from domain.models import SignedDownloadLink
from integrations import is_success

logger = logging.getLogger(__name__)


class SupabaseStorageClient:
    """LinkSigner backed by the Supabase Storage REST API."""

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.storage_base_url = settings.storage_base_url
        self.timeout = settings.http_timeout
        self.http = session or requests.Session()
        self.http.headers.update({
            'Authorization': f"Bearer {settings.supabase_service_role_key}",
            'Content-Type': 'application/json',
        })

    def create_signed_url(
        self,
        bucket: str,
        object_path: str,
        expires_in: int = SIGNED_URL_EXPIRY_SECONDS
    ) -> SignedDownloadLink:
        """
        Create a signed URL for an object.

        Args:
            bucket: Storage bucket name
            object_path: Object path inside the bucket (URL-encoded here)
            expires_in: Link validity in seconds

        Returns:
            SignedDownloadLink: Absolute signed URL and its validity

        Raises:
            SignedUrlError: If storage answers with a non-2xx status

        Example:
            >>> link = client.create_signed_url("downloads", "book.pdf", 3600)
            >>> link.url
            'https://abc.supabase.co/storage/v1/object/sign/downloads/book.pdf?token=...'
        """
        encoded_path = quote(object_path, safe='')
        url = f"{self.storage_base_url}/object/sign/{bucket}/{encoded_path}"
        logger.info(f"Requesting signed URL: bucket={bucket}, path={object_path}, expires_in={expires_in}s")

        response = self.http.post(url, json={'expiresIn': expires_in}, timeout=self.timeout)

        if not is_success(response):
            logger.error(
                f"❌ Error generating signed URL: status={response.status_code}, "
                f"error={response.text}"
            )
            raise SignedUrlError(
                "Supabase signed URL failed",
                error_text=response.text,
                status_code=response.status_code
            )

        signed_path = response.json()['signedURL']

        return SignedDownloadLink(
            url=f"{self.storage_base_url}/{signed_path.lstrip('/')}",
            expires_in_seconds=expires_in
        )
