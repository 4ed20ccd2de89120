"""
GCS Publisher for the Tickers Page

Uploads the rendered HTML document to a public GCS bucket under a fixed
object name, overwriting the previous run's page.
"""

import logging
from typing import Optional

from google.api_core.exceptions import GoogleAPIError
from google.cloud import storage

from ..errors import PublishError
from ..utils.gcs_client import get_shared_gcs_client

logger = logging.getLogger(__name__)

HTML_CONTENT_TYPE = 'text/html; charset=utf-8'
DEFAULT_OBJECT_NAME = 'tickers.html'


class TickersGCSPublisher:
    """Publishes the tickers page to GCS"""

    def __init__(
        self,
        bucket_name: str,
        object_name: str = DEFAULT_OBJECT_NAME,
        client: Optional[storage.Client] = None,
        project: Optional[str] = None,
        upload_timeout: int = 60,
        logger: Optional[logging.Logger] = None,
    ):
        self.bucket_name = bucket_name
        self.object_name = object_name
        self.upload_timeout = upload_timeout
        self.client = client or get_shared_gcs_client(project)
        self.bucket = self.client.bucket(bucket_name)
        self.logger = logger or logging.getLogger(__name__)

    @property
    def gcs_path(self) -> str:
        return f"gs://{self.bucket_name}/{self.object_name}"

    def publish(self, html: str) -> str:
        """
        Upload the HTML document.

        Args:
            html: Rendered page

        Returns:
            str: GCS path of the uploaded object

        Raises:
            PublishError: Upload failed
        """
        self.logger.info(f"Uploading tickers page to {self.gcs_path} ({len(html)} characters)")

        try:
            blob = self.bucket.blob(self.object_name)
            blob.upload_from_string(
                html.encode('utf-8'),
                content_type=HTML_CONTENT_TYPE,
                timeout=self.upload_timeout,
                retry=None,
            )
        except GoogleAPIError as e:
            raise PublishError(f"failed to upload tickers page: {e}", self.gcs_path) from e

        self.logger.info(f"Uploaded tickers page: {self.gcs_path}")
        return self.gcs_path
