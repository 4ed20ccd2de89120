"""
Unit tests for the GCS publisher
"""

import pytest
from google.api_core.exceptions import ServiceUnavailable
from unittest.mock import patch

from tickers_generator.errors import ErrorKind, PublishError
from tickers_generator.publisher.gcs_publisher import HTML_CONTENT_TYPE, TickersGCSPublisher


class TestTickersGCSPublisher:
    def test_init(self, mock_gcs_client):
        mock_client, mock_bucket, _ = mock_gcs_client

        publisher = TickersGCSPublisher("test-bucket", client=mock_client)

        assert publisher.bucket_name == "test-bucket"
        assert publisher.object_name == "tickers.html"
        assert publisher.bucket == mock_bucket
        mock_client.bucket.assert_called_once_with("test-bucket")

    def test_uses_shared_client_by_default(self, mock_gcs_client):
        mock_client, _, _ = mock_gcs_client

        with patch("tickers_generator.publisher.gcs_publisher.get_shared_gcs_client",
                   return_value=mock_client) as mock_shared:
            publisher = TickersGCSPublisher("test-bucket", project="test-project")

        mock_shared.assert_called_once_with("test-project")
        assert publisher.client == mock_client

    def test_publish_success(self, mock_gcs_client):
        mock_client, mock_bucket, mock_blob = mock_gcs_client
        publisher = TickersGCSPublisher("test-bucket", object_name="pages/tickers.html", client=mock_client)

        gcs_path = publisher.publish("<html>Részvény</html>")

        assert gcs_path == "gs://test-bucket/pages/tickers.html"
        mock_bucket.blob.assert_called_once_with("pages/tickers.html")
        mock_blob.upload_from_string.assert_called_once()

        args, kwargs = mock_blob.upload_from_string.call_args
        assert args[0] == "<html>Részvény</html>".encode("utf-8")
        assert kwargs["content_type"] == HTML_CONTENT_TYPE == "text/html; charset=utf-8"
        assert kwargs["retry"] is None

    def test_publish_failure(self, mock_gcs_client):
        mock_client, _, mock_blob = mock_gcs_client
        mock_blob.upload_from_string.side_effect = ServiceUnavailable("backend down")
        publisher = TickersGCSPublisher("test-bucket", client=mock_client)

        with pytest.raises(PublishError) as exc_info:
            publisher.publish("<html></html>")

        assert exc_info.value.kind == ErrorKind.PUBLISH
        assert exc_info.value.invalid_element == "gs://test-bucket/tickers.html"
        assert mock_blob.upload_from_string.call_count == 1
