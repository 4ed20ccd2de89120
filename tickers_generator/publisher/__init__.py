"""
Publisher Module

Uploads the rendered tickers page to GCS.
"""

from .gcs_publisher import DEFAULT_OBJECT_NAME, HTML_CONTENT_TYPE, TickersGCSPublisher

__all__ = ['DEFAULT_OBJECT_NAME', 'HTML_CONTENT_TYPE', 'TickersGCSPublisher']
