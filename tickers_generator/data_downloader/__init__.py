"""
Data Downloader Module

Retrieves the raw instrument feed.
"""

from .feed_client import DEFAULT_DATA_URL, FeedClient

__all__ = ['DEFAULT_DATA_URL', 'FeedClient']
