"""
Shared pytest fixtures for the test suite
"""

import json

import pytest
from unittest.mock import Mock

from tickers_generator.config import Config, FeedConfig, GCPConfig, PageConfig
from tickers_generator.models import Instrument


@pytest.fixture
def valid_rows():
    """Feed rows in positional layout: ticker, short name, long name, ISIN, type"""
    return [
        ["AAPL", "Apple", "Apple Inc.", "US0378331005", "Stock"],
        ["BRK A", "Berkshire A", "Berkshire Hathaway Inc. Class A", "US0846701086", "Stock"],
        ["OTP", "OTP Bank", "OTP Bank Nyrt.", "HU0000061726", "Stock"],
        ["CSPX", "iShares S&P 500", "iShares Core S&P 500 UCITS ETF", "IE00B5BMR087", "ETF"],
        ["BRK B", "Berkshire B", "Berkshire Hathaway Inc. Class B", "US0846707026", "Stock"],
        ["HUBOND", "HU Bond 2030", "Hungarian Government Bond 2030", "HU0000403118", "Bond"],
    ]


@pytest.fixture
def feed_body(valid_rows):
    """Raw feed body as served over HTTP"""
    return json.dumps({"data": valid_rows})


@pytest.fixture
def instruments(valid_rows):
    """Validated instruments built from the sample rows"""
    return [Instrument.from_row(row) for row in valid_rows]


@pytest.fixture
def config():
    """Test configuration (no environment lookups)"""
    return Config(
        feed=FeedConfig(data_url="https://example.com/basedata.json", instrument_types=["Stock", "ETF"]),
        gcp=GCPConfig(bucket="test-bucket"),
        page=PageConfig(screener_url="https://finviz.com/screener.ashx?v=111&t=", ga_tracking_id=None),
    )


@pytest.fixture
def mock_gcs_client():
    """Mock GCS client for testing"""
    mock_client = Mock()
    mock_bucket = Mock()
    mock_blob = Mock()
    mock_client.bucket.return_value = mock_bucket
    mock_bucket.blob.return_value = mock_blob
    return mock_client, mock_bucket, mock_blob


@pytest.fixture
def mock_feed_client(feed_body):
    """Feed client returning the sample feed body"""
    mock_client = Mock()
    mock_client.fetch.return_value = feed_body
    return mock_client
