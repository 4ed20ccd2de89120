"""
Instrument Feed Client

Retrieves the raw instrument feed over HTTP. The body is returned untouched;
parsing and validation belong to the validator.
"""

import logging
import time
from typing import Optional

import requests

from ..errors import FeedError
from ..utils.logger import log_api_call

logger = logging.getLogger(__name__)

DEFAULT_DATA_URL = 'https://randomcapital.hu/uploads/ik/basedata.json'


class FeedClient:
    """Single-shot HTTP client for the instrument feed (no retries)"""

    def __init__(
        self,
        data_url: str = DEFAULT_DATA_URL,
        timeout: int = 30,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.data_url = data_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': 'TickersGenerator/1.0.0'})
        self.logger = logger or logging.getLogger(__name__)

    def fetch(self) -> str:
        """
        Download the feed body.

        Returns:
            str: Response body as text

        Raises:
            FeedError: Transport failure or non-200 status
        """
        self.logger.info(f"Fetching instrument feed from {self.data_url}")
        start_time = time.time()

        try:
            response = self.session.get(self.data_url, timeout=self.timeout)
        except requests.RequestException as e:
            raise FeedError(f"failed to fetch instrument feed: {e}", self.data_url) from e

        log_api_call(self.logger, 'GET', self.data_url, response.status_code, time.time() - start_time)

        if response.status_code != 200:
            raise FeedError(f"got non 200 response, status code: {response.status_code}", response.status_code)

        # Feed is UTF-8 regardless of what the server declares
        response.encoding = 'utf-8'
        return response.text

    def close(self):
        """Close the underlying session"""
        self.session.close()
