"""
Overpass API client

Handles communication with Overpass API including:
- Rate limiting
- Retry logic
- Error handling
"""

import time
import requests
from typing import Dict, Any, Optional
from loguru import logger

from ..config import APIConfig, get_config


class OverpassAPIClient:
    """Client for interacting with Overpass API"""

    def __init__(self, api_config: Optional[APIConfig] = None):
        self.api = api_config or get_config().api
        self.overpass_url = self.api.overpass_url
        self.timeout = self.api.overpass_timeout
        self._last_request_time = 0.0
        self._min_request_interval = self.api.min_request_interval

    def _rate_limit(self):
        """Ensure we don't exceed rate limits"""
        elapsed = time.time() - self._last_request_time
        if elapsed < self._min_request_interval:
            time.sleep(self._min_request_interval - elapsed)
        self._last_request_time = time.time()

    def road_network_query(self, south: float, west: float, north: float, east: float) -> str:
        """Overpass QL for all highway ways (and their nodes) inside a box"""
        return f"""
        [out:json][timeout:{self.timeout}];
        (
            way["highway"]({south},{west},{north},{east});
            node["name"]({south},{west},{north},{east});
        );
        (._;>;);
        out body;
        """

    def query(self, query: str) -> Dict[str, Any]:
        """
        Execute Overpass API query with retry logic

        Args:
            query: Overpass QL query string

        Returns:
            JSON response from Overpass API

        Raises:
            RuntimeError: If query fails after all retries
        """
        self._rate_limit()

        headers = {
            "User-Agent": self.api.user_agent,
            "Content-Type": "application/x-www-form-urlencoded"
        }
        max_retries = self.api.max_retries
        retry_delay = self.api.retry_delay

        for attempt in range(max_retries):
            try:
                response = requests.post(
                    self.overpass_url,
                    data={"data": query},
                    headers=headers,
                    timeout=self.timeout
                )
                response.raise_for_status()
                return response.json()
            except requests.exceptions.Timeout:
                if attempt < max_retries - 1:
                    wait_time = retry_delay * (attempt + 1)
                    logger.warning(f"Overpass timeout (attempt {attempt + 1}/{max_retries}). Retrying in {wait_time}s...")
                    time.sleep(wait_time)
                else:
                    logger.error(f"Overpass timeout after {max_retries} attempts")
                    raise RuntimeError(f"Overpass API timeout after {max_retries} attempts")
            except requests.exceptions.HTTPError as e:
                status = e.response.status_code if e.response is not None else None
                if status in (429, 504) and attempt < max_retries - 1:
                    wait_time = retry_delay * (attempt + 1)
                    logger.warning(f"Overpass {status} (attempt {attempt + 1}/{max_retries}). Retrying in {wait_time}s...")
                    time.sleep(wait_time)
                else:
                    logger.error(f"Overpass HTTP {status} after {attempt + 1} attempts")
                    raise RuntimeError(f"Overpass API HTTP error {status}") from e
            except requests.exceptions.RequestException as e:
                if attempt < max_retries - 1:
                    logger.warning(f"Overpass request failed (attempt {attempt + 1}): {e}")
                    time.sleep(retry_delay * (attempt + 1))
                else:
                    logger.error(f"Overpass request failed after {max_retries} attempts: {e}")
                    raise RuntimeError(f"Overpass API request failed after {max_retries} attempts: {e}") from e

        return {"elements": []}
