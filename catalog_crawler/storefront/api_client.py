"""
Shopify Storefront API Client

Thin GraphQL transport for the public Storefront API. Requests are spaced
by a minimum interval; throttling and gateway errors are retried, anything
else is logged and reported as None.
"""

import logging
import time
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)


class StorefrontAPIClient:
    """
    Client for the Shopify Storefront GraphQL API.

    Retried:
    - HTTP 429, 502, 503 and 504, waiting Retry-After seconds when given,
      else 1, 2, 4, ... seconds
    - GraphQL errors with extensions.code THROTTLED (sent with HTTP 200)

    Usage:
        with StorefrontAPIClient("shop.example", token) as client:
            if client.test_connection():
                data = client.graphql_request(query, {"first": 50})
    """

    API_VERSION = "2023-10"
    MAX_RETRIES = 5
    RETRYABLE_STATUS_CODES = {429, 502, 503, 504}
    THROTTLED_CODE = "THROTTLED"

    def __init__(
        self,
        store: str,
        access_token: str,
        api_version: Optional[str] = None,
        min_request_interval: float = 0.5,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            store: Store domain, with or without scheme (e.g. "shop.example")
            access_token: Storefront API access token
            api_version: API version (defaults to API_VERSION)
            min_request_interval: Minimum seconds between requests
            session: Optional requests session (created when omitted)
        """
        for scheme in ("https://", "http://"):
            if store.startswith(scheme):
                store = store[len(scheme):]
        self.store = store.strip("/")
        self.api_version = api_version or self.API_VERSION
        self.graphql_url = f"https://{self.store}/api/{self.api_version}/graphql.json"

        self.session = session or requests.Session()
        self.session.headers.update({
            "X-Shopify-Storefront-Access-Token": access_token,
            "Content-Type": "application/json",
            "Accept": "application/json",
        })

        self.min_request_interval = min_request_interval
        self.requests_made = 0
        self._last_request = 0.0

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self):
        self.session.close()

    def _wait_turn(self):
        wait = self.min_request_interval - (time.time() - self._last_request)
        if wait > 0:
            time.sleep(wait)
        self._last_request = time.time()
        self.requests_made += 1

    @staticmethod
    def _retry_delay(response: Optional[requests.Response], attempt: int) -> float:
        """Retry-After in seconds when numeric, else exponential backoff."""
        header = response.headers.get("Retry-After") if response is not None else None
        if header:
            try:
                return max(float(header), 0)
            except ValueError:
                pass
        return 2 ** attempt

    def _is_throttled(self, errors: Any) -> bool:
        return any(
            isinstance(e, dict) and (e.get("extensions") or {}).get("code") == self.THROTTLED_CODE
            for e in errors
        )

    def graphql_request(
        self,
        query: str,
        variables: Optional[Dict] = None,
        timeout: int = 30
    ) -> Optional[Dict]:
        """
        Run a GraphQL query.

        Args:
            query: GraphQL query document
            variables: Query variables
            timeout: Request timeout in seconds

        Returns:
            The response "data" object, or None on any error
        """
        payload: Dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        for attempt in range(self.MAX_RETRIES):
            self._wait_turn()

            try:
                response = self.session.post(self.graphql_url, json=payload, timeout=timeout)

                if response.status_code in self.RETRYABLE_STATUS_CODES:
                    delay = self._retry_delay(response, attempt)
                    logger.warning("HTTP %d from Storefront API, retry %d/%d in %ss",
                                   response.status_code, attempt + 1, self.MAX_RETRIES, delay)
                    time.sleep(delay)
                    continue

                if response.status_code >= 400:
                    logger.error("Storefront API error %d: %s",
                                 response.status_code, response.text[:200])
                    return None

                body = response.json()
                errors = body.get("errors") or []
                if errors and self._is_throttled(errors):
                    delay = self._retry_delay(None, attempt)
                    logger.warning("Storefront API throttled, retry %d/%d in %ss",
                                   attempt + 1, self.MAX_RETRIES, delay)
                    time.sleep(delay)
                    continue
                if errors:
                    logger.error("GraphQL errors: %s",
                                 "; ".join(e.get("message", str(e)) if isinstance(e, dict) else str(e)
                                           for e in errors))
                    return None

                return body.get("data")

            except requests.exceptions.Timeout:
                logger.error("Storefront API request timed out after %ss", timeout)
                return None
            except requests.exceptions.RequestException as e:
                logger.error("Storefront API request failed: %s", e)
                return None
            except ValueError as e:
                logger.error("Storefront API returned invalid JSON: %s", e)
                return None

        logger.error("Giving up after %d attempts", self.MAX_RETRIES)
        return None

    def test_connection(self) -> bool:
        """Fetch the shop name; True when the token and domain work."""
        data = self.graphql_request("{ shop { name } }")
        if not data or "shop" not in data:
            return False
        logger.info("Connected to: %s", (data["shop"] or {}).get("name", "Unknown"))
        return True
