"""
Page Fetcher

Fetches storefront pages over HTTP with retries and linear backoff.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass

import requests

from ..common.constants import DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)


class NavigationError(Exception):
    """Raised when a page could not be loaded after all retries."""


@dataclass
class FetchedPage:
    """HTML of a loaded page and where it ended up after redirects."""
    url: str
    final_url: str
    status_code: int
    html: str


class PageFetcher:
    """
    Loads pages with a shared session.

    Usage:
        with PageFetcher(timeout=90, retries=3) as fetcher:
            page = fetcher.navigate("https://shop.example/collections")
    """

    BACKOFF_SECONDS = 2

    def __init__(
        self,
        timeout: float = 90,
        retries: int = 3,
        wait_time: float = 0,
        user_agent: str = DEFAULT_USER_AGENT,
        session: requests.Session | None = None,
    ):
        """
        Initialize the fetcher.

        Args:
            timeout: Request timeout in seconds
            retries: Attempts per URL (at least 1)
            wait_time: Pause after each successful load in seconds
            user_agent: User-Agent header sent with every request
            session: Optional pre-configured session
        """
        self.timeout = timeout
        self.retries = max(1, retries)
        self.wait_time = wait_time
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        })
        self.pages_loaded = 0

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def navigate(self, url: str) -> FetchedPage:
        """
        Load a page, retrying on failure.

        After failed attempt n the fetcher waits 2*n seconds before retrying.

        Raises:
            NavigationError: If every attempt failed
        """
        last_error: Exception | None = None

        for attempt in range(1, self.retries + 1):
            try:
                response = self.session.get(url, timeout=self.timeout)
                response.raise_for_status()

                if attempt > 1:
                    logger.info("Loaded %s on attempt %d", url, attempt)

                if self.wait_time:
                    time.sleep(self.wait_time)

                self.pages_loaded += 1
                return FetchedPage(
                    url=url,
                    final_url=response.url or url,
                    status_code=response.status_code,
                    html=response.text,
                )
            except requests.RequestException as e:
                last_error = e
                logger.warning("Navigation attempt %d/%d to %s failed: %s",
                               attempt, self.retries, url, e)

                if attempt < self.retries:
                    wait = self.BACKOFF_SECONDS * attempt
                    logger.info("Waiting %ds before retry...", wait)
                    time.sleep(wait)

        raise NavigationError(
            f"Failed to navigate to {url} after {self.retries} attempts: {last_error}"
        )


def save_html(html: str, filename: str, directory: str) -> str:
    """
    Save page HTML for debugging.

    Returns:
        Path of the written file
    """
    os.makedirs(directory, exist_ok=True)
    filepath = os.path.join(directory, filename)
    with open(filepath, "w", encoding="utf-8") as f:
        f.write(html)
    logger.debug("Saved HTML content to %s", filepath)
    return filepath
