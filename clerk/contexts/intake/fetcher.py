"""
Job page fetching over HTTP.

Downloads a page and parses it into a JobPage. Pages that render their
content client-side may come back without a description; the watcher
handles that by retrying.
"""

import os

import requests
from dotenv import load_dotenv

from clerk.contexts.intake.exceptions import PageFetchError
from clerk.contexts.intake.logger import _log_debug
from clerk.contexts.intake.page import JobPage

load_dotenv()

# Request timeout in seconds
REQUEST_TIMEOUT = float(os.getenv("CLERK_FETCH_TIMEOUT", "15"))

# Browser-like headers; several job boards reject bare clients
HEADERS = {
    "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}


def fetch_page(url: str, session: requests.Session = None, timeout: float = REQUEST_TIMEOUT) -> JobPage:
    """
    Download a URL and parse it into a JobPage.

    The page URL is the final URL after redirects.

    Args:
        url: Job page URL
        session: Optional requests session (reused across retries)
        timeout: Request timeout in seconds

    Returns:
        Parsed JobPage

    Raises:
        PageFetchError: On network errors, timeouts or non-2xx responses
    """
    client = session or requests

    try:
        response = client.get(url, headers=HEADERS, timeout=timeout)
    except requests.exceptions.Timeout:
        raise PageFetchError(f"Request timed out after {timeout}s", url=url)
    except requests.exceptions.RequestException as e:
        raise PageFetchError(f"Network error: {e}", url=url)

    if not response.ok:
        raise PageFetchError(
            "Server returned an error response", url=url, status_code=response.status_code
        )

    _log_debug(f"Fetched {response.url} ({len(response.text)} bytes)")
    return JobPage.from_html(response.text, url=response.url)
