"""Canvas API client for making authenticated requests."""

import logging
from typing import Dict, Any, List, Union

import requests

from constants import PER_PAGE, REQUEST_TIMEOUT

logger = logging.getLogger(__name__)


class CanvasAPIError(Exception):
    """Custom exception for Canvas API errors."""
    pass


class CanvasClient:
    """
    Client for interacting with the Canvas LMS API.

    Canvas allows roughly 700 requests per 10 minutes per token. The client
    does no throttling; callers stay under that budget.
    """

    def __init__(self, domain: str, token: str, per_page: int = PER_PAGE,
                 timeout: int = REQUEST_TIMEOUT) -> None:
        """Initialize the Canvas API client."""
        if not domain or not token:
            raise ValueError("Canvas API domain and token are required")

        self.base_url = f"https://{domain.strip('/')}/api/v1"
        self.per_page = per_page
        self.timeout = timeout
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json"
        }
        self.session = requests.Session()
        self.session.headers.update(self.headers)

    def page_url(self, endpoint: str, page: int) -> str:
        """Build the URL for one page of endpoint."""
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        separator = "&" if "?" in url else "?"
        return f"{url}{separator}per_page={self.per_page}&page={page}"

    def _request(self, url: str) -> Any:
        logger.debug("GET %s", url)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise CanvasAPIError(f"Canvas API request failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise CanvasAPIError(
                f"Canvas API returned a non-JSON response ({response.status_code}): {response.text}"
            ) from e

        # Canvas reports failures as {"errors": ...}, often with a 4xx status
        if isinstance(data, dict) and "errors" in data:
            raise CanvasAPIError(response.text)

        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise CanvasAPIError(f"Canvas API request failed: {e}") from e

        return data

    def get(self, endpoint: str) -> Union[List[Dict[str, Any]], Dict[str, Any]]:
        """
        GET endpoint, following page-based pagination.

        List pages are accumulated until a page comes back shorter than
        per_page. A non-list response is returned as-is.
        """
        all_results: List[Dict[str, Any]] = []
        page = 1

        while True:
            data = self._request(self.page_url(endpoint, page))

            if not isinstance(data, list):
                # For non-list responses (single object), return immediately
                return data

            all_results.extend(data)
            if len(data) < self.per_page:
                break
            page += 1

        logger.debug("Fetched %d item(s) from %s over %d page(s)", len(all_results), endpoint, page)
        return all_results
