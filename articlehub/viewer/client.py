import logging

import requests
from pydantic import ValidationError

from ..models.feed import ArticleListResponse

logger = logging.getLogger(__name__)


class FeedError(Exception):
    """Base class for failures while fetching the article feed."""


class BackendUnavailableError(FeedError):
    """The API could not be reached at all."""


class FeedHTTPError(FeedError):
    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Server error: {status_code}")


class InvalidFeedResponseError(FeedError):
    """The API answered, but not with the article list envelope."""


class ArticleFeedClient:
    def __init__(self, api_url: str, timeout: float = 10):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout

    def fetch_articles(self, include_all: bool = True, page=None, limit=None) -> ArticleListResponse:
        params = {}
        if include_all:
            params["includeAll"] = "true"
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit

        logger.info(f"Fetching articles from {self.api_url} with {params}")
        try:
            response = requests.get(self.api_url, params=params, timeout=self.timeout)
        except (requests.ConnectionError, requests.Timeout) as e:
            raise BackendUnavailableError(str(e)) from e

        if not response.ok:
            raise FeedHTTPError(response.status_code, response.text)

        try:
            feed = ArticleListResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            # requests raises a ValueError subclass for non-JSON bodies
            raise InvalidFeedResponseError(f"Unexpected response from {self.api_url}: {e}") from e
        if not feed.success:
            raise InvalidFeedResponseError("API reported an unsuccessful response")

        logger.info(f"Received {feed.count} of {feed.total} articles (page {feed.page}/{feed.pages})")
        return feed
