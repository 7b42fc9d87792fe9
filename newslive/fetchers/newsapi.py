"""
NewsAPI fetcher for NewsLive.
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

import aiohttp
import async_timeout

from newslive.core.article import Article, HeadlinesQuery, NewsResponse, SearchQuery

# Configure logging
logger = logging.getLogger(__name__)

BASE_URL = "https://newsapi.org/v2/"
REQUEST_TIMEOUT = 30  # seconds


class NewsApiError(Exception):
    """
    Raised when a NewsAPI request fails in transport or returns an unusable body.
    """
    def __init__(self, message: str, status: Optional[int] = None, code: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.code = code


class NewsApiClient:
    """
    Read-only client for the NewsAPI ``top-headlines`` and ``everything`` endpoints.
    """
    def __init__(self, base_url: str = BASE_URL, api_key: Optional[str] = None,
                 timeout: float = REQUEST_TIMEOUT, session: Optional[aiohttp.ClientSession] = None):
        """
        Initialize the NewsApiClient.

        Args:
            base_url: Root URL of the API, ending with a slash
            api_key: Key sent in the X-Api-Key header, if any
            timeout: Per-request timeout in seconds
            session: Existing session to use instead of creating one
        """
        self.base_url = base_url if base_url.endswith('/') else base_url + '/'
        self.timeout = timeout
        self.headers = {'Accept': 'application/json'}
        if api_key:
            self.headers['X-Api-Key'] = api_key
        self._session = session

    @property
    def session(self):
        """
        Lazy initialization of aiohttp session.

        Returns:
            aiohttp.ClientSession: The HTTP session
        """
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self._session

    async def close_session(self):
        """Close aiohttp session."""
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close_session()

    async def get_top_headlines(self, query: Optional[HeadlinesQuery] = None) -> NewsResponse:
        """
        Fetch top headlines filtered by country, category and keyword.

        Args:
            query: Headline filters, defaults to US headlines

        Returns:
            Parsed response envelope
        """
        return await self._get('top-headlines', (query or HeadlinesQuery()).params())

    async def search_articles(self, query: SearchQuery) -> NewsResponse:
        """
        Search all articles for free text, optionally bounded by date.

        Args:
            query: Search text and date range

        Returns:
            Parsed response envelope
        """
        return await self._get('everything', query.params())

    async def _get(self, endpoint: str, params: Dict[str, str]) -> NewsResponse:
        url = urljoin(self.base_url, endpoint)
        logger.debug(f"GET {url} params={params}")

        try:
            async with async_timeout.timeout(self.timeout):
                async with self.session.get(url, params=params, headers=self.headers) as response:
                    try:
                        payload = await response.json(content_type=None)
                    except ValueError:
                        payload = None
                    if response.status >= 400:
                        raise _error_from_payload(payload, response.status)
        except aiohttp.ClientError as e:
            raise NewsApiError(f"Request to {url} failed: {e}") from e
        except asyncio.TimeoutError as e:
            raise NewsApiError(f"Request to {url} timed out after {self.timeout}s") from e

        result = parse_response(payload)
        logger.info(f"Fetched {len(result.articles)} articles from {endpoint}")
        return result


def parse_response(payload: Any) -> NewsResponse:
    """
    Turn a decoded NewsAPI body into a NewsResponse.

    Args:
        payload: Decoded JSON body

    Returns:
        NewsResponse with keyable articles only

    Raises:
        NewsApiError: If the body is an error envelope or has no articles list
    """
    if not isinstance(payload, dict):
        raise NewsApiError("Malformed response: expected a JSON object")
    if payload.get('status') == 'error':
        raise _error_from_payload(payload, None)

    items = payload.get('articles')
    if not isinstance(items, list):
        raise NewsApiError("Malformed response: missing 'articles' list")

    articles: List[Article] = []
    for item in items:
        if not isinstance(item, dict) or not item.get('url'):
            logger.debug(f"Skipping article without url: {item!r}")
            continue
        articles.append(Article.from_api(item))

    return NewsResponse(
        status=payload.get('status', 'ok'),
        total_results=payload.get('totalResults', len(articles)),
        articles=articles,
    )


def _error_from_payload(payload: Any, status: Optional[int]) -> NewsApiError:
    if isinstance(payload, dict):
        code = payload.get('code')
        message = payload.get('message') or 'Unknown error'
    else:
        code = None
        message = 'Unexpected response'
    prefix = f"HTTP {status}: " if status else ""
    return NewsApiError(f"{prefix}{message}", status=status, code=code)
