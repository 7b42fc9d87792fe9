from typing import List, Optional

from newslive.core.article import Article, HeadlinesQuery, NewsResponse, SearchQuery


class FakeNewsApi:
    """In-memory stand-in for NewsApiClient that records every call."""

    def __init__(self, articles: Optional[List[Article]] = None, error: Optional[Exception] = None):
        self.articles = list(articles or [])
        self.error = error
        self.headline_calls: List[HeadlinesQuery] = []
        self.search_calls: List[SearchQuery] = []
        self.closed = False

    def _respond(self) -> NewsResponse:
        if self.error is not None:
            raise self.error
        # Fresh copies, the way a real decode would hand them out
        articles = [Article(**a.to_dict()) for a in self.articles]
        return NewsResponse(status="ok", total_results=len(articles), articles=articles)

    async def get_top_headlines(self, query: Optional[HeadlinesQuery] = None) -> NewsResponse:
        self.headline_calls.append(query or HeadlinesQuery())
        return self._respond()

    async def search_articles(self, query: SearchQuery) -> NewsResponse:
        self.search_calls.append(query)
        return self._respond()

    @property
    def call_count(self) -> int:
        return len(self.headline_calls) + len(self.search_calls)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.closed = True
