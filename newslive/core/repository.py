"""
Repository combining the NewsAPI client, the local article store and the
user's preferences.
"""
import asyncio
import logging
from typing import List, Optional

from newslive.core.article import Article, HeadlinesQuery, SearchQuery
from newslive.core.preferences import PreferencesStore
from newslive.core.store import ArticleStore
from newslive.fetchers.newsapi import NewsApiClient

# Configure logging
logger = logging.getLogger(__name__)


class NewsRepository:
    """
    Decides whether to serve articles from the local store or the network.

    Store access is blocking, so it is pushed to a worker thread; the calls
    inside one operation still run one after the other. Errors from the
    client and the stores are not caught here.
    """
    def __init__(self, api: NewsApiClient, store: ArticleStore, preferences: PreferencesStore,
                 default_country: str = "us"):
        self.api = api
        self.store = store
        self.preferences = preferences
        self.default_country = default_country

    async def get_top_headlines(self, query: Optional[HeadlinesQuery] = None,
                                refresh: bool = False) -> List[Article]:
        """
        Get top headlines, cache first.

        If anything is stored, all stored articles are returned and the
        network is not contacted, whatever the filters. Use ``refresh`` to
        force a fetch.

        Args:
            query: Headline filters
            refresh: Skip the cache check and always fetch

        Returns:
            Stored articles, or the freshly fetched ones
        """
        query = query or HeadlinesQuery(country=self.default_country)

        if not refresh:
            cached = await asyncio.to_thread(self.store.get_all_articles)
            if cached:
                if query != HeadlinesQuery(country=self.default_country):
                    logger.warning(
                        f"Serving {len(cached)} cached articles; filters {query.params()} "
                        "are ignored until a refresh"
                    )
                return cached

        response = await self.api.get_top_headlines(query)
        await asyncio.to_thread(self.store.insert_articles, response.articles)
        return response.articles

    async def search_articles(self, query: SearchQuery) -> List[Article]:
        response = await self.api.search_articles(query)
        await asyncio.to_thread(self.store.insert_articles, response.articles)
        return response.articles

    async def get_favorite_articles(self) -> List[Article]:
        return await asyncio.to_thread(self.store.get_all_favorite_articles)

    async def toggle_favorite_article(self, article: Article) -> Optional[Article]:
        """
        Flip the stored favorite flag of an article.

        Args:
            article: Article to toggle; only its URL is used

        Returns:
            The updated article, or None if the URL is not stored
        """
        current = await asyncio.to_thread(self.store.get_article_by_url, article.url)
        if current is None:
            logger.debug(f"Cannot toggle favorite, {article.url} is not stored")
            return None

        current.is_favorite = not current.is_favorite
        await asyncio.to_thread(self.store.update_article, current)
        return current

    async def get_personalized_recommendations(self) -> List[Article]:
        """
        Fetch headlines matching the user's preferred category and keywords.
        Always hits the network.

        Returns:
            The fetched articles
        """
        prefs = await asyncio.to_thread(self.preferences.get_user_preferences)
        query = HeadlinesQuery(
            country=self.default_country,
            category=prefs.preferred_category,
            query=prefs.preferred_keywords,
        )
        response = await self.api.get_top_headlines(query)
        await asyncio.to_thread(self.store.insert_articles, response.articles)
        return response.articles
