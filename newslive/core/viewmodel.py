"""
Presentation state holder for NewsLive front ends.
"""
import logging
from collections import defaultdict
from typing import Callable, Dict, List, Optional

from newslive.core.article import Article, HeadlinesQuery, SearchQuery
from newslive.core.repository import NewsRepository

# Configure logging
logger = logging.getLogger(__name__)

Observer = Callable[[List[Article]], None]

FIELDS = ('articles', 'favorite_articles', 'personalized_recommendations')


class NewsViewModel:
    """
    Keeps the latest article lists for a view and pushes each new list to
    the observers registered for it.
    """
    def __init__(self, repository: NewsRepository):
        self.repository = repository
        self.articles: List[Article] = []
        self.favorite_articles: List[Article] = []
        self.personalized_recommendations: List[Article] = []
        self._observers: Dict[str, List[Observer]] = defaultdict(list)

    def observe(self, name: str, callback: Observer) -> None:
        """
        Register a callback for one of the article lists.

        Args:
            name: One of 'articles', 'favorite_articles', 'personalized_recommendations'
            callback: Called with every new snapshot of that list
        """
        if name not in FIELDS:
            raise ValueError(f"Unknown field: {name}")
        self._observers[name].append(callback)

    def _publish(self, name: str, articles: List[Article]) -> None:
        logger.debug(f"Publishing {len(articles)} {name}")
        setattr(self, name, articles)
        for callback in self._observers[name]:
            callback(articles)

    async def load_top_headlines(self, query: Optional[HeadlinesQuery] = None,
                                 refresh: bool = False) -> List[Article]:
        articles = await self.repository.get_top_headlines(query, refresh=refresh)
        self._publish('articles', articles)
        return articles

    async def search_articles(self, query: SearchQuery) -> List[Article]:
        articles = await self.repository.search_articles(query)
        self._publish('articles', articles)
        return articles

    async def load_favorite_articles(self) -> List[Article]:
        favorites = await self.repository.get_favorite_articles()
        self._publish('favorite_articles', favorites)
        return favorites

    async def toggle_favorite_article(self, article: Article) -> Optional[Article]:
        updated = await self.repository.toggle_favorite_article(article)
        if updated is not None:
            await self.load_favorite_articles()
        return updated

    async def load_personalized_recommendations(self) -> List[Article]:
        recommendations = await self.repository.get_personalized_recommendations()
        self._publish('personalized_recommendations', recommendations)
        return recommendations
