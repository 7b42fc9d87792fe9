"""
Article data model for NewsLive.
"""
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

DEFAULT_COUNTRY = "us"


@dataclass
class Article:
    """
    Represents a news article. The URL is its identity key.
    """
    url: str
    title: str = ""
    description: str = ""
    image_url: str = ""
    is_favorite: bool = False  # Local-only state, never supplied by the API

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "Article":
        """
        Build an Article from one entry of a NewsAPI ``articles`` array.

        Args:
            item: Decoded JSON object for a single article

        Returns:
            Article with missing text fields set to empty strings
        """
        return cls(
            url=item["url"],
            title=item.get("title") or "",
            description=item.get("description") or "",
            image_url=item.get("urlToImage") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class UserPreferences:
    preferred_category: Optional[str] = None
    preferred_keywords: Optional[str] = None


@dataclass
class HeadlinesQuery:
    """
    Filters for a top-headlines request.
    """
    country: Optional[str] = DEFAULT_COUNTRY
    category: Optional[str] = None
    query: Optional[str] = None

    def params(self) -> Dict[str, str]:
        return _drop_none({
            "country": self.country,
            "category": self.category,
            "q": self.query,
        })


@dataclass
class SearchQuery:
    """
    Free-text search, optionally bounded by ISO dates.
    """
    query: str
    from_date: Optional[str] = None
    to_date: Optional[str] = None

    def params(self) -> Dict[str, str]:
        return _drop_none({
            "q": self.query,
            "from": self.from_date,
            "to": self.to_date,
        })


@dataclass
class NewsResponse:
    """
    Response envelope returned by both NewsAPI endpoints.
    """
    status: str = "ok"
    total_results: int = 0
    articles: List[Article] = field(default_factory=list)


def _drop_none(params: Dict[str, Optional[str]]) -> Dict[str, str]:
    # aiohttp refuses None query values
    return {key: value for key, value in params.items() if value is not None}
