"""
Command-line interface for NewsLive.
"""
import argparse
import asyncio
import logging
import os
import sqlite3
import sys
from typing import List, Optional

import yaml
from dotenv import load_dotenv

from newslive.config import Config
from newslive.core.article import Article, HeadlinesQuery, SearchQuery, UserPreferences
from newslive.core.preferences import PreferencesStore
from newslive.core.repository import NewsRepository
from newslive.core.store import ArticleStore
from newslive.core.viewmodel import NewsViewModel
from newslive.fetchers.newsapi import NewsApiClient, NewsApiError

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None):
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(description="NewsLive - News Reader Client")
    parser.add_argument("--config", help="Path to a YAML or JSON config file",
                        default=os.getenv("NEWSLIVE_CONFIG_PATH"))
    parser.add_argument("--db", help="Path to the article database (overrides config)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    headlines = subparsers.add_parser("headlines", help="Show top headlines")
    headlines.add_argument("--country", help="Two-letter country code")
    headlines.add_argument("--category", help="Category, e.g. technology")
    headlines.add_argument("--query", help="Keywords to filter by")
    headlines.add_argument("--refresh", action="store_true", help="Fetch even if articles are cached")

    search = subparsers.add_parser("search", help="Search all articles")
    search.add_argument("query", help="Keywords to search for")
    search.add_argument("--from", dest="from_date", help="Oldest publication date (ISO 8601)")
    search.add_argument("--to", dest="to_date", help="Newest publication date (ISO 8601)")

    subparsers.add_parser("favorites", help="List favorite articles")

    favorite = subparsers.add_parser("favorite", help="Toggle the favorite flag of a stored article")
    favorite.add_argument("url", help="URL of the article")

    subparsers.add_parser("recommend", help="Show recommendations based on your preferences")

    prefs = subparsers.add_parser("prefs", help="Show or update your preferences")
    prefs.add_argument("--category", help="Preferred category")
    prefs.add_argument("--keywords", help="Preferred keywords")

    return parser.parse_args(argv)


def format_article(article: Article) -> str:
    marker = "[*]" if article.is_favorite else "[ ]"
    return f"{marker} {article.title or '(untitled)'}\n    {article.url}"


def print_articles(articles: List[Article], empty_message: str = "No articles found.") -> None:
    if not articles:
        print(empty_message)
        return
    for article in articles:
        print(format_article(article))


def build_view_model(config: Config, client: NewsApiClient, db_path: Optional[str] = None) -> NewsViewModel:
    store = ArticleStore(db_path or config.get('store.path'))
    preferences = PreferencesStore(config.get('preferences.path'))
    repository = NewsRepository(
        client, store, preferences,
        default_country=config.get('api.default_country', 'us')
    )
    return NewsViewModel(repository)


async def run_command(args, config: Config, client: Optional[NewsApiClient] = None) -> int:
    """
    Run a single subcommand.

    Args:
        args: Parsed arguments
        config: Loaded configuration
        client: API client to use instead of building one from the config

    Returns:
        Process exit code
    """
    if args.command == "prefs":
        return update_preferences(args, PreferencesStore(config.get('preferences.path')))

    if client is None:
        client = NewsApiClient(
            base_url=config.get('api.base_url'),
            api_key=config.get('api.key'),
            timeout=config.get('api.timeout_seconds', 30),
        )

    async with client:
        view_model = build_view_model(config, client, args.db)

        if args.command == "headlines":
            query = HeadlinesQuery(
                country=args.country or config.get('api.default_country', 'us'),
                category=args.category,
                query=args.query,
            )
            print_articles(await view_model.load_top_headlines(query, refresh=args.refresh))
        elif args.command == "search":
            query = SearchQuery(args.query, from_date=args.from_date, to_date=args.to_date)
            print_articles(await view_model.search_articles(query))
        elif args.command == "favorites":
            print_articles(await view_model.load_favorite_articles(), "No favorite articles yet.")
        elif args.command == "favorite":
            updated = await view_model.toggle_favorite_article(Article(url=args.url))
            if updated is None:
                print(f"Article not found: {args.url}")
            else:
                state = "added to" if updated.is_favorite else "removed from"
                print(f"{updated.title or updated.url} {state} favorites")
        elif args.command == "recommend":
            print_articles(await view_model.load_personalized_recommendations())

    return 0


def update_preferences(args, store: PreferencesStore) -> int:
    prefs = store.get_user_preferences()
    if args.category is not None or args.keywords is not None:
        prefs = UserPreferences(
            preferred_category=args.category if args.category is not None else prefs.preferred_category,
            preferred_keywords=args.keywords if args.keywords is not None else prefs.preferred_keywords,
        )
        store.save_user_preferences(prefs)

    print(f"Preferred category: {prefs.preferred_category or '-'}")
    print(f"Preferred keywords: {prefs.preferred_keywords or '-'}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for the command-line script.
    """
    # Explicitly reload environment variables from .env file
    load_dotenv(override=True)

    args = parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)]
    )

    config = Config(args.config)

    try:
        return asyncio.run(run_command(args, config))
    except KeyboardInterrupt:
        logger.info("Process interrupted by user")
        return 1
    except NewsApiError as e:
        logger.error(f"News API request failed: {e}")
        return 1
    except (sqlite3.Error, OSError, ValueError, yaml.YAMLError) as e:
        logger.exception(f"Storage error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
