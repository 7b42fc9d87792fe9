"""
Local article storage for NewsLive.
"""
import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Iterable, List, Optional, Union

from newslive.core.article import Article

# Configure logging
logger = logging.getLogger(__name__)

_COLUMNS = "url, title, description, image_url, is_favorite"

MEMORY_DB = ":memory:"


class ArticleStore:
    """
    Persists articles in SQLite, keyed by URL.

    Every method opens its own connection, so each call is atomic on its own
    and nothing spans calls. An in-memory database (":memory:") lives only as
    long as its connection, so that one is opened once and shared.
    """
    def __init__(self, db_path: Union[str, Path]):
        self.in_memory = str(db_path) == MEMORY_DB
        self._shared_conn: Optional[sqlite3.Connection] = None
        if self.in_memory:
            self.db_path = MEMORY_DB
            # Repository calls arrive on worker threads
            self._shared_conn = sqlite3.connect(MEMORY_DB, check_same_thread=False)
        else:
            self.db_path = Path(db_path)
            self._init_db_dir()
        self._init_db()

    def _init_db_dir(self):
        """Initialize the database directory."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _init_db(self):
        """Initialize the SQLite schema."""
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS articles (
                    url TEXT PRIMARY KEY,
                    title TEXT NOT NULL DEFAULT '',
                    description TEXT NOT NULL DEFAULT '',
                    image_url TEXT NOT NULL DEFAULT '',
                    is_favorite INTEGER NOT NULL DEFAULT 0
                )
            """)

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """
        Yield a connection inside a transaction, closing it afterwards unless
        it is the shared in-memory one.
        """
        conn = self._shared_conn or sqlite3.connect(self.db_path)
        try:
            with conn:
                yield conn
        finally:
            if conn is not self._shared_conn:
                conn.close()

    def close(self) -> None:
        """Close the shared in-memory connection, discarding its data."""
        if self._shared_conn is not None:
            self._shared_conn.close()
            self._shared_conn = None

    def insert_articles(self, articles: Iterable[Article]) -> None:
        """
        Insert or replace articles by URL.

        Remote fields are overwritten; the favorite flag of a row that already
        exists is kept, since the API never supplies it.

        Args:
            articles: Articles to upsert
        """
        rows = [
            (a.url, a.title, a.description, a.image_url, int(a.is_favorite))
            for a in articles
        ]
        if not rows:
            return

        with self._connect() as conn:
            conn.executemany(
                f"""
                INSERT INTO articles ({_COLUMNS})
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(url) DO UPDATE SET
                    title = excluded.title,
                    description = excluded.description,
                    image_url = excluded.image_url
                """,
                rows
            )
        logger.debug(f"Upserted {len(rows)} articles into {self.db_path}")

    def get_all_articles(self) -> List[Article]:
        with self._connect() as conn:
            cursor = conn.execute(f"SELECT {_COLUMNS} FROM articles ORDER BY rowid")
            return [_row_to_article(row) for row in cursor.fetchall()]

    def get_all_favorite_articles(self) -> List[Article]:
        with self._connect() as conn:
            cursor = conn.execute(
                f"SELECT {_COLUMNS} FROM articles WHERE is_favorite = 1 ORDER BY rowid"
            )
            return [_row_to_article(row) for row in cursor.fetchall()]

    def get_article_by_url(self, url: str) -> Optional[Article]:
        """
        Look up a single article.

        Args:
            url: The URL of the article

        Returns:
            The stored Article, or None if the URL is unknown
        """
        with self._connect() as conn:
            cursor = conn.execute(
                f"SELECT {_COLUMNS} FROM articles WHERE url = ?",
                (url,)
            )
            row = cursor.fetchone()
            return _row_to_article(row) if row else None

    def update_article(self, article: Article) -> None:
        """
        Overwrite the stored row for an article. Unknown URLs are left alone.

        Args:
            article: Article carrying the new field values
        """
        with self._connect() as conn:
            conn.execute(
                """
                UPDATE articles
                SET title = ?, description = ?, image_url = ?, is_favorite = ?
                WHERE url = ?
                """,
                (article.title, article.description, article.image_url,
                 int(article.is_favorite), article.url)
            )


def _row_to_article(row) -> Article:
    url, title, description, image_url, is_favorite = row
    return Article(
        url=url,
        title=title,
        description=description,
        image_url=image_url,
        is_favorite=bool(is_favorite),
    )
