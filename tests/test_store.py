import sqlite3

import pytest

from newslive.core.article import Article
from newslive.core.store import ArticleStore


def test_creates_parent_directory(tmp_path):
    db_path = tmp_path / "nested" / "dir" / "articles.db"
    ArticleStore(db_path)
    assert db_path.exists()


def test_empty_store(store):
    assert store.get_all_articles() == []
    assert store.get_all_favorite_articles() == []
    assert store.get_article_by_url("https://example.com/missing") is None


def test_insert_and_lookup(store):
    store.insert_articles([
        Article(url="u1", title="One", description="d1", image_url="i1"),
        Article(url="u2", title="Two"),
    ])

    assert [a.url for a in store.get_all_articles()] == ["u1", "u2"]
    assert store.get_article_by_url("u1") == Article(url="u1", title="One", description="d1", image_url="i1")


def test_reinsert_replaces_remote_fields(store):
    store.insert_articles([Article(url="u1", title="Old", description="old")])
    store.insert_articles([Article(url="u1", title="New", description="new", image_url="img")])

    articles = store.get_all_articles()
    assert len(articles) == 1
    assert articles[0].title == "New"
    assert articles[0].description == "new"
    assert articles[0].image_url == "img"


def test_reinsert_keeps_favorite_flag(store):
    store.insert_articles([Article(url="u1", title="Old")])
    store.update_article(Article(url="u1", title="Old", is_favorite=True))

    store.insert_articles([Article(url="u1", title="Refetched")])

    stored = store.get_article_by_url("u1")
    assert stored.title == "Refetched"
    assert stored.is_favorite is True


def test_favorites_only_lists_flagged_rows(store):
    store.insert_articles([
        Article(url="u1", title="One"),
        Article(url="u2", title="Two", is_favorite=True),
        Article(url="u3", title="Three"),
    ])

    favorites = store.get_all_favorite_articles()
    assert [a.url for a in favorites] == ["u2"]
    assert all(a.is_favorite for a in favorites)


def test_update_unknown_url_does_not_insert(store):
    store.update_article(Article(url="ghost", title="Ghost", is_favorite=True))
    assert store.get_all_articles() == []


def test_insert_nothing_is_a_noop(store):
    store.insert_articles([])
    assert store.get_all_articles() == []


def test_data_survives_new_instance(tmp_path):
    db_path = tmp_path / "articles.db"
    ArticleStore(db_path).insert_articles([Article(url="u1", title="One", is_favorite=True)])

    reopened = ArticleStore(db_path)
    assert reopened.get_all_favorite_articles() == [Article(url="u1", title="One", is_favorite=True)]


def test_sqlite_errors_propagate(store):
    with sqlite3.connect(store.db_path) as conn:
        conn.execute("DROP TABLE articles")

    with pytest.raises(sqlite3.OperationalError):
        store.get_all_articles()


def test_in_memory_store(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    store = ArticleStore(":memory:")

    store.insert_articles([Article(url="a", title="A"), Article(url="b", title="B")])
    store.update_article(Article(url="a", title="A", is_favorite=True))
    store.insert_articles([Article(url="a", title="A again")])

    assert [a.url for a in store.get_all_articles()] == ["a", "b"]
    assert store.get_all_favorite_articles() == [Article(url="a", title="A again", is_favorite=True)]
    assert store.get_article_by_url("b").title == "B"
    assert list(tmp_path.iterdir()) == []


def test_in_memory_stores_are_independent():
    first = ArticleStore(":memory:")
    second = ArticleStore(":memory:")

    first.insert_articles([Article(url="a")])

    assert second.get_all_articles() == []


def test_file_connections_are_closed(store, monkeypatch):
    opened = []
    real_connect = sqlite3.connect

    def tracking_connect(*args, **kwargs):
        conn = real_connect(*args, **kwargs)
        opened.append(conn)
        return conn

    monkeypatch.setattr(sqlite3, "connect", tracking_connect)

    store.insert_articles([Article(url="a")])
    store.get_all_articles()
    store.get_article_by_url("a")

    assert len(opened) == 3
    for conn in opened:
        with pytest.raises(sqlite3.ProgrammingError):
            conn.execute("SELECT 1")
