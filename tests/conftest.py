import pytest

from newslive.core.article import Article
from newslive.core.preferences import PreferencesStore
from newslive.core.repository import NewsRepository
from newslive.core.store import ArticleStore
from newslive.fetchers.newsapi import NewsApiError
from tests.fakes import FakeNewsApi


@pytest.fixture()
def store(tmp_path) -> ArticleStore:
    return ArticleStore(tmp_path / "db" / "articles.db")


@pytest.fixture()
def preferences(tmp_path) -> PreferencesStore:
    return PreferencesStore(tmp_path / "preferences.yaml")


@pytest.fixture()
def api() -> FakeNewsApi:
    return FakeNewsApi([
        Article(url="https://example.com/a", title="Alpha", description="first", image_url="https://img/a.png"),
        Article(url="https://example.com/b", title="Beta", description="second"),
    ])


@pytest.fixture()
def repository(api, store, preferences) -> NewsRepository:
    return NewsRepository(api, store, preferences)


@pytest.fixture()
def failing_api() -> FakeNewsApi:
    return FakeNewsApi(error=NewsApiError("boom", status=500))
