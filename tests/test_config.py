import json

import pytest

from newslive.config import DEFAULT_CONFIG, Config, dump_mapping, load_mapping


def test_defaults_without_file():
    config = Config(environ={})

    assert config.get("api.base_url") == "https://newsapi.org/v2/"
    assert config.get("api.default_country") == "us"
    assert config.get("api.key") is None
    assert config.get("missing.key", "fallback") == "fallback"
    assert config.get("api.base_url.deeper", "fallback") == "fallback"


def test_yaml_file_is_merged(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("api:\n  default_country: gb\nstore:\n  path: /tmp/news.db\n")

    config = Config(str(path), environ={})

    assert config.get("api.default_country") == "gb"
    assert config.get("api.base_url") == "https://newsapi.org/v2/"
    assert config.get("store.path") == "/tmp/news.db"


def test_json_file_is_merged(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"api": {"timeout_seconds": 5}}))

    assert Config(str(path), environ={}).get("api.timeout_seconds") == 5


def test_file_does_not_mutate_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("api:\n  default_country: fr\n")

    Config(str(path), environ={})

    assert DEFAULT_CONFIG["api"]["default_country"] == "us"


def test_bad_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("api = 1\n")

    config = Config(str(path), environ={})

    assert config.get("api.default_country") == "us"


@pytest.mark.parametrize("section", ["api: null", "api: 5", "api: [a, b]"])
def test_non_mapping_section_keeps_defaults(tmp_path, section):
    path = tmp_path / "config.yaml"
    path.write_text(f"{section}\nstore:\n  path: /tmp/news.db\n")

    config = Config(str(path), environ={"NEWSAPI_KEY": "k"})

    assert config.get("api.base_url") == "https://newsapi.org/v2/"
    assert config.get("api.key") == "k"
    assert config.get("store.path") == "/tmp/news.db"


def test_environment_overrides():
    config = Config(environ={
        "NEWSLIVE_API__DEFAULT_COUNTRY": "ca",
        "NEWSLIVE_API__TIMEOUT_SECONDS": "12",
        "NEWSLIVE_STORE__PATH": "/data/articles.db",
        "NEWSAPI_KEY": "abc123",
        "UNRELATED": "x",
    })

    assert config.get("api.default_country") == "ca"
    assert config.get("api.timeout_seconds") == 12
    assert config.get("store.path") == "/data/articles.db"
    assert config.get("api.key") == "abc123"


def test_load_mapping_missing_file(tmp_path):
    assert load_mapping(tmp_path / "absent.yaml") is None


def test_load_mapping_rejects_non_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n")

    with pytest.raises(ValueError):
        load_mapping(path)


def test_dump_mapping_rejects_unknown_suffix(tmp_path):
    with pytest.raises(ValueError):
        dump_mapping(tmp_path / "prefs.ini", {"a": 1})
