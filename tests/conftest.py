import pytest
from fastapi.testclient import TestClient

import main
from scanner.seo_checker import ExtractedTags
from storage import MemStorage, get_storage


FULL_OG = {
    "og:title": "Example title",
    "og:description": "Example description",
    "og:image": "https://example.com/cover.png",
    "og:url": "https://example.com/",
}
FULL_TWITTER = {
    "twitter:card": "summary_large_image",
    "twitter:title": "Example title",
    "twitter:description": "Example description",
}


def make_tags(title=None, description=None, og=None, twitter=None, url="https://example.com/"):
    return ExtractedTags(
        url=url,
        title=title,
        meta_description=description,
        og_tags=dict(og or {}),
        twitter_tags=dict(twitter or {}),
        all_meta_tags={},
    )


@pytest.fixture
def store():
    return MemStorage()


@pytest.fixture
def client(monkeypatch, store):
    monkeypatch.setenv("NODE_ENV", "test")
    monkeypatch.delenv("PORT", raising=False)
    main.app.dependency_overrides[get_storage] = lambda: store
    with TestClient(main.app) as c:
        yield c
    main.app.dependency_overrides.clear()
