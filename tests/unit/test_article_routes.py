"""Unit tests for the article endpoints and static image serving."""

from __future__ import annotations

from fastapi.testclient import TestClient

from aquarium_analyser.api.dependencies import get_article_service
from aquarium_analyser.config import Settings
from aquarium_analyser.integrations.image_store import LocalImageStore
from aquarium_analyser.main import create_app
from aquarium_analyser.services.articles.pipeline import ArticlePipeline, ArticleService
from tests.unit.fakes import BBA_PAGE, BBA_URL, SOURCE_ORIGIN, FakeFetcher, StubRewriter


def _client(app_settings: Settings, fetcher: FakeFetcher) -> tuple[TestClient, StubRewriter]:
    rewriter = StubRewriter()
    service = ArticleService(
        ArticlePipeline(
            app_settings=app_settings,
            fetcher_factory=lambda: fetcher,
            image_store=LocalImageStore(app_settings),
            rewriter=rewriter,
        )
    )
    app = create_app(app_settings)
    app.dependency_overrides[get_article_service] = lambda: service
    return TestClient(app), rewriter


def test_article_endpoint_returns_content(app_settings: Settings) -> None:
    fetcher = FakeFetcher(pages={BBA_URL: BBA_PAGE})
    client, _ = _client(app_settings, fetcher)

    with client:
        response = client.get("/api/black-beard-algae-article")

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert "Black Beard Algae" in payload["content"]


def test_article_endpoint_serves_byte_identical_cached_content(app_settings: Settings) -> None:
    fetcher = FakeFetcher(pages={BBA_URL: BBA_PAGE})
    client, rewriter = _client(app_settings, fetcher)

    with client:
        first = client.get("/api/black-beard-algae-article")
        second = client.get("/api/black-beard-algae-article")

    assert first.json()["content"] == second.json()["content"]
    assert fetcher.page_calls == [BBA_URL]
    assert len(rewriter.calls) == 1


def test_article_endpoint_succeeds_despite_unreachable_images(app_settings: Settings) -> None:
    # No image bytes are registered, so every download fails.
    fetcher = FakeFetcher(pages={BBA_URL: BBA_PAGE})
    client, _ = _client(app_settings, fetcher)

    with client:
        response = client.get("/api/black-beard-algae-article")

    assert response.status_code == 200
    assert "/images/bba-image-0.jpg" in response.json()["content"]
    assert len(fetcher.image_calls) == 3


def test_article_endpoint_falls_back_when_selector_misses(app_settings: Settings) -> None:
    hair_url = f"{SOURCE_ORIGIN}/blogs/algae/hair-algae"
    fetcher = FakeFetcher(pages={hair_url: "<html><body><p>moved</p></body></html>"})
    client, _ = _client(app_settings, fetcher)

    with client:
        response = client.get("/api/hair-algae-article")

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert "What Is Hair Algae?" in payload["content"]


def test_article_endpoint_reports_fetch_failure(app_settings: Settings) -> None:
    client, _ = _client(app_settings, FakeFetcher())

    with client:
        response = client.get("/api/green-water-algae-article")

    assert response.status_code == 500
    payload = response.json()
    assert payload["success"] is False
    assert "green-water" in payload["error"]
    assert "Error Loading Article" in payload["content"]


def test_failed_article_is_retried_on_next_request(app_settings: Settings) -> None:
    fetcher = FakeFetcher()
    client, _ = _client(app_settings, fetcher)

    with client:
        assert client.get("/api/black-beard-algae-article").status_code == 500
        fetcher.pages[BBA_URL] = BBA_PAGE
        assert client.get("/api/black-beard-algae-article").status_code == 200

    assert fetcher.page_calls == [BBA_URL, BBA_URL]


def test_unknown_topic_is_rejected(app_settings: Settings) -> None:
    client, _ = _client(app_settings, FakeFetcher())

    with client:
        response = client.get("/api/staghorn-algae-article")

    assert response.status_code == 422


def test_downloaded_images_are_served_statically(app_settings: Settings) -> None:
    client, _ = _client(app_settings, FakeFetcher())

    with client:
        (app_settings.images_dir / "bba-image-0.jpg").write_bytes(b"jpeg")
        found = client.get("/images/bba-image-0.jpg")
        missing = client.get("/images/bba-image-9.jpg")

    assert found.status_code == 200
    assert found.content == b"jpeg"
    assert missing.status_code == 404


def test_health_check(app_settings: Settings) -> None:
    client, _ = _client(app_settings, FakeFetcher())

    with client:
        response = client.get("/health")

    assert response.json() == {"status": "healthy", "version": app_settings.app_version}
