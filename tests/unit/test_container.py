"""
Tests unitaires pour le container d'injection de dependances.
"""

from mediameta.config import Settings
from mediameta.container import Container
from mediameta.core.value_objects.languages import MediaLanguage
from mediameta.services.scrape_pool import ScrapePool
from mediameta.services.tmdb_provider import TmdbMetadataProvider


def _container(settings: Settings) -> Container:
    container = Container()
    container.config.override(settings)
    return container


class TestContainer:
    """Tests du cablage des dependances."""

    def test_registry_exposes_tmdb(self, test_settings: Settings) -> None:
        container = _container(test_settings)

        provider = container.registry().get("tmdb")

        assert isinstance(provider, TmdbMetadataProvider)
        assert container.registry().ids() == ["tmdb"]

    def test_providers_share_one_serialized_catalog(self, test_settings: Settings) -> None:
        container = _container(test_settings)

        provider = container.tmdb_provider()

        assert provider.movies._catalog is provider.tv_shows._catalog
        assert provider.movies._catalog is container.serialized_catalog()
        assert container.serialized_catalog().catalog is container.tmdb_catalog()

    def test_fallback_config_is_read_on_each_call(self, test_settings: Settings) -> None:
        container = _container(test_settings)
        fallback = container.language_fallback()

        assert fallback._active_config(MediaLanguage.de) is None

        test_settings.title_fallback = True
        config = fallback._active_config(MediaLanguage.de)
        assert config is not None
        assert config.language is MediaLanguage.en

    def test_scrape_pool_uses_worker_count(self, test_settings: Settings) -> None:
        test_settings.worker_count = 2
        pool = _container(test_settings).scrape_pool()

        assert isinstance(pool, ScrapePool)
        assert pool.worker_count == 2
