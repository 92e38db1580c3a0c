"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI : un seul
client TMDB par processus, partage par tous les fournisseurs via un
SerializedCatalog.
"""

from dependency_injector import containers, providers

from .adapters.api.cache import APICache
from .adapters.api.tmdb_catalog import TMDBCatalog
from .config import Settings
from .services.fallback import FallbackConfig, LanguageFallback
from .services.registry import ProviderRegistry
from .services.scrape_pool import ScrapePool
from .services.serialized_catalog import SerializedCatalog
from .services.tmdb_provider import TmdbMetadataProvider


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        provider = container.registry().get("tmdb")
        pool = container.scrape_pool()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Cache API - Singleton pour partage entre catalogues
    api_cache = providers.Singleton(
        APICache,
        cache_dir=config.provided.cache_dir,
    )

    # Catalogue TMDB - Singleton avec api_key depuis config
    # Si api_key est None, la CLI verifie config.tmdb_enabled avant utilisation
    tmdb_catalog = providers.Singleton(
        TMDBCatalog,
        api_key=config.provided.tmdb_api_key,
        cache=api_cache,
    )

    # Acces serialise partage par les fournisseurs films et series
    serialized_catalog = providers.Singleton(SerializedCatalog, catalog=tmdb_catalog)

    # Config de repli relue a chaque appel (Factory injectee comme callable)
    fallback_config = providers.Factory(FallbackConfig.from_settings, settings=config)
    language_fallback = providers.Singleton(
        LanguageFallback,
        config_source=fallback_config.provider,
    )

    tmdb_provider = providers.Singleton(
        TmdbMetadataProvider,
        catalog=serialized_catalog,
        fallback=language_fallback,
    )

    # Registre explicite des fournisseurs
    registry = providers.Singleton(ProviderRegistry, tmdb_provider)

    # Pool de scrapes - Factory car un pool est cree par lot
    scrape_pool = providers.Factory(
        ScrapePool,
        worker_count=config.provided.worker_count,
    )
