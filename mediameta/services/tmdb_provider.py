"""
Fournisseur TMDB unifie.

Point d'entree unique enregistre sous l'identifiant "tmdb" : il delegue
chaque appel au fournisseur films ou series selon le type de media.
"""

from loguru import logger

from mediameta.core.entities.metadata import TMDB, MediaMetadata, SearchResult
from mediameta.core.ports.provider import (
    IMetadataProvider,
    ScrapeOptions,
    SearchOptions,
    UnsupportedMediaTypeError,
)
from mediameta.core.value_objects.media_type import MediaType
from mediameta.services.fallback import LanguageFallback
from mediameta.services.serialized_catalog import SerializedCatalog
from mediameta.services.tmdb_movie_provider import TmdbMovieProvider
from mediameta.services.tmdb_tv_provider import TmdbTvShowProvider


class TmdbMetadataProvider(IMetadataProvider):
    """
    Facade TMDB : films et series partagent le meme catalogue serialise.

    Example:
        provider = TmdbMetadataProvider(SerializedCatalog(catalog), fallback)
        results = await provider.search(SearchOptions("Dark", MediaType.TV_SHOW))
    """

    def __init__(self, catalog: SerializedCatalog, fallback: LanguageFallback) -> None:
        self.movies = TmdbMovieProvider(catalog, fallback)
        self.tv_shows = TmdbTvShowProvider(catalog, fallback)

    @property
    def provider_id(self) -> str:
        return TMDB

    def _delegate(self, media_type: MediaType) -> IMetadataProvider:
        if media_type is MediaType.MOVIE:
            return self.movies
        if media_type in (MediaType.TV_SHOW, MediaType.TV_EPISODE):
            return self.tv_shows
        logger.warning(f"Type de media non supporte par TMDB: {media_type}")
        raise UnsupportedMediaTypeError(media_type)

    async def search(self, options: SearchOptions) -> list[SearchResult]:
        return await self._delegate(options.media_type).search(options)

    async def get_metadata(self, options: ScrapeOptions) -> MediaMetadata:
        return await self._delegate(options.media_type).get_metadata(options)

    async def get_episode_list(self, options: ScrapeOptions) -> list[MediaMetadata]:
        return await self._delegate(options.media_type).get_episode_list(options)
