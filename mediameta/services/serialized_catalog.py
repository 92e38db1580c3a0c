"""
Acces serialise a un catalogue distant partage.

Le client d'un catalogue et sa configuration (URL, cle API, etat de rate
limiting) ne sont pas surs pour un usage concurrent. Tous les fournisseurs
qui partagent un client passent par le meme SerializedCatalog : chaque
appel prend le verrou pour la duree d'un seul fetch, jamais pendant la
logique de fusion qui suit.
"""

import asyncio
from typing import Any, Optional, Sequence

from mediameta.core.ports.catalog import IRemoteCatalog
from mediameta.core.value_objects.media_type import MediaType


class SerializedCatalog:
    """
    Poignee d'exclusion mutuelle autour d'un IRemoteCatalog.

    Expose les trois operations du port avec la meme signature.

    Example:
        shared = SerializedCatalog(TMDBCatalog(api_key, cache))
        movie_provider = TmdbMovieProvider(shared, ...)
        tv_provider = TmdbTvShowProvider(shared, ...)
    """

    def __init__(self, catalog: IRemoteCatalog) -> None:
        self._catalog = catalog
        self._lock = asyncio.Lock()

    @property
    def source(self) -> str:
        return self._catalog.source

    @property
    def catalog(self) -> IRemoteCatalog:
        """Catalogue sous-jacent (pour fermeture par le proprietaire)."""
        return self._catalog

    async def search_by_text(
        self, text: str, media_type: MediaType, language: str
    ) -> Optional[dict[str, Any]]:
        async with self._lock:
            return await self._catalog.search_by_text(text, media_type, language)

    async def fetch_detail(
        self,
        media_id: int,
        media_type: MediaType,
        language: str,
        appends: Sequence[str] = (),
    ) -> Optional[dict[str, Any]]:
        async with self._lock:
            return await self._catalog.fetch_detail(media_id, media_type, language, appends)

    async def fetch_season(
        self, media_id: int, season_number: int, language: str
    ) -> Optional[dict[str, Any]]:
        async with self._lock:
            return await self._catalog.fetch_season(media_id, season_number, language)
