"""
Catalogue distant TMDB (The Movie Database).

Implemente IRemoteCatalog : retourne les reponses JSON brutes de l'API v3
pour une langue donnee. Utilise le cache persistant et le mecanisme de
retry pour gerer le rate limiting.

Le client n'est pas sur pour un usage concurrent : les fournisseurs y
accedent a travers un SerializedCatalog.

Usage:
    cache = APICache()
    catalog = TMDBCatalog(api_key="your_key", cache=cache)
    page = await catalog.search_by_text("Avatar", MediaType.MOVIE, "fr-FR")
    show = await catalog.fetch_detail(1399, MediaType.TV_SHOW, "fr", ("credits",))
    await catalog.close()
"""

from typing import Any, Optional, Sequence

import httpx
from loguru import logger

from mediameta.adapters.api.cache import APICache
from mediameta.adapters.api.retry import RateLimitError, request_with_retry
from mediameta.core.ports.catalog import CatalogError, IRemoteCatalog
from mediameta.core.value_objects.media_type import MediaType

# Segment d'URL TMDB par type de media
_PATH_BY_TYPE = {
    MediaType.MOVIE: "movie",
    MediaType.TV_SHOW: "tv",
    MediaType.TV_EPISODE: "tv",
}


class TMDBCatalog(IRemoteCatalog):
    """
    Client API TMDB retournant les donnees brutes du catalogue.

    Fournit:
    - Recherche de films ou de series par texte
    - Fiche detaillee avec sous-ressources (append_to_response)
    - Saison complete d'une serie
    - Cache persistant (24h recherches, 7j fiches/saisons)
    - Retry automatique sur rate limiting (429)

    Attributes:
        TMDB_BASE_URL: URL de base de l'API TMDB v3
    """

    TMDB_BASE_URL = "https://api.themoviedb.org/3"

    def __init__(self, api_key: str, cache: Optional[APICache] = None) -> None:
        """
        Args:
            api_key: Cle API TMDB (v3) ou Read Access Token (v4)
            cache: Instance APICache, None pour desactiver le cache
        """
        self._api_key = api_key
        self._cache = cache
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Supporte les deux modes d'authentification TMDB:
        - API Key v3 (32 caracteres hex) : passe en parametre api_key
        - Read Access Token v4 (long JWT) : passe en header Bearer
        """
        if self._client is None or self._client.is_closed:
            is_v4_token = len(self._api_key) > 40

            headers = {"Accept": "application/json"}
            params = {}

            if is_v4_token:
                headers["Authorization"] = f"Bearer {self._api_key}"
            else:
                params["api_key"] = self._api_key

            self._client = httpx.AsyncClient(
                base_url=self.TMDB_BASE_URL,
                headers=headers,
                params=params,
                timeout=30.0,
            )
        return self._client

    @property
    def source(self) -> str:
        """Retourne l'identifiant de la source API."""
        return "tmdb"

    async def search_by_text(
        self,
        text: str,
        media_type: MediaType,
        language: str,
    ) -> Optional[dict[str, Any]]:
        """Recherche /search/movie ou /search/tv (premiere page)."""
        path = f"/search/{_PATH_BY_TYPE[media_type]}"
        params = {
            "query": text,
            "language": language,
            "page": "1",
            "include_adult": "false",
        }
        key = APICache.make_key(self.source, path, language, text)
        return await self._get_json(path, params, key, search=True)

    async def fetch_detail(
        self,
        media_id: int,
        media_type: MediaType,
        language: str,
        appends: Sequence[str] = (),
    ) -> Optional[dict[str, Any]]:
        """Fiche /movie/{id} ou /tv/{id} avec append_to_response."""
        path = f"/{_PATH_BY_TYPE[media_type]}/{media_id}"
        params = {"language": language}
        append_value = ",".join(appends)
        if append_value:
            params["append_to_response"] = append_value
        key = APICache.make_key(self.source, path, language, append_value)
        return await self._get_json(path, params, key)

    async def fetch_season(
        self,
        media_id: int,
        season_number: int,
        language: str,
    ) -> Optional[dict[str, Any]]:
        """Saison complete /tv/{id}/season/{n}."""
        path = f"/tv/{media_id}/season/{season_number}"
        key = APICache.make_key(self.source, path, language)
        return await self._get_json(path, {"language": language}, key)

    async def _get_json(
        self,
        path: str,
        params: dict[str, str],
        cache_key: str,
        search: bool = False,
    ) -> Optional[dict[str, Any]]:
        """
        GET cache-first. 404 devient None, les autres echecs CatalogError.

        Les reponses "non trouve" ne sont pas mises en cache.
        """
        if self._cache is not None:
            cached = await self._cache.get(cache_key)
            if cached is not None:
                return cached

        logger.debug(f"TMDB GET {path} {params.get('language', '')}")
        client = self._get_client()
        try:
            response = await request_with_retry(client, "GET", path, params=params)
            data = response.json()
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return None
            raise CatalogError(f"TMDB {path}: HTTP {e.response.status_code}") from e
        except (httpx.HTTPError, RateLimitError) as e:
            raise CatalogError(f"TMDB {path}: {e}") from e
        except ValueError as e:
            # Corps de reponse qui n'est pas du JSON
            raise CatalogError(f"TMDB {path}: invalid JSON") from e

        if self._cache is not None:
            if search:
                await self._cache.set_search(cache_key, data)
            else:
                await self._cache.set_details(cache_key, data)
        return data

    async def close(self) -> None:
        """
        Ferme le client HTTP.

        Doit etre appele a la fin de l'utilisation pour liberer
        les ressources reseau.
        """
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
