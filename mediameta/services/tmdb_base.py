"""
Socle commun des fournisseurs TMDB (films et series).

Regroupe ce que les deux fournisseurs partagent : verification du type de
media, recherche textuelle avec reconciliation de langue, conversion des
resultats bruts en SearchResult et construction des artworks et notes.
"""

from typing import Any, Iterable, Optional

from loguru import logger

from mediameta.core.entities.metadata import (
    TMDB,
    MediaArtwork,
    MediaMetadata,
    MediaRating,
    SearchResult,
)
from mediameta.core.ports.catalog import CatalogError
from mediameta.core.ports.provider import (
    IMetadataProvider,
    SearchOptions,
    UnsupportedMediaTypeError,
)
from mediameta.core.value_objects.languages import MediaLanguage
from mediameta.core.value_objects.media_type import ArtworkType, MediaType
from mediameta.services.fallback import LanguageFallback
from mediameta.services.scoring import calculate_score
from mediameta.services.serialized_catalog import SerializedCatalog
from mediameta.utils.helpers import clean_search_text, clean_title, year_of

TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/"


def image_url(size: str, path: Optional[str]) -> str:
    """URL complete d'une image TMDB (ex: size="w342")."""
    return f"{TMDB_IMAGE_BASE_URL}{size}{path}" if path else ""


def tmdb_rating(data: dict[str, Any]) -> Optional[MediaRating]:
    """Note TMDB (echelle 10) si vote_average et vote_count sont presents."""
    vote_average = data.get("vote_average")
    vote_count = data.get("vote_count")
    if vote_average is None or vote_count is None:
        return None
    return MediaRating(source=TMDB, rating=float(vote_average), votes=int(vote_count), max_value=10)


class TmdbBaseProvider(IMetadataProvider):
    """
    Base des fournisseurs TMDB.

    Les sous-classes declarent les cles du format natif qui different
    entre films et series (title/name, release_date/first_air_date).

    Attributes:
        SEARCH_TYPE: Type de media recherche dans le catalogue
        TITLE_KEY / ORIGINAL_TITLE_KEY / DATE_KEY: Cles des resultats bruts
    """

    SEARCH_TYPE: MediaType = MediaType.MOVIE
    TITLE_KEY = "title"
    ORIGINAL_TITLE_KEY = "original_title"
    DATE_KEY = "release_date"

    def __init__(self, catalog: SerializedCatalog, fallback: LanguageFallback) -> None:
        """
        Args:
            catalog: Acces serialise au catalogue TMDB partage
            fallback: Moteur de reconciliation par langue de repli
        """
        self._catalog = catalog
        self._fallback = fallback

    @property
    def provider_id(self) -> str:
        return TMDB

    def _empty(self) -> MediaMetadata:
        return MediaMetadata(provider_id=self.provider_id)

    @staticmethod
    def _require(media_type: Optional[MediaType], supported: Iterable[MediaType]) -> None:
        if media_type not in tuple(supported):
            raise UnsupportedMediaTypeError(media_type)

    async def _search(self, options: SearchOptions) -> list[SearchResult]:
        """
        Recherche dans la langue demandee puis reconcilie les titres non traduits.

        Une requete vide apres normalisation ou un echec du catalogue donnent
        une liste vide, jamais une exception.
        """
        query = clean_search_text(options.query)
        if not query:
            logger.debug("TMDB: requete de recherche vide")
            return []

        logger.info(f"========= BEGIN TMDB Search for: {query}")
        try:
            results = await self._search_in(query, options.language)
        except CatalogError as e:
            logger.warning(f"Recherche TMDB impossible pour '{query}': {e}")
            return []

        async def fetch_fallback(language: MediaLanguage) -> list[SearchResult]:
            return await self._search_in(query, language)

        results = await self._fallback.reconcile_search(results, options.language, fetch_fallback)
        logger.info(f"found {len(results)} results")
        return results

    async def _search_in(self, query: str, language: MediaLanguage) -> list[SearchResult]:
        """Une page de recherche dans une langue, sans reconciliation."""
        page = await self._catalog.search_by_text(query, self.SEARCH_TYPE, language.tag)
        hits = (page or {}).get("results") or []
        return [self._to_search_result(hit, query) for hit in hits]

    def _to_search_result(self, hit: dict[str, Any], query: str) -> SearchResult:
        title = clean_title(hit.get(self.TITLE_KEY))
        poster_path = hit.get("poster_path")
        return SearchResult(
            provider_id=self.provider_id,
            id=str(hit.get("id", "")),
            title=title,
            original_title=clean_title(hit.get(self.ORIGINAL_TITLE_KEY)),
            original_language=hit.get("original_language") or "",
            poster_url=image_url("w342", poster_path) or None,
            year=year_of(hit.get(self.DATE_KEY)),
            score=calculate_score(query, title),
            media_type=self.SEARCH_TYPE,
        )

    def _add_poster(
        self,
        md: MediaMetadata,
        data: dict[str, Any],
        artwork_type: ArtworkType,
        language: MediaLanguage,
    ) -> None:
        poster_path = data.get("poster_path")
        if poster_path and artwork_type.accepts(ArtworkType.POSTER):
            md.add_artwork(
                MediaArtwork(
                    provider_id=self.provider_id,
                    type=ArtworkType.POSTER,
                    preview_url=image_url("w185", poster_path),
                    default_url=image_url("w342", poster_path),
                    language=language.language,
                    tmdb_id=int(data.get("id") or 0),
                )
            )
