"""
Fournisseur TMDB pour les films.

Orchestre la recherche et le scrape d'un film : appel principal au
catalogue dans la langue demandee, conversion vers MediaMetadata, puis
reconciliation par langue de repli si le titre n'est pas traduit ou si
le resume est vide.
"""

from typing import Any, Optional

from loguru import logger

from mediameta.core.entities.metadata import (
    IMDB,
    TMDB,
    Certification,
    MediaArtwork,
    MediaCastMember,
    MediaMetadata,
    SearchResult,
)
from mediameta.core.ports.catalog import CatalogError
from mediameta.core.ports.provider import (
    ScrapeError,
    ScrapeOptions,
    SearchOptions,
    UnsupportedMediaTypeError,
)
from mediameta.core.value_objects.media_type import ArtworkType, CastType, MediaType
from mediameta.services.tmdb_base import TmdbBaseProvider, image_url, tmdb_rating
from mediameta.utils.helpers import clean_title, is_blank, parse_date

# Postes de l'equipe technique conserves dans le casting
_CREW_JOBS = {
    "Director": CastType.DIRECTOR,
    "Screenplay": CastType.WRITER,
    "Writer": CastType.WRITER,
    "Producer": CastType.PRODUCER,
}


class TmdbMovieProvider(TmdbBaseProvider):
    """
    Fournisseur de metadonnees de films depuis TMDB.

    Example:
        provider = TmdbMovieProvider(SerializedCatalog(catalog), fallback)
        results = await provider.search(SearchOptions("Avatar", MediaType.MOVIE))
        md = await provider.get_metadata(
            ScrapeOptions(media_type=MediaType.MOVIE, result=results[0])
        )
    """

    SEARCH_TYPE = MediaType.MOVIE
    TITLE_KEY = "title"
    ORIGINAL_TITLE_KEY = "original_title"
    DATE_KEY = "release_date"
    DETAIL_APPENDS = ("credits", "external_ids", "release_dates")

    async def search(self, options: SearchOptions) -> list[SearchResult]:
        logger.debug(f"search() {options}")
        self._require(options.media_type, (MediaType.MOVIE,))
        return await self._search(options)

    async def get_metadata(self, options: ScrapeOptions) -> MediaMetadata:
        """
        Scrape la fiche d'un film.

        Returns:
            Fiche complete, ou fiche vide si aucun ID TMDB n'est resolu
            ou si le film n'existe pas

        Raises:
            ScrapeError: Si le catalogue echoue sur l'appel principal
        """
        logger.debug(f"getMetadata() {options}")
        self._require(options.media_type, (MediaType.MOVIE,))

        tmdb_id = options.resolve_id(TMDB)
        if not tmdb_id:
            return self._empty()

        try:
            md = await self._load_movie(options, tmdb_id)
        except CatalogError as e:
            raise ScrapeError(f"TMDB movie {tmdb_id}: {e}") from e
        if md is None:
            return self._empty()

        async def fetch_fallback(fallback_options: ScrapeOptions) -> MediaMetadata:
            return await self._load_movie(fallback_options, tmdb_id) or self._empty()

        return await self._fallback.reconcile_item(md, options, fetch_fallback)

    async def get_episode_list(self, options: ScrapeOptions) -> list[MediaMetadata]:
        raise UnsupportedMediaTypeError(options.media_type)

    async def _load_movie(
        self, options: ScrapeOptions, tmdb_id: int
    ) -> Optional[MediaMetadata]:
        """Fetch + conversion dans la langue courante des options, sans repli."""
        data = await self._catalog.fetch_detail(
            tmdb_id, MediaType.MOVIE, options.language.tag, self.DETAIL_APPENDS
        )
        if data is None:
            return None
        return self._to_metadata(data, options)

    def _to_metadata(self, data: dict[str, Any], options: ScrapeOptions) -> MediaMetadata:
        md = self._empty()
        md.set_id(TMDB, data.get("id"))
        md.set_id(IMDB, data.get("imdb_id") or (data.get("external_ids") or {}).get("imdb_id"))
        md.set_title(clean_title(data.get("title")))
        md.set_original_title(clean_title(data.get("original_title")))
        md.original_language = data.get("original_language") or ""
        md.set_plot(data.get("overview"))
        md.tagline = data.get("tagline") or ""
        md.set_release_date(parse_date(data.get("release_date")))
        md.runtime = data.get("runtime") or None
        md.status = data.get("status") or ""
        md.genres = [g["name"] for g in data.get("genres") or [] if g.get("name")]

        rating = tmdb_rating(data)
        if rating is not None:
            md.add_rating(rating)

        self._add_poster(md, data, options.artwork_type, options.language)
        backdrop_path = data.get("backdrop_path")
        if backdrop_path and options.artwork_type.accepts(ArtworkType.BACKGROUND):
            md.add_artwork(
                MediaArtwork(
                    provider_id=self.provider_id,
                    type=ArtworkType.BACKGROUND,
                    preview_url=image_url("w300", backdrop_path),
                    default_url=image_url("w1280", backdrop_path),
                    tmdb_id=int(data.get("id") or 0),
                )
            )

        for company in data.get("production_companies") or []:
            md.add_production_company(clean_title(company.get("name")))

        credits = data.get("credits") or {}
        for member in credits.get("cast") or []:
            md.add_cast_member(
                MediaCastMember(
                    name=member.get("name") or "",
                    character=member.get("character") or "",
                    type=CastType.ACTOR,
                )
            )
        for member in credits.get("crew") or []:
            cast_type = _CREW_JOBS.get(member.get("job"))
            if cast_type is not None:
                md.add_cast_member(MediaCastMember(name=member.get("name") or "", type=cast_type))

        for certification in _release_certifications(data, options.country):
            md.add_certification(certification)
        return md


def _release_certifications(
    data: dict[str, Any], country: Optional[str]
) -> list[Certification]:
    """Premiere certification non vide par pays, filtree sur le pays demande."""
    certifications = []
    for entry in (data.get("release_dates") or {}).get("results") or []:
        iso = entry.get("iso_3166_1") or ""
        if country and iso.upper() != country.upper():
            continue
        for release in entry.get("release_dates") or []:
            rating = release.get("certification")
            if not is_blank(rating):
                certifications.append(Certification(country=iso, rating=rating.strip()))
                break
    return certifications
