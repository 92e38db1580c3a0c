"""
Fournisseur TMDB pour les series TV et leurs episodes.

Fournit:
- Recherche de series avec remplacement positionnel des titres non traduits
- Fiche d'une serie avec repli sur le titre / resume
- Fiche d'un episode (par numero, ou par date de diffusion connue)
- Liste complete des episodes, saison par saison, avec repli par cle
  (saison, episode)

L'API ne donne pas acces a tous les episodes d'un coup : la fiche de la
serie est recuperee d'abord, puis chaque saison.
"""

from datetime import date
from functools import partial
from typing import Any, Optional

from loguru import logger

from mediameta.core.entities.metadata import (
    IMDB,
    TMDB,
    TVDB,
    TVRAGE,
    Certification,
    MediaArtwork,
    MediaCastMember,
    MediaMetadata,
    SearchResult,
)
from mediameta.core.ports.catalog import CatalogError
from mediameta.core.ports.provider import ScrapeError, ScrapeOptions, SearchOptions
from mediameta.core.value_objects.languages import MediaLanguage
from mediameta.core.value_objects.media_type import ArtworkType, CastType, MediaType
from mediameta.services.tmdb_base import TmdbBaseProvider, image_url, tmdb_rating
from mediameta.utils.helpers import clean_title, is_blank, parse_date

TV_TYPES = (MediaType.TV_SHOW, MediaType.TV_EPISODE)


def _positive(value: Any) -> Optional[int]:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def _set_external_ids(md: MediaMetadata, external_ids: Optional[dict[str, Any]]) -> None:
    """Reporte les IDs tvdb / imdb / tvrage d'un bloc external_ids."""
    if not external_ids:
        return
    md.set_id(TVDB, _positive(external_ids.get("tvdb_id")))
    imdb_id = external_ids.get("imdb_id")
    if not is_blank(imdb_id):
        md.set_id(IMDB, imdb_id)
    md.set_id(TVRAGE, _positive(external_ids.get("tvrage_id")))


class TmdbTvShowProvider(TmdbBaseProvider):
    """
    Fournisseur de metadonnees de series TV depuis TMDB.

    Example:
        provider = TmdbTvShowProvider(SerializedCatalog(catalog), fallback)
        options = ScrapeOptions(media_type=MediaType.TV_SHOW, ids={"tmdb": 1399})
        show = await provider.get_metadata(options)
        episodes = await provider.get_episode_list(options)
    """

    SEARCH_TYPE = MediaType.TV_SHOW
    TITLE_KEY = "name"
    ORIGINAL_TITLE_KEY = "original_name"
    DATE_KEY = "first_air_date"
    DETAIL_APPENDS = ("credits", "external_ids", "content_ratings")

    async def search(self, options: SearchOptions) -> list[SearchResult]:
        logger.debug(f"search() {options}")
        self._require(options.media_type, (MediaType.TV_SHOW,))
        return await self._search(options)

    async def get_metadata(self, options: ScrapeOptions) -> MediaMetadata:
        """
        Scrape la fiche d'une serie (TV_SHOW) ou d'un episode (TV_EPISODE).

        Raises:
            ScrapeError: Si le catalogue echoue sur l'appel principal
            UnsupportedMediaTypeError: Pour tout autre type de media
        """
        self._require(options.media_type, TV_TYPES)
        if options.media_type is MediaType.TV_EPISODE:
            return await self._get_episode_metadata(options)
        return await self._get_show_metadata(options)

    async def get_episode_list(self, options: ScrapeOptions) -> list[MediaMetadata]:
        """
        Liste les episodes de toutes les saisons, dans l'ordre du catalogue.

        Une saison en echec ne contribue aucun episode mais n'interrompt
        pas les suivantes.

        Raises:
            ScrapeError: Si la fiche de la serie ne peut pas etre recuperee
        """
        logger.debug(f"getEpisodeList() {options}")
        self._require(options.media_type, TV_TYPES)

        tmdb_id = options.resolve_id(TMDB)
        if not tmdb_id:
            return []

        language = options.language
        try:
            show = await self._catalog.fetch_detail(tmdb_id, MediaType.TV_SHOW, language.tag)
        except CatalogError as e:
            raise ScrapeError(f"TMDB tv {tmdb_id}: {e}") from e
        if show is None:
            return []

        episodes: list[MediaMetadata] = []
        for season in show.get("seasons") or []:
            season_number = season.get("season_number")
            if season_number is None:
                continue
            try:
                season_episodes = await self._load_season(tmdb_id, season_number, language)
            except CatalogError as e:
                logger.warning(f"Saison {season_number} de {tmdb_id} ignoree: {e}")
                continue

            season_episodes = await self._fallback.reconcile_episodes(
                season_episodes,
                language,
                partial(self._load_season, tmdb_id, season_number),
            )
            episodes.extend(season_episodes)

        return episodes

    async def _get_show_metadata(self, options: ScrapeOptions) -> MediaMetadata:
        logger.debug(f"getTvShowMetadata() {options}")
        tmdb_id = options.resolve_id(TMDB)
        if not tmdb_id:
            return self._empty()

        try:
            md = await self._load_show(options, tmdb_id)
        except CatalogError as e:
            raise ScrapeError(f"TMDB tv {tmdb_id}: {e}") from e
        if md is None:
            return self._empty()

        async def fetch_fallback(fallback_options: ScrapeOptions) -> MediaMetadata:
            return await self._load_show(fallback_options, tmdb_id) or self._empty()

        return await self._fallback.reconcile_item(md, options, fetch_fallback)

    async def _load_show(
        self, options: ScrapeOptions, tmdb_id: int
    ) -> Optional[MediaMetadata]:
        """Fetch + conversion dans la langue courante des options, sans repli."""
        data = await self._catalog.fetch_detail(
            tmdb_id, MediaType.TV_SHOW, options.language.tag, self.DETAIL_APPENDS
        )
        if data is None:
            return None
        return self._show_to_metadata(data, options)

    def _show_to_metadata(self, data: dict[str, Any], options: ScrapeOptions) -> MediaMetadata:
        md = self._empty()
        md.set_id(TMDB, data.get("id"))
        md.set_title(clean_title(data.get("name")))
        md.set_original_title(clean_title(data.get("original_name")))
        md.original_language = data.get("original_language") or ""
        md.set_plot(data.get("overview"))
        md.set_release_date(parse_date(data.get("first_air_date")))
        md.status = data.get("status") or ""
        md.genres = [g["name"] for g in data.get("genres") or [] if g.get("name")]
        run_times = data.get("episode_run_time") or []
        md.runtime = run_times[0] if run_times else None

        rating = tmdb_rating(data)
        if rating is not None:
            md.add_rating(rating)

        self._add_poster(md, data, options.artwork_type, options.language)

        for company in data.get("production_companies") or []:
            md.add_production_company(clean_title(company.get("name")))

        for member in (data.get("credits") or {}).get("cast") or []:
            md.add_cast_member(
                MediaCastMember(
                    name=member.get("name") or "",
                    character=member.get("character") or "",
                    type=CastType.ACTOR,
                )
            )

        _set_external_ids(md, data.get("external_ids"))

        for entry in (data.get("content_ratings") or {}).get("results") or []:
            country = entry.get("iso_3166_1") or ""
            if options.country and country.upper() != options.country.upper():
                continue
            # Les certifications vides ne sont pas conservees
            if is_blank(entry.get("rating")):
                continue
            md.add_certification(Certification(country=country, rating=entry["rating"].strip()))

        return md

    async def _get_episode_metadata(self, options: ScrapeOptions) -> MediaMetadata:
        """
        Scrape un episode via la liste de sa saison.

        L'episode est choisi par (saison, episode), puis a defaut par la date
        de diffusion de la fiche deja connue.
        """
        logger.debug(f"getEpisodeMetadata() {options}")
        tmdb_id = options.resolve_id(TMDB)
        if not tmdb_id:
            return self._empty()

        season_number, episode_number = options.season, options.episode
        if season_number is None or episode_number is None:
            logger.warning("season number/episode number not found")
            return self._empty()

        try:
            season = await self._catalog.fetch_season(
                tmdb_id, season_number, options.language.tag
            )
        except CatalogError as e:
            raise ScrapeError(f"TMDB tv {tmdb_id} season {season_number}: {e}") from e

        raw = _find_episode(season, season_number, episode_number, options.aired)
        if raw is None:
            return self._empty()

        episode = self._episode_details(raw, options)
        fallback_season = (
            episode.season_number if episode.season_number is not None else season_number
        )
        return await self._fallback.reconcile_episode(
            episode,
            episode_number,
            options.language,
            partial(self._load_season, tmdb_id, fallback_season),
        )

    async def _load_season(
        self, tmdb_id: int, season_number: int, language: MediaLanguage
    ) -> list[MediaMetadata]:
        """Episodes d'une saison dans une langue, sans repli."""
        season = await self._catalog.fetch_season(tmdb_id, season_number, language.tag)
        if season is None:
            return []
        return [self._episode_summary(raw) for raw in season.get("episodes") or []]

    def _episode_summary(self, raw: dict[str, Any]) -> MediaMetadata:
        """Conversion legere utilisee pour les listes d'episodes."""
        md = self._empty()
        md.set_id(TMDB, raw.get("id"))
        md.season_number = raw.get("season_number")
        md.episode_number = raw.get("episode_number")
        md.set_title(clean_title(raw.get("name")))
        md.set_plot(raw.get("overview"))

        rating = tmdb_rating(raw)
        if rating is not None:
            md.add_rating(rating)

        air_date = parse_date(raw.get("air_date"))
        if air_date is not None:
            md.set_release_date(air_date)
        return md

    def _episode_details(self, raw: dict[str, Any], options: ScrapeOptions) -> MediaMetadata:
        """Conversion complete d'un episode (invites, vignette, IDs externes)."""
        md = self._episode_summary(raw)
        # Absent de /tv/{id}/season/{n} : seul l'ID tmdb est alors renseigne
        _set_external_ids(md, raw.get("external_ids"))

        for guest in raw.get("guest_stars") or []:
            md.add_cast_member(
                MediaCastMember(
                    name=guest.get("name") or "",
                    character=guest.get("character") or "",
                    type=CastType.ACTOR,
                )
            )

        still_path = raw.get("still_path")
        if still_path and options.artwork_type.accepts(ArtworkType.THUMB):
            md.add_artwork(
                MediaArtwork(
                    provider_id=self.provider_id,
                    type=ArtworkType.THUMB,
                    preview_url=image_url("original", still_path),
                    default_url=image_url("original", still_path),
                )
            )
        return md


def _find_episode(
    season: Optional[dict[str, Any]],
    season_number: int,
    episode_number: int,
    aired: Optional[date],
) -> Optional[dict[str, Any]]:
    """Cherche l'episode par numeros, puis par date de diffusion."""
    if not season:
        return None
    episodes = season.get("episodes") or []
    for raw in episodes:
        if raw.get("season_number") == season_number and raw.get("episode_number") == episode_number:
            return raw
    if aired is not None:
        for raw in episodes:
            if parse_date(raw.get("air_date")) == aired:
                return raw
    return None
