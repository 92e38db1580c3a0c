"""
Modele de metadonnees normalise.

Entites representant les resultats de recherche et les fiches completes
(film, serie ou episode) construites par les fournisseurs a partir des
donnees brutes des catalogues externes.

Invariants:
- title, original_title et plot valent "" par defaut, jamais None
- un namespace d'identifiant (tmdb, imdb, tvdb...) apparait au plus une fois
- les notes sont toujours ramenees sur une echelle de 10
"""

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional, Union

from mediameta.core.value_objects.media_type import ArtworkType, CastType, MediaType

# Namespaces d'identifiants externes
TMDB = "tmdb"
IMDB = "imdb"
TVDB = "tvdb"
TVRAGE = "tvrage"

RATING_SCALE = 10.0


@dataclass
class SearchResult:
    """
    Resultat de recherche normalise depuis un catalogue.

    Attributs :
        provider_id : Identifiant du fournisseur ayant produit le resultat
        id : ID natif du catalogue (ex: ID TMDB)
        title : Titre localise
        original_title : Titre en langue originale
        original_language : Langue originale declaree par le catalogue
        poster_url : URL complete du poster
        year : Annee de sortie / premiere diffusion
        score : Similarite entre la requete et le titre (0-1)
        media_type : Type du media trouve
    """

    provider_id: str
    id: str
    title: str = ""
    original_title: str = ""
    original_language: str = ""
    poster_url: Optional[str] = None
    year: Optional[int] = None
    score: float = 0.0
    media_type: Optional[MediaType] = None


@dataclass
class MediaRating:
    """Note d'une source (ex: "tmdb") avec son nombre de votes et son echelle."""

    source: str
    rating: float = 0.0
    votes: int = 0
    max_value: float = RATING_SCALE

    def normalized(self) -> "MediaRating":
        """Retourne une copie de la note ramenee sur l'echelle de 10."""
        if not self.max_value or self.max_value == RATING_SCALE:
            return replace(self, max_value=RATING_SCALE)
        return replace(
            self,
            rating=round(self.rating * RATING_SCALE / self.max_value, 2),
            max_value=RATING_SCALE,
        )


@dataclass
class MediaCastMember:
    """Membre du casting ou de l'equipe technique."""

    name: str
    character: str = ""
    type: CastType = CastType.ACTOR


@dataclass
class MediaArtwork:
    """Image associee a un media (poster, fond, vignette d'episode)."""

    provider_id: str
    type: ArtworkType
    preview_url: str = ""
    default_url: str = ""
    language: str = ""
    tmdb_id: int = 0


@dataclass(frozen=True)
class Certification:
    """Classification d'age pour un pays (ex: US / "TV-MA")."""

    country: str
    rating: str


@dataclass
class MediaMetadata:
    """
    Fiche de metadonnees complete (film, serie ou episode).

    Construite par un fournisseur pour un appel, puis cedee a l'appelant :
    le fournisseur n'en garde aucune reference.

    Attributs :
        provider_id : Fournisseur ayant produit la fiche
        ids : Identifiants externes par namespace (un seul par namespace)
        title : Titre localise
        original_title : Titre en langue originale
        original_language : Langue originale declaree par le catalogue
        plot : Resume
        season_number / episode_number : Renseignes pour un episode
    """

    provider_id: str
    ids: dict[str, Union[int, str]] = field(default_factory=dict)
    title: str = ""
    original_title: str = ""
    original_language: str = ""
    plot: str = ""
    tagline: str = ""
    release_date: Optional[date] = None
    year: Optional[int] = None
    runtime: Optional[int] = None
    status: str = ""
    genres: list[str] = field(default_factory=list)
    ratings: list[MediaRating] = field(default_factory=list)
    cast_members: list[MediaCastMember] = field(default_factory=list)
    artwork: list[MediaArtwork] = field(default_factory=list)
    certifications: list[Certification] = field(default_factory=list)
    production_companies: list[str] = field(default_factory=list)
    season_number: Optional[int] = None
    episode_number: Optional[int] = None

    def set_id(self, namespace: str, value: Union[int, str, None]) -> None:
        """Definit l'identifiant d'un namespace (remplace la valeur existante).

        Les valeurs vides (None, "", 0) sont ignorees.
        """
        if value in (None, "", 0):
            return
        self.ids[namespace] = value

    def get_id(self, namespace: str) -> Optional[Union[int, str]]:
        return self.ids.get(namespace)

    def set_title(self, title: Optional[str]) -> None:
        self.title = title or ""

    def set_original_title(self, original_title: Optional[str]) -> None:
        self.original_title = original_title or ""

    def set_plot(self, plot: Optional[str]) -> None:
        self.plot = plot or ""

    def set_release_date(self, release_date: Optional[date]) -> None:
        """Definit la date de sortie et en derive l'annee."""
        self.release_date = release_date
        if release_date is not None:
            self.year = release_date.year

    def add_rating(self, rating: MediaRating) -> None:
        self.ratings.append(rating.normalized())

    def add_cast_member(self, member: MediaCastMember) -> None:
        self.cast_members.append(member)

    def add_artwork(self, artwork: MediaArtwork) -> None:
        self.artwork.append(artwork)

    def add_certification(self, certification: Certification) -> None:
        if certification not in self.certifications:
            self.certifications.append(certification)

    def add_production_company(self, company: str) -> None:
        if company:
            self.production_companies.append(company)

    @property
    def episode_key(self) -> Optional[tuple[int, int]]:
        """Cle (saison, episode) si la fiche represente un episode."""
        if self.season_number is None or self.episode_number is None:
            return None
        return (self.season_number, self.episode_number)

    def is_empty(self) -> bool:
        """True pour une fiche "soft miss" (aucun identifiant, aucun titre)."""
        return not self.ids and not self.title and not self.plot
