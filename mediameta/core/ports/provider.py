"""
Port fournisseur de metadonnees.

Definit le contrat que tout fournisseur (source de metadonnees) respecte :
recherche, scrape par identifiant et liste d'episodes, ainsi que les
options de chaque appel et la taxonomie d'erreurs associee.

Politique d'erreurs :
- soft miss (requete vide, id introuvable, rien trouve) : resultat vide
- echec du catalogue sur l'appel principal : ScrapeError
- type de media non supporte : UnsupportedMediaTypeError
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import date
from typing import Iterator, Optional, Union

from mediameta.core.entities.metadata import MediaMetadata, SearchResult
from mediameta.core.value_objects.languages import MediaLanguage
from mediameta.core.value_objects.media_type import ArtworkType, MediaType


class MetadataProviderError(Exception):
    """Erreur de base des fournisseurs de metadonnees."""


class ScrapeError(MetadataProviderError):
    """L'appel principal au catalogue a echoue : aucune donnee produite."""


class UnsupportedMediaTypeError(MetadataProviderError):
    """Le fournisseur ne sait pas traiter ce type de media."""

    def __init__(self, media_type: Optional[MediaType]) -> None:
        self.media_type = media_type
        label = media_type.value if media_type else "none"
        super().__init__(f"Unsupported media type: {label}")


class UnknownProviderError(MetadataProviderError):
    """Aucun fournisseur n'est enregistre sous cet identifiant."""

    def __init__(self, provider_id: str) -> None:
        self.provider_id = provider_id
        super().__init__(f"Unknown provider: {provider_id}")


@dataclass
class SearchOptions:
    """
    Parametres d'une recherche.

    Attributs :
        query : Texte libre saisi par l'utilisateur
        media_type : MOVIE ou TV_SHOW
        language : Langue demandee pour les titres
    """

    query: str
    media_type: Optional[MediaType] = MediaType.MOVIE
    language: MediaLanguage = MediaLanguage.en


@dataclass
class ScrapeOptions:
    """
    Parametres d'un scrape (fiche ou liste d'episodes).

    Attributs :
        media_type : MOVIE, TV_SHOW ou TV_EPISODE
        language : Langue demandee (modifiee temporairement pendant un repli)
        country : Pays pour la selection des certifications (ex: "US")
        artwork_type : Filtre des artworks a conserver
        ids : Identifiants externes deja connus (ex: {"tmdb": 1399})
        result : Resultat de recherche choisi precedemment
        season / episode : Numeros cibles pour un episode
        metadata : Fiche deja connue (sa date de sortie sert a retrouver
                   un episode par date de diffusion)
    """

    media_type: Optional[MediaType] = MediaType.MOVIE
    language: MediaLanguage = MediaLanguage.en
    country: Optional[str] = None
    artwork_type: ArtworkType = ArtworkType.ALL
    ids: dict[str, Union[int, str]] = field(default_factory=dict)
    result: Optional[SearchResult] = None
    season: Optional[int] = None
    episode: Optional[int] = None
    metadata: Optional[MediaMetadata] = None

    def resolve_id(self, namespace: str) -> int:
        """
        Resout l'identifiant cible, toujours dans le meme ordre :
        1. ID du resultat de recherche embarque
        2. ID explicite des options pour ce namespace

        Returns:
            L'identifiant, ou 0 si aucun n'est exploitable
        """
        if self.result is not None:
            media_id = _as_int(self.result.id)
            if media_id:
                return media_id
        return _as_int(self.ids.get(namespace))

    @property
    def aired(self) -> Optional[date]:
        """Date de diffusion connue de l'episode cible, si fournie."""
        if self.metadata is None:
            return None
        return self.metadata.release_date

    @contextmanager
    def using_language(self, language: MediaLanguage) -> Iterator["ScrapeOptions"]:
        """
        Remplace temporairement la langue des options.

        La langue d'origine est restauree a la sortie du bloc, y compris
        sur exception : l'appelant retrouve ses options inchangees.
        """
        previous = self.language
        self.language = language
        try:
            yield self
        finally:
            self.language = previous


def _as_int(value: Union[int, str, None]) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


class IMetadataProvider(ABC):
    """
    Interface commune des sources de metadonnees.

    Les fournisseurs concrets sont des variantes enregistrees explicitement
    dans ProviderRegistry.
    """

    @property
    @abstractmethod
    def provider_id(self) -> str:
        """Identifiant unique du fournisseur (ex: 'tmdb')."""
        ...

    @abstractmethod
    async def search(self, options: SearchOptions) -> list[SearchResult]:
        """
        Recherche des medias par texte.

        Returns:
            Resultats dans l'ordre du catalogue (vide si requete vide ou echec)

        Raises:
            UnsupportedMediaTypeError: Type de media non gere
        """
        ...

    @abstractmethod
    async def get_metadata(self, options: ScrapeOptions) -> MediaMetadata:
        """
        Recupere la fiche complete du media cible.

        Returns:
            Fiche remplie, ou fiche vide si l'identifiant est introuvable

        Raises:
            ScrapeError: Echec du catalogue sur l'appel principal
            UnsupportedMediaTypeError: Type de media non gere
        """
        ...

    @abstractmethod
    async def get_episode_list(self, options: ScrapeOptions) -> list[MediaMetadata]:
        """
        Liste tous les episodes d'une serie, saison par saison.

        Raises:
            ScrapeError: Echec du catalogue sur la fiche de la serie
            UnsupportedMediaTypeError: Type de media non gere
        """
        ...
