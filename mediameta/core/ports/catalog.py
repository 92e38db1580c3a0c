"""
Port du catalogue distant.

Interface abstraite que les fournisseurs appellent pour obtenir les
donnees brutes (format natif du catalogue) d'une recherche, d'une fiche
ou d'une saison, dans une langue donnee. Le domaine ne fait jamais
d'I/O reseau lui-meme : il passe toujours par ce port.

Contrat de retour commun :
- dict : donnees brutes du catalogue
- None : rien trouve (soft miss)
- CatalogError : echec de transport ou de decodage
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from mediameta.core.value_objects.media_type import MediaType


class CatalogError(Exception):
    """Echec de transport ou de decodage lors d'un appel au catalogue."""


class IRemoteCatalog(ABC):
    """
    Capacite "catalogue distant" consommee par les fournisseurs.

    Les implementations ne sont pas sures pour un usage concurrent :
    l'appelant serialise les appels (voir SerializedCatalog).
    """

    @abstractmethod
    async def search_by_text(
        self,
        text: str,
        media_type: MediaType,
        language: str,
    ) -> Optional[dict[str, Any]]:
        """
        Recherche textuelle dans le catalogue.

        Args:
            text: Texte de recherche deja normalise
            media_type: Type de media recherche (film ou serie)
            language: Langue au format "fr" ou "pt-BR"

        Returns:
            Page de resultats brute, ou None
        """
        ...

    @abstractmethod
    async def fetch_detail(
        self,
        media_id: int,
        media_type: MediaType,
        language: str,
        appends: Sequence[str] = (),
    ) -> Optional[dict[str, Any]]:
        """
        Recupere la fiche detaillee d'un film ou d'une serie.

        Args:
            media_id: ID natif du catalogue
            media_type: MOVIE ou TV_SHOW
            language: Langue au format "fr" ou "pt-BR"
            appends: Sous-ressources a inclure (ex: "credits", "external_ids")

        Returns:
            Fiche brute, ou None si non trouvee
        """
        ...

    @abstractmethod
    async def fetch_season(
        self,
        media_id: int,
        season_number: int,
        language: str,
    ) -> Optional[dict[str, Any]]:
        """
        Recupere une saison complete (avec la liste de ses episodes).

        Returns:
            Saison brute, ou None si non trouvee
        """
        ...

    @property
    @abstractmethod
    def source(self) -> str:
        """Retourne l'identifiant du catalogue (ex: 'tmdb')."""
        ...
