"""
Objets valeur pour la classification des medias, artworks et membres du casting.
"""

from enum import Enum


class MediaType(Enum):
    """Type de media manipule par les fournisseurs de metadonnees.

    Valeurs:
        MOVIE: Film (long-metrage)
        TV_SHOW: Serie TV
        TV_EPISODE: Episode individuel d'une serie
    """

    MOVIE = "movie"
    TV_SHOW = "tv_show"
    TV_EPISODE = "tv_episode"


class ArtworkType(Enum):
    """Type d'artwork, utilise aussi comme filtre dans ScrapeOptions.

    ALL n'est jamais porte par un artwork : il signifie "tous les types".
    """

    ALL = "all"
    POSTER = "poster"
    BACKGROUND = "background"
    THUMB = "thumb"

    def accepts(self, other: "ArtworkType") -> bool:
        """Indique si ce filtre laisse passer un artwork du type donne."""
        return self is ArtworkType.ALL or self is other


class CastType(Enum):
    """Role d'un membre du casting."""

    ACTOR = "actor"
    DIRECTOR = "director"
    WRITER = "writer"
    PRODUCER = "producer"
