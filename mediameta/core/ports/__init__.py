"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Les ports sont les frontières de l'architecture hexagonale. Ils définissent
ce dont le domaine a besoin du monde extérieur sans spécifier
comment ces besoins sont satisfaits.

Port catalogue : Donnees brutes d'un catalogue externe
- IRemoteCatalog : Recherche, fiche detaillee, saison
- CatalogError : Echec de transport ou de decodage

Port fournisseur : Contrat des sources de metadonnees
- IMetadataProvider : search / get_metadata / get_episode_list
- SearchOptions, ScrapeOptions : Parametres par appel
- MetadataProviderError et sous-classes : Taxonomie d'erreurs
"""

from mediameta.core.ports.catalog import CatalogError, IRemoteCatalog
from mediameta.core.ports.provider import (
    IMetadataProvider,
    MetadataProviderError,
    ScrapeError,
    ScrapeOptions,
    SearchOptions,
    UnknownProviderError,
    UnsupportedMediaTypeError,
)

__all__ = [
    # Catalogue
    "CatalogError",
    "IRemoteCatalog",
    # Fournisseurs
    "IMetadataProvider",
    "MetadataProviderError",
    "ScrapeError",
    "ScrapeOptions",
    "SearchOptions",
    "UnknownProviderError",
    "UnsupportedMediaTypeError",
]
