"""
Catalogues distants pour la recuperation des metadonnees brutes.

Ce module fournit l'adaptateur TMDB (The Movie Database) qui implemente
IRemoteCatalog defini dans core/ports/catalog.py.

Infrastructure partagee:
- APICache: Cache persistant avec TTL differencies (recherche 24h, details 7j)
- RateLimitError: Exception pour les erreurs 429
- with_retry / request_with_retry: Backoff exponentiel pour le rate limiting
"""

from mediameta.adapters.api.cache import APICache
from mediameta.adapters.api.retry import RateLimitError, request_with_retry, with_retry
from mediameta.adapters.api.tmdb_catalog import TMDBCatalog

__all__ = [
    "APICache",
    "RateLimitError",
    "TMDBCatalog",
    "request_with_retry",
    "with_retry",
]
