"""
Cache persistant des reponses brutes du catalogue, avec TTL differencies.

Le cache utilise diskcache pour la persistence sur disque, ce qui permet
de conserver les donnees entre les redemarrages de l'application.

TTL par defaut:
- Recherches (SEARCH_TTL): 24 heures - les resultats de recherche changent souvent
- Details (DETAILS_TTL): 7 jours - fiches et saisons changent rarement

Les cles incluent toujours la langue : une reponse en "fr" ne doit jamais
servir une requete de repli en "en".
"""

import asyncio
from functools import partial
from typing import Any, Optional

from diskcache import Cache


class APICache:
    """
    Cache asynchrone avec TTL pour les reponses du catalogue.

    Utilise diskcache pour la persistence et run_in_executor pour
    les operations asynchrones non-bloquantes.

    Example:
        cache = APICache(cache_dir=".cache/api")
        key = APICache.make_key("tmdb", "/tv/1399", "fr")
        await cache.set_details(key, payload)
        data = await cache.get(key)
    """

    SEARCH_TTL = 24 * 60 * 60  # 24 heures en secondes (86400)
    DETAILS_TTL = 7 * 24 * 60 * 60  # 7 jours en secondes (604800)

    def __init__(self, cache_dir: str = ".cache/api") -> None:
        """
        Args:
            cache_dir: Chemin vers le repertoire du cache (cree si inexistant)
        """
        self._cache = Cache(str(cache_dir))

    @staticmethod
    def make_key(source: str, path: str, language: str, *extra: str) -> str:
        """Construit une cle "source:path:langue[:extra...]"."""
        return ":".join((source, path, language, *extra))

    async def get(self, key: str) -> Optional[Any]:
        """
        Recupere une valeur du cache.

        Returns:
            La valeur stockee ou None si absente ou expiree
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.get, key)

    async def set(self, key: str, value: Any, ttl: int) -> None:
        """Stocke une valeur dans le cache avec un TTL en secondes."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None, partial(self._cache.set, key, value, expire=ttl)
        )

    async def set_search(self, key: str, value: Any) -> None:
        """Stocke une page de recherche (TTL de 24h)."""
        await self.set(key, value, self.SEARCH_TTL)

    async def set_details(self, key: str, value: Any) -> None:
        """Stocke une fiche ou une saison (TTL de 7 jours)."""
        await self.set(key, value, self.DETAILS_TTL)

    async def clear(self) -> None:
        """Supprime toutes les entrees du cache."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._cache.clear)

    def close(self) -> None:
        """Ferme la connexion au cache (a appeler a la fin)."""
        self._cache.close()
