"""
Registre explicite des fournisseurs de metadonnees.

Les fournisseurs sont enregistres au demarrage (voir container.py) ;
aucune decouverte automatique.
"""

from mediameta.core.ports.provider import IMetadataProvider, UnknownProviderError


class ProviderRegistry:
    """
    Table identifiant -> fournisseur.

    Example:
        registry = ProviderRegistry()
        registry.register(tmdb_provider)
        provider = registry.get("tmdb")
    """

    def __init__(self, *providers: IMetadataProvider) -> None:
        self._providers: dict[str, IMetadataProvider] = {}
        for provider in providers:
            self.register(provider)

    def register(self, provider: IMetadataProvider) -> None:
        """Enregistre un fournisseur (remplace celui de meme identifiant)."""
        self._providers[provider.provider_id] = provider

    def get(self, provider_id: str) -> IMetadataProvider:
        provider = self._providers.get(provider_id)
        if provider is None:
            raise UnknownProviderError(provider_id)
        return provider

    def ids(self) -> list[str]:
        return sorted(self._providers)

    def __contains__(self, provider_id: str) -> bool:
        return provider_id in self._providers
