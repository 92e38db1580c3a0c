"""
Fixtures pytest partagees pour les tests MediaMeta.

Ce module contient les fixtures communes utilisees dans les tests:
- Mock du catalogue serialise (reponses brutes TMDB par langue)
- Moteurs de repli actif / inactif
- Settings de test avec chemins temporaires
"""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from mediameta.config import Settings
from mediameta.core.value_objects.languages import MediaLanguage
from mediameta.services.fallback import FallbackConfig, LanguageFallback
from mediameta.services.serialized_catalog import SerializedCatalog


@pytest.fixture
def mock_catalog() -> AsyncMock:
    """
    Mock de SerializedCatalog pour les tests des fournisseurs.

    Les reponses doivent etre configurees dans chaque test (return_value
    ou side_effect via by_language).
    """
    catalog = AsyncMock(spec=SerializedCatalog)
    catalog.search_by_text.return_value = None
    catalog.fetch_detail.return_value = None
    catalog.fetch_season.return_value = None
    return catalog


@pytest.fixture
def fallback_enabled() -> LanguageFallback:
    """Repli actif vers l'anglais."""
    return LanguageFallback(lambda: FallbackConfig(enabled=True, language=MediaLanguage.en))


@pytest.fixture
def fallback_disabled() -> LanguageFallback:
    """Repli desactive (configuration par defaut)."""
    return LanguageFallback(lambda: FallbackConfig())


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Utilise tmp_path de pytest pour isoler le cache et les logs.
    """
    return Settings(
        _env_file=None,
        tmdb_api_key="test_api_key",
        cache_dir=tmp_path / "cache",
        log_file=tmp_path / "logs" / "mediameta.log",
    )
