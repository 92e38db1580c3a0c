"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe MEDIAMETA_,
et peut optionnellement être fournie via un fichier .env.

La clé API TMDB est optionnelle - le catalogue TMDB est désactivé si elle n'est pas fournie.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mediameta.core.value_objects.languages import MediaLanguage, resolve

# Trouver le fichier .env à la racine du projet (parent de mediameta/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe MEDIAMETA_.
    Exemple : MEDIAMETA_TITLE_FALLBACK=true

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="MEDIAMETA_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Clé API (OPTIONNELLE - catalogue TMDB désactivé si non définie)
    tmdb_api_key: Optional[str] = Field(default=None)

    # Langue et pays demandés par défaut
    language: str = Field(default="en")
    country: Optional[str] = Field(default=None)

    # Repli de langue pour les titres/résumés non traduits
    title_fallback: bool = Field(default=False)
    title_fallback_language: str = Field(default="en")

    # Cache des réponses API
    cache_dir: Path = Field(default=Path("~/.cache/mediameta"))

    # Taille du pool de scrapes en tâche de fond
    worker_count: int = Field(default=4, ge=1)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/mediameta.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("language", "title_fallback_language")
    @classmethod
    def check_language(cls, v: str) -> str:
        """Refuse les langues absentes du registre (ex: "xx")."""
        return resolve(v).name

    @property
    def tmdb_enabled(self) -> bool:
        """Vérifie si l'API TMDB est configurée."""
        return self.tmdb_api_key is not None

    @property
    def default_language(self) -> MediaLanguage:
        return resolve(self.language)

    @property
    def fallback_language(self) -> MediaLanguage:
        return resolve(self.title_fallback_language)
