"""
Configuration du logging de MediaMeta via loguru.

Deux sinks :
- stderr : format court (niveau + message), la sortie des commandes
  passe par Rich sur stdout et ne doit pas etre melangee aux logs
- fichier : JSON avec rotation, limite aux logs du package mediameta,
  niveau DEBUG pour garder la trace des decisions de repli de langue
"""

import sys

from loguru import logger

from .config import Settings

CONSOLE_FORMAT = "<level>{level: <8}</level> | <cyan>{name}</cyan> | <level>{message}</level>"


def _only_mediameta(record) -> bool:
    return record["name"] is not None and record["name"].startswith("mediameta")


def configure_logging(settings: Settings) -> None:
    """
    Installe les sinks a partir des Settings.

    Le niveau console vient de MEDIAMETA_LOG_LEVEL ; le fichier, sa taille
    de rotation et le nombre d'archives de MEDIAMETA_LOG_FILE,
    MEDIAMETA_LOG_ROTATION_SIZE et MEDIAMETA_LOG_RETENTION_COUNT.
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        format=CONSOLE_FORMAT,
        colorize=True,
    )

    log_file = settings.log_file
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        filter=_only_mediameta,
        serialize=True,
        rotation=settings.log_rotation_size,
        retention=settings.log_retention_count,
        compression="zip",
        enqueue=True,
    )

    logger.debug(
        f"Logging configure: {log_file} (rotation {settings.log_rotation_size}, "
        f"{settings.log_retention_count} archives)"
    )
