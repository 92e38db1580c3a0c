"""
Point d'entrée CLI de MediaMeta.

Configure le logging et monte les commandes de recherche et de scrape.
"""

import typer
from loguru import logger

from .adapters.cli.commands import batch, episodes, scrape, search
from .config import Settings
from .container import Container
from .logging_config import configure_logging

app = typer.Typer(
    name="mediameta",
    help="Recherche et scrape de metadonnees films et series (TMDB)",
)
container = Container()


@app.callback()
def main_callback() -> None:
    """MediaMeta - Metadonnees films et series avec repli de langue."""


# Monter les commandes depuis commands.py
app.command()(search)
app.command()(scrape)
app.command()(episodes)
app.command()(batch)


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration MediaMeta")
    typer.echo(f"API TMDB : {'activée' if config.tmdb_enabled else 'désactivée'}")
    typer.echo(f"Langue : {config.default_language.title}")
    typer.echo(f"Pays : {config.country or '-'}")
    typer.echo(
        f"Repli de langue : {config.fallback_language.title if config.title_fallback else 'désactivé'}"
    )
    typer.echo(f"Cache : {config.cache_dir}")
    typer.echo(f"Workers : {config.worker_count}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo("MediaMeta v0.1.0")


def main() -> None:
    """Point d'entrée de l'application."""
    # Charge la configuration et configure le logging
    settings = container.config()
    configure_logging(settings)

    logger.info("Démarrage de MediaMeta", version="0.1.0")

    # Lance la CLI
    app()


if __name__ == "__main__":
    main()
