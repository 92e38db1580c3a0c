"""
Commandes CLI de MediaMeta : recherche, scrape, liste d'episodes et scrape en lot.

Chaque commande est une fonction sync (Typer) qui delegue a une
implementation async recevant le container DI.
"""

from typing import Annotated, Optional

import typer
from rich.table import Table

from mediameta.adapters.cli.helpers import (
    async_command,
    console,
    resolve_language_option,
    suppress_loguru,
    with_container,
)
from mediameta.core.entities.metadata import TMDB, MediaMetadata, SearchResult
from mediameta.core.ports.provider import (
    MetadataProviderError,
    ScrapeOptions,
    SearchOptions,
)
from mediameta.core.value_objects.media_type import MediaType

LanguageOption = Annotated[
    Optional[str],
    typer.Option("--language", "-l", help="Langue demandee (ex: fr, de, pt-BR)"),
]
MediaTypeOption = Annotated[
    MediaType,
    typer.Option("--type", "-t", help="Type de media"),
]


def _render_results(results: list[SearchResult]) -> None:
    table = Table(title="Resultats TMDB", show_header=True)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Titre")
    table.add_column("Titre original", style="dim")
    table.add_column("Annee", justify="right")
    table.add_column("Score", justify="right", style="green")
    for result in results:
        table.add_row(
            result.id,
            result.title,
            result.original_title,
            str(result.year or ""),
            f"{result.score:.0%}",
        )
    console.print(table)


def _render_metadata(md: MediaMetadata) -> None:
    if md.is_empty():
        console.print("[yellow]Aucune fiche trouvee.[/yellow]")
        return

    year_str = f" ({md.year})" if md.year else ""
    console.print(f"[bold cyan]{md.title}[/bold cyan]{year_str}")
    if md.original_title and md.original_title != md.title:
        console.print(f"[dim]{md.original_title}[/dim]")
    if md.episode_key:
        console.print(f"Saison {md.season_number}, episode {md.episode_number}")
    ids = ", ".join(f"{namespace}={value}" for namespace, value in md.ids.items())
    console.print(f"IDs: {ids}")
    if md.genres:
        console.print(f"Genres: {', '.join(md.genres)}")
    for rating in md.ratings:
        console.print(f"Note {rating.source}: {rating.rating}/10 ({rating.votes} votes)")
    if md.certifications:
        certifications = ", ".join(f"{c.country}:{c.rating}" for c in md.certifications)
        console.print(f"Certifications: {certifications}")
    if md.plot:
        console.print(f"\n{md.plot}")


def _render_episodes(episodes: list[MediaMetadata]) -> None:
    table = Table(title=f"Episodes ({len(episodes)})", show_header=True)
    table.add_column("S", justify="right", style="cyan")
    table.add_column("E", justify="right", style="cyan")
    table.add_column("Titre")
    table.add_column("Diffusion", style="dim")
    for episode in episodes:
        table.add_row(
            str(episode.season_number),
            str(episode.episode_number),
            episode.title,
            episode.release_date.isoformat() if episode.release_date else "",
        )
    console.print(table)


@async_command
async def search(
    query: Annotated[str, typer.Argument(help="Titre a rechercher")],
    media_type: MediaTypeOption = MediaType.MOVIE,
    language: LanguageOption = None,
) -> None:
    """Recherche un film ou une serie sur TMDB."""
    await _search_async(query, media_type, language)


@with_container()
async def _search_async(
    container, query: str, media_type: MediaType, language: Optional[str]
) -> None:
    settings = container.config()
    provider = container.registry().get(TMDB)
    options = SearchOptions(
        query=query,
        media_type=media_type,
        language=resolve_language_option(language, settings.default_language),
    )
    try:
        with suppress_loguru():
            results = await provider.search(options)
    except MetadataProviderError as e:
        console.print(f"[red]Erreur:[/red] {e}")
        raise typer.Exit(code=1) from e

    if not results:
        console.print("[yellow]Aucun resultat.[/yellow]")
        return
    _render_results(results)


@async_command
async def scrape(
    tmdb_id: Annotated[int, typer.Argument(help="ID TMDB du film ou de la serie")],
    media_type: MediaTypeOption = MediaType.MOVIE,
    language: LanguageOption = None,
    country: Annotated[
        Optional[str],
        typer.Option("--country", "-c", help="Pays des certifications (ex: US)"),
    ] = None,
    season: Annotated[
        Optional[int], typer.Option("--season", "-s", help="Saison (type tv_episode)")
    ] = None,
    episode: Annotated[
        Optional[int], typer.Option("--episode", "-e", help="Episode (type tv_episode)")
    ] = None,
) -> None:
    """Affiche la fiche complete d'un film, d'une serie ou d'un episode."""
    await _scrape_async(tmdb_id, media_type, language, country, season, episode)


@with_container()
async def _scrape_async(
    container,
    tmdb_id: int,
    media_type: MediaType,
    language: Optional[str],
    country: Optional[str],
    season: Optional[int],
    episode: Optional[int],
) -> None:
    settings = container.config()
    provider = container.registry().get(TMDB)
    options = ScrapeOptions(
        media_type=media_type,
        language=resolve_language_option(language, settings.default_language),
        country=country or settings.country,
        ids={TMDB: tmdb_id},
        season=season,
        episode=episode,
    )
    try:
        with suppress_loguru():
            md = await provider.get_metadata(options)
    except MetadataProviderError as e:
        console.print(f"[red]Erreur:[/red] {e}")
        raise typer.Exit(code=1) from e

    _render_metadata(md)


@async_command
async def episodes(
    tmdb_id: Annotated[int, typer.Argument(help="ID TMDB de la serie")],
    language: LanguageOption = None,
) -> None:
    """Liste tous les episodes d'une serie, saison par saison."""
    await _episodes_async(tmdb_id, language)


@with_container()
async def _episodes_async(container, tmdb_id: int, language: Optional[str]) -> None:
    settings = container.config()
    provider = container.registry().get(TMDB)
    options = ScrapeOptions(
        media_type=MediaType.TV_SHOW,
        language=resolve_language_option(language, settings.default_language),
        ids={TMDB: tmdb_id},
    )
    try:
        with suppress_loguru():
            episode_list = await provider.get_episode_list(options)
    except MetadataProviderError as e:
        console.print(f"[red]Erreur:[/red] {e}")
        raise typer.Exit(code=1) from e

    if not episode_list:
        console.print("[yellow]Aucun episode.[/yellow]")
        return
    _render_episodes(episode_list)


@async_command
async def batch(
    tmdb_ids: Annotated[list[int], typer.Argument(help="IDs TMDB a scraper")],
    media_type: MediaTypeOption = MediaType.MOVIE,
    language: LanguageOption = None,
) -> None:
    """Scrape plusieurs fiches en parallele (pool borne par worker_count)."""
    await _batch_async(tmdb_ids, media_type, language)


@with_container()
async def _batch_async(
    container, tmdb_ids: list[int], media_type: MediaType, language: Optional[str]
) -> None:
    settings = container.config()
    provider = container.registry().get(TMDB)
    pool = container.scrape_pool()
    requested = resolve_language_option(language, settings.default_language)

    def make_job(tmdb_id: int):
        options = ScrapeOptions(
            media_type=media_type,
            language=requested,
            country=settings.country,
            ids={TMDB: tmdb_id},
        )
        return lambda: provider.get_metadata(options)

    with suppress_loguru():
        outcomes = await pool.run([make_job(tmdb_id) for tmdb_id in tmdb_ids])

    table = Table(title="Scrape en lot", show_header=True)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Resultat")
    for tmdb_id, outcome in zip(tmdb_ids, outcomes):
        if isinstance(outcome, BaseException):
            table.add_row(str(tmdb_id), f"[red]✗ {outcome}[/red]")
        elif outcome.is_empty():
            table.add_row(str(tmdb_id), "[yellow]- introuvable[/yellow]")
        else:
            year_str = f" ({outcome.year})" if outcome.year else ""
            table.add_row(str(tmdb_id), f"[green]✓[/green] {outcome.title}{year_str}")
    console.print(table)
