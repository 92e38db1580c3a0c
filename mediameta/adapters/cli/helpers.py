"""
Utilitaires partages pour les commandes CLI de MediaMeta.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- with_container : decorateur injectant un container initialise
- async_command : decorateur transformant une fonction async en commande sync
- resolve_language_option : conversion d'une option --language en MediaLanguage
"""

import asyncio
import inspect
from contextlib import contextmanager
from functools import wraps
from typing import Optional

import typer
from loguru import logger as loguru_logger
from rich.console import Console

from mediameta.container import Container
from mediameta.core.value_objects.languages import (
    MediaLanguage,
    UnknownLanguageError,
    resolve,
)

# Console globale pour tous les affichages
console = Console()


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("mediameta")
    try:
        yield
    finally:
        loguru_logger.enable("mediameta")


def with_container():
    """
    Decorateur qui injecte un container initialise en premier argument.

    Le catalogue TMDB est ferme a la fin de la commande.

    Usage:
        @with_container()
        async def my_command(container, ...):
            config = container.config()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            if not container.config().tmdb_enabled:
                console.print("[red]Cle API TMDB absente[/red] (MEDIAMETA_TMDB_API_KEY)")
                raise typer.Exit(code=1)
            try:
                return await func(container, *args, **kwargs)
            finally:
                await container.tmdb_catalog().close()
        return wrapper
    return decorator


def async_command(func):
    """
    Transforme une fonction async en commande sync via asyncio.run().

    Preserve les annotations Typer pour que les options/arguments soient
    correctement interpretes.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        asyncio.run(func(*args, **kwargs))
    # Preserver les annotations Typer
    wrapper.__signature__ = inspect.signature(func)
    wrapper.__annotations__ = func.__annotations__
    return wrapper


def resolve_language_option(code: Optional[str], default: MediaLanguage) -> MediaLanguage:
    """
    Convertit l'option --language en MediaLanguage.

    Raises:
        typer.BadParameter: Si la langue n'est pas dans le registre
    """
    if not code:
        return default
    try:
        return resolve(code)
    except UnknownLanguageError as e:
        raise typer.BadParameter(str(e)) from e
