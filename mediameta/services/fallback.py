"""
Reconciliation des textes non traduits via une langue de repli.

Beaucoup de catalogues renvoient silencieusement le titre original (ou un
resume vide) quand aucune traduction n'existe dans la langue demandee, et
synthetisent des titres d'episode du type "Episode 7". Ce module detecte
ces cas, reinterroge le catalogue UNE seule fois dans la langue de repli
configuree et fusionne champ par champ, sans jamais ecraser une donnee
deja correcte.

Correspondance entre resultats principaux et resultats de repli :
- recherche : par position dans la liste
- episodes : par cle (saison, episode)

Les appels de repli passent par des callables de recuperation "brute"
fournis par le fournisseur, qui ne declenchent jamais de reconciliation :
la profondeur de repli est donc plafonnee a 1 par construction.

Tout echec d'un appel de repli est absorbe : l'appelant recoit toujours
les meilleures donnees disponibles dans la langue principale.
"""

import re
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from loguru import logger

from mediameta.core.entities.metadata import MediaMetadata, SearchResult
from mediameta.core.ports.provider import ScrapeOptions
from mediameta.core.value_objects.languages import MediaLanguage, resolve
from mediameta.utils.helpers import is_blank

_INTEGER = re.compile(r"[+-]?\d+")

SearchFetcher = Callable[[MediaLanguage], Awaitable[list[SearchResult]]]
ItemFetcher = Callable[[ScrapeOptions], Awaitable[MediaMetadata]]
SeasonFetcher = Callable[[MediaLanguage], Awaitable[list[MediaMetadata]]]


@dataclass(frozen=True)
class FallbackConfig:
    """
    Configuration du repli de langue, lue une fois par appel.

    Attributes:
        enabled: Active le repli ("titleFallback")
        language: Langue de repli
    """

    enabled: bool = False
    language: MediaLanguage = MediaLanguage.en

    @classmethod
    def from_settings(cls, settings) -> "FallbackConfig":
        return cls(
            enabled=settings.title_fallback,
            language=resolve(settings.title_fallback_language),
        )


def is_default_episode_name(title: Optional[str], episode_number: Optional[int]) -> bool:
    """
    Detecte un titre d'episode generique ("Episode 7", "Folge 7"...).

    Le titre doit se decouper en exactement deux mots, et le second doit
    etre un entier egal au numero de l'episode.

    Example:
        is_default_episode_name("Episode 7", 7)   # True
        is_default_episode_name("Episode 7", 3)   # False
        is_default_episode_name("The Pilot", 1)   # False
    """
    if not title or episode_number is None:
        return False
    tokens = title.split()
    if len(tokens) != 2 or not _INTEGER.fullmatch(tokens[1]):
        return False
    return int(tokens[1]) == episode_number


def is_untranslated(
    title: str,
    original_title: str,
    original_language: str,
    requested: MediaLanguage,
) -> bool:
    """
    True si le catalogue a renvoye le titre natif au lieu d'une traduction.

    Un titre identique au titre original n'est suspect que si la langue
    originale declaree differe de la langue demandee.
    """
    return title == original_title and original_language != requested.language


def is_episode_deficient(episode: MediaMetadata, episode_number: Optional[int] = None) -> bool:
    """
    True si un episode a besoin du repli : titre ou resume vide, ou titre generique.

    Args:
        episode: Episode dans la langue principale
        episode_number: Numero declare par la requete, sinon celui de l'episode
    """
    number = episode_number if episode_number is not None else episode.episode_number
    return (
        is_blank(episode.title)
        or is_blank(episode.plot)
        or is_default_episode_name(episode.title, number)
    )


def patch_episode(
    episode: MediaMetadata,
    fallback: MediaMetadata,
    episode_number: Optional[int] = None,
) -> None:
    """
    Complete un episode deficient avec sa version de repli (en place).

    - titre : remplace s'il est vide, ou s'il est generique alors que
      celui du repli ne l'est pas
    - resume : remplace seulement s'il est vide
    """
    number = episode_number if episode_number is not None else episode.episode_number
    fallback_number = (
        episode_number if episode_number is not None else fallback.episode_number
    )
    if is_blank(episode.title) or (
        is_default_episode_name(episode.title, number)
        and not is_default_episode_name(fallback.title, fallback_number)
    ):
        episode.set_title(fallback.title)
    if is_blank(episode.plot):
        episode.set_plot(fallback.plot)


class LanguageFallback:
    """
    Moteur de reconciliation par langue de repli.

    La configuration est obtenue via un callable pour etre relue a chaque
    appel (elle peut changer entre deux scrapes).

    Example:
        fallback = LanguageFallback(lambda: FallbackConfig(True, MediaLanguage.en))
        results = await fallback.reconcile_search(results, MediaLanguage.de, fetch)
    """

    def __init__(self, config_source: Callable[[], FallbackConfig]) -> None:
        self._config_source = config_source

    def _active_config(self, requested: MediaLanguage) -> Optional[FallbackConfig]:
        """Retourne la config si le repli est autorise pour cette langue, sinon None."""
        config = self._config_source()
        if not config.enabled or requested == config.language:
            return None
        return config

    async def reconcile_search(
        self,
        results: list[SearchResult],
        requested: MediaLanguage,
        fetch: SearchFetcher,
    ) -> list[SearchResult]:
        """
        Remplace, position par position, les resultats non traduits.

        Declenche au plus une recherche de repli si au moins un resultat est
        non traduit. La longueur et l'ordre de la liste ne changent jamais :
        seuls des elements sont substitues a leur index. Les positions au-dela
        de la liste de repli restent inchangees.

        Note: suppose que le catalogue renvoie le meme classement dans
        toutes les langues (aucune verification d'identifiant).
        """
        config = self._active_config(requested)
        if config is None:
            return results

        if not any(
            is_untranslated(r.title, r.original_title, r.original_language, requested)
            for r in results
        ):
            return results

        logger.debug(
            "Fallback: titre non traduit detecte, recherche en "
            f"{config.language.tag}"
        )
        try:
            fallback_results = await fetch(config.language)
        except Exception as e:
            logger.debug(f"Fallback: recherche de repli impossible: {e}")
            return results

        if not fallback_results:
            return results

        reconciled = []
        for index, primary in enumerate(results):
            if index >= len(fallback_results):
                reconciled.append(primary)
                continue
            candidate = fallback_results[index]
            if (
                is_untranslated(
                    primary.title, primary.original_title, primary.original_language, requested
                )
                and not is_blank(candidate.title)
                and candidate.title != primary.title
            ):
                logger.debug(
                    f"Fallback: resultat remplace [{primary.title:.32}] -> [{candidate.title:.32}]"
                )
                reconciled.append(candidate)
            else:
                reconciled.append(primary)
        return reconciled

    async def reconcile_item(
        self,
        metadata: MediaMetadata,
        options: ScrapeOptions,
        fetch: ItemFetcher,
    ) -> MediaMetadata:
        """
        Complete une fiche film/serie avec sa version dans la langue de repli.

        Declenche un unique fetch de repli si le titre est non traduit ou si
        le resume est vide. La langue des options est remplacee le temps de
        ce fetch puis restauree. Seuls les champs deficients sont copies.
        """
        requested = options.language
        config = self._active_config(requested)
        if config is None:
            return metadata

        untranslated = is_untranslated(
            metadata.title, metadata.original_title, metadata.original_language, requested
        )
        plot_missing = is_blank(metadata.plot)
        original_missing = is_blank(metadata.original_title)
        if not (untranslated or plot_missing):
            return metadata

        logger.debug(f"Re-scraping using fallback language {config.language.title}")
        try:
            with options.using_language(config.language):
                fallback = await fetch(options)
        except Exception as e:
            logger.debug(f"Fallback: fiche de repli impossible: {e}")
            return metadata

        if plot_missing and not is_blank(fallback.plot):
            metadata.set_plot(fallback.plot)
        if untranslated and not is_blank(fallback.title):
            metadata.set_title(fallback.title)
        if original_missing and not is_blank(fallback.original_title):
            metadata.set_original_title(fallback.original_title)
        return metadata

    async def reconcile_episodes(
        self,
        episodes: list[MediaMetadata],
        requested: MediaLanguage,
        fetch: SeasonFetcher,
    ) -> list[MediaMetadata]:
        """
        Complete les episodes deficients d'une saison par cle (saison, episode).

        Un seul episode deficient suffit a declencher un unique fetch de la
        saison dans la langue de repli ; chaque episode est ensuite reevalue
        une fois. Les episodes sans correspondance restent tels quels et
        aucune cle absente de la liste principale n'est ajoutee.
        """
        config = self._active_config(requested)
        if config is None:
            return episodes

        if not any(is_episode_deficient(episode) for episode in episodes):
            return episodes

        try:
            fallback_episodes = await fetch(config.language)
        except Exception as e:
            logger.debug(f"Fallback: saison de repli impossible: {e}")
            return episodes

        if not fallback_episodes:
            return episodes

        by_key = {
            episode.episode_key: episode
            for episode in fallback_episodes
            if episode.episode_key is not None
        }

        reconciled = []
        for episode in episodes:
            if is_episode_deficient(episode):
                match = by_key.get(episode.episode_key)
                if match is not None:
                    patch_episode(episode, match)
            reconciled.append(episode)
        return reconciled

    async def reconcile_episode(
        self,
        episode: MediaMetadata,
        episode_number: Optional[int],
        requested: MediaLanguage,
        fetch: SeasonFetcher,
    ) -> MediaMetadata:
        """
        Complete un episode isole via la saison de repli.

        Args:
            episode: Episode dans la langue principale
            episode_number: Numero declare par la requete (prioritaire pour
                            la detection des titres generiques)
        """
        config = self._active_config(requested)
        if config is None or not is_episode_deficient(episode, episode_number):
            return episode

        try:
            fallback_episodes = await fetch(config.language)
        except Exception as e:
            logger.debug(f"Fallback: episode de repli impossible: {e}")
            return episode

        for candidate in fallback_episodes or []:
            if candidate.episode_key == episode.episode_key:
                patch_episode(episode, candidate, episode_number)
                break
        return episode
