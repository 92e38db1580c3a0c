"""
Tests unitaires pour la reconciliation par langue de repli.

Ces tests verifient:
- La detection des titres d'episode generiques et des titres non traduits
- Un seul fetch de repli, seulement quand il est justifie
- La conservation de la longueur et de l'ordre des resultats de recherche
- La correspondance par cle (saison, episode), sans ajout d'episode
- L'absorption des echecs du fetch de repli
"""

from unittest.mock import AsyncMock

import pytest

from mediameta.core.entities.metadata import MediaMetadata, SearchResult
from mediameta.core.ports.catalog import CatalogError
from mediameta.core.ports.provider import ScrapeOptions
from mediameta.core.value_objects.languages import MediaLanguage
from mediameta.services.fallback import (
    FallbackConfig,
    LanguageFallback,
    is_default_episode_name,
    is_episode_deficient,
    is_untranslated,
    patch_episode,
)


def _result(id_: str, title: str, original_title: str, original_language: str) -> SearchResult:
    return SearchResult(
        provider_id="tmdb",
        id=id_,
        title=title,
        original_title=original_title,
        original_language=original_language,
    )


def _episode(season: int, episode: int, title: str = "", plot: str = "") -> MediaMetadata:
    return MediaMetadata(
        provider_id="tmdb",
        season_number=season,
        episode_number=episode,
        title=title,
        plot=plot,
    )


class TestIsDefaultEpisodeName:
    """Tests pour is_default_episode_name()."""

    def test_generic_name_matching_number(self) -> None:
        assert is_default_episode_name("Episode 7", 7)

    def test_generic_name_other_language(self) -> None:
        assert is_default_episode_name("Folge 12", 12)

    def test_real_title_is_not_default(self) -> None:
        assert not is_default_episode_name("The Pilot", 1)

    def test_number_mismatch_is_not_default(self) -> None:
        assert not is_default_episode_name("Episode 7", 3)

    @pytest.mark.parametrize("title", ["Episode", "Episode 7 bis", "Episode VII", ""])
    def test_other_shapes_are_not_default(self, title: str) -> None:
        assert not is_default_episode_name(title, 7)

    def test_signed_number_is_accepted(self) -> None:
        assert is_default_episode_name("Episode +7", 7)


class TestIsUntranslated:
    """Tests pour is_untranslated()."""

    def test_native_title_in_other_language(self) -> None:
        assert is_untranslated("Le Samouraï", "Le Samouraï", "fr", MediaLanguage.de)

    def test_same_title_same_language_is_translated(self) -> None:
        """"Batman" demande en anglais, langue originale anglaise : rien a faire."""
        assert not is_untranslated("Batman", "Batman", "en", MediaLanguage.en)

    def test_different_title_is_translated(self) -> None:
        assert not is_untranslated("Der Samurai", "Le Samouraï", "fr", MediaLanguage.de)

    def test_variant_compares_language_part(self) -> None:
        assert not is_untranslated("Cidade de Deus", "Cidade de Deus", "pt", MediaLanguage.pt_BR)


class TestEpisodeDeficiency:
    """Tests pour is_episode_deficient() et patch_episode()."""

    def test_complete_episode_is_not_deficient(self) -> None:
        assert not is_episode_deficient(_episode(1, 1, "The Pilot", "Plot"))

    def test_empty_plot_is_deficient(self) -> None:
        assert is_episode_deficient(_episode(1, 1, "The Pilot", ""))

    def test_generic_title_is_deficient(self) -> None:
        assert is_episode_deficient(_episode(1, 7, "Episode 7", "Plot"))

    def test_declared_number_overrides_episode_number(self) -> None:
        episode = _episode(1, 7, "Episode 7", "Plot")
        assert not is_episode_deficient(episode, episode_number=3)

    def test_patch_fills_title_and_plot(self) -> None:
        """{"Episode 4", ""} + {"The Long Halloween", "..."} donne la version fusionnee."""
        episode = _episode(1, 4, "Episode 4", "")
        patch_episode(episode, _episode(1, 4, "The Long Halloween", "Gordon hunts Holiday."))
        assert episode.title == "The Long Halloween"
        assert episode.plot == "Gordon hunts Holiday."

    def test_patch_keeps_generic_title_when_fallback_is_generic(self) -> None:
        episode = _episode(1, 4, "Folge 4", "")
        patch_episode(episode, _episode(1, 4, "Episode 4", "Plot"))
        assert episode.title == "Folge 4"
        assert episode.plot == "Plot"

    def test_patch_never_overwrites_good_plot(self) -> None:
        episode = _episode(1, 4, "", "Bon resume")
        patch_episode(episode, _episode(1, 4, "Title", "Other plot"))
        assert episode.title == "Title"
        assert episode.plot == "Bon resume"


class TestActiveConfig:
    """Le repli n'est actif que s'il est configure et si la langue differe."""

    @pytest.mark.asyncio
    async def test_disabled_fallback_never_fetches(self, fallback_disabled: LanguageFallback) -> None:
        results = [_result("1", "Le Samouraï", "Le Samouraï", "fr")]
        fetch = AsyncMock()

        reconciled = await fallback_disabled.reconcile_search(results, MediaLanguage.de, fetch)

        assert reconciled == results
        fetch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_same_language_never_fetches(self, fallback_enabled: LanguageFallback) -> None:
        results = [_result("1", "Le Samouraï", "Le Samouraï", "fr")]
        fetch = AsyncMock()

        await fallback_enabled.reconcile_search(results, MediaLanguage.en, fetch)

        fetch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_config_is_read_on_each_call(self) -> None:
        config = {"value": FallbackConfig()}
        fallback = LanguageFallback(lambda: config["value"])
        results = [_result("1", "Le Samouraï", "Le Samouraï", "fr")]
        fetch = AsyncMock(return_value=[_result("1", "The Samurai", "Le Samouraï", "fr")])

        await fallback.reconcile_search(results, MediaLanguage.de, fetch)
        fetch.assert_not_awaited()

        config["value"] = FallbackConfig(enabled=True, language=MediaLanguage.en)
        reconciled = await fallback.reconcile_search(results, MediaLanguage.de, fetch)
        assert reconciled[0].title == "The Samurai"


class TestReconcileSearch:
    """Tests pour LanguageFallback.reconcile_search()."""

    @pytest.mark.asyncio
    async def test_replaces_only_untranslated_positions(
        self, fallback_enabled: LanguageFallback
    ) -> None:
        results = [
            _result("1", "Der Samurai", "Le Samouraï", "fr"),
            _result("2", "Le Cercle rouge", "Le Cercle rouge", "fr"),
            _result("3", "Das Boot", "Das Boot", "de"),
        ]
        fallback_results = [
            _result("1", "The Samurai", "Le Samouraï", "fr"),
            _result("2", "The Red Circle", "Le Cercle rouge", "fr"),
            _result("3", "The Boat", "Das Boot", "de"),
        ]
        fetch = AsyncMock(return_value=fallback_results)

        reconciled = await fallback_enabled.reconcile_search(results, MediaLanguage.de, fetch)

        fetch.assert_awaited_once_with(MediaLanguage.en)
        assert [r.title for r in reconciled] == ["Der Samurai", "The Red Circle", "Das Boot"]
        assert [r.id for r in reconciled] == ["1", "2", "3"]

    @pytest.mark.asyncio
    async def test_no_untranslated_result_means_no_fetch(
        self, fallback_enabled: LanguageFallback
    ) -> None:
        results = [_result("1", "Der Samurai", "Le Samouraï", "fr")]
        fetch = AsyncMock()

        reconciled = await fallback_enabled.reconcile_search(results, MediaLanguage.de, fetch)

        assert reconciled == results
        fetch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_shorter_fallback_list_keeps_length(
        self, fallback_enabled: LanguageFallback
    ) -> None:
        results = [
            _result("1", "Le Samouraï", "Le Samouraï", "fr"),
            _result("2", "Le Cercle rouge", "Le Cercle rouge", "fr"),
        ]
        fetch = AsyncMock(return_value=[_result("1", "The Samurai", "Le Samouraï", "fr")])

        reconciled = await fallback_enabled.reconcile_search(results, MediaLanguage.de, fetch)

        assert len(reconciled) == 2
        assert reconciled[0].title == "The Samurai"
        assert reconciled[1] is results[1]

    @pytest.mark.asyncio
    async def test_blank_or_identical_fallback_title_is_ignored(
        self, fallback_enabled: LanguageFallback
    ) -> None:
        results = [
            _result("1", "Le Samouraï", "Le Samouraï", "fr"),
            _result("2", "Le Cercle rouge", "Le Cercle rouge", "fr"),
        ]
        fetch = AsyncMock(
            return_value=[
                _result("1", "", "Le Samouraï", "fr"),
                _result("2", "Le Cercle rouge", "Le Cercle rouge", "fr"),
            ]
        )

        reconciled = await fallback_enabled.reconcile_search(results, MediaLanguage.de, fetch)

        assert reconciled[0] is results[0]
        assert reconciled[1] is results[1]

    @pytest.mark.asyncio
    async def test_fallback_failure_is_absorbed(self, fallback_enabled: LanguageFallback) -> None:
        results = [_result("1", "Le Samouraï", "Le Samouraï", "fr")]
        fetch = AsyncMock(side_effect=CatalogError("timeout"))

        reconciled = await fallback_enabled.reconcile_search(results, MediaLanguage.de, fetch)

        assert reconciled == results


class TestReconcileItem:
    """Tests pour LanguageFallback.reconcile_item()."""

    @pytest.mark.asyncio
    async def test_fills_missing_plot_and_restores_language(
        self, fallback_enabled: LanguageFallback
    ) -> None:
        metadata = MediaMetadata(
            provider_id="tmdb",
            title="Der Samurai",
            original_title="Le Samouraï",
            original_language="fr",
        )
        options = ScrapeOptions(language=MediaLanguage.de)
        seen_languages = []

        async def fetch(fallback_options: ScrapeOptions) -> MediaMetadata:
            seen_languages.append(fallback_options.language)
            return MediaMetadata(
                provider_id="tmdb",
                title="The Samurai",
                original_title="Le Samouraï",
                plot="A hitman with a code.",
            )

        reconciled = await fallback_enabled.reconcile_item(metadata, options, fetch)

        assert seen_languages == [MediaLanguage.en]
        assert options.language is MediaLanguage.de
        assert reconciled.plot == "A hitman with a code."
        # Le titre etait deja traduit : il n'est pas touche
        assert reconciled.title == "Der Samurai"

    @pytest.mark.asyncio
    async def test_replaces_untranslated_title(self, fallback_enabled: LanguageFallback) -> None:
        metadata = MediaMetadata(
            provider_id="tmdb",
            title="Le Samouraï",
            original_title="Le Samouraï",
            original_language="fr",
            plot="Ein Auftragsmörder.",
        )
        fetch = AsyncMock(
            return_value=MediaMetadata(provider_id="tmdb", title="The Samurai", plot="A hitman.")
        )

        reconciled = await fallback_enabled.reconcile_item(
            metadata, ScrapeOptions(language=MediaLanguage.de), fetch
        )

        fetch.assert_awaited_once()
        assert reconciled.title == "The Samurai"
        assert reconciled.plot == "Ein Auftragsmörder."

    @pytest.mark.asyncio
    async def test_same_language_title_needs_no_fallback(self) -> None:
        """"Batman" en anglais, langue originale anglaise : aucun fetch."""
        fallback = LanguageFallback(
            lambda: FallbackConfig(enabled=True, language=MediaLanguage.fr)
        )
        metadata = MediaMetadata(
            provider_id="tmdb",
            title="Batman",
            original_title="Batman",
            original_language="en",
            plot="The Dark Knight of Gotham City.",
        )
        fetch = AsyncMock()

        reconciled = await fallback.reconcile_item(
            metadata, ScrapeOptions(language=MediaLanguage.en), fetch
        )

        fetch.assert_not_awaited()
        assert reconciled.title == "Batman"

    @pytest.mark.asyncio
    async def test_failure_restores_language_and_keeps_metadata(
        self, fallback_enabled: LanguageFallback
    ) -> None:
        metadata = MediaMetadata(provider_id="tmdb", title="Le Samouraï", original_title="Le Samouraï")
        options = ScrapeOptions(language=MediaLanguage.de)
        fetch = AsyncMock(side_effect=CatalogError("HTTP 500"))

        reconciled = await fallback_enabled.reconcile_item(metadata, options, fetch)

        assert reconciled is metadata
        assert reconciled.title == "Le Samouraï"
        assert options.language is MediaLanguage.de


class TestReconcileEpisodes:
    """Tests pour LanguageFallback.reconcile_episodes()."""

    @pytest.mark.asyncio
    async def test_patches_by_key_without_adding_episodes(
        self, fallback_enabled: LanguageFallback
    ) -> None:
        episodes = [
            _episode(1, 1, "Der Winter naht", "Plot"),
            _episode(1, 2, "Episode 2", ""),
            _episode(1, 5, "", ""),
        ]
        # Ordre different et cles en plus dans la liste de repli
        fetch = AsyncMock(
            return_value=[
                _episode(1, 3, "Lord Snow", "Plot 3"),
                _episode(1, 2, "The Kingsroad", "Plot 2"),
                _episode(1, 1, "Winter Is Coming", "Plot 1"),
            ]
        )

        reconciled = await fallback_enabled.reconcile_episodes(
            episodes, MediaLanguage.de, fetch
        )

        fetch.assert_awaited_once_with(MediaLanguage.en)
        assert [e.episode_key for e in reconciled] == [(1, 1), (1, 2), (1, 5)]
        assert reconciled[0].title == "Der Winter naht"
        assert reconciled[1].title == "The Kingsroad"
        assert reconciled[1].plot == "Plot 2"
        # Sans correspondance : conserve tel quel
        assert reconciled[2].title == ""

    @pytest.mark.asyncio
    async def test_complete_season_needs_no_fetch(
        self, fallback_enabled: LanguageFallback
    ) -> None:
        episodes = [_episode(1, 1, "Der Winter naht", "Plot")]
        fetch = AsyncMock()

        await fallback_enabled.reconcile_episodes(episodes, MediaLanguage.de, fetch)

        fetch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_fetch_failure_keeps_primary_episodes(
        self, fallback_enabled: LanguageFallback
    ) -> None:
        episodes = [_episode(1, 2, "Episode 2", "")]
        fetch = AsyncMock(side_effect=CatalogError("HTTP 503"))

        reconciled = await fallback_enabled.reconcile_episodes(
            episodes, MediaLanguage.de, fetch
        )

        assert reconciled == episodes
        assert reconciled[0].title == "Episode 2"


class TestReconcileEpisode:
    """Tests pour LanguageFallback.reconcile_episode()."""

    @pytest.mark.asyncio
    async def test_single_episode_is_patched(self, fallback_enabled: LanguageFallback) -> None:
        episode = _episode(1, 4, "Episode 4", "")
        fetch = AsyncMock(
            return_value=[
                _episode(1, 3, "Lord Snow", "Plot 3"),
                _episode(1, 4, "The Long Halloween", "Gordon hunts Holiday."),
            ]
        )

        reconciled = await fallback_enabled.reconcile_episode(
            episode, 4, MediaLanguage.de, fetch
        )

        assert reconciled.title == "The Long Halloween"
        assert reconciled.plot == "Gordon hunts Holiday."

    @pytest.mark.asyncio
    async def test_declared_number_mismatch_is_not_generic(
        self, fallback_enabled: LanguageFallback
    ) -> None:
        """"Episode 7" pour l'episode 3 est un vrai titre : aucun fetch."""
        episode = _episode(1, 3, "Episode 7", "Plot")
        fetch = AsyncMock()

        await fallback_enabled.reconcile_episode(episode, 3, MediaLanguage.de, fetch)

        fetch.assert_not_awaited()
