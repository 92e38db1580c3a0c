"""
Registre des langues supportees pour le scraping.

Chaque langue est un membre immutable de MediaLanguage. Le nom du membre
porte le code ISO 639-1 et, optionnellement, une variante pays
(ex: pt_BR). La "partie langue" est toujours les 2 premiers caracteres.

Usage:
    lang = resolve("pt-BR")
    lang.tag            # "pt-BR" (forme envoyee aux catalogues)
    lang.language       # "pt"
    language_part("pt_BR")  # "pt"
"""

from enum import Enum
from typing import Optional


class UnknownLanguageError(ValueError):
    """Levee quand un code de langue n'appartient pas au registre."""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"Unknown language: {code!r}")


class MediaLanguage(Enum):
    """Langues supportees pour le scraping.

    La valeur de chaque membre est le nom affichable de la langue.
    L'egalite se fait par identite de membre, donc par code + pays.
    """

    cs = "Český"
    de = "Deutsch"
    da = "Dansk"
    en = "English"
    es = "Español"
    fa = "Persian"
    fi = "Suomi"
    fr = "Française"
    hu = "Magyar"
    it = "Italiano"
    nl = "Nederlands"
    no = "Norsk"
    pl = "Język polski"
    pt = "Portuguese"
    pt_BR = "Portuguese (Brazil)"
    ro = "Română"
    ru = "русский язык"
    sl = "Slovenščina"
    sk = "Slovenčina"
    sv = "Svenska"
    tr = "Türkçe"
    zh = "Chinese"

    @property
    def language(self) -> str:
        """Code ISO 639-1 sans region (2 premiers caracteres)."""
        return language_part(self.name)

    @property
    def country(self) -> Optional[str]:
        """Code pays ISO 3166-1 de la variante, ou None."""
        _, _, country = self.name.partition("_")
        return country or None

    @property
    def tag(self) -> str:
        """Forme "langue-PAYS" attendue par les catalogues (ex: "pt-BR", "en")."""
        return self.name.replace("_", "-")

    @property
    def title(self) -> str:
        """Nom affichable de la langue."""
        return self.value

    def __str__(self) -> str:
        return self.value


def language_part(code: str) -> str:
    """Retourne la partie langue d'un code (ses 2 premiers caracteres)."""
    return code[:2]


def resolve(code: str) -> MediaLanguage:
    """
    Resout un code de langue vers un membre du registre.

    Accepte les formes "en", "pt_BR", "pt-BR" et "pt-br".

    Args:
        code: Code de langue, avec variante pays optionnelle

    Returns:
        Le membre MediaLanguage correspondant

    Raises:
        UnknownLanguageError: Si le code n'est pas supporte
    """
    if isinstance(code, MediaLanguage):
        return code

    normalized = (code or "").strip().replace("-", "_")
    language, sep, country = normalized.partition("_")
    key = language.lower() + (f"_{country.upper()}" if sep else "")

    try:
        return MediaLanguage[key]
    except KeyError:
        raise UnknownLanguageError(code) from None
