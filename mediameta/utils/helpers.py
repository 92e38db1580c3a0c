"""
Fonctions utilitaires partagees dans le projet MediaMeta.

Ce module centralise les fonctions reutilisees a travers le codebase :
- is_blank : chaine absente ou composee uniquement d'espaces
- clean_title : suppression des caracteres invisibles venant des APIs
- clean_search_text : normalisation d'une requete de recherche
- parse_date / year_of : lecture des dates "YYYY-MM-DD" des catalogues
"""

import re
import unicodedata
from datetime import date, datetime
from typing import Optional

# Caracteres remplaces par un espace avant d'envoyer une requete
_NON_SEARCH_CHARS = re.compile(r"[\[\]_.:|]")
_WHITESPACE = re.compile(r"\s+")


def is_blank(text: Optional[str]) -> bool:
    """True si le texte est None, vide ou uniquement compose d'espaces."""
    return text is None or not text.strip()


def strip_invisible_chars(text: str) -> str:
    """
    Retire les caractères Unicode invisibles d'une chaîne.

    Supprime les caractères de contrôle et les marques directionnelles
    qui peuvent provenir des APIs (LRM, RLM, BOM, etc.).
    """
    result = []
    for char in text:
        category = unicodedata.category(char)
        if category in ("Cf", "Cc"):
            continue
        result.append(char)
    return "".join(result)


def clean_title(title: Optional[str]) -> str:
    """Nettoie un titre : retire les caractères invisibles et les espaces superflus."""
    if not title:
        return ""
    return strip_invisible_chars(title).strip()


def clean_search_text(query: Optional[str]) -> str:
    """
    Normalise un texte de recherche.

    Les separateurs typiques des noms de fichiers ([ ] _ . : |) deviennent
    des espaces, puis les espaces multiples sont reduits.

    Example:
        clean_search_text("The.Wire_[2002]")  # "The Wire 2002"
    """
    if not query:
        return ""
    text = _NON_SEARCH_CHARS.sub(" ", clean_title(query))
    return _WHITESPACE.sub(" ", text).strip()


def parse_date(value: Optional[str]) -> Optional[date]:
    """Convertit une date "YYYY-MM-DD" en date, None si absente ou invalide."""
    if not value:
        return None
    try:
        return datetime.strptime(value[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


def year_of(value: Optional[str]) -> Optional[int]:
    """Extrait l'annee d'une date "YYYY-MM-DD" (None si absente)."""
    parsed = parse_date(value)
    if parsed is not None:
        return parsed.year
    if value and len(value) >= 4 and value[:4].isdigit():
        return int(value[:4])
    return None
