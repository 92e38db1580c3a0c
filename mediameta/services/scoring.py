"""
Score de similarite entre une requete de recherche et un titre.

Le score est compris entre 0 et 1 et deterministe pour des resultats
reproductibles. Il sert uniquement d'indication a l'appelant : les
fournisseurs ne reordonnent jamais les resultats du catalogue.
"""

from rapidfuzz import fuzz, utils


def _calculate_title_score(query_title: str, candidate_title: str) -> float:
    """
    Similarite brute entre deux titres, de 0 a 100.

    token_sort_ratio ignore l'ordre des mots ; default_process passe en
    minuscules et retire la ponctuation avant comparaison.
    """
    return fuzz.token_sort_ratio(
        query_title, candidate_title, processor=utils.default_process
    )


def calculate_score(query: str, title: str) -> float:
    """
    Score d'un titre du catalogue par rapport au texte recherche.

    Args:
        query: Texte de recherche nettoye
        title: Titre localise renvoye par le catalogue

    Returns:
        Score entre 0.0 et 1.0, arrondi a 4 decimales (0.0 si l'un est vide)
    """
    if not query or not title:
        return 0.0
    return round(_calculate_title_score(query, title) / 100.0, 4)
