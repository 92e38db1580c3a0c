"""
Objets valeur immutables representant des concepts du domaine sans identite.

Les objets valeur sont definis par leurs attributs plutot que par une identite.
Ils sont immutables et peuvent etre librement partages et compares par valeur.

Exports :
- MediaLanguage : Langue supportee (code + variante pays optionnelle)
- UnknownLanguageError : Code de langue hors registre
- resolve / language_part : Acces au registre des langues
- MediaType : Type de media (MOVIE, TV_SHOW, TV_EPISODE)
- ArtworkType : Type d'artwork / filtre d'artwork
- CastType : Role d'un membre du casting
"""

from mediameta.core.value_objects.languages import (
    MediaLanguage,
    UnknownLanguageError,
    language_part,
    resolve,
)
from mediameta.core.value_objects.media_type import (
    ArtworkType,
    CastType,
    MediaType,
)

__all__ = [
    "MediaLanguage",
    "UnknownLanguageError",
    "language_part",
    "resolve",
    "MediaType",
    "ArtworkType",
    "CastType",
]
