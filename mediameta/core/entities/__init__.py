"""
Business entities representing core domain concepts.

Exports:
- SearchResult: Normalized search hit from a catalog
- MediaMetadata: Full metadata record (movie, TV show or episode)
- MediaRating, MediaCastMember, MediaArtwork, Certification: record parts
"""

from mediameta.core.entities.metadata import (
    Certification,
    MediaArtwork,
    MediaCastMember,
    MediaMetadata,
    MediaRating,
    SearchResult,
)

__all__ = [
    "Certification",
    "MediaArtwork",
    "MediaCastMember",
    "MediaMetadata",
    "MediaRating",
    "SearchResult",
]
