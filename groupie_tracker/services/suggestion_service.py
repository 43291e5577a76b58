"""Ranked search-box suggestions drawn from a snapshot.

A field yields a suggestion when every query token occurs in it.  Member
and location hits also surface their artist, so typing a band member's
name offers the band too.  The creation year is matched verbatim against
the trimmed query instead of token by token.

Suggestions are unique per ``(text, category)`` and sorted by:

    1. exact (case-insensitive) match of the whole query first
    2. category: artist/band < member < location < creation date < first album
    3. shorter text first
    4. text, lexicographically

Because the pair is unique, the key never ties: the order is total.
"""

from __future__ import annotations

from groupie_tracker.models.search import Suggestion, SuggestionCategory
from groupie_tracker.models.snapshot import Snapshot
from groupie_tracker.services.artist_filter import contains_all, tokenize


def suggestion_sort_key(suggestion: Suggestion, query: str) -> tuple[bool, int, int, str]:
    """Sort key for *suggestion* given the trimmed, lower-cased *query*."""
    return (
        suggestion.text.lower() != query,
        suggestion.category.priority,
        len(suggestion.text),
        suggestion.text,
    )


def suggest(snapshot: Snapshot, query: str, limit: int | None = None) -> list[Suggestion]:
    """Return ranked suggestions for *query*; a blank query yields ``[]``.

    Parameters
    ----------
    snapshot:
        The snapshot to draw suggestions from.
    query:
        Raw text from the search box.
    limit:
        Keep only the first *limit* ranked suggestions; ``None`` keeps all.
    """
    trimmed = query.strip()
    tokens = tokenize(trimmed)
    if not tokens:
        return []

    found: set[Suggestion] = set()

    def _add(text: str, category: SuggestionCategory) -> None:
        found.add(Suggestion(text=text, category=category))

    for artist in snapshot.artists:
        if contains_all(artist.name, tokens):
            _add(artist.name, SuggestionCategory.ARTIST)

        for member in artist.members:
            if contains_all(member, tokens):
                _add(member, SuggestionCategory.MEMBER)
                _add(artist.name, SuggestionCategory.ARTIST)

        for raw_location in snapshot.locations_for(artist.id):
            location = raw_location.strip()
            if contains_all(location, tokens):
                _add(location, SuggestionCategory.LOCATION)
                _add(artist.name, SuggestionCategory.ARTIST)

        if contains_all(artist.first_album, tokens):
            _add(artist.first_album, SuggestionCategory.FIRST_ALBUM)

        creation_year = str(artist.creation_date)
        if trimmed in creation_year:
            _add(creation_year, SuggestionCategory.CREATION_DATE)

    lowered = trimmed.lower()
    ranked = sorted(found, key=lambda suggestion: suggestion_sort_key(suggestion, lowered))
    return ranked if limit is None else ranked[:limit]
