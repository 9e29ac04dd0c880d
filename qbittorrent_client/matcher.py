"""
Prefix search over an already fetched torrent list.
"""

from typing import Dict, Iterable, List, Sequence

from .models import Torrent


def _starts_with_any(value: str, terms: Sequence[str]) -> bool:
    return any(value.startswith(term) for term in terms)


def match_by_prefix(
    torrents: Iterable[Torrent],
    terms: Iterable[str],
    match_hashes: bool = True,
    match_names: bool = True,
) -> List[Torrent]:
    """
    Return the torrents whose hash and/or name starts with any of `terms`.

    A torrent matched by hash is not checked against its name. Results are
    deduplicated by hash and their order is unspecified.
    """
    terms = list(terms)
    matched: Dict[str, Torrent] = {}

    for torrent in torrents:
        if match_hashes and _starts_with_any(torrent.hash, terms):
            matched[torrent.hash] = torrent
            continue

        if match_names and _starts_with_any(torrent.name, terms):
            matched[torrent.hash] = torrent

    return list(matched.values())
