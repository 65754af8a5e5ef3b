"""Resolve a (host, path) pair to the Entry that should answer it.

Resolution order for a known host:

    1. exact path match
    2. root ``/`` entry (per-host default page)
    3. wildcard ``*`` entry (last-resort catch-all)

An unknown host, or a host with none of the three, resolves to ``None``.
That is an expected outcome (answered with a 404), not an error.
"""

from __future__ import annotations

from typing import Literal, NamedTuple

from .entry import ROOT, WILDCARD, Entry
from .hosts import normalise_host
from .table import MappingTable

ResolutionSource = Literal['exact', 'root', 'wildcard']


class Resolution(NamedTuple):
    """Result of resolving a request against the mapping table."""

    entry: Entry
    source: ResolutionSource
    #: Mapping key that matched: the request path itself, ``/`` or ``*``.
    key: str


def resolve(table: MappingTable, host: str, path: str) -> Resolution | None:
    """Find the Entry for ``host`` and ``path``.

    Args:
        table: The loaded mapping table.
        host: Request host; a ``:port`` suffix and letter case are ignored.
        path: Request path, matched literally.

    Returns:
        The matching ``Resolution``, or ``None`` when nothing matches.
    """
    host_map = table.get(normalise_host(host))
    if host_map is None:
        return None

    candidates: tuple[tuple[str, ResolutionSource], ...] = (
        (path, 'exact'),
        (ROOT, 'root'),
        (WILDCARD, 'wildcard'),
    )
    for key, source in candidates:
        entry = host_map.get(key)
        if entry is not None and entry.redirect:
            return Resolution(entry=entry, source=source, key=key)

    return None
