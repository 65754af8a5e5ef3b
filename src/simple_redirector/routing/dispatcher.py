"""Per-request dispatch: host gate, mapping resolution, response shape.

Every GET request passes through ``decide``:

    1. Host gate: ``localhost`` only serves ``/healthy`` and ``/metrics``;
       anything else on it is a 404 and never reaches the mapping table.
       On every other host those two paths are a 404 as well.
    2. Resolve: other hosts are looked up in the ``MappingTable``.
         - no match                → 404, empty body
         - ``immediate=True``      → 302, ``Location: redirect + raw request URI``
         - ``immediate=False``     → 200 interstitial HTML page

``decide`` is pure; ``RedirectDispatcher`` turns its ``Decision`` into a
Starlette response and records logs and metrics.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse, RedirectResponse, Response

from ..mapping import RESERVED_HOST, Entry, MappingTable, normalise_host, resolve
from ..observability.logging import get_logger
from ..observability.metrics import REDIRECT_COUNTS, metrics_text
from ..rendering import InterstitialRenderer

logger = get_logger(__name__)

HEALTH_PATH = '/healthy'
METRICS_PATH = '/metrics'


class Outcome(Enum):
    """How a request is answered."""

    HEALTH = 'health'
    METRICS = 'metrics'
    NOT_FOUND = 'not_found'
    REDIRECT = 'redirect'
    INTERSTITIAL = 'interstitial'


class Decision(NamedTuple):
    """Result of dispatching one request."""

    outcome: Outcome
    entry: Entry | None = None
    location: str | None = None
    rule: str | None = None


NOT_FOUND = Decision(Outcome.NOT_FOUND)

_OPERATIONAL: dict[str, Decision] = {
    HEALTH_PATH: Decision(Outcome.HEALTH),
    METRICS_PATH: Decision(Outcome.METRICS),
}


def decide(
    table: MappingTable,
    host: str,
    path: str,
    query: str = '',
    *,
    raw_path: str | None = None,
) -> Decision:
    """Decide how to answer a request for ``host`` and ``path``.

    Args:
        table: The loaded mapping table.
        host: Raw ``Host`` header value; any ``:port`` suffix is dropped.
        path: Decoded request path, matched against the mapping.
        query: Raw query string, carried over onto immediate redirects.
        raw_path: Request path as sent on the wire, still percent-encoded.
            Appended to immediate redirect targets; defaults to ``path``.
    """
    hostname = normalise_host(host)

    if hostname == RESERVED_HOST:
        return _OPERATIONAL.get(path, NOT_FOUND)

    # Operational paths exist only on localhost, never as mapped paths.
    if path in _OPERATIONAL:
        return NOT_FOUND

    resolution = resolve(table, hostname, path)
    if resolution is None:
        return NOT_FOUND

    entry = resolution.entry
    if entry.immediate:
        location = entry.redirect + (path if raw_path is None else raw_path)
        if query:
            location = f'{location}?{query}'
        return Decision(
            Outcome.REDIRECT, entry=entry, location=location, rule=resolution.key,
        )

    return Decision(
        Outcome.INTERSTITIAL,
        entry=entry,
        location=entry.redirect,
        rule=resolution.key,
    )


class RedirectDispatcher:
    """Starlette endpoint answering every request from one mapping table.

    Args:
        table: Immutable mapping table shared by all requests.
        renderer: Interstitial page renderer.
    """

    def __init__(self, table: MappingTable, renderer: InterstitialRenderer) -> None:
        self.table = table
        self.renderer = renderer

    async def handle(self, request: Request) -> Response:
        host = request.headers.get('host', '')
        path = request.url.path
        raw_path = request.scope.get('raw_path')
        decision = decide(
            self.table,
            host,
            path,
            request.url.query,
            raw_path=raw_path.decode('latin-1') if raw_path else None,
        )
        return self.respond(decision, normalise_host(host), path)

    def respond(self, decision: Decision, host: str, path: str) -> Response:
        """Build the HTTP response for a decision."""
        outcome = decision.outcome

        if outcome is Outcome.HEALTH:
            return JSONResponse({'status': 'ok'})

        if outcome is Outcome.METRICS:
            body, content_type = metrics_text()
            return Response(content=body, media_type=content_type)

        if outcome is Outcome.NOT_FOUND:
            logger.info('request_not_found', host=host, path=path)
            return Response(status_code=404)

        # Labelled by mapping rule, never by the raw request path.
        REDIRECT_COUNTS.labels(
            host=host, rule=decision.rule, mode=outcome.value,
        ).inc()

        if outcome is Outcome.REDIRECT:
            logger.info(
                'redirect_served',
                host=host,
                path=path,
                location=decision.location,
            )
            return RedirectResponse(decision.location, status_code=302)

        logger.info(
            'interstitial_served',
            host=host,
            path=path,
            redirect=decision.location,
        )
        return HTMLResponse(self.renderer.render(decision.location))
