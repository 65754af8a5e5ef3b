"""Host header normalisation shared by the mapping table and dispatcher."""

from __future__ import annotations

# Reserved for operational endpoints; never routed through the mapping.
RESERVED_HOST = 'localhost'


def strip_port(host: str) -> str:
    """Remove port suffix from a host string.

    Handles IPv6 bracket notation (``[::1]:8080``).
    """
    if host.startswith('['):
        bracket_end = host.find(']')
        if bracket_end >= 0:
            return host[1:bracket_end]
        return host.strip('[]')

    colon = host.rfind(':')
    if colon >= 0:
        # Only strip if what follows looks like a port number.
        maybe_port = host[colon + 1:]
        if maybe_port.isdigit():
            return host[:colon]

    return host


def normalise_host(host: str) -> str:
    """Return the lower-cased hostname portion of a ``Host`` header value."""
    return strip_port(host.strip()).lower()
