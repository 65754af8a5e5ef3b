"""Per-host path maps, the host table, and mapping document parsing.

Expected document shape (YAML, or JSON which YAML also accepts)::

    mapping:
      example.com:
        "/":
          redirect: https://www.example.org
        "/docs":
          redirect: https://docs.example.org
          immediate: true
        "*":
          redirect: https://www.example.org/moved

Both ``HostMap`` and ``MappingTable`` are read-only once built; the table
is shared by every request handler without locking.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping

import yaml

from ..observability.logging import get_logger
from .entry import Entry, validate_entry
from .errors import MappingParseError, MappingValidationError, ValidationCode
from .hosts import RESERVED_HOST, normalise_host

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class HostMap:
    """Path pattern → Entry rules for a single host."""

    entries: Mapping[str, Entry] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, 'entries', MappingProxyType(dict(self.entries)))

    def get(self, path: str) -> Entry | None:
        return self.entries.get(path)

    @property
    def paths(self) -> tuple[str, ...]:
        return tuple(sorted(self.entries))

    def __contains__(self, path: object) -> bool:
        return path in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def validate(self) -> None:
        """Validate every entry, raising the first failure in path order.

        All entries are checked before anything is raised so the reported
        error does not depend on iteration order.
        """
        failures: list[MappingValidationError] = []
        for path in self.paths:
            entry = self.entries[path]
            try:
                validate_entry(path, entry)
            except MappingValidationError as exc:
                failures.append(exc)
                continue
            logger.debug(
                'mapping_entry_parsed',
                path=path,
                redirect=entry.redirect,
                immediate=entry.immediate,
            )
        if failures:
            raise failures[0]


@dataclass(frozen=True, slots=True)
class MappingTable:
    """Host → HostMap lookup table. Host keys are stored lower-cased."""

    hosts: Mapping[str, HostMap] = field(default_factory=dict)

    def __post_init__(self) -> None:
        normalised = {host.lower(): host_map for host, host_map in self.hosts.items()}
        object.__setattr__(self, 'hosts', MappingProxyType(normalised))

    def get(self, host: str) -> HostMap | None:
        return self.hosts.get(host)

    def __contains__(self, host: object) -> bool:
        return host in self.hosts

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.hosts))

    def __len__(self) -> int:
        return len(self.hosts)

    def validate(self) -> None:
        """Check table-wide invariants, then every HostMap in host order.

        Raises:
            MappingValidationError: For an empty table, the reserved host,
                or the first invalid entry found.
        """
        if not self.hosts:
            raise MappingValidationError(
                ValidationCode.EMPTY_MAPPING_TABLE,
                'Mapping file is empty or has no entries, please provide some.',
            )

        if RESERVED_HOST in self.hosts:
            raise MappingValidationError(
                ValidationCode.RESERVED_HOST,
                f'{RESERVED_HOST} is reserved, you cannot use this host.',
                host=RESERVED_HOST,
            )

        failures: list[MappingValidationError] = []
        for host in self:
            try:
                self.hosts[host].validate()
            except MappingValidationError as exc:
                failures.append(exc.with_host(host))
        if failures:
            raise failures[0]


def parse(raw: bytes | str) -> MappingTable:
    """Parse and validate a mapping document.

    Raises:
        MappingParseError: If the document is not valid YAML/JSON or does
            not have the ``mapping → host → path → entry`` shape.
        MappingValidationError: If the parsed table breaks a rule.
    """
    try:
        document = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise MappingParseError(f'Could not parse mapping document: {exc}') from exc

    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise MappingParseError(
            f'Expected a mapping at top level, got {type(document).__name__}'
        )

    raw_hosts = document.get('mapping')
    if raw_hosts is None:
        raw_hosts = {}
    if not isinstance(raw_hosts, dict):
        raise MappingParseError(
            f'"mapping" must be keyed by hostname, got {type(raw_hosts).__name__}'
        )

    hosts: dict[str, HostMap] = {}
    for host, raw_paths in raw_hosts.items():
        if not isinstance(host, str) or not host.strip():
            raise MappingParseError(f'Host key {host!r} must be a non-empty string')
        key = normalise_host(host)
        if key in hosts:
            raise MappingParseError(f'Host {host!r} is defined more than once')

        if raw_paths is None:
            raw_paths = {}
        if not isinstance(raw_paths, dict):
            raise MappingParseError(
                f'Host {host!r} must map paths to entries, '
                f'got {type(raw_paths).__name__}'
            )

        entries: dict[str, Entry] = {}
        for path, raw_entry in raw_paths.items():
            if not isinstance(path, str):
                raise MappingParseError(
                    f'Path key {path!r} under host {host!r} must be a string'
                )
            entries[path] = Entry.from_document(raw_entry, where=f'{host}{path}')
        hosts[key] = HostMap(entries)

    table = MappingTable(hosts)
    table.validate()
    return table
