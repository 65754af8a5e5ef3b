"""Load the redirect mapping file from disk.

Configuration sources (in order):
  1. Explicit ``path`` argument (CLI ``--file``, tests).
  2. ``MAPPING_PATH`` environment variable.
  3. Default path: ``./redirect-map.yml`` relative to CWD.
"""

from __future__ import annotations

import os
from pathlib import Path

from ..observability.logging import get_logger
from .errors import MappingFileNotFound
from .table import MappingTable, parse

DEFAULT_MAPPING_PATH = './redirect-map.yml'
_ENV_VAR = 'MAPPING_PATH'

logger = get_logger(__name__)


def resolve_mapping_path(path: str | Path | None = None) -> Path:
    """Pick the mapping file path from the argument, env, or default."""
    resolved = path
    if not resolved:
        resolved = os.environ.get(_ENV_VAR, '').strip() or None
    if resolved is None:
        resolved = DEFAULT_MAPPING_PATH
    return Path(resolved)


def load_mapping_file(path: str | Path | None = None) -> MappingTable:
    """Read, parse and validate a mapping file.

    Raises:
        MappingFileNotFound: If the file is missing or unreadable.
        MappingParseError: If the content is malformed.
        MappingValidationError: If the parsed mapping breaks a rule.
    """
    mapping_path = resolve_mapping_path(path)
    try:
        data = mapping_path.read_bytes()
    except OSError as exc:
        raise MappingFileNotFound(
            f'Could not read mapping file {mapping_path}: {exc.strerror or exc}. '
            f'Set {_ENV_VAR} or provide a path argument.'
        ) from exc

    table = parse(data)
    logger.debug('mapping_file_parsed', path=str(mapping_path), hosts=len(table))
    return table
