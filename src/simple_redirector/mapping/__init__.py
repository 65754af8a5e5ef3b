"""Redirect mapping model: entries, host maps, the host table and lookup."""

from .entry import Entry, validate_entry
from .errors import (
    MappingError,
    MappingFileNotFound,
    MappingParseError,
    MappingValidationError,
    ValidationCode,
)
from .hosts import RESERVED_HOST, normalise_host, strip_port
from .loader import DEFAULT_MAPPING_PATH, load_mapping_file
from .resolver import Resolution, resolve
from .table import HostMap, MappingTable, parse

__all__ = [
    'DEFAULT_MAPPING_PATH',
    'Entry',
    'HostMap',
    'MappingError',
    'MappingFileNotFound',
    'MappingParseError',
    'MappingTable',
    'MappingValidationError',
    'RESERVED_HOST',
    'Resolution',
    'ValidationCode',
    'load_mapping_file',
    'normalise_host',
    'parse',
    'resolve',
    'strip_port',
    'validate_entry',
]
