"""Error hierarchy for mapping file loading and validation.

Every error raised while turning a mapping document into a
``MappingTable`` derives from ``MappingError`` so the CLI can treat the
whole family as a fatal startup failure.
"""

from __future__ import annotations

from enum import Enum


class ValidationCode(str, Enum):
    """Machine-readable reason attached to a ``MappingValidationError``."""

    EMPTY_PATH = 'empty_path'
    INVALID_PATH_PREFIX = 'invalid_path_prefix'
    MALFORMED_PATH = 'malformed_path'
    MALFORMED_REDIRECT_URI = 'malformed_redirect_uri'
    DISALLOWED_SCHEME = 'disallowed_scheme'
    EMPTY_MAPPING_TABLE = 'empty_mapping_table'
    RESERVED_HOST = 'reserved_host'


class MappingError(ValueError):
    """Base class for mapping load/parse/validation failures."""


class MappingFileNotFound(MappingError):
    """Raised when the mapping file is missing or cannot be read."""


class MappingParseError(MappingError):
    """Raised when the mapping document is malformed or has the wrong shape."""


class MappingValidationError(MappingError):
    """Raised when a parsed mapping violates a path, URI or host rule."""

    def __init__(
        self,
        code: ValidationCode,
        message: str,
        *,
        host: str | None = None,
        path: str | None = None,
        detail: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.host = host
        self.path = path
        #: Underlying reason, e.g. the URL parser message, when one exists.
        self.detail = detail

    def with_host(self, host: str) -> MappingValidationError:
        """Return a copy of this error annotated with the owning host."""
        return MappingValidationError(
            self.code,
            f'[{host}] {self}',
            host=host,
            path=self.path,
            detail=self.detail,
        )
