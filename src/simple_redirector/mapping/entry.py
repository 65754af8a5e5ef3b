"""A single path rule and its load-time validation.

An ``Entry`` couples a redirect target with the ``immediate`` flag:

  - ``immediate=True``  → answer with a 302 straight to the target.
  - ``immediate=False`` → render the interstitial countdown page (default).

Mapping documents written for older releases use ``friendly`` instead of
``immediate``; the two are inverses and are reconciled in
``Entry.from_document``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

from .errors import MappingParseError, MappingValidationError, ValidationCode

WILDCARD = '*'
ROOT = '/'
ALLOWED_SCHEME = 'https'


@dataclass(frozen=True, slots=True)
class Entry:
    """Redirect target for one path pattern of one host."""

    redirect: str
    immediate: bool = False

    @classmethod
    def from_document(cls, raw: Any, *, where: str = '') -> Entry:
        """Build an Entry from one ``{redirect, immediate}`` document node.

        Raises:
            MappingParseError: If the node is not a mapping or a field has
                the wrong type.
        """
        label = f' at {where}' if where else ''
        if not isinstance(raw, dict):
            raise MappingParseError(
                f'Entry{label} must be a mapping with a "redirect" key, '
                f'got {type(raw).__name__}'
            )

        redirect = raw.get('redirect')
        if redirect is None:
            redirect = ''
        if not isinstance(redirect, str):
            raise MappingParseError(
                f'"redirect"{label} must be a string, got {type(redirect).__name__}'
            )

        immediate = _optional_bool(raw, 'immediate', label)
        friendly = _optional_bool(raw, 'friendly', label)
        if friendly is not None:
            if immediate is not None and immediate == friendly:
                raise MappingParseError(
                    f'"immediate" and "friendly"{label} contradict each other'
                )
            immediate = not friendly

        return cls(redirect=redirect, immediate=bool(immediate))


def validate_entry(path: str, entry: Entry) -> None:
    """Validate one ``path → entry`` rule.

    Checks run in a fixed order so the same input always yields the
    same error code.

    Raises:
        MappingValidationError: On the first rule the pair violates.
    """
    if path == '':
        raise MappingValidationError(
            ValidationCode.EMPTY_PATH,
            'Found empty string as path.',
            path=path,
        )

    if path != WILDCARD:
        if not path.startswith('/'):
            raise MappingValidationError(
                ValidationCode.INVALID_PATH_PREFIX,
                f"Path [{path}] must always be prefixed with '/', "
                f'no relative paths accepted here.',
                path=path,
            )
        reason = _request_path_problem(path)
        if reason is not None:
            raise MappingValidationError(
                ValidationCode.MALFORMED_PATH,
                f'Path [{path!r}] is not a valid request path.',
                path=path,
                detail=reason,
            )

    _validate_redirect(path, entry.redirect)


# ── Helpers ───────────────────────────────────────────────────────


def _optional_bool(raw: dict, key: str, label: str) -> bool | None:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise MappingParseError(
            f'"{key}"{label} must be true or false, got {value!r}'
        )
    return value


def _has_control_or_space(value: str) -> bool:
    return any(ord(ch) <= 0x20 or ord(ch) == 0x7F for ch in value)


def _request_path_problem(path: str) -> str | None:
    if _has_control_or_space(path):
        return 'contains control characters or whitespace'
    try:
        urlsplit(path)
    except ValueError as exc:
        return str(exc)
    return None


def _validate_redirect(path: str, redirect: str) -> None:
    def malformed(reason: str, detail: str | None = None) -> MappingValidationError:
        return MappingValidationError(
            ValidationCode.MALFORMED_REDIRECT_URI,
            f'Redirect uri [{redirect!r}] for path [{path}] {reason}.',
            path=path,
            detail=detail or reason,
        )

    if not redirect:
        raise malformed('is empty')
    if _has_control_or_space(redirect):
        raise malformed('contains control characters or whitespace')

    try:
        parts = urlsplit(redirect)
        parts.port  # raises on a non-numeric or out-of-range port
    except ValueError as exc:
        raise malformed(f'could not be parsed ({exc})', str(exc)) from exc

    if not parts.scheme:
        raise malformed('is not fully qualified')

    if parts.scheme != ALLOWED_SCHEME:
        raise MappingValidationError(
            ValidationCode.DISALLOWED_SCHEME,
            f'Redirect uri scheme on [{redirect}] needs to be changed and '
            f"use '{ALLOWED_SCHEME}' as the scheme.",
            path=path,
            detail=parts.scheme,
        )

    if not parts.netloc:
        raise malformed('has no host')
