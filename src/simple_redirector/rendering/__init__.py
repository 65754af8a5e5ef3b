"""HTML rendering for interstitial redirect pages."""

from .interstitial import (
    COUNTDOWN_SECONDS,
    DEFAULT_TEMPLATE,
    InterstitialRenderer,
    InterstitialTemplateError,
    TemplateFileNotFound,
    TemplateInvalid,
)

__all__ = [
    'COUNTDOWN_SECONDS',
    'DEFAULT_TEMPLATE',
    'InterstitialRenderer',
    'InterstitialTemplateError',
    'TemplateFileNotFound',
    'TemplateInvalid',
]
