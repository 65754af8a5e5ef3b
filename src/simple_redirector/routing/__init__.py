"""Request dispatch for the redirector."""

from .dispatcher import (
    HEALTH_PATH,
    METRICS_PATH,
    Decision,
    Outcome,
    RedirectDispatcher,
    decide,
)

__all__ = [
    'HEALTH_PATH',
    'METRICS_PATH',
    'Decision',
    'Outcome',
    'RedirectDispatcher',
    'decide',
]
