"""simple-redirector: answer HTTP requests with per-host redirect rules."""

__version__ = "0.1.0"

from .main import create_app  # noqa: E402
from .settings import RedirectorSettings  # noqa: E402

__all__ = ["RedirectorSettings", "__version__", "create_app"]
