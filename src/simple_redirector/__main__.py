"""Run the redirector: ``python -m simple_redirector run``."""

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
