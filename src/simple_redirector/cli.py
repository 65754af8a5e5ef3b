"""Command-line entry point.

Usage::

    simple-redirector run --file ./redirect-map.yml --port 8080
    python -m simple_redirector run --no-http --cert tls.crt --key tls.key

Environment variables (see ``RedirectorSettings.from_env``) supply the
defaults; flags given on the command line override them. Startup
failures exit with a code from ``ExitCode``.
"""

from __future__ import annotations

import argparse
import dataclasses
import sys

import uvicorn

from . import __version__
from .exit_codes import ExitCode
from .main import create_app
from .mapping import MappingError, load_mapping_file
from .observability.logging import configure_logging, get_logger, parse_log_level
from .rendering import InterstitialRenderer, TemplateFileNotFound, TemplateInvalid
from .settings import RedirectorSettings, SettingsError

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="simple-redirector",
        description="Redirect requests by host and path using a mapping file.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    run = commands.add_parser("run", aliases=["r"], help="run simple redirector")
    run.add_argument("-l", "--log-level", help="log level of the app (LOG_LEVEL)")
    run.add_argument("-f", "--file", help="use the mapping file specified (MAPPING_PATH)")
    run.add_argument(
        "-t", "--template",
        help="Jinja2 interstitial template file, otherwise the built-in page (TEMPLATE_PATH)",
    )
    run.add_argument("-p", "--port", help="port to listen on (PORT)")
    run.add_argument("--bind", help="address to bind (BIND_HOST)")
    run.add_argument(
        "--http", action=argparse.BooleanOptionalAction, default=None,
        help="serve plain HTTP; --no-http requires --cert and --key (HTTP)",
    )
    run.add_argument("--cert", help="TLS certificate file (CERT_FILE)")
    run.add_argument("--key", help="TLS private key file (KEY_FILE)")
    run.add_argument(
        "--performance-mode", action=argparse.BooleanOptionalAction, default=None,
        help="render interstitial pages without HTML escaping (PERFORMANCE_MODE)",
    )
    return parser


def settings_from_args(
    args: argparse.Namespace,
    env: dict[str, str] | None = None,
) -> RedirectorSettings:
    """Layer command-line flags over environment-derived settings.

    Raises:
        SettingsError: If a port value is not an integer.
    """
    settings = RedirectorSettings.from_env(env)
    overrides: dict[str, object] = {}

    if args.log_level:
        overrides["log_level"] = args.log_level
    if args.file:
        overrides["mapping_path"] = args.file
    if args.template is not None:
        overrides["template_path"] = args.template
    if args.port is not None:
        try:
            overrides["port"] = int(args.port)
        except ValueError as exc:
            raise SettingsError(f"port must be an integer, got {args.port!r}") from exc
    if args.bind:
        overrides["bind_host"] = args.bind
    if args.http is not None:
        overrides["use_http"] = args.http
    if args.cert:
        overrides["cert_file"] = args.cert
    if args.key:
        overrides["key_file"] = args.key
    if args.performance_mode is not None:
        overrides["performance_mode"] = args.performance_mode

    return dataclasses.replace(settings, **overrides)


def run(settings: RedirectorSettings) -> int:
    """Load the mapping and template, then serve until interrupted."""
    try:
        table = load_mapping_file(settings.mapping_path)
    except MappingError as exc:
        logger.error("bad_mapping_file", path=settings.mapping_path, error=str(exc))
        return ExitCode.BAD_MAPPING_FILE

    try:
        renderer = InterstitialRenderer(
            settings.template_path or None,
            performance_mode=settings.performance_mode,
        )
    except TemplateFileNotFound as exc:
        logger.error("template_not_found", path=settings.template_path, error=str(exc))
        return ExitCode.TEMPLATE_NOT_FOUND
    except TemplateInvalid as exc:
        logger.error("template_invalid", path=settings.template_path, error=str(exc))
        return ExitCode.TEMPLATE_ERROR

    if settings.performance_mode:
        logger.info("performance_mode_enabled")
    logger.info("mapping_loaded", hosts=len(table), path=settings.mapping_path)
    logger.info(
        "server_starting",
        bind=settings.bind_host,
        port=settings.effective_port,
        tls=not settings.use_http,
    )

    app = create_app(settings, table=table, renderer=renderer)
    ssl_options: dict[str, str] = {}
    if not settings.use_http:
        ssl_options = {
            "ssl_certfile": settings.cert_file,
            "ssl_keyfile": settings.key_file,
        }

    try:
        uvicorn.run(
            app,
            host=settings.bind_host,
            port=settings.effective_port,
            log_config=None,
            **ssl_options,
        )
    except OSError as exc:
        logger.error("server_failed", error=str(exc))
        return ExitCode.EXECUTION_FAILURE
    return 0


def main(argv: list[str] | None = None, env: dict[str, str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = settings_from_args(args, env)
    except SettingsError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return ExitCode.BAD_PORT

    try:
        parse_log_level(settings.log_level)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return ExitCode.INVALID_LOG_LEVEL

    configure_logging(level=settings.log_level, json_output=settings.json_logs)

    errors = settings.validate()
    if errors:
        logger.error("invalid_settings", errors=errors)
        if not 0 <= settings.port <= 65535:
            return ExitCode.BAD_PORT
        return ExitCode.CONFIG_ERROR

    return run(settings)
