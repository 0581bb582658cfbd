"""``glint run`` and ``glint routes`` commands."""

import argparse
import sys

from glint.app import App
from glint.cli._resolve import resolve_app


def _load(import_string: str) -> App:
    try:
        return resolve_app(import_string)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def run_server(args: argparse.Namespace) -> None:
    """Serve ``args.app``; CLI flags override the app's config."""
    from glint.server.serve import run_server as serve

    app = _load(args.app)
    serve(
        app,
        args.host or app.config.host,
        args.port or app.config.port,
        workers=args.workers if args.workers is not None else app.config.workers,
        reload=args.reload or app.config.debug,
        log_level=args.log_level or app.config.log_level,
    )


def list_routes(args: argparse.Namespace) -> None:
    app = _load(args.app)
    for method, path in app.routes:
        print(f"{method:<7} {path}")
