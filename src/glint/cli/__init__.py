"""glint CLI.

Entry point registered as ``glint`` in ``pyproject.toml``::

    [project.scripts]
    glint = "glint.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``glint`` command."""
    parser = argparse.ArgumentParser(
        prog="glint",
        description="glint — live server-rendered components over Server-Sent Events.",
    )
    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser("run", help="Serve an app with pounce")
    run_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument("--workers", type=int, default=None, help="Worker count")
    run_parser.add_argument(
        "--log-level",
        default=None,
        choices=["debug", "info", "warning", "error", "critical"],
        help="Log level (defaults to the app's AppConfig.log_level)",
    )
    run_parser.add_argument("--reload", action="store_true", help="Restart on code changes")

    subparsers.add_parser("routes", help="List an app's routes").add_argument(
        "app", help="Import string (e.g. myapp:app)"
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from glint.cli._run import list_routes, run_server

    if args.command == "run":
        run_server(args)
    elif args.command == "routes":
        list_routes(args)
