"""The ``skillshare`` command.

``skillshare run [APP]`` serves an app; ``skillshare routes [APP]`` lists
its route table. ``APP`` is ``module:name`` and defaults to the bundled
talk app.
"""

import argparse
import sys

DEFAULT_APP = "skillshare.app:create_app"
LOG_LEVELS = ["debug", "info", "warning", "error", "critical"]


def _add_app_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "app",
        nargs="?",
        default=DEFAULT_APP,
        help=f"App or factory as module:name (default: {DEFAULT_APP})",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skillshare",
        description="Talk-sharing server with long-polling sync.",
    )
    commands = parser.add_subparsers(dest="command")

    run = commands.add_parser("run", help="Serve the app")
    _add_app_argument(run)
    run.add_argument("--host", help="Address to bind")
    run.add_argument("--port", type=int, help="Port to bind")
    run.add_argument("--static-dir", help="Directory served when no route matches")
    run.add_argument("--max-wait", type=int, help="Longest long-poll hold, in seconds")
    run.add_argument("--log-level", choices=LOG_LEVELS, help="Logging level")

    routes = commands.add_parser("routes", help="List routes in match order")
    _add_app_argument(routes)
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "run":
        from skillshare.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from skillshare.cli._routes import print_routes

        print_routes(args)
    else:
        parser.print_help()
        sys.exit(0)
