"""``skillshare routes`` — print the route table in match order."""

import argparse
import sys

from skillshare.cli._resolve import resolve_app


def format_routes(app_routes: list) -> str:
    lines = []
    for route in app_routes:
        methods = ",".join(sorted(route.methods))
        lines.append(f"{methods:<8} {route.path:<28} {route.name or route.handler.__name__}")
    return "\n".join(lines)


def print_routes(args: argparse.Namespace) -> None:
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    print(format_routes(app.routes))
