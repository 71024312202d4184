"""``skillshare run`` — start the server.

CLI flags override the default ``AppConfig`` before a factory is called.
"""

import argparse
import logging
import sys
from dataclasses import replace

from skillshare.cli._resolve import resolve_app
from skillshare.config import AppConfig


def build_config(args: argparse.Namespace, base: AppConfig | None = None) -> AppConfig:
    """Apply the command-line overrides to *base*."""
    config = base or AppConfig()
    overrides: dict[str, object] = {}
    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.static_dir is not None:
        overrides["static_dir"] = args.static_dir
    if args.max_wait is not None:
        overrides["max_wait"] = args.max_wait
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    return replace(config, **overrides) if overrides else config


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it until interrupted."""
    config = build_config(args)
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        app = resolve_app(args.app, config)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    # A prebuilt app keeps its own config; flags still pick the address.
    from skillshare.server.dev import run_server as serve

    serve(
        app,
        args.host or app.config.host,
        args.port or app.config.port,
        log_level=args.log_level or app.config.log_level,
    )
