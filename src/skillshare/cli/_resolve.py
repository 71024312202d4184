"""Turn ``"package.module:name"`` into an App, for ``run`` and ``routes``."""

import importlib

from skillshare.app import App
from skillshare.config import AppConfig


def resolve_app(import_string: str, config: AppConfig | None = None) -> App:
    """Import *import_string* and return the App it names.

    ``name`` defaults to ``app``. If it names a callable other than an App,
    that callable is a factory: it is called with *config* when given,
    otherwise with no arguments.

    Raises ``ModuleNotFoundError`` / ``AttributeError`` when the target is
    missing and ``TypeError`` when it does not produce an App.
    """
    module_name, _, attribute = import_string.partition(":")
    target = getattr(importlib.import_module(module_name), attribute or "app")

    if callable(target) and not isinstance(target, App):
        try:
            target = target() if config is None else target(config)
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(target, App):
        msg = f"{import_string!r} resolved to {type(target).__name__}, not a skillshare.App instance"
        raise TypeError(msg)
    return target
