"""skillshare: talk sharing with long-polling synchronization.

::

    from skillshare import create_app

    app = create_app()
    app.run()

Clients fetch ``GET /talks`` and stay in sync by sending back the ETag
with ``Prefer: wait=N``; the server holds the request until the talk
list changes or N seconds pass.
"""

from importlib import import_module

__version__ = "0.1.0"

# public name -> defining module, imported on first access
_EXPORTS = {
    "App": "skillshare.app",
    "create_app": "skillshare.app",
    "AppConfig": "skillshare.config",
    "Request": "skillshare.http.request",
    "Response": "skillshare.http.response",
    "LongPollBroker": "skillshare.broker",
    "ServerState": "skillshare.state",
    "TalkClient": "skillshare.client",
    "ConfigurationError": "skillshare.errors",
    "HTTPError": "skillshare.errors",
    "NotFound": "skillshare.errors",
    "SkillShareError": "skillshare.errors",
    "ValidationError": "skillshare.errors",
}

__all__ = sorted(_EXPORTS)


def __getattr__(name: str) -> object:
    module = _EXPORTS.get(name)
    if module is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(import_module(module), name)
