"""skillshare exception hierarchy.

Shared across Router, App, handlers and the gateway so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class SkillShareError(Exception):
    """Base for all skillshare-specific errors."""


class ConfigurationError(SkillShareError):
    """Raised when app setup is invalid.

    Typically raised while registering routes or during ``App._freeze()``.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(SkillShareError):
    """An error that maps directly to an HTTP status code.

    Raised by handlers. The gateway catches these and turns them into a
    plain-text response carrying ``detail`` as the body.
    """

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class ValidationError(HTTPError):
    """400 — the request payload does not have the expected shape."""

    def __init__(self, detail: str = "Bad Request") -> None:
        super().__init__(status=400, detail=detail)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — the addressed talk does not exist."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
