"""Call sync or async handlers uniformly.

Route handlers and lifecycle hooks can be ``def`` or ``async def``.
Every call site goes through :func:`invoke` so the check lives in one place.
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *handler* and await the result if it is awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
