"""Files from the public directory, served when no route matches.

This is where the browser client's page and scripts come from.
"""

import mimetypes
from pathlib import Path
from urllib.parse import unquote

from skillshare.http.request import Request
from skillshare.http.response import Response


class StaticFiles:
    """Map ``GET``/``HEAD`` paths onto files below one directory.

    A directory path serves its ``index.html``. Calling the instance gives
    ``None`` when there is no such file, leaving the 404 to the caller,
    and ``403`` for a path that climbs out of the directory.
    """

    __slots__ = ("_cache_control", "_index", "_root")

    def __init__(
        self,
        directory: str | Path,
        *,
        index: str = "index.html",
        cache_control: str = "no-cache",
    ) -> None:
        self._root = Path(directory).resolve()
        self._index = index
        self._cache_control = cache_control

    async def __call__(self, request: Request) -> Response | None:
        if request.method not in ("GET", "HEAD"):
            return None

        target = (self._root / unquote(request.raw_path).lstrip("/")).resolve()
        if not target.is_relative_to(self._root):
            return Response("Forbidden", status=403)
        if target.is_dir():
            target /= self._index
        if not target.is_file():
            return None

        content_type = mimetypes.guess_type(target.name)[0] or "application/octet-stream"
        return Response(target.read_bytes(), content_type=content_type).with_header(
            "Cache-Control", self._cache_control
        )
