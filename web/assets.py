"""Static asset bodies, read once at startup"""

import mimetypes
from pathlib import Path
from typing import Dict, Tuple

from fastapi.responses import Response

from chatroom.utils.exceptions import ConfigError

ASSET_FILES = ("auth.html", "auth.js", "index.html", "style.css", "script.js")


class StaticAssets:
    """In-memory copies of the page assets"""

    def __init__(self, static_dir: Path):
        self.static_dir = Path(static_dir)
        self._assets: Dict[str, Tuple[bytes, str]] = {}
        for name in ASSET_FILES:
            path = self.static_dir / name
            if not path.is_file():
                raise ConfigError(f"Static asset not found: {path}")
            media_type = mimetypes.guess_type(name)[0] or "application/octet-stream"
            self._assets[name] = (path.read_bytes(), media_type)

    def body(self, name: str) -> bytes:
        return self._assets[name][0]

    def response(self, name: str) -> Response:
        body, media_type = self._assets[name]
        return Response(content=body, media_type=media_type)
