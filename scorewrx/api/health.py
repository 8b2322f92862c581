import platform
import time
from typing import Any, Dict

from scorewrx.config import get_settings
from scorewrx.metrics import BUILD_VERSION, GIT_SHA


async def health() -> Dict[str, Any]:
    settings = get_settings()
    return {
        "status": "ok",
        "version": BUILD_VERSION,
        "git": GIT_SHA,
        "ts": time.time(),
        "env": {
            "max_strokes": settings.max_strokes,
            "handicap_format": settings.default_handicap_format,
        },
        "runtime": {
            "python": platform.python_version(),
        },
    }
