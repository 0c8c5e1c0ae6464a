import platform
import time
from typing import Any, Dict

from matchplay.config import get_settings
from matchplay.metrics import BUILD_VERSION, GIT_SHA


async def health() -> Dict[str, Any]:
    settings = get_settings()
    return {
        "status": "ok",
        "version": BUILD_VERSION,
        "git": GIT_SHA,
        "ts": time.time(),
        "defaults": {
            "course_par": settings.default_course_par,
            "points_value": settings.default_points_value,
        },
        "runtime": {
            "python": platform.python_version(),
        },
    }
