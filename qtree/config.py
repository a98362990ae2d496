"""
Runtime configuration read from environment variables.
"""
import os


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes")


LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

PORT = int(os.environ.get("PORT", 8000))
WORKERS = int(os.environ.get("WORKERS", 1))
DEBUG = _env_bool("DEBUG", False)

# Reject compressed data with values left over after the tree
STRICT_DECODE = _env_bool("QTREE_STRICT_DECODE", True)

# Seconds temporary files are kept before cleanup
CLEANUP_DELAY = int(os.environ.get("QTREE_CLEANUP_DELAY", 3600))

# Largest image accepted for upload (2048 x 2048)
MAX_PIXELS = int(os.environ.get("QTREE_MAX_PIXELS", 2048 * 2048))
