"""CLI helpers for dbhandle.

URL sanitization for safe display, stderr message emitters with
emoji→ASCII fallbacks, and the ``NAME=LEVEL`` logger option parser.
"""

from .db_url import sanitize_url
from .messages import error, success, warn

__all__ = ["sanitize_url", "error", "success", "warn"]
