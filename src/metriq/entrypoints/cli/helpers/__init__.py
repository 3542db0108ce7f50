"""CLI helpers for METRIQ.

Utilities used by the command-line interface: URL sanitization for safe
display, JSON rendering of service results, and message emitters that write
to stderr with emoji→ASCII fallbacks.
"""

from .db_url import sanitize_url
from .json_output import result_to_json
from .messages import error, success, warn

__all__ = ["sanitize_url", "result_to_json", "warn", "success", "error"]
