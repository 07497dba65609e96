"""
Utility helpers shared across polysql packages.
"""

from .logging import configure_logging, get_correlation_id, get_logger, set_correlation_id, time_call
from .querylog import QueryLog, QueryLogEntry
from .redaction import redact_params, redact_value

__all__ = [
    "QueryLog",
    "QueryLogEntry",
    "configure_logging",
    "get_correlation_id",
    "get_logger",
    "redact_params",
    "redact_value",
    "set_correlation_id",
    "time_call",
]
