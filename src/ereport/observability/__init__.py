"""Error log and observability sink."""

from ereport.observability.error_log import ErrorLog
from ereport.observability.sink import ErrorSink

__all__ = ["ErrorLog", "ErrorSink"]
