"""CLI command modules."""

from .config_cmd import config_app
from .diagnose import classify, messages, probe

__all__ = [
    "classify",
    "config_app",
    "messages",
    "probe",
]
