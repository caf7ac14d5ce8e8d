"""Recovery actions for classified errors."""

from ereport.recovery.dispatcher import (
    AUTOMATIC_ACTIONS,
    MANUALLY_RETRIABLE_KINDS,
    RecoveryDispatcher,
)
from ereport.recovery.navigation import Navigator, RecordingNavigator
from ereport.recovery.session import InMemorySessionStore, SessionStore

__all__ = [
    "AUTOMATIC_ACTIONS",
    "MANUALLY_RETRIABLE_KINDS",
    "InMemorySessionStore",
    "Navigator",
    "RecordingNavigator",
    "RecoveryDispatcher",
    "SessionStore",
]
