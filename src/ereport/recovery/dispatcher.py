"""Recovery dispatcher: picks and performs remedial actions.

"Retryable by policy" and "retry actually attempted" are separate
decisions. The executor retries automatically inside its loop; this
dispatcher reports whether a *user-initiated* retry makes sense and performs
the automatic side effects (redirect to login, page reload). Both consult
the same ErrorKind taxonomy.
"""

from __future__ import annotations

from ereport.core.errors import ClassifiedError, ErrorKind, RecoveryAction, RecoveryDecision
from ereport.core.logging import get_logger

from .navigation import Navigator
from .session import SessionStore

_logger = get_logger("recovery")

# Kinds for which a manual "try again" affordance is offered
MANUALLY_RETRIABLE_KINDS: frozenset[ErrorKind] = frozenset({
    ErrorKind.NETWORK_ERROR,
    ErrorKind.TIMEOUT_ERROR,
    ErrorKind.SERVER_ERROR,
})

AUTOMATIC_ACTIONS: frozenset[RecoveryAction] = frozenset({
    RecoveryAction.REDIRECT_TO_LOGIN,
    RecoveryAction.RELOAD_PAGE,
})


class RecoveryDispatcher:
    """Maps classified errors to RecoveryDecisions and applies them."""

    def __init__(self, session: SessionStore, navigator: Navigator) -> None:
        self._session = session
        self._navigator = navigator

    def decide(self, error: ClassifiedError) -> RecoveryDecision:
        """Return the recovery decision for an error's kind."""
        action = error.kind.default_recovery
        recoverable = action == RecoveryAction.RETRY and error.kind in MANUALLY_RETRIABLE_KINDS
        return RecoveryDecision(recoverable=recoverable, action=action)

    def apply(self, decision: RecoveryDecision) -> bool:
        """Perform the automatic side effect of a decision.

        Collaborator failures are logged and reported as False.

        Returns:
            True if a side effect ran (redirect or reload), False otherwise.
        """
        if decision.action not in AUTOMATIC_ACTIONS:
            return False
        try:
            if decision.action == RecoveryAction.REDIRECT_TO_LOGIN:
                self._session.clear()
                self._navigator.goto_login()
            else:
                self._navigator.reload()
        except Exception as e:
            _logger.warning("recovery_failed", action=decision.action.value, error=str(e))
            return False
        _logger.info(f"recovery_{decision.action.value}")
        return True

    def handle(self, error: ClassifiedError) -> RecoveryDecision:
        """Decide and, for automatic actions, apply in one step."""
        decision = self.decide(error)
        if decision.action in AUTOMATIC_ACTIONS:
            self.apply(decision)
        return decision
