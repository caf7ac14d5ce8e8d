"""Tests for RecoveryDispatcher and its session/navigation collaborators."""

import pytest
from structlog.testing import capture_logs

from ereport.core.config import SessionConfig
from ereport.core.errors import ClassifiedError, ErrorKind, RecoveryAction, RecoveryDecision
from ereport.recovery import (
    InMemorySessionStore,
    Navigator,
    RecordingNavigator,
    RecoveryDispatcher,
    SessionStore,
)
from tests.helpers import LockedSessionStore, UnmountedNavigator


def _error(kind: ErrorKind) -> ClassifiedError:
    return ClassifiedError(kind, "x")


@pytest.fixture
def dispatcher(
    session: InMemorySessionStore, navigator: RecordingNavigator
) -> RecoveryDispatcher:
    return RecoveryDispatcher(session, navigator)


class TestDecide:
    """Tests for RecoveryDispatcher.decide()."""

    @pytest.mark.parametrize(
        "kind", [ErrorKind.NETWORK_ERROR, ErrorKind.TIMEOUT_ERROR, ErrorKind.SERVER_ERROR]
    )
    def test_manual_retry_offered(self, dispatcher: RecoveryDispatcher, kind: ErrorKind) -> None:
        decision = dispatcher.decide(_error(kind))
        assert decision == RecoveryDecision(recoverable=True, action=RecoveryAction.RETRY)

    def test_authentication(self, dispatcher: RecoveryDispatcher) -> None:
        decision = dispatcher.decide(_error(ErrorKind.AUTHENTICATION_ERROR))

        assert not decision.recoverable
        assert decision.action is RecoveryAction.REDIRECT_TO_LOGIN

    def test_cors(self, dispatcher: RecoveryDispatcher) -> None:
        decision = dispatcher.decide(_error(ErrorKind.CORS_ERROR))

        assert not decision.recoverable
        assert decision.action is RecoveryAction.RELOAD_PAGE

    @pytest.mark.parametrize(
        "kind",
        [
            ErrorKind.VALIDATION_ERROR,
            ErrorKind.AUTHORIZATION_ERROR,
            ErrorKind.NOT_FOUND_ERROR,
            ErrorKind.API_ERROR,
            ErrorKind.UNKNOWN_ERROR,
        ],
    )
    def test_nothing_to_do(self, dispatcher: RecoveryDispatcher, kind: ErrorKind) -> None:
        assert dispatcher.decide(_error(kind)) == RecoveryDecision(recoverable=False)

    def test_decide_has_no_side_effects(
        self,
        dispatcher: RecoveryDispatcher,
        session: InMemorySessionStore,
        navigator: RecordingNavigator,
    ) -> None:
        dispatcher.decide(_error(ErrorKind.AUTHENTICATION_ERROR))

        assert session.is_authenticated
        assert navigator.history == []


class TestApply:
    """Tests for RecoveryDispatcher.apply() and handle()."""

    def test_redirect_clears_session_then_navigates(
        self,
        dispatcher: RecoveryDispatcher,
        session: InMemorySessionStore,
        navigator: RecordingNavigator,
    ) -> None:
        applied = dispatcher.handle(_error(ErrorKind.AUTHENTICATION_ERROR))

        assert applied.action is RecoveryAction.REDIRECT_TO_LOGIN
        assert session.token is None
        assert session.get("e-report-refresh-token") is None
        assert session.get("theme") == "dark"
        assert navigator.history == ["goto:/login"]

    def test_reload(
        self, dispatcher: RecoveryDispatcher, navigator: RecordingNavigator
    ) -> None:
        dispatcher.handle(_error(ErrorKind.CORS_ERROR))
        assert navigator.history == ["reload"]

    def test_retry_decision_has_no_automatic_effect(
        self,
        dispatcher: RecoveryDispatcher,
        session: InMemorySessionStore,
        navigator: RecordingNavigator,
    ) -> None:
        decision = dispatcher.handle(_error(ErrorKind.NETWORK_ERROR))

        assert decision.recoverable
        assert dispatcher.apply(decision) is False
        assert navigator.history == []
        assert session.clear_count == 0

    def test_apply_reports_side_effect(self, dispatcher: RecoveryDispatcher) -> None:
        assert dispatcher.apply(RecoveryDecision(False, RecoveryAction.RELOAD_PAGE)) is True
        assert dispatcher.apply(RecoveryDecision(False, RecoveryAction.NONE)) is False


class TestCollaboratorFailures:
    """Session or navigation failures are logged, never raised."""

    def test_navigator_failure_on_redirect(self, session: InMemorySessionStore) -> None:
        dispatcher = RecoveryDispatcher(session, UnmountedNavigator())

        with capture_logs() as logs:
            decision = dispatcher.handle(_error(ErrorKind.AUTHENTICATION_ERROR))

        assert decision.action is RecoveryAction.REDIRECT_TO_LOGIN
        assert session.token is None
        failures = [log for log in logs if log["event"] == "recovery_failed"]
        assert failures == [
            {
                "component": "recovery",
                "action": "redirect_to_login",
                "error": "router not mounted",
                "event": "recovery_failed",
                "log_level": "warning",
            }
        ]

    def test_navigator_failure_on_reload(self, session: InMemorySessionStore) -> None:
        dispatcher = RecoveryDispatcher(session, UnmountedNavigator())

        with capture_logs() as logs:
            applied = dispatcher.apply(RecoveryDecision(False, RecoveryAction.RELOAD_PAGE))

        assert applied is False
        assert [log["action"] for log in logs if log["event"] == "recovery_failed"] == [
            "reload_page"
        ]

    def test_session_failure_skips_navigation(self, navigator: RecordingNavigator) -> None:
        dispatcher = RecoveryDispatcher(LockedSessionStore(), navigator)

        with capture_logs() as logs:
            applied = dispatcher.apply(
                RecoveryDecision(False, RecoveryAction.REDIRECT_TO_LOGIN)
            )

        assert applied is False
        assert navigator.history == []
        assert logs[-1]["event"] == "recovery_failed"
        assert logs[-1]["error"] == "storage is read-only"


class TestCollaborators:
    """Tests for the in-memory session store and recording navigator."""

    def test_protocols(self) -> None:
        assert isinstance(InMemorySessionStore(), SessionStore)
        assert isinstance(RecordingNavigator(), Navigator)

    def test_session_uses_configured_keys(self) -> None:
        store = InMemorySessionStore(SessionConfig(token_key="t", refresh_token_key="r"))
        store.set_tokens("abc", "def")

        assert store.get("t") == "abc"
        assert store.session_keys == ("t", "r")
        store.clear()
        assert not store.is_authenticated
        assert store.get("r") is None

    def test_clear_is_idempotent(self) -> None:
        store = InMemorySessionStore()
        store.clear()
        store.clear()
        assert store.clear_count == 2

    def test_navigator_counts(self) -> None:
        navigator = RecordingNavigator(login_path="/masuk")
        navigator.goto_login()
        navigator.reload()
        navigator.goto_login()

        assert navigator.history == ["goto:/masuk", "reload", "goto:/masuk"]
        assert navigator.login_count == 2
        assert navigator.reload_count == 1
