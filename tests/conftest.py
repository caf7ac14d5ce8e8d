"""Pytest fixtures for e-Report resilience tests."""

import logging
from collections.abc import Generator

import pytest
import structlog

from ereport.core.config import EReportConfig, NotificationConfig
from ereport.core.errors import ErrorClassifier
from ereport.notifications import MockNotifier
from ereport.recovery import InMemorySessionStore, RecordingNavigator
from ereport.service import ErrorService, create_error_service
from tests.helpers import SleepRecorder


@pytest.fixture(autouse=True)
def reset_logging_state() -> Generator[None, None, None]:
    """Reset logging state before and after each test.

    This ensures test isolation for logging configuration.
    """
    import ereport.cli.helpers as cli_helpers

    cli_helpers.reset_logging_state()
    structlog.reset_defaults()

    root_logger = logging.getLogger()
    original_handlers = root_logger.handlers[:]
    original_level = root_logger.level
    for handler in original_handlers:
        root_logger.removeHandler(handler)

    yield

    cli_helpers.reset_logging_state()
    structlog.reset_defaults()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in original_handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(original_level)


@pytest.fixture
def classifier() -> ErrorClassifier:
    return ErrorClassifier()


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def session() -> InMemorySessionStore:
    store = InMemorySessionStore()
    store.set_tokens("access-abc", "refresh-xyz")
    store.set("theme", "dark")
    return store


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def notifier() -> MockNotifier:
    return MockNotifier()


@pytest.fixture
def config() -> EReportConfig:
    return EReportConfig(environment="test", notifications=NotificationConfig())


@pytest.fixture
def service(
    config: EReportConfig,
    session: InMemorySessionStore,
    navigator: RecordingNavigator,
    notifier: MockNotifier,
    sleep_recorder: SleepRecorder,
) -> ErrorService:
    return create_error_service(
        config,
        session=session,
        navigator=navigator,
        notifiers=[notifier],
        sleep=sleep_recorder,
    )
