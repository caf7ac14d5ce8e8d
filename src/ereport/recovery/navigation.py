"""Navigation collaborator used by redirect and reload recoveries."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ereport.core.constants import DEFAULT_LOGIN_PATH


@runtime_checkable
class Navigator(Protocol):
    """Moves the user agent to another page."""

    def goto_login(self) -> None:
        """Navigate to the login entry point."""
        ...

    def reload(self) -> None:
        """Fully reload the current page."""
        ...


class RecordingNavigator:
    """Navigator that records requested navigations without performing them.

    Used by the CLI and tests; a browser bridge would implement the same
    two methods.
    """

    def __init__(self, login_path: str = DEFAULT_LOGIN_PATH) -> None:
        self.login_path = login_path
        self.history: list[str] = []

    def goto_login(self) -> None:
        self.history.append(f"goto:{self.login_path}")

    def reload(self) -> None:
        self.history.append("reload")

    @property
    def login_count(self) -> int:
        return self.history.count(f"goto:{self.login_path}")

    @property
    def reload_count(self) -> int:
        return self.history.count("reload")
