"""Session collaborator used by the redirect-to-login recovery."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ereport.core.config import SessionConfig


@runtime_checkable
class SessionStore(Protocol):
    """Anything holding persisted auth artifacts that can be wiped."""

    def clear(self) -> None:
        """Remove every persisted session/auth artifact."""
        ...


class InMemorySessionStore:
    """Dictionary-backed session storage.

    Mirrors browser storage keyed by the configured token names. Keys outside
    the session (user preferences and the like) survive ``clear()``.
    """

    def __init__(self, config: SessionConfig | None = None) -> None:
        self._config = config or SessionConfig()
        self._items: dict[str, str] = {}
        self.clear_count = 0

    @property
    def session_keys(self) -> tuple[str, str]:
        return (self._config.token_key, self._config.refresh_token_key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def get(self, key: str) -> str | None:
        return self._items.get(key)

    def set_tokens(self, token: str, refresh_token: str | None = None) -> None:
        self._items[self._config.token_key] = token
        if refresh_token is not None:
            self._items[self._config.refresh_token_key] = refresh_token

    @property
    def token(self) -> str | None:
        return self._items.get(self._config.token_key)

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def clear(self) -> None:
        for key in self.session_keys:
            self._items.pop(key, None)
        self.clear_count += 1
