"""
Session token handling for outgoing requests.

The admin site keeps its bearer token in browser local storage. Here the
storage is a port: anything with get/set/remove works, so the facades can
run against memory in tests and against a JSON file on a workstation.
"""
import json
import logging
import os
from pathlib import Path
from typing import Callable, Dict, Protocol

logger = logging.getLogger(__name__)

AUTH_TOKEN_KEY = "authToken"

TokenAccessor = Callable[[], str | None]


class SessionStore(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class InMemorySessionStore:
    def __init__(self, initial: Dict[str, str] | None = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileSessionStore:
    """Session values persisted as a flat JSON object on disk."""

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning(f"Ignoring unreadable session file: {self.path}")
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, items: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(items), encoding="utf-8")

    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._load()
        items[key] = value
        self._save(items)

    def remove_item(self, key: str) -> None:
        items = self._load()
        if items.pop(key, None) is not None:
            self._save(items)


def token_accessor(store: SessionStore, key: str = AUTH_TOKEN_KEY) -> TokenAccessor:
    """Build the token accessor the facades call before every request"""
    return lambda: store.get_item(key)


def no_token() -> str | None:
    return None


def bearer_headers(token: str | None) -> Dict[str, str]:
    """Authorization header for the token, or nothing when there is no token"""
    if not token:
        return {}
    return {"Authorization": f"Bearer {token}"}
