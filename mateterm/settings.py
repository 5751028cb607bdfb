"""An in-memory hierarchical settings store with change notification."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Optional

ChangeCallback = Callable[[str], None]


class SettingsStore:
    """Key/value settings grouped by path, with locked keys and change listeners."""

    def __init__(
        self,
        values: Optional[Mapping[str, Mapping[str, Any]]] = None,
        locked: Optional[Iterable[tuple[str, str]]] = None,
    ) -> None:
        self._values: dict[str, dict[str, Any]] = {
            path: dict(keys) for path, keys in (values or {}).items()
        }
        self._locked: set[tuple[str, str]] = set(locked or ())
        self._listeners: dict[str, list[ChangeCallback]] = {}

    def get_value(self, path: str, key: str) -> Any:
        """Return the stored value, or None if nothing is stored."""
        return self._values.get(path, {}).get(key)

    def set_value(self, path: str, key: str, value: Any) -> None:
        """Store a value; raise PermissionError if the key is locked."""
        if not self.is_writable(path, key):
            raise PermissionError(f"settings key {key!r} under {path!r} is locked")
        self._write(path, key, value)

    def is_writable(self, path: str, key: str) -> bool:
        return (path, key) not in self._locked

    def lock(self, path: str, key: str) -> None:
        """Make a key read-only; listeners are told so they can refresh."""
        self._locked.add((path, key))
        self._notify(path, key)

    def connect(self, path: str, callback: ChangeCallback) -> None:
        """Call callback(key) whenever a key under path changes."""
        self._listeners.setdefault(path, []).append(callback)

    def disconnect(self, path: str, callback: ChangeCallback) -> None:
        """Stop calling callback for path; unknown callbacks are ignored."""
        listeners = self._listeners.get(path, [])
        if callback in listeners:
            listeners.remove(callback)

    def changeset(self, path: str) -> "Changeset":
        """Start a batch of writes that take effect together."""
        return Changeset(self, path)

    def _write(self, path: str, key: str, value: Any) -> None:
        self._values.setdefault(path, {})[key] = value
        self._notify(path, key)

    def _notify(self, path: str, key: str) -> None:
        for callback in list(self._listeners.get(path, ())):
            callback(key)


class Changeset:
    """Writes collected for one path, applied together; usable as a context manager."""

    def __init__(self, store: SettingsStore, path: str) -> None:
        self._store = store
        self.path = path
        self._pending: dict[str, Any] = {}

    @property
    def pending(self) -> dict[str, Any]:
        return dict(self._pending)

    def set(self, key: str, value: Any) -> None:
        self._pending[key] = value

    def apply(self) -> tuple[str, ...]:
        """Write pending values, skipping locked keys; return the keys written."""
        pending, self._pending = self._pending, {}
        written = []
        for key, value in pending.items():
            if self._store.is_writable(self.path, key):
                self._store._write(self.path, key, value)
                written.append(key)
        return tuple(written)

    def __enter__(self) -> "Changeset":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.apply()