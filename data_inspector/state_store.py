"""Per-tool persisted state on top of a key-value collaborator."""
from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, Optional, Protocol


class StateStore(Protocol):
    def get(self, key: str) -> Optional[Dict[str, Any]]: ...

    def set(self, key: str, value: Dict[str, Any]) -> None: ...


class InMemoryStateStore:
    def __init__(self, initial: Optional[Dict[str, Dict[str, Any]]] = None):
        self._data: Dict[str, Dict[str, Any]] = deepcopy(initial) if initial else {}

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        value = self._data.get(key)
        return deepcopy(value) if value is not None else None

    def set(self, key: str, value: Dict[str, Any]) -> None:
        self._data[key] = deepcopy(value)

    def keys(self):
        return list(self._data.keys())


def storage_key_for(tool_id: str) -> str:
    return f"devtools-{tool_id}-state"


class ToolStateManager:
    """Load once at mount, merge-patch and write back on every change."""

    def __init__(self, store: StateStore, tool_id: str, initial: Dict[str, Any]):
        self.store = store
        self.tool_id = tool_id
        self.initial = dict(initial)
        self._state: Optional[Dict[str, Any]] = None

    @property
    def storage_key(self) -> str:
        return storage_key_for(self.tool_id)

    def load(self) -> Dict[str, Any]:
        saved = self.store.get(self.storage_key) or {}
        self._state = {**self.initial, **saved}
        return dict(self._state)

    @property
    def state(self) -> Dict[str, Any]:
        if self._state is None:
            return self.load()
        return dict(self._state)

    def update(self, patch: Dict[str, Any]) -> Dict[str, Any]:
        current = self.state
        current.update(patch)
        self._state = current
        self.store.set(self.storage_key, current)
        return dict(current)

    def reset(self) -> Dict[str, Any]:
        return self.update(dict(self.initial))


def merge_tool_state(
    tool_id: str,
    initial: Dict[str, Any],
    saved: Optional[Dict[str, Any]],
    patch: Dict[str, Any],
) -> Dict[str, Any]:
    """Apply `patch` to a state blob handed over by the browser and return the result."""
    store = InMemoryStateStore({storage_key_for(tool_id): saved or {}})
    manager = ToolStateManager(store, tool_id, initial)
    manager.load()
    return manager.update(patch)
