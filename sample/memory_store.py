"""Dict-backed store provider for running generated accessors."""

from typing import Any, Dict


class MemoryEditor:
    def __init__(self, store: "MemoryStore"):
        self._store = store
        self._pending: Dict[str, Any] = {}

    def _put(self, key, value):
        self._pending[key] = value
        return self

    put_string = put_int = put_boolean = put_float = put_long = _put

    def put_string_set(self, key, value):
        return self._put(key, None if value is None else set(value))

    def apply(self):
        for key, value in self._pending.items():
            if value is None:
                self._store.values.pop(key, None)
            else:
                self._store.values[key] = value
        self._pending.clear()


class MemoryStore:
    def __init__(self, name: str):
        self.name = name
        self.values: Dict[str, Any] = {}

    def _get(self, key, default):
        return self.values.get(key, default)

    get_string = get_int = get_boolean = get_float = get_long = _get

    def get_string_set(self, key, default):
        value = self.values.get(key)
        return default if value is None else set(value)

    def edit(self) -> MemoryEditor:
        return MemoryEditor(self)


class MemoryStoreProvider:
    """Hands out one MemoryStore per name."""

    def __init__(self):
        self.stores: Dict[str, MemoryStore] = {}

    def open_store(self, name: str) -> MemoryStore:
        return self.stores.setdefault(name, MemoryStore(name))
