"""
The key-value store contract generated Python accessors are written against.

Generated classes never import this module; it documents the calls they make
so applications can check their store adapter against it.
"""

from typing import Optional, Protocol, Set, runtime_checkable


@runtime_checkable
class StoreEditor(Protocol):
    """Batch of pending writes, committed by ``apply``."""

    def put_string(self, key: str, value: Optional[str]) -> "StoreEditor": ...

    def put_int(self, key: str, value: int) -> "StoreEditor": ...

    def put_boolean(self, key: str, value: bool) -> "StoreEditor": ...

    def put_float(self, key: str, value: float) -> "StoreEditor": ...

    def put_long(self, key: str, value: int) -> "StoreEditor": ...

    def put_string_set(self, key: str, value: Optional[Set[str]]) -> "StoreEditor": ...

    def apply(self) -> None: ...


@runtime_checkable
class KeyValueStore(Protocol):
    """One named preference store."""

    def get_string(self, key: str, default: Optional[str]) -> Optional[str]: ...

    def get_int(self, key: str, default: int) -> int: ...

    def get_boolean(self, key: str, default: bool) -> bool: ...

    def get_float(self, key: str, default: float) -> float: ...

    def get_long(self, key: str, default: int) -> int: ...

    def get_string_set(
        self, key: str, default: Optional[Set[str]]
    ) -> Optional[Set[str]]: ...

    def edit(self) -> StoreEditor: ...


@runtime_checkable
class StoreProvider(Protocol):
    """Opens stores by name; passed to every generated accessor."""

    def open_store(self, name: str) -> KeyValueStore: ...
