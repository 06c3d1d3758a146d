"""
Marker annotations for declaring preference aggregates.

An aggregate is an ordinary class decorated with ``PrefStore`` whose fields
carry ``PrefKey`` (and optionally ``DefaultValue``) inside ``typing.Annotated``::

    @PrefStore(name="UserPreferences")
    @dataclass
    class UserPreferences:
        username: Annotated[str, PrefKey("username", async_=True), DefaultValue("Guest")]
        is_logged_in: Annotated[bool, PrefKey("isLoggedIn"), DefaultValue("false")]
        last_seen: Annotated[Long, PrefKey("lastSeen")]

The markers only carry data. The schema extractor reads them.
"""

from dataclasses import dataclass
from typing import NewType, Optional

# 64-bit integer preference. Plain ``int`` maps to a 32-bit integer.
Long = NewType("Long", int)

STORE_ATTRIBUTE = "__pref_store__"


@dataclass(frozen=True)
class PrefStore:
    """Aggregate-level tag naming the underlying key-value store."""

    name: str

    def __call__(self, cls):
        setattr(cls, STORE_ATTRIBUTE, self)
        return cls


@dataclass(frozen=True)
class PrefKey:
    """Field-level tag holding the storage key and the async switch."""

    key: str
    async_: bool = False


@dataclass(frozen=True)
class DefaultValue:
    """Field-level tag holding a raw default-value literal."""

    value: str


def store_of(cls) -> Optional[PrefStore]:
    """The PrefStore tag set on this class itself, ignoring base classes."""
    tag = vars(cls).get(STORE_ATTRIBUTE) if isinstance(cls, type) else None
    return tag if isinstance(tag, PrefStore) else None
