"""
Pytest configuration and shared fixtures for the sharedpreform test suite.
"""

from typing import Annotated

import pytest

from sharedpreform import DefaultValue, Long, PrefKey, PrefStore
from sharedpreform.core.config import load_config
from sharedpreform.languages.kotlin import KotlinGenerator
from sharedpreform.languages.python import PythonGenerator


class RecordingEditor:
    """Editor double that applies writes to its store on ``apply``."""

    def __init__(self, store):
        self.store = store
        self.pending = []

    def __getattr__(self, name):
        if not name.startswith("put_"):
            raise AttributeError(name)

        def put(key, value):
            self.pending.append((name, key, value))
            return self

        return put

    def apply(self):
        for operation, key, value in self.pending:
            self.store.calls.append((operation, key, value))
            self.store.values[key] = value
        self.pending = []


class RecordingStore:
    """Dict-backed store that records every operation it receives."""

    def __init__(self, name):
        self.name = name
        self.values = {}
        self.calls = []

    def __getattr__(self, name):
        if not name.startswith("get_"):
            raise AttributeError(name)

        def get(key, default):
            self.calls.append((name, key, default))
            return self.values.get(key, default)

        return get

    def edit(self):
        return RecordingEditor(self)


class RecordingProvider:
    """Store provider double; one RecordingStore per name."""

    def __init__(self):
        self.stores = {}

    def open_store(self, name):
        return self.stores.setdefault(name, RecordingStore(name))


@pytest.fixture
def provider():
    """Return a fresh recording store provider."""
    return RecordingProvider()


@pytest.fixture
def load_accessor():
    """Return a helper that executes generated Python source and returns the class."""

    def load(artifact):
        namespace = {"__name__": f"generated.{artifact.class_name}"}
        exec(compile(artifact.source, artifact.path or "<generated>", "exec"), namespace)
        return namespace[artifact.class_name]

    return load


@pytest.fixture
def python_generator():
    """Return a Python generator with default configuration."""
    return PythonGenerator(load_config("python"))


@pytest.fixture
def kotlin_generator():
    """Return a Kotlin generator with default configuration."""
    return KotlinGenerator(load_config("kotlin"))


@pytest.fixture
def settings_document():
    """Return the Settings aggregate with a single string field."""
    return {
        "name": "Settings",
        "store": "Settings",
        "package": "app.prefs",
        "fields": [
            {"name": "theme", "key": "theme", "type": "string", "default": "light"},
        ],
    }


@pytest.fixture
def tags_document():
    """Return an aggregate with one async string set field."""
    return {
        "name": "Profile",
        "store": "ProfileStore",
        "fields": [
            {"name": "tags", "key": "tags", "type": "set<string>", "async": True},
        ],
    }


@pytest.fixture
def user_preferences_class():
    """Return a tagged class covering every supported type."""

    @PrefStore("UserPreferences")
    class UserPreferences:
        """Signed-in user settings."""

        username: Annotated[str, PrefKey("user_name", async_=True), DefaultValue("Guest")]
        is_logged_in: Annotated[bool, PrefKey("isLoggedIn"), DefaultValue("false")]
        age: Annotated[int, PrefKey("age"), DefaultValue("18")]
        height: Annotated[float, PrefKey("height"), DefaultValue("1.75f")]
        last_seen: Annotated[Long, PrefKey("lastSeen"), DefaultValue("1700000000000L")]
        roles: Annotated[set[str], PrefKey("roles", async_=True)]
        nickname: str = "unused"

    return UserPreferences
