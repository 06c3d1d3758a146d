"""
Integration tests for generated Python accessors.

Generated source is executed and driven against a recording store.
"""

import asyncio
import inspect
from concurrent.futures import ThreadPoolExecutor

import pytest

from sharedpreform.core.config import load_config
from sharedpreform.core.diagnostics import InvalidDefaultError
from sharedpreform.core.schema import extract_schema, schema_from_dict
from sharedpreform.languages.python import PythonGenerator, create_python_generator
from sharedpreform.store import StoreProvider


class TestSettingsAccessor:
    """A single non-async string field with a default."""

    @pytest.fixture
    def artifact(self, python_generator, settings_document):
        return python_generator.generate(schema_from_dict(settings_document))

    def test_class_shape(self, artifact):
        assert artifact.class_name == "SettingsSharedPref"
        assert artifact.method_names == ["getTheme", "setTheme"]
        assert artifact.path == "app/prefs/settings_shared_pref.py"

    def test_source(self, artifact):
        assert 'STORE_NAME = "Settings"' in artifact.source
        assert 'return self._store.get_string("theme", "light")' in artifact.source
        assert 'self._store.edit().put_string("theme", value).apply()' in artifact.source
        assert "async def" not in artifact.source
        assert "import asyncio" not in artifact.source

    def test_unset_value_returns_default(self, artifact, load_accessor, provider):
        prefs = load_accessor(artifact)(provider)

        assert prefs.getTheme() == "light"
        assert "Settings" in provider.stores

    def test_set_then_get(self, artifact, load_accessor, provider):
        prefs = load_accessor(artifact)(provider)

        prefs.setTheme("dark")

        assert prefs.getTheme() == "dark"
        assert ("put_string", "theme", "dark") in provider.stores["Settings"].calls

    def test_no_async_methods(self, artifact, load_accessor, provider):
        prefs = load_accessor(artifact)(provider)
        assert not hasattr(prefs, "getThemeAsync")
        assert not hasattr(prefs, "setThemeAsync")


class TestTagsAccessor:
    """A single async string set field without a default."""

    @pytest.fixture
    def accessor_class(self, python_generator, tags_document, load_accessor):
        artifact = python_generator.generate(schema_from_dict(tags_document))
        return load_accessor(artifact)

    def test_method_names(self, python_generator, tags_document):
        artifact = python_generator.generate(schema_from_dict(tags_document))
        assert artifact.method_names == ["getTags", "setTags", "getTagsAsync", "setTagsAsync"]

    def test_default_is_none(self, accessor_class, provider):
        prefs = accessor_class(provider)

        assert prefs.getTags() is None
        assert provider.stores["ProfileStore"].calls == [("get_string_set", "tags", None)]

    def test_async_round_trip(self, accessor_class, provider):
        prefs = accessor_class(provider)

        async def scenario():
            await prefs.setTagsAsync({"a", "b"})
            return await prefs.getTagsAsync()

        assert asyncio.run(scenario()) == {"a", "b"}
        assert prefs.getTags() == {"a", "b"}

    def test_async_methods_are_coroutines(self, accessor_class):
        assert inspect.iscoroutinefunction(accessor_class.getTagsAsync)
        assert inspect.iscoroutinefunction(accessor_class.setTagsAsync)
        assert not inspect.iscoroutinefunction(accessor_class.getTags)

    def test_custom_executor(self, accessor_class, provider):
        """Test async work runs on the executor given to the constructor."""
        submitted = []

        class CountingExecutor(ThreadPoolExecutor):
            def submit(self, fn, /, *args, **kwargs):
                submitted.append(fn.__name__)
                return super().submit(fn, *args, **kwargs)

        with CountingExecutor(max_workers=1) as executor:
            prefs = accessor_class(provider, executor)
            asyncio.run(prefs.setTagsAsync({"x"}))

        assert submitted == ["setTags"]
        assert prefs.getTags() == {"x"}


class TestAllTypes:
    """Every supported type through one generated class."""

    @pytest.fixture
    def prefs(self, python_generator, user_preferences_class, load_accessor, provider):
        schema = extract_schema(user_preferences_class, package="app")
        return load_accessor(python_generator.generate(schema))(provider)

    def test_defaults(self, prefs, provider):
        """Test typed defaults are passed to the store operations."""
        assert prefs.getUsername() == "Guest"
        assert prefs.getIsLoggedIn() is False
        assert prefs.getAge() == 18
        assert prefs.getHeight() == 1.75
        assert prefs.getLastSeen() == 1700000000000
        assert prefs.getRoles() is None

        operations = [call[0] for call in provider.stores["UserPreferences"].calls]
        assert operations == [
            "get_string",
            "get_boolean",
            "get_int",
            "get_float",
            "get_long",
            "get_string_set",
        ]

    def test_round_trips(self, prefs):
        prefs.setIsLoggedIn(True)
        prefs.setAge(30)
        prefs.setHeight(1.8)
        prefs.setLastSeen(2**40)

        assert prefs.getIsLoggedIn() is True
        assert prefs.getAge() == 30
        assert prefs.getHeight() == 1.8
        assert prefs.getLastSeen() == 2**40

    @pytest.mark.parametrize(
        "setter, getter, value",
        [
            ("setUsername", "getUsername", ""),
            ("setAge", "getAge", 0),
            ("setAge", "getAge", -1),
            ("setAge", "getAge", -(2**31)),
            ("setHeight", "getHeight", 0.0),
            ("setHeight", "getHeight", -2.5),
            ("setLastSeen", "getLastSeen", 0),
            ("setLastSeen", "getLastSeen", -(2**63)),
            ("setIsLoggedIn", "getIsLoggedIn", False),
            ("setRoles", "getRoles", set()),
            ("setRoles", "getRoles", {"admin"}),
        ],
    )
    def test_boundary_round_trips(self, prefs, setter, getter, value):
        """Test values equal to or below the defaults are stored, not replaced."""
        getattr(prefs, setter)(value)

        assert getattr(prefs, getter)() == value
        assert type(getattr(prefs, getter)()) is type(value)

    def test_only_async_fields_get_async_methods(self, prefs):
        assert hasattr(prefs, "getUsernameAsync")
        assert hasattr(prefs, "setRolesAsync")
        assert not hasattr(prefs, "getAgeAsync")


class TestPythonOptions:
    """Configuration-driven output differences."""

    def test_snake_case_methods(self, tags_document, load_accessor, provider):
        generator = create_python_generator(method_case="snake")
        artifact = generator.generate(schema_from_dict(tags_document))

        assert artifact.method_names == [
            "get_tags",
            "set_tags",
            "get_tags_async",
            "set_tags_async",
        ]
        prefs = load_accessor(artifact)(provider)
        assert asyncio.run(prefs.get_tags_async()) is None

    def test_without_type_hints(self, settings_document):
        config = load_config("python", {"language_config": {"type_hints": False}})
        source = PythonGenerator(config).generate(schema_from_dict(settings_document)).source

        assert "def __init__(self, store_provider, executor=None):" in source
        assert "def getTheme(self):" in source
        assert "Executor" not in source

    def test_type_hints(self, python_generator, settings_document):
        source = python_generator.generate(schema_from_dict(settings_document)).source

        assert "def __init__(self, store_provider, executor: Executor | None = None):" in source
        assert "def getTheme(self) -> str | None:" in source
        assert "def setTheme(self, value: str | None) -> None:" in source

    def test_without_comments(self, settings_document):
        generator = create_python_generator(add_comments=False)
        source = generator.generate(schema_from_dict(settings_document)).source
        assert "Reads and writes" not in source

    def test_indent_size(self, settings_document):
        generator = create_python_generator(indent_size=2)
        source = generator.generate(schema_from_dict(settings_document)).source
        assert '\n  def getTheme(self) -> str | None:\n    return self._store' in source

    def test_package_override(self, settings_document):
        generator = create_python_generator(package_name="generated")
        artifact = generator.generate(schema_from_dict(settings_document))
        assert artifact.path == "generated/settings_shared_pref.py"

    def test_class_suffix(self, settings_document):
        generator = create_python_generator(class_suffix="Accessor")
        artifact = generator.generate(schema_from_dict(settings_document))
        assert artifact.class_name == "SettingsAccessor"
        assert artifact.path.endswith("settings_accessor.py")

    def test_key_escaping(self, load_accessor, provider):
        """Test keys and defaults with quotes stay valid Python."""
        schema = schema_from_dict(
            {
                "name": "Quotes",
                "fields": [
                    {"name": "motto", "key": 'say "hi"', "default": 'it\'s "fine"\n'},
                ],
            }
        )
        prefs = load_accessor(create_python_generator().generate(schema))(provider)

        assert prefs.getMotto() == 'it\'s "fine"\n'
        assert provider.stores["Quotes"].calls[0][1] == 'say "hi"'

    def test_float_default_extremes(self, load_accessor, provider):
        schema = schema_from_dict(
            {
                "name": "Ratios",
                "fields": [
                    {"name": "ratio", "key": "ratio", "type": "float", "default": "3.4028235e38f"},
                    {"name": "tiny", "key": "tiny", "type": "float", "default": "-1e-30"},
                ],
            }
        )
        prefs = load_accessor(create_python_generator().generate(schema))(provider)

        assert prefs.getRatio() == 3.4028235e38
        assert prefs.getTiny() == -1e-30

    def test_overflowing_float_default_rejected(self):
        with pytest.raises(InvalidDefaultError):
            schema_from_dict(
                {"name": "Ratios", "fields": [{"key": "ratio", "type": "float", "default": "1e400"}]}
            )

    @pytest.mark.parametrize(
        "store, description",
        [
            ("Settings", 'Uses """ quotes'),
            ("C:\\xprefs", "Ends with a backslash \\"),
            ('say "hi"', "Tab\there and a bell \a and a null \0"),
            ("multi\nline", "First line\n    second line"),
        ],
    )
    def test_docstring_text_escaped(self, load_accessor, provider, store, description):
        """Test store names and descriptions cannot break the generated docstrings."""
        schema = schema_from_dict(
            {
                "name": "Settings",
                "store": store,
                "description": description,
                "fields": [{"name": "theme", "key": "theme"}],
            }
        )
        accessor_class = load_accessor(create_python_generator().generate(schema))

        assert accessor_class.STORE_NAME == store
        accessor_class(provider).setTheme("dark")
        assert provider.stores[store].values == {"theme": "dark"}

    def test_recording_provider_satisfies_protocol(self, provider):
        assert isinstance(provider, StoreProvider)
