"""
Integration tests for generated Kotlin SharedPreferences helpers.
"""

import pytest

from sharedpreform.core.config import load_config
from sharedpreform.core.schema import extract_schema, schema_from_dict
from sharedpreform.languages.kotlin import KotlinGenerator, create_kotlin_generator


class TestSettingsHelper:
    """The Settings aggregate rendered for Android."""

    @pytest.fixture
    def artifact(self, kotlin_generator, settings_document):
        return kotlin_generator.generate(schema_from_dict(settings_document))

    def test_path_and_package(self, artifact):
        assert artifact.path == "app/prefs/SettingsSharedPref.kt"
        assert "package app.prefs\n" in artifact.source

    def test_imports(self, artifact):
        for name in (
            "android.content.Context",
            "android.content.SharedPreferences",
            "kotlinx.coroutines.CoroutineDispatcher",
            "kotlinx.coroutines.Dispatchers",
            "kotlinx.coroutines.withContext",
        ):
            assert f"import {name}\n" in artifact.source

    def test_constructor_and_store(self, artifact):
        source = artifact.source
        assert "public class SettingsSharedPref(\n" in source
        assert "    context: Context,\n" in source
        assert "    private val dispatcher: CoroutineDispatcher = Dispatchers.IO,\n" in source
        assert 'context.getSharedPreferences("Settings", Context.MODE_PRIVATE)' in source

    def test_accessors(self, artifact):
        source = artifact.source
        assert "public fun getTheme(): String? {" in source
        assert 'return sharedPreferences.getString("theme", "light")' in source
        assert "public fun setTheme(value: String?) {" in source
        assert 'sharedPreferences.edit().putString("theme", value).apply()' in source
        assert "suspend" not in source


class TestAsyncHelper:
    """Suspend variants for async fields."""

    def test_string_set_suspend_functions(self, kotlin_generator, tags_document):
        source = kotlin_generator.generate(schema_from_dict(tags_document)).source

        assert "public fun getTags(): Set<String?>? {" in source
        assert 'return sharedPreferences.getStringSet("tags", null)' in source
        assert "public suspend fun getTagsAsync(): Set<String?>? {" in source
        assert (
            'return withContext(dispatcher) { sharedPreferences.getStringSet("tags", null) }'
            in source
        )
        assert "public suspend fun setTagsAsync(value: Set<String?>?) {" in source
        assert (
            'withContext(dispatcher) { sharedPreferences.edit().putStringSet("tags", value).apply() }'
            in source
        )

    def test_no_package_line_without_package(self, kotlin_generator, tags_document):
        artifact = kotlin_generator.generate(schema_from_dict(tags_document))

        assert "package " not in artifact.source
        assert artifact.path == "ProfileSharedPref.kt"


class TestKotlinLiterals:
    """Default literal rendering per type."""

    @pytest.fixture
    def source(self, kotlin_generator, user_preferences_class):
        schema = extract_schema(user_preferences_class, package="com.example.prefs")
        return kotlin_generator.generate(schema).source

    def test_typed_defaults(self, source):
        assert 'sharedPreferences.getString("user_name", "Guest")' in source
        assert 'sharedPreferences.getBoolean("isLoggedIn", false)' in source
        assert 'sharedPreferences.getInt("age", 18)' in source
        assert 'sharedPreferences.getFloat("height", 1.75f)' in source
        assert 'sharedPreferences.getLong("lastSeen", 1700000000000L)' in source
        assert 'sharedPreferences.getStringSet("roles", null)' in source

    def test_value_types(self, source):
        assert "public fun setIsLoggedIn(value: Boolean) {" in source
        assert "public fun getAge(): Int {" in source
        assert "public fun setHeight(value: Float) {" in source
        assert "public fun getLastSeen(): Long {" in source

    def test_zero_defaults(self, kotlin_generator):
        schema = schema_from_dict(
            {
                "name": "Zeros",
                "fields": [
                    {"name": "label", "key": "label", "type": "kotlin.String"},
                    {"name": "ratio", "key": "ratio", "type": "float"},
                    {"name": "stamp", "key": "stamp", "type": "long"},
                ],
            }
        )
        source = kotlin_generator.generate(schema).source

        assert 'getString("label", "")' in source
        assert 'getFloat("ratio", 0.0f)' in source
        assert 'getLong("stamp", 0L)' in source

    def test_string_escaping(self, kotlin_generator):
        schema = schema_from_dict(
            {
                "name": "Escapes",
                "fields": [{"name": "price", "key": "price", "default": 'costs "$5"'}],
            }
        )
        source = kotlin_generator.generate(schema).source
        assert 'getString("price", "costs \\"\\$5\\"")' in source

    def test_long_extremes(self, kotlin_generator):
        """Test the smallest long is emitted as a constant Kotlin accepts."""
        schema = schema_from_dict(
            {
                "name": "Stamps",
                "fields": [
                    {"name": "low", "key": "low", "type": "long", "default": str(-(2**63))},
                    {"name": "high", "key": "high", "type": "long", "default": str(2**63 - 1)},
                    {"name": "minus", "key": "minus", "type": "long", "default": "-5"},
                ],
            }
        )
        source = kotlin_generator.generate(schema).source

        assert 'getLong("low", Long.MIN_VALUE)' in source
        assert 'getLong("high", 9223372036854775807L)' in source
        assert 'getLong("minus", -5L)' in source

    def test_float_maximum(self, kotlin_generator):
        schema = schema_from_dict(
            {
                "name": "Ratios",
                "fields": [
                    {"name": "ratio", "key": "ratio", "type": "float", "default": "3.4028235e38f"},
                ],
            }
        )
        source = kotlin_generator.generate(schema).source

        assert 'getFloat("ratio", 3.4028235e+38f)' in source

    def test_comment_text_cannot_close_kdoc(self, kotlin_generator):
        schema = schema_from_dict(
            {
                "name": "Settings",
                "store": "a */ b",
                "description": "Closes */ early and opens /* nested\nover two lines",
                "fields": [{"name": "theme", "key": "theme"}],
            }
        )
        source = kotlin_generator.generate(schema).source
        header = source.split("public class")[0]

        assert header.count("/*") == 1
        assert header.count("*/") == 1
        assert " * Closes *&#47; early and opens &#47;* nested over two lines\n" in header
        assert 'getSharedPreferences("a */ b", Context.MODE_PRIVATE)' in source


class TestKotlinOptions:
    """Configuration-driven output differences."""

    def test_custom_dispatcher(self, settings_document):
        generator = create_kotlin_generator(dispatcher="Dispatchers.Default")
        source = generator.generate(schema_from_dict(settings_document)).source
        assert "CoroutineDispatcher = Dispatchers.Default," in source

    def test_method_case_always_camel(self, tags_document):
        config = load_config("kotlin", {"method_case": "snake"})
        artifact = KotlinGenerator(config).generate(schema_from_dict(tags_document))
        assert artifact.method_names[0] == "getTags"

    def test_keyword_package_segment_quoted(self, kotlin_generator, settings_document):
        settings_document["package"] = "com.example.object"
        source = kotlin_generator.generate(schema_from_dict(settings_document)).source
        assert "package com.example.`object`\n" in source

    def test_without_comments(self, settings_document):
        generator = create_kotlin_generator(add_comments=False)
        source = generator.generate(schema_from_dict(settings_document)).source
        assert "/**" not in source
