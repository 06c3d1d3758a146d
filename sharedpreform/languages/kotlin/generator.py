"""
Kotlin code generator implementation.

Generates an Android SharedPreferences helper class. Async variants are
suspend functions that switch to the configured coroutine dispatcher.
"""

from pathlib import Path
from typing import Any, Dict, List

from ...core.config import GeneratorConfig, load_config
from ...core.generator import (
    CodeGenerator,
    GeneratedArtifact,
    GeneratedMethod,
    GeneratedParameter,
)
from ...core.naming import MethodCase, NameSanitizer, to_pascal_case
from ...core.schema import FieldDescriptor, SchemaDescriptor
from ...core.types import INT64_RANGE, PrefType, TypeBinding
from .config import KotlinConfig
from .naming import create_kotlin_sanitizer, quote_identifier


def kotlin_string_literal(value: str) -> str:
    """Double-quoted Kotlin literal for a string."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("$", "\\$")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


def kotlin_comment_text(value: str) -> str:
    """Single-line text that cannot open or close a Kotlin block comment."""
    text = " ".join(value.splitlines())
    return text.replace("*/", "*&#47;").replace("/*", "&#47;*")


class KotlinGenerator(CodeGenerator):
    """Code generator for Kotlin SharedPreferences helpers."""

    def __init__(self, config: GeneratorConfig = None):
        super().__init__(config)
        self.kotlin_config = KotlinConfig(**self.config.language_config)

    @property
    def language_name(self) -> str:
        return "kotlin"

    @property
    def file_extension(self) -> str:
        return ".kt"

    @property
    def template_name(self) -> str:
        return "accessor.kt.j2"

    @property
    def method_case(self) -> MethodCase:
        # get<Field> naming is part of the Kotlin API contract
        return MethodCase.CAMEL

    def get_template_directory(self) -> Path:
        return Path(__file__).parent / "templates"

    def create_sanitizer(self) -> NameSanitizer:
        return create_kotlin_sanitizer()

    def type_name(self, binding: TypeBinding) -> str:
        return self.kotlin_config.get_kotlin_type(binding.pref_type)

    def default_literal(self, pref_field: FieldDescriptor) -> str:
        value = pref_field.default_value
        if value is None:
            return "null"
        if pref_field.type is PrefType.STRING:
            return kotlin_string_literal(value)
        if pref_field.type is PrefType.BOOLEAN:
            return "true" if value else "false"
        if pref_field.type is PrefType.FLOAT:
            return f"{value!r}f"
        if pref_field.type is PrefType.LONG:
            # Unary minus applies after the literal, which would overflow
            return "Long.MIN_VALUE" if value == INT64_RANGE[0] else f"{value}L"
        return str(value)

    def build_constructor(self, schema: SchemaDescriptor) -> List[GeneratedParameter]:
        return [
            GeneratedParameter("context", self.kotlin_config.context_type),
            GeneratedParameter(
                "dispatcher", "CoroutineDispatcher", default=self.kotlin_config.dispatcher
            ),
        ]

    def _call(self, binding: TypeBinding, prefix: str) -> str:
        return f"{prefix}{to_pascal_case(binding.operation)}"

    def getter_body(self, pref_field: FieldDescriptor, binding: TypeBinding) -> List[str]:
        return [f"return {self._read(pref_field, binding)}"]

    def setter_body(self, pref_field: FieldDescriptor, binding: TypeBinding) -> List[str]:
        return [self._write(pref_field, binding)]

    def async_getter_body(self, pref_field: FieldDescriptor, sync_name: str,
                          binding: TypeBinding) -> List[str]:
        return [f"return withContext(dispatcher) {{ {self._read(pref_field, binding)} }}"]

    def async_setter_body(self, pref_field: FieldDescriptor, sync_name: str,
                          binding: TypeBinding) -> List[str]:
        return [f"withContext(dispatcher) {{ {self._write(pref_field, binding)} }}"]

    def _read(self, pref_field: FieldDescriptor, binding: TypeBinding) -> str:
        key = kotlin_string_literal(pref_field.key)
        default = self.default_literal(pref_field)
        return f"sharedPreferences.{self._call(binding, 'get')}({key}, {default})"

    def _write(self, pref_field: FieldDescriptor, binding: TypeBinding) -> str:
        key = kotlin_string_literal(pref_field.key)
        return f"sharedPreferences.edit().{self._call(binding, 'put')}({key}, value).apply()"

    def artifact_path(self, artifact: GeneratedArtifact) -> str:
        parts = [p for p in (artifact.package or "").split(".") if p]
        return str(Path(*parts, f"{artifact.class_name}{self.file_extension}"))

    def template_context(self, artifact: GeneratedArtifact) -> Dict[str, Any]:
        context = super().template_context(artifact)
        package = ".".join(
            quote_identifier(p) for p in (artifact.package or "").split(".") if p
        )
        context.update(
            {
                "kotlin_package": package,
                "imports": self.kotlin_config.imports,
                "context_type": self.kotlin_config.context_type,
                "store_name_literal": kotlin_string_literal(artifact.store_name),
                "doc_store_name": kotlin_comment_text(artifact.store_name),
                "doc_aggregate": kotlin_comment_text(artifact.schema.name),
                "doc_description": kotlin_comment_text(artifact.schema.description or ""),
                "constructor_params": [
                    self._parameter(p) for p in artifact.constructor
                ],
                "rendered_methods": [self._render_method(m) for m in artifact.methods],
            }
        )
        return context

    def _parameter(self, param: GeneratedParameter) -> str:
        text = f"{param.name}: {param.type}"
        if param.default is not None:
            text = f"{text} = {param.default}"
        return text

    def _render_method(self, method: GeneratedMethod) -> Dict[str, Any]:
        params = self._parameter(method.parameter) if method.parameter else ""
        returns = f": {method.return_type}" if method.return_type else ""
        return {
            "name": method.name,
            "is_async": method.is_async,
            "params": params,
            "returns": returns,
            "body": method.body,
        }


def create_kotlin_generator(config: GeneratorConfig = None, **options) -> KotlinGenerator:
    """Create a Kotlin generator, optionally overriding configuration fields."""
    if config is None:
        config = load_config("kotlin", custom_config=options or None)

    return KotlinGenerator(config)
