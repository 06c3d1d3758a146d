"""
Python code generator implementation.

Generates a typed accessor class over a key-value store. Async variants are
coroutines that run the blocking store call on a configurable executor.
"""

import json
from pathlib import Path
from typing import Any, Dict, List

from ...core.config import GeneratorConfig, load_config
from ...core.generator import (
    CodeGenerator,
    GeneratedArtifact,
    GeneratedMethod,
    GeneratedParameter,
)
from ...core.naming import NameSanitizer
from ...core.schema import FieldDescriptor, SchemaDescriptor
from ...core.types import PrefType, TypeBinding
from .config import PythonConfig
from .naming import create_python_sanitizer


def python_string_literal(value: str) -> str:
    """Double-quoted Python literal for a string."""
    return json.dumps(value, ensure_ascii=False)


def python_docstring_text(value: str) -> str:
    """Text that can sit inside a triple-quoted docstring unchanged."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return "".join(
        char if char.isprintable() or char in "\n\t"
        else char.encode("unicode_escape").decode("ascii")
        for char in escaped
    )


class PythonGenerator(CodeGenerator):
    """Code generator for Python preference accessor classes."""

    def __init__(self, config: GeneratorConfig = None):
        """Initialize Python generator with configuration."""
        super().__init__(config)

        # Initialize Python-specific configuration
        self.python_config = PythonConfig(**self.config.language_config)

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "python"

    @property
    def file_extension(self) -> str:
        """Return Python file extension."""
        return ".py"

    @property
    def template_name(self) -> str:
        return "accessor.py.j2"

    def get_template_directory(self) -> Path:
        """Return the Python templates directory."""
        return Path(__file__).parent / "templates"

    def create_sanitizer(self) -> NameSanitizer:
        return create_python_sanitizer()

    def type_name(self, binding: TypeBinding) -> str:
        return self.python_config.get_python_type(binding.pref_type)

    def default_literal(self, pref_field: FieldDescriptor) -> str:
        value = pref_field.default_value
        if value is None:
            return "None"
        if pref_field.type is PrefType.STRING:
            return python_string_literal(value)
        if pref_field.type is PrefType.BOOLEAN:
            return "True" if value else "False"
        return repr(value)

    def build_constructor(self, schema: SchemaDescriptor) -> List[GeneratedParameter]:
        return [
            GeneratedParameter("store_provider", ""),
            GeneratedParameter("executor", "Executor | None", default="None"),
        ]

    def getter_body(self, pref_field: FieldDescriptor, binding: TypeBinding) -> List[str]:
        key = python_string_literal(pref_field.key)
        default = self.default_literal(pref_field)
        return [f"return self._store.get_{binding.operation}({key}, {default})"]

    def setter_body(self, pref_field: FieldDescriptor, binding: TypeBinding) -> List[str]:
        key = python_string_literal(pref_field.key)
        return [f"self._store.edit().put_{binding.operation}({key}, value).apply()"]

    def async_getter_body(self, pref_field: FieldDescriptor, sync_name: str,
                          binding: TypeBinding) -> List[str]:
        return [
            "loop = asyncio.get_running_loop()",
            f"return await loop.run_in_executor(self._executor, self.{sync_name})",
        ]

    def async_setter_body(self, pref_field: FieldDescriptor, sync_name: str,
                          binding: TypeBinding) -> List[str]:
        return [
            "loop = asyncio.get_running_loop()",
            f"await loop.run_in_executor(self._executor, self.{sync_name}, value)",
        ]

    def artifact_path(self, artifact: GeneratedArtifact) -> str:
        module = self.sanitizer.module_name(artifact.class_name)
        parts = [p for p in (artifact.package or "").split(".") if p]
        return str(Path(*parts, f"{module}{self.file_extension}"))

    def template_context(self, artifact: GeneratedArtifact) -> Dict[str, Any]:
        context = super().template_context(artifact)
        context.update(
            {
                "store_name_literal": python_string_literal(artifact.store_name),
                "doc_store_name": python_docstring_text(artifact.store_name),
                "doc_aggregate": python_docstring_text(artifact.schema.name),
                "doc_description": python_docstring_text(artifact.schema.description or ""),
                "constructor_signature": self._signature(artifact.constructor),
                "has_async": bool(artifact.schema.async_fields),
                "rendered_methods": [self._render_method(m) for m in artifact.methods],
                "type_hints": self.python_config.type_hints,
            }
        )
        return context

    def _render_method(self, method: GeneratedMethod) -> Dict[str, Any]:
        params = [method.parameter] if method.parameter else []
        signature = self._signature(params)
        if self.python_config.type_hints:
            returns = method.return_type or "None"
            signature = f"{signature} -> {returns}"
        return {
            "name": method.name,
            "is_async": method.is_async,
            "signature": signature,
            "body": method.body,
        }

    def _signature(self, params: List[GeneratedParameter]) -> str:
        rendered = ["self"]
        for param in params:
            text = param.name
            if param.type and self.python_config.type_hints:
                text = f"{text}: {param.type}"
                if param.default is not None:
                    text = f"{text} = {param.default}"
            elif param.default is not None:
                text = f"{text}={param.default}"
            rendered.append(text)
        return f"({', '.join(rendered)})"


def create_python_generator(config: GeneratorConfig = None, **options) -> PythonGenerator:
    """Create a Python generator, optionally overriding configuration fields."""
    if config is None:
        config = load_config("python", custom_config=options or None)

    return PythonGenerator(config)
