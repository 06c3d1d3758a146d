"""
Core code generation components.

Provides the schema model, type resolution, diagnostics and the base
classes used by all language generators.
"""

from .config import ConfigError, ConfigManager, GeneratorConfig, load_config
from .diagnostics import (
    Diagnostic,
    DiagnosticsReporter,
    DuplicateKeyError,
    EmissionIOError,
    EmptySchemaError,
    GeneratorError,
    InvalidDefaultError,
    SchemaError,
    Severity,
    UnsupportedTypeError,
)
from .generator import (
    CodeGenerator,
    GeneratedArtifact,
    GeneratedMethod,
    GenerationResult,
    generate_code,
)
from .naming import MethodCase, NameSanitizer
from .schema import (
    FieldDescriptor,
    SchemaDescriptor,
    extract_schema,
    load_schema_documents,
    schema_from_dict,
    to_schema,
)
from .sink import FileSystemSink, MemorySink, OutputSink
from .templates import TemplateEngine, TemplateError, create_template_engine
from .types import TYPE_BINDINGS, PrefType, TypeBinding, get_binding, resolve_type

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratedArtifact",
    "GeneratedMethod",
    "GenerationResult",
    "generate_code",
    # Schema extraction
    "FieldDescriptor",
    "SchemaDescriptor",
    "extract_schema",
    "load_schema_documents",
    "schema_from_dict",
    "to_schema",
    # Type resolution
    "PrefType",
    "TypeBinding",
    "TYPE_BINDINGS",
    "get_binding",
    "resolve_type",
    # Diagnostics
    "Diagnostic",
    "DiagnosticsReporter",
    "Severity",
    "GeneratorError",
    "SchemaError",
    "EmptySchemaError",
    "DuplicateKeyError",
    "UnsupportedTypeError",
    "InvalidDefaultError",
    "EmissionIOError",
    # Naming utilities
    "NameSanitizer",
    "MethodCase",
    # Output
    "OutputSink",
    "FileSystemSink",
    "MemorySink",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
