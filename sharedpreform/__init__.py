"""
sharedpreform

Generates typed preference accessor classes from declared preference
aggregates.
"""

from .core.config import ConfigManager, GeneratorConfig, load_config
from .core.diagnostics import (
    DiagnosticsReporter,
    EmissionIOError,
    EmptySchemaError,
    GeneratorError,
    UnsupportedTypeError,
)
from .core.generator import CodeGenerator, GenerationResult, generate_code
from .core.schema import FieldDescriptor, SchemaDescriptor, extract_schema
from .core.sink import FileSystemSink, MemorySink
from .markers import DefaultValue, Long, PrefKey, PrefStore
from .registry import GeneratorRegistry, get_generator, list_supported_languages

# Version info
__version__ = "0.1.0"


def generate_accessors(sources, language="python", config=None, output_dir=None):
    """
    Generate accessor classes for several aggregates.

    Args:
        sources: Tagged classes, schema documents or SchemaDescriptors
        language: Target language name or alias
        config: Generator configuration (GeneratorConfig, dict or file path)
        output_dir: Directory to write files to, defaulting to the configured
            output_dir; files are kept in memory when neither is set

    Returns:
        GenerationResult with generated artifacts and diagnostics
    """
    generator = get_generator(language, config)
    output_dir = output_dir or generator.config.output_dir
    sink = FileSystemSink(output_dir) if output_dir else None
    return generate_code(generator, sources, sink)


# Export main interfaces
__all__ = [
    # Markers
    "PrefStore",
    "PrefKey",
    "DefaultValue",
    "Long",
    # Generation
    "CodeGenerator",
    "GenerationResult",
    "GeneratorRegistry",
    "generate_accessors",
    "generate_code",
    "get_generator",
    "list_supported_languages",
    # Schema
    "FieldDescriptor",
    "SchemaDescriptor",
    "extract_schema",
    # Output
    "FileSystemSink",
    "MemorySink",
    # Configuration
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    # Diagnostics
    "DiagnosticsReporter",
    "GeneratorError",
    "EmptySchemaError",
    "UnsupportedTypeError",
    "EmissionIOError",
]
