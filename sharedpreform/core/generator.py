"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement, the
artifact model they produce, and the generation pass that drives them
across several aggregates.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from ..logging_config import get_logger
from .config import GeneratorConfig
from .diagnostics import (
    Diagnostic,
    DiagnosticsReporter,
    EmptySchemaError,
    GeneratorError,
    Severity,
)
from .naming import MethodCase, NameSanitizer
from .schema import AggregateSource, FieldDescriptor, SchemaDescriptor, to_schema
from .sink import OutputSink
from .templates import TemplateEngine, TemplateError, create_template_engine
from .types import PrefType, TypeBinding, get_binding

logger = get_logger(__name__)


@dataclass(frozen=True)
class GeneratedParameter:
    """A parameter of a generated constructor or method."""

    name: str
    type: str
    default: Optional[str] = None


@dataclass(frozen=True)
class GeneratedMethod:
    """One generated accessor method."""

    name: str
    kind: str  # "get" or "set"
    field: FieldDescriptor
    body: List[str]
    parameter: Optional[GeneratedParameter] = None
    return_type: Optional[str] = None
    is_async: bool = False


@dataclass
class GeneratedArtifact:
    """The emitted accessor type for one aggregate."""

    class_name: str
    package: str
    store_name: str
    schema: SchemaDescriptor
    constructor: List[GeneratedParameter] = field(default_factory=list)
    methods: List[GeneratedMethod] = field(default_factory=list)
    source: str = ""
    path: str = ""
    location: Optional[str] = None

    @property
    def method_names(self) -> List[str]:
        return [method.name for method in self.methods]


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self.sanitizer = self.create_sanitizer()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'python', 'kotlin')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.py', '.kt')."""
        pass

    @property
    @abstractmethod
    def template_name(self) -> str:
        """Template used to render one accessor class."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Subclasses should override this to provide their template directory.
        Return None to use in-memory templates only.
        """
        return None

    def create_sanitizer(self) -> NameSanitizer:
        """Name sanitizer for the target language."""
        return NameSanitizer()

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @property
    def method_case(self) -> MethodCase:
        try:
            return MethodCase(self.config.method_case)
        except ValueError:
            return MethodCase.CAMEL

    # Language hooks

    @abstractmethod
    def type_name(self, binding: TypeBinding) -> str:
        """Language type used for parameters and return values."""
        pass

    @abstractmethod
    def default_literal(self, pref_field: FieldDescriptor) -> str:
        """Source literal for the field's resolved default."""
        pass

    @abstractmethod
    def build_constructor(self, schema: SchemaDescriptor) -> List[GeneratedParameter]:
        """Constructor parameters: store identity plus execution context."""
        pass

    @abstractmethod
    def getter_body(self, pref_field: FieldDescriptor, binding: TypeBinding) -> List[str]:
        pass

    @abstractmethod
    def setter_body(self, pref_field: FieldDescriptor, binding: TypeBinding) -> List[str]:
        pass

    @abstractmethod
    def async_getter_body(self, pref_field: FieldDescriptor, sync_name: str,
                          binding: TypeBinding) -> List[str]:
        pass

    @abstractmethod
    def async_setter_body(self, pref_field: FieldDescriptor, sync_name: str,
                          binding: TypeBinding) -> List[str]:
        pass

    @abstractmethod
    def artifact_path(self, artifact: GeneratedArtifact) -> str:
        """Relative output path of the generated file."""
        pass

    def template_context(self, artifact: GeneratedArtifact) -> Dict[str, Any]:
        """Variables handed to the class template."""
        return {
            "artifact": artifact,
            "schema": artifact.schema,
            "class_name": artifact.class_name,
            "package": artifact.package,
            "store_name": artifact.store_name,
            "constructor": artifact.constructor,
            "methods": artifact.methods,
            "add_comments": self.config.add_comments,
            "indent": " " * self.config.indent_size,
        }

    # Emission

    def generate(self, schema: SchemaDescriptor) -> GeneratedArtifact:
        """
        Build and render the accessor class for one aggregate.

        Args:
            schema: Aggregate to generate code for

        Returns:
            GeneratedArtifact with rendered source and output path
        """
        artifact = self.build_artifact(schema)
        code = self.render_template(self.template_name, self.template_context(artifact))
        artifact.source = self.format_code(code)
        artifact.path = self.artifact_path(artifact)
        logger.debug(
            "Rendered %s (%d methods)", artifact.class_name, len(artifact.methods)
        )
        return artifact

    def build_artifact(self, schema: SchemaDescriptor) -> GeneratedArtifact:
        """Derive the class, constructor and methods for an aggregate."""
        artifact = GeneratedArtifact(
            class_name=self.sanitizer.class_name(schema.name, self.config.class_suffix),
            package=self.config.package_name or schema.package,
            store_name=schema.store_name,
            schema=schema,
            constructor=self.build_constructor(schema),
        )
        for pref_field in schema.fields:
            artifact.methods.extend(self.build_methods(pref_field))
        return artifact

    def build_methods(self, pref_field: FieldDescriptor) -> List[GeneratedMethod]:
        """Getter and setter, plus their async variants when requested."""
        binding = get_binding(pref_field.type)
        value_type = self.type_name(binding)
        value_param = GeneratedParameter("value", value_type)
        case = self.method_case

        getter = self.sanitizer.accessor_name("get", pref_field.name, case)
        setter = self.sanitizer.accessor_name("set", pref_field.name, case)

        methods = [
            GeneratedMethod(
                name=getter,
                kind="get",
                field=pref_field,
                body=self.getter_body(pref_field, binding),
                return_type=value_type,
            ),
            GeneratedMethod(
                name=setter,
                kind="set",
                field=pref_field,
                body=self.setter_body(pref_field, binding),
                parameter=value_param,
            ),
        ]

        if pref_field.is_async:
            methods.append(
                GeneratedMethod(
                    name=self.sanitizer.accessor_name("get", pref_field.name, case, True),
                    kind="get",
                    field=pref_field,
                    body=self.async_getter_body(pref_field, getter, binding),
                    return_type=value_type,
                    is_async=True,
                )
            )
            methods.append(
                GeneratedMethod(
                    name=self.sanitizer.accessor_name("set", pref_field.name, case, True),
                    kind="set",
                    field=pref_field,
                    body=self.async_setter_body(pref_field, setter, binding),
                    parameter=value_param,
                    is_async=True,
                )
            )

        return methods

    def validate_schema(self, schema: SchemaDescriptor) -> List[str]:
        """
        Check an aggregate for issues that do not stop generation.

        Language generators may override this to add their own checks.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        collisions = self.sanitizer.find_collisions(
            [f.name for f in schema.fields], self.method_case
        )
        for method_name, names in sorted(collisions.items()):
            warnings.append(
                f"Fields {', '.join(names)} all generate accessor {method_name}"
            )

        if self.config.allow_duplicate_keys:
            for key, names in sorted(schema.duplicate_keys().items()):
                warnings.append(f"Storage key '{key}' shared by {', '.join(names)}")

        for pref_field in schema.fields:
            if pref_field.type is PrefType.STRING_SET and pref_field.default is not None:
                warnings.append(
                    f"Default value of string set field '{pref_field.name}' is ignored"
                )

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        # Basic cleanup - remove excessive blank lines
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:  # Allow max 2 consecutive blank lines
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        artifacts: List[GeneratedArtifact] = None,
        diagnostics: List[Diagnostic] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            artifacts: Artifacts generated successfully
            diagnostics: Everything reported during the pass
            metadata: Additional metadata about generation
        """
        self.artifacts = artifacts or []
        self.diagnostics = diagnostics or []
        self.metadata = metadata or {}

    @property
    def errors(self) -> List[str]:
        return [str(d) for d in self.diagnostics if d.severity is Severity.ERROR]

    @property
    def warnings(self) -> List[str]:
        return [str(d) for d in self.diagnostics if d.severity is Severity.WARNING]

    @property
    def success(self) -> bool:
        return not self.errors

    @property
    def code(self) -> str:
        """All generated sources, concatenated."""
        return "\n\n".join(artifact.source for artifact in self.artifacts)

    def get_artifact(self, aggregate_name: str) -> Optional[GeneratedArtifact]:
        for artifact in self.artifacts:
            if artifact.schema.name == aggregate_name:
                return artifact
        return None


def generate_code(
    generator: CodeGenerator,
    sources: Iterable[AggregateSource],
    sink: Optional[OutputSink] = None,
    reporter: Optional[DiagnosticsReporter] = None,
) -> GenerationResult:
    """
    Run one generation pass over several aggregates.

    Each aggregate is extracted, validated, rendered and written on its own.
    Failures are reported through the diagnostics reporter and never abort
    the pass, except that ``stop_on_empty_schema`` stops it at the first
    aggregate without tagged fields.

    Args:
        generator: Code generator instance
        sources: SchemaDescriptors, tagged classes or schema documents
        sink: Where rendered files are written (none keeps them in memory only)
        reporter: Diagnostics reporter, created if not given

    Returns:
        GenerationResult with artifacts, diagnostics and metadata
    """
    reporter = reporter or DiagnosticsReporter()
    config = generator.config
    artifacts = []
    processed = 0

    for source in sources:
        processed += 1
        try:
            schema = to_schema(source)
            schema.validate(allow_duplicate_keys=config.allow_duplicate_keys)

            for warning in generator.validate_schema(schema):
                reporter.warning(warning, schema.name)

            artifact = generator.generate(schema)
            if sink is not None:
                artifact.location = sink.write(artifact.path, artifact.source)
            artifacts.append(artifact)
            reporter.note(f"Generated {artifact.class_name}", schema.name)

        except EmptySchemaError as e:
            reporter.report_exception(e)
            if config.stop_on_empty_schema:
                reporter.note("Skipping remaining aggregates after empty schema")
                break
        except GeneratorError as e:
            # Sinks do not know which aggregate they are writing
            e.aggregate = e.aggregate or _label(source)
            reporter.report_exception(e)
        except TemplateError as e:
            reporter.error(f"Failed to generate code: {e}", _label(source))

    metadata = {
        "language": generator.language_name,
        "file_extension": generator.file_extension,
        "aggregate_count": processed,
        "generated_count": len(artifacts),
        "method_count": sum(len(a.methods) for a in artifacts),
        "error_count": len(reporter.errors),
    }

    return GenerationResult(artifacts, list(reporter.diagnostics), metadata)


def _label(source: AggregateSource) -> Optional[str]:
    if isinstance(source, SchemaDescriptor):
        return source.name
    if isinstance(source, dict):
        name = source.get("name")
        return name if isinstance(name, str) else None
    return getattr(source, "__name__", None)
