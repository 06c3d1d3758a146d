"""
Core schema representation for code generation.

Turns a declared preference aggregate (a class tagged with the marker
annotations, or a JSON schema document) into an immutable SchemaDescriptor
that generators work with consistently.
"""

import json
import typing
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from ..logging_config import get_logger
from ..markers import DefaultValue, PrefKey, store_of
from .diagnostics import (
    DuplicateKeyError,
    EmptySchemaError,
    GeneratorError,
    SchemaError,
)
from .types import PrefType, parse_default, resolve_type

logger = get_logger(__name__)


@dataclass(frozen=True)
class FieldDescriptor:
    """Represents a single stored preference."""

    name: str
    key: str
    type: PrefType
    default: Optional[str] = None  # Raw literal, interpreted per type
    is_async: bool = False

    @property
    def default_value(self) -> Any:
        """Typed default, or the type's zero value when no literal is declared."""
        return parse_default(self.type, self.default)


@dataclass(frozen=True)
class SchemaDescriptor:
    """Represents one preference aggregate."""

    name: str
    package: str
    store_name: str
    fields: Tuple[FieldDescriptor, ...] = field(default_factory=tuple)
    description: Optional[str] = None

    def get_field(self, name: str) -> Optional[FieldDescriptor]:
        """Get field by name."""
        for pref_field in self.fields:
            if pref_field.name == name:
                return pref_field
        return None

    @property
    def async_fields(self) -> List[FieldDescriptor]:
        return [f for f in self.fields if f.is_async]

    def duplicate_keys(self) -> Dict[str, List[str]]:
        """Map each storage key used more than once to the fields using it."""
        by_key: Dict[str, List[str]] = {}
        for pref_field in self.fields:
            by_key.setdefault(pref_field.key, []).append(pref_field.name)
        return {key: names for key, names in by_key.items() if len(names) > 1}

    def validate(self, allow_duplicate_keys: bool = False) -> None:
        """
        Check structural invariants.

        Raises:
            EmptySchemaError: If no field carries a storage key
            DuplicateKeyError: If storage keys repeat and duplicates are not allowed
        """
        if not self.fields:
            raise EmptySchemaError(
                f"No fields annotated with PrefKey found in {self.name}",
                aggregate=self.name,
            )

        if not allow_duplicate_keys:
            duplicates = self.duplicate_keys()
            if duplicates:
                details = ", ".join(
                    f"'{key}' ({', '.join(names)})"
                    for key, names in sorted(duplicates.items())
                )
                raise DuplicateKeyError(
                    f"Duplicate storage keys in {self.name}: {details}",
                    aggregate=self.name,
                )


def extract_schema(cls: type, package: Optional[str] = None) -> SchemaDescriptor:
    """
    Build a SchemaDescriptor from a class tagged with PrefStore.

    Fields are taken in declaration order from ``typing.Annotated`` hints that
    carry a PrefKey; other attributes are ignored.

    Args:
        cls: The aggregate class
        package: Target package, defaults to the class's module

    Returns:
        SchemaDescriptor for the aggregate

    Raises:
        SchemaError: If the class is not tagged with PrefStore
        EmptySchemaError: If no field carries a PrefKey
        UnsupportedTypeError: If a tagged field has an unsupported type
    """
    store = store_of(cls)
    name = getattr(cls, "__name__", str(cls))
    if store is None:
        raise SchemaError(f"{name} is not tagged with PrefStore", aggregate=name)
    if not isinstance(store.name, str) or not store.name:
        raise SchemaError(f"Invalid store name in {name}", aggregate=name)

    try:
        hints = typing.get_type_hints(cls, include_extras=True)
    except Exception as e:
        raise SchemaError(
            f"Cannot read annotations of {name}: {e}", aggregate=name
        ) from e

    fields = []
    for attr_name, hint in hints.items():
        if typing.get_origin(hint) is not typing.Annotated:
            continue

        declared, *metadata = typing.get_args(hint)
        pref_key = _find_marker(metadata, PrefKey)
        if pref_key is None:
            continue
        if not isinstance(pref_key.key, str) or not pref_key.key:
            raise SchemaError(
                f"PrefKey of {name}.{attr_name} must be a non-empty string",
                aggregate=name,
            )
        if not isinstance(pref_key.async_, bool):
            raise SchemaError(
                f"async_ of {name}.{attr_name} must be True or False", aggregate=name
            )
        default = _find_marker(metadata, DefaultValue)

        fields.append(
            _build_field(
                name,
                attr_name,
                pref_key.key,
                declared,
                _literal(default.value) if default else None,
                pref_key.async_,
            )
        )

    logger.debug("Extracted %d field(s) from %s", len(fields), name)

    schema = SchemaDescriptor(
        name=name,
        package=package if package is not None else cls.__module__,
        store_name=store.name,
        fields=tuple(fields),
        description=_first_doc_line(cls),
    )
    if not schema.fields:
        raise EmptySchemaError(
            f"No fields annotated with PrefKey found in {name}", aggregate=name
        )
    return schema


def schema_from_dict(
    data: Dict[str, Any], package: Optional[str] = None
) -> SchemaDescriptor:
    """
    Build a SchemaDescriptor from a schema document.

    Expected shape::

        {
          "name": "Settings",
          "store": "Settings",
          "package": "app.prefs",
          "fields": [
            {"name": "theme", "key": "theme", "type": "string", "default": "light"},
            {"name": "tags", "key": "tags", "type": "set<string>", "async": true}
          ]
        }

    ``store`` defaults to ``name``; ``package`` falls back to the argument.
    """
    if not isinstance(data, dict):
        raise SchemaError(f"Aggregate must be a JSON object, got {type(data).__name__}")

    name = data.get("name")
    if not name or not isinstance(name, str):
        raise SchemaError("Aggregate is missing a 'name'")

    store_name = data.get("store", name)
    if not isinstance(store_name, str) or not store_name:
        raise SchemaError(f"Invalid store name in {name}", aggregate=name)

    if data.get("package") is not None:
        package = data["package"]
    if package is None:
        package = ""
    if not isinstance(package, str):
        raise SchemaError(f"'package' of {name} must be a string", aggregate=name)

    description = data.get("description")
    if description is not None and not isinstance(description, str):
        raise SchemaError(f"'description' of {name} must be a string", aggregate=name)

    raw_fields = data.get("fields", [])
    if not isinstance(raw_fields, list):
        raise SchemaError(f"'fields' of {name} must be a list", aggregate=name)

    fields = []
    for index, raw in enumerate(raw_fields):
        if not isinstance(raw, dict):
            raise SchemaError(f"Field #{index} of {name} must be an object", aggregate=name)
        if "key" not in raw:
            # Fields without a storage key are not preferences.
            continue
        fields.append(_field_from_dict(name, index, raw))

    schema = SchemaDescriptor(
        name=name,
        package=package,
        store_name=store_name,
        fields=tuple(fields),
        description=description,
    )
    if not schema.fields:
        raise EmptySchemaError(
            f"No fields annotated with PrefKey found in {name}", aggregate=name
        )
    return schema


def _field_from_dict(aggregate: str, index: int, raw: Dict[str, Any]) -> FieldDescriptor:
    key = raw["key"]
    if not isinstance(key, str) or not key:
        raise SchemaError(
            f"Key of field #{index} in {aggregate} must be a non-empty string",
            aggregate=aggregate,
        )

    field_name = raw.get("name")
    if field_name is None:
        field_name = key
    if not isinstance(field_name, str) or not field_name:
        raise SchemaError(
            f"Name of field #{index} in {aggregate} must be a non-empty string",
            aggregate=aggregate,
        )

    declared = raw.get("type", "string")
    if not isinstance(declared, str):
        raise SchemaError(
            f"Type of field '{field_name}' in {aggregate} must be a string",
            aggregate=aggregate,
        )

    is_async = raw.get("async", False)
    if not isinstance(is_async, bool):
        raise SchemaError(
            f"'async' of field '{field_name}' in {aggregate} must be true or false",
            aggregate=aggregate,
        )

    default = raw.get("default")
    if isinstance(default, (dict, list)):
        raise SchemaError(
            f"Default of field '{field_name}' in {aggregate} must be a scalar",
            aggregate=aggregate,
        )

    return _build_field(
        aggregate,
        field_name,
        key,
        declared,
        None if default is None else _literal(default),
        is_async,
    )


def load_schema_documents(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """
    Load the aggregate documents stored in a JSON file.

    The file holds either one aggregate object or ``{"aggregates": [...]}``.
    A top-level ``package`` is inherited by aggregates that do not set one.
    """
    path = Path(path)
    if not path.exists():
        raise SchemaError(f"Schema file not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise SchemaError(f"Invalid JSON in schema file {path}: {e}") from e
    except OSError as e:
        raise SchemaError(f"Error reading schema file {path}: {e}") from e

    if isinstance(document, dict) and "aggregates" in document:
        aggregates = document["aggregates"]
        if not isinstance(aggregates, list):
            raise SchemaError(f"'aggregates' in {path} must be a list")
        for index, item in enumerate(aggregates):
            if not isinstance(item, dict):
                raise SchemaError(
                    f"Aggregate #{index} in {path} must be a JSON object, "
                    f"got {type(item).__name__}"
                )
        package = document.get("package")
        if package:
            aggregates = [{"package": package, **item} for item in aggregates]
        return aggregates

    return [document]


def _build_field(
    aggregate: str,
    name: str,
    key: str,
    declared: Any,
    default: Optional[str],
    is_async: bool,
) -> FieldDescriptor:
    try:
        pref_type = resolve_type(declared, name)
        # Fail at extraction time on literals the type cannot hold
        parse_default(pref_type, default)
    except GeneratorError as e:
        e.aggregate = e.aggregate or aggregate
        raise
    return FieldDescriptor(
        name=name,
        key=key,
        type=pref_type,
        default=default,
        is_async=is_async,
    )


def _find_marker(metadata: List[Any], marker_type: type):
    for item in metadata:
        if isinstance(item, marker_type):
            return item
    return None


def _literal(value: Any) -> str:
    # Numbers and booleans may be given natively
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _first_doc_line(cls: type) -> Optional[str]:
    doc = cls.__doc__
    if not doc:
        return None
    # dataclass() fills in a signature-like docstring
    if doc.startswith(f"{cls.__name__}("):
        return None
    return doc.strip().splitlines()[0]


AggregateSource = Union[SchemaDescriptor, type, Dict[str, Any]]


def to_schema(source: AggregateSource) -> SchemaDescriptor:
    """Normalize any supported aggregate declaration into a SchemaDescriptor."""
    if isinstance(source, SchemaDescriptor):
        return source
    if isinstance(source, dict):
        return schema_from_dict(source)
    if isinstance(source, type):
        return extract_schema(source)
    raise SchemaError(f"Cannot build a schema from {type(source).__name__}")
