"""
Type resolution for preference fields.

Maps each supported semantic type to the store operation used to read and
write it, its zero value, and the rule that turns a raw default-value literal
into a typed default.
"""

import math
import re
import typing
from collections.abc import Hashable
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType, UnionType
from typing import Any, Callable, Optional

from ..markers import Long
from .diagnostics import InvalidDefaultError, UnsupportedTypeError


class PrefType(Enum):
    """Closed set of preference types a store can hold."""

    STRING = "string"
    INT = "int"
    BOOLEAN = "boolean"
    FLOAT = "float"
    LONG = "long"
    STRING_SET = "set<string>"


INT32_RANGE = (-(2**31), 2**31 - 1)
INT64_RANGE = (-(2**63), 2**63 - 1)
FLOAT32_MAX = 3.4028235e38

_INT_PATTERN = re.compile(r"^[+-]?\d+$")
_LONG_PATTERN = re.compile(r"^[+-]?\d+[lL]?$")
_FLOAT_PATTERN = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?[fF]?$")


def _parse_string(literal: str) -> str:
    return literal


def _parse_integer(literal: str, bounds, type_name: str, pattern) -> int:
    token = literal.strip()
    if not pattern.match(token):
        raise InvalidDefaultError(f"Invalid {type_name} default value: {literal!r}")
    value = int(token.rstrip("lL"))
    low, high = bounds
    if not low <= value <= high:
        raise InvalidDefaultError(
            f"Default value {literal!r} is out of range for {type_name}"
        )
    return value


def _parse_int(literal: str) -> int:
    return _parse_integer(literal, INT32_RANGE, "int", _INT_PATTERN)


def _parse_long(literal: str) -> int:
    return _parse_integer(literal, INT64_RANGE, "long", _LONG_PATTERN)


def _parse_float(literal: str) -> float:
    token = literal.strip()
    if not _FLOAT_PATTERN.match(token):
        raise InvalidDefaultError(f"Invalid float default value: {literal!r}")
    value = float(token.rstrip("fF"))
    # Stored as single precision
    if not math.isfinite(value) or abs(value) > FLOAT32_MAX:
        raise InvalidDefaultError(
            f"Default value {literal!r} is out of range for float"
        )
    return value


def _parse_boolean(literal: str) -> bool:
    if literal not in ("true", "false"):
        raise InvalidDefaultError(
            f"Boolean default value must be 'true' or 'false', got {literal!r}"
        )
    return literal == "true"


def _parse_string_set(literal: str) -> None:
    # Declared defaults are ignored for string sets.
    return None


@dataclass(frozen=True)
class TypeBinding:
    """Everything the emitter needs to know about one preference type."""

    pref_type: PrefType
    operation: str  # Store operation suffix, e.g. "string" -> get_string/put_string
    zero_value: Any
    parser: Callable[[str], Any]

    def parse_default(self, literal: Optional[str]) -> Any:
        if literal is None:
            return self.zero_value
        return self.parser(literal)


TYPE_BINDINGS = MappingProxyType(
    {
        PrefType.STRING: TypeBinding(PrefType.STRING, "string", "", _parse_string),
        PrefType.INT: TypeBinding(PrefType.INT, "int", 0, _parse_int),
        PrefType.BOOLEAN: TypeBinding(
            PrefType.BOOLEAN, "boolean", False, _parse_boolean
        ),
        PrefType.FLOAT: TypeBinding(PrefType.FLOAT, "float", 0.0, _parse_float),
        PrefType.LONG: TypeBinding(PrefType.LONG, "long", 0, _parse_long),
        PrefType.STRING_SET: TypeBinding(
            PrefType.STRING_SET, "string_set", None, _parse_string_set
        ),
    }
)

# Type names accepted in schema documents, including the JVM spellings
TYPE_NAME_ALIASES = MappingProxyType(
    {
        "string": PrefType.STRING,
        "str": PrefType.STRING,
        "java.lang.String": PrefType.STRING,
        "kotlin.String": PrefType.STRING,
        "int": PrefType.INT,
        "integer": PrefType.INT,
        "java.lang.Integer": PrefType.INT,
        "kotlin.Int": PrefType.INT,
        "boolean": PrefType.BOOLEAN,
        "bool": PrefType.BOOLEAN,
        "java.lang.Boolean": PrefType.BOOLEAN,
        "kotlin.Boolean": PrefType.BOOLEAN,
        "float": PrefType.FLOAT,
        "java.lang.Float": PrefType.FLOAT,
        "kotlin.Float": PrefType.FLOAT,
        "long": PrefType.LONG,
        "java.lang.Long": PrefType.LONG,
        "kotlin.Long": PrefType.LONG,
        "set<string>": PrefType.STRING_SET,
        "set[str]": PrefType.STRING_SET,
        "string_set": PrefType.STRING_SET,
        "java.util.Set<java.lang.String>": PrefType.STRING_SET,
        "kotlin.collections.Set<kotlin.String>": PrefType.STRING_SET,
    }
)

_PYTHON_TYPES = {
    str: PrefType.STRING,
    int: PrefType.INT,
    bool: PrefType.BOOLEAN,
    float: PrefType.FLOAT,
    Long: PrefType.LONG,
}

_SET_ORIGINS = (set, frozenset)


def _resolve_python_type(declared: Any) -> Optional[PrefType]:
    if isinstance(declared, Hashable) and declared in _PYTHON_TYPES:
        return _PYTHON_TYPES[declared]

    origin = typing.get_origin(declared)
    args = typing.get_args(declared)

    # Optional[X] / X | None
    if origin is typing.Union or isinstance(declared, UnionType):
        non_none = [arg for arg in args if arg is not type(None)]
        if len(non_none) == 1:
            return _resolve_python_type(non_none[0])
        return None

    if origin in _SET_ORIGINS and args == (str,):
        return PrefType.STRING_SET

    return None


def resolve_type(declared: Any, field_name: str = "") -> PrefType:
    """
    Resolve a declared field type to a PrefType.

    Args:
        declared: PrefType, Python type annotation, or type name string
        field_name: Field name used in the error message

    Returns:
        The matching PrefType

    Raises:
        UnsupportedTypeError: If the type is outside the supported set
    """
    if isinstance(declared, PrefType):
        return declared

    if isinstance(declared, str):
        key = declared.strip()
        resolved = TYPE_NAME_ALIASES.get(key) or TYPE_NAME_ALIASES.get(key.lower())
    else:
        resolved = _resolve_python_type(declared)

    if resolved is None:
        where = f" for field '{field_name}'" if field_name else ""
        raise UnsupportedTypeError(f"Unsupported type{where}: {_type_label(declared)}")

    return resolved


def get_binding(pref_type: PrefType) -> TypeBinding:
    """Return the binding for a resolved type."""
    return TYPE_BINDINGS[pref_type]


def parse_default(pref_type: PrefType, literal: Optional[str]) -> Any:
    """
    Convert a raw default-value literal into a typed default.

    A missing literal yields the type's zero value. String sets always
    resolve to None.
    """
    return TYPE_BINDINGS[pref_type].parse_default(literal)


def _type_label(declared: Any) -> str:
    if isinstance(declared, type):
        return declared.__name__
    return str(declared)
