"""
Naming utilities for safe code generation.

Derives accessor class and method names from aggregate and field names,
and handles case conversions and keyword conflicts for target languages.
"""

import re
from typing import Dict, List, Set
from enum import Enum


class MethodCase(Enum):
    """Accessor method naming styles."""
    CAMEL = "camel"   # getUserName / getUserNameAsync
    SNAKE = "snake"   # get_user_name / get_user_name_async


def capitalize_first(name: str) -> str:
    """Upper-case the first character only, leaving the rest untouched."""
    return name[:1].upper() + name[1:]


def to_snake_case(name: str) -> str:
    """Convert to snake_case."""
    name = name.replace('-', '_')
    name = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', name)
    name = re.sub(r'([a-z0-9])([A-Z])', r'\1_\2', name)
    name = re.sub(r'_+', '_', name.lower())
    return name.strip('_')


def to_pascal_case(name: str) -> str:
    """Convert to PascalCase, keeping existing inner capitals."""
    parts = re.split(r'[_\-\s]+', name)
    return ''.join(capitalize_first(part) for part in parts if part)


class NameSanitizer:
    """Handles name sanitization and accessor method naming."""

    def __init__(self, reserved_words: Set[str] = None, builtin_types: Set[str] = None):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
            builtin_types: Set of builtin type names that might conflict
        """
        self.reserved_words = reserved_words or set()
        self.builtin_types = builtin_types or set()

    def class_name(self, aggregate_name: str, suffix: str = "SharedPref") -> str:
        """Name of the generated accessor class."""
        return f"{to_pascal_case(self.clean(aggregate_name))}{suffix}"

    def module_name(self, class_name: str) -> str:
        """File stem for a generated class in a snake_case module convention."""
        return self.escape(to_snake_case(class_name))

    def accessor_name(self, prefix: str, field_name: str,
                      case: MethodCase = MethodCase.CAMEL, is_async: bool = False) -> str:
        """
        Derive an accessor method name from a field name.

        Camel style joins the PascalCase field name to the prefix and appends
        ``Async`` for coroutine variants; snake style joins with underscores.
        """
        cleaned = self.clean(field_name)
        if case == MethodCase.SNAKE:
            name = f"{prefix}_{to_snake_case(cleaned)}"
            return f"{name}_async" if is_async else name
        name = f"{prefix}{to_pascal_case(cleaned)}"
        return f"{name}Async" if is_async else name

    def clean(self, name: str) -> str:
        """Basic name cleanup - replace characters invalid in identifiers."""
        cleaned = re.sub(r'[^a-zA-Z0-9_]', '_', name).strip('_')
        if not cleaned:
            cleaned = "field"
        if cleaned[0].isdigit():
            cleaned = f"_{cleaned}"
        return cleaned

    def escape(self, name: str, suffix: str = "_") -> str:
        """Append a suffix to names that clash with keywords or builtins."""
        if name in self.reserved_words or name in self.builtin_types:
            return f"{name}{suffix}"
        return name

    def find_collisions(self, field_names: List[str],
                        case: MethodCase = MethodCase.CAMEL) -> Dict[str, List[str]]:
        """
        Group fields whose derived getter names coincide.

        Accessor names are derived purely from field names, so ``theme`` and
        ``Theme`` map to the same method. Nothing is renamed; callers report.
        """
        groups: Dict[str, List[str]] = {}
        for name in field_names:
            groups.setdefault(self.accessor_name("get", name, case), []).append(name)
        return {key: group for key, group in groups.items() if len(group) > 1}
