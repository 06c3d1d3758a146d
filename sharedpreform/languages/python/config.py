"""
Python-specific configuration and type mappings.
"""

from ...core.types import PrefType

# Annotations used for parameters and return values
PYTHON_TYPE_MAP = {
    PrefType.STRING: "str | None",
    PrefType.INT: "int",
    PrefType.BOOLEAN: "bool",
    PrefType.FLOAT: "float",
    PrefType.LONG: "int",
    PrefType.STRING_SET: "set[str] | None",
}


class PythonConfig:
    """Python-specific configuration."""

    def __init__(self, **kwargs):
        """Initialize Python configuration."""
        # Emit parameter and return annotations
        self.type_hints = kwargs.get("type_hints", True)

        self.type_map = PYTHON_TYPE_MAP.copy()

    def get_python_type(self, pref_type: PrefType) -> str:
        """Get the annotation for a preference type."""
        return self.type_map[pref_type]
