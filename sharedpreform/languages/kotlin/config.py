"""
Kotlin-specific configuration and type mappings.
"""

from ...core.types import PrefType

KOTLIN_TYPE_MAP = {
    PrefType.STRING: "String?",
    PrefType.INT: "Int",
    PrefType.BOOLEAN: "Boolean",
    PrefType.FLOAT: "Float",
    PrefType.LONG: "Long",
    PrefType.STRING_SET: "Set<String?>?",
}

# Imports every generated file carries besides the context class
KOTLIN_BASE_IMPORTS = [
    "android.content.SharedPreferences",
    "kotlinx.coroutines.CoroutineDispatcher",
    "kotlinx.coroutines.Dispatchers",
    "kotlinx.coroutines.withContext",
]


class KotlinConfig:
    """Kotlin-specific configuration."""

    def __init__(self, **kwargs):
        """Initialize Kotlin configuration."""
        self.context_class = kwargs.get("context_class", "android.content.Context")
        self.dispatcher = kwargs.get("dispatcher", "Dispatchers.IO")

        self.type_map = KOTLIN_TYPE_MAP.copy()

    @property
    def context_type(self) -> str:
        """Simple name of the context class."""
        return self.context_class.rsplit(".", 1)[-1]

    @property
    def imports(self) -> list[str]:
        return sorted({self.context_class, *KOTLIN_BASE_IMPORTS})

    def get_kotlin_type(self, pref_type: PrefType) -> str:
        return self.type_map[pref_type]
