"""
Kotlin-specific naming utilities.
"""

from ...core.naming import NameSanitizer


# Hard keywords cannot be used as identifiers without backticks
KOTLIN_HARD_KEYWORDS = {
    "as",
    "break",
    "class",
    "continue",
    "do",
    "else",
    "false",
    "for",
    "fun",
    "if",
    "in",
    "interface",
    "is",
    "null",
    "object",
    "package",
    "return",
    "super",
    "this",
    "throw",
    "true",
    "try",
    "typealias",
    "typeof",
    "val",
    "var",
    "when",
    "while",
}


def quote_identifier(name: str) -> str:
    """Wrap a keyword in backticks so it can be used as an identifier."""
    if name in KOTLIN_HARD_KEYWORDS:
        return f"`{name}`"
    return name


def create_kotlin_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Kotlin."""
    return NameSanitizer(KOTLIN_HARD_KEYWORDS)
