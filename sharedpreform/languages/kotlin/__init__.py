"""
Kotlin code generator module.

Generates Android SharedPreferences helpers with suspend variants.
"""

from .config import KotlinConfig
from .generator import KotlinGenerator, create_kotlin_generator
from .naming import create_kotlin_sanitizer

__all__ = [
    "KotlinGenerator",
    "create_kotlin_generator",
    "KotlinConfig",
    "create_kotlin_sanitizer",
]
