"""
Python code generator module.

Generates typed accessor classes over a key-value store, with asyncio
coroutine variants for fields declared async.
"""

from .config import PythonConfig
from .generator import PythonGenerator, create_python_generator
from .naming import create_python_sanitizer

__all__ = [
    # Generator
    "PythonGenerator",
    "create_python_generator",
    # Naming
    "create_python_sanitizer",
    # Configuration
    "PythonConfig",
]
