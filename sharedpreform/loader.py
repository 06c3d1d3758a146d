"""Utility functions for locating preference aggregate declarations.

Sources given on the command line are either JSON schema files or Python
import references (``package.module:ClassName`` or ``package.module``).
"""

import importlib
import sys
from pathlib import Path
from typing import Any

from .core.diagnostics import SchemaError
from .core.schema import load_schema_documents
from .logging_config import get_logger
from .markers import store_of

logger = get_logger(__name__)


class SourceLoaderError(Exception):
    """Custom exception for source loading errors."""

    pass


def is_schema_file(source: str) -> bool:
    """Whether a source string names a JSON schema file."""
    return source.lower().endswith(".json") or Path(source).is_file()


def load_schema_file(file_path: str | Path) -> list[dict[str, Any]]:
    """Load the aggregate documents from a JSON schema file.

    Args:
        file_path: Path to the schema file.

    Returns:
        List of aggregate documents.

    Raises:
        SourceLoaderError: If the file is missing or not a valid schema file.
    """
    logger.debug("Loading schema file: %s", file_path)
    try:
        documents = load_schema_documents(file_path)
    except SchemaError as e:
        logger.error("%s", e.message)
        raise SourceLoaderError(e.message) from e

    logger.info("Loaded %d aggregate(s) from %s", len(documents), file_path)
    return documents


def is_pref_store(obj: Any) -> bool:
    """Whether an object is a class tagged with PrefStore."""
    return store_of(obj) is not None


def load_module_aggregates(reference: str) -> list[type]:
    """Import tagged aggregate classes from a ``module[:Class]`` reference.

    Without a class name every tagged class defined in the module is
    returned, in definition order.

    Args:
        reference: Import reference, e.g. ``app.prefs:Settings``.

    Returns:
        List of aggregate classes.

    Raises:
        SourceLoaderError: If the module cannot be imported or the class is
            missing or not tagged.
    """
    module_name, _, class_name = reference.partition(":")
    logger.debug("Importing aggregates from %s", reference)

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        logger.error("Cannot import module %s: %s", module_name, e)
        raise SourceLoaderError(f"Cannot import module {module_name}: {e}") from e

    if class_name:
        cls = getattr(module, class_name, None)
        if cls is None:
            raise SourceLoaderError(f"Module {module_name} has no attribute {class_name}")
        if not is_pref_store(cls):
            raise SourceLoaderError(f"{reference} is not tagged with PrefStore")
        return [cls]

    classes = [
        obj
        for obj in vars(module).values()
        if is_pref_store(obj) and obj.__module__ == module.__name__
    ]
    if not classes:
        logger.warning("No PrefStore classes found in %s", module_name)
    return classes


def load_sources(
    sources: list[str], search_path: str | Path | None = None
) -> list[Any]:
    """Resolve source strings into aggregate declarations.

    Args:
        sources: JSON file paths or Python import references.
        search_path: Directory prepended to ``sys.path`` for imports.

    Returns:
        Schema documents and tagged classes, in the order given.

    Raises:
        SourceLoaderError: If any source cannot be loaded.
    """
    if search_path is not None and str(search_path) not in sys.path:
        sys.path.insert(0, str(search_path))

    resolved: list[Any] = []
    for source in sources:
        if is_schema_file(source):
            resolved.extend(load_schema_file(source))
        else:
            resolved.extend(load_module_aggregates(source))
    return resolved
