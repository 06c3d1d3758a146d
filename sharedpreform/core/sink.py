"""
Output sinks for generated artifacts.

The generation pass hands every rendered artifact to a sink. Write failures
surface as EmissionIOError so the pass can report them per aggregate.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Union

from ..logging_config import get_logger
from .diagnostics import EmissionIOError

logger = get_logger(__name__)


class OutputSink(ABC):
    """Destination for generated source files."""

    @abstractmethod
    def write(self, relative_path: str, content: str) -> str:
        """
        Write one generated file.

        Args:
            relative_path: Path of the file relative to the sink root
            content: Generated source

        Returns:
            Location the file was written to

        Raises:
            EmissionIOError: If the file cannot be written
        """
        pass


class FileSystemSink(OutputSink):
    """Writes generated files under a root directory."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def write(self, relative_path: str, content: str) -> str:
        target = self.root / relative_path
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        except OSError as e:
            raise EmissionIOError(f"Failed to write generated class to {target}: {e}") from e
        logger.info("Wrote %s", target)
        return str(target)


class MemorySink(OutputSink):
    """Keeps generated files in memory, keyed by relative path."""

    def __init__(self):
        self.files: Dict[str, str] = {}

    def write(self, relative_path: str, content: str) -> str:
        self.files[relative_path] = content
        return relative_path
