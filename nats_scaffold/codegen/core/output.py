"""
Filesystem access scoped to one output directory.

The pipeline never touches paths directly; it reads, writes, and copies
through an OutputTree so every generated path is relative to the tree root.
"""

from pathlib import Path
from typing import Union

from ...logging_config import get_logger

logger = get_logger(__name__)


class OutputTree:
    """Read/write capability rooted at an output directory."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def path(self, relative: str) -> Path:
        return self.root / relative

    def root_exists(self) -> bool:
        return self.root.exists()

    def create_root(self) -> None:
        """Create the output directory; its parent must already exist."""
        logger.debug("Creating output directory %s", self.root)
        self.root.mkdir()

    def exists(self, relative: str) -> bool:
        return self.path(relative).exists()

    def read_text(self, relative: str) -> str:
        return self.path(relative).read_text(encoding="utf-8")

    def write_text(self, relative: str, content: str) -> Path:
        target = self.path(relative)
        # newline="" keeps "\n" on every platform so reruns are byte-identical
        with open(target, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        logger.debug("Wrote %s (%d bytes)", target, len(content.encode("utf-8")))
        return target

    def copy(self, source_relative: str, target_relative: str) -> Path:
        """Copy a file inside the tree byte for byte."""
        target = self.path(target_relative)
        target.write_bytes(self.path(source_relative).read_bytes())
        logger.debug("Copied %s to %s", self.path(source_relative), target)
        return target
