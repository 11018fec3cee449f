"""
Output writer for generated SDL, selection sets and recordings.

An existing destination is deleted first, then recreated. The new content
goes through a temporary file in the same directory which atomically
replaces the target, so an interrupted run never leaves a partial file.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from .errors import OutputConflictError


class OutputWriter:
    """Writes output files with delete-then-recreate semantics."""

    def write(self, path: str | Path, content: str) -> None:
        """
        Write content to a file.

        Args:
            path: Target file path
            content: Content to write

        Raises:
            OutputConflictError: If the existing file cannot be deleted
            OSError: If writing fails
        """
        path = Path(path)
        self.delete_existing(path)

        # Ensure parent directory exists
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
            temp_path.replace(path)
        except Exception:
            temp_path.unlink(missing_ok=True)
            raise

    def delete_existing(self, path: Path) -> None:
        """Delete the destination if it exists."""
        if not path.exists():
            return
        try:
            path.unlink()
        except OSError as e:
            raise OutputConflictError(f"Could not overwrite destination file '{path.name}': {e}") from e
