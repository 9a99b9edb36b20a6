"""Persistence of the roadmap document.

The roadmap is read and written as a whole; there is no partial access.
"""

import json
import os
import stat
import tempfile
from pathlib import Path

import structlog
from pydantic import ValidationError

from roadmapkit.models.roadmap import Roadmap

logger = structlog.get_logger(__name__)


class RoadmapStore:
    """Reads and writes a roadmap JSON file."""

    def __init__(self, path: Path):
        """Initialize the store.

        Args:
            path: Path to the roadmap JSON file
        """
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> Roadmap:
        """Load and validate the roadmap.

        Returns:
            Roadmap object

        Raises:
            FileNotFoundError: If the roadmap file does not exist
            ValueError: If the file is not valid JSON or not a valid roadmap
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Roadmap not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Roadmap is not valid JSON ({self.path}): {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Roadmap must be a JSON object: {self.path}")

        try:
            roadmap = Roadmap.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid roadmap ({self.path}): {e}") from e

        logger.debug("roadmap_loaded", path=str(self.path), features=len(roadmap.features))
        return roadmap

    def save(self, roadmap: Roadmap) -> None:
        """Write the roadmap to disk using atomic write.

        Uses a temporary file and rename so readers never see a partial document.

        Args:
            roadmap: Roadmap to persist
        """
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)

        fd, temp_path = tempfile.mkstemp(dir=directory, prefix=".roadmap_", suffix=".json.tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(roadmap.model_dump(mode="json"), f, indent=2, ensure_ascii=False)
                f.write("\n")

            os.chmod(temp_path, self._target_mode())

            # Atomic rename
            os.replace(temp_path, self.path)
        except Exception:
            # Clean up temp file on error
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise

        logger.debug("roadmap_saved", path=str(self.path))

    def _target_mode(self) -> int:
        """Mode for the saved file: the existing file's, or the umask default for a new one."""
        if self.path.exists():
            return stat.S_IMODE(self.path.stat().st_mode)

        # os.umask can only be read by setting it
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask
