"""JSON file implementation of the link store."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Union

from .base import LinkStoreBase
from ..errors import StorageFailure


DEFAULT_FILE_MODE = 0o644


class JsonFileStore(LinkStoreBase):
    """Keep links in a single indented JSON object file.

    The file is human-readable and safe to hand-edit between runs. Writes go
    to a temporary file in the same directory which is then renamed over the
    canonical path, so readers never observe a truncated file.
    """

    def __init__(
        self,
        path: Union[str, Path],
        reset_on_corrupt: bool = True,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize JSON file store.

        Args:
            path: Path of the data file
            reset_on_corrupt: Treat an unparseable file as empty and overwrite it.
                When False, loading a corrupt file raises StorageFailure instead.
            logger: Optional logger instance
        """
        super().__init__(str(path))
        self.path = Path(path)
        self.reset_on_corrupt = reset_on_corrupt
        self.logger = logger or logging.getLogger(__name__)

    def load(self) -> Dict[str, str]:
        """Read the mapping, healing a missing or corrupt file."""
        try:
            with open(self.path, "rb") as f:
                raw = f.read()
        except FileNotFoundError:
            self.logger.info(f"Data file {self.path} not found, creating empty store")
            self.save({})
            return {}
        except OSError as e:
            self.logger.error(f"Failed to read data file {self.path}: {e}")
            raise StorageFailure(f"Failed to read data file: {e}") from e

        try:
            return self._parse(raw)
        except ValueError as e:
            if not self.reset_on_corrupt:
                self.logger.error(f"Data file {self.path} is corrupt: {e}")
                raise StorageFailure(f"Data file is corrupt: {e}") from e
            self.logger.warning(f"Data file {self.path} is corrupt ({e}), resetting to empty")
            self.save({})
            return {}

    def save(self, links: Dict[str, str]) -> None:
        """Write the mapping to a temp file, then rename it into place."""
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                dir=directory,
            )
        except OSError as e:
            self.logger.error(f"Failed to prepare write of {self.path}: {e}")
            raise StorageFailure(f"Failed to write data file: {e}") from e

        committed = False
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(links, f, indent=2)
                f.write("\n")
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, self._file_mode())
            os.replace(tmp_name, self.path)
            committed = True
        except OSError as e:
            self.logger.error(f"Failed to write data file {self.path}: {e}")
            raise StorageFailure(f"Failed to write data file: {e}") from e
        finally:
            if not committed:
                self._discard(tmp_name)

        self._sync_directory()
        self.logger.debug(f"Wrote {len(links)} links to {self.path}")

    def health_check(self) -> bool:
        """Check that the data file (or its nearest existing parent) is writable."""
        candidate = self.path if self.path.exists() else self.path.parent
        while not candidate.exists() and candidate != candidate.parent:
            candidate = candidate.parent
        return os.access(candidate, os.W_OK)

    @staticmethod
    def _parse(raw: bytes) -> Dict[str, str]:
        """Decode file contents, raising ValueError on anything but a str->str object."""
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("top-level JSON value must be an object")
        for code, target in data.items():
            if not isinstance(target, str):
                raise ValueError(f"target for '{code}' is not a string")
        return data

    def _file_mode(self) -> int:
        """Keep the permissions of the file being replaced."""
        try:
            return self.path.stat().st_mode & 0o777
        except FileNotFoundError:
            return DEFAULT_FILE_MODE

    def _discard(self, tmp_name: str) -> None:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        except OSError as e:
            self.logger.warning(f"Could not remove temporary file {tmp_name}: {e}")

    def _sync_directory(self) -> None:
        """Flush the rename itself to disk where the platform allows it."""
        if not hasattr(os, "O_DIRECTORY"):
            return
        try:
            dir_fd = os.open(self.path.parent, os.O_RDONLY | os.O_DIRECTORY)
        except OSError as e:
            self.logger.debug(f"Skipping directory sync for {self.path.parent}: {e}")
            return
        try:
            os.fsync(dir_fd)
        except OSError as e:
            self.logger.debug(f"Directory sync failed for {self.path.parent}: {e}")
        finally:
            os.close(dir_fd)
