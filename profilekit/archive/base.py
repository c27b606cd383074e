"""Base class for archive generators."""

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence

from profilekit.errors import ArchiveError


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


class ArchiveGenerator(ABC):
    """Writes a list of profile files into a single archive file.

    The archive is written to a temporary file next to the destination and
    moved into place once complete, so a failed run never leaves a partial
    archive behind. Missing destination directories are created.
    """

    # File extension of the produced archive, without the leading dot
    extension: str = ""

    # Codec exceptions reported as ArchiveError besides OSError
    codec_errors: tuple[type[Exception], ...] = ()

    def archive(self, root: str | Path, files: Sequence[str], destination: str | Path) -> Path:
        """Write ``files`` (relative to ``root``) into ``destination``.

        Args:
            root: The profile root directory.
            files: POSIX paths relative to root, in archive order.
            destination: Path of the archive to create.

        Returns:
            The destination path.

        Raises:
            ArchiveError: If reading a file or writing the archive fails.
        """
        root = Path(root)
        destination = Path(destination)
        tmp_path: Path | None = None
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{destination.name}.",
                suffix=".partial",
                dir=destination.parent,
            )
            os.close(fd)
            tmp_path = Path(tmp_name)
            self._write(root, files, tmp_path)
            # mkstemp creates 0600; give the archive the usual umask mode
            os.chmod(tmp_path, 0o666 & ~_current_umask())
            os.replace(tmp_path, destination)
        except (OSError, *self.codec_errors) as e:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise ArchiveError(f"Failed to write archive {destination}: {e}") from e
        return destination

    @abstractmethod
    def _write(self, root: Path, files: Sequence[str], target: Path) -> None:
        """Write the archive content to ``target``."""
        pass
