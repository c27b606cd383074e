"""Gzip-compressed tar archive generator."""

import tarfile
from pathlib import Path
from typing import Sequence

from profilekit.archive.base import ArchiveGenerator


class TarArchiveGenerator(ArchiveGenerator):
    """Writes ``.tar.gz`` archives."""

    extension = "tar.gz"
    codec_errors = (tarfile.TarError,)

    def _write(self, root: Path, files: Sequence[str], target: Path) -> None:
        with tarfile.open(target, "w:gz") as archive:
            for name in files:
                archive.add(root / name, arcname=name, recursive=False)
