"""Zip archive generator."""

import zipfile
from pathlib import Path
from typing import Sequence

from profilekit.archive.base import ArchiveGenerator


class ZipArchiveGenerator(ArchiveGenerator):
    """Writes deflate-compressed zip archives."""

    extension = "zip"
    codec_errors = (zipfile.BadZipFile, zipfile.LargeZipFile)

    def _write(self, root: Path, files: Sequence[str], target: Path) -> None:
        with zipfile.ZipFile(target, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for name in files:
                archive.write(root / name, arcname=name)
