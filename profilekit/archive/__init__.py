"""Packaging of profiles into zip or tar.gz archives."""

from profilekit.archive.base import ArchiveGenerator
from profilekit.archive.packager import (
    ArchiveOptions,
    ArchivePackager,
    build_manifest,
    slugify,
)
from profilekit.archive.tar import TarArchiveGenerator
from profilekit.archive.zip import ZipArchiveGenerator

__all__ = [
    "ArchiveGenerator",
    "ArchiveOptions",
    "ArchivePackager",
    "TarArchiveGenerator",
    "ZipArchiveGenerator",
    "build_manifest",
    "slugify",
]
