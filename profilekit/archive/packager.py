"""Archive packaging of a checked profile."""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

from profilekit.archive.base import ArchiveGenerator
from profilekit.archive.tar import TarArchiveGenerator
from profilekit.archive.zip import ZipArchiveGenerator
from profilekit.errors import ConfigError

if TYPE_CHECKING:
    from profilekit.profile import Profile


@dataclass
class ArchiveOptions:
    """Options for ``ArchivePackager.archive``."""

    zip: bool = False  # zip instead of tar.gz
    overwrite: bool = False  # replace an existing archive
    ignore_errors: bool = False  # archive even if the check fails
    output_dir: Path | None = None  # defaults to settings, then cwd


def slugify(name: str) -> str:
    """Turn a profile name into an archive base name.

    "My Profile!" -> "my-profile_"
    """
    slug = name.lower().strip().replace(" ", "-")
    return re.sub(r"[^\w-]", "_", slug, flags=re.ASCII)


def build_manifest(root: str | Path, exclude: Iterable[str | Path] = ()) -> list[str]:
    """List every file below ``root`` as a POSIX path relative to it.

    Directories are walked in sorted order so the result is reproducible.

    Args:
        root: The profile root directory.
        exclude: Files to leave out, such as the archive being written.

    Returns:
        Relative file paths.
    """
    root = Path(root)
    excluded = {Path(p).resolve() for p in exclude}
    files = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for filename in sorted(filenames):
            path = Path(dirpath) / filename
            if path.resolve() in excluded:
                continue
            files.append(path.relative_to(root).as_posix())
    return files


class ArchivePackager:
    """Packages a profile directory into a single archive."""

    def __init__(self, profile: "Profile", logger: logging.Logger | None = None):
        self.profile = profile
        self.logger = logger or profile.logger

    def generator(self, options: ArchiveOptions) -> ArchiveGenerator:
        return ZipArchiveGenerator() if options.zip else TarArchiveGenerator()

    def output_dir(self, options: ArchiveOptions) -> Path:
        if options.output_dir is not None:
            return Path(options.output_dir)
        if self.profile.settings.archive_output_dir is not None:
            return Path(self.profile.settings.archive_output_dir)
        return Path.cwd()

    def destination(self, options: ArchiveOptions) -> Path:
        """Path of the archive for this profile.

        Raises:
            ConfigError: If the profile has no name.
        """
        name = self.profile.name
        if not name:
            raise ConfigError("Cannot archive a profile without a name.")
        slug = slugify(str(name))
        return self.output_dir(options) / f"{slug}.{self.generator(options).extension}"

    def archive(self, options: ArchiveOptions) -> bool:
        """Check the profile and write its archive.

        Args:
            options: Archive format, overwrite and error handling options.

        Returns:
            True if the archive was written; False if the check failed
            (without ``ignore_errors``) or the archive already exists
            (without ``overwrite``).

        Raises:
            ConfigError: If the profile has no name.
            ArchiveError: If writing the archive fails.
        """
        passed, _report = self.profile.check()
        if not passed and not options.ignore_errors:
            self.logger.info(
                "Profile check failed. Please fix the profile before generating an archive."
            )
            return False

        archive = self.destination(options)

        if archive.exists() and not options.overwrite:
            self.logger.info("Archive %s exists already. Use --overwrite.", archive)
            return False

        if archive.exists():
            archive.unlink()

        self.logger.info("Profile check finished. Generate archive %s.", archive)

        files = build_manifest(self.profile.path, exclude=[archive])

        self.logger.debug("Add the following files to archive:")
        for f in files:
            self.logger.debug("    %s", f)

        self.generator(options).archive(self.profile.path, files, archive)

        self.logger.info("Finished archive generation.")
        return True
