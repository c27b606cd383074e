"""profilekit: aggregate, check and package compliance profiles."""

import logging

from profilekit.archive import ArchiveOptions, ArchivePackager
from profilekit.errors import (
    ArchiveError,
    ConfigError,
    DiscoveryError,
    MetadataError,
    ProfileError,
)
from profilekit.linter import ProfileLinter
from profilekit.profile import Profile

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ArchiveError",
    "ArchiveOptions",
    "ArchivePackager",
    "ConfigError",
    "DiscoveryError",
    "MetadataError",
    "Profile",
    "ProfileError",
    "ProfileLinter",
]
