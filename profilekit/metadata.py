"""Metadata resolution for profile directories."""

import configparser
import logging
from pathlib import Path
from typing import Any, Protocol

import yaml

from profilekit.errors import MetadataError
from profilekit.models import (
    RECOMMENDED_METADATA_FIELDS,
    REQUIRED_METADATA_FIELDS,
    Metadata,
)

DEFAULT_METADATA_FILE = "profile.yml"
LEGACY_METADATA_FILE = "metadata.ini"

# Section holding the fields of a legacy metadata.ini
LEGACY_SECTION = "metadata"

# Legacy fields stored as comma separated lists
LEGACY_LIST_FIELDS = ("supports", "depends")


class MetadataResolver(Protocol):
    """Locates and parses the metadata of a profile directory."""

    def resolve(self, profile_dir: Path) -> Metadata:
        ...


class FileMetadataResolver:
    """Reads ``profile.yml``, falling back to the deprecated ``metadata.ini``.

    A missing metadata file is not an error: the result is an empty, invalid
    ``Metadata``. Only unreadable or malformed content raises.
    """

    def __init__(
        self,
        metadata_file: str = DEFAULT_METADATA_FILE,
        legacy_metadata_file: str = LEGACY_METADATA_FILE,
        logger: logging.Logger | None = None,
    ):
        self.metadata_file = metadata_file
        self.legacy_metadata_file = legacy_metadata_file
        self.logger = logger or logging.getLogger(__name__)

    def locate(self, profile_dir: Path) -> tuple[Path | None, bool]:
        """Find the metadata file to read.

        Returns:
            The file path (or None) and whether it is the legacy format.
        """
        primary = Path(profile_dir) / self.metadata_file
        if primary.is_file():
            return primary, False
        legacy = Path(profile_dir) / self.legacy_metadata_file
        if legacy.is_file():
            return legacy, True
        return None, False

    def resolve(self, profile_dir: Path) -> Metadata:
        """Read and validate the metadata of a profile.

        Args:
            profile_dir: The profile root directory.

        Returns:
            Parsed metadata with its validity flag set.

        Raises:
            MetadataError: If the metadata file cannot be read or parsed.
        """
        path, legacy = self.locate(profile_dir)
        if path is None:
            self.logger.error(
                "Missing profile metadata: neither %s nor %s found in %s",
                self.metadata_file,
                self.legacy_metadata_file,
                profile_dir,
            )
            return Metadata(params={}, valid=False)

        params = self._read_legacy(path) if legacy else self._read_yaml(path)
        valid = self._validate(params, path)
        return Metadata(params=params, valid=valid, source=path, legacy=legacy)

    def _read_yaml(self, path: Path) -> dict[str, Any]:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise MetadataError(f"Cannot read metadata file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise MetadataError(f"Invalid YAML in metadata file {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise MetadataError(
                f"Metadata file {path} must contain a mapping, got {type(data).__name__}"
            )
        return {str(key): value for key, value in data.items()}

    def _read_legacy(self, path: Path) -> dict[str, Any]:
        parser = configparser.ConfigParser(interpolation=None)
        try:
            with open(path, encoding="utf-8") as f:
                parser.read_file(f)
        except OSError as e:
            raise MetadataError(f"Cannot read metadata file {path}: {e}") from e
        except configparser.Error as e:
            raise MetadataError(f"Invalid metadata file {path}: {e}") from e

        if not parser.has_section(LEGACY_SECTION):
            raise MetadataError(f"Metadata file {path} has no [{LEGACY_SECTION}] section")

        params: dict[str, Any] = {}
        for key, value in parser.items(LEGACY_SECTION):
            if key in LEGACY_LIST_FIELDS:
                params[key] = [v.strip() for v in value.split(",") if v.strip()]
            else:
                params[key] = value
        return params

    def _validate(self, params: dict[str, Any], path: Path) -> bool:
        is_valid = True
        for name in REQUIRED_METADATA_FIELDS:
            if params.get(name) in (None, ""):
                self.logger.error("Missing profile %s in %s", name, path.name)
                is_valid = False
        for name in RECOMMENDED_METADATA_FIELDS:
            if params.get(name) in (None, ""):
                self.logger.warning("Missing profile %s in %s", name, path.name)
                is_valid = False
        return is_valid
