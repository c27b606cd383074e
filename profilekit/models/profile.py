"""Profile, metadata and control models."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# Prefix of ids synthesized for checks that are not wrapped in a control
GENERATED_ID_PREFIX = "(generated "

# Metadata fields a profile must define
REQUIRED_METADATA_FIELDS = ("name", "version")

# Metadata fields a profile should define
RECOMMENDED_METADATA_FIELDS = ("title", "summary", "maintainer", "copyright")


@dataclass(frozen=True)
class SourceLocation:
    """Where a control was declared."""

    file: str
    line: int

    def to_dict(self) -> dict[str, Any]:
        return {"ref": self.file, "line": self.line}


@dataclass
class RuleRecord:
    """A single control as returned by rule discovery."""

    id: str | None
    title: str = ""
    description: str = ""
    impact: float | None = None
    checks: list[Any] = field(default_factory=list)
    source_location: SourceLocation | None = None
    group_title: str = ""
    tags: dict[str, Any] = field(default_factory=dict)
    refs: list[Any] = field(default_factory=list)

    @property
    def is_generated(self) -> bool:
        """Check if the id was synthesized rather than written by an author."""
        return bool(self.id) and self.id.startswith(GENERATED_ID_PREFIX)

    @property
    def group_key(self) -> str:
        """Key of the group this control belongs to (its source file)."""
        if self.source_location is None:
            return ""
        return self.source_location.file


# source file -> control id -> control
RuleGroup = dict[str, RuleRecord]


@dataclass(frozen=True)
class Metadata:
    """Parsed profile metadata.

    ``params`` holds every field of the metadata file; ``valid`` is set by
    the resolver once required and recommended fields have been checked.
    """

    params: dict[str, Any]
    valid: bool = False
    source: Path | None = None
    legacy: bool = False

    @property
    def name(self) -> str | None:
        return self.params.get("name")

    @property
    def supports(self) -> list[dict[str, Any]]:
        """Supported platforms, normalized to a list of mappings."""
        return normalize_supports(self.params.get("supports"))

    def is_supported(self, platform: dict[str, Any]) -> bool:
        """Check if the profile declares support for a platform.

        A profile with no ``supports`` entries supports every platform. An
        entry matches when all of its key/value pairs match the platform.

        Args:
            platform: Platform facts, e.g. {"os-family": "linux", "release": "22.04"}.

        Returns:
            True if any supports entry matches.
        """
        entries = self.supports
        if not entries:
            return True
        for entry in entries:
            if all(str(platform.get(key)) == str(value) for key, value in entry.items()):
                return True
        return False


def normalize_supports(value: Any) -> list[dict[str, Any]]:
    """Normalize a raw ``supports`` value.

    Accepts a single string, a single mapping, or a list of either.
    """
    if value is None or value == "":
        return []
    if not isinstance(value, list):
        value = [value]
    entries = []
    for item in value:
        if isinstance(item, dict):
            entries.append(dict(item))
        elif item is not None and str(item).strip():
            entries.append({"os": str(item).strip()})
    return entries
