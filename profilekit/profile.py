"""Profile aggregation: metadata plus discovered controls."""

import copy
import logging
from pathlib import Path
from typing import Any, Iterable

from profilekit.archive import ArchiveOptions, ArchivePackager
from profilekit.config import Settings, get_settings
from profilekit.discovery import RuleDiscovery, YamlRuleDiscovery
from profilekit.errors import ConfigError
from profilekit.linter import ProfileLinter
from profilekit.metadata import FileMetadataResolver, MetadataResolver
from profilekit.models import LintReport, RuleGroup, RuleRecord

DEFAULT_IMPACT = 0.5


def clamp_impact(impact: float | None) -> float:
    """Bring an impact into [0.0, 1.0], defaulting to 0.5 when unset."""
    if impact is None:
        return DEFAULT_IMPACT
    if impact > 1.0:
        return 1.0
    if impact < 0.0:
        return 0.0
    return impact


class Profile:
    """A compliance profile read from a directory.

    Controls are grouped by the file that declares them; within a group the
    control id is unique and a later control replaces an earlier one with
    the same id.
    """

    def __init__(
        self,
        path: str | Path,
        profile_id: str | None = None,
        logger: logging.Logger | None = None,
        resolver: MetadataResolver | None = None,
        discovery: RuleDiscovery | None = None,
        options: dict[str, Any] | None = None,
        settings: Settings | None = None,
    ):
        """Load a profile.

        Args:
            path: The profile root directory.
            profile_id: Optional id overriding the metadata name.
            logger: Logger receiving progress and diagnostics.
            resolver: Metadata resolver (defaults to profile.yml/metadata.ini).
            discovery: Control discovery (defaults to YAML control files).
            options: Options passed through to discovery.
            settings: Settings used to build the default collaborators.

        Raises:
            ConfigError: If the path is empty or not a directory.
            MetadataError: If the metadata cannot be parsed.
            DiscoveryError: If a control file cannot be parsed.
        """
        if path is None or str(path) == "":
            raise ConfigError("Cannot read an empty path.")
        self.path = Path(path)
        if not self.path.is_dir():
            raise ConfigError(f"Cannot find directory {path}")

        self.options = dict(options or {})
        self.logger = logger or logging.getLogger(__name__)
        self.settings = settings or get_settings()
        self.resolver = resolver or FileMetadataResolver(
            metadata_file=self.settings.metadata_file,
            legacy_metadata_file=self.settings.legacy_metadata_file,
            logger=self.logger,
        )
        self.discovery = discovery or YamlRuleDiscovery(
            controls_dir=self.settings.controls_dir,
            legacy_controls_dir=self.settings.legacy_controls_dir,
            logger=self.logger,
        )

        self.metadata = self.resolver.resolve(self.path)
        self.params: dict[str, Any] = dict(self.metadata.params)
        # explicit id, then metadata name, then nothing
        self.profile_id = profile_id or self.params.get("name") or None
        self.params["name"] = self.profile_id

        self.rules: dict[str, RuleGroup] = {}
        self.add_rules(self.discovery.discover(self.path, self.options))

    @classmethod
    def from_path(
        cls,
        path: str | Path,
        options: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> "Profile":
        """Load a profile, taking the profile id from ``options["id"]``."""
        options = dict(options or {})
        profile_id = options.pop("id", None)
        return cls(path, profile_id=profile_id, options=options, **kwargs)

    @property
    def name(self) -> str | None:
        return self.params.get("name")

    @property
    def rules_count(self) -> int:
        """Total number of controls across all groups."""
        return sum(len(group) for group in self.rules.values())

    def add_rules(self, rules: Iterable[RuleRecord]) -> None:
        """Bucket controls into groups keyed by their source file."""
        for rule in rules:
            group = self.rules.setdefault(rule.group_key, {})
            group[rule.id or ""] = rule

    def relative_path(self, file: str | Path) -> str:
        """Express a file path relative to the profile root."""
        try:
            return Path(file).relative_to(self.path).as_posix()
        except ValueError:
            return str(file)

    def info(self) -> dict[str, Any]:
        """Describe the profile for display.

        Returns:
            The metadata parameters plus ``rules``: relative file path ->
            {"title": ..., "rules": {control id -> summary}}.
        """
        res = copy.deepcopy(self.params)
        rules: dict[str, dict[str, Any]] = {}
        for gid, group in self.rules.items():
            if not gid:
                continue
            path = self.relative_path(gid)
            rules[path] = {"title": path, "rules": {}}
            for rule_id, rule in group.items():
                if not rule_id:
                    continue
                rules[path]["rules"][rule_id] = self._summarize(rule)
                # TODO: groups are flattened to one title per file; nest
                # them once control files can declare sub-groups
                rules[path]["title"] = rule.group_title
        res["rules"] = rules
        return res

    def _summarize(self, rule: RuleRecord) -> dict[str, Any]:
        return {
            "title": rule.title,
            "desc": rule.description,
            "impact": clamp_impact(rule.impact),
            "source_location": rule.source_location.to_dict() if rule.source_location else None,
            "group_title": rule.group_title,
            "tags": copy.deepcopy(rule.tags),
            "refs": copy.deepcopy(rule.refs),
        }

    def check(self) -> tuple[bool, LintReport]:
        """Lint the profile. See ``ProfileLinter.check``."""
        return ProfileLinter(self, logger=self.logger).check()

    def archive(self, options: ArchiveOptions | None = None) -> bool:
        """Package the profile. See ``ArchivePackager.archive``."""
        return ArchivePackager(self, logger=self.logger).archive(options or ArchiveOptions())
