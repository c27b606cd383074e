"""Discovery of control definitions inside a profile directory."""

import hashlib
import logging
from pathlib import Path
from typing import Any, Protocol

import yaml

from profilekit.errors import DiscoveryError
from profilekit.models import GENERATED_ID_PREFIX, RuleRecord, SourceLocation

DEFAULT_CONTROLS_DIR = "controls"
LEGACY_CONTROLS_DIR = "test"

CONTROL_FILE_PATTERNS = ("*.yml", "*.yaml")

# Key injected into every parsed mapping to carry its line number
LINE_KEY = "__line__"


class RuleDiscovery(Protocol):
    """Finds the controls declared by a profile."""

    def discover(self, profile_dir: Path, options: dict[str, Any] | None = None) -> list[RuleRecord]:
        ...


class _LineLoader(yaml.SafeLoader):
    """Safe YAML loader that records the 1-based line of each mapping."""


def _construct_mapping(loader: _LineLoader, node: yaml.MappingNode) -> dict[str, Any]:
    mapping = loader.construct_mapping(node, deep=True)
    mapping[LINE_KEY] = node.start_mark.line + 1
    return mapping


_LineLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


def _strip_lines(value: Any) -> Any:
    """Remove line markers from a parsed value."""
    if isinstance(value, dict):
        return {k: _strip_lines(v) for k, v in value.items() if k != LINE_KEY}
    if isinstance(value, list):
        return [_strip_lines(v) for v in value]
    return value


class YamlRuleDiscovery:
    """Loads controls from YAML files under ``controls/`` (and legacy ``test/``).

    Each file describes one group of controls::

        title: SSH server configuration
        controls:
          - id: sshd-01
            title: Disable root login
            desc: Root must not log in over SSH.
            impact: 0.7
            checks:
              - file: /etc/ssh/sshd_config
                contains: PermitRootLogin no

    A top-level ``checks`` list outside any control becomes a single control
    with a generated id.
    """

    def __init__(
        self,
        controls_dir: str = DEFAULT_CONTROLS_DIR,
        legacy_controls_dir: str = LEGACY_CONTROLS_DIR,
        logger: logging.Logger | None = None,
    ):
        self.controls_dir = controls_dir
        self.legacy_controls_dir = legacy_controls_dir
        self.logger = logger or logging.getLogger(__name__)

    def find_files(self, profile_dir: Path) -> list[Path]:
        """List control files in a stable order."""
        files: list[Path] = []
        for dirname in (self.controls_dir, self.legacy_controls_dir):
            directory = Path(profile_dir) / dirname
            if not directory.is_dir():
                continue
            found: set[Path] = set()
            for pattern in CONTROL_FILE_PATTERNS:
                found.update(p for p in directory.rglob(pattern) if p.is_file())
            files.extend(sorted(found))
        return files

    def discover(self, profile_dir: Path, options: dict[str, Any] | None = None) -> list[RuleRecord]:
        """Load every control of a profile.

        Args:
            profile_dir: The profile root directory.
            options: Optional settings; ``controls`` restricts the result to
                the listed control ids.

        Returns:
            Controls in file order, then declaration order.

        Raises:
            DiscoveryError: If a control file cannot be read or parsed.
        """
        options = options or {}
        selected = options.get("controls")
        rules: list[RuleRecord] = []
        for path in self.find_files(profile_dir):
            self.logger.debug("Loading controls from %s", path)
            rules.extend(self.load_file(path, profile_dir))

        if selected:
            wanted = {str(s) for s in selected}
            rules = [r for r in rules if r.id in wanted]
        return rules

    def load_file(self, path: Path, profile_dir: Path) -> list[RuleRecord]:
        """Load the controls declared in one file."""
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.load(f, Loader=_LineLoader)  # noqa: S506
        except OSError as e:
            raise DiscoveryError(f"Cannot read control file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise DiscoveryError(f"Invalid YAML in control file {path}: {e}") from e

        if data is None:
            return []
        if not isinstance(data, dict):
            raise DiscoveryError(f"Control file {path} must contain a mapping")

        group_title = data.get("title") or ""
        controls = data.get("controls") or []
        if not isinstance(controls, list):
            raise DiscoveryError(f"'controls' in {path} must be a list")

        rules = []
        for control_data in controls:
            if not isinstance(control_data, dict):
                raise DiscoveryError(f"Control entries in {path} must be mappings")
            rules.append(self._parse_control(control_data, path, group_title))

        bare_checks = data.get("checks")
        if bare_checks:
            rules.append(self._generated_control(bare_checks, path, profile_dir, group_title))
        return rules

    def _parse_control(self, data: dict[str, Any], path: Path, group_title: str) -> RuleRecord:
        """Parse control data from dictionary."""
        raw_id = data.get("id")
        checks = data.get("checks") or []
        if not isinstance(checks, list):
            checks = [checks]

        return RuleRecord(
            id=None if raw_id is None else str(raw_id),
            title=data.get("title") or "",
            description=data.get("desc") or data.get("description") or "",
            impact=self._parse_impact(data.get("impact"), path),
            checks=_strip_lines(checks),
            source_location=SourceLocation(str(path), data.get(LINE_KEY, 0)),
            group_title=group_title,
            tags=_strip_lines(data.get("tags") or {}),
            refs=_strip_lines(data.get("refs") or []),
        )

    def _generated_control(
        self,
        checks: Any,
        path: Path,
        profile_dir: Path,
        group_title: str,
    ) -> RuleRecord:
        if not isinstance(checks, list):
            checks = [checks]
        line = 1
        if isinstance(checks[0], dict):
            line = checks[0].get(LINE_KEY, 1)
        checks = _strip_lines(checks)
        try:
            relpath = path.relative_to(profile_dir).as_posix()
        except ValueError:
            relpath = path.as_posix()
        digest = hashlib.sha1(
            yaml.safe_dump(checks, sort_keys=True).encode("utf-8")
        ).hexdigest()[:8]
        return RuleRecord(
            id=f"{GENERATED_ID_PREFIX}from {relpath}:{line} {digest})",
            checks=checks,
            source_location=SourceLocation(str(path), line),
            group_title=group_title,
        )

    def _parse_impact(self, value: Any, path: Path) -> float | None:
        if value is None:
            return None
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise DiscoveryError(f"Invalid impact {value!r} in {path}") from e
