"""Lint report models."""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class LintEntry:
    """One diagnostic produced by the profile linter."""

    file: str | None
    line: int | None
    column: int | None
    control_id: str | None
    msg: str


@dataclass
class LintSummary:
    """Summary block of a lint report."""

    location: str
    valid: bool = False
    timestamp: str = field(default_factory=_utc_now)
    profile: str | None = None
    controls: int = 0


@dataclass
class LintReport:
    """Result of checking a profile.

    ``summary.valid`` mirrors the absence of errors; warnings never change it.
    """

    summary: LintSummary
    errors: list[LintEntry] = field(default_factory=list)
    warnings: list[LintEntry] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        """Serialize to plain JSON-compatible types."""
        return {
            "summary": asdict(self.summary),
            "errors": [asdict(e) for e in self.errors],
            "warnings": [asdict(w) for w in self.warnings],
        }
