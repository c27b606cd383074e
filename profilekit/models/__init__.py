"""Domain models for profilekit."""

from profilekit.models.lint import (
    LintEntry,
    LintReport,
    LintSummary,
)
from profilekit.models.profile import (
    GENERATED_ID_PREFIX,
    RECOMMENDED_METADATA_FIELDS,
    REQUIRED_METADATA_FIELDS,
    Metadata,
    RuleGroup,
    RuleRecord,
    SourceLocation,
    normalize_supports,
)

__all__ = [
    # Profile
    "GENERATED_ID_PREFIX",
    "RECOMMENDED_METADATA_FIELDS",
    "REQUIRED_METADATA_FIELDS",
    "Metadata",
    "RuleGroup",
    "RuleRecord",
    "SourceLocation",
    "normalize_supports",
    # Lint
    "LintEntry",
    "LintReport",
    "LintSummary",
]
