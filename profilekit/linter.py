"""Structural checks for profiles."""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from profilekit.models import LintEntry, LintReport, LintSummary, RuleRecord

if TYPE_CHECKING:
    from profilekit.profile import Profile


class Diagnostics:
    """Accumulates lint entries and mirrors each one to a logger."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self.errors: list[LintEntry] = []
        self.warnings: list[LintEntry] = []

    def warn(
        self,
        file: str | Path | None,
        line: int | None,
        column: int | None,
        control_id: str | None,
        msg: str,
    ) -> None:
        self.logger.warning(msg)
        self.warnings.append(_entry(file, line, column, control_id, msg))

    def error(
        self,
        file: str | Path | None,
        line: int | None,
        column: int | None,
        control_id: str | None,
        msg: str,
    ) -> None:
        self.logger.error(msg)
        self.errors.append(_entry(file, line, column, control_id, msg))


def _entry(
    file: str | Path | None,
    line: int | None,
    column: int | None,
    control_id: str | None,
    msg: str,
) -> LintEntry:
    return LintEntry(
        file=None if file is None else str(file),
        line=line,
        column=column,
        control_id=control_id,
        msg=msg,
    )


class ProfileLinter:
    """Checks that a profile is well-structured.

    All checks always run; errors and warnings are collected into a
    ``LintReport`` instead of being raised. Only errors make a profile
    invalid.
    """

    def __init__(self, profile: "Profile", logger: logging.Logger | None = None):
        self.profile = profile
        self.logger = logger or profile.logger

    def check(self) -> tuple[bool, LintReport]:
        """Run every check against the profile.

        Returns:
            Whether the profile has no errors, and the full report.
        """
        profile = self.profile
        diagnostics = Diagnostics(self.logger)
        summary = LintSummary(location=str(profile.path))

        self.logger.info("Checking profile in %s", profile.path)

        self._check_metadata(summary, diagnostics)
        self._check_layout(diagnostics)
        self._check_controls_count(summary, diagnostics)

        for group, controls in profile.rules.items():
            self.logger.info("Verify all controls in %s", group)
            for control_id, control in controls.items():
                self._check_control(control_id, control, diagnostics)

        if not diagnostics.warnings:
            self.logger.info("Control definitions OK.")

        summary.valid = not diagnostics.errors
        report = LintReport(
            summary=summary,
            errors=diagnostics.errors,
            warnings=diagnostics.warnings,
        )
        return report.valid, report

    def _check_metadata(self, summary: LintSummary, diagnostics: Diagnostics) -> None:
        settings = self.profile.settings
        legacy = self.profile.path / settings.legacy_metadata_file
        if legacy.exists():
            diagnostics.warn(
                legacy, 0, 0, None,
                f"The use of `{settings.legacy_metadata_file}` is deprecated. "
                f"Use `{settings.metadata_file}`.",
            )

        if self.profile.metadata.valid:
            self.logger.info("Metadata OK.")
        summary.profile = self.profile.name

    def _check_layout(self, diagnostics: Diagnostics) -> None:
        settings = self.profile.settings
        legacy = self.profile.path / settings.legacy_controls_dir
        canonical = self.profile.path / settings.controls_dir
        if legacy.exists() and not canonical.exists():
            diagnostics.warn(
                legacy, 0, 0, None,
                f"Profile uses deprecated `{settings.legacy_controls_dir}` directory, "
                f"rename it to `{settings.controls_dir}`.",
            )

    def _check_controls_count(self, summary: LintSummary, diagnostics: Diagnostics) -> None:
        count = self.profile.rules_count
        summary.controls = count
        if count == 0:
            diagnostics.warn(None, None, None, None, "No controls or tests were defined.")
        else:
            self.logger.info("Found %d controls.", count)

    def _check_control(self, control_id: str, control: RuleRecord, diagnostics: Diagnostics) -> None:
        sfile, sline = None, None
        if control.source_location is not None:
            sfile, sline = control.source_location.file, control.source_location.line

        if not control_id:
            diagnostics.error(sfile, sline, None, "", "Avoid controls with empty IDs")
            return
        if control.is_generated:
            return

        if not control.title:
            diagnostics.warn(sfile, sline, None, control_id, f"Control {control_id} has no title")
        if not control.description:
            diagnostics.warn(sfile, sline, None, control_id, f"Control {control_id} has no description")
        impact = control.impact or 0.0
        if impact > 1.0:
            diagnostics.warn(sfile, sline, None, control_id, f"Control {control_id} has impact > 1.0")
        if impact < 0.0:
            diagnostics.warn(sfile, sline, None, control_id, f"Control {control_id} has impact < 0.0")
        if not control.checks:
            diagnostics.warn(sfile, sline, None, control_id, f"Control {control_id} has no tests defined")
