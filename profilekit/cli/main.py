"""Command line interface for profilekit."""

import json
from pathlib import Path

import click
from dotenv import load_dotenv

from profilekit.archive import ArchiveOptions
from profilekit.config import Settings, get_settings
from profilekit.errors import ProfileError
from profilekit.profile import Profile
from profilekit.tracing import get_logger, setup_tracing


def _load_profile(settings: Settings, path: str, profile_id: str | None = None) -> Profile:
    try:
        return Profile(
            path,
            profile_id=profile_id,
            logger=get_logger("profile"),
            settings=settings,
        )
    except ProfileError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option(
    "--log-level",
    default=None,
    help="Logging level (DEBUG, INFO, WARNING, ERROR). Defaults to PROFILEKIT_LOG_LEVEL.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None):
    """Inspect, check and package compliance profiles."""
    load_dotenv()
    settings = get_settings()
    setup_tracing(log_level or settings.log_level)
    ctx.obj = settings


@cli.command()
@click.argument("path", type=click.Path())
@click.option("--id", "profile_id", default=None, help="Override the profile name")
@click.pass_obj
def info(settings: Settings, path: str, profile_id: str | None):
    """Print metadata and controls of the profile at PATH as JSON."""
    profile = _load_profile(settings, path, profile_id)
    click.echo(json.dumps(profile.info(), indent=2, default=str))


@cli.command()
@click.argument("path", type=click.Path())
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.pass_context
def check(ctx: click.Context, path: str, output_format: str):
    """Verify that the profile at PATH is well-structured.

    Exits with status 1 if any errors were found.
    """
    profile = _load_profile(ctx.obj, path)
    passed, report = profile.check()

    if output_format == "json":
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        summary = report.summary
        click.echo(f"Location: {summary.location}")
        click.echo(f"Profile:  {summary.profile or '-'}")
        click.echo(f"Controls: {summary.controls}")
        click.echo(f"Timestamp: {summary.timestamp}")
        click.echo(f"Valid:    {summary.valid}")
        for entry in report.errors:
            click.echo(f"  error:   {_where(entry.file, entry.line)}{entry.msg}")
        for entry in report.warnings:
            click.echo(f"  warning: {_where(entry.file, entry.line)}{entry.msg}")
        click.echo(f"Summary: {len(report.errors)} errors, {len(report.warnings)} warnings")

    if not passed:
        ctx.exit(1)


def _where(file: str | None, line: int | None) -> str:
    if not file:
        return ""
    if line:
        return f"{file}:{line}: "
    return f"{file}: "


@cli.command()
@click.argument("path", type=click.Path())
@click.option("--zip", "use_zip", is_flag=True, help="Write a zip instead of a tar.gz archive")
@click.option("--overwrite", is_flag=True, help="Replace an existing archive")
@click.option("--ignore-errors", is_flag=True, help="Archive even if the profile check fails")
@click.option(
    "--output",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the archive (default: current directory)",
)
@click.pass_context
def archive(
    ctx: click.Context,
    path: str,
    use_zip: bool,
    overwrite: bool,
    ignore_errors: bool,
    output_dir: Path | None,
):
    """Check the profile at PATH and package it into an archive."""
    profile = _load_profile(ctx.obj, path)
    options = ArchiveOptions(
        zip=use_zip,
        overwrite=overwrite,
        ignore_errors=ignore_errors,
        output_dir=output_dir,
    )
    try:
        written = profile.archive(options)
    except ProfileError as e:
        raise click.ClickException(str(e)) from e

    if not written:
        ctx.exit(1)
    click.echo(f"Archive written for profile {profile.name}")


if __name__ == "__main__":
    cli()
