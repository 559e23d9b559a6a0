"""Click CLI entry point for the converter."""

from __future__ import annotations

from pathlib import Path

import click

from xbel_to_markdown.builder import BookmarkBuilder, RunResult
from xbel_to_markdown.config import Settings
from xbel_to_markdown.exceptions import ConfigError
from xbel_to_markdown.logging_config import setup_logging
from xbel_to_markdown.scheduler import PeriodicRunner

DEFAULT_CONFIG = Path("xbel2md.yaml")


def load_settings(config_path: Path) -> Settings:
    """Load settings from the config file, falling back to defaults."""
    if config_path.exists():
        settings = Settings.load(config_path)
    else:
        settings = Settings.default()
    try:
        settings.validate(config_path)
    except ConfigError as e:
        raise click.BadParameter(str(e), param_hint="--config") from e
    return settings


def report(result: RunResult, verbose: bool) -> None:
    """Print a short notice about a run."""
    if not result.success:
        click.echo(f"Conversion failed: {result.error}", err=True)
        return

    click.echo(f"Bookmarks Markdown updated: {result.output_path}")
    if verbose:
        click.echo(f"  Folders: {result.folders}, Links: {result.links}")
        if result.backup_path:
            click.echo(f"  Backup: {result.backup_path}")
        for path in result.deleted_backups:
            click.echo(f"  Removed old backup: {path.name}")


@click.group()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_CONFIG,
    show_default=True,
    help="Settings YAML file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx: click.Context, config_path: Path, verbose: bool) -> None:
    """Convert an XBEL bookmark file to a Markdown document."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose


@cli.command()
@click.pass_context
def run(ctx: click.Context) -> None:
    """Regenerate the Markdown file once."""
    verbose = ctx.obj["verbose"]
    settings = load_settings(ctx.obj["config_path"])
    setup_logging(settings, verbose)

    result = BookmarkBuilder.from_settings(settings).run_settings(settings)
    report(result, verbose)
    if not result.success:
        ctx.exit(1)


@cli.command()
@click.option(
    "--interval",
    type=click.IntRange(min=1),
    default=None,
    help="Seconds between runs (overrides update_interval and automatic_update)",
)
@click.pass_context
def watch(ctx: click.Context, interval: int | None) -> None:
    """Run at startup, then periodically if automatic updates are on."""
    verbose = ctx.obj["verbose"]
    settings = load_settings(ctx.obj["config_path"])
    setup_logging(settings, verbose)

    builder = BookmarkBuilder.from_settings(settings)

    def job() -> None:
        report(builder.run_settings(settings), verbose)

    if interval is None and not settings.automatic_update:
        click.echo("Automatic update is off; running once.")
        job()
        return

    runner = PeriodicRunner(job, interval or settings.update_interval)
    try:
        runner.run_forever()
    except KeyboardInterrupt:
        runner.stop()
        click.echo("Stopped.")


@cli.group()
def config() -> None:
    """Show or change settings."""


@config.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Print the effective settings."""
    settings = load_settings(ctx.obj["config_path"])
    click.echo(f"input_path: {settings.input_path}")
    click.echo(f"output_path: {settings.output_path}")
    click.echo(f"backup_path: {settings.backup_path}")
    click.echo(f"trash_path: {Path(settings.trash_folder_path)}")
    click.echo(f"keep_count: {settings.keep_count}")
    click.echo(f"automatic_update: {settings.automatic_update}")
    click.echo(f"update_interval: {settings.update_interval}")


@config.command("set")
@click.argument("key")
@click.argument("value")
@click.option("--no-run", is_flag=True, help="Only save, don't regenerate")
@click.pass_context
def config_set(ctx: click.Context, key: str, value: str, no_run: bool) -> None:
    """Change a setting, save it and regenerate the Markdown file."""
    config_path: Path = ctx.obj["config_path"]
    verbose = ctx.obj["verbose"]
    settings = load_settings(config_path)

    try:
        settings.update(key, value)
        settings.validate(config_path)
    except ConfigError as e:
        raise click.BadParameter(str(e), param_hint="KEY/VALUE") from e

    settings.save(config_path)
    click.echo(f"Saved {key} = {getattr(settings, key)} to {config_path}")

    if no_run:
        return

    setup_logging(settings, verbose)
    result = BookmarkBuilder.from_settings(settings).run_settings(settings)
    report(result, verbose)
    if not result.success:
        ctx.exit(1)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
