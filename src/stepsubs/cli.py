"""CLI entry point for stepsubs."""

import logging
from pathlib import Path

import click

from stepsubs.config import load_config

FORMAT_CHOICE = click.Choice(["SRT", "WEBVTT"], case_sensitive=False)


def _load(config_path, fmt=None):
    try:
        return load_config(config_path, format=fmt.upper() if fmt else None)
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.version_option(package_name="stepsubs")
def main():
    """stepsubs - Subtitle recorded test videos with their executed steps."""


@main.command()
@click.argument("events_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--format",
    "fmt",
    type=FORMAT_CHOICE,
    default=None,
    help="Subtitle format (default: SRT, or the configured format)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML config file with a plugins.subtitles section",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable verbose output")
def replay(events_file, fmt, config_path, verbose):
    """Replay a recorded event log and write subtitles for its tests."""
    from stepsubs.replay import load_event_log, replay_events

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    config = _load(config_path, fmt)
    if not config.enabled:
        click.echo("Subtitles plugin is disabled; nothing to do.")
        return

    try:
        entries = load_event_log(events_file)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    try:
        tests = replay_events(entries, config, base_dir=events_file.parent)
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    except OSError as e:
        raise click.ClickException(f"Could not write subtitle: {e}") from e

    if not tests:
        click.echo("No finished tests in event log.")
    for test in tests:
        label = test.title or "(untitled)"
        subtitle = test.artifacts.get("subtitle")
        if subtitle:
            click.echo(f"{label}: subtitle saved to {subtitle}")
        else:
            click.echo(f"{label}: no video artifact; no subtitle written")


@main.command("config")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML config file with a plugins.subtitles section",
)
def config_show(config_path):
    """Show the resolved plugin configuration."""
    config = _load(config_path)
    click.echo("Subtitles plugin:")
    click.echo(f"  Enabled:   {config.enabled}")
    click.echo(f"  Format:    {config.format}")
    click.echo(f"  Output:    .{config.subtitle_format.extension}")


@main.command()
@click.argument("elapsed_ms", type=click.IntRange(min=0))
@click.option("--format", "fmt", type=FORMAT_CHOICE, default="SRT", help="Separator style")
def timestamp(elapsed_ms, fmt):
    """Print ELAPSED_MS formatted as a subtitle timestamp."""
    from stepsubs.subtitles import SubtitleFormat
    from stepsubs.timestamps import format_timestamp, with_separator

    subtitle_format = SubtitleFormat.from_config(fmt.upper())
    click.echo(with_separator(format_timestamp(elapsed_ms), subtitle_format.ms_separator))
