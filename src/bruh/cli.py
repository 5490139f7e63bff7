"""Bruh CLI - task prioritization from the terminal."""

import json
import logging
import sys
import time
from datetime import date, datetime
from pathlib import Path

import click

from .adapters.supabase_api import SupabaseError
from .config import load_config
from .core.errors import FilterError
from .core.timer import FocusTimer, SessionType, TimerState
from .core.views import format_matrix, format_suggestion, format_task_line, format_timer
from .workflows import (
    UnknownFilterError,
    build_matrix,
    build_suggestions,
    find_task,
    get_repository,
    list_filter_names,
    run_filter,
)


def _parse_date(value: datetime | None) -> date:
    return value.date() if value else date.today()


@click.group()
@click.version_option(package_name="bruh")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Bruh - task prioritization CLI."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command("filter")
@click.argument("name", required=False)
@click.option("--file", "filter_file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Filter config JSON file")
@click.option("--date", "-d", "target_date", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Evaluate as of this date (YYYY-MM-DD), defaults to today")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def filter_cmd(name: str | None, filter_file: Path | None, target_date: datetime | None, as_json: bool):
    """Run a preset or saved smart filter."""
    config = load_config()
    as_of = _parse_date(target_date)

    try:
        tasks = run_filter(config, name, filter_file, as_of)
    except FilterError as e:
        click.echo(f"Invalid filter: {e}", err=True)
        sys.exit(1)
    except UnknownFilterError:
        click.echo(f"Unknown filter: {name}. Run 'bruh presets' to list filters.", err=True)
        sys.exit(1)
    except SupabaseError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps([t.to_dict() for t in tasks], indent=2))
        return

    if not tasks:
        click.echo("No matching tasks.")
        return

    for task in tasks:
        click.echo(format_task_line(task, as_of))


@main.command()
def presets():
    """List preset and saved filters."""
    config = load_config()
    try:
        preset_names, saved_names = list_filter_names(get_repository(config))
    except SupabaseError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo("Presets:")
    for name in preset_names:
        click.echo(f"  {name}")
    click.echo("\nSaved:")
    for name in saved_names or ["(none)"]:
        click.echo(f"  {name}")


@main.command()
@click.option("--date", "-d", "target_date", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Classify as of this date (YYYY-MM-DD), defaults to today")
@click.option("--urgent-days", type=click.IntRange(min=0), default=None,
              help="Days ahead that still count as urgent")
@click.option("--all", "include_closed", is_flag=True, help="Include completed and cancelled tasks")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def matrix(target_date: datetime | None, urgent_days: int | None, include_closed: bool, as_json: bool):
    """Show tasks in the Eisenhower matrix."""
    config = load_config()
    as_of = _parse_date(target_date)

    try:
        grouped = build_matrix(config, as_of, urgent_days, include_closed)
    except SupabaseError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(
            json.dumps(
                {q.value: [t.to_dict() for t in tasks] for q, tasks in grouped.items()},
                indent=2,
            )
        )
        return

    click.echo(f"Eisenhower Matrix for {as_of.strftime('%A, %b %d')}\n")
    click.echo(format_matrix(grouped, as_of))


@main.command()
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Maximum suggestions")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def suggest(limit: int | None, as_json: bool):
    """Show suggestions based on your task history."""
    config = load_config()
    try:
        suggestions = build_suggestions(config, limit=limit)
    except SupabaseError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "id": s.id,
                        "type": s.type,
                        "title": s.title,
                        "description": s.description,
                        "confidence": s.confidence,
                        "action": s.action,
                    }
                    for s in suggestions
                ],
                indent=2,
            )
        )
        return

    if not suggestions:
        click.echo("No suggestions right now.")
        return

    for suggestion in suggestions:
        click.echo(format_suggestion(suggestion))


@main.command()
@click.option("--minutes", "-m", type=click.IntRange(min=1), default=None,
              help="Session length, defaults to FOCUS_MINUTES")
@click.option("--task", "task_title", default=None, help="Focus on the open task matching this title")
@click.option("--break", "break_kind", type=click.Choice(["short", "long"]), default=None,
              help="Run a break instead of a focus session")
def focus(minutes: int | None, task_title: str | None, break_kind: str | None):
    """Run a focus timer. Ctrl+C stops it."""
    config = load_config()
    timer = FocusTimer()

    if break_kind == "short":
        timer.start_break(SessionType.SHORT_BREAK, minutes or config.short_break_minutes)
    elif break_kind == "long":
        timer.start_break(SessionType.LONG_BREAK, minutes or config.long_break_minutes)
    else:
        task = None
        if task_title:
            try:
                task = find_task(config, task_title)
            except SupabaseError as e:
                click.echo(f"Error: {e}", err=True)
                sys.exit(1)
            if task is None:
                click.echo(f"No open task matching '{task_title}'.", err=True)
                sys.exit(1)
        timer.start(task, minutes or config.focus_minutes)

    try:
        while timer.state != TimerState.COMPLETED:
            click.echo(f"\r{format_timer(timer)}", nl=False)
            time.sleep(1)
            timer.tick()
    except KeyboardInterrupt:
        timer.stop()
        click.echo("\nTimer stopped.")
        return

    if timer.session_type == SessionType.FOCUS:
        click.echo("\nFocus session complete!")
    else:
        click.echo("\nBreak over.")


if __name__ == "__main__":
    main()
