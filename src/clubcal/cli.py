"""clubcal CLI - club and social event calendar."""

import json
import logging
import sys
from datetime import date, datetime

import click

from .adapters.http_events import EventSourceError
from .adapters.http_scorer import ScorerError
from .config import load_config
from .core.events import Category, Event, EventClass, SortKey, sort_events, upcoming_events
from .core.filters import TimeOfDay
from .core.schedule import PersistenceWriteFailure
from .core.dates import to_day, to_local
from .core.search import InvalidSearchMode
from .workflows import (
    build_filter_controller,
    build_navigator,
    calendar_view,
    get_event_source,
    get_store,
    get_timezone,
    resolve_week_key,
    scheduled_events,
)


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _load_events(config) -> list[Event]:
    try:
        return get_event_source(config).fetch_events()
    except EventSourceError as e:
        _fail(str(e))


def _parse_date(value: str | None, option: str) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        _fail(f"{option} must be a date (YYYY-MM-DD), got {value!r}")


@click.group()
@click.version_option(package_name="clubcal")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """clubcal - club and social event calendar."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


def _show_events(events: list[Event], as_json: bool, tz, scheduled: set[str] | None = None, empty_msg: str = "No events.") -> None:
    """Shared event display logic."""
    scheduled = scheduled or set()
    if as_json:
        click.echo(
            json.dumps(
                [dict(e.to_dict(), scheduled=e.id in scheduled) for e in events],
                indent=2,
            )
        )
        return

    if not events:
        click.echo(empty_msg)
        return

    current_date = None
    for event in events:
        event_date = to_day(event.start, tz)
        if event_date != current_date:
            if current_date is not None:
                click.echo()
            click.echo(f"### {event_date.strftime('%A, %B %d')}")
            current_date = event_date

        marker = "*" if event.id in scheduled else " "
        loc = f" @ {event.location}" if event.location else ""
        click.echo(f" {marker} {event.format_time(tz):6} {event.title} [{event.category.value}] ({event.id}){loc}")


@main.command()
@click.option("--category", "-c", "categories", multiple=True, help="Only these categories (repeatable)")
@click.option("--no-club", is_flag=True, help="Hide club events")
@click.option("--no-social", is_flag=True, help="Hide social events")
@click.option("--from", "date_from", default=None, help="First day (YYYY-MM-DD)")
@click.option("--to", "date_to", default=None, help="Last day (YYYY-MM-DD)")
@click.option("--location", default=None, help="Location contains this text")
@click.option("--time-of-day", type=click.Choice([t.value for t in TimeOfDay]), default=None)
@click.option("--available", is_flag=True, help="Only events with open spots")
@click.option("--search", "-s", "query", default="", help="Free-text search")
@click.option("--mode", default=None, help="Search mode: exact, fuzzy or semantic")
@click.option("--sort", "sort_key", type=click.Choice([k.value for k in SortKey]), default=SortKey.DATE.value)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def events(categories, no_club, no_social, date_from, date_to, location, time_of_day, available, query, mode, sort_key, as_json):
    """List events matching filters and search."""
    config = load_config()
    tz = get_timezone(config)
    controller = build_filter_controller(config, _load_events(config))

    try:
        controller.set_categories(categories)
        if mode:
            controller.set_search_mode(mode)
    except InvalidSearchMode as e:
        _fail(str(e))
    except ValueError as e:
        _fail(f"{e}. Known categories: {', '.join(c.value for c in Category)}")

    if no_club:
        controller.toggle_event_type(EventClass.CLUB)
    if no_social:
        controller.toggle_event_type(EventClass.SOCIAL)

    start = _parse_date(date_from, "--from")
    end = _parse_date(date_to, "--to")
    if start or end:
        controller.set_date_range(start or date.min, end or date.max)

    controller.set_location(location)
    controller.set_time_of_day(time_of_day)
    controller.set_has_availability(available)
    controller.set_search_query(query)

    try:
        results = controller.filtered_events
    except (InvalidSearchMode, ScorerError) as e:
        _fail(str(e))

    if sort_key != SortKey.DATE.value:
        results = sort_events(results, sort_key, tz)

    if not as_json and controller.active_filter_count:
        click.echo(f"{controller.active_filter_count} filter(s) active\n")

    store = get_store(config)
    _show_events(results, as_json, tz, store.all_scheduled_ids(), "No matching events.")


@main.command()
@click.option("--limit", "-n", default=10, show_default=True, help="Maximum number of events")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def upcoming(limit: int, as_json: bool):
    """List the next events."""
    config = load_config()
    tz = get_timezone(config)
    results = upcoming_events(_load_events(config), datetime.now(tz), limit, tz)
    _show_events(results, as_json, tz, get_store(config).all_scheduled_ids(), "No upcoming events.")


@main.command()
@click.option("--date", "-d", "anchor", default=None, help="Day inside the window (YYYY-MM-DD), defaults to today")
@click.option("--days", type=int, default=None, help="Window length in days (1-15)")
@click.option("--offset", type=int, default=0, help="Page forward (positive) or back (negative) by whole windows")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def calendar(anchor: str | None, days: int | None, offset: int, as_json: bool):
    """Show the calendar window with pinned events marked."""
    config = load_config()
    tz = get_timezone(config)
    navigator = build_navigator(config, _parse_date(anchor, "--date") or datetime.now(tz).date(), days)
    for _ in range(abs(offset)):
        if offset > 0:
            navigator.next()
        else:
            navigator.previous()

    views = calendar_view(navigator, _load_events(config), get_store(config), tz)

    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "date": v.day.isoformat(),
                        "week_key": v.week_key,
                        "events": [dict(e.to_dict(), scheduled=v.is_scheduled(e)) for e in v.events],
                    }
                    for v in views
                ],
                indent=2,
            )
        )
        return

    click.echo(f"Weeks: {', '.join(navigator.week_keys)}\n")
    for v in views:
        click.echo(f"### {v.day.strftime('%a %b %d')}  ({v.week_key})")
        if not v.events:
            click.echo("    -")
        for e in v.events:
            marker = "*" if v.is_scheduled(e) else " "
            click.echo(f"  {marker} {e.format_time(tz):6} {e.title} ({e.id})")


def _week_option(func):
    func = click.option("--week", "-w", default=None, help="Week key (YYYY-Www)")(func)
    func = click.option("--date", "-d", "day", default=None, help="Any day inside the week (YYYY-MM-DD)")(func)
    return func


def _week_from_options(week: str | None, day: str | None, tz) -> str:
    try:
        return resolve_week_key(week, _parse_date(day, "--date"), tz)
    except ValueError as e:
        _fail(str(e))


@main.command()
@click.argument("event_id")
@_week_option
def schedule(event_id: str, week: str | None, day: str | None):
    """Pin an event to a week."""
    config = load_config()
    key = _week_from_options(week, day, get_timezone(config))
    store = get_store(config)
    if store.is_scheduled(event_id, key):
        click.echo(f"{event_id} is already scheduled for {key}.")
        return
    try:
        store.schedule(event_id, key)
    except PersistenceWriteFailure as e:
        _fail(str(e))
    click.echo(f"✓ Scheduled {event_id} for {key}")


@main.command()
@click.argument("event_id")
@_week_option
def unschedule(event_id: str, week: str | None, day: str | None):
    """Unpin an event from a week."""
    config = load_config()
    key = _week_from_options(week, day, get_timezone(config))
    store = get_store(config)
    if not store.is_scheduled(event_id, key):
        click.echo(f"{event_id} is not scheduled for {key}.")
        return
    try:
        store.unschedule(event_id, key)
    except PersistenceWriteFailure as e:
        _fail(str(e))
    click.echo(f"✓ Unscheduled {event_id} from {key}")


@main.command()
@_week_option
@click.option("--all", "all_weeks", is_flag=True, help="Every week")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def scheduled(week: str | None, day: str | None, all_weeks: bool, as_json: bool):
    """List pinned events for a week."""
    config = load_config()
    tz = get_timezone(config)
    store = get_store(config)
    key = None if all_weeks else _week_from_options(week, day, tz)
    ids = store.all_scheduled_ids() if all_weeks else store.ids_for(key)
    known = scheduled_events(_load_events(config), store, key, tz)
    missing = sorted(ids - {e.id for e in known})

    if as_json:
        click.echo(
            json.dumps(
                {
                    "week_key": key,
                    "events": [e.to_dict() for e in known],
                    "unknown_ids": missing,
                },
                indent=2,
            )
        )
        return

    label = "any week" if all_weeks else key
    if not ids:
        click.echo(f"Nothing scheduled for {label}.")
        return
    click.echo(f"Scheduled for {label}:")
    for e in known:
        click.echo(f"  {to_local(e.start, tz).strftime('%a %b %d')} {e.format_time(tz)} {e.title} ({e.id})")
    for event_id in missing:
        click.echo(f"  ? {event_id} (not in event source)")


@main.command("week-key")
@click.argument("day", required=False)
def week_key_cmd(day: str | None):
    """Print the ISO week key of a day (default today)."""
    config = load_config()
    click.echo(_week_from_options(None, day, get_timezone(config)))


if __name__ == "__main__":
    main()
