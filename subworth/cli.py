"""
SubWorth — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs (catalog, interests, dates).
  4. Execute action (score, export, TMDB lookup, ...).
  5. Report result to stdout.

Install and run::

    pip install -e .
    subworth --help
    subworth validate-config
    subworth list-platforms
    subworth score -i thriller -i sci-fi --subscribed netflix --subscribed hulu
    subworth score -i comedy --platform hulu --platform appletv
    subworth details netflix -i kdrama
    subworth savings -i comedy --subscribed hulu --subscribed disney
    subworth export -i thriller --date 2024-12-01
    subworth tmdb-trending
    subworth tmdb-search "severance" --posters
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import List, Optional

import typer

app = typer.Typer(
    name="subworth",
    help="SubWorth — is each streaming subscription worth it this month?",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from subworth.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except ValueError as exc:
        # pydantic.ValidationError and tomllib.TOMLDecodeError
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from subworth.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_platforms_or_exit(config):
    from subworth.catalog.seed_loader import load_platforms

    try:
        return load_platforms(Path(config.catalog.platforms_file))
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] Could not load platform catalog:\n{exc}", err=True)
        raise typer.Exit(code=1)


def _resolve_interests(
    interests:    Optional[List[str]],
    profile_path: Optional[str],
    strict:       bool = False,
) -> list[str]:
    """Merge ``--interest`` values with interests derived from a profile JSON."""
    from pydantic import ValidationError

    from subworth.models.catalog import normalize_interests
    from subworth.models.profile import TasteProfile
    from subworth.taxonomy.content_taxonomy import validate_interest_selection

    collected = list(interests or [])

    if profile_path:
        path = Path(profile_path)
        try:
            profile = TasteProfile.model_validate_json(path.read_text(encoding="utf-8"))
        except OSError as exc:
            typer.echo(f"[ERROR] Cannot read profile: {exc}", err=True)
            raise typer.Exit(code=1)
        except ValidationError as exc:
            typer.echo(f"[ERROR] Profile failed validation:\n{exc}", err=True)
            raise typer.Exit(code=1)
        collected.extend(profile.interests())

    if strict:
        try:
            return validate_interest_selection(collected)
        except ValueError as exc:
            typer.echo(f"[ERROR] {exc}", err=True)
            raise typer.Exit(code=1)

    return normalize_interests(collected)


def _resolve_platform_ids(platforms, keys: Optional[List[str]]) -> set[str]:
    from subworth.catalog.seed_loader import find_platform

    ids: set[str] = set()
    for key in keys or []:
        platform = find_platform(platforms, key)
        if platform is None:
            typer.echo(f"[ERROR] Unknown platform '{key}'.", err=True)
            raise typer.Exit(code=1)
        ids.add(platform.id)
    return ids


def _parse_date_or_exit(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        typer.echo(f"[ERROR] Invalid date '{value}' (expected YYYY-MM-DD).", err=True)
        raise typer.Exit(code=1)


def _interest_option():
    return typer.Option(None, "--interest", "-i", help="Interest/genre to match (repeatable).")


def _profile_option():
    return typer.Option(None, "--profile", help="Path to a taste-profile JSON from onboarding.")


def _date_option():
    return typer.Option(None, "--date", help="Reference date YYYY-MM-DD (default: today).")


def _config_option():
    return typer.Option(None, "--config", help="Path to TOML config file.")


def _posters_option():
    return typer.Option(False, "--posters", help="Print each title's poster URL.")


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = _config_option(),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Platform catalog: {config.catalog.platforms_file}")
    typer.echo(f"  TMDB base URL:    {config.tmdb.base_url}")
    typer.echo(f"  TMDB API key:     {'set' if config.tmdb.api_key else 'not set'}")
    typer.echo(f"  TMDB fixture:     {config.tmdb.use_fixture}")
    typer.echo(f"  Verdicts dir:     {config.output.verdicts_dir}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        dump = config.model_dump()
        if dump["tmdb"].get("api_key"):
            dump["tmdb"]["api_key"] = "***"
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(dump, indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("list-platforms")
def list_platforms(config_path: Optional[str] = _config_option()) -> None:
    """List the platforms in this month's catalog."""
    from subworth.reporting.formatters import format_platform_list

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    platforms = _load_platforms_or_exit(config)

    typer.echo(f"Catalog: {config.catalog.platforms_file}")
    typer.echo(format_platform_list(platforms))


@app.command("score")
def score(
    interests: Optional[List[str]] = _interest_option(),
    profile_path: Optional[str] = _profile_option(),
    only_platforms: Optional[List[str]] = typer.Option(
        None, "--platform", "-p", help="Score only this platform slug/id (repeatable).",
    ),
    subscribed: Optional[List[str]] = typer.Option(
        None, "--subscribed", "-s", help="Platform slug/id you pay for (repeatable).",
    ),
    only_subscribed: bool = typer.Option(
        False, "--only-subscribed", help="Show only subscribed platforms.",
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Reject interests outside the known categories.",
    ),
    as_of: Optional[str] = _date_option(),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table."),
    config_path: Optional[str] = _config_option(),
) -> None:
    """Score every platform for your interests and rank the verdicts."""
    from subworth.recommendations.ranker import filter_subscribed, score_all_platforms
    from subworth.reporting.formatters import format_verdict_table
    from subworth.utils.time_utils import month_label

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    platforms = _load_platforms_or_exit(config)

    wanted = _resolve_interests(interests, profile_path, strict)
    subscribed_ids = _resolve_platform_ids(platforms, subscribed)
    if only_subscribed and not subscribed_ids:
        typer.echo("[ERROR] --only-subscribed needs at least one --subscribed platform.", err=True)
        raise typer.Exit(code=1)
    ref_date = _parse_date_or_exit(as_of) or date.today()

    if only_platforms:
        keep = _resolve_platform_ids(platforms, only_platforms)
        platforms = [p for p in platforms if p.id in keep]

    scores = score_all_platforms(platforms, wanted, ref_date)
    if only_subscribed:
        scores = filter_subscribed(scores, subscribed_ids)

    if as_json:
        typer.echo(json.dumps([s.to_record() for s in scores], indent=2, default=str))
        return

    typer.echo(
        format_verdict_table(
            scores, platforms, month_label(ref_date), wanted, subscribed_ids or None
        )
    )


@app.command("details")
def details(
    platform_key: str = typer.Argument(..., help="Platform slug or id."),
    interests: Optional[List[str]] = _interest_option(),
    profile_path: Optional[str] = _profile_option(),
    as_of: Optional[str] = _date_option(),
    config_path: Optional[str] = _config_option(),
) -> None:
    """Show the score breakdown and reasoning for one platform."""
    from subworth.catalog.seed_loader import find_platform
    from subworth.recommendations.scorer import build_reasoning, score_platform
    from subworth.reporting.formatters import format_score_details

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    platforms = _load_platforms_or_exit(config)

    platform = find_platform(platforms, platform_key)
    if platform is None:
        typer.echo(f"[ERROR] Unknown platform '{platform_key}'.", err=True)
        raise typer.Exit(code=1)

    wanted = _resolve_interests(interests, profile_path)
    result = score_platform(platform, wanted, _parse_date_or_exit(as_of))
    typer.echo(format_score_details(result, platform, build_reasoning(result, platform)))


@app.command("savings")
def savings(
    interests: Optional[List[str]] = _interest_option(),
    profile_path: Optional[str] = _profile_option(),
    subscribed: Optional[List[str]] = typer.Option(
        None,
        "--subscribed",
        "-s",
        help="Platform slug/id you pay for (repeatable). Default: whole catalog.",
    ),
    as_of: Optional[str] = _date_option(),
    config_path: Optional[str] = _config_option(),
) -> None:
    """Show how much pausing or skipping would save this month."""
    from subworth.recommendations.ranker import filter_subscribed, score_all_platforms
    from subworth.reporting.formatters import format_savings_summary

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    platforms = _load_platforms_or_exit(config)

    wanted = _resolve_interests(interests, profile_path)
    subscribed_ids = _resolve_platform_ids(platforms, subscribed)

    scores = score_all_platforms(platforms, wanted, _parse_date_or_exit(as_of))
    if subscribed_ids:
        scores = filter_subscribed(scores, subscribed_ids)

    typer.echo(format_savings_summary(scores, platforms, config.catalog.default_currency))


@app.command("export")
def export(
    interests: Optional[List[str]] = _interest_option(),
    profile_path: Optional[str] = _profile_option(),
    output_dir: Optional[str] = typer.Option(
        None, "--output-dir", "-o", help="Override config.output.verdicts_dir.",
    ),
    as_of: Optional[str] = _date_option(),
    config_path: Optional[str] = _config_option(),
) -> None:
    """Write this month's verdicts to JSON and CSV report files."""
    from subworth.recommendations.ranker import score_all_platforms
    from subworth.recommendations.reporter import write_verdict_csv, write_verdict_json

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    platforms = _load_platforms_or_exit(config)

    wanted = _resolve_interests(interests, profile_path)
    ref_date = _parse_date_or_exit(as_of) or date.today()
    out = Path(output_dir or config.output.verdicts_dir)

    scores = score_all_platforms(platforms, wanted, ref_date)
    try:
        json_path = write_verdict_json(scores, platforms, out, ref_date, wanted)
        csv_path = write_verdict_csv(scores, platforms, out, ref_date)
    except OSError as exc:
        typer.echo(f"[ERROR] Could not write reports: {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"  JSON: {json_path}")
    typer.echo(f"  CSV:  {csv_path}")
    typer.echo(f"[OK] {len(scores)} verdict(s) exported.")


def _tmdb_client(config):
    from subworth.ingestion.tmdb_client import TMDBClient

    return TMDBClient(
        api_key=config.tmdb.api_key,
        base_url=config.tmdb.base_url,
        language=config.tmdb.language,
        region=config.tmdb.region,
        timeout=config.tmdb.timeout_seconds,
        use_fixture=config.tmdb.use_fixture,
    )


@app.command("tmdb-trending")
def tmdb_trending(
    kind: str = typer.Option(
        "trending", "--kind", "-k", help="trending | movies | series",
    ),
    show_posters: bool = _posters_option(),
    config_path: Optional[str] = _config_option(),
) -> None:
    """List trending or popular titles from TMDB."""
    from subworth.reporting.formatters import format_tmdb_results

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    titles = {
        "trending": "Trending this week",
        "movies":   "Popular movies",
        "series":   "Popular series",
    }
    if kind not in titles:
        typer.echo(f"[ERROR] Unknown kind '{kind}'. Use trending, movies or series.", err=True)
        raise typer.Exit(code=1)

    with _tmdb_client(config) as client:
        if kind == "movies":
            items = client.get_popular_movies()
        elif kind == "series":
            items = client.get_popular_series()
        else:
            items = client.get_trending()
        is_fixture = not client.api_key and client.use_fixture

    typer.echo(format_tmdb_results(items, titles[kind], is_fixture, show_posters))


@app.command("tmdb-search")
def tmdb_search(
    query: str = typer.Argument(..., help="Title to search for."),
    show_posters: bool = _posters_option(),
    config_path: Optional[str] = _config_option(),
) -> None:
    """Search TMDB for movies and series."""
    from subworth.reporting.formatters import format_tmdb_results

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    with _tmdb_client(config) as client:
        items = client.search(query)
        is_fixture = not client.api_key and client.use_fixture

    typer.echo(format_tmdb_results(items, f"Search: {query}", is_fixture, show_posters))


@app.command("greet")
def greet(
    profile_path: str = typer.Option(..., "--profile", help="Path to a taste-profile JSON."),
) -> None:
    """Print the dashboard greeting and personality hook for a profile."""
    from pydantic import ValidationError

    from subworth.models.profile import TasteProfile
    from subworth.profile.personality import (
        generate_personality_hook,
        get_age_appropriate_modifier,
        get_personalized_greeting,
    )

    try:
        profile = TasteProfile.model_validate_json(
            Path(profile_path).read_text(encoding="utf-8")
        )
    except (OSError, ValidationError) as exc:
        typer.echo(f"[ERROR] Cannot load profile: {exc}", err=True)
        raise typer.Exit(code=1)

    hook = generate_personality_hook(profile)
    typer.echo(get_personalized_greeting(profile.user_name))
    typer.echo(f"{hook.line} ({hook.tone})")
    typer.echo(f"Tone: {get_age_appropriate_modifier(profile.user_age)}")


if __name__ == "__main__":
    app()
