"""
ASCII terminal formatters for CLI reporting commands.

All formatters accept scored verdicts / catalog models and return plain
multi-line strings suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Verdict tags
------------
Verdicts are rendered as fixed-width upper-case tags so columns line up::

  [BUY]       Netflix          9.6
  [CONTINUE]  Apple TV+        7.1
  [PAUSE]     Hulu             5.0   save $7.99
  [SKIP]      Disney+          3.4   save $13.99
"""

from __future__ import annotations

from subworth.ingestion.tmdb_client import TMDBItem
from subworth.models.catalog import Platform
from subworth.models.verdict import PlatformScore
from subworth.recommendations.ranker import calculate_total_savings, group_by_verdict
from subworth.taxonomy.content_taxonomy import Verdict


def format_verdict_tag(verdict: Verdict) -> str:
    return f"[{verdict.value.upper()}]"


# ── Verdict table ─────────────────────────────────────────────────────────────


def format_verdict_table(
    scores:      list[PlatformScore],
    platforms:   list[Platform],
    month:       str,
    interests:   list[str],
    subscribed:  set[str] | None = None,
) -> str:
    """Format ranked verdicts as an ASCII table.

    Columns: rank, verdict, platform, price, score, breakdown components,
    matched count, savings.  Subscribed platforms are marked with ``*``.

    Args:
        scores:     Ranked output of ``score_all_platforms()``.
        platforms:  Platforms the scores were computed from.
        month:      Month label for the header, e.g. ``"December 2024"``.
        interests:  Interests used for scoring (header display).
        subscribed: Optional set of platform ids the user pays for.

    Returns:
        Multi-line string.
    """
    by_id = {p.id: p for p in platforms}
    lines: list[str] = []
    lines.append("")
    lines.append(f"=== Verdicts for {month} ===")
    lines.append(f"  Interests: {', '.join(interests) if interests else '(none)'}")

    if not scores:
        lines.append("")
        lines.append("  (no platforms in catalog)")
        return "\n".join(lines)

    lines.append("")
    header = (
        f"  {'#':>2}  {'Verdict':<10}  {'Platform':<16}  {'Price':>8}  "
        f"{'Score':>5}  {'Base':>4}  {'Rel':>4}  {'New':>4}  {'Val':>4}  "
        f"{'Evt':>4}  {'Hits':>4}  {'Savings':>8}"
    )
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))

    for rank, s in enumerate(scores, start=1):
        p = by_id.get(s.platform_id)
        name = (p.name if p else s.platform_id)[:15]
        if subscribed and s.platform_id in subscribed:
            name = f"{name}*"
        currency = p.currency if p else "$"
        price_str = f"{currency}{p.monthly_price:.2f}" if p else "?"
        savings_str = f"{currency}{s.potential_savings:.2f}" if s.is_savings_candidate else "-"
        b = s.breakdown
        lines.append(
            f"  {rank:>2}  {format_verdict_tag(s.verdict):<10}  {name:<16}  "
            f"{price_str:>8}  {s.total_score:>5.1f}  {b.base_score:>4.1f}  "
            f"{b.relevance_bonus:>4.1f}  {b.freshness_bonus:>4.1f}  "
            f"{b.value_adjustment:>+4.1f}  {b.event_bonus:>4.1f}  "
            f"{len(s.matched_content):>4}  {savings_str:>8}"
        )

    if subscribed:
        lines.append("")
        lines.append("  * = currently subscribed")

    return "\n".join(lines)


# ── Single-platform details ───────────────────────────────────────────────────


def format_score_details(score: PlatformScore, platform: Platform, reason: str) -> str:
    """Format one platform's breakdown, matched titles and reason."""
    b = score.breakdown
    cur = platform.currency
    lines: list[str] = []
    lines.append("")
    lines.append(f"=== {platform.name} ({cur}{platform.monthly_price:.2f}/month) ===")
    lines.append(f"  Verdict:          {format_verdict_tag(score.verdict)}  {score.total_score:.1f} / 10")
    lines.append(f"  Base score:       {b.base_score:.1f}")
    lines.append(f"  Relevance bonus:  {b.relevance_bonus:+.1f}")
    lines.append(f"  Freshness bonus:  {b.freshness_bonus:+.1f}")
    lines.append(f"  Value adjustment: {b.value_adjustment:+.1f}")
    lines.append(f"  Event bonus:      {b.event_bonus:+.1f}")
    if score.potential_savings:
        lines.append(f"  Potential savings: {cur}{score.potential_savings:.2f}")
    lines.append("")
    lines.append(f"  Why: {reason}")

    if score.matched_content:
        lines.append("")
        lines.append("  Matched this month:")
        for c in score.matched_content:
            rating = f"{c.rating:.1f}" if c.rating is not None else "n/a"
            lines.append(
                f"    - {c.title[:40]:<40}  {c.type.value:<11}  {c.release_date}  {rating:>4}"
            )

    return "\n".join(lines)


# ── Savings summary ───────────────────────────────────────────────────────────


def format_savings_summary(
    scores:            list[PlatformScore],
    platforms:         list[Platform],
    fallback_currency: str = "$",
) -> str:
    """Summarize verdict counts and the money pause/skip verdicts would save.

    Amounts use the scored platforms' currency; ``fallback_currency`` applies
    when they mix currencies or nothing was scored.
    """
    by_id = {p.id: p for p in platforms}
    groups = group_by_verdict(scores)
    total = calculate_total_savings(scores)
    spend = sum(by_id[s.platform_id].monthly_price for s in scores if s.platform_id in by_id)
    currencies = {by_id[s.platform_id].currency for s in scores if s.platform_id in by_id}
    currency = currencies.pop() if len(currencies) == 1 else fallback_currency

    lines: list[str] = []
    lines.append("")
    lines.append("=== Savings Tracker ===")
    lines.append(f"  Platforms scored:   {len(scores)}")
    lines.append(f"  Monthly spend:      {currency}{spend:.2f}")
    lines.append(f"  Potential savings:  {currency}{total:.2f}")
    lines.append("")
    for verdict in Verdict:
        names = [
            by_id[s.platform_id].name if s.platform_id in by_id else s.platform_id
            for s in groups[verdict]
        ]
        listing = ", ".join(names) if names else "-"
        lines.append(f"  {format_verdict_tag(verdict):<10}  {len(names):>2}  {listing}")
    return "\n".join(lines)


# ── Catalog / TMDB listings ───────────────────────────────────────────────────


def format_platform_list(platforms: list[Platform]) -> str:
    """One line per platform: slug, name, price, base score, release count."""
    if not platforms:
        return "  (no platforms in catalog)"
    lines: list[str] = []
    header = f"  {'Slug':<12}  {'Name':<16}  {'Price':>8}  {'Base':>4}  {'Releases':>8}"
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for p in platforms:
        lines.append(
            f"  {p.slug:<12}  {p.name[:16]:<16}  {p.currency}{p.monthly_price:>7.2f}  "
            f"{p.base_score:>4.1f}  {len(p.this_month_content):>8}"
        )
    return "\n".join(lines)


def format_tmdb_results(
    items:        list[TMDBItem],
    title:        str,
    is_fixture:   bool = False,
    show_posters: bool = False,
) -> str:
    """List TMDB results with type, release date and rating.

    With ``show_posters`` each row is followed by its poster URL, if any.
    """
    lines: list[str] = []
    lines.append("")
    lines.append(f"=== {title} ===")
    if is_fixture:
        lines.append("  [FIXTURE] TMDB_API_KEY not set; showing sample data")
    if not items:
        lines.append("  (no results)")
        return "\n".join(lines)
    for item in items:
        kind = "movie" if item.media_type == "movie" else "series"
        released = item.release_date or "TBA"
        lines.append(
            f"  {item.title[:40]:<40}  {kind:<6}  {released:<10}  {item.vote_average:>4.1f}"
        )
        if show_posters and item.poster_url:
            lines.append(f"    {item.poster_url}")
    return "\n".join(lines)
