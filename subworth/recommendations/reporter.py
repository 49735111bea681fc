"""
Verdict report writer: CSV and JSON output for a month's platform verdicts.

All functions are pure I/O — they consume in-memory PlatformScore lists and
write human-readable + machine-readable files.

Output files (written by ``subworth export``)
---------------------------------------------
  data/outputs/verdicts/
    verdicts_{YYYY-MM}.csv    -- one row per platform, ranked
    verdicts_{YYYY-MM}.json   -- same data, shaped like the monthly verdict
                                 record the dashboard reads
"""

from __future__ import annotations

import csv
import json
import logging
from datetime import date
from pathlib import Path

from subworth.models.catalog import Platform
from subworth.models.verdict import PlatformScore
from subworth.recommendations.ranker import calculate_total_savings
from subworth.recommendations.scorer import build_reasoning
from subworth.utils.time_utils import utcnow

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "v1.0.0"


def write_verdict_csv(
    scores:     list[PlatformScore],
    platforms:  list[Platform],
    output_dir: Path,
    run_date:   date | None = None,
) -> Path:
    """Write ranked verdicts to a CSV file.

    Columns: rank, platform_id, name, monthly_price, total_score, verdict,
             base_score, relevance_bonus, freshness_bonus, value_adjustment,
             event_bonus, matched_count, potential_savings, reason.

    Args:
        scores:     Output of ``score_all_platforms()`` (already ranked).
        platforms:  Platforms the scores were computed from.
        output_dir: Directory to write the file (created if missing).
        run_date:   Date whose month labels the file. Defaults to today.

    Returns:
        Path to the written CSV file.
    """
    if run_date is None:
        run_date = date.today()

    by_id = {p.id: p for p in platforms}
    output_dir.mkdir(parents=True, exist_ok=True)
    csv_path = output_dir / f"verdicts_{run_date:%Y-%m}.csv"

    fieldnames = [
        "rank", "platform_id", "name", "monthly_price", "total_score", "verdict",
        "base_score", "relevance_bonus", "freshness_bonus", "value_adjustment",
        "event_bonus", "matched_count", "potential_savings", "reason",
    ]

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for rank, s in enumerate(scores, start=1):
            platform = by_id.get(s.platform_id)
            writer.writerow(
                {
                    "rank":              rank,
                    "platform_id":       s.platform_id,
                    "name":              platform.name if platform else "",
                    "monthly_price":     platform.monthly_price if platform else "",
                    "total_score":       s.total_score,
                    "verdict":           s.verdict.value,
                    "base_score":        s.breakdown.base_score,
                    "relevance_bonus":   s.breakdown.relevance_bonus,
                    "freshness_bonus":   s.breakdown.freshness_bonus,
                    "value_adjustment":  s.breakdown.value_adjustment,
                    "event_bonus":       s.breakdown.event_bonus,
                    "matched_count":     len(s.matched_content),
                    "potential_savings": s.potential_savings,
                    "reason":            build_reasoning(s, platform) if platform else "",
                }
            )

    logger.info("Verdict CSV written: %s (%d rows)", csv_path, len(scores))
    return csv_path


def write_verdict_json(
    scores:     list[PlatformScore],
    platforms:  list[Platform],
    output_dir: Path,
    run_date:   date | None = None,
    interests:  list[str] | None = None,
) -> Path:
    """Write the month's verdicts to a structured JSON file.

    Args:
        scores:     Output of ``score_all_platforms()`` (already ranked).
        platforms:  Platforms the scores were computed from.
        output_dir: Target directory.
        run_date:   Date whose month/year labels the report. Defaults to today.
        interests:  Interests the scores were computed for (provenance).

    Returns:
        Path to the written JSON file.
    """
    if run_date is None:
        run_date = date.today()

    by_id = {p.id: p for p in platforms}
    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"verdicts_{run_date:%Y-%m}.json"

    entries: list[dict] = []
    for rank, s in enumerate(scores, start=1):
        platform = by_id.get(s.platform_id)
        record = s.to_record()
        record["rank"] = rank
        record["name"] = platform.name if platform else None
        record["monthlyPrice"] = platform.monthly_price if platform else None
        record["reason"] = build_reasoning(s, platform) if platform else ""
        entries.append(record)

    payload: dict = {
        "schema_version": SCHEMA_VERSION,
        "month":          run_date.month,
        "year":           run_date.year,
        "generated_at":   utcnow().isoformat(),
        "interests":      list(interests or []),
        "totalSavings":   round(calculate_total_savings(scores), 2),
        "platforms":      entries,
    }

    json_path.write_text(json.dumps(payload, indent=2, default=str), encoding="utf-8")
    logger.info("Verdict JSON written: %s", json_path)
    return json_path
