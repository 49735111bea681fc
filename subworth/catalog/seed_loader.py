"""
Seed catalog loader: JSON → validated ``Platform`` list.

The committed fixture ``config/platforms/platforms.json`` holds a month's
platform catalog in the camelCase shape the web client uses::

    [
      {
        "id": "1", "name": "Netflix", "slug": "netflix",
        "monthlyPrice": 15.49, "baseScore": 7.5,
        "thisMonthContent": [
          {"id": "n1", "title": "...", "type": "series",
           "genre": ["thriller"], "releaseDate": "2024-12-26", "rating": 9.2}
        ]
      }
    ]

Validation rules
----------------
- The file must contain a JSON array.
- Duplicate platform ``id`` or ``slug`` values are rejected.
- Duplicate content ``id`` values within one platform are rejected.
- Each record must validate as a ``Platform``; the first failing record is
  reported with its index.

Usage
-----
    from subworth.catalog.seed_loader import load_platforms

    platforms = load_platforms(Path("config/platforms/platforms.json"))
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from subworth.models.catalog import Platform

log = logging.getLogger(__name__)


# ── Validation ────────────────────────────────────────────────────────────────

def _validate_records(records: list[dict[str, Any]]) -> None:
    """Raise ValueError for duplicate identifiers in the raw records."""
    seen_ids: set[str] = set()
    seen_slugs: set[str] = set()
    for i, rec in enumerate(records):
        if not isinstance(rec, dict):
            raise ValueError(f"Platform at index {i} is not a JSON object.")
        pid = rec.get("id")
        slug = str(rec.get("slug") or "").strip().lower()
        if not pid:
            raise ValueError(f"Platform at index {i} is missing 'id' field.")
        if str(pid) in seen_ids:
            raise ValueError(f"Duplicate platform id '{pid}' at index {i}.")
        if slug and slug in seen_slugs:
            raise ValueError(f"Duplicate platform slug '{slug}' at index {i}.")
        seen_ids.add(str(pid))
        if slug:
            seen_slugs.add(slug)

        content = rec.get("thisMonthContent", rec.get("this_month_content", []))
        content_ids: set[str] = set()
        for c in content or []:
            cid = str(c.get("id", "")) if isinstance(c, dict) else ""
            if cid and cid in content_ids:
                raise ValueError(
                    f"Duplicate content id '{cid}' in platform '{pid}' (index {i})."
                )
            content_ids.add(cid)


# ── Public API ────────────────────────────────────────────────────────────────

def parse_platforms(records: list[dict[str, Any]]) -> list[Platform]:
    """Validate raw platform records into ``Platform`` models.

    Args:
        records: List of platform dicts (camelCase or snake_case keys).

    Returns:
        Platforms in input order.

    Raises:
        ValueError: On duplicate identifiers or a record that fails validation.
    """
    if not isinstance(records, list):
        raise ValueError("Platform catalog must be a JSON array.")

    _validate_records(records)

    platforms: list[Platform] = []
    for i, rec in enumerate(records):
        try:
            platforms.append(Platform.model_validate(rec))
        except ValidationError as exc:
            raise ValueError(f"Platform at index {i} failed validation:\n{exc}") from exc
    return platforms


def load_platforms(path: Path) -> list[Platform]:
    """Load and validate a platform catalog JSON file.

    Args:
        path: Path to the catalog JSON file.

    Returns:
        Validated platforms in file order.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file is not valid JSON or fails validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Platform catalog not found: {path}")

    try:
        records = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Platform catalog {path} is not valid JSON: {exc}") from exc

    platforms = parse_platforms(records)
    log.info(
        "Loaded %d platforms (%d content items) from %s",
        len(platforms),
        sum(len(p.this_month_content) for p in platforms),
        path,
    )
    return platforms


def find_platform(platforms: list[Platform], key: str) -> Platform | None:
    """Look up a platform by id or slug (slug match is case-insensitive)."""
    needle = key.strip()
    for p in platforms:
        if p.id == needle or p.slug == needle.lower():
            return p
    return None
