"""
TMDB (The Movie Database) client — trending, popular and search results
mapped onto catalog ``Content``.

API:   https://api.themoviedb.org/3
Docs:  https://developer.themoviedb.org/reference/intro/getting-started

Credential setup (.env, gitignored):
  TMDB_API_KEY=your_v3_api_key

Endpoints used::

    GET /trending/all/week
    GET /movie/popular?region=US
    GET /tv/popular?region=US
    GET /search/multi?query=...

Every request carries ``api_key``, ``language`` and ``include_adult=false``.

Failure policy
--------------
The dashboard treats TMDB as decoration, not a dependency: a missing API key,
a non-2xx response, a transport error or a body that is not a result list
is logged and the call returns an empty list.  Individual malformed results
are skipped.  Callers that need to distinguish "no results" from "API down"
should check ``TMDBClient.last_error``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, ClassVar, Optional

import httpx
from pydantic import ValidationError

from subworth.models.catalog import Content
from subworth.taxonomy.content_taxonomy import ContentType

logger = logging.getLogger(__name__)

IMG_BASE = "https://image.tmdb.org/t/p/w342"

# TMDB genre id → catalog genre tags (movie and TV ids share one namespace)
TMDB_GENRES: dict[int, list[str]] = {
    28:    ["action"],
    12:    ["adventure"],
    16:    ["animation"],
    35:    ["comedy"],
    80:    ["crime"],
    99:    ["documentary"],
    18:    ["drama"],
    10751: ["family"],
    14:    ["fantasy"],
    36:    ["history"],
    27:    ["horror"],
    10402: ["musical"],
    9648:  ["mystery"],
    10749: ["romance"],
    878:   ["sci-fi"],
    10770: ["tv-movie"],
    53:    ["thriller"],
    10752: ["war"],
    37:    ["western"],
    10759: ["action", "adventure"],
    10762: ["kids"],
    10763: ["news"],
    10764: ["reality"],
    10765: ["sci-fi", "fantasy"],
    10766: ["soap"],
    10767: ["talk"],
    10768: ["war", "politics"],
}


# ── Response types ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class TMDBItem:
    """A movie or TV result as returned by TMDB list/search endpoints."""

    id: int
    media_type: str                 # "movie" | "tv"
    title: str
    overview: str = ""
    release_date: Optional[str] = None
    vote_average: float = 0.0
    genre_ids: tuple[int, ...] = ()
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None

    @property
    def poster_url(self) -> Optional[str]:
        return f"{IMG_BASE}{self.poster_path}" if self.poster_path else None


@dataclass
class TMDBResponse:
    """Typed container for one TMDB list response."""

    endpoint: str = ""
    page: int = 1
    total_pages: int = 0
    items: list[TMDBItem] = field(default_factory=list)
    is_fixture: bool = False


# ── Client ─────────────────────────────────────────────────────────────────────

class TMDBClient:
    """Client for the TMDB v3 API.

    Usage (real API — requires TMDB_API_KEY in .env)::

        import os
        client = TMDBClient(api_key=os.environ["TMDB_API_KEY"])
        items = client.get_trending()
        content = [c for c in map(to_content, items) if c is not None]

    Usage (fixture mode — no key required)::

        client = TMDBClient(use_fixture=True)
        items = client.get_trending()

    Attributes:
        api_key: TMDB v3 API key, or ``None``.
        base_url: API root.
        language: ``language`` query parameter.
        region: ``region`` query parameter for popular lists.
        last_error: Description of the most recent failure, or ``None``.
    """

    BASE_URL: ClassVar[str] = "https://api.themoviedb.org/3"

    FIXTURE_ITEMS: ClassVar[list[dict[str, Any]]] = [
        {
            "id": 93405,
            "media_type": "tv",
            "name": "Squid Game",
            "overview": "Hundreds of cash-strapped players accept an invitation to compete in children's games.",
            "first_air_date": "2021-09-17",
            "vote_average": 7.8,
            "genre_ids": [10759, 9648, 18],
            "poster_path": "/dDlEmu3EZ0Pgg93K2SVNLCjCSvE.jpg",
        },
        {
            "id": 693134,
            "media_type": "movie",
            "title": "Dune: Part Two",
            "overview": "Paul Atreides unites with Chani and the Fremen.",
            "release_date": "2024-02-27",
            "vote_average": 8.2,
            "genre_ids": [878, 12],
            "poster_path": "/1pdfLvkbY9ohJlCjQH2CZjjYVvJ.jpg",
        },
        {
            "id": 95396,
            "media_type": "tv",
            "name": "Severance",
            "overview": "Mark leads a team of office workers whose memories have been surgically divided.",
            "first_air_date": "2022-02-17",
            "vote_average": 8.4,
            "genre_ids": [18, 9648, 10765],
            "poster_path": "/pPHpeI2X1qEd1CS1SeyrdhZ4qnT.jpg",
        },
    ]

    def __init__(
        self,
        api_key:     Optional[str] = None,
        base_url:    Optional[str] = None,
        language:    str = "en-US",
        region:      str = "US",
        timeout:     float = 10.0,
        use_fixture: bool = False,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        """Initialise the TMDB client.

        Args:
            api_key: TMDB v3 API key (``TMDB_API_KEY`` env var).
            base_url: Override the API root (tests, proxies).
            language: Result language. Default: ``"en-US"``.
            region: Region for popular lists. Default: ``"US"``.
            timeout: Per-request timeout in seconds.
            use_fixture: Serve ``FIXTURE_ITEMS`` when no API key is set.
            http_client: Pre-built ``httpx.Client`` (e.g. with a mock transport).
        """
        self.api_key = api_key
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.language = language
        self.region = region
        self.use_fixture = use_fixture
        self.last_error: Optional[str] = None
        self._client = http_client or httpx.Client(timeout=timeout)
        self._owns_client = http_client is None

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "TMDBClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ── Public endpoints ───────────────────────────────────────────────────────

    def get_trending(self) -> list[TMDBItem]:
        """Trending movies and TV shows this week."""
        return self._fetch("/trending/all/week").items

    def get_popular_movies(self) -> list[TMDBItem]:
        """Popular movies (endpoint omits media_type; tagged as ``movie``)."""
        return self._fetch(
            "/movie/popular", {"region": self.region}, default_media_type="movie"
        ).items

    def get_popular_series(self) -> list[TMDBItem]:
        """Popular TV series (endpoint omits media_type; tagged as ``tv``)."""
        return self._fetch(
            "/tv/popular", {"region": self.region}, default_media_type="tv"
        ).items

    def search(self, query: str) -> list[TMDBItem]:
        """Search movies and TV together; people are filtered out."""
        if not query or not query.strip():
            return []
        return self._fetch("/search/multi", {"query": query.strip()}).items

    # ── Transport ──────────────────────────────────────────────────────────────

    def _fetch(
        self,
        endpoint:           str,
        params:             Optional[dict[str, str]] = None,
        default_media_type: Optional[str] = None,
    ) -> TMDBResponse:
        self.last_error = None

        if not self.api_key:
            if self.use_fixture:
                return self.get_fixture_response(endpoint)
            self.last_error = "TMDB_API_KEY is missing"
            logger.warning("TMDB_API_KEY is missing; %s returns no results", endpoint)
            return TMDBResponse(endpoint=endpoint)

        query = {
            "api_key": self.api_key,
            "language": self.language,
            "include_adult": "false",
            **(params or {}),
        }

        try:
            resp = self._client.get(f"{self.base_url}{endpoint}", params=query)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as exc:
            self.last_error = f"HTTP {exc.response.status_code}"
            logger.error(
                "TMDB error on %s: %s %s",
                endpoint, exc.response.status_code, exc.response.reason_phrase,
            )
            return TMDBResponse(endpoint=endpoint)
        except (httpx.HTTPError, ValueError) as exc:
            self.last_error = str(exc) or exc.__class__.__name__
            logger.error("TMDB fetch error on %s: %s", endpoint, exc)
            return TMDBResponse(endpoint=endpoint)

        if not isinstance(data, dict):
            self.last_error = f"unexpected response body ({type(data).__name__})"
            logger.error("TMDB returned a non-object body on %s", endpoint)
            return TMDBResponse(endpoint=endpoint)

        return self._parse_response(data, endpoint, default_media_type)

    # ── Response parsers ───────────────────────────────────────────────────────

    def _parse_response(
        self,
        data:               dict[str, Any],
        endpoint:           str,
        default_media_type: Optional[str] = None,
    ) -> TMDBResponse:
        """Parse a TMDB list JSON body, keeping only movie and TV results.

        Malformed results are skipped; a ``results`` value that is not a list
        yields an empty response with ``last_error`` set.
        """
        results = data.get("results") or []
        if not isinstance(results, list):
            self.last_error = f"unexpected results field ({type(results).__name__})"
            logger.error("TMDB results on %s is not a list", endpoint)
            return TMDBResponse(endpoint=endpoint)

        items: list[TMDBItem] = []
        for raw in results:
            item = _parse_item(raw, default_media_type)
            if item is not None:
                items.append(item)
        return TMDBResponse(
            endpoint=endpoint,
            page=_as_int(data.get("page"), 1),
            total_pages=_as_int(data.get("total_pages"), 0),
            items=items,
            is_fixture=False,
        )

    # ── Fixture / stub mode ────────────────────────────────────────────────────

    def get_fixture_response(self, endpoint: str = "fixture") -> TMDBResponse:
        """Return canned TMDB results for demos and offline runs."""
        items = [
            item
            for item in (_parse_item(raw, None) for raw in self.FIXTURE_ITEMS)
            if item is not None
        ]
        logger.debug("TMDBClient: returning %d fixture items for %s", len(items), endpoint)
        return TMDBResponse(
            endpoint=f"fixture{endpoint}",
            page=1,
            total_pages=1,
            items=items,
            is_fixture=True,
        )


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value) if value is not None else default
    except (TypeError, ValueError):
        return default


def _as_date_str(value: Any) -> Optional[str]:
    return str(value) if value else None


def _parse_item(raw: Any, default_media_type: Optional[str]) -> Optional[TMDBItem]:
    """Build a ``TMDBItem`` from one result, or ``None`` if it is unusable."""
    if not isinstance(raw, dict):
        return None
    media_type = raw.get("media_type") or default_media_type
    if media_type not in ("movie", "tv") or raw.get("id") is None:
        return None
    try:
        return TMDBItem(
            id=int(raw["id"]),
            media_type=media_type,
            title=str(raw.get("title") or raw.get("name") or ""),
            overview=str(raw.get("overview") or ""),
            release_date=_as_date_str(raw.get("release_date") or raw.get("first_air_date")),
            vote_average=float(raw.get("vote_average") or 0.0),
            genre_ids=tuple(int(g) for g in raw.get("genre_ids") or []),
            poster_path=raw.get("poster_path"),
            backdrop_path=raw.get("backdrop_path"),
        )
    except (TypeError, ValueError) as exc:
        logger.debug("Skipping malformed TMDB result %r: %s", raw.get("id"), exc)
        return None


# ── Catalog mapping ───────────────────────────────────────────────────────────

def genre_tags(genre_ids: tuple[int, ...] | list[int]) -> list[str]:
    """Translate TMDB genre ids into catalog genre tags (unknown ids dropped)."""
    tags: list[str] = []
    for gid in genre_ids:
        for tag in TMDB_GENRES.get(gid, []):
            if tag not in tags:
                tags.append(tag)
    return tags


def to_content(item: TMDBItem) -> Optional[Content]:
    """Map a TMDB result onto catalog ``Content``.

    Returns ``None`` for items without a usable release date or title, which
    TMDB serves for announced-but-undated titles.
    """
    if not item.title or not item.release_date:
        return None
    try:
        released = date.fromisoformat(item.release_date)
    except ValueError:
        logger.debug("Skipping TMDB %s %d: bad date %r", item.media_type, item.id, item.release_date)
        return None

    rating = item.vote_average if item.vote_average > 0 else None
    try:
        return Content(
            id=f"tmdb-{item.media_type}-{item.id}",
            title=item.title,
            type=ContentType.MOVIE if item.media_type == "movie" else ContentType.SERIES,
            genre=genre_tags(item.genre_ids),
            release_date=released,
            rating=min(rating, 10.0) if rating is not None else None,
            description=item.overview,
        )
    except ValidationError as exc:
        logger.debug("Skipping TMDB %s %d: %s", item.media_type, item.id, exc)
        return None
