"""
SubWorth configuration.

Sources, lowest precedence first:
  1. ``config/default.toml``  (committed)
  2. ``config/local.toml``    (next to the chosen TOML file; gitignored)
  3. ``.env`` at the project root, loaded into the process environment
  4. Environment variables listed in ``_ENV_OVERRIDES``

``load_config()`` returns one frozen ``AppConfig``; commands read settings
from it instead of calling ``os.environ`` themselves.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Callable, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ── Sections ──────────────────────────────────────────────────────────────────


class CatalogConfig(BaseModel):
    """Where the month's platform catalog comes from."""

    model_config = ConfigDict(frozen=True)

    platforms_file: str = "config/platforms/platforms.json"
    default_currency: str = "$"


class TMDBConfig(BaseModel):
    """Movie-metadata API settings. The API key is read from ``TMDB_API_KEY``."""

    model_config = ConfigDict(frozen=True)

    base_url: str = "https://api.themoviedb.org/3"
    language: str = "en-US"
    region: str = "US"
    timeout_seconds: float = 10.0
    use_fixture: bool = False
    api_key: Optional[str] = None

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {v}.")
        return v


class OutputConfig(BaseModel):
    """Filesystem paths for generated reports."""

    model_config = ConfigDict(frozen=True)

    verdicts_dir: str = "data/outputs/verdicts"


class LoggingConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"logging.level must be one of {', '.join(_LOG_LEVELS)}; got '{v}'.")
        return level


class AppConfig(BaseModel):
    """Everything a CLI command needs to know about its environment."""

    model_config = ConfigDict(frozen=True)

    catalog: CatalogConfig = CatalogConfig()
    tmdb: TMDBConfig = TMDBConfig()
    output: OutputConfig = OutputConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Environment overrides ─────────────────────────────────────────────────────


def _truthy(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


# (env var, section or None for top level, key, parser)
_ENV_OVERRIDES: tuple[tuple[str, Optional[str], str, Callable[[str], Any]], ...] = (
    ("SUBWORTH_PLATFORMS_FILE", "catalog", "platforms_file", str),
    ("SUBWORTH_LOG_LEVEL",      "logging", "level",          str),
    ("SUBWORTH_TMDB_FIXTURE",   "tmdb",    "use_fixture",    _truthy),
    ("TMDB_API_KEY",            "tmdb",    "api_key",        str),
    ("SUBWORTH_DEBUG",          None,      "debug",          _truthy),
)


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Copy non-empty override variables from the environment into ``raw``."""
    for var, section, key, parse in _ENV_OVERRIDES:
        value = os.environ.get(var)
        if not value:
            continue
        target = raw if section is None else raw.setdefault(section, {})
        target[key] = parse(value)
    return raw


# ── Loading ───────────────────────────────────────────────────────────────────


def _project_root() -> Path:
    """Nearest ancestor of this file holding ``pyproject.toml``."""
    here = Path(__file__).resolve()
    for parent in here.parents:
        if (parent / "pyproject.toml").exists():
            return parent
    return here.parent.parent


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as f:
        return tomllib.load(f)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into a copy of ``base``; nested tables merge key by key."""
    merged = dict(base)
    for key, val in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(val, dict):
            merged[key] = _deep_merge(current, val)
        else:
            merged[key] = val
    return merged


def _anchor_catalog_path(raw: dict[str, Any], root: Path) -> None:
    """Point a relative ``platforms_file`` at the project root when it is not
    found relative to the working directory."""
    catalog = raw.get("catalog")
    if not isinstance(catalog, dict) or not catalog.get("platforms_file"):
        return
    path = Path(catalog["platforms_file"])
    if not path.is_absolute() and not path.exists() and (root / path).exists():
        catalog["platforms_file"] = str(root / path)


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Build the application config from TOML, ``.env`` and the environment.

    Args:
        config_path: TOML file to use instead of ``config/default.toml``.
            Without it, a missing default file means built-in defaults.

    Raises:
        FileNotFoundError: ``config_path`` was given but does not exist.
        pydantic.ValidationError: A merged value is invalid.
    """
    root = _project_root()
    load_dotenv(dotenv_path=root / ".env", override=False)

    if config_path is not None:
        toml_path: Optional[Path] = Path(config_path)
        if not toml_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {toml_path}\n"
                "Pass --config with an existing TOML file or omit it to use config/default.toml."
            )
    else:
        default = root / "config" / "default.toml"
        toml_path = default if default.exists() else None

    raw: dict[str, Any] = {}
    if toml_path is not None:
        raw = _read_toml(toml_path)
        local = toml_path.parent / "local.toml"
        if local.exists():
            raw = _deep_merge(raw, _read_toml(local))
        _anchor_catalog_path(raw, root)

    raw = _apply_env_overrides(raw)

    # [project] debug is a fallback for a top-level debug key.
    project = raw.pop("project", {}) or {}
    raw.setdefault("debug", project.get("debug", False))
    return AppConfig.model_validate(raw)
