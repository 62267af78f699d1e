"""Pydantic configuration models with validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from .defaults import DEFAULT_PROVIDERS

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


def _normalize_path(value: Any) -> Path:
    """
    Normalize a path-like value without causing filesystem side-effects.

    This function MUST NOT create directories or files.
    """
    if isinstance(value, Path):
        return value.expanduser()
    if isinstance(value, str):
        return Path(value).expanduser()
    raise TypeError(f"Expected path-like value, got: {type(value)!r}")


class SearchConfig(BaseModel):
    """Interactive search tuning (YAML section: search.*)."""

    debounce_ms: int = Field(
        default=300,
        description="Quiet period after the last keystroke before searching.",
    )
    min_query_length: int = Field(
        default=2,
        description="Trimmed queries shorter than this never reach the catalog.",
    )

    @field_validator("debounce_ms")
    @classmethod
    def _validate_debounce(cls, v: int) -> int:
        if v < 0:
            raise ValueError("debounce_ms must be >= 0")
        return v

    @field_validator("min_query_length")
    @classmethod
    def _validate_min_length(cls, v: int) -> int:
        if v < 1:
            raise ValueError("min_query_length must be >= 1")
        return v

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0


class EmbedProviderConfig(BaseModel):
    """One embed provider row: name, label and its three URL templates."""

    name: str
    label: str
    movie_template: str
    show_template: str
    episode_template: str

    @field_validator("movie_template", "show_template", "episode_template")
    @classmethod
    def _validate_template(cls, v: str, info: ValidationInfo) -> str:
        if "{id}" not in v:
            raise ValueError(f"template must contain '{{id}}': {v!r}")
        # Movie and show URLs are filled with the id alone.
        fields: dict[str, int] = {"id": 1}
        if info.field_name == "episode_template":
            fields.update(season=1, episode=1)
        try:
            v.format(**fields)
        except (KeyError, IndexError, ValueError) as exc:
            raise ValueError(f"invalid URL template {v!r}: {exc}") from exc
        return v


class PlaybackConfig(BaseModel):
    """Embed provider table (YAML section: playback.*). Order is cycle order."""

    providers: list[EmbedProviderConfig] = Field(
        default_factory=lambda: [
            EmbedProviderConfig(**row) for row in DEFAULT_PROVIDERS
        ],
        description="Ordered embed providers; the first one is tried first.",
    )

    @field_validator("providers")
    @classmethod
    def _validate_providers(
        cls, v: list[EmbedProviderConfig]
    ) -> list[EmbedProviderConfig]:
        if not v:
            raise ValueError("playback.providers must not be empty")
        names = [p.name for p in v]
        if len(names) != len(set(names)):
            raise ValueError(f"duplicate provider names: {names}")
        return v


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (http/logging/cache/tmdb/search/playback).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="marquee", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # HTTP client (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=10.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="Timeout for catalog API requests (seconds).",
    )
    http_user_agent: str = Field(
        default="Marquee/0.1.0",
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for outgoing HTTP requests.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    # Catalog response cache (YAML section: cache.*)
    cache_dir: Path = Field(
        default=Path("./.cache/marquee"),
        validation_alias=AliasChoices(
            "cache_dir",
            AliasPath("cache", "dir"),
        ),
        description="Diskcache directory for catalog responses.",
    )
    cache_ttl_seconds: int = Field(
        default=3600,
        validation_alias=AliasChoices(
            "cache_ttl_seconds",
            AliasPath("cache", "ttl_seconds"),
        ),
        description="Default cache TTL in seconds. 0 disables caching.",
    )

    # Catalog API (YAML section: tmdb.*)
    tmdb_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "tmdb_api_key",
            AliasPath("tmdb", "api_key"),
        ),
        description="TMDB API key. Without it every catalog page shows an error.",
    )
    tmdb_language: str = Field(
        default="en-US",
        validation_alias=AliasChoices(
            "tmdb_language",
            AliasPath("tmdb", "language"),
        ),
        description="Locale for catalog titles and overviews.",
    )

    search: SearchConfig = Field(default_factory=SearchConfig)
    playback: PlaybackConfig = Field(default_factory=PlaybackConfig)

    @field_validator("cache_dir", mode="before")
    @classmethod
    def _validate_paths(cls, v: Any) -> Path:
        return _normalize_path(v)

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @field_validator("cache_ttl_seconds")
    @classmethod
    def _validate_cache_ttl(cls, v: int) -> int:
        if v < 0:
            raise ValueError("cache_ttl_seconds must be >= 0")
        return v

    @field_validator("tmdb_api_key")
    @classmethod
    def _blank_key_is_missing(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.

        The API key is never dumped.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "user_agent": self.http_user_agent,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
            "cache": {
                "dir": str(self.cache_dir),
                "ttl_seconds": self.cache_ttl_seconds,
            },
            "tmdb": {
                "api_key_set": self.tmdb_api_key is not None,
                "language": self.tmdb_language,
            },
            "search": self.search.model_dump(),
            "playback": self.playback.model_dump(),
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    load.py creates EnvOverrides() to read MARQUEE_* variables, converts them
    to a dict of set values and merges that over YAML/defaults before
    validating AppConfig.

    Supported env var examples (flat, explicit):
    - MARQUEE_TMDB_API_KEY (or plain TMDB_API_KEY)
    - MARQUEE_HTTP_TIMEOUT_SECONDS
    - MARQUEE_SEARCH_DEBOUNCE_MS
    - MARQUEE_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="MARQUEE_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    http_timeout_seconds: Optional[float] = None
    http_user_agent: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    cache_dir: Optional[Path] = None
    cache_ttl_seconds: Optional[int] = None

    tmdb_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("MARQUEE_TMDB_API_KEY", "TMDB_API_KEY"),
    )
    tmdb_language: Optional[str] = None

    search_debounce_ms: Optional[int] = None
    search_min_query_length: Optional[int] = None

    @field_validator("cache_dir", mode="before")
    @classmethod
    def _validate_paths(cls, v: Any) -> Any:
        if v is None:
            return None
        return _normalize_path(v)

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
