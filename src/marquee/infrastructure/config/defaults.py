"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_PROVIDERS: list[dict[str, str]] = [
    {
        "name": "vidsrc",
        "label": "Vidsrc",
        "movie_template": "https://vidsrc.xyz/embed/movie?tmdb={id}",
        "show_template": "https://vidsrc.xyz/embed/tv?tmdb={id}",
        "episode_template": (
            "https://vidsrc.xyz/embed/tv?tmdb={id}&season={season}&episode={episode}"
        ),
    },
    {
        "name": "2embed",
        "label": "2Embed",
        "movie_template": "https://2embed.org/embed/movie?tmdb={id}",
        "show_template": "https://2embed.org/embed/tv?tmdb={id}",
        "episode_template": "https://2embed.org/embed/tv?tmdb={id}&s={season}&e={episode}",
    },
    {
        "name": "superembed",
        "label": "SuperEmbed",
        "movie_template": "https://multiembed.mov/?video=tmdb:{id}",
        "show_template": "https://multiembed.mov/?video=tmdb:{id}",
        "episode_template": "https://multiembed.mov/?video=tmdb:{id}&s={season}&e={episode}",
    },
]

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "marquee",
    "environment": "dev",
    "http": {
        "timeout_seconds": 10.0,
        "user_agent": "Marquee/0.1.0",
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "cache": {
        "dir": "./.cache/marquee",
        "ttl_seconds": 3600,
    },
    "tmdb": {
        "api_key": None,
        "language": "en-US",
    },
    "search": {
        "debounce_ms": 300,
        "min_query_length": 2,
    },
    "playback": {
        "providers": DEFAULT_PROVIDERS,
    },
}
