"""
tmdb_client.py - TMDB metadata provider for series-browser.

Supplies the three lookups the rename workflow needs:
- the list of metadata languages,
- a series search by name,
- the full episode list of one series.

Responses are cached on disk as JSON and requests are retried with
exponential backoff on timeouts, rate limiting and server errors.
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import httpx

from episode_mapper import Episode, Series

TMDB_API_BASE = "https://api.themoviedb.org/3"
TMDB_TIMEOUT = 10  # seconds

# Retry settings
TMDB_MAX_RETRIES = 3
TMDB_RETRY_DELAY = 1.0  # seconds, will use exponential backoff

DEFAULT_CACHE_DIR = Path.home() / ".cache" / "series-browser"
DEFAULT_CACHE_EXPIRATION = 60  # minutes


class TMDBError(Exception):
    """Raised when TMDB cannot be reached or returns unusable data."""


class SeriesNotFoundError(TMDBError):
    """Raised when a series search has no results."""


@dataclass(frozen=True)
class Language:
    code: str
    name: str


# ─────────────────────────── API key ───────────────────────────


def load_env_file(path: Path) -> dict[str, str]:
    """Load key=value pairs from a .env file."""
    env_vars = {}
    if path.exists():
        with open(path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, _, value = line.partition("=")
                    env_vars[key.strip()] = value.strip().strip("\"'")
    return env_vars


def find_api_key(config_dir: Path | None = None) -> str | None:
    """TMDB_API_KEY from the environment, else from <config_dir>/.env."""
    key = os.environ.get("TMDB_API_KEY")
    if key:
        return key
    if config_dir is not None:
        return load_env_file(config_dir / ".env").get("TMDB_API_KEY") or None
    return None


# ─────────────────────────── Client ───────────────────────────


class TMDBClient:
    """Metadata provider backed by the TMDB v3 REST API."""

    def __init__(
        self,
        api_key: str,
        cache_dir: Path = DEFAULT_CACHE_DIR,
        cache_expiration: int = DEFAULT_CACHE_EXPIRATION,
    ) -> None:
        self.api_key = api_key
        self.cache_dir = cache_dir
        self.cache_expiration = cache_expiration

    # -- cache -------------------------------------------------------------

    def _cache_path(self, cache_key: str) -> Path:
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        # Hash the key to create a safe filename
        key_hash = hashlib.md5(cache_key.encode()).hexdigest()[:16]
        return self.cache_dir / f"{key_hash}.json"

    def _cached(self, cache_key: str) -> Any | None:
        cache_path = self._cache_path(cache_key)
        if not cache_path.exists():
            return None
        try:
            with open(cache_path) as f:
                cached = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logging.debug("Unreadable cache entry %s: %s", cache_path.name, e)
            return None

        age_minutes = (time.time() - cached.get("_cached_at", 0)) / 60
        if age_minutes < self.cache_expiration:
            return cached.get("data")
        return None

    def _store(self, cache_key: str, data: Any) -> None:
        cache_path = self._cache_path(cache_key)
        try:
            with open(cache_path, "w") as f:
                json.dump({"_cached_at": time.time(), "data": data}, f)
        except OSError as e:
            logging.warning("Could not write cache entry %s: %s", cache_path.name, e)

    # -- transport ---------------------------------------------------------

    def _request(self, endpoint: str, params: dict[str, Any] | None = None, cache_key: str | None = None) -> Any:
        """GET an API endpoint with caching and retries.

        Args:
            endpoint: Path below TMDB_API_BASE, e.g. "/search/tv"
            params: Query parameters (api_key is added)
            cache_key: If provided, check/save to cache

        Raises:
            TMDBError: when every attempt failed
        """
        if cache_key:
            cached = self._cached(cache_key)
            if cached is not None:
                logging.debug("Cache hit: %s", cache_key)
                return cached

        url = f"{TMDB_API_BASE}{endpoint}"
        query = {"api_key": self.api_key, **(params or {})}
        last_error: Exception | None = None

        for attempt in range(TMDB_MAX_RETRIES):
            delay = TMDB_RETRY_DELAY * (2**attempt)  # Exponential backoff
            try:
                with httpx.Client(timeout=TMDB_TIMEOUT) as client:
                    resp = client.get(url, params=query)
                    resp.raise_for_status()
                    data = resp.json()
                if cache_key:
                    self._store(cache_key, data)
                return data

            except httpx.TimeoutException as e:
                last_error = e
                logging.debug("TMDB timeout on %s (attempt %d/%d)", endpoint, attempt + 1, TMDB_MAX_RETRIES)

            except httpx.HTTPStatusError as e:
                last_error = e
                status = e.response.status_code
                # Don't retry on client errors (4xx) except 429 (rate limit)
                if 400 <= status < 500 and status != 429:
                    logging.debug("TMDB client error %d on %s", status, endpoint)
                    break
                logging.debug("TMDB status %d on %s (attempt %d/%d)", status, endpoint, attempt + 1, TMDB_MAX_RETRIES)

            except httpx.HTTPError as e:
                last_error = e
                logging.debug("TMDB error on %s (attempt %d/%d): %s", endpoint, attempt + 1, TMDB_MAX_RETRIES, e)

            if attempt < TMDB_MAX_RETRIES - 1:
                time.sleep(delay)

        logging.error("TMDB request %s failed: %s", endpoint, last_error)
        raise TMDBError(f"TMDB request failed: {last_error}")

    # -- provider API ------------------------------------------------------

    def list_languages(self) -> list[Language]:
        data = self._request("/configuration/languages", cache_key="languages")
        languages = [
            Language(code=lang["iso_639_1"], name=lang.get("english_name") or lang["iso_639_1"])
            for lang in (data if isinstance(data, list) else [])
            if isinstance(lang, dict) and lang.get("iso_639_1")
        ]
        return sorted(languages, key=lambda lang: lang.name.lower())

    def search_series(self, name: str, language: str) -> list[Series]:
        """Search TV series by name.

        Raises:
            SeriesNotFoundError: nothing matched
        """
        data = self._request(
            "/search/tv",
            {"query": name, "language": language},
            cache_key=f"search_tv:{name}:{language}",
        )
        results = data.get("results", []) if isinstance(data, dict) else []
        if not results:
            raise SeriesNotFoundError(f"No series found for '{name}'")

        series = []
        for show in results:
            year = (show.get("first_air_date") or "")[:4]
            series.append(
                Series(
                    id=show["id"],
                    name=show.get("name", "Unknown"),
                    language=language,
                    first_air_year=int(year) if year.isdigit() else None,
                )
            )
        return series

    def get_series_episodes(self, series_id: int, language: str) -> Series:
        """Fetch a series with the episodes of all its seasons."""
        details = self._request(
            f"/tv/{series_id}",
            {"language": language},
            cache_key=f"tv_details:{series_id}:{language}",
        )
        if not isinstance(details, dict):
            raise TMDBError(f"Unexpected details response for series {series_id}")

        season_numbers = [
            s["season_number"] for s in details.get("seasons", []) if s.get("season_number") is not None
        ]
        logging.debug("Fetching %d seasons for TMDB ID %s", len(season_numbers), series_id)

        episodes: list[Episode] = []
        with ThreadPoolExecutor(max_workers=max(len(season_numbers), 1)) as executor:
            futures = {
                executor.submit(self._season_episodes, series_id, season, language): season
                for season in season_numbers
            }
            for future in as_completed(futures):
                episodes.extend(future.result())

        episodes.sort(key=lambda ep: (ep.season, ep.number))
        year = (details.get("first_air_date") or "")[:4]
        return Series(
            id=series_id,
            name=details.get("name", "Unknown"),
            language=language,
            first_air_year=int(year) if year.isdigit() else None,
            episodes=tuple(episodes),
        )

    def _season_episodes(self, series_id: int, season: int, language: str) -> list[Episode]:
        data = self._request(
            f"/tv/{series_id}/season/{season}",
            {"language": language},
            cache_key=f"season:{series_id}:s{season}:{language}",
        )
        episodes = []
        for ep in data.get("episodes", []) if isinstance(data, dict) else []:
            ep_num = ep.get("episode_number")
            if ep_num is None:
                continue
            episodes.append(
                Episode(
                    id=ep.get("id", 0),
                    season=ep.get("season_number", season),
                    number=ep_num,
                    title=ep.get("name") or f"Episode {ep_num}",
                )
            )
        logging.debug("  Season %d: %d episodes", season, len(episodes))
        return episodes
