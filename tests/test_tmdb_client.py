"""TMDB client tests with httpx.Client replaced by a scripted fake."""

from pathlib import Path
from typing import Any

import httpx
import pytest

import tmdb_client
from tmdb_client import Language, SeriesNotFoundError, TMDBClient, TMDBError


class _FakeResponse:
    def __init__(self, data: Any, status: int = 200):
        self._data = data
        self.status_code = status

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            request = httpx.Request("GET", "https://api.themoviedb.org/3/x")
            response = httpx.Response(self.status_code, request=request)
            raise httpx.HTTPStatusError("boom", request=request, response=response)

    def json(self) -> Any:
        return self._data


class _FakeHttp:
    """Routes GETs by endpoint suffix; a route may hold a list of responses served in turn."""

    def __init__(self, routes: dict[str, Any]):
        self.routes = routes
        self.calls: list[tuple[str, dict]] = []

    def __call__(self, *args, **kwargs):
        return self

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def get(self, url, params=None):
        self.calls.append((url, dict(params or {})))
        for suffix, result in self.routes.items():
            if url.endswith(suffix):
                if isinstance(result, list):
                    result = result.pop(0)
                if isinstance(result, Exception):
                    raise result
                return result
        raise AssertionError(f"unexpected GET {url}")


@pytest.fixture
def client(tmp_path: Path) -> TMDBClient:
    return TMDBClient(api_key="k", cache_dir=tmp_path / "cache", cache_expiration=60)


@pytest.fixture
def no_sleep(monkeypatch):
    sleeps: list[float] = []
    monkeypatch.setattr(tmdb_client.time, "sleep", sleeps.append)
    return sleeps


def _install(monkeypatch, routes) -> _FakeHttp:
    fake = _FakeHttp(routes)
    monkeypatch.setattr(tmdb_client.httpx, "Client", fake)
    return fake


def test_list_languages_sorted_by_name(client, monkeypatch):
    _install(
        monkeypatch,
        {
            "/configuration/languages": _FakeResponse(
                [
                    {"iso_639_1": "en", "english_name": "English"},
                    {"iso_639_1": "de", "english_name": "German"},
                    {"iso_639_1": "xx", "english_name": ""},
                ]
            )
        },
    )
    assert client.list_languages() == [
        Language("en", "English"),
        Language("de", "German"),
        Language("xx", "xx"),
    ]


def test_list_languages_error_body_is_empty(client, monkeypatch):
    _install(
        monkeypatch,
        {"/configuration/languages": _FakeResponse({"status_code": 7, "status_message": "Invalid API key"})},
    )
    assert client.list_languages() == []


def test_search_series(client, monkeypatch):
    fake = _install(
        monkeypatch,
        {
            "/search/tv": _FakeResponse(
                {"results": [{"id": 7, "name": "Show", "first_air_date": "2019-04-01"}, {"id": 8, "name": "Show 2"}]}
            )
        },
    )
    results = client.search_series("Show", "de")

    assert [(s.id, s.name, s.first_air_year, s.language) for s in results] == [
        (7, "Show", 2019, "de"),
        (8, "Show 2", None, "de"),
    ]
    assert fake.calls[0][1] == {"api_key": "k", "query": "Show", "language": "de"}


def test_search_without_results_raises_not_found(client, monkeypatch):
    _install(monkeypatch, {"/search/tv": _FakeResponse({"results": []})})
    with pytest.raises(SeriesNotFoundError):
        client.search_series("Nope", "en")


def test_second_lookup_is_served_from_cache(client, monkeypatch):
    fake = _install(monkeypatch, {"/search/tv": _FakeResponse({"results": [{"id": 7, "name": "Show"}]})})

    client.search_series("Show", "en")
    client.search_series("Show", "en")

    assert len(fake.calls) == 1


def test_expired_cache_is_refetched(tmp_path, monkeypatch):
    client = TMDBClient(api_key="k", cache_dir=tmp_path, cache_expiration=0)
    fake = _install(
        monkeypatch,
        {"/search/tv": [_FakeResponse({"results": [{"id": 7, "name": "Show"}]})] * 2},
    )

    client.search_series("Show", "en")
    client.search_series("Show", "en")

    assert len(fake.calls) == 2


def test_get_series_episodes_merges_seasons(client, monkeypatch):
    _install(
        monkeypatch,
        {
            "/tv/7": _FakeResponse(
                {
                    "name": "Show",
                    "first_air_date": "2019-01-01",
                    "seasons": [{"season_number": 2}, {"season_number": 1}],
                }
            ),
            "/tv/7/season/1": _FakeResponse(
                {
                    "episodes": [
                        {"id": 12, "season_number": 1, "episode_number": 2, "name": "Second Episode"},
                        {"id": 11, "season_number": 1, "episode_number": 1, "name": "Pilot"},
                    ]
                }
            ),
            "/tv/7/season/2": _FakeResponse({"episodes": [{"id": 21, "season_number": 2, "episode_number": 1}]}),
        },
    )
    series = client.get_series_episodes(7, "en")

    assert series.name == "Show"
    assert series.first_air_year == 2019
    assert [(e.season, e.number, e.title) for e in series.episodes] == [
        (1, 1, "Pilot"),
        (1, 2, "Second Episode"),
        (2, 1, "Episode 1"),
    ]
    assert series.seasons == [1, 2]


def test_retries_server_errors_with_backoff(client, monkeypatch, no_sleep):
    fake = _install(
        monkeypatch,
        {
            "/search/tv": [
                _FakeResponse(None, status=503),
                httpx.ConnectTimeout("slow"),
                _FakeResponse({"results": [{"id": 7, "name": "Show"}]}),
            ]
        },
    )
    assert client.search_series("Show", "en")[0].id == 7
    assert len(fake.calls) == 3
    assert no_sleep == [1.0, 2.0]


def test_client_error_is_not_retried(client, monkeypatch, no_sleep):
    fake = _install(monkeypatch, {"/search/tv": [_FakeResponse(None, status=401)]})

    with pytest.raises(TMDBError):
        client.search_series("Show", "en")

    assert len(fake.calls) == 1
    assert no_sleep == []


def test_gives_up_after_max_retries(client, monkeypatch, no_sleep):
    fake = _install(monkeypatch, {"/search/tv": [_FakeResponse(None, status=429)] * tmdb_client.TMDB_MAX_RETRIES})

    with pytest.raises(TMDBError) as exc_info:
        client.search_series("Show", "en")

    assert not isinstance(exc_info.value, SeriesNotFoundError)
    assert len(fake.calls) == tmdb_client.TMDB_MAX_RETRIES


class TestApiKey:
    def test_env_var_wins(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("TMDB_API_KEY=from-file\n")
        monkeypatch.setenv("TMDB_API_KEY", "from-env")
        assert tmdb_client.find_api_key(tmp_path) == "from-env"

    def test_env_file_fallback(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text('# comment\nTMDB_API_KEY="quoted"\n')
        monkeypatch.delenv("TMDB_API_KEY", raising=False)
        assert tmdb_client.find_api_key(tmp_path) == "quoted"

    def test_missing(self, tmp_path, monkeypatch):
        monkeypatch.delenv("TMDB_API_KEY", raising=False)
        assert tmdb_client.find_api_key(tmp_path) is None
        assert tmdb_client.find_api_key(None) is None
