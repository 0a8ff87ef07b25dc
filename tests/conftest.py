"""
Pytest configuration and fixtures for series-browser tests.
"""

import os
import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from episode_mapper import Episode, Series  # noqa: E402
from series_browser import WorkflowContext, load_config  # noqa: E402
from tmdb_client import Language, SeriesNotFoundError  # noqa: E402

ENGLISH = Language(code="en", name="English")
GERMAN = Language(code="de", name="German")


class FakePrompts:
    """Scripted PromptUI: every prompt call consumes the next scripted answer."""

    def __init__(self, answers=()):
        self.answers = list(answers)
        self.calls: list[tuple[str, dict]] = []
        self.messages: list[tuple[str, str]] = []

    def _next(self, kind, **kwargs):
        self.calls.append((kind, kwargs))
        if not self.answers:
            raise AssertionError(f"prompt script exhausted at {kind}: {kwargs.get('header')!r}")
        return self.answers.pop(0)

    def select_one(self, choices, header="", footer="", initial=None, commands=()):
        return self._next(
            "select", choices=list(choices), header=header, footer=footer, initial=initial, commands=tuple(commands)
        )

    def text_input(self, message, header="", footer="", initial=""):
        return self._next("text", message=message, header=header, footer=footer, initial=initial)

    def confirm(self, message, footer=""):
        return self._next("confirm", message=message, footer=footer)

    def notify(self, message, level="info"):
        self.messages.append((level, message))


class FakeProvider:
    def __init__(self, series: Series, not_found: bool = False):
        self.series = series
        self.not_found = not_found
        self.searches: list[tuple[str, str]] = []

    def list_languages(self):
        return [GERMAN, ENGLISH]

    def search_series(self, name, language):
        self.searches.append((name, language))
        if self.not_found:
            raise SeriesNotFoundError(f"No series found for '{name}'")
        return [Series(id=self.series.id, name=self.series.name, language=language, first_air_year=2019)]

    def get_series_episodes(self, series_id, language):
        return self.series


@pytest.fixture
def show_series() -> Series:
    return Series(
        id=42,
        name="Show",
        language="en",
        first_air_year=2019,
        episodes=(
            Episode(id=101, season=1, number=1, title="Pilot"),
            Episode(id=102, season=1, number=2, title="Second Episode"),
            Episode(id=201, season=2, number=1, title="Return"),
        ),
    )


@pytest.fixture
def show_dir(tmp_path: Path) -> Path:
    """Show (2019)/Season 1/ with two episodes and a readme."""
    root = tmp_path / "Show (2019)"
    season = root / "Season 1"
    season.mkdir(parents=True)
    for name in ("Show.e01.mkv", "Show.e02.mkv", "readme.txt"):
        (season / name).write_text("x")
    return root


@pytest.fixture
def cfg():
    return load_config(None)


@pytest.fixture
def make_ctx(cfg, show_series):
    def _make(answers=(), not_found=False):
        return WorkflowContext(
            prompts=FakePrompts(answers),
            provider=FakeProvider(show_series, not_found=not_found),
            config=cfg,
        )

    return _make


@pytest.fixture
def english() -> Language:
    return ENGLISH
