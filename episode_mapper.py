"""
episode_mapper.py - Turn loose episode files into canonical, reviewable renames.

Pipeline:
- Detect season folders under a series directory ("Season 1", "S02", "3").
- Parse an episode number out of each video filename (E07 > 7x07 > 07).
- Look the number up in the provider's episode list for that season.
- Build the target name:
      Series.Name.S01E07.Episode.Title.mkv
- Collect everything in a SeasonMapping the user can review and correct
  before the batch rename runs.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

import tree_walker
from tree_walker import VIDEO_EXTS

# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Episode:
    id: int
    season: int
    number: int
    title: str


@dataclass(frozen=True)
class Series:
    id: int
    name: str
    language: str
    first_air_year: int | None = None
    episodes: tuple[Episode, ...] = ()

    @property
    def seasons(self) -> list[int]:
        return sorted({ep.season for ep in self.episodes})

    def episodes_in_season(self, season: int) -> list[Episode]:
        return [ep for ep in self.episodes if ep.season == season]


@dataclass(frozen=True)
class SeasonFolder:
    folder_name: str
    season: int


@dataclass(frozen=True)
class EpisodeMapping:
    original_path: str
    proposed_path: str
    season: int
    season_folder: str
    label: str  # "07" for matched files, the filename otherwise
    episode: Episode | None = None

    @property
    def rename(self) -> bool:
        return self.original_path != self.proposed_path

    @property
    def filename(self) -> str:
        return os.path.basename(self.original_path)

    @property
    def proposed_name(self) -> str:
        return os.path.basename(self.proposed_path)


@dataclass
class SeasonEntry:
    folder_name: str
    mappings: list[EpisodeMapping] = field(default_factory=list)


class SeasonMapping:
    """Season number -> SeasonEntry, always iterated in ascending season order."""

    def __init__(self, entries: dict[int, SeasonEntry] | None = None) -> None:
        self._entries: dict[int, SeasonEntry] = dict(entries or {})

    def __getitem__(self, season: int) -> SeasonEntry:
        return self._entries[season]

    def __setitem__(self, season: int, entry: SeasonEntry) -> None:
        self._entries[season] = entry

    def __contains__(self, season: object) -> bool:
        return season in self._entries

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def items(self) -> list[tuple[int, SeasonEntry]]:
        return [(season, self._entries[season]) for season in self]

    def all_mappings(self) -> list[EpisodeMapping]:
        return [m for _, entry in self.items() for m in entry.mappings]

    def pending_renames(self) -> list[EpisodeMapping]:
        return [m for m in self.all_mappings() if m.rename]

    def duplicate_episodes(self, season: int) -> set[int]:
        """Episode ids claimed by more than one file in the given season."""
        seen: set[int] = set()
        dupes: set[int] = set()
        for m in self._entries[season].mappings:
            if m.episode is None:
                continue
            if m.episode.id in seen:
                dupes.add(m.episode.id)
            seen.add(m.episode.id)
        return dupes


# ---------------------------------------------------------------------------
# Episode number parsing
# ---------------------------------------------------------------------------

# Tried in order, first hit wins
EPISODE_PATTERNS = (
    re.compile(r"[eE](\d+)"),  # Show.E07 / Show.s01e07
    re.compile(r"[xX](\d+)"),  # Show.1x07
    re.compile(r"(\d+)"),  # Show.07
)

SEASON_FOLDER_PATTERN = re.compile(r"\d+")


def parse_episode_number(filename: str) -> int | None:
    """Extract a candidate episode number from a filename.

    'Show.E07.mkv'  -> 7
    'Show.7x07.mkv' -> 7
    'Show.07.mkv'   -> 7
    'Show.mkv'      -> None

    Only the stem is searched, so extensions like .mp4 never count as a number.
    """
    stem = os.path.splitext(filename)[0]
    for pattern in EPISODE_PATTERNS:
        m = pattern.search(stem)
        if m:
            return int(m.group(1))
    return None


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------

# Order matters: ": " must be handled before " " becomes "."
SANITIZE_REPLACEMENTS = (
    ("ä", "ae"),
    ("ö", "oe"),
    ("ü", "ue"),
    ("ß", "ss"),
    ("Ä", "AE"),
    ("Ö", "OE"),
    ("Ü", "UE"),
    ("?", ""),
    (",", ""),
    (": ", "-"),
    (":", "-"),
    ('"', "'"),
    (" ", "."),
    ("/", "_"),
    ("\t", ""),
)


def sanitize_filename(name: str) -> str:
    """Make a generated episode name filesystem and scene friendly.

    'Show.S01E02.Über: Alles?.mkv' -> 'Show.S01E02.UEber-Alles.mkv'
    """
    for old, new in SANITIZE_REPLACEMENTS:
        name = name.replace(old, new)
    return name


def format_episode_number(number: int, episodes_in_season: int) -> str:
    """Zero-pad to 2 digits, or 3 when the season has 100+ episodes."""
    if episodes_in_season < 100:
        return f"{number:02d}"
    return f"{number:03d}"


def build_episode_filename(
    series_name: str,
    season: int,
    number: int,
    title: str,
    episodes_in_season: int,
    extension: str,
) -> str:
    ordinal = format_episode_number(number, episodes_in_season)
    return sanitize_filename(f"{series_name}.S{season:02d}E{ordinal}.{title}{extension.lower()}")


# ---------------------------------------------------------------------------
# Mapping builder
# ---------------------------------------------------------------------------


def find_season_folders(series_directory: str) -> list[SeasonFolder]:
    """Return season folders of a series directory, ordered by season.

    The first run of digits in the folder name is the season number; folders
    without one are ignored. If two folders claim the same season, the first
    one by name is used.
    """
    _, folders = tree_walker.list_entries(series_directory)
    by_season: dict[int, SeasonFolder] = {}
    for folder_name in folders:
        m = SEASON_FOLDER_PATTERN.search(folder_name)
        if not m:
            logging.debug("No season number in folder name: %s", folder_name)
            continue
        season = int(m.group(0))
        if season in by_season:
            logging.warning(
                "Season %d claimed by both '%s' and '%s', ignoring the latter",
                season,
                by_season[season].folder_name,
                folder_name,
            )
            continue
        by_season[season] = SeasonFolder(folder_name=folder_name, season=season)
    return [by_season[s] for s in sorted(by_season)]


def unchanged_mapping(season_folder: str, season: int, filename: str) -> EpisodeMapping:
    path = os.path.join(season_folder, filename)
    return EpisodeMapping(
        original_path=path,
        proposed_path=path,
        season=season,
        season_folder=season_folder,
        label=filename,
    )


def map_episode_file(
    series_name: str,
    season_folder: str,
    season: int,
    filename: str,
    episodes_in_season: list[Episode],
    forced_number: int | None = None,
    video_exts: Iterable[str] = VIDEO_EXTS,
) -> EpisodeMapping:
    """Build the mapping for one file of a season folder.

    Non-video files, unparsable names and numbers the season does not have
    all produce an unchanged mapping.
    """
    if not tree_walker.is_video_file(filename, video_exts):
        return unchanged_mapping(season_folder, season, filename)

    number = forced_number if forced_number is not None else parse_episode_number(filename)
    if number is None:
        return unchanged_mapping(season_folder, season, filename)

    episode = next((ep for ep in episodes_in_season if ep.number == number), None)
    if episode is None:
        return unchanged_mapping(season_folder, season, filename)

    new_name = build_episode_filename(
        series_name,
        episode.season,
        episode.number,
        episode.title,
        len(episodes_in_season),
        os.path.splitext(filename)[1],
    )
    return EpisodeMapping(
        original_path=os.path.join(season_folder, filename),
        proposed_path=os.path.join(season_folder, new_name),
        season=season,
        season_folder=season_folder,
        label=format_episode_number(episode.number, len(episodes_in_season)),
        episode=episode,
    )


def sort_mappings(mappings: Iterable[EpisodeMapping]) -> list[EpisodeMapping]:
    """Matched files ascending by episode number, unmatched after them in original order."""
    return sorted(
        mappings,
        key=lambda m: (m.episode is None, m.episode.number if m.episode else 0),
    )


def build_season_mapping(
    series_directory: str,
    series: Series,
    video_exts: Iterable[str] = VIDEO_EXTS,
) -> SeasonMapping:
    """Build the reviewable rename plan for every season folder of a series."""
    video_exts = frozenset(video_exts)
    season_folders = find_season_folders(series_directory)

    def map_season(folder: SeasonFolder) -> list[EpisodeMapping]:
        folder_path = os.path.join(series_directory, folder.folder_name)
        files, _ = tree_walker.list_entries(folder_path)
        episodes = series.episodes_in_season(folder.season)
        return sort_mappings(
            map_episode_file(series.name, folder_path, folder.season, name, episodes, video_exts=video_exts)
            for name in files
        )

    with ThreadPoolExecutor() as executor:
        season_lists = list(executor.map(map_season, season_folders))

    result = SeasonMapping()
    for folder, mappings in zip(season_folders, season_lists):
        result[folder.season] = SeasonEntry(folder_name=folder.folder_name, mappings=mappings)
        logging.info(
            "Season %d (%s): %d files, %d to rename",
            folder.season,
            folder.folder_name,
            len(mappings),
            sum(1 for m in mappings if m.rename),
        )
    return result


def episode_choices(series: Series, season: int) -> list[tuple[str, Episode]]:
    """(label, episode) pairs offered when reassigning a file of the season."""
    episodes = series.episodes_in_season(season)
    return [
        (f"E{format_episode_number(ep.number, len(episodes))}: {ep.title}", ep)
        for ep in sorted(episodes, key=lambda ep: ep.number)
    ]


def assign_episode(
    season_mapping: SeasonMapping,
    target: EpisodeMapping,
    episode: Episode,
    series: Series,
    video_exts: Iterable[str] = VIDEO_EXTS,
) -> EpisodeMapping:
    """Force target's file onto episode, replacing its entry in place.

    The season list is re-sorted afterwards. Two files claiming the same
    episode are allowed but logged.
    """
    entry = season_mapping[target.season]
    updated = map_episode_file(
        series.name,
        target.season_folder,
        target.season,
        target.filename,
        series.episodes_in_season(episode.season),
        forced_number=episode.number,
        video_exts=video_exts,
    )
    entry.mappings = sort_mappings(
        updated if m.original_path == target.original_path else m for m in entry.mappings
    )

    if updated.episode is not None and updated.episode.id in season_mapping.duplicate_episodes(target.season):
        logging.warning(
            "Episode S%02dE%s is now claimed by more than one file",
            target.season,
            updated.label,
        )
    return updated


# ---------------------------------------------------------------------------
# Batch rename
# ---------------------------------------------------------------------------


def execute_renames(season_mapping: SeasonMapping) -> int:
    """Apply every pending rename in parallel. Returns how many succeeded.

    Existing files are never overwritten; when two files claim the same
    target only the first one is renamed. A target that another pending
    rename moves away (e.g. two files swapping episodes) is not a collision.
    """
    pending = [(m.original_path, m.proposed_path) for m in season_mapping.pending_renames()]
    logging.info("Renaming %d files", len(pending))
    return tree_walker.move_all(pending)

