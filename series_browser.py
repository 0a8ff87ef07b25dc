#!/usr/bin/env python3
"""
series_browser.py - Browse a media tree and standardize episode filenames via TMDB.

Rich UI edition ✨

Key points:
- Folder browser: [R]ename, [C]reate folder, [D]elete, [M]ove, [U]pdate,
  [H]oist files, [P]urge non-videos, [S]tandardize names, [E]xit
- Standardize names walks: language -> series name -> TMDB match ->
  per-season review -> (optional) manual episode reassignment -> accept
- Target naming:
      Series.Name.S01E07.Episode.Title.mkv
- Every screen can go back one step with b / esc

Usage:
    series-browser                         # browse the current directory
    series-browser /mnt/media/shows        # browse a given directory
    series-browser --config config.yaml --language de --verbose
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import os
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, ClassVar, Protocol, cast

import yaml
from rich import box
from rich.panel import Panel
from rich.table import Table
from rich.traceback import install as install_rich_traceback

import episode_mapper
import folder_actions
import tree_walker
from episode_mapper import EpisodeMapping, SeasonMapping, Series
from folder_actions import PARENT
from prompt_ui import CANCEL, Choice, Command, Picked, PromptUI, RichPrompts, console
from tmdb_client import (
    DEFAULT_CACHE_DIR,
    DEFAULT_CACHE_EXPIRATION,
    Language,
    SeriesNotFoundError,
    TMDBClient,
    TMDBError,
    find_api_key,
)

install_rich_traceback(show_locals=False)

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "series-browser"
DEFAULT_LOG_DIR = Path.home() / ".local" / "share" / "series-browser"
DEFAULT_LANGUAGE = "en"

FOLDER_COMMANDS = ("r", "c", "d", "m", "u", "h", "p", "s", "e")
FOLDER_FOOTER = (
    "[R]ename, [C]reate folder, [D]elete, [M]ove, [U]pdate, [H]oist files, "
    "[P]urge non-videos, [S]tandardize names, [E]xit"
)
BACK_FOOTER = "b = back"
ESC_FOOTER = "esc = back"


# ----------------------------
# Config + parsing
# ----------------------------


def _expand_path(p: str) -> str:
    """Expand ~ and $VARS and return a normalized path string (doesn't require existence)."""
    p = (p or "").strip()
    if not p:
        return p
    p = os.path.expandvars(p)
    return str(Path(p).expanduser())


def _normalize_ext(ext: str) -> str:
    ext = str(ext).strip().lower()
    return ext if ext.startswith(".") else f".{ext}"


@dataclass(frozen=True)
class TmdbCfg:
    language: str
    cache_expiration: int  # minutes
    cache_dir: str


@dataclass(frozen=True)
class AppCfg:
    start_directory: str | None
    video_extensions: frozenset[str]
    log_dir: str
    config_dir: str  # where .env with TMDB_API_KEY is looked up
    tmdb: TmdbCfg


def load_config(path: Path | None) -> AppCfg:
    """Load config.yaml; every key is optional. No path means all defaults."""
    raw: dict[str, Any] = {}
    if path is not None:
        if not path.exists():
            raise FileNotFoundError(f"Config not found: {path}")
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        if loaded is None:
            raw = {}
        elif not isinstance(loaded, dict):
            raise ValueError("config.yaml root must be a mapping")
        else:
            raw = cast(dict[str, Any], loaded)

    tmdb_raw = raw.get("tmdb") or {}
    if not isinstance(tmdb_raw, dict):
        raise ValueError("tmdb must be a mapping")
    tmdb_node: dict[str, Any] = cast(dict[str, Any], tmdb_raw)
    tmdb = TmdbCfg(
        language=str(tmdb_node.get("language", DEFAULT_LANGUAGE)).strip(),
        cache_expiration=int(tmdb_node.get("cache_expiration", DEFAULT_CACHE_EXPIRATION)),
        cache_dir=_expand_path(str(tmdb_node.get("cache_dir", DEFAULT_CACHE_DIR))),
    )

    exts = raw.get("video_extensions") or sorted(tree_walker.VIDEO_EXTS)
    if not isinstance(exts, list):
        raise ValueError("video_extensions must be a list")

    start = raw.get("start_directory")
    config_dir = path.parent if path is not None else DEFAULT_CONFIG_DIR

    return AppCfg(
        start_directory=_expand_path(str(start)) if start else None,
        video_extensions=frozenset(_normalize_ext(e) for e in exts),
        log_dir=_expand_path(str(raw.get("log_dir", DEFAULT_LOG_DIR))),
        config_dir=str(config_dir),
        tmdb=tmdb,
    )


def setup_logging(log_dir: Path, verbose: bool = False) -> Path | None:
    """Set up file logging. Returns the log file path, or None if the dir is unusable."""
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"series_browser_{timestamp}.log"

        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.INFO,
            format="%(asctime)s [%(levelname)s] %(message)s",
            handlers=[
                logging.FileHandler(log_file),
            ],
        )
        return log_file
    except OSError:
        return None


def guess_series_name(folder_name: str) -> str:
    """Guess a search term from a series folder name.

    'Yu Yu Hakusho (1992) {imdb-tt0185133}' -> 'Yu Yu Hakusho'
    'The_Expanse.[1080p]'                    -> 'The Expanse'
    """
    name = re.sub(r"\(.*?\)|\{.*?\}|\[.*?\]", "", folder_name)
    name = re.sub(r"[_.]", " ", name)
    name = re.sub(r"\s+", " ", name).strip()
    return name or folder_name


# ----------------------------
# Workflow context + states
# ----------------------------


class MetadataProvider(Protocol):
    def list_languages(self) -> list[Language]: ...

    def search_series(self, name: str, language: str) -> list[Series]: ...

    def get_series_episodes(self, series_id: int, language: str) -> Series: ...


@dataclass
class WorkflowContext:
    prompts: PromptUI
    provider: MetadataProvider
    config: AppCfg


@dataclass(frozen=True)
class FolderSelection:
    name: ClassVar[str] = "folder-selection"
    directory: str
    highlight: str = PARENT


@dataclass(frozen=True)
class RenameEntry:
    name: ClassVar[str] = "rename"
    directory: str
    entry: str


@dataclass(frozen=True)
class CreateFolder:
    name: ClassVar[str] = "create-folder"
    directory: str


@dataclass(frozen=True)
class DeleteFolder:
    name: ClassVar[str] = "delete-folder"
    directory: str
    entry: str


@dataclass(frozen=True)
class MoveFolder:
    name: ClassVar[str] = "move-folder"
    folder: str  # absolute path of the folder being moved
    directory: str  # destination currently browsed
    origin: str  # folder-selection directory to return to


@dataclass(frozen=True)
class HoistFiles:
    name: ClassVar[str] = "hoist-files"
    directory: str


@dataclass(frozen=True)
class NonVideoPurge:
    name: ClassVar[str] = "non-video-purge"
    directory: str


@dataclass(frozen=True)
class SeriesLanguage:
    name: ClassVar[str] = "series-language"
    directory: str


@dataclass(frozen=True)
class SeriesName:
    name: ClassVar[str] = "series-name"
    directory: str
    language: Language
    query: str | None = None  # last search term, kept when coming back


@dataclass(frozen=True)
class SeriesSuggestions:
    name: ClassVar[str] = "series-suggestions"
    directory: str
    language: Language
    query: str


@dataclass(frozen=True)
class EpisodeRenames:
    name: ClassVar[str] = "episode-renames"
    directory: str
    language: Language
    query: str
    series: Series
    mapping: SeasonMapping  # edited in place by assign-episode
    highlight: str | None = None


@dataclass(frozen=True)
class AssignEpisode:
    name: ClassVar[str] = "assign-episode"
    review: EpisodeRenames
    target: EpisodeMapping


@dataclass(frozen=True)
class Exit:
    name: ClassVar[str] = "exit"


State = (
    FolderSelection
    | RenameEntry
    | CreateFolder
    | DeleteFolder
    | MoveFolder
    | HoistFiles
    | NonVideoPurge
    | SeriesLanguage
    | SeriesName
    | SeriesSuggestions
    | EpisodeRenames
    | AssignEpisode
    | Exit
)


# ----------------------------
# Folder browser states
# ----------------------------


def handle_folder_selection(ctx: WorkflowContext, state: FolderSelection) -> State:
    directory = state.directory
    try:
        files, folders = tree_walker.list_entries(directory)
    except OSError as e:
        ctx.prompts.notify(f"Cannot read {directory}: {e}", "err")
        parent = os.path.dirname(directory)
        if parent == directory:
            return Exit()
        return FolderSelection(parent, os.path.basename(directory))

    choices = [Choice(PARENT, PARENT)]
    choices += [Choice(f"{name}/", name) for name in folders]
    choices += [Choice(name, name) for name in files]

    result = ctx.prompts.select_one(
        choices,
        header=directory,
        footer=FOLDER_FOOTER,
        initial=state.highlight,
        commands=FOLDER_COMMANDS,
    )

    if result is CANCEL:
        return Exit()

    if isinstance(result, Picked):
        if result.value == PARENT:
            return FolderSelection(os.path.dirname(directory), os.path.basename(directory))
        if result.value in folders:
            return FolderSelection(os.path.join(directory, result.value))
        return FolderSelection(directory, result.value)

    command = cast(Command, result)
    target = command.value or PARENT
    key = command.key

    if key == "r":
        if target == PARENT:
            ctx.prompts.notify("Pick a file or folder to rename", "warn")
            return state
        return RenameEntry(directory, target)
    if key == "c":
        return CreateFolder(directory)
    if key == "d":
        if target == PARENT:
            ctx.prompts.notify("Refusing to delete the parent folder", "warn")
            return state
        return DeleteFolder(directory, target)
    if key == "m":
        if target not in folders:
            ctx.prompts.notify("Only folders can be moved", "warn")
            return FolderSelection(directory, target)
        return MoveFolder(os.path.join(directory, target), directory, directory)
    if key == "u":
        return FolderSelection(directory, target)
    if key == "h":
        return HoistFiles(directory)
    if key == "p":
        return NonVideoPurge(directory)
    if key == "s":
        return SeriesLanguage(directory)
    if key == "e":
        return Exit()
    return state


def handle_rename(ctx: WorkflowContext, state: RenameEntry) -> State:
    back = FolderSelection(state.directory, state.entry)
    answer = ctx.prompts.text_input(
        f"rename {state.entry}", header=state.directory, footer=ESC_FOOTER, initial=state.entry
    )
    if answer is CANCEL or not answer or answer == state.entry:
        return back

    try:
        folder_actions.rename_entry(state.directory, state.entry, answer)
    except OSError as e:
        logging.error("Rename %s -> %s failed: %s", state.entry, answer, e)
        ctx.prompts.notify(f"Rename failed: {e}", "err")
        return back
    return FolderSelection(state.directory, answer)


def handle_create_folder(ctx: WorkflowContext, state: CreateFolder) -> State:
    answer = ctx.prompts.text_input("name", header=state.directory, footer=ESC_FOOTER)
    if answer is CANCEL or not answer:
        return FolderSelection(state.directory)

    try:
        folder_actions.create_folder(state.directory, answer)
    except OSError as e:
        logging.error("Create folder %s failed: %s", answer, e)
        ctx.prompts.notify(f"Could not create folder: {e}", "err")
        return FolderSelection(state.directory)
    return FolderSelection(state.directory, answer)


def handle_delete_folder(ctx: WorkflowContext, state: DeleteFolder) -> State:
    path = os.path.join(state.directory, state.entry)
    answer = ctx.prompts.confirm(f"deleting {path}. Are you sure?", footer=BACK_FOOTER)
    if answer is not True:
        return FolderSelection(state.directory, state.entry)

    try:
        folder_actions.delete_entry(path)
    except OSError as e:
        logging.error("Delete %s failed: %s", path, e)
        ctx.prompts.notify(f"Delete failed: {e}", "err")
        return FolderSelection(state.directory, state.entry)
    return FolderSelection(state.directory)


def handle_move_folder(ctx: WorkflowContext, state: MoveFolder) -> State:
    back = FolderSelection(state.origin, os.path.basename(state.folder))
    try:
        plan = folder_actions.plan_move(state.directory, state.folder)
    except OSError as e:
        ctx.prompts.notify(f"Cannot read {state.directory}: {e}", "err")
        return back

    if plan.conflict:
        to_line = f"'{os.path.basename(state.folder)}' already exists here. choose a different location."
    else:
        to_line = plan.target
    choices = [Choice(PARENT, PARENT)]
    choices += [Choice(f"{c.name}/", c.name, disabled=c.disabled) for c in plan.candidates]

    result = ctx.prompts.select_one(
        choices,
        header=f"move: {state.folder}\n  to: {to_line}",
        footer=f"[a]ccept, {BACK_FOOTER}" if plan.acceptable else BACK_FOOTER,
        commands=("a",) if plan.acceptable else (),
    )

    if result is CANCEL:
        return back

    if isinstance(result, Command):
        try:
            folder_actions.move_folder(plan)
        except OSError as e:
            logging.error("Move %s -> %s failed: %s", state.folder, plan.target, e)
            ctx.prompts.notify(f"Move failed: {e}", "err")
            return back
        ctx.prompts.notify(f"moved to {plan.target}", "ok")
        return FolderSelection(state.origin)

    picked = cast(Picked, result).value
    if picked == PARENT:
        return dataclasses.replace(state, directory=os.path.dirname(state.directory))
    return dataclasses.replace(state, directory=os.path.join(state.directory, picked))


def handle_hoist_files(ctx: WorkflowContext, state: HoistFiles) -> State:
    directory = state.directory
    try:
        nested = [f for f in tree_walker.flatten(directory) if os.path.dirname(f) != directory]
    except OSError as e:
        ctx.prompts.notify(f"Cannot read {directory}: {e}", "err")
        return FolderSelection(directory)

    answer = ctx.prompts.confirm(f"hoisting {len(nested)} files. Are you sure?", footer=BACK_FOOTER)
    if answer is not True:
        return FolderSelection(directory)

    try:
        moved = folder_actions.hoist_files(directory)
    except OSError as e:
        logging.error("Hoist in %s failed: %s", directory, e)
        ctx.prompts.notify(f"Hoist failed: {e}", "err")
        return FolderSelection(directory)
    ctx.prompts.notify(f"hoisted {moved} of {len(nested)} files", "ok")
    return FolderSelection(directory)


def handle_non_video_purge(ctx: WorkflowContext, state: NonVideoPurge) -> State:
    directory = state.directory
    try:
        candidates = folder_actions.non_video_files(directory, ctx.config.video_extensions)
    except OSError as e:
        ctx.prompts.notify(f"Cannot read {directory}: {e}", "err")
        return FolderSelection(directory)

    answer = ctx.prompts.confirm(
        f"deleting {len(candidates)} non-video files. Are you sure?", footer=BACK_FOOTER
    )
    if answer is not True:
        return FolderSelection(directory)

    deleted = folder_actions.purge_files(candidates)
    ctx.prompts.notify(f"deleted {deleted} of {len(candidates)} non-video files", "ok")
    return FolderSelection(directory)


# ----------------------------
# Standardize names pipeline
# ----------------------------


def series_label(series: Series) -> str:
    if series.first_air_year:
        return f"{series.name} ({series.first_air_year})"
    return series.name


def mapping_label(mapping: EpisodeMapping, duplicate: bool = False) -> str:
    if mapping.episode is None:
        return f"--- {mapping.filename}"
    label = f"E{mapping.label}: {mapping.filename}"
    label += f" > {mapping.proposed_name}" if mapping.rename else " (unchanged)"
    if duplicate:
        label += "  [duplicate episode]"
    return label


def handle_series_language(ctx: WorkflowContext, state: SeriesLanguage) -> State:
    try:
        languages = ctx.provider.list_languages()
    except TMDBError as e:
        ctx.prompts.notify(f"Could not load languages: {e}", "err")
        return FolderSelection(state.directory)

    initial = next((lang for lang in languages if lang.code == ctx.config.tmdb.language), None)
    result = ctx.prompts.select_one(
        [Choice(f"{lang.name} ({lang.code})", lang) for lang in languages],
        header=f"Folder: {state.directory}",
        footer=BACK_FOOTER,
        initial=initial,
    )
    if not isinstance(result, Picked):
        return FolderSelection(state.directory)
    return SeriesName(state.directory, result.value)


def handle_series_name(ctx: WorkflowContext, state: SeriesName) -> State:
    initial = state.query if state.query is not None else guess_series_name(os.path.basename(state.directory))
    answer = ctx.prompts.text_input(
        "series name",
        header=f"Folder: {state.directory}\nLanguage: {state.language.name}",
        footer=ESC_FOOTER,
        initial=initial,
    )
    if answer is CANCEL:
        return SeriesLanguage(state.directory)
    if not answer:
        ctx.prompts.notify("Enter a series name to search for", "warn")
        return state
    return SeriesSuggestions(state.directory, state.language, answer)


def handle_series_suggestions(ctx: WorkflowContext, state: SeriesSuggestions) -> State:
    back = SeriesName(state.directory, state.language, state.query)
    try:
        candidates = ctx.provider.search_series(state.query, state.language.code)
    except SeriesNotFoundError:
        ctx.prompts.notify("Series not found. Did you spell it correctly?", "warn")
        return back
    except TMDBError as e:
        ctx.prompts.notify(f"Series search failed: {e}", "err")
        return back

    result = ctx.prompts.select_one(
        [Choice(series_label(s), s) for s in candidates],
        header=(
            f"Folder: {state.directory}\nLanguage: {state.language.name}\nSearch term: {state.query}"
        ),
        footer=BACK_FOOTER,
    )
    if not isinstance(result, Picked):
        return back

    chosen = cast(Series, result.value)
    try:
        series = ctx.provider.get_series_episodes(chosen.id, state.language.code)
    except TMDBError as e:
        ctx.prompts.notify(f"Could not load episodes of {chosen.name}: {e}", "err")
        return state

    try:
        mapping = episode_mapper.build_season_mapping(state.directory, series, ctx.config.video_extensions)
    except OSError as e:
        logging.error("Building episode mapping for %s failed: %s", state.directory, e)
        ctx.prompts.notify(f"Cannot read {state.directory}: {e}", "err")
        return FolderSelection(state.directory)

    if not len(mapping):
        ctx.prompts.notify("No season folders (folders with a number in their name) found", "warn")
    return EpisodeRenames(state.directory, state.language, state.query, series, mapping)


def handle_episode_renames(ctx: WorkflowContext, state: EpisodeRenames) -> State:
    video_exts = ctx.config.video_extensions
    choices: list[Choice] = []
    by_path: dict[str, EpisodeMapping] = {}
    for season, entry in state.mapping.items():
        dupes = state.mapping.duplicate_episodes(season)
        choices.append(Choice(f"--- Season {season} ({entry.folder_name}) ---", separator=True))
        for m in entry.mappings:
            by_path[m.original_path] = m
            duplicate = m.episode is not None and m.episode.id in dupes
            disabled = None if tree_walker.is_video_file(m.filename, video_exts) else "not a video"
            choices.append(Choice(mapping_label(m, duplicate), m.original_path, disabled=disabled))

    pending = len(state.mapping.pending_renames())
    result = ctx.prompts.select_one(
        choices,
        header=(
            f"Folder: {state.directory}\nLanguage: {state.language.name}\n"
            f"Series: {series_label(state.series)}\n{pending} files will be renamed"
        ),
        footer=f"[a]ccept, {BACK_FOOTER}",
        initial=state.highlight,
        commands=("a",),
    )

    if result is CANCEL:
        return SeriesSuggestions(state.directory, state.language, state.query)

    if isinstance(result, Command):
        renamed = episode_mapper.execute_renames(state.mapping)
        ctx.prompts.notify(f"renamed {renamed} files", "ok")
        if renamed < pending:
            ctx.prompts.notify(f"{pending - renamed} files could not be renamed, see the log", "warn")
        return FolderSelection(state.directory)

    return AssignEpisode(state, by_path[cast(Picked, result).value])


def handle_assign_episode(ctx: WorkflowContext, state: AssignEpisode) -> State:
    review, target = state.review, state.target
    back = dataclasses.replace(review, highlight=target.original_path)

    options = episode_mapper.episode_choices(review.series, target.season)
    if not options:
        ctx.prompts.notify(f"{review.series.name} has no episodes for season {target.season}", "warn")
        return back

    choices = [Choice(f"--- Season {target.season} ---", separator=True)]
    choices += [Choice(label, episode) for label, episode in options]
    result = ctx.prompts.select_one(
        choices,
        header=(
            f"File: {target.original_path}\nLanguage: {review.language.name}\n"
            f"Series: {series_label(review.series)}"
        ),
        footer=BACK_FOOTER,
        initial=target.episode,
    )
    if not isinstance(result, Picked):
        return back

    updated = episode_mapper.assign_episode(
        review.mapping, target, result.value, review.series, ctx.config.video_extensions
    )
    if updated.episode is not None and updated.episode.id in review.mapping.duplicate_episodes(target.season):
        ctx.prompts.notify(f"E{updated.label} is now assigned to more than one file", "warn")
    return back


HANDLERS: dict[type, Callable[[WorkflowContext, Any], State]] = {
    FolderSelection: handle_folder_selection,
    RenameEntry: handle_rename,
    CreateFolder: handle_create_folder,
    DeleteFolder: handle_delete_folder,
    MoveFolder: handle_move_folder,
    HoistFiles: handle_hoist_files,
    NonVideoPurge: handle_non_video_purge,
    SeriesLanguage: handle_series_language,
    SeriesName: handle_series_name,
    SeriesSuggestions: handle_series_suggestions,
    EpisodeRenames: handle_episode_renames,
    AssignEpisode: handle_assign_episode,
}


def run_workflow(ctx: WorkflowContext, start_directory: str) -> State:
    """Drive the state machine from folder-selection until the user exits."""
    state: State = FolderSelection(os.path.abspath(start_directory))
    while not isinstance(state, Exit):
        logging.debug("State: %s", state.name)
        state = HANDLERS[type(state)](ctx, state)
    return state


# ----------------------------
# Main
# ----------------------------


def parse_args() -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Browse a media tree and standardize episode names.")
    ap.add_argument("directory", nargs="?", help="Directory to start in (default: config or cwd)")
    ap.add_argument("--config", default=None, help="Path to config.yaml (optional)")
    ap.add_argument("--language", default=None, help="Preselected TMDB language code, e.g. de")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap.parse_args()


def render_header(cfg: AppCfg, start: str, log_file: Path | None) -> None:
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("key", style="cyan")
    table.add_column("val")
    table.add_row("Start", start)
    table.add_row("Language", cfg.tmdb.language)
    table.add_row("Videos", " ".join(sorted(cfg.video_extensions)))
    table.add_row("Log", str(log_file) if log_file else "disabled")

    console.rule("[title]Series Browser[/]")
    console.print(Panel(table, title="📺 Config", border_style="magenta", box=box.ROUNDED))


def main() -> None:
    args = parse_args()
    cfg = load_config(Path(args.config) if args.config else None)
    if args.language:
        cfg = dataclasses.replace(cfg, tmdb=dataclasses.replace(cfg.tmdb, language=args.language))

    log_file = setup_logging(Path(cfg.log_dir), verbose=args.verbose)

    api_key = find_api_key(Path(cfg.config_dir))
    if not api_key:
        console.print("[err]❌ TMDB_API_KEY not found.[/]")
        console.print(f"[dim]Set it in the environment or in {cfg.config_dir}/.env as TMDB_API_KEY=...[/]")
        raise SystemExit(1)

    start = args.directory or cfg.start_directory or os.getcwd()
    if not os.path.isdir(start):
        console.print(f"[err]❌ Not a directory:[/] {start}")
        raise SystemExit(1)

    ctx = WorkflowContext(
        prompts=RichPrompts(console),
        provider=TMDBClient(api_key, Path(cfg.tmdb.cache_dir), cfg.tmdb.cache_expiration),
        config=cfg,
    )
    render_header(cfg, os.path.abspath(start), log_file)
    logging.info("Starting in %s", os.path.abspath(start))

    try:
        run_workflow(ctx, start)
        console.print("[dim]👋 Bye.[/]")
    except (KeyboardInterrupt, EOFError):
        console.print("\n[dim]⏹ Interrupted. Bye.[/]")


if __name__ == "__main__":
    main()
