"""
folder_actions.py - Single-item and bulk folder operations offered by the browser.

Single-item operations (rename, create, delete, move) raise OSError and leave
it to the caller to report. Bulk operations (hoist, purge) are best effort:
failing items are logged and skipped, the rest proceed.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Iterable
from dataclasses import dataclass

import tree_walker
from tree_walker import VIDEO_EXTS

PARENT = ".."


# ---------------------------------------------------------------------------
# Single-item operations
# ---------------------------------------------------------------------------


def rename_entry(directory: str, old_name: str, new_name: str) -> str:
    """Rename directory/old_name to directory/new_name. Returns the new path."""
    new_path = os.path.join(directory, new_name)
    tree_walker.move(os.path.join(directory, old_name), new_path)
    logging.info("Renamed %s -> %s in %s", old_name, new_name, directory)
    return new_path


def create_folder(directory: str, name: str) -> str:
    path = os.path.join(directory, name)
    os.mkdir(path)
    logging.info("Created folder %s", path)
    return path


def delete_entry(path: str) -> None:
    """Delete a file, or a folder with everything below it."""
    if tree_walker.is_folder(path):
        shutil.rmtree(path)
    else:
        os.remove(path)
    logging.info("Deleted %s", path)


# ---------------------------------------------------------------------------
# Moving folders
# ---------------------------------------------------------------------------


def is_within(candidate: str, folder: str) -> bool:
    """True if candidate is folder itself or nested anywhere below it."""
    candidate = os.path.normpath(os.path.abspath(candidate))
    folder = os.path.normpath(os.path.abspath(folder))
    return candidate == folder or candidate.startswith(folder.rstrip(os.sep) + os.sep)


@dataclass(frozen=True)
class MoveCandidate:
    name: str
    disabled: str | None = None  # reason, None when selectable


@dataclass(frozen=True)
class MovePlan:
    directory: str
    folder: str
    target: str
    candidates: list[MoveCandidate]
    conflict: bool  # a folder with the same name already exists here

    @property
    def acceptable(self) -> bool:
        return not self.conflict and not is_within(self.directory, self.folder)


def plan_move(directory: str, folder: str) -> MovePlan:
    """Describe moving folder into directory: target path plus browsable destinations."""
    _, folders = tree_walker.list_entries(directory)
    name = os.path.basename(os.path.normpath(folder))
    candidates = [
        MoveCandidate(
            name=child,
            disabled="can't move a folder into itself"
            if is_within(os.path.join(directory, child), folder)
            else None,
        )
        for child in folders
    ]
    return MovePlan(
        directory=directory,
        folder=folder,
        target=os.path.join(directory, name),
        candidates=candidates,
        conflict=name in folders,
    )


def move_folder(plan: MovePlan) -> str:
    if not plan.acceptable:
        raise FileExistsError(f"Cannot move {plan.folder} to {plan.target}")
    tree_walker.move(plan.folder, plan.target)
    logging.info("Moved folder %s -> %s", plan.folder, plan.target)
    return plan.target


# ---------------------------------------------------------------------------
# Bulk operations
# ---------------------------------------------------------------------------


def hoist_files(directory: str) -> int:
    """Move every nested file directly into directory, then drop emptied subfolders.

    Subfolders that still contain files (e.g. a name collision skipped the
    move) are kept. Returns the number of files moved.
    """
    directory = os.path.abspath(directory)
    moves = tree_walker.unique_targets(
        (f, os.path.join(directory, os.path.basename(f)))
        for f in tree_walker.flatten(directory)
        if os.path.dirname(f) != directory
    )
    moved = tree_walker.run_batch(lambda pair: tree_walker.move(*pair), moves, describe=lambda pair: pair[0])

    _, folders = tree_walker.list_entries(directory)
    emptied = []
    for name in folders:
        path = os.path.join(directory, name)
        if tree_walker.flatten(path):
            logging.warning("Keeping %s: it still contains files", path)
        else:
            emptied.append(path)
    tree_walker.run_batch(shutil.rmtree, emptied)
    return moved


def non_video_files(directory: str, video_exts: Iterable[str] = VIDEO_EXTS) -> list[str]:
    """Every file below directory that is not a video."""
    video_exts = frozenset(video_exts)
    return [f for f in tree_walker.flatten(directory) if not tree_walker.is_video_file(f, video_exts)]


def purge_files(paths: Iterable[str]) -> int:
    return tree_walker.run_batch(os.remove, paths)
