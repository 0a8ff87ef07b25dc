"""
tree_walker.py - Directory listing and filesystem primitives for series-browser.

Lists the immediate children of a folder, flattens a subtree into an absolute
file list, and runs per-item filesystem work in parallel for bulk operations.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TypeVar

T = TypeVar("T")

VIDEO_EXTS = frozenset({".mp4", ".mkv", ".avi"})  # Supported video extensions


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------


def is_folder(path: str) -> bool:
    """Return True if path is a directory. Anything that fails to stat is not."""
    try:
        return stat.S_ISDIR(os.stat(path).st_mode)
    except OSError:
        return False


def list_entries(directory: str) -> tuple[list[str], list[str]]:
    """Partition the immediate children of directory into (files, folders).

    Raises OSError if the directory does not exist or cannot be read.
    """
    names = sorted(os.listdir(directory))
    files: list[str] = []
    folders: list[str] = []
    for name in names:
        if is_folder(os.path.join(directory, name)):
            folders.append(name)
        else:
            files.append(name)
    return files, folders


def flatten(directory: str) -> list[str]:
    """Return absolute paths of every file at any depth under directory.

    Subfolders are walked concurrently. Symlink cycles are not detected.
    """
    directory = os.path.abspath(directory)
    files, folders = list_entries(directory)
    result = [os.path.join(directory, name) for name in files]
    if not folders:
        return result

    with ThreadPoolExecutor() as executor:
        nested = executor.map(flatten, [os.path.join(directory, name) for name in folders])
        for sub_files in nested:
            result.extend(sub_files)
    return result


def is_video_file(name: str, video_exts: Iterable[str] = VIDEO_EXTS) -> bool:
    """Check the (case-insensitive) extension of name against video_exts."""
    return os.path.splitext(name)[1].lower() in {e.lower() for e in video_exts}


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


def move(old_path: str, new_path: str) -> None:
    """Rename old_path to new_path without clobbering an existing target."""
    if old_path == new_path:
        return
    if os.path.lexists(new_path):
        raise FileExistsError(f"Target already exists: {new_path}")
    os.rename(old_path, new_path)
    logging.debug("Moved %s -> %s", old_path, new_path)


def run_batch(
    action: Callable[[T], object],
    items: Iterable[T],
    describe: Callable[[T], str] = str,
) -> int:
    """Run action for every item concurrently and wait for all of them.

    Per-item OSError is logged and the item skipped; siblings proceed.
    Returns the number of items that completed successfully.
    """
    pending = list(items)
    if not pending:
        return 0

    succeeded = 0
    with ThreadPoolExecutor() as executor:
        futures = {executor.submit(action, item): item for item in pending}
        for future in as_completed(futures):
            item = futures[future]
            try:
                future.result()
            except OSError as e:
                logging.error("Failed on %s: %s", describe(item), e)
                continue
            succeeded += 1

    logging.info("Batch finished: %d/%d succeeded", succeeded, len(pending))
    return succeeded


def unique_targets(pairs: Iterable[tuple[str, str]]) -> list[tuple[str, str]]:
    """Drop (src, dst) pairs whose dst is already claimed earlier in the batch."""
    planned: set[str] = set()
    result = []
    for src, dst in pairs:
        if dst in planned:
            logging.warning("Skipping %s: duplicate target in batch (%s)", src, dst)
            continue
        planned.add(dst)
        result.append((src, dst))
    return result


def _parking_path(path: str) -> str:
    return os.path.join(os.path.dirname(path), f".{os.path.basename(path)}.renaming")


def move_all(pairs: Iterable[tuple[str, str]]) -> int:
    """Apply a batch of (src, dst) renames. Returns how many reached dst.

    Targets that another rename of the batch frees up (chains and swaps) are
    not collisions: every source is parked under a temporary name first and
    moved to its target in a second pass. Targets taken by files outside the
    batch are refused up front. A rename that still collides in the second
    pass goes back to its source name.
    """
    pairs = unique_targets(pairs)
    sources = {src for src, _ in pairs}
    ready = []
    for src, dst in pairs:
        if os.path.lexists(dst) and dst not in sources:
            logging.error("Failed on %s: target already exists: %s", src, dst)
            continue
        ready.append((src, dst))

    parked: list[tuple[str, str, str]] = []

    def park(pair: tuple[str, str]) -> None:
        src, dst = pair
        tmp = _parking_path(src)
        move(src, tmp)
        parked.append((tmp, src, dst))

    run_batch(park, ready, describe=lambda pair: pair[0])

    def land(item: tuple[str, str, str]) -> None:
        tmp, src, dst = item
        try:
            move(tmp, dst)
        except OSError:
            try:
                move(tmp, src)
            except OSError as e:
                logging.error("Could not restore %s, file left at %s: %s", src, tmp, e)
            raise

    return run_batch(land, parked, describe=lambda item: item[1])
