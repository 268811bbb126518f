"""
Selector: pick the Nth newest regular file in a directory.

Entries are enumerated in name order and sorted by modification time with a
stable sort, so files sharing an mtime always rank in name order.
"""

import os
from pathlib import Path
from typing import List, Union

from .errors import DirectoryReadError, NotFoundError, OutOfRangeError
from .logger import get_logger
from .models import FileCandidate, SelectionQuery


def list_candidates(source_dir: Union[str, Path], filter: str = "") -> List[FileCandidate]:
    """
    List regular files directly inside source_dir whose name contains filter.

    Args:
        source_dir: Directory to scan (not recursed)
        filter: Case-insensitive substring; empty keeps every file

    Returns:
        Candidates in name order

    Raises:
        DirectoryReadError: If the directory cannot be listed or an entry stat'ed
    """
    logger = get_logger()
    needle = filter.lower()

    try:
        with os.scandir(source_dir) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise DirectoryReadError(f"failed to read source directory: {e}") from e

    candidates: List[FileCandidate] = []
    for entry in entries:
        try:
            if not entry.is_file():
                continue
            if needle and needle not in entry.name.lower():
                continue
            info = entry.stat()
        except OSError as e:
            raise DirectoryReadError(f"failed to get file info for {entry.name}: {e}") from e
        candidates.append(FileCandidate(name=entry.name, mod_time=info.st_mtime, size=info.st_size))

    logger.record_scan(len(entries), len(candidates))
    logger.debug(
        "Scanned source directory",
        source_dir=str(source_dir),
        entries=len(entries),
        matched=len(candidates),
        filter=filter,
    )
    return candidates


def rank_candidates(candidates: List[FileCandidate]) -> List[FileCandidate]:
    """Newest first. sorted() is stable, so ties keep their input order."""
    return sorted(candidates, key=lambda c: c.mod_time, reverse=True)


def select(source_dir: Union[str, Path], filter: str = "", rank: int = 1) -> FileCandidate:
    """
    Return the candidate at 1-based rank in newest-first order.

    Raises:
        DirectoryReadError: If the directory cannot be read
        NotFoundError: If no file matches
        OutOfRangeError: If rank is below 1 or above the number of matches
    """
    candidates = list_candidates(source_dir, filter)
    if not candidates:
        if filter:
            raise NotFoundError(f"no files matching '{filter}' found in the source directory")
        raise NotFoundError("no files found in the source directory")

    if rank < 1:
        raise OutOfRangeError(f"rank must be at least 1, got {rank}")
    if rank > len(candidates):
        raise OutOfRangeError(
            f"requested {rank}th newest file, but only {len(candidates)} files available"
        )

    chosen = rank_candidates(candidates)[rank - 1]
    get_logger().info("Selected file", name=chosen.name, rank=rank, mod_time=chosen.mod_time)
    return chosen


def select_query(query: SelectionQuery) -> FileCandidate:
    return select(query.source_dir, query.filter, query.rank)
