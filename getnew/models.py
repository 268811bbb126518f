from dataclasses import dataclass
from pathlib import Path
from typing import Tuple


@dataclass(frozen=True)
class FileCandidate:
    """A regular file eligible for selection."""

    name: str
    mod_time: float  # POSIX seconds
    size: int = 0


@dataclass(frozen=True)
class SelectionQuery:
    """Inputs for one selection: where to look, what to match, which rank."""

    source_dir: Path
    filter: str = ""
    rank: int = 1


@dataclass(frozen=True)
class ExtractionResult:
    archive: str
    command: Tuple[str, ...]
