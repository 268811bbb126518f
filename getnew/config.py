"""
Run configuration for getnew.

Settings are built once from parsed CLI arguments and the environment, then
passed explicitly to the selector, relocator and archive dispatcher.
"""

import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .models import SelectionQuery

SOURCE_DIR_ENV = "GETNEW_SOURCE_DIR"
LOG_LEVEL_ENV = "GETNEW_LOG_LEVEL"
LOG_DIR_ENV = "GETNEW_LOG_DIR"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def resolve_source_dir(flag: Optional[str], environ: Mapping[str, str]) -> Path:
    """
    Pick the source directory.

    Order: --source flag, GETNEW_SOURCE_DIR, then <home>/Downloads.
    """
    if flag:
        return Path(flag).expanduser()
    from_env = environ.get(SOURCE_DIR_ENV, "")
    if from_env:
        return Path(from_env).expanduser()
    home = environ.get("HOME")
    base = Path(home) if home else Path.home()
    return base / "Downloads"


@dataclass(frozen=True)
class Settings:
    source_dir: Path
    filter: str = ""
    rank: int = 1
    unarchive: bool = False
    dest_dir: Path = Path(".")
    log_level: str = DEFAULT_LOG_LEVEL
    log_dir: Optional[Path] = None

    @classmethod
    def from_args(
        cls,
        args: argparse.Namespace,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "Settings":
        """Build settings from parsed arguments, falling back to the environment."""
        if environ is None:
            environ = os.environ

        log_level = (environ.get(LOG_LEVEL_ENV, "") or DEFAULT_LOG_LEVEL).upper()
        if log_level not in LOG_LEVELS:
            log_level = DEFAULT_LOG_LEVEL
        if getattr(args, "verbose", False):
            log_level = "DEBUG"
        log_dir = environ.get(LOG_DIR_ENV, "")

        return cls(
            source_dir=resolve_source_dir(getattr(args, "source", None), environ),
            filter=getattr(args, "filter", None) or "",
            rank=getattr(args, "nth", 1),
            unarchive=bool(getattr(args, "unarchive", False)),
            log_level=log_level,
            log_dir=Path(log_dir).expanduser() if log_dir else None,
        )

    def query(self) -> SelectionQuery:
        return SelectionQuery(source_dir=self.source_dir, filter=self.filter, rank=self.rank)
