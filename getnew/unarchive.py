"""
Archive dispatcher.

Finds the first file in a directory with a known archive extension, runs the
matching external tool on it and removes the archive once the tool succeeds.
The first match in name order wins, which is not necessarily the file that
was just moved.
"""

import os
import subprocess
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, Union

from .errors import DirectoryReadError, ExtractionError, NoArchiveFoundError
from .logger import get_logger
from .models import ExtractionResult

# extension -> argv prefix; the archive name is appended
ARCHIVE_COMMANDS = {
    ".zip": ("unzip",),
    ".gz": ("tar", "-xzf"),
    ".tgz": ("tar", "-xzf"),
    ".tar": ("tar", "-xf"),
    ".7z": ("7z", "x"),
}

ProcessInvoker = Callable[[Sequence[str], Path], None]


def run_process(argv: Sequence[str], cwd: Path) -> None:
    """Run argv in cwd with inherited stdout/stderr. Raises on failure."""
    subprocess.run(list(argv), cwd=cwd, check=True)


def archive_extension(name: str) -> str:
    """Lower-cased text from the last dot, or "" when the name has none."""
    idx = name.rfind(".")
    if idx < 0:
        return ""
    return name[idx:].lower()


def command_for(name: str) -> Optional[Tuple[str, ...]]:
    """Return the extraction argv for name, or None if it is not an archive."""
    prefix = ARCHIVE_COMMANDS.get(archive_extension(name))
    if prefix is None:
        return None
    # keep names like "-d.zip" from being read as options
    if name.startswith("-"):
        return prefix + ("." + os.sep + name,)
    return prefix + (name,)


def find_archive(current_dir: Union[str, Path] = ".") -> Optional[str]:
    """Return the first file name (in name order) with a known archive extension."""
    try:
        with os.scandir(current_dir) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise DirectoryReadError(f"failed to read current directory: {e}") from e

    for entry in entries:
        if entry.is_dir():
            continue
        if command_for(entry.name) is not None:
            return entry.name
    return None


def try_extract(
    current_dir: Union[str, Path] = ".",
    invoker: ProcessInvoker = run_process,
) -> ExtractionResult:
    """
    Extract the first archive found in current_dir and delete it.

    Args:
        current_dir: Directory to scan and run the tool in
        invoker: Runs an argv in a directory, raising on failure

    Returns:
        ExtractionResult naming the archive and the command that ran

    Raises:
        NoArchiveFoundError: If nothing in current_dir looks like an archive
        ExtractionError: If the tool fails or the archive cannot be removed
    """
    logger = get_logger()
    current_dir = Path(current_dir)

    name = find_archive(current_dir)
    if name is None:
        raise NoArchiveFoundError("no recognized archive file found in the current directory")

    command = command_for(name)
    logger.info("Extracting archive", archive=name, command=list(command))

    try:
        invoker(command, current_dir)
    except subprocess.CalledProcessError as e:
        raise ExtractionError(
            name, f"failed to unarchive {name}: {e}", returncode=e.returncode
        ) from e
    except OSError as e:
        raise ExtractionError(name, f"failed to unarchive {name}: {e}") from e

    try:
        (current_dir / name).unlink()
    except OSError as e:
        raise ExtractionError(name, f"failed to remove original archive file: {e}") from e

    logger.record_extraction()
    logger.info("Archive extracted and removed", archive=name)
    return ExtractionResult(archive=name, command=command)


def known_extensions() -> List[str]:
    return sorted(ARCHIVE_COMMANDS)
