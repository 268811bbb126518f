"""
Relocator: copy the selected file into the destination directory, then
delete the original.

Copying instead of renaming keeps source directories on other filesystems
working. A destination with the same name is overwritten. A failed copy
leaves the partial destination file in place.
"""

import os
import shutil
from pathlib import Path
from typing import Union

from .errors import RelocationError
from .logger import get_logger
from .models import FileCandidate

CHUNK_SIZE = 1024 * 1024


def _same_file(source_path: Path, dest_path: Path) -> bool:
    if not dest_path.exists():
        return False
    try:
        return os.path.samefile(source_path, dest_path)
    except OSError:
        return False


def relocate(
    source_dir: Union[str, Path],
    candidate: FileCandidate,
    dest_dir: Union[str, Path] = ".",
) -> str:
    """
    Move candidate from source_dir to dest_dir by copy + delete.

    Args:
        source_dir: Directory holding the candidate
        candidate: File chosen by the selector
        dest_dir: Target directory (default: current directory)

    Returns:
        The moved file name

    Raises:
        RelocationError: With step set to open, create, copy, close or remove
    """
    logger = get_logger()
    source_path = Path(source_dir) / candidate.name
    dest_path = Path(dest_dir) / candidate.name

    # Truncating the destination would destroy the only copy.
    if _same_file(source_path, dest_path):
        raise RelocationError(
            "create", dest_path, f"source and destination are the same file: {dest_path}"
        )

    try:
        src = source_path.open("rb")
    except OSError as e:
        raise RelocationError("open", source_path, f"failed to open source file: {e}") from e

    with src:
        try:
            dst = dest_path.open("wb")
        except OSError as e:
            raise RelocationError("create", dest_path, f"failed to create destination file: {e}") from e

        with dst:
            try:
                shutil.copyfileobj(src, dst, CHUNK_SIZE)
                copied = dst.tell()
            except OSError as e:
                logger.warning("Partial destination file left in place", path=str(dest_path))
                raise RelocationError("copy", dest_path, f"failed to copy file: {e}") from e

            try:
                dst.close()
            except OSError as e:
                logger.warning("Partial destination file left in place", path=str(dest_path))
                raise RelocationError("close", dest_path, f"failed to close destination file: {e}") from e

    try:
        source_path.unlink()
    except OSError as e:
        raise RelocationError("remove", source_path, f"failed to remove original file: {e}") from e

    logger.record_move(copied)
    logger.info(
        "Moved file",
        source=str(source_path),
        destination=str(dest_path),
        bytes=copied,
    )
    return candidate.name
