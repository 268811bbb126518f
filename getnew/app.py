import argparse
import sys
from typing import List, Optional

from . import __version__
from .config import Settings
from .env import load_env
from .errors import GetNewError
from .logger import get_logger
from .relocator import relocate
from .selector import select_query
from .unarchive import known_extensions, try_extract

DESCRIPTION = """\
Look in a source directory for the nth newest file and move it to the current
directory. By default the newest file is moved.

The source directory can be set with the GETNEW_SOURCE_DIR environment
variable or the --source flag, and defaults to ~/Downloads.

Optionally, provide a filter argument to match file names partially."""


def move_nth_newest(settings: Settings) -> str:
    candidate = select_query(settings.query())
    return relocate(settings.source_dir, candidate, settings.dest_dir)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="getnew",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("filter", nargs="?", default="", help="Case-insensitive substring the file name must contain")
    parser.add_argument("-s", "--source", help="Source directory (overrides GETNEW_SOURCE_DIR)")
    parser.add_argument("-n", "--nth", type=int, default=1, help="Nth newest file to move (default: 1, the newest)")
    parser.add_argument(
        "-z", "--unarchive",
        action="store_true",
        help=f"Unarchive the file if it's an archive ({', '.join(known_extensions())})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    parser.add_argument("--version", action="store_true", help="Show version")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    # Load .env if present (GETNEW_SOURCE_DIR, GETNEW_LOG_LEVEL, ...)
    load_env()
    args = build_parser().parse_args(argv)

    if args.version:
        print(__version__)
        return

    settings = Settings.from_args(args)
    logger = get_logger()
    try:
        logger.configure(
            level=settings.log_level,
            log_dir=settings.log_dir,
            enable_file=settings.log_dir is not None,
        )
    except OSError as e:
        logger.configure(level=settings.log_level)
        logger.warning(
            "Cannot open log directory, logging to console only",
            log_dir=str(settings.log_dir),
            error=str(e),
        )

    try:
        name = move_nth_newest(settings)
    except GetNewError as e:
        logger.record_error(type(e).__name__)
        logger.info("Move failed", error=str(e), source_dir=str(settings.source_dir))
        raise SystemExit(f"Error: {e}")
    print(name)
    sys.stdout.flush()

    if settings.unarchive:
        try:
            result = try_extract(settings.dest_dir)
        except GetNewError as e:
            logger.record_error(type(e).__name__)
            logger.info("Unarchive failed", error=str(e))
            raise SystemExit(f"Error unarchiving: {e}")
        print(f"Unarchived and removed: {result.archive}", file=sys.stderr)

    logger.log_metrics_summary()


if __name__ == "__main__":
    main()
