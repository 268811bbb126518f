from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def load_env(env_path: Optional[Path] = None) -> bool:
    """Load .env from the current directory if present.

    Variables already set in the environment win over the file.
    Returns True when a file was loaded.
    """
    if env_path is None:
        env_path = Path.cwd() / ".env"
    if not env_path.is_file():
        return False
    return load_dotenv(dotenv_path=env_path, override=False)
