"""Environment variable loading utilities."""

import os
from pathlib import Path

from dotenv import load_dotenv


def load_env(env_file: str | Path | None = None) -> bool:
    """Load environment variables from a .env file.

    Uses the explicit path when one is given, otherwise lets python-dotenv
    search upwards from the current directory. Variables already present in
    the process environment win over the file. Also sets up UTF-8 encoding
    environment variables for Windows compatibility.

    Args:
        env_file: Optional path to the .env file

    Returns:
        True if a file was found and loaded
    """
    os.environ.setdefault("PYTHONIOENCODING", "utf-8")
    os.environ.setdefault("PYTHONUTF8", "1")

    if env_file is not None:
        path = Path(env_file)
        if not path.exists():
            return False
        return load_dotenv(path)

    return load_dotenv()
