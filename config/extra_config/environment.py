"""Environment loading for the marketplace.

Variables are read from ``.env``, then ``.env.<DJANGO_ENV>`` and finally
``.env.local`` (skipped inside Docker). Later files override earlier ones.
"""

import os
from pathlib import Path
from typing import List, Tuple

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent.parent
ROOT_DIR = BASE_DIR

ENVIRONMENT = os.getenv("DJANGO_ENV", "development").strip().lower()


def _env_files() -> List[Tuple[Path, bool]]:
    files = [(ROOT_DIR / ".env", False), (ROOT_DIR / f".env.{ENVIRONMENT}", True)]
    if not os.getenv("IS_DOCKER"):
        files.append((ROOT_DIR / ".env.local", True))
    return files


for env_file, override in _env_files():
    if env_file.exists():
        load_dotenv(env_file, override=override)

__all__ = ["BASE_DIR", "ROOT_DIR", "ENVIRONMENT"]
