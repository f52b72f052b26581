"""Environment variable utilities for dbsampler.

Migration configs usually keep credentials out of the file itself and refer
to them as ``${VAR}``. This module loads a ``.env`` file sitting next to the
config (or in the working directory) so those variables are available.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from dbsampler.logging import get_logger

logger = get_logger(__name__)


def find_env_file(config_path: Optional[str] = None) -> Optional[Path]:
    """Find the .env file for a migration config.

    Args:
    ----
        config_path: Path of the migration config (defaults to current directory)

    Returns:
    -------
        Path to the .env file, or None if not found
    """
    candidates = []
    if config_path is not None:
        candidates.append(Path(config_path).resolve().parent / ".env")
    candidates.append(Path(os.getcwd()) / ".env")

    for env_file in candidates:
        if env_file.is_file():
            return env_file

    logger.debug("No .env file found")
    return None


def load_dotenv_file(env_file: Path) -> bool:
    """Load a .env file, overriding existing environment variables.

    Returns:
    -------
        True if the file was loaded, False otherwise
    """
    try:
        loaded = load_dotenv(env_file, override=True)
    except OSError as e:
        logger.warning(f"Error loading .env file: {e}")
        return False

    if loaded:
        logger.debug(f"Loaded environment variables from: {env_file}")
    else:
        logger.debug(f"No variables loaded from .env file: {env_file}")
    return loaded


def setup_environment(config_path: Optional[str] = None) -> bool:
    """Load the .env file belonging to a migration config, if there is one.

    Returns:
    -------
        True if a .env file was found and loaded, False otherwise
    """
    env_file = find_env_file(config_path)
    if env_file is None:
        return False
    return load_dotenv_file(env_file)
