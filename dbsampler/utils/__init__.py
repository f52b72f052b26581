"""Utility modules for dbsampler."""

from .env import find_env_file, setup_environment

__all__ = ["find_env_file", "setup_environment"]
