"""Utility functions for locating Web2Cit's local working directory."""

from pathlib import Path

WORKDIR_NAME = '.web2cit'


def get_project_root() -> Path:
    """Find the project root by searching upwards from the Current Working Directory.

    Stops at the first directory containing a marker file.
    """
    current_path = Path.cwd()

    markers = {'.git', 'pyproject.toml', WORKDIR_NAME, 'requirements.txt'}

    for parent in [current_path] + list(current_path.parents):
        if any((parent / marker).exists() for marker in markers):
            return parent

    # No markers found (e.g. running in /tmp)
    return current_path


def get_logs_path() -> Path:
    """Return the path to the logs directory in .web2cit."""
    return get_project_root() / WORKDIR_NAME / 'logs'
