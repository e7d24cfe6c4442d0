"""Shared filesystem utilities.

Thin wrappers over os/shutil that turn OSError into FileOperationError so the
caller gets a message naming the paths involved.
"""

import os
import shutil
from pathlib import Path

from diffmk.errors import FileOperationError


def env_path(name: str, default: str) -> Path:
    """Get an executable path from an environment variable, or the default.

    Used for DIFFMK_LATEXMK and DIFFMK_LATEXDIFF_VC.
    """
    value = os.environ.get(name)
    if not value:
        return Path(default)
    return Path(value).expanduser()


def create_dir_all(path: Path) -> None:
    """Create a directory and any missing ancestors."""
    try:
        Path(path).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileOperationError("create directory", path, reason=str(e)) from e


def canonicalize(path: Path) -> Path:
    """Resolve a path that must exist to its absolute, symlink-free form."""
    try:
        return Path(path).resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise FileOperationError("canonicalize", path, reason=str(e)) from e


def copy(src: Path, dst: Path) -> None:
    try:
        shutil.copy(src, dst)
    except OSError as e:
        raise FileOperationError("copy", src, dst, reason=str(e)) from e


def rename(src: Path, dst: Path) -> None:
    """Move a file, replacing dst if it already exists."""
    try:
        Path(src).replace(dst)
    except OSError as e:
        raise FileOperationError("rename", src, dst, reason=str(e)) from e
