#!/usr/bin/env python3
"""
Filesystem backend abstraction layer.

Provides the raw file operations Claude Agent Kit needs (listing template
directories, copying and writing files). Backends perform no path security
checks of their own; callers are expected to validate paths first.
"""

import os
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List


class BackendError(Exception):
    """Base exception for backend errors."""
    pass


class FileSystemBackend(ABC):
    """Abstract base class for file system operations."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check if path exists."""
        pass

    @abstractmethod
    def is_dir(self, path: str) -> bool:
        """Check if path is a directory."""
        pass

    @abstractmethod
    def mkdir(self, path: str, parents: bool = True, exist_ok: bool = True):
        """Create directory."""
        pass

    @abstractmethod
    def copy_file(self, source: str, dest: str):
        """Copy file from source to dest, replacing dest."""
        pass

    @abstractmethod
    def write_text(self, path: str, content: str):
        """Write text content to path, replacing it."""
        pass

    @abstractmethod
    def list_files(self, path: str, suffix: str = '') -> List[str]:
        """List file names in a directory, optionally filtered by suffix."""
        pass

    @abstractmethod
    def list_dirs(self, path: str) -> List[str]:
        """List subdirectory names in a directory."""
        pass


class LocalBackend(FileSystemBackend):
    """Backend for local file system operations."""

    def _resolve_path(self, path: str) -> Path:
        """Make path absolute without following symlinks."""
        p = Path(path)
        return p if p.is_absolute() else Path.cwd() / p

    def exists(self, path: str) -> bool:
        """Check if path exists."""
        return self._resolve_path(path).exists()

    def is_dir(self, path: str) -> bool:
        """Check if path is a directory."""
        return self._resolve_path(path).is_dir()

    def mkdir(self, path: str, parents: bool = True, exist_ok: bool = True):
        """Create directory."""
        try:
            self._resolve_path(path).mkdir(parents=parents, exist_ok=exist_ok)
        except OSError as e:
            raise BackendError(f"Could not create directory {path}: {e}") from e

    def copy_file(self, source: str, dest: str):
        """Copy file from source to dest.

        The parent of dest must already exist.
        """
        src_path = self._resolve_path(source)
        dest_path = self._resolve_path(dest)

        try:
            # Remove existing file or link so the copy never writes through it
            if dest_path.is_symlink() or dest_path.is_file():
                dest_path.unlink()

            shutil.copy2(src_path, dest_path)
        except (OSError, shutil.Error) as e:
            raise BackendError(f"Could not copy {source} to {dest}: {e}") from e

    def write_text(self, path: str, content: str):
        """Write text content to path."""
        file_path = self._resolve_path(path)
        try:
            if file_path.is_symlink():
                file_path.unlink()
            file_path.write_text(content, encoding='utf-8')
        except OSError as e:
            raise BackendError(f"Could not write {path}: {e}") from e

    def list_files(self, path: str, suffix: str = '') -> List[str]:
        """List file names in a directory, sorted."""
        dir_path = self._resolve_path(path)
        try:
            names = os.listdir(dir_path)
        except OSError as e:
            raise BackendError(f"Could not list files in {path}: {e}") from e

        return sorted(
            name for name in names
            if (dir_path / name).is_file() and name.endswith(suffix)
        )

    def list_dirs(self, path: str) -> List[str]:
        """List subdirectory names in a directory, sorted."""
        dir_path = self._resolve_path(path)
        try:
            names = os.listdir(dir_path)
        except OSError as e:
            raise BackendError(f"Could not list directories in {path}: {e}") from e

        return sorted(name for name in names if (dir_path / name).is_dir())
