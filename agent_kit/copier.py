"""
Guarded asset copying for Claude Agent Kit.

Every copy checks the source against the template root and the destination
against the configuration root before the filesystem is touched. A failure
part way through a copy leaves whatever was already written in place.
"""

import os
from pathlib import Path
from typing import Optional, Union

from agent_kit.exceptions import FileOperationError
from agent_kit.pathguard import PathGuard
from fs_backend import BackendError, FileSystemBackend, LocalBackend


class AssetCopier:
    """Copies template assets into a configuration root."""

    def __init__(self, template_root: Union[str, Path], config_root: Union[str, Path],
                 backend: Optional[FileSystemBackend] = None):
        self.guard = PathGuard(template_root, config_root)
        self.backend = backend or LocalBackend()

    def copy_file(self, src: Union[str, Path], dest: Union[str, Path]):
        """Copy a single template file, overwriting dest."""
        src_path = self.guard.check_source(src)
        dest_path = self.guard.check_destination(dest)

        if not self.backend.exists(str(src_path)) or self.backend.is_dir(str(src_path)):
            raise FileOperationError(f"Template file not found: {src_path}")

        try:
            self.backend.copy_file(str(src_path), str(dest_path))
        except BackendError as e:
            raise FileOperationError(f"Failed to copy {src_path} to {dest_path}: {e}") from e

    def copy_dir(self, src: Union[str, Path], dest: Union[str, Path]):
        """Recursively copy a template directory, preserving its layout.

        Each nested entry is checked on both sides, so a symlink inside the
        source tree cannot pull in content from outside the template root.
        Linked directories inside the template root are copied as real
        directories; a link back to one of its own ancestors is an error.
        """
        src_path = self.guard.check_source(src)
        dest_path = self.guard.check_destination(dest)

        if not self.backend.is_dir(str(src_path)):
            raise FileOperationError(f"Template directory not found: {src_path}")

        try:
            self.backend.mkdir(str(dest_path), parents=True, exist_ok=True)

            for root, dirs, files in os.walk(src_path, followlinks=True):
                root_path = Path(root)
                real_root = os.path.realpath(root_path)
                target_dir = dest_path / root_path.relative_to(src_path)

                for dirname in sorted(dirs):
                    self.guard.check_source(root_path / dirname)
                    real_dir = os.path.realpath(root_path / dirname)
                    if os.path.commonpath([real_dir, real_root]) == real_dir:
                        raise FileOperationError(
                            f"Symlink cycle at {root_path / dirname} (points to {real_dir})"
                        )
                    self.guard.check_destination(target_dir / dirname)
                    self.backend.mkdir(str(target_dir / dirname), parents=True, exist_ok=True)

                for filename in sorted(files):
                    source_file = self.guard.check_source(root_path / filename)
                    target_file = self.guard.check_destination(target_dir / filename)
                    self.backend.copy_file(str(source_file), str(target_file))
        except BackendError as e:
            raise FileOperationError(f"Failed to copy {src_path} to {dest_path}: {e}") from e

    def write_file(self, dest: Union[str, Path], content: str):
        """Write generated content to dest; only the destination side is checked."""
        dest_path = self.guard.check_destination(dest)

        try:
            self.backend.write_text(str(dest_path), content)
        except BackendError as e:
            raise FileOperationError(f"Failed to write {dest_path}: {e}") from e
