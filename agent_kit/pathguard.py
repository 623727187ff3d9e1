"""
Path containment checks for Claude Agent Kit.

Every read from the template root and every write into a configuration root
goes through PathGuard. Paths are symlink-resolved before the check so a link
inside either tree cannot redirect the real target outside of it.
"""

import os
from pathlib import Path
from typing import Optional, Union

from agent_kit.exceptions import PathSecurityViolation

PathLike = Union[str, Path]

TEMPLATE = 'template'
CONFIG = 'config'
CONFIG_MARKER = '.claude'


def _resolve(path: PathLike) -> Path:
    """Resolve symlinks, falling back to lexical normalisation for missing paths."""
    try:
        return Path(path).resolve(strict=True)
    except (OSError, RuntimeError):
        return Path(os.path.realpath(os.path.abspath(path)))


def is_contained(root: PathLike, candidate: PathLike) -> bool:
    """Check whether candidate lies inside root after symlink resolution.

    The comparison is done on the path of candidate relative to root, not on
    string prefixes, so ``templates-bak/x`` is never inside ``templates``.
    """
    resolved_root = _resolve(root)
    resolved_candidate = _resolve(candidate)

    try:
        relative = os.path.relpath(resolved_candidate, resolved_root)
    except ValueError:
        # Different drives on Windows
        return False

    if os.path.isabs(relative):
        return False

    first_segment = relative.split(os.sep, 1)[0]
    return first_segment != os.pardir


def assert_contained(root: PathLike, candidate: PathLike, kind: str) -> Path:
    """Fail with PathSecurityViolation unless candidate is inside root.

    Returns:
        The candidate as an absolute Path (unresolved, so that callers keep
        operating on the name they asked for).
    """
    if not is_contained(root, candidate):
        raise PathSecurityViolation(candidate, kind)
    return Path(os.path.abspath(candidate))


def find_config_root(candidate: PathLike) -> Path:
    """Locate the ``.claude`` segment in candidate and return the path up to it.

    Raises:
        PathSecurityViolation: If there is no marker segment, or a ``..``
            segment follows it.
    """
    path = Path(candidate)
    if not path.is_absolute():
        # Join without normalising so '..' segments survive for the check below
        path = Path.cwd() / path

    parts = path.parts
    try:
        marker_index = parts.index(CONFIG_MARKER)
    except ValueError:
        raise PathSecurityViolation(
            candidate, CONFIG,
            f"Path '{candidate}' is not inside a {CONFIG_MARKER} directory"
        ) from None

    if os.pardir in parts[marker_index + 1:]:
        raise PathSecurityViolation(
            candidate, CONFIG,
            f"Path '{candidate}' contains '..' after {CONFIG_MARKER}"
        )

    return Path(*parts[:marker_index + 1])


def assert_config_path(candidate: PathLike, root: Optional[PathLike] = None) -> Path:
    """Check a write destination against the configuration root.

    Args:
        candidate: Destination path about to be written
        root: The install target; defaults to the ``.claude`` directory found in candidate

    Returns:
        The candidate as an absolute Path
    """
    marker_root = find_config_root(candidate)
    return assert_contained(root if root is not None else marker_root, candidate, CONFIG)


class PathGuard:
    """Containment checks bound to a template root and a configuration root."""

    def __init__(self, template_root: PathLike, config_root: PathLike):
        self.template_root = Path(template_root)
        self.config_root = Path(config_root)

    def check_source(self, path: PathLike) -> Path:
        """Assert that path can be read from the template root."""
        return assert_contained(self.template_root, path, TEMPLATE)

    def check_destination(self, path: PathLike) -> Path:
        """Assert that path can be written under the configuration root."""
        return assert_config_path(path, self.config_root)
