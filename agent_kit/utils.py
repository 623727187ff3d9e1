"""
Claude Agent Kit utility functions.

This module contains asset name validation, selection list parsing and
frontmatter parsing for template files.
"""

import re
from typing import List, Optional

import yaml

from agent_kit.exceptions import InvalidAssetName

ASSET_NAME_PATTERN = re.compile(r'[A-Za-z0-9_-]+')


def validate_asset_name(name: str, kind: str) -> str:
    """Validate a user-supplied asset name.

    Args:
        name: Bare asset name (no extension)
        kind: Asset kind ('agent', 'command', 'hook', 'skill'), used in messages only

    Returns:
        The name, unchanged

    Raises:
        InvalidAssetName: If the name contains anything but letters, digits, '-' and '_'
    """
    if not isinstance(name, str) or not ASSET_NAME_PATTERN.fullmatch(name):
        raise InvalidAssetName(
            name, kind,
            f'Invalid {kind} name: "{name}". Only alphanumeric, dash, and underscore allowed.'
        )

    # Redundant with the character class above; kept as a second layer
    if '..' in name or '/' in name or '\\' in name:
        raise InvalidAssetName(
            name, kind,
            f'Invalid {kind} name: "{name}". Path traversal detected.'
        )

    return name


def parse_name_list(value: Optional[str]) -> Optional[List[str]]:
    """Split a comma-separated selection into names.

    Returns None when no selection was given, meaning "everything available".
    """
    if value is None:
        return None
    return [item.strip() for item in value.split(',')]


def parse_frontmatter(content: str) -> tuple[dict, str]:
    """Parse YAML frontmatter from markdown content.

    Args:
        content: Markdown content that may contain frontmatter

    Returns:
        Tuple of (frontmatter_dict, body_content)
    """
    lines = content.split('\n')

    if not lines or lines[0].strip() != '---':
        return {}, content

    frontmatter_lines = []
    body_start_idx = 0

    for i in range(1, len(lines)):
        if lines[i].strip() == '---':
            body_start_idx = i + 1
            break
        frontmatter_lines.append(lines[i])
    else:
        # No closing delimiter found
        return {}, content

    try:
        frontmatter = yaml.safe_load('\n'.join(frontmatter_lines)) or {}
    except yaml.YAMLError:
        frontmatter = {}

    if not isinstance(frontmatter, dict):
        frontmatter = {}

    body_lines = lines[body_start_idx:]
    while body_lines and not body_lines[0].strip():
        body_lines.pop(0)

    return frontmatter, '\n'.join(body_lines)
