"""
Claude Agent Kit - Stack-aware installer for Claude Code agents, commands, hooks and skills.

This package detects a project's technology stack, renders stack-specific agents
and installs curated template assets into a user or project configuration root.
"""

__version__ = "1.0.0"

# Import exceptions
from .exceptions import (
    DetectionReadError,
    FileOperationError,
    InvalidAssetName,
    KitError,
    PathSecurityViolation,
    SkillInstallWarning,
    UnknownStackError,
)

# Import path checks
from .pathguard import (
    PathGuard,
    assert_config_path,
    assert_contained,
    is_contained,
)

# Import stack detection
from .resolver import (
    StackDetection,
    describe_stack,
    map_to_stack_template,
    merge_detections,
    resolve,
)

# Import utilities
from .utils import (
    parse_frontmatter,
    parse_name_list,
    validate_asset_name,
)

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "KitError",
    "PathSecurityViolation",
    "InvalidAssetName",
    "FileOperationError",
    "DetectionReadError",
    "SkillInstallWarning",
    "UnknownStackError",
    # Path checks
    "PathGuard",
    "is_contained",
    "assert_contained",
    "assert_config_path",
    # Stack detection
    "StackDetection",
    "resolve",
    "merge_detections",
    "map_to_stack_template",
    "describe_stack",
    # Utilities
    "validate_asset_name",
    "parse_name_list",
    "parse_frontmatter",
]
