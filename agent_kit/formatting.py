"""
Output formatting utilities for Claude Agent Kit.

Provides color codes and formatting functions for terminal output.
"""

import os
from typing import TYPE_CHECKING, Dict, List

if TYPE_CHECKING:
    from agent_kit.installer import InstallResult
    from agent_kit.resolver import StackDetection


class Colors:
    """ANSI color codes for terminal output."""
    RED = '\033[0;31m'
    GREEN = '\033[0;32m'
    YELLOW = '\033[1;33m'
    BLUE = '\033[0;34m'
    MAGENTA = '\033[0;35m'
    CYAN = '\033[0;36m'
    NC = '\033[0m'  # No Color

    @staticmethod
    def enabled() -> bool:
        """Colors are off when NO_COLOR is set to anything."""
        return 'NO_COLOR' not in os.environ

    @staticmethod
    def colorize(text: str, color: str) -> str:
        """Wrap text in color codes."""
        if not Colors.enabled():
            return text
        return f"{color}{text}{Colors.NC}"


def colored_status(status_type: str, message: str = "") -> str:
    """Return a colored status message.

    Args:
        status_type: Type of status (SUCCESS, ERROR, WARNING, INFO, etc.)
        message: Optional message to append after the status

    Returns:
        Colored status string
    """
    color_map = {
        'SUCCESS': Colors.GREEN,
        'ERROR': Colors.RED,
        'WARNING': Colors.YELLOW,
        'INFO': Colors.BLUE,
        'TIP': Colors.CYAN,
        'CHECK': Colors.BLUE,
        'DETECTED': Colors.MAGENTA,
        'STACK': Colors.CYAN,
    }

    color = color_map.get(status_type, Colors.NC)
    status_text = Colors.colorize(f"[{status_type}]", color)

    if message:
        return f"{status_text} {message}"
    return status_text


def format_detection(detection: 'StackDetection', verbose: bool = False) -> str:
    """Format a stack detection for display.

    Args:
        detection: Merged detection result
        verbose: If True, also show what each ecosystem probe reported

    Returns:
        Formatted detection string
    """
    from agent_kit.resolver import describe_stack

    if detection.is_empty():
        info = colored_status('DETECTED', 'No known stack detected')
    else:
        info = colored_status('DETECTED', ', '.join(describe_stack(detection)))

    for field, value in detection.fields().items():
        info += f"\n   {field.capitalize():<10} {value or '-'}"
    info += f"\n   {'Template':<10} {detection.stack_id or '-'}"

    if verbose:
        info += "\n   Probes:"
        for ecosystem, partial in detection.raw.items():
            found = {k: v for k, v in partial.to_dict().items() if v is not None}
            details = ', '.join(f"{k}={v}" for k, v in found.items()) if found else 'nothing'
            info += f"\n      {ecosystem:<11} {details}"

    return info


def format_install_summary(result: 'InstallResult') -> str:
    """Format the result of an install or init run.

    Returns:
        Formatted summary string, warnings last
    """
    counts = result.counts()
    lines = [colored_status('SUCCESS', f"Installed into {result.target_root}")]

    if result.stack_id:
        lines.append(f"   Stack: {result.stack_id}")
    if result.generated:
        lines.append(f"   Generated: {', '.join(result.generated)}")

    for category, count in counts.items():
        lines.append(f"   {category.capitalize():<9} {count}")

    for warning in result.warnings:
        lines.append(colored_status('WARNING', warning))

    return '\n'.join(lines)


def format_asset_list(category: str, assets: List[Dict[str, str]]) -> str:
    """Format available assets of one category with their descriptions.

    Args:
        category: Category name used as heading
        assets: Dicts with 'name' and 'description'
    """
    info = f"{category.capitalize()} ({len(assets)}):"
    if not assets:
        return info + "\n   (none)"

    max_name_len = max(len(asset['name']) for asset in assets)
    for asset in assets:
        description = asset.get('description') or ''
        info += f"\n   • {asset['name']:<{max_name_len}}  {description}".rstrip()
    return info
