"""
Detection of the Claude Code CLI.

The version probe is best-effort: any failure means "not installed".
"""

import subprocess
import sys
from pathlib import Path
from typing import Dict, Optional

CLAUDE_COMMAND = 'claude'
INSTALL_COMMAND = 'npm install -g @anthropic-ai/claude-code'
DOCS_URL = 'https://docs.anthropic.com/en/docs/claude-code'


def get_claude_version(timeout: int = 5) -> Optional[str]:
    """Run `claude --version` and return its output, or None if unavailable."""
    try:
        result = subprocess.run(
            [CLAUDE_COMMAND, '--version'],
            capture_output=True,
            text=True,
            timeout=timeout
        )
    except (subprocess.TimeoutExpired, FileNotFoundError, OSError):
        return None

    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def detect_claude_code(global_root: Optional[Path] = None, timeout: int = 5) -> Dict:
    """Detect whether Claude Code is installed.

    Args:
        global_root: The per-user configuration root (defaults to ~/.claude)
        timeout: Seconds to wait for the version probe

    Returns:
        Dict with cli_installed, cli_version and config_exists
    """
    version = get_claude_version(timeout=timeout)

    if global_root is None:
        global_root = Path.home() / '.claude'

    try:
        config_exists = Path(global_root).exists()
    except OSError:
        config_exists = False

    return {
        'cli_installed': version is not None,
        'cli_version': version,
        'config_exists': config_exists,
    }


def get_install_instructions() -> Dict[str, str]:
    """Get Claude Code installation instructions for this platform."""
    if sys.platform.startswith('win'):
        platform = 'Windows'
    elif sys.platform == 'darwin':
        platform = 'macOS'
    else:
        platform = 'Linux'

    return {
        'npm': INSTALL_COMMAND,
        'docs': DOCS_URL,
        'platform': platform,
    }
