"""
Configuration management for Claude Agent Kit.

Handles the asset category table, the template root and the global and
project-local configuration roots.
"""

import os
from pathlib import Path
from typing import Dict, List, Optional, Union


class KitConfig:
    """Configuration for Claude Agent Kit categories and paths."""

    # Asset categories in installation order
    CATEGORY_CONFIGS = {
        'agents': {
            'kind': 'agent',
            'suffix': '.md',
            'is_dir': False,
        },
        'commands': {
            'kind': 'command',
            'suffix': '.md',
            'is_dir': False,
        },
        'hooks': {
            'kind': 'hook',
            'suffix': '.cjs',
            'is_dir': False,
        },
        'skills': {
            'kind': 'skill',
            'suffix': '',
            'is_dir': True,
        },
    }

    # Agents rendered from the stack template by `init`
    GENERATED_AGENTS = ('developer', 'database')

    CONFIG_DIR_NAME = '.claude'
    TEMPLATES_ENV_VAR = 'AGENT_KIT_TEMPLATES'
    DEFAULT_STACK = 'generic'
    CLI_PROBE_TIMEOUT = 5

    def __init__(self, template_root: Optional[Union[str, Path]] = None,
                 home: Optional[Union[str, Path]] = None,
                 cwd: Optional[Union[str, Path]] = None):
        self.template_root = self._resolve_template_root(template_root)
        self.home = Path(home) if home is not None else Path.home()
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()

    def _resolve_template_root(self, template_root: Optional[Union[str, Path]]) -> Path:
        """Pick the template root: explicit argument, then environment, then packaged templates."""
        if template_root is not None:
            return Path(template_root).resolve()

        env_root = os.environ.get(self.TEMPLATES_ENV_VAR)
        if env_root:
            return Path(env_root).expanduser().resolve()

        return (Path(__file__).parent / 'templates').resolve()

    def get_categories(self) -> List[str]:
        """Get category names in installation order."""
        return list(self.CATEGORY_CONFIGS.keys())

    def get_category_config(self, category: str) -> Dict:
        """Get the configuration for an asset category."""
        try:
            return self.CATEGORY_CONFIGS[category]
        except KeyError:
            raise ValueError(f"Unknown asset category: {category}") from None

    def get_template_dir(self, category: str) -> Path:
        """Get the template directory for a category."""
        self.get_category_config(category)
        return self.template_root / category

    def get_global_root(self) -> Path:
        """Get the per-user configuration root (~/.claude)."""
        return self.home / self.CONFIG_DIR_NAME

    def get_project_root(self) -> Path:
        """Get the project-local configuration root (./.claude)."""
        return self.cwd / self.CONFIG_DIR_NAME

    def get_target_root(self, global_scope: bool = False) -> Path:
        """Get the install target; project-local unless global is requested."""
        return self.get_global_root() if global_scope else self.get_project_root()
