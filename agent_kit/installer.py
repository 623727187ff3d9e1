"""
Asset installation for Claude Agent Kit.

Creates the configuration directory skeleton, resolves which assets to
install and drives the guarded copier over them. Categories are processed in
a fixed order (agents, commands, hooks, skills); the first fatal error stops
the whole run and nothing already written is rolled back.
"""

from pathlib import Path
from typing import Dict, List, Optional, Union

from agent_kit.config import KitConfig
from agent_kit.copier import AssetCopier
from agent_kit.exceptions import FileOperationError, SkillInstallWarning
from agent_kit.generate import generate_stack_agents
from agent_kit.stacks import get_stack
from agent_kit.utils import parse_frontmatter, parse_name_list, validate_asset_name
from fs_backend import BackendError

Selection = Dict[str, Optional[Union[str, List[str]]]]

SKILL_DOC = 'SKILL.md'


class InstallResult:
    """What an install or init run wrote, per category."""

    def __init__(self, target_root: Path, categories: List[str], stack_id: Optional[str] = None):
        self.target_root = target_root
        self.stack_id = stack_id
        self.installed: Dict[str, List[str]] = {category: [] for category in categories}
        self.generated: List[str] = []
        self.warnings: List[str] = []

    def counts(self) -> Dict[str, int]:
        """Number of items written per category, generated agents included."""
        counts = {category: len(items) for category, items in self.installed.items()}
        counts['agents'] = counts.get('agents', 0) + len(self.generated)
        return counts

    def to_dict(self) -> Dict:
        return {
            'target_root': str(self.target_root),
            'stack_id': self.stack_id,
            'installed': {category: list(items) for category, items in self.installed.items()},
            'generated': list(self.generated),
            'warnings': list(self.warnings),
        }


class AssetInstaller:
    """Installs template assets into one configuration root."""

    def __init__(self, config: KitConfig, target_root: Union[str, Path],
                 copier: Optional[AssetCopier] = None):
        self.config = config
        self.target_root = Path(target_root)
        self.copier = copier or AssetCopier(config.template_root, self.target_root)

    def create_structure(self):
        """Create the category directories under the target root (idempotent)."""
        for category in self.config.get_categories():
            category_dir = self.copier.guard.check_destination(self.target_root / category)
            try:
                self.copier.backend.mkdir(str(category_dir), parents=True, exist_ok=True)
            except BackendError as e:
                raise FileOperationError(f"Could not create directory {category_dir}: {e}") from e

    def list_available(self, category: str) -> List[str]:
        """List the installable items of a category in the template root."""
        category_config = self.config.get_category_config(category)
        template_dir = self.config.get_template_dir(category)

        try:
            if category_config['is_dir']:
                return self.copier.backend.list_dirs(str(template_dir))
            return self.copier.backend.list_files(str(template_dir), category_config['suffix'])
        except BackendError as e:
            raise FileOperationError(f"Could not list {category} in {template_dir}: {e}") from e

    def describe_available(self, category: str) -> List[Dict[str, str]]:
        """List a category's items with the description from their frontmatter.

        Skills are described by the SKILL.md inside the skill directory.
        """
        category_config = self.config.get_category_config(category)
        template_dir = self.config.get_template_dir(category)

        assets = []
        for item in self.list_available(category):
            if category_config['is_dir']:
                doc_path = template_dir / item / SKILL_DOC
                name = item
            else:
                doc_path = template_dir / item
                name = item[:-len(category_config['suffix'])] if category_config['suffix'] else item

            description = ''
            if doc_path.is_file():
                try:
                    frontmatter, _ = parse_frontmatter(doc_path.read_text(encoding='utf-8'))
                except (OSError, UnicodeDecodeError) as e:
                    raise FileOperationError(f"Could not read {doc_path}: {e}") from e
                description = str(frontmatter.get('description') or '')

            assets.append({'name': name, 'description': description})
        return assets

    def resolve_items(self, category: str, names: Optional[Union[str, List[str]]]) -> List[str]:
        """Turn a selection into file or directory names for one category.

        Explicit names are validated and given the category suffix. None means
        every item found in the template root.
        """
        category_config = self.config.get_category_config(category)

        if isinstance(names, str):
            names = parse_name_list(names)
        if names is None:
            return self.list_available(category)

        return [
            validate_asset_name(name, category_config['kind']) + category_config['suffix']
            for name in names
        ]

    def _copy_item(self, category: str, item: str):
        src = self.config.get_template_dir(category) / item
        dest = self.target_root / category / item
        if self.config.get_category_config(category)['is_dir']:
            self.copier.copy_dir(src, dest)
        else:
            self.copier.copy_file(src, dest)

    def _install_items(self, category: str, items: List[str], result: InstallResult):
        for item in items:
            self._copy_item(category, item)
            result.installed[category].append(item)

    def _copy_skill(self, item: str):
        try:
            self._copy_item('skills', item)
        except FileOperationError as e:
            raise SkillInstallWarning(f"Skill '{item}' was not installed: {e}") from e

    def _install_skills(self, items: Optional[List[str]], result: InstallResult):
        """Install skills; filesystem failures become warnings instead of errors."""
        if items is None:
            try:
                items = self.list_available('skills')
            except FileOperationError as e:
                result.warnings.append(f"Skills installation skipped: {e}")
                return

        for item in items:
            try:
                self._copy_skill(item)
            except SkillInstallWarning as e:
                result.warnings.append(str(e))
                continue
            result.installed['skills'].append(item)

    def install(self, selection: Optional[Selection] = None) -> InstallResult:
        """Install selected assets.

        Args:
            selection: Category name to names (list or comma-separated string);
                a missing or None entry installs everything in that category

        Returns:
            InstallResult describing what was written
        """
        selection = selection or {}
        unknown = set(selection) - set(self.config.get_categories())
        if unknown:
            raise ValueError(f"Unknown asset categories: {', '.join(sorted(unknown))}")

        # Once any category is named explicitly, unnamed categories are skipped
        explicit = any(selection.get(category) is not None for category in self.config.get_categories())

        # Resolve and validate every category before anything is written
        resolved = {}
        for category in self.config.get_categories():
            names = selection.get(category)
            if names is None and explicit:
                resolved[category] = []
            elif names is None and category == 'skills':
                resolved[category] = None
            else:
                resolved[category] = self.resolve_items(category, names)

        result = InstallResult(self.target_root, self.config.get_categories())
        self.create_structure()

        for category in self.config.get_categories():
            if category == 'skills':
                self._install_skills(resolved[category], result)
            else:
                self._install_items(category, resolved[category], result)

        return result

    def init(self, stack_id: Optional[str] = None) -> InstallResult:
        """Install everything, generating the stack-specific agents.

        Stack IDs without a catalog entry fall back to the generic template.
        """
        stack = get_stack(stack_id) or get_stack(self.config.DEFAULT_STACK)
        result = InstallResult(self.target_root, self.config.get_categories(), stack.id)
        self.create_structure()

        agents_dir = self.target_root / 'agents'
        generated = generate_stack_agents(stack.id)
        for filename, content in generated.items():
            self.copier.write_file(agents_dir / filename, content)
            result.generated.append(filename)

        # Static agents sharing a generated name must not overwrite it
        static_agents = [
            item for item in self.list_available('agents')
            if Path(item).stem not in self.config.GENERATED_AGENTS
        ]
        self._install_items('agents', static_agents, result)

        for category in ('commands', 'hooks'):
            self._install_items(category, self.list_available(category), result)

        self._install_skills(None, result)
        return result
