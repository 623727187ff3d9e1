"""
Stack template catalog.

The catalog is loaded once from ``stacks.yaml`` shipped next to this module
and is read-only afterwards.
"""

from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

import yaml

STACKS_FILE = Path(__file__).parent / 'stacks.yaml'

DEVELOPER_FIELDS = ('name', 'description', 'tech_stack', 'file_structure', 'instructions', 'boundaries')
DATABASE_FIELDS = ('name', 'description', 'tech_stack', 'instructions', 'safe_commands',
                   'dangerous_commands', 'protection_rules')


class StackTemplate:
    """A catalog entry holding the prose used to render the generated agents."""

    __slots__ = ('id', 'name', 'description', 'developer', 'database')

    def __init__(self, stack_id: str, name: str, description: str,
                 developer: Mapping[str, str], database: Mapping[str, str]):
        object.__setattr__(self, 'id', stack_id)
        object.__setattr__(self, 'name', name)
        object.__setattr__(self, 'description', description)
        object.__setattr__(self, 'developer', MappingProxyType(dict(developer)))
        object.__setattr__(self, 'database', MappingProxyType(dict(database)))

    def __setattr__(self, name, value):
        raise AttributeError(f"StackTemplate is read-only (cannot set '{name}')")

    def __repr__(self):
        return f"StackTemplate(id={self.id!r}, name={self.name!r})"

    @classmethod
    def from_dict(cls, stack_id: str, data: Dict) -> 'StackTemplate':
        """Build a template from its YAML mapping, checking required fields."""
        for section, fields in (('developer', DEVELOPER_FIELDS), ('database', DATABASE_FIELDS)):
            record = data.get(section) or {}
            missing = [field for field in fields if field not in record]
            if missing:
                raise ValueError(f"Stack '{stack_id}' {section} is missing: {', '.join(missing)}")

        return cls(
            stack_id,
            data['name'],
            data['description'],
            {field: str(data['developer'][field]).rstrip() for field in DEVELOPER_FIELDS},
            {field: str(data['database'][field]).rstrip() for field in DATABASE_FIELDS},
        )

    def to_choice(self) -> Dict[str, str]:
        return {'id': self.id, 'name': self.name, 'description': self.description}


def load_stacks(path: Path = STACKS_FILE) -> Mapping[str, StackTemplate]:
    """Load stack templates from a YAML file."""
    with open(path, encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    return MappingProxyType({
        stack_id: StackTemplate.from_dict(stack_id, entry)
        for stack_id, entry in data.items()
    })


STACKS = load_stacks()


def get_stack(stack_id: Optional[str]) -> Optional[StackTemplate]:
    """Get a stack template by ID, or None if the catalog has no such entry."""
    if stack_id is None:
        return None
    return STACKS.get(stack_id)


def list_stacks() -> List[StackTemplate]:
    """Get all stack templates in catalog order."""
    return list(STACKS.values())


def get_stack_choices() -> List[Dict[str, str]]:
    """Get id/name/description for every stack, for selection menus."""
    return [stack.to_choice() for stack in STACKS.values()]
