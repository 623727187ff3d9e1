"""
Stack resolution for Claude Agent Kit.

Runs the ecosystem probes in a fixed order, merges their results with
first-writer-wins semantics and maps the merged stack to a template ID.
"""

from pathlib import Path
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from agent_kit.probes import FIELDS, PROBES, PartialDetection


class StackDetection:
    """Merged detection result for one project. Read-only once built."""

    __slots__ = FIELDS + ('stack_id', 'raw')

    def __init__(self, fields: Mapping[str, Optional[str]], stack_id: Optional[str],
                 raw: Mapping[str, PartialDetection]):
        for field in FIELDS:
            object.__setattr__(self, field, fields.get(field))
        object.__setattr__(self, 'stack_id', stack_id)
        object.__setattr__(self, 'raw', MappingProxyType(dict(raw)))

    def __setattr__(self, name, value):
        raise AttributeError(f"StackDetection is read-only (cannot set '{name}')")

    def __eq__(self, other):
        if not isinstance(other, StackDetection):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"StackDetection(stack_id={self.stack_id!r}, {self.fields()!r})"

    def fields(self) -> Dict[str, Optional[str]]:
        """The six merged stack fields."""
        return {field: getattr(self, field) for field in FIELDS}

    def is_empty(self) -> bool:
        return all(value is None for value in self.fields().values())

    def to_dict(self) -> Dict:
        data = self.fields()
        data['stack_id'] = self.stack_id
        data['raw'] = {name: partial.to_dict() for name, partial in self.raw.items()}
        return data


def _any_of(*values: str) -> Callable[[Optional[str]], bool]:
    return lambda value: value in values


def _absent_or(value_expected: str) -> Callable[[Optional[str]], bool]:
    return lambda value: value is None or value == value_expected


# Ordered template rules, first match wins. Each condition maps a field to
# either an exact value or a predicate on the field's value.
STACK_TEMPLATE_RULES: Sequence[Tuple[Dict, str]] = (
    ({'frontend': 'nextjs', 'database': 'supabase'}, 'nextjs-supabase'),
    ({'frontend': 'nextjs', 'database': 'postgresql'}, 'nextjs-postgres'),
    ({'frontend': 'react', 'backend': 'express', 'database': 'postgresql'}, 'react-express-postgres'),
    ({'frontend': 'react', 'backend': 'express', 'database': 'mongodb'}, 'react-express-mongodb'),
    ({'frontend': 'vue', 'backend': 'express', 'database': 'mongodb'}, 'vue-express-mongodb'),
    ({'frontend': 'vue', 'backend': _any_of('express', 'fastify'), 'database': 'postgresql'}, 'vue-node-postgres'),
    ({'backend': 'django', 'database': _absent_or('postgresql')}, 'python-django-postgres'),
    ({'backend': 'fastapi', 'database': _absent_or('postgresql')}, 'python-fastapi-postgres'),
    ({'backend': 'flask'}, 'python-flask-postgres'),
    ({'backend': 'rails'}, 'ruby-rails-postgres'),
    ({'language': 'go', 'database': 'postgresql'}, 'go-gin-postgres'),
    ({'language': 'rust', 'backend': 'actix'}, 'rust-actix-postgres'),
)

GENERIC_TEMPLATES_BY_LANGUAGE = {
    'python': 'python-generic',
    'go': 'go-generic',
    'ruby': 'ruby-generic',
    'rust': 'rust-generic',
    'typescript': 'node-generic',
    'javascript': 'node-generic',
}


def _condition_matches(condition: Dict, fields: Mapping[str, Optional[str]]) -> bool:
    for field, expected in condition.items():
        value = fields.get(field)
        if callable(expected):
            if not expected(value):
                return False
        elif value != expected:
            return False
    return True


def map_to_stack_template(fields: Union[StackDetection, Mapping[str, Optional[str]]]) -> Optional[str]:
    """Map merged stack fields to a stack template ID.

    Returns:
        The template ID, a per-language generic ID, or None if no language was detected
    """
    if isinstance(fields, StackDetection):
        fields = fields.fields()

    for condition, stack_id in STACK_TEMPLATE_RULES:
        if _condition_matches(condition, fields):
            return stack_id

    return GENERIC_TEMPLATES_BY_LANGUAGE.get(fields.get('language'))


def merge_detections(partials: Sequence[PartialDetection]) -> Dict[str, Optional[str]]:
    """Merge partial detections; the first non-empty value for each field wins."""
    merged = {field: None for field in FIELDS}
    for partial in partials:
        for field in FIELDS:
            value = getattr(partial, field)
            if value and not merged[field]:
                merged[field] = value
    return merged


def resolve(project_path: Union[str, Path, None] = None) -> StackDetection:
    """Detect the tech stack of a project.

    Args:
        project_path: Project root (defaults to the current directory)
    """
    project_path = Path(project_path) if project_path is not None else Path.cwd()

    raw = {name: probe(project_path) for name, probe in PROBES}
    fields = merge_detections(list(raw.values()))
    return StackDetection(fields, map_to_stack_template(fields), raw)


LANGUAGE_NAMES = {
    'typescript': 'TypeScript',
    'javascript': 'JavaScript',
    'python': 'Python',
    'go': 'Go',
    'ruby': 'Ruby',
    'rust': 'Rust',
}

FRONTEND_NAMES = {
    'nextjs': 'Next.js',
    'react': 'React',
    'vue': 'Vue.js',
    'angular': 'Angular',
    'svelte': 'Svelte',
    'nuxt': 'Nuxt',
}

BACKEND_NAMES = {
    'express': 'Express.js',
    'nestjs': 'NestJS',
    'fastify': 'Fastify',
    'django': 'Django',
    'fastapi': 'FastAPI',
    'flask': 'Flask',
    'rails': 'Ruby on Rails',
    'gin': 'Gin',
    'actix': 'Actix Web',
}

DATABASE_NAMES = {
    'supabase': 'Supabase',
    'postgresql': 'PostgreSQL',
    'mongodb': 'MongoDB',
    'mysql': 'MySQL',
    'sqlite': 'SQLite',
    'firebase': 'Firebase',
}

UI_NAMES = {
    'shadcn': 'shadcn/ui',
    'tailwind': 'Tailwind CSS',
    'chakra': 'Chakra UI',
    'mui': 'Material UI',
    'bootstrap': 'Bootstrap',
}

TESTING_NAMES = {
    'jest': 'Jest',
    'vitest': 'Vitest',
    'pytest': 'pytest',
    'rspec': 'RSpec',
    'go-test': 'Go testing',
    'cargo-test': 'Cargo test',
}


def describe_stack(detection: StackDetection) -> List[str]:
    """Get human-readable names for the detected technologies."""
    descriptions = []

    if detection.language:
        descriptions.append(LANGUAGE_NAMES.get(detection.language, detection.language))
    if detection.frontend:
        descriptions.append(FRONTEND_NAMES.get(detection.frontend, detection.frontend))
    # Next.js reports itself as both frontend and backend
    if detection.backend and detection.backend != detection.frontend:
        descriptions.append(BACKEND_NAMES.get(detection.backend, detection.backend))
    if detection.database:
        descriptions.append(DATABASE_NAMES.get(detection.database, detection.database))
    if detection.ui:
        descriptions.append(UI_NAMES.get(detection.ui, detection.ui))
    if detection.testing:
        descriptions.append(TESTING_NAMES.get(detection.testing, detection.testing))

    return descriptions
