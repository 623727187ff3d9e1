"""
Ecosystem probes for stack detection.

One probe per language ecosystem. Each probe is keyed off the presence of its
manifest file and fills the stack fields by walking ordered rule tables, first
match wins. The Python, Go, Ruby and Rust probes search the lower-cased
manifest text for substrings; they do not parse dependencies, so a package
such as ``super-django-helper`` is reported as ``django``.

Probes never raise. Unreadable or malformed manifests count as "no marker".
"""

import json
from pathlib import Path
from typing import Dict, Iterable, Optional, Sequence, Tuple, Union

from agent_kit.exceptions import DetectionReadError

FIELDS = ('language', 'frontend', 'backend', 'database', 'testing', 'ui')

# A marker is a single string, or a tuple of strings that must all be present.
Marker = Union[str, Tuple[str, ...]]
Rule = Tuple[Tuple[Marker, ...], str]


class PartialDetection:
    """Stack fields reported by a single ecosystem probe."""

    def __init__(self, language: Optional[str] = None, frontend: Optional[str] = None,
                 backend: Optional[str] = None, database: Optional[str] = None,
                 testing: Optional[str] = None, ui: Optional[str] = None):
        self.language = language
        self.frontend = frontend
        self.backend = backend
        self.database = database
        self.testing = testing
        self.ui = ui

    def is_empty(self) -> bool:
        return all(getattr(self, field) is None for field in FIELDS)

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {field: getattr(self, field) for field in FIELDS}

    def __eq__(self, other):
        if not isinstance(other, PartialDetection):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        fields = ', '.join(f"{k}={v!r}" for k, v in self.to_dict().items() if v is not None)
        return f"PartialDetection({fields})"


# --- JavaScript / TypeScript (package.json dependencies) -------------------

JS_FRONTEND_RULES: Sequence[Rule] = (
    (('next',), 'nextjs'),
    (('nuxt',), 'nuxt'),
    (('vue',), 'vue'),
    (('react',), 'react'),
    (('@angular/core',), 'angular'),
    (('svelte',), 'svelte'),
)

JS_BACKEND_RULES: Sequence[Rule] = (
    (('express',), 'express'),
    (('@nestjs/core',), 'nestjs'),
    (('fastify',), 'fastify'),
    (('koa',), 'koa'),
    (('hono',), 'hono'),
)

JS_DATABASE_RULES: Sequence[Rule] = (
    (('@supabase/supabase-js',), 'supabase'),
    (('firebase', 'firebase-admin'), 'firebase'),
    (('mongodb', 'mongoose'), 'mongodb'),
    (('pg', 'postgres', '@prisma/client'), 'postgresql'),
    (('mysql', 'mysql2'), 'mysql'),
    (('better-sqlite3', 'sqlite3'), 'sqlite'),
)

JS_ORM_MARKERS = ('prisma', '@prisma/client')
JS_ORM_DEFAULT_DATABASE = 'postgresql'

JS_TESTING_RULES: Sequence[Rule] = (
    (('vitest',), 'vitest'),
    (('jest',), 'jest'),
    (('mocha',), 'mocha'),
    (('@playwright/test',), 'playwright'),
    (('cypress',), 'cypress'),
)

# Component libraries; checked after the Tailwind marker and take precedence over it
JS_UI_RULES: Sequence[Rule] = (
    (('@radix-ui/react-slot',), 'shadcn'),
    (('@chakra-ui/react',), 'chakra'),
    (('@mui/material',), 'mui'),
    (('bootstrap', 'react-bootstrap'), 'bootstrap'),
)

# --- Python (requirements.txt + pyproject.toml text) -----------------------

PYTHON_MANIFESTS = ('pyproject.toml', 'requirements.txt', 'Pipfile', 'setup.py')
PYTHON_SCANNED_MANIFESTS = ('requirements.txt', 'pyproject.toml')

PYTHON_BACKEND_RULES: Sequence[Rule] = (
    (('django',), 'django'),
    (('fastapi',), 'fastapi'),
    (('flask',), 'flask'),
    (('tornado',), 'tornado'),
    (('starlette',), 'starlette'),
)

PYTHON_DATABASE_RULES: Sequence[Rule] = (
    (('supabase',), 'supabase'),
    (('psycopg', 'asyncpg', 'postgresql'), 'postgresql'),
    (('pymongo', 'motor'), 'mongodb'),
    (('mysql', 'pymysql'), 'mysql'),
    (('sqlite',), 'sqlite'),
)

PYTHON_ORM_MARKER = 'sqlalchemy'
PYTHON_ORM_DEFAULT_DATABASE = 'postgresql'

PYTHON_TESTING_RULES: Sequence[Rule] = (
    (('pytest',), 'pytest'),
    (('unittest',), 'unittest'),
)

# --- Go (go.mod text) ------------------------------------------------------

GO_BACKEND_RULES: Sequence[Rule] = (
    (('gin-gonic/gin',), 'gin'),
    (('labstack/echo',), 'echo'),
    (('gofiber/fiber',), 'fiber'),
    (('gorilla/mux',), 'gorilla'),
)

GO_DATABASE_RULES: Sequence[Rule] = (
    (('lib/pq', 'jackc/pgx'), 'postgresql'),
    (('go-sql-driver/mysql',), 'mysql'),
    (('mongodb/mongo-go-driver',), 'mongodb'),
)

# --- Ruby (Gemfile text) ---------------------------------------------------

RUBY_BACKEND_RULES: Sequence[Rule] = (
    (('rails',), 'rails'),
    (('sinatra',), 'sinatra'),
    (('hanami',), 'hanami'),
)

RUBY_DATABASE_RULES: Sequence[Rule] = (
    (('pg',), 'postgresql'),
    (('mysql2',), 'mysql'),
    (('sqlite3',), 'sqlite'),
    (('mongoid',), 'mongodb'),
)

RUBY_TESTING_RULES: Sequence[Rule] = (
    (('rspec',), 'rspec'),
    (('minitest',), 'minitest'),
)

# --- Rust (Cargo.toml text) ------------------------------------------------

RUST_BACKEND_RULES: Sequence[Rule] = (
    (('actix-web',), 'actix'),
    (('axum',), 'axum'),
    (('rocket',), 'rocket'),
    (('warp',), 'warp'),
)

RUST_DATABASE_RULES: Sequence[Rule] = (
    (('tokio-postgres', ('sqlx', 'postgres')), 'postgresql'),
    (('mongodb',), 'mongodb'),
)


def _marker_in_text(marker: Marker, text: str) -> bool:
    if isinstance(marker, tuple):
        return all(part in text for part in marker)
    return marker in text


def match_text_rules(rules: Iterable[Rule], text: str) -> Optional[str]:
    """Return the value of the first rule with a marker found in text."""
    for markers, value in rules:
        if any(_marker_in_text(marker, text) for marker in markers):
            return value
    return None


def match_dependency_rules(rules: Iterable[Rule], dependencies: Dict) -> Optional[str]:
    """Return the value of the first rule with a marker declared as a dependency."""
    for markers, value in rules:
        if any(has_dependency(dependencies, marker) for marker in markers):
            return value
    return None


def has_dependency(dependencies: Dict, name: str) -> bool:
    return bool(dependencies.get(name))


def read_text(file_path: Path) -> str:
    """Read a manifest as text.

    Undecodable bytes are replaced so the rest of the manifest still matches.

    Raises:
        DetectionReadError: If the file cannot be read
    """
    try:
        return file_path.read_text(encoding='utf-8', errors='replace')
    except OSError as e:
        raise DetectionReadError(f"Could not read {file_path}: {e}") from e


def read_json(file_path: Path):
    """Read and parse a JSON manifest.

    Raises:
        DetectionReadError: If the file cannot be read or is not valid JSON
    """
    content = read_text(file_path)
    try:
        return json.loads(content)
    except ValueError as e:
        raise DetectionReadError(f"Could not parse {file_path}: {e}") from e


def _read_text_or_empty(file_path: Path) -> str:
    if not file_path.exists():
        return ''
    try:
        return read_text(file_path)
    except DetectionReadError:
        return ''


def _collect_dependencies(package: Dict) -> Dict:
    """Merge dependencies, devDependencies and peerDependencies into one mapping."""
    merged = {}
    for section in ('peerDependencies', 'devDependencies', 'dependencies'):
        deps = package.get(section)
        if isinstance(deps, dict):
            for name, version in deps.items():
                if version or name not in merged:
                    merged[name] = version
    return merged


def probe_javascript(project_path: Union[str, Path]) -> PartialDetection:
    """Detect a JavaScript/TypeScript stack from package.json."""
    project_path = Path(project_path)
    result = PartialDetection()

    package_json = project_path / 'package.json'
    if not package_json.exists():
        return result

    try:
        package = read_json(package_json)
    except DetectionReadError:
        return result

    # null, false, 0 and "" mean no manifest; empty objects and arrays do not
    if not package and not isinstance(package, (dict, list)):
        return result
    dependencies = _collect_dependencies(package) if isinstance(package, dict) else {}

    if has_dependency(dependencies, 'typescript') or (project_path / 'tsconfig.json').exists():
        result.language = 'typescript'
    else:
        result.language = 'javascript'

    result.frontend = match_dependency_rules(JS_FRONTEND_RULES, dependencies)
    result.backend = match_dependency_rules(JS_BACKEND_RULES, dependencies)

    # Next.js serves as its own backend
    if result.frontend == 'nextjs' and not result.backend:
        result.backend = 'nextjs'

    result.database = match_dependency_rules(JS_DATABASE_RULES, dependencies)
    if not result.database and any(has_dependency(dependencies, m) for m in JS_ORM_MARKERS):
        result.database = JS_ORM_DEFAULT_DATABASE

    result.testing = match_dependency_rules(JS_TESTING_RULES, dependencies)

    if has_dependency(dependencies, 'tailwindcss'):
        result.ui = 'tailwind'
    if (project_path / 'components.json').exists():
        result.ui = 'shadcn'
    else:
        result.ui = match_dependency_rules(JS_UI_RULES, dependencies) or result.ui

    return result


def probe_python(project_path: Union[str, Path]) -> PartialDetection:
    """Detect a Python stack from requirements.txt and pyproject.toml."""
    project_path = Path(project_path)
    result = PartialDetection()

    if not any((project_path / name).exists() for name in PYTHON_MANIFESTS):
        return result

    result.language = 'python'

    content = '\n'.join(
        _read_text_or_empty(project_path / name) for name in PYTHON_SCANNED_MANIFESTS
    ).lower()

    result.backend = match_text_rules(PYTHON_BACKEND_RULES, content)
    result.database = match_text_rules(PYTHON_DATABASE_RULES, content)

    # SQLAlchemy projects are assumed to run on PostgreSQL
    if PYTHON_ORM_MARKER in content and not result.database:
        result.database = PYTHON_ORM_DEFAULT_DATABASE

    result.testing = match_text_rules(PYTHON_TESTING_RULES, content)
    return result


def probe_go(project_path: Union[str, Path]) -> PartialDetection:
    """Detect a Go stack from go.mod."""
    go_mod = Path(project_path) / 'go.mod'
    result = PartialDetection()
    if not go_mod.exists():
        return result

    result.language = 'go'
    result.testing = 'go-test'

    content = _read_text_or_empty(go_mod).lower()
    result.backend = match_text_rules(GO_BACKEND_RULES, content)
    result.database = match_text_rules(GO_DATABASE_RULES, content)
    return result


def probe_ruby(project_path: Union[str, Path]) -> PartialDetection:
    """Detect a Ruby stack from Gemfile."""
    gemfile = Path(project_path) / 'Gemfile'
    result = PartialDetection()
    if not gemfile.exists():
        return result

    result.language = 'ruby'

    content = _read_text_or_empty(gemfile).lower()
    result.backend = match_text_rules(RUBY_BACKEND_RULES, content)
    result.database = match_text_rules(RUBY_DATABASE_RULES, content)
    result.testing = match_text_rules(RUBY_TESTING_RULES, content)
    return result


def probe_rust(project_path: Union[str, Path]) -> PartialDetection:
    """Detect a Rust stack from Cargo.toml."""
    cargo_toml = Path(project_path) / 'Cargo.toml'
    result = PartialDetection()
    if not cargo_toml.exists():
        return result

    result.language = 'rust'
    result.testing = 'cargo-test'

    content = _read_text_or_empty(cargo_toml).lower()
    result.backend = match_text_rules(RUST_BACKEND_RULES, content)
    result.database = match_text_rules(RUST_DATABASE_RULES, content)
    return result


# Scan order; earlier ecosystems win when fields are merged
PROBES = (
    ('javascript', probe_javascript),
    ('python', probe_python),
    ('go', probe_go),
    ('ruby', probe_ruby),
    ('rust', probe_rust),
)
