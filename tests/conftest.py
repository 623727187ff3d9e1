"""Pytest configuration and fixtures for Claude Agent Kit tests."""

import json
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from agent_kit.config import KitConfig
from agent_kit.installer import AssetInstaller


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        # Resolved so symlinked temp roots (macOS /var) compare equal
        yield Path(tmp_dir).resolve()


@pytest.fixture
def template_root(temp_dir: Path) -> Path:
    """Create a small template tree with one or two items per category."""
    root = temp_dir / "templates"

    agents_dir = root / "agents"
    agents_dir.mkdir(parents=True)
    (agents_dir / "reviewer.md").write_text("""---
name: reviewer
description: Reviews code changes
tools: Read, Grep
model: sonnet
---

# Reviewer
""")
    (agents_dir / "shipper.md").write_text("""---
name: shipper
description: Ships reviewed changes
tools: Read, Bash
model: sonnet
---

# Shipper
""")
    (agents_dir / "developer.md").write_text("""---
name: developer
description: Static developer agent
tools: Read
model: sonnet
---

STATIC DEVELOPER
""")

    commands_dir = root / "commands"
    commands_dir.mkdir()
    (commands_dir / "team-ship.md").write_text("""---
description: Ship a feature
---

# Team Ship
""")

    hooks_dir = root / "hooks"
    hooks_dir.mkdir()
    (hooks_dir / "protect-env.cjs").write_text("process.exit(0);\n")

    skill_dir = root / "skills" / "tdd-workflow"
    (skill_dir / "references").mkdir(parents=True)
    (skill_dir / "SKILL.md").write_text("""---
name: tdd-workflow
description: Test-first workflow
---

# TDD
""")
    (skill_dir / "references" / "checklist.md").write_text("- [ ] tests pass\n")

    return root


@pytest.fixture
def config(temp_dir: Path, template_root: Path) -> KitConfig:
    """Create a test configuration with home and cwd inside the temp dir."""
    home = temp_dir / "home"
    home.mkdir()
    cwd = temp_dir / "project"
    cwd.mkdir()
    return KitConfig(template_root=template_root, home=home, cwd=cwd)


@pytest.fixture
def target_root(config: KitConfig) -> Path:
    """The project-local configuration root (<cwd>/.claude)."""
    return config.get_project_root()


@pytest.fixture
def installer(config: KitConfig, target_root: Path) -> AssetInstaller:
    """Create an installer targeting the project-local root."""
    return AssetInstaller(config, target_root)


@pytest.fixture
def project_dir(temp_dir: Path) -> Path:
    """Create an empty project directory for stack detection."""
    project = temp_dir / "app"
    project.mkdir()
    return project


@pytest.fixture
def package_json():
    """Return a helper that writes package.json with the given dependency names."""
    def write(project: Path, dependencies=None, dev_dependencies=None):
        package = {"name": "app", "version": "1.0.0"}
        if dependencies:
            package["dependencies"] = {name: "^1.0.0" for name in dependencies}
        if dev_dependencies:
            package["devDependencies"] = {name: "^1.0.0" for name in dev_dependencies}
        (project / "package.json").write_text(json.dumps(package))
    return write
