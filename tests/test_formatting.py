"""Tests for output formatting."""

from pathlib import Path

from agent_kit.formatting import (
    Colors,
    colored_status,
    format_asset_list,
    format_detection,
    format_install_summary,
)
from agent_kit.installer import InstallResult
from agent_kit.probes import PartialDetection
from agent_kit.resolver import StackDetection

CATEGORIES = ['agents', 'commands', 'hooks', 'skills']


class TestColoredStatus:
    """Test status prefixes."""

    def test_plain_when_no_color(self, monkeypatch):
        """NO_COLOR strips escape codes."""
        monkeypatch.setenv('NO_COLOR', '1')
        assert colored_status('ERROR', 'boom') == '[ERROR] boom'

    def test_colored_by_default(self, monkeypatch):
        """Without NO_COLOR the status is wrapped in color codes."""
        monkeypatch.delenv('NO_COLOR', raising=False)
        status = colored_status('SUCCESS')

        assert status == f"{Colors.GREEN}[SUCCESS]{Colors.NC}"

    def test_unknown_status(self, monkeypatch):
        """Unknown status types still render."""
        monkeypatch.setenv('NO_COLOR', '')
        assert colored_status('CUSTOM', 'x') == '[CUSTOM] x'


class TestFormatDetection:
    """Test detection display."""

    def test_detected_stack(self, monkeypatch):
        monkeypatch.setenv('NO_COLOR', '1')
        fields = {'language': 'python', 'backend': 'django', 'database': 'postgresql'}
        detection = StackDetection(fields, 'python-django-postgres',
                                   {'python': PartialDetection(**fields)})

        text = format_detection(detection)

        assert text.startswith('[DETECTED] Python, Django, PostgreSQL')
        assert 'python-django-postgres' in text
        assert 'Probes:' not in text

    def test_verbose_lists_probes(self, monkeypatch):
        monkeypatch.setenv('NO_COLOR', '1')
        detection = StackDetection({}, None, {'rust': PartialDetection()})

        text = format_detection(detection, verbose=True)

        assert 'No known stack detected' in text
        assert 'Probes:' in text
        assert 'rust' in text and 'nothing' in text


class TestFormatInstallSummary:
    """Test the install summary."""

    def test_counts_and_warnings(self, monkeypatch):
        monkeypatch.setenv('NO_COLOR', '1')
        result = InstallResult(Path('/tmp/x/.claude'), CATEGORIES, stack_id='generic')
        result.generated = ['developer.md', 'database.md']
        result.installed['agents'] = ['reviewer.md']
        result.warnings.append('Failed to install skill "nope"')

        text = format_install_summary(result)
        lines = text.splitlines()

        assert lines[0] == '[SUCCESS] Installed into /tmp/x/.claude'
        assert 'Stack: generic' in text
        assert 'Generated: developer.md, database.md' in text
        assert any(line.split() == ['Agents', '3'] for line in lines)
        assert lines[-1] == '[WARNING] Failed to install skill "nope"'


class TestFormatAssetList:
    """Test asset listings."""

    def test_empty(self):
        assert format_asset_list('hooks', []) == 'Hooks (0):\n   (none)'

    def test_names_and_descriptions(self):
        text = format_asset_list('agents', [
            {'name': 'reviewer', 'description': 'Reviews code'},
            {'name': 'shipper', 'description': ''},
        ])

        assert text.splitlines()[0] == 'Agents (2):'
        assert 'reviewer  Reviews code' in text
        assert text.splitlines()[-1].endswith('shipper')
