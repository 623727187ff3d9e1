"""
Test CLI main function by invoking it with different arguments.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from agent_kit import __version__
from kit import create_parser, main

NOT_INSTALLED = {'cli_installed': False, 'cli_version': None, 'config_exists': False}
INSTALLED = {'cli_installed': True, 'cli_version': '1.0.0', 'config_exists': True}


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    """Disable colors so output can be matched literally."""
    monkeypatch.setenv('NO_COLOR', '1')


@pytest.fixture
def cli_env(monkeypatch, template_root: Path, project_dir: Path) -> Path:
    """Run the CLI from project_dir against the test template root."""
    monkeypatch.setenv('AGENT_KIT_TEMPLATES', str(template_root))
    monkeypatch.chdir(project_dir)
    return project_dir


class TestParser:
    """Test argument parsing."""

    def test_scope_flags_are_exclusive(self):
        """--global and --project cannot be combined."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(['install', '--global', '--project'])

    def test_install_defaults(self):
        """No selection flags leave every category unselected."""
        args = create_parser().parse_args(['install'])

        assert args.global_scope is False
        assert (args.agents, args.commands, args.hooks, args.skills) == (None, None, None, None)

    def test_version(self, capsys):
        """--version prints the package version."""
        with patch('sys.argv', ['claude-agent-kit', '--version']):
            with pytest.raises(SystemExit) as exc_info:
                main()

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_no_command_shows_help(self, capsys):
        """Running without a command prints help and fails."""
        with patch('sys.argv', ['claude-agent-kit']):
            assert main() == 1

        assert 'usage:' in capsys.readouterr().out


class TestCLIInstall:
    """Test install command via CLI main()."""

    def test_install_single_agent(self, cli_env, capsys):
        """Only the selected agent is installed into ./.claude."""
        with patch('sys.argv', ['claude-agent-kit', 'install', '--agents', 'reviewer']):
            assert main() == 0

        assert (cli_env / '.claude' / 'agents' / 'reviewer.md').exists()
        assert not (cli_env / '.claude' / 'agents' / 'shipper.md').exists()
        assert '[SUCCESS]' in capsys.readouterr().out

    def test_install_invalid_name(self, cli_env, capsys):
        """Invalid names fail with a readable error and exit status 1."""
        with patch('sys.argv', ['claude-agent-kit', 'install', '--agents', '../evil']):
            assert main() == 1

        err = capsys.readouterr().err
        assert err.startswith('[ERROR]')
        assert 'Invalid agent name: "../evil"' in err
        assert not (cli_env / '.claude').exists()

    def test_install_missing_asset(self, cli_env, capsys):
        """A missing template file is reported as a file operation failure."""
        with patch('sys.argv', ['claude-agent-kit', 'install', '--commands', 'nope']):
            assert main() == 1

        assert 'File operation failed' in capsys.readouterr().err


class TestCLIInit:
    """Test init command via CLI main()."""

    def test_init_yes_with_stack(self, cli_env, capsys):
        """--yes with an explicit stack needs no input."""
        with patch('sys.argv', ['claude-agent-kit', 'init', '--yes', '--stack', 'python-flask-postgres']):
            with patch('kit.detect_claude_code', return_value=NOT_INSTALLED):
                with patch('builtins.input') as mock_input:
                    assert main() == 0

        mock_input.assert_not_called()
        developer = (cli_env / '.claude' / 'agents' / 'developer.md').read_text()
        assert 'Flask' in developer
        out = capsys.readouterr().out
        assert 'Claude Code not detected' in out
        assert 'Using stack: Python + Flask + PostgreSQL' in out

    def test_init_unknown_stack(self, cli_env, capsys):
        """An unknown --stack is rejected before anything is written."""
        with patch('sys.argv', ['claude-agent-kit', 'init', '--yes', '--stack', 'cobol-mainframe']):
            with patch('kit.detect_claude_code', return_value=INSTALLED):
                assert main() == 1

        assert 'Unknown stack: cobol-mainframe' in capsys.readouterr().err
        assert not (cli_env / '.claude').exists()

    def test_init_cancelled_without_claude(self, cli_env, capsys):
        """Declining to continue without Claude Code writes nothing."""
        with patch('sys.argv', ['claude-agent-kit', 'init']):
            with patch('kit.detect_claude_code', return_value=NOT_INSTALLED):
                with patch('builtins.input', return_value='n'):
                    assert main() == 0

        assert 'Installation cancelled' in capsys.readouterr().out
        assert not (cli_env / '.claude').exists()

    def test_init_uses_detected_stack(self, cli_env, package_json, capsys):
        """With --yes the detected stack template is used."""
        package_json(cli_env, ['next', 'react', '@supabase/supabase-js'], ['typescript'])

        with patch('sys.argv', ['claude-agent-kit', 'init', '--yes']):
            with patch('kit.detect_claude_code', return_value=INSTALLED):
                assert main() == 0

        out = capsys.readouterr().out
        assert 'Matched stack template: Next.js + Supabase' in out
        assert 'Supabase' in (cli_env / '.claude' / 'agents' / 'database.md').read_text()

    def test_init_path_option(self, temp_dir, template_root, monkeypatch, package_json):
        """--path selects both the scanned project and the ./.claude target."""
        monkeypatch.setenv('AGENT_KIT_TEMPLATES', str(template_root))
        other = temp_dir / 'other'
        other.mkdir()
        (other / 'requirements.txt').write_text('django\npsycopg2\n')

        with patch('sys.argv', ['claude-agent-kit', 'init', '--yes', '--path', str(other)]):
            with patch('kit.detect_claude_code', return_value=INSTALLED):
                assert main() == 0

        assert 'Django' in (other / '.claude' / 'agents' / 'developer.md').read_text()

    def test_init_rejects_detected_and_selects(self, cli_env, package_json):
        """Declining the detected stack falls through to the menu."""
        package_json(cli_env, ['react', 'express', 'pg'])

        with patch('sys.argv', ['claude-agent-kit', 'init']):
            with patch('kit.detect_claude_code', return_value=INSTALLED):
                with patch('builtins.input', side_effect=['n', 'oops', 'generic']):
                    assert main() == 0

        developer = (cli_env / '.claude' / 'agents' / 'developer.md').read_text()
        assert 'Express' not in developer

    def test_init_menu_when_nothing_detected(self, cli_env):
        """An empty project goes straight to the menu."""
        with patch('sys.argv', ['claude-agent-kit', 'init']):
            with patch('kit.detect_claude_code', return_value=INSTALLED):
                with patch('builtins.input', return_value='1'):
                    assert main() == 0

        assert 'Supabase' in (cli_env / '.claude' / 'agents' / 'developer.md').read_text()

    def test_init_interrupted(self, cli_env, capsys):
        """Ctrl-C at a prompt exits with status 1."""
        with patch('sys.argv', ['claude-agent-kit', 'init']):
            with patch('kit.detect_claude_code', return_value=NOT_INSTALLED):
                with patch('builtins.input', side_effect=KeyboardInterrupt):
                    assert main() == 1

        assert 'Operation cancelled by user' in capsys.readouterr().err


class TestCLIListAndDetect:
    """Test list and detect commands via CLI main()."""

    def test_list(self, cli_env, capsys):
        """Stacks and template assets are listed with descriptions."""
        with patch('sys.argv', ['claude-agent-kit', 'list']):
            assert main() == 0

        out = capsys.readouterr().out
        assert 'Stacks (11):' in out
        assert any(line.split()[1:] == ['nextjs-supabase', 'Next.js', '+', 'Supabase'] for line in out.splitlines())
        assert 'reviewer' in out and 'Reviews code changes' in out
        assert 'tdd-workflow' in out
        assert 'Static developer agent' not in out

    def test_detect_json(self, cli_env, capsys):
        """--json prints the full detection."""
        (cli_env / 'Gemfile').write_text("gem 'rails'\ngem 'pg'\n")

        with patch('sys.argv', ['claude-agent-kit', 'detect', '--json']):
            assert main() == 0

        data = json.loads(capsys.readouterr().out)
        assert data['stack_id'] == 'ruby-rails-postgres'
        assert data['raw']['ruby']['backend'] == 'rails'

    def test_detect_empty(self, cli_env, capsys):
        """An empty project reports no stack."""
        with patch('sys.argv', ['claude-agent-kit', 'detect', '--verbose']):
            assert main() == 0

        out = capsys.readouterr().out
        assert 'No known stack detected' in out
        assert 'Probes:' in out
