#!/usr/bin/env python3
"""
Claude Agent Kit - Install and manage Claude Code agents, commands, hooks and skills.

This script detects the technology stack of a project, generates the
stack-specific developer and database agents and installs the curated
template assets into ~/.claude or ./.claude.
"""

import argparse
import json
import os
import sys
from typing import Optional

from agent_kit import __version__
from agent_kit.claude_cli import detect_claude_code, get_install_instructions
from agent_kit.config import KitConfig
from agent_kit.exceptions import (
    FileOperationError,
    InvalidAssetName,
    KitError,
    PathSecurityViolation,
    UnknownStackError,
)
from agent_kit.formatting import (
    colored_status,
    format_asset_list,
    format_detection,
    format_install_summary,
)
from agent_kit.installer import AssetInstaller
from agent_kit.resolver import describe_stack, resolve
from agent_kit.stacks import get_stack, get_stack_choices, list_stacks


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog='claude-agent-kit',
        description='Claude Agent Kit - Install and manage Claude Code agents, commands, hooks and skills',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Detect the stack and install everything into ./.claude
  %(prog)s init
  %(prog)s init --yes --stack nextjs-supabase

  # Install into ~/.claude instead
  %(prog)s init --global

  # Install selected assets only
  %(prog)s install --agents reviewer,planner --skills tdd-workflow

  # Inspect what is available and what was detected
  %(prog)s list
  %(prog)s detect --json
        """
    )

    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Init command
    init_parser = subparsers.add_parser(
        'init', help='Initialize with an auto-detected or selected tech stack')
    _add_scope_arguments(init_parser)
    init_parser.add_argument('--yes', '-y', action='store_true',
                             help='Skip confirmations and use the detected or default stack')
    init_parser.add_argument('--stack', metavar='ID',
                             help='Use this stack template instead of detecting one')
    init_parser.add_argument('--path', metavar='DIR',
                             help='Project directory (default: current directory)')
    init_parser.add_argument('--verbose', '-v', action='store_true',
                             help='Show what each ecosystem probe reported')

    # Install command
    install_parser = subparsers.add_parser(
        'install', help='Install specific agents, commands, hooks and skills (advanced)')
    _add_scope_arguments(install_parser)
    install_parser.add_argument('--agents', metavar='NAMES',
                                help='Install specific agents (comma-separated)')
    install_parser.add_argument('--commands', metavar='NAMES',
                                help='Install specific commands (comma-separated)')
    install_parser.add_argument('--hooks', metavar='NAMES',
                                help='Install specific hooks (comma-separated)')
    install_parser.add_argument('--skills', metavar='NAMES',
                                help='Install specific skills (comma-separated)')

    # List command
    subparsers.add_parser('list', help='List available stacks, agents, commands, hooks and skills')

    # Detect command
    detect_parser = subparsers.add_parser('detect', help='Detect the tech stack of a project')
    detect_parser.add_argument('--path', metavar='DIR',
                               help='Project directory (default: current directory)')
    detect_parser.add_argument('--json', action='store_true',
                               help='Print the detection as JSON')
    detect_parser.add_argument('--verbose', '-v', action='store_true',
                               help='Show what each ecosystem probe reported')

    return parser


def _add_scope_arguments(parser: argparse.ArgumentParser):
    scope = parser.add_mutually_exclusive_group()
    scope.add_argument('--global', '-g', dest='global_scope', action='store_true',
                       help='Install to the global ~/.claude/ directory')
    scope.add_argument('--project', '-p', dest='project_scope', action='store_true',
                       help='Install to the project ./.claude/ directory (default)')


def confirm(message: str, default: bool = False) -> bool:
    """Ask a yes/no question on stdin."""
    hint = '[Y/n]' if default else '[y/N]'
    response = input(f"{message} {hint}: ").strip().lower()
    if not response:
        return default
    return response in ['y', 'yes']


def select_stack() -> str:
    """Show the stack menu and return the chosen stack ID."""
    choices = get_stack_choices()

    print("Available stacks:")
    for index, choice in enumerate(choices, 1):
        print(f"   {index:>2}. {choice['name']}")
        print(f"       {choice['description']}")

    while True:
        response = input(f"\nWhat stack will you be using? [1-{len(choices)}]: ").strip()
        if response.isdigit() and 1 <= int(response) <= len(choices):
            return choices[int(response) - 1]['id']
        if get_stack(response):
            return response
        print(colored_status('ERROR', f"Invalid choice '{response}'"))


def cmd_init(args, config: KitConfig) -> int:
    """Detect the stack, generate agents and install everything."""
    claude_status = detect_claude_code(config.get_global_root(), timeout=config.CLI_PROBE_TIMEOUT)

    if claude_status['cli_installed']:
        print(colored_status('CHECK', f"Claude Code detected ({claude_status['cli_version']})"))
    else:
        instructions = get_install_instructions()
        print(colored_status('WARNING', 'Claude Code not detected'))
        print("   This kit requires Claude Code to be installed.")
        print(f"   Install: {instructions['npm']}")
        print(f"   Documentation: {instructions['docs']}")

        if not args.yes and not confirm("\n   Continue installation anyway?"):
            print("   Installation cancelled")
            return 0
    print()

    stack_id = _choose_stack(args, config)
    stack = get_stack(stack_id) or get_stack(config.DEFAULT_STACK)
    print(colored_status('STACK', f"Using stack: {stack.name}"))

    target_root = config.get_target_root(global_scope=args.global_scope)
    print(colored_status('INFO', f"Target directory: {target_root}"))
    print()

    installer = AssetInstaller(config, target_root)
    result = installer.init(stack.id)
    print(format_install_summary(result))

    print("\nNext steps:")
    print("   1. Restart Claude Code to load new agents and skills")
    print("   2. Try /team-ship to start building features")
    print("   3. Use /team-create-agent to add custom agents")
    return 0


def _choose_stack(args, config: KitConfig) -> Optional[str]:
    """Pick the stack template: --stack, then detection, then the menu."""
    if args.stack:
        if get_stack(args.stack) is None:
            known = ', '.join(choice['id'] for choice in get_stack_choices())
            raise UnknownStackError(f"Unknown stack: {args.stack} (available: {known})")
        return args.stack

    detection = resolve(config.cwd)
    print(format_detection(detection, verbose=args.verbose))
    print()

    if not describe_stack(detection):
        if args.yes:
            return config.DEFAULT_STACK
        return select_stack()

    stack = get_stack(detection.stack_id)
    if stack:
        print(colored_status('STACK', f"Matched stack template: {stack.name}"))
        print(f"   {stack.description}")
        question = f'Use "{stack.name}" stack template?'
    else:
        question = 'Use detected technologies with generic template?'

    if args.yes or confirm(question, default=True):
        return detection.stack_id
    return select_stack()


def cmd_install(args, config: KitConfig) -> int:
    """Install the selected assets."""
    target_root = config.get_target_root(global_scope=args.global_scope)
    print(colored_status('INFO', f"Target directory: {target_root}"))

    selection = {
        'agents': args.agents,
        'commands': args.commands,
        'hooks': args.hooks,
        'skills': args.skills,
    }

    installer = AssetInstaller(config, target_root)
    result = installer.install(selection)
    print(format_install_summary(result))
    print(colored_status('TIP', 'Restart Claude Code to use the new agents, commands and skills'))
    return 0


def cmd_list(config: KitConfig) -> int:
    """List stacks and the template assets."""
    installer = AssetInstaller(config, config.get_project_root())

    stacks = list_stacks()
    print(f"Stacks ({len(stacks)}):")
    max_id_len = max(len(stack.id) for stack in stacks)
    for stack in stacks:
        print(f"   • {stack.id:<{max_id_len}}  {stack.name}")
    print()

    print("Generated for your stack (by init):")
    print("   • developer  Stack-specific implementation specialist")
    print("   • database   Stack-specific database administrator")
    print()

    agents = [
        asset for asset in installer.describe_available('agents')
        if asset['name'] not in config.GENERATED_AGENTS
    ]
    print(format_asset_list('agents', agents))
    for category in ('commands', 'hooks', 'skills'):
        print()
        print(format_asset_list(category, installer.describe_available(category)))

    print()
    print(colored_status('TIP', 'Quick start: claude-agent-kit init'))
    return 0


def cmd_detect(args) -> int:
    """Print the detected stack."""
    detection = resolve(args.path)

    if args.json:
        print(json.dumps(detection.to_dict(), indent=2))
    else:
        print(format_detection(detection, verbose=args.verbose))
    return 0


def main():
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = KitConfig(cwd=getattr(args, 'path', None))

        if args.command == 'init':
            return cmd_init(args, config)
        elif args.command == 'install':
            return cmd_install(args, config)
        elif args.command == 'list':
            return cmd_list(config)
        elif args.command == 'detect':
            return cmd_detect(args)

        return 0

    except (KeyboardInterrupt, EOFError):
        print(f"\n{colored_status('ERROR', 'Operation cancelled by user')}", file=sys.stderr)
        return 1
    except (InvalidAssetName, PathSecurityViolation, UnknownStackError) as e:
        print(colored_status('ERROR', str(e)), file=sys.stderr)
        return 1
    except FileOperationError as e:
        print(colored_status('ERROR', f"File operation failed: {e}"), file=sys.stderr)
        return 1
    except KitError as e:
        print(colored_status('ERROR', f"Claude Agent Kit error: {e}"), file=sys.stderr)
        return 1
    except Exception as e:
        print(colored_status('ERROR', f"Unexpected error: {e}"), file=sys.stderr)
        if os.getenv('DEBUG'):
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
