"""
Config command for elparser CLI.

Usage:
    elparser config --show          Show effective configuration with sources
    elparser config --init          Create template config file
    elparser config --paths         Show config file paths
    elparser config get <key>       Get a specific config value
"""

import argparse
import sys
from pathlib import Path

from elparser.config import (
    CONFIG_FILENAMES,
    USER_CONFIG_PATH,
    Config,
    generate_template,
    get_config_paths,
)
from elparser.exceptions import ConfigError


def main(argv: list[str] | None = None) -> int:
    """Main entry point for config command."""
    parser = argparse.ArgumentParser(
        prog="elparser config",
        description="Manage elparser configuration",
    )

    action_group = parser.add_mutually_exclusive_group()
    action_group.add_argument(
        "--show",
        action="store_true",
        help="Show effective configuration with sources",
    )
    action_group.add_argument(
        "--init",
        action="store_true",
        help="Create template config file in current directory",
    )
    action_group.add_argument(
        "--paths",
        action="store_true",
        help="Show config file paths",
    )
    parser.add_argument("action", nargs="?", choices=["get"], help="Config action")
    parser.add_argument("key", nargs="?", help="Config key (e.g., parser.max_depth)")
    parser.add_argument(
        "--user",
        action="store_true",
        help="Use user config (~/.config/elparser/config.toml) for --init",
    )

    args = parser.parse_args(argv)

    try:
        if args.init:
            return _init_config(args.user)
        elif args.paths:
            return _show_paths()
        elif args.action == "get":
            if not args.key:
                print("Error: 'get' requires a key argument", file=sys.stderr)
                return 1
            return _get_config(args.key)
        else:
            return _show_config()

    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _show_config() -> int:
    """Show effective configuration with sources."""
    config = Config.load()

    print("# Effective elparser configuration")
    for section, values in config.as_dict().items():
        print()
        print(f"[{section}]")
        for key, value in values.items():
            _print_value(key, value, config.get_source(f"{section}.{key}"))

    return 0


def _format_value(value) -> str:
    if isinstance(value, str):
        return '"' + value.encode("unicode_escape").decode("ascii") + '"'
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "# not set"
    return str(value)


def _print_value(key: str, value, source: str) -> None:
    """Print a config value with its source."""
    source_display = Path(source).name if source != "default" else source
    print(f"{key} = {_format_value(value)}  # from: {source_display}")


def _show_paths() -> int:
    """Show config file paths."""
    paths = get_config_paths()

    print("Config file paths:")
    print()

    print(f"User config: {USER_CONFIG_PATH}")
    print(f"  Status: {'exists' if USER_CONFIG_PATH.exists() else 'not found'}")
    print()

    print(f"Project config search: {', '.join(CONFIG_FILENAMES)}")
    if paths["project"]:
        print(f"  Found: {paths['project']}")
    else:
        print("  Status: not found")

    return 0


def _init_config(user: bool = False) -> int:
    """Create a template config file."""
    if user:
        target = USER_CONFIG_PATH
        target.parent.mkdir(parents=True, exist_ok=True)
    else:
        target = Path.cwd() / CONFIG_FILENAMES[0]  # .elparser.toml

    if target.exists():
        print(f"Error: Config file already exists: {target}", file=sys.stderr)
        print("Remove it first or edit manually.", file=sys.stderr)
        return 1

    try:
        target.write_text(generate_template())
    except OSError as e:
        print(f"Error writing config file: {e}", file=sys.stderr)
        return 1

    print(f"Created config template: {target}")
    return 0


def _get_config(key: str) -> int:
    """Get a specific config value."""
    config = Config.load()

    parts = key.split(".")
    if len(parts) != 2:
        print(f"Error: Invalid key format '{key}'. Use 'section.key' format.", file=sys.stderr)
        return 1

    section, attr = parts
    values = config.as_dict().get(section)
    if values is None:
        print(f"Error: Unknown config section '{section}'", file=sys.stderr)
        return 1
    if attr not in values:
        print(f"Error: Unknown key '{attr}' in section '{section}'", file=sys.stderr)
        return 1

    print(_format_value(values[attr]))
    return 0


if __name__ == "__main__":
    sys.exit(main())
