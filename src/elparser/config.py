"""
Configuration file support for elparser.

Provides hierarchical configuration loading from:
1. Project config: .elparser.toml or elparser.toml in the project root
2. User config: ~/.config/elparser/config.toml

CLI arguments override config file values, and project config overrides user config.
"""

import sys
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from elparser.exceptions import ConfigError
from elparser.sexp.parser import DEFAULT_MAX_DEPTH

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]

# Config file names to search for in project directories
CONFIG_FILENAMES = [".elparser.toml", "elparser.toml"]

# User-level config path
USER_CONFIG_PATH = Path.home() / ".config" / "elparser" / "config.toml"

OUTPUT_FORMATS = ("sexp", "json", "tree")

# All known config keys for validation
KNOWN_KEYS = {
    "defaults": {"format", "verbose", "quiet"},
    "parser": {"max_depth"},
    "encoder": {"separator", "symbol_keys"},
}


@dataclass
class DefaultsConfig:
    """Default options for CLI commands."""

    format: str = "sexp"
    verbose: bool = False
    quiet: bool = False


@dataclass
class ParserConfig:
    """Parser limits. A max_depth of 0 disables the nesting bound."""

    max_depth: int = DEFAULT_MAX_DEPTH


@dataclass
class EncoderConfig:
    """Encoder options."""

    separator: str = "\n"
    symbol_keys: bool = False


@dataclass
class Config:
    """Merged configuration from all sources."""

    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    parser: ParserConfig = field(default_factory=ParserConfig)
    encoder: EncoderConfig = field(default_factory=EncoderConfig)

    # Track which file each setting came from (for --show)
    _sources: dict = field(default_factory=dict, repr=False)

    @classmethod
    def load(cls, start_dir: Path | None = None) -> "Config":
        """
        Load configuration with precedence: project > user > defaults.

        Args:
            start_dir: Directory to start searching from (default: current directory)

        Returns:
            Merged configuration object
        """
        if start_dir is None:
            start_dir = Path.cwd()

        config = cls()
        sources: dict[str, str] = {}

        # Load user config first (lower precedence)
        if USER_CONFIG_PATH.exists():
            user_data = _load_toml_file(USER_CONFIG_PATH)
            if user_data:
                _merge_config(config, user_data, str(USER_CONFIG_PATH), sources)

        project_config = _find_project_config(start_dir)
        if project_config:
            project_data = _load_toml_file(project_config)
            if project_data:
                _merge_config(config, project_data, str(project_config), sources)

        config._sources = sources
        return config

    def get_source(self, key: str) -> str:
        """Get the source file for a config key."""
        return self._sources.get(key, "default")

    def as_dict(self) -> dict[str, dict[str, Any]]:
        """Flatten to {section: {key: value}} for display."""
        return {
            "defaults": {
                "format": self.defaults.format,
                "verbose": self.defaults.verbose,
                "quiet": self.defaults.quiet,
            },
            "parser": {"max_depth": self.parser.max_depth},
            "encoder": {
                "separator": self.encoder.separator,
                "symbol_keys": self.encoder.symbol_keys,
            },
        }


def _find_project_config(start_dir: Path) -> Path | None:
    """
    Find project config by walking up the directory tree.

    Stops at .git directory or filesystem root.
    """
    current = start_dir.resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        # Stop at .git directory (project root)
        if (current / ".git").exists():
            break

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def _load_toml_file(path: Path) -> dict[str, Any] | None:
    """
    Load a TOML file.

    Returns:
        Parsed TOML data, or None when no TOML reader is available

    Raises:
        ConfigError: If TOML is invalid or the file cannot be read
    """
    if tomllib is None:
        warnings.warn(
            "tomli package not installed. Config file support requires 'pip install tomli' for Python < 3.11.",
            stacklevel=2,
        )
        return None

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}", context={"file": str(path)}) from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}", context={"file": str(path)}) from e


def _check_type(section: str, key: str, value: Any, expected: type, source: str) -> None:
    # bool is an int subclass; do not accept true/false for integer keys
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise ConfigError(
            f"Config key '{section}.{key}' must be of type {expected.__name__}",
            context={"file": source, "value": repr(value)},
        )


def _merge_config(
    config: Config, data: dict[str, Any], source: str, sources: dict[str, str]
) -> None:
    """
    Merge loaded config data into Config object.

    Args:
        config: Config object to update
        data: Raw config data from TOML
        source: Source file path (for tracking)
        sources: Dict to update with source info
    """
    for key in data:
        if key not in KNOWN_KEYS:
            warnings.warn(f"Unknown config key '{key}' in {source}", stacklevel=3)

    if "defaults" in data:
        defaults_data = data["defaults"]
        _warn_unknown_keys(defaults_data, KNOWN_KEYS["defaults"], "defaults", source)

        if "format" in defaults_data:
            fmt = defaults_data["format"]
            if fmt not in OUTPUT_FORMATS:
                raise ConfigError(
                    f"Invalid output format '{fmt}'",
                    context={"file": source},
                    suggestions=[f"Use one of: {', '.join(OUTPUT_FORMATS)}"],
                )
            config.defaults.format = fmt
            sources["defaults.format"] = source
        if "verbose" in defaults_data:
            _check_type("defaults", "verbose", defaults_data["verbose"], bool, source)
            config.defaults.verbose = defaults_data["verbose"]
            sources["defaults.verbose"] = source
        if "quiet" in defaults_data:
            _check_type("defaults", "quiet", defaults_data["quiet"], bool, source)
            config.defaults.quiet = defaults_data["quiet"]
            sources["defaults.quiet"] = source

    if "parser" in data:
        parser_data = data["parser"]
        _warn_unknown_keys(parser_data, KNOWN_KEYS["parser"], "parser", source)

        if "max_depth" in parser_data:
            _check_type("parser", "max_depth", parser_data["max_depth"], int, source)
            if parser_data["max_depth"] < 0:
                raise ConfigError(
                    "Config key 'parser.max_depth' cannot be negative",
                    context={"file": source},
                    suggestions=["Use 0 to disable the nesting limit"],
                )
            config.parser.max_depth = parser_data["max_depth"]
            sources["parser.max_depth"] = source

    if "encoder" in data:
        encoder_data = data["encoder"]
        _warn_unknown_keys(encoder_data, KNOWN_KEYS["encoder"], "encoder", source)

        if "separator" in encoder_data:
            _check_type("encoder", "separator", encoder_data["separator"], str, source)
            config.encoder.separator = encoder_data["separator"]
            sources["encoder.separator"] = source
        if "symbol_keys" in encoder_data:
            _check_type("encoder", "symbol_keys", encoder_data["symbol_keys"], bool, source)
            config.encoder.symbol_keys = encoder_data["symbol_keys"]
            sources["encoder.symbol_keys"] = source


def _warn_unknown_keys(data: dict[str, Any], known: set[str], section: str, source: str) -> None:
    """Warn about unknown keys in a config section."""
    for key in data:
        if key not in known:
            warnings.warn(f"Unknown config key '{section}.{key}' in {source}", stacklevel=4)


def get_config_paths() -> dict[str, Path | None]:
    """Return the existing user and project config files, None where missing."""
    return {
        "user": USER_CONFIG_PATH if USER_CONFIG_PATH.exists() else None,
        "project": _find_project_config(Path.cwd()),
    }


def generate_template() -> str:
    """
    Generate a template config file with all options documented.

    Returns:
        Template TOML string
    """
    return """# elparser configuration file
# Place as .elparser.toml in project root or ~/.config/elparser/config.toml for user defaults

[defaults]
# Output format for `elparser parse`: sexp, json, tree
# format = "sexp"

# Enable debug logging and full error tracebacks by default
# verbose = false

# Report CLI errors as one line, without context or suggestions
# quiet = false

[parser]
# Maximum nesting depth of lists and quotes; 0 disables the limit
# max_depth = 200

[encoder]
# Separator placed between forms when encoding several values
# separator = "\\n"

# Encode JSON object keys as symbols instead of strings
# symbol_keys = false
"""
