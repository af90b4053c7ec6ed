"""Configuration file loading and validation.

This module handles loading batch configuration from JSON and YAML files,
merging CLI arguments with file-based configuration (with CLI taking
precedence), and validating that referenced directives exist in the registry.

Configuration files can specify:
- src_dir: Directory containing the files to process
- out_dir: Directory to write processed files to
- include: List of suffixes selecting files
- exclude: List of suffixes excluding files
- directives: List of directive names applied in order
- mode: "line" or "whole"
"""

import json
from pathlib import Path
from typing import Any

import yaml

from pipeprocess.cli.registry import get_directive
from pipeprocess.core.splitting import ProcessingMode

LIST_KEYS = ("include", "exclude", "directives")


class ConfigError(Exception):
    """Configuration file error.

    Raised when configuration files cannot be loaded or parsed, including
    file not found errors and syntax errors in JSON/YAML.
    """
    pass


def load_config(path: Path) -> dict[str, Any]:
    """Load configuration from JSON or YAML file.

    Format is determined by file extension (.json, .yaml, .yml). Other
    extensions are tried as JSON first, then YAML.

    Args:
        path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        ConfigError: If file cannot be loaded, parsed, or is not a mapping

    Example:
        >>> config = load_config(Path("batch.yaml"))
        >>> config["directives"]
        ['strip', 'upper']
    """
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        content = path.read_text(encoding="utf-8")

        if path.suffix == ".json":
            data = json.loads(content)
        elif path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content)
        else:
            try:
                data = json.loads(content)
            except json.JSONDecodeError:
                data = yaml.safe_load(content)

    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Configuration in {path} must be a mapping, got {type(data).__name__}"
        )
    return data


def merge_config(base: dict[str, Any], **overrides: Any) -> dict[str, Any]:
    """Merge CLI arguments into base configuration.

    Only non-None override values are applied, so config file values are
    used when the corresponding CLI argument is not given. List arguments
    replace the file's list rather than extending it.

    Example:
        >>> merged = merge_config({"mode": "line", "include": [".txt"]}, mode="whole")
        >>> merged
        {'mode': 'whole', 'include': ['.txt']}
    """
    merged = base.copy()

    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(value, Path):
            value = str(value)
        merged[key] = list(value) if isinstance(value, (list, tuple)) else value

    return merged


def validate_config(
    config: dict[str, Any],
    required: tuple[str, ...] = (),
) -> list[str]:
    """Validate configuration structure and referenced directives.

    Checks that:
    - Required keys are present
    - include/exclude/directives are lists of strings
    - Referenced directives exist in the registry
    - mode, if given, is "line" or "whole"

    Args:
        config: Configuration dictionary to validate
        required: Keys that must be present and non-empty

    Returns:
        List of validation error messages (empty list if valid)

    Example:
        >>> validate_config({"directives": ["upper", "shout"]})
        ["Unknown directive 'shout'. Available: ..."]
    """
    errors = []

    for key in required:
        if not config.get(key):
            errors.append(f"Missing required setting: {key}")

    for key in LIST_KEYS:
        if key not in config:
            continue
        value = config[key]
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            errors.append(f"Setting '{key}' must be a list of strings")

    directives = config.get("directives")
    if isinstance(directives, list):
        for name in directives:
            if not isinstance(name, str):
                continue
            try:
                get_directive(name)
            except KeyError as e:
                errors.append(e.args[0])

    if config.get("mode") is not None:
        valid_modes = [m.value for m in ProcessingMode]
        if config["mode"] not in valid_modes:
            errors.append(
                f"Unknown mode '{config['mode']}'. Available: {', '.join(valid_modes)}"
            )

    return errors
