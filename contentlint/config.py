"""
Configuration for contentlint

Settings are layered, lowest precedence first: built-in defaults, a project
config file (``.contentlint.yaml`` or ``[tool.contentlint]`` in
``pyproject.toml``), GitHub Actions inputs from the environment, then
command-line flags. The result is a single immutable CheckConfig.
"""

import os
import pathlib
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import yaml

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Fallback package

CONFIG_FILENAMES = (".contentlint.yaml", ".contentlint.yml")
PYPROJECT_FILENAME = "pyproject.toml"

BOOL_SETTINGS = ("check_utf8", "check_single_trailing_newline", "check_trailing_whitespace")

# Same literals the Actions toolkit accepts for boolean inputs.
TRUE_VALUES = ("true", "True", "TRUE")
FALSE_VALUES = ("false", "False", "FALSE")


class ConfigError(ValueError):
    """Raised for invalid or unreadable configuration."""


@dataclass(frozen=True)
class CheckConfig:
    """Settings for one run; never mutated once built."""

    patterns: Tuple[str, ...] = ()
    check_utf8: bool = True
    check_single_trailing_newline: bool = True
    check_trailing_whitespace: bool = True
    jobs: int = 1

    def merged(self, settings: Mapping[str, Any], source: str = "settings") -> "CheckConfig":
        """Return a copy with ``settings`` applied on top of this config."""
        return replace(self, **normalize_settings(settings, source))

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def parse_bool_input(name: str, value: str) -> bool:
    """Parse a boolean the way GitHub Actions inputs are parsed."""
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ConfigError(
        f"Input does not meet YAML 1.2 \"Core Schema\" specification: {name}\n"
        "Support boolean input list: `true | True | TRUE | false | False | FALSE`"
    )


def parse_multiline_input(value: str) -> List[str]:
    """Split a multiline input into trimmed, non-empty lines."""
    return [line.strip() for line in value.splitlines() if line.strip()]


def _normalize_key(key: str) -> str:
    key = key.replace("-", "_")
    return "patterns" if key == "files" else key


def _as_patterns(value: Any, source: str) -> Tuple[str, ...]:
    if isinstance(value, str):
        return tuple(parse_multiline_input(value))
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return tuple(v.strip() for v in value if v.strip())
    raise ConfigError(f"{source}: 'files' must be a string or a list of strings")


def normalize_settings(settings: Mapping[str, Any], source: str = "settings") -> Dict[str, Any]:
    """Validate raw settings and map them onto CheckConfig field names."""
    known = {f.name for f in fields(CheckConfig)}
    result: Dict[str, Any] = {}

    for raw_key, value in settings.items():
        if not isinstance(raw_key, str):
            raise ConfigError(f"{source}: setting names must be strings, got {raw_key!r}")
        key = _normalize_key(raw_key)
        if key not in known:
            raise ConfigError(f"{source}: unknown setting '{raw_key}'")

        if key == "patterns":
            result[key] = _as_patterns(value, source)
        elif key in BOOL_SETTINGS:
            if not isinstance(value, bool):
                raise ConfigError(f"{source}: '{raw_key}' must be true or false")
            result[key] = value
        elif key == "jobs":
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigError(f"{source}: 'jobs' must be a positive integer")
            result[key] = value

    return result


def _load_toml(path: pathlib.Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except UnicodeDecodeError as exc:
        raise ConfigError(f"{path} is not valid UTF-8: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _pyproject_section(data: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
    tool = data.get("tool")
    if isinstance(tool, dict) and "contentlint" in tool:
        return tool["contentlint"]
    return None


def load_config_file(path: pathlib.Path) -> Dict[str, Any]:
    """Load raw settings from a YAML or TOML config file."""
    try:
        if path.suffix.lower() == ".toml":
            data: Any = _load_toml(path)
            if path.name == PYPROJECT_FILENAME:
                data = _pyproject_section(data) or {}
        else:
            with open(path, "r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh)
    except OSError as exc:
        raise ConfigError(f"Could not read config {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise ConfigError(f"{path} is not valid UTF-8: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping of settings")
    return data


def discover_config_file(root: pathlib.Path) -> Optional[pathlib.Path]:
    """Find the project config file under ``root``, if any."""
    for name in CONFIG_FILENAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate

    pyproject = root / PYPROJECT_FILENAME
    if pyproject.is_file() and _pyproject_section(_load_toml(pyproject)) is not None:
        return pyproject
    return None


def read_action_inputs(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Read GitHub Actions inputs (``INPUT_<NAME>`` variables).

    Empty inputs count as not provided.
    """
    env = os.environ if environ is None else environ
    settings: Dict[str, Any] = {}

    files = env.get("INPUT_FILES", "")
    if files.strip():
        settings["patterns"] = parse_multiline_input(files)

    for name in BOOL_SETTINGS:
        value = env.get(f"INPUT_{name.upper()}", "").strip()
        if value:
            settings[name] = parse_bool_input(name, value)

    jobs = env.get("INPUT_JOBS", "").strip()
    if jobs:
        try:
            settings["jobs"] = int(jobs)
        except ValueError:
            raise ConfigError(f"Input 'jobs' must be an integer, got {jobs!r}") from None

    return settings


def load_config(
    overrides: Optional[Mapping[str, Any]] = None,
    config_path: Optional[pathlib.Path] = None,
    root: Optional[pathlib.Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    require_patterns: bool = True,
) -> CheckConfig:
    """
    Build the run configuration from every layer.

    Args:
        overrides: Settings from the command line (highest precedence)
        config_path: Explicit config file; otherwise one is discovered in root
        root: Directory searched for a config file (defaults to cwd)
        environ: Environment used for Actions inputs (defaults to os.environ)
        require_patterns: Fail when no layer provides any file pattern

    Raises:
        ConfigError: any layer is malformed, or no patterns were given.
    """
    config = CheckConfig()

    path = config_path or discover_config_file(root or pathlib.Path.cwd())
    if path is not None:
        config = config.merged(load_config_file(path), source=str(path))

    config = config.merged(read_action_inputs(environ), source="action inputs")

    if overrides:
        config = config.merged(
            {k: v for k, v in overrides.items() if v is not None}, source="command line"
        )

    if require_patterns and not config.patterns:
        raise ConfigError("No file patterns given")
    return config


def describe(config: CheckConfig) -> Iterable[str]:
    """Human-readable lines describing ``config``, for verbose output."""
    yield f"patterns: {', '.join(config.patterns) or '(none)'}"
    for name in BOOL_SETTINGS:
        yield f"{name}: {'on' if getattr(config, name) else 'off'}"
    yield f"jobs: {config.jobs}"
