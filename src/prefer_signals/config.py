"""Configuration loading and management for prefer-signals.

Two layers live here:

    RuleOptions  -- the immutable options of the prefer-signals rule, filled
                    from defaults by resolve_options().
    LintConfig   -- host settings for a lint run (file filtering, output,
                    whether type information is available) plus the raw,
                    not yet resolved rule options.

LintConfig sources are merged in priority order:
    1. Defaults (defined in LintConfig)
    2. Global config (~/.prefer-signals.toml)
    3. Project config (./prefer-signals.toml)
    4. Explicit config file
    5. Environment variables (PREFER_SIGNALS_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(type_information=False)
    >>> config.type_information
    False
    >>> resolve_options({"preferReadonly": False}).prefer_readonly
    False
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Mapping, Optional, get_type_hints

from .exceptions import InvalidConfigError, PreferSignalsError

OutputFormat = Literal["rich", "json", "github"]


@dataclass(frozen=True)
class RuleOptions:
    """Resolved options of the prefer-signals rule.

    Attributes:
        types_to_replace: Constructor names reported as legacy observable wrappers
        prefer_readonly: Report signal-typed fields that are not readonly
        prefer_input_signal: Report the @Input() decorator
        prefer_query_signal: Report @ViewChild() and the other query decorators
        use_type_checking: Ask the type services when syntax is inconclusive
        signal_creation_functions: Extra factory names treated as producing signals
    """

    types_to_replace: frozenset[str] = frozenset({"BehaviorSubject"})
    prefer_readonly: bool = True
    prefer_input_signal: bool = True
    prefer_query_signal: bool = True
    use_type_checking: bool = True
    signal_creation_functions: frozenset[str] = frozenset()


DEFAULT_OPTIONS = RuleOptions()

# External (camelCase) option key -> RuleOptions field
OPTION_KEYS: dict[str, str] = {
    "typesToReplace": "types_to_replace",
    "preferReadonly": "prefer_readonly",
    "preferInputSignal": "prefer_input_signal",
    "preferQuerySignal": "prefer_query_signal",
    "useTypeChecking": "use_type_checking",
    "signalCreationFunctions": "signal_creation_functions",
}

_SET_FIELDS = frozenset({"types_to_replace", "signal_creation_functions"})


def resolve_options(partial: Optional[Mapping[str, Any]] = None) -> RuleOptions:
    """Fill every absent option with its default.

    Keys may use the external camelCase spelling or the field name. Values
    are assumed to already match the schema; no validation happens here.
    """
    if not partial:
        return DEFAULT_OPTIONS

    values: dict[str, Any] = {}
    for key, value in partial.items():
        name = OPTION_KEYS.get(key, key)
        if name in _SET_FIELDS:
            value = frozenset(value)
        values[name] = value

    return RuleOptions(**values)


def options_to_dict(options: RuleOptions) -> dict[str, Any]:
    """Render options with external keys, sets as sorted lists."""
    result: dict[str, Any] = {}
    for key, name in OPTION_KEYS.items():
        value = getattr(options, name)
        result[key] = sorted(value) if name in _SET_FIELDS else value
    return result


def validate_options(raw: Optional[Mapping[str, Any]], schema: Mapping[str, Any]) -> None:
    """Check raw rule options against a JSON-schema-shaped description.

    Supports the subset the rule declares: an object with boolean and
    array-of-string properties and ``additionalProperties: false``.

    Raises:
        InvalidConfigError: On the first option that does not match
    """
    if raw is None:
        return
    if not isinstance(raw, Mapping):
        raise InvalidConfigError("rule", raw, "expected a table of options")

    properties: Mapping[str, Any] = schema.get("properties", {})
    for key, value in raw.items():
        prop = properties.get(key)
        if prop is None:
            if schema.get("additionalProperties", True) is False:
                raise InvalidConfigError(
                    key, value, f"unknown option; expected one of {', '.join(sorted(properties))}"
                )
            continue
        _validate_value(key, value, prop)


def _validate_value(key: str, value: Any, prop: Mapping[str, Any]) -> None:
    expected = prop.get("type")
    if expected == "boolean":
        if not isinstance(value, bool):
            raise InvalidConfigError(key, value, "expected a boolean")
    elif expected == "array":
        if not isinstance(value, (list, tuple)):
            raise InvalidConfigError(key, value, "expected an array")
        item_type = prop.get("items", {}).get("type")
        if item_type == "string" and not all(isinstance(item, str) for item in value):
            raise InvalidConfigError(key, value, "expected an array of strings")
    elif expected == "string":
        if not isinstance(value, str):
            raise InvalidConfigError(key, value, "expected a string")


@dataclass(frozen=True)
class LintConfig:
    """Host settings for a lint run.

    Attributes:
        rule_options: Raw rule options (camelCase keys), validated by the linter
        exclude_patterns: Glob patterns excluded from file discovery
        type_information: Whether the run offers type services to rules
        max_file_size_mb: Files above this size are skipped
        follow_symlinks: Follow symbolic links during discovery
        output_format: Formatter used by the CLI
    """

    rule_options: dict[str, Any] = field(default_factory=dict)
    exclude_patterns: list[str] = field(
        default_factory=lambda: [
            "node_modules/*",
            "dist/*",
            "build/*",
            ".angular/*",
            ".git/*",
            "coverage/*",
            "*.d.ts",
        ]
    )
    type_information: bool = True
    max_file_size_mb: float = 2.0
    follow_symlinks: bool = False
    output_format: OutputFormat = "rich"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.max_file_size_mb <= 0:
            raise ValueError("max_file_size_mb must be positive")
        if self.output_format not in ("rich", "json", "github"):
            raise ValueError(f"output_format must be rich, json or github, got {self.output_format!r}")

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)


def load_config(config_file: Optional[Path] = None, **overrides) -> LintConfig:
    """Load configuration with auto-discovery and merging.

    Rule options are merged key by key, so a project file can flip one
    check without restating the others. A ``rule_options`` override is
    merged the same way.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        LintConfig instance

    Raises:
        PreferSignalsError: If a config file is invalid or missing
    """
    merged: dict[str, Any] = {}
    rule_options: dict[str, Any] = {}

    def merge(data: dict[str, Any]) -> None:
        rule_table = data.pop("rule", None)
        if rule_table is not None:
            if not isinstance(rule_table, dict):
                raise InvalidConfigError("rule", rule_table, "expected a table")
            rule_options.update(rule_table)
        merged.update(data)

    global_config = Path.home() / ".prefer-signals.toml"
    if global_config.exists():
        merge(_load_toml_file(global_config))

    project_config = Path.cwd() / "prefer-signals.toml"
    if project_config.exists():
        merge(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise PreferSignalsError(f"Config file not found: {config_file}")
        merge(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    rule_overrides = overrides.pop("rule_options", None)
    if rule_overrides:
        rule_options.update(rule_overrides)
    merged.update(overrides)
    merged["rule_options"] = rule_options

    try:
        return LintConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise PreferSignalsError(f"Invalid configuration: {e}")
    except ValueError as e:
        raise PreferSignalsError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from PREFER_SIGNALS_* environment variables.

    Supported environment variables:
        PREFER_SIGNALS_TYPE_INFORMATION: bool (true/false/1/0)
        PREFER_SIGNALS_MAX_FILE_SIZE_MB: float
        PREFER_SIGNALS_FOLLOW_SYMLINKS: bool
        PREFER_SIGNALS_OUTPUT_FORMAT: rich/json/github

    Returns:
        Dict of field_name -> parsed_value for any PREFER_SIGNALS_* vars found.
    """
    type_hints = get_type_hints(LintConfig)

    result: dict[str, Any] = {}

    for field_name in LintConfig.__dataclass_fields__:
        env_key = f"PREFER_SIGNALS_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise PreferSignalsError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Returns:
        Parsed value or None if the field cannot be set from the environment

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Lists and tables (exclude_patterns, rule_options) come from TOML only
    if origin in (list, dict) or type_hint in (list, dict):
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        PreferSignalsError: If TOML parsing fails
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise PreferSignalsError(f"Invalid config file '{path}': {e}")
