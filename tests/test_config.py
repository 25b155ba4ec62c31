"""Tests for config.py - rule options and lint configuration."""

import pytest

from prefer_signals.config import (
    DEFAULT_OPTIONS,
    LintConfig,
    RuleOptions,
    load_config,
    options_to_dict,
    resolve_options,
    validate_options,
)
from prefer_signals.exceptions import InvalidConfigError, PreferSignalsError
from prefer_signals.rules.prefer_signals import SCHEMA


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """Run with an empty home and working directory and no env overrides."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    for key in ("TYPE_INFORMATION", "MAX_FILE_SIZE_MB", "FOLLOW_SYMLINKS", "OUTPUT_FORMAT"):
        monkeypatch.delenv(f"PREFER_SIGNALS_{key}", raising=False)
    return home, work


class TestResolveOptions:
    """Test resolve_options function."""

    def test_empty_is_default(self):
        assert resolve_options({}) is DEFAULT_OPTIONS
        assert resolve_options(None) is DEFAULT_OPTIONS

    def test_defaults(self):
        assert DEFAULT_OPTIONS == RuleOptions(
            types_to_replace=frozenset({"BehaviorSubject"}),
            prefer_readonly=True,
            prefer_input_signal=True,
            prefer_query_signal=True,
            use_type_checking=True,
            signal_creation_functions=frozenset(),
        )

    def test_partial_keeps_other_defaults(self):
        options = resolve_options({"preferReadonly": False})
        assert options.prefer_readonly is False
        assert options.prefer_input_signal is True
        assert options.types_to_replace == {"BehaviorSubject"}

    def test_lists_become_sets(self):
        options = resolve_options({"typesToReplace": ["ReplaySubject", "ReplaySubject"]})
        assert options.types_to_replace == frozenset({"ReplaySubject"})

    def test_field_names_accepted(self):
        assert resolve_options({"use_type_checking": False}).use_type_checking is False

    def test_round_trip_through_dict(self):
        rendered = options_to_dict(DEFAULT_OPTIONS)
        assert rendered["typesToReplace"] == ["BehaviorSubject"]
        assert resolve_options(rendered) == DEFAULT_OPTIONS


class TestValidateOptions:
    """Test validate_options against the rule schema."""

    def test_valid(self):
        validate_options({"preferReadonly": False, "typesToReplace": ["Subject"]}, SCHEMA)

    def test_none(self):
        validate_options(None, SCHEMA)

    def test_unknown_key(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            validate_options({"preferOutputSignal": True}, SCHEMA)
        assert exc_info.value.key == "preferOutputSignal"

    def test_wrong_boolean(self):
        with pytest.raises(InvalidConfigError, match="preferReadonly"):
            validate_options({"preferReadonly": "yes"}, SCHEMA)

    def test_wrong_array(self):
        with pytest.raises(InvalidConfigError):
            validate_options({"typesToReplace": "BehaviorSubject"}, SCHEMA)

    def test_wrong_array_items(self):
        with pytest.raises(InvalidConfigError):
            validate_options({"signalCreationFunctions": ["ok", 1]}, SCHEMA)

    def test_not_a_table(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            validate_options(["preferReadonly"], SCHEMA)
        assert exc_info.value.key == "rule"


class TestLintConfig:
    """Test LintConfig validation."""

    def test_defaults(self):
        config = LintConfig()
        assert config.type_information is True
        assert config.output_format == "rich"
        assert "*.d.ts" in config.exclude_patterns
        assert config.max_file_size_bytes == 2 * 1024 * 1024

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            LintConfig(max_file_size_mb=0)

    def test_invalid_format(self):
        with pytest.raises(ValueError):
            LintConfig(output_format="xml")


class TestLoadConfig:
    """Test load_config merging."""

    def test_defaults(self, isolated):
        config = load_config()
        assert config == LintConfig()

    def test_project_file(self, isolated):
        _, work = isolated
        (work / "prefer-signals.toml").write_text(
            'output_format = "json"\n\n[rule]\npreferReadonly = false\n'
        )

        config = load_config()

        assert config.output_format == "json"
        assert config.rule_options == {"preferReadonly": False}

    def test_rule_tables_merge_by_key(self, isolated):
        home, work = isolated
        (home / ".prefer-signals.toml").write_text("[rule]\npreferReadonly = false\nuseTypeChecking = false\n")
        (work / "prefer-signals.toml").write_text("[rule]\npreferReadonly = true\n")

        config = load_config()

        assert config.rule_options == {"preferReadonly": True, "useTypeChecking": False}

    def test_explicit_file(self, isolated, tmp_path):
        config_file = tmp_path / "custom.toml"
        config_file.write_text('[rule]\ntypesToReplace = ["ReplaySubject"]\n')

        config = load_config(config_file=config_file)

        assert config.rule_options == {"typesToReplace": ["ReplaySubject"]}

    def test_missing_explicit_file(self, isolated, tmp_path):
        with pytest.raises(PreferSignalsError, match="not found"):
            load_config(config_file=tmp_path / "missing.toml")

    def test_invalid_toml(self, isolated, tmp_path):
        config_file = tmp_path / "broken.toml"
        config_file.write_text("[rule\n")
        with pytest.raises(PreferSignalsError, match="Invalid config file"):
            load_config(config_file=config_file)

    def test_unknown_field(self, isolated):
        with pytest.raises(PreferSignalsError, match="Invalid configuration"):
            load_config(no_such_setting=True)

    def test_env_overrides_file(self, isolated, monkeypatch):
        _, work = isolated
        (work / "prefer-signals.toml").write_text("type_information = true\n")
        monkeypatch.setenv("PREFER_SIGNALS_TYPE_INFORMATION", "false")

        assert load_config().type_information is False

    def test_invalid_env_value(self, isolated, monkeypatch):
        monkeypatch.setenv("PREFER_SIGNALS_FOLLOW_SYMLINKS", "maybe")
        with pytest.raises(PreferSignalsError, match="PREFER_SIGNALS_FOLLOW_SYMLINKS"):
            load_config()

    def test_overrides_win(self, isolated, monkeypatch):
        monkeypatch.setenv("PREFER_SIGNALS_OUTPUT_FORMAT", "github")
        config = load_config(output_format="json", rule_options={"preferQuerySignal": False})

        assert config.output_format == "json"
        assert config.rule_options == {"preferQuerySignal": False}

    def test_invalid_override_value(self, isolated):
        with pytest.raises(PreferSignalsError):
            load_config(max_file_size_mb=-1)
