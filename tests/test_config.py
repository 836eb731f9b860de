from __future__ import annotations

import json
from pathlib import Path

import pytest

from patternshell.config import DEFAULTS, load_config
from patternshell.errors import ConfigurationError


def test_defaults(tmp_path: Path) -> None:
    config = load_config(cwd=tmp_path, environ={})
    assert config.prompt == "cli> "
    assert config.log_level is None
    assert config.log_file_path is None
    assert config.history_file_path is None
    assert config.plugin_package == "plugins"
    assert config.enable_completion is True
    assert config.retries == DEFAULTS["RETRIES"]
    assert config.extra == {}


def test_toml_file_with_nested_tables(tmp_path: Path) -> None:
    (tmp_path / "config.toml").write_text(
        'PROMPT = "notes> "\nRETRIES = 2\n[ui]\ntheme = "dark"\n', encoding="utf-8"
    )
    config = load_config(cwd=tmp_path, environ={})
    assert config.prompt == "notes> "
    assert config.retries == 2
    assert config.extra == {"UI_THEME": "dark"}


def test_json_and_ini_files(tmp_path: Path) -> None:
    (tmp_path / "config.ini").write_text("[shell]\nlog_level = info\n", encoding="utf-8")
    (tmp_path / "config.json").write_text(json.dumps({"enable_completion": False}), encoding="utf-8")
    config = load_config(cwd=tmp_path, environ={})
    assert config.log_level == "INFO"
    assert config.enable_completion is False


def test_later_files_override_earlier_ones(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("# comment\nPROMPT='env> '\nRETRIES=1\n", encoding="utf-8")
    (tmp_path / "config.toml").write_text("RETRIES = 4\n", encoding="utf-8")
    config = load_config(cwd=tmp_path, environ={})
    assert config.prompt == "env> "
    assert config.retries == 4


def test_environment_overrides_files(tmp_path: Path) -> None:
    (tmp_path / "config.toml").write_text('PLUGIN_PACKAGE = "from_file"\n', encoding="utf-8")
    environ = {
        "PLUGIN_PACKAGE": "bare_key",
        "PATTERNSHELL_PLUGIN_PACKAGE": "prefixed.key",
        "PATTERNSHELL_ENABLE_COMPLETION": "off",
        "HOME_UNRELATED": "ignored",
    }
    config = load_config(cwd=tmp_path, environ=environ)
    assert config.plugin_package == "prefixed.key"
    assert config.enable_completion is False
    assert "HOME_UNRELATED" not in config.extra


def test_relative_paths_resolve_under_working_directory(tmp_path: Path) -> None:
    config = load_config(cwd=tmp_path, environ={"LOG_FILE_PATH": "logs/shell.log", "HISTORY_FILE_PATH": ""})
    assert config.log_file_path == (tmp_path / "logs" / "shell.log").resolve()
    assert config.history_file_path is None


@pytest.mark.parametrize(
    "key, value",
    [
        ("RETRIES", "-1"),
        ("RETRIES", "many"),
        ("LOG_LEVEL", "LOUD"),
        ("ENABLE_COMPLETION", "maybe"),
        ("PLUGIN_PACKAGE", "not a module"),
    ],
)
def test_invalid_values(tmp_path: Path, key: str, value: str) -> None:
    with pytest.raises(ConfigurationError):
        load_config(cwd=tmp_path, environ={key: value})


def test_unparsable_file(tmp_path: Path) -> None:
    (tmp_path / "config.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(cwd=tmp_path, environ={})
