"""Tests for the config file."""

import json
import re

import pytest

from gator.config import Config, ConfigModel, default_config_path, load_config, save_config
from gator.exceptions import ConfigError


def test_missing_file_is_empty_config(config_path):
    config = load_config(config_path)

    assert config == ConfigModel(db_url="", current_user_name="")


def test_reads_both_fields(config_path):
    config_path.write_text(
        json.dumps({"db_url": "postgres://localhost/gator", "current_user_name": "alice"})
    )

    config = Config(config_path)

    assert config.db_url == "postgres://localhost/gator"
    assert config.current_user_name == "alice"


def test_set_user_rewrites_file(config_path):
    save_config(ConfigModel(db_url="postgres://localhost/gator"), config_path)
    config = Config(config_path)

    config.set_user("bob")

    assert json.loads(config_path.read_text()) == {
        "db_url": "postgres://localhost/gator",
        "current_user_name": "bob",
    }


@pytest.mark.parametrize("content", ["{not json", "[1, 2]", '{"db_url": 5}'])
def test_invalid_file_raises_config_error(config_path, content):
    config_path.write_text(content)

    with pytest.raises(ConfigError, match=re.escape(str(config_path))):
        load_config(config_path)


def test_env_overrides(monkeypatch, tmp_path, config_path):
    save_config(ConfigModel(db_url="postgres://file/db"), config_path)
    monkeypatch.setenv("GATOR_DB_URL", "postgres://env/db")
    monkeypatch.setenv("GATOR_CONFIG", str(tmp_path / "custom.json"))

    assert Config(config_path).db_url == "postgres://env/db"
    assert default_config_path() == tmp_path / "custom.json"


def test_default_path_is_in_home(monkeypatch, tmp_path):
    monkeypatch.delenv("GATOR_CONFIG", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))

    assert default_config_path() == tmp_path / ".gatorconfig.json"
