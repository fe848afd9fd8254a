from pathlib import Path

import pytest

from novide.config import Config, ConfigError, config_path


def test_config_path_location():
    path = config_path()
    assert path.name == "config.toml"
    assert path.parent.name == "novide"


def test_load_full_file(tmp_path):
    file = tmp_path / "config.toml"
    file.write_text(
        'wsl = true\nno-multigrid = false\nmaximized = true\nvsync = false\n'
        'srgb = true\nidle = false\nneovim-bin = "/opt/nvim"\nframe = "none"\n'
        'theme = "dark"\n'
    )
    config = Config.load_from_path(file)
    assert config == Config(
        wsl=True,
        no_multigrid=False,
        maximized=True,
        vsync=False,
        srgb=True,
        idle=False,
        neovim_bin=Path("/opt/nvim"),
        frame="none",
        theme="dark",
    )


def test_missing_file_returns_none(tmp_path):
    assert Config.load_from_path(tmp_path / "absent.toml") is None


def test_unknown_keys_are_ignored(tmp_path):
    file = tmp_path / "config.toml"
    file.write_text("unknown-key = 1\nvsync = true\n")
    assert Config.load_from_path(file) == Config(vsync=True)


def test_invalid_toml_raises(tmp_path):
    file = tmp_path / "config.toml"
    file.write_text("wsl = = true\n")
    with pytest.raises(ConfigError, match="Error while parsing config file"):
        Config.load_from_path(file)


def test_wrong_type_raises(tmp_path):
    file = tmp_path / "config.toml"
    file.write_text('wsl = "yes"\n')
    with pytest.raises(ConfigError, match="Continuing with default config"):
        Config.load_from_path(file)


def test_unreadable_path_raises(tmp_path):
    directory = tmp_path / "config.toml"
    directory.mkdir()
    with pytest.raises(ConfigError, match="Error while trying to open config file"):
        Config.load_from_path(directory)


def test_write_to_env():
    environ = {}
    Config(wsl=True, idle=False, theme="dark", neovim_bin=Path("/opt/nvim")).write_to_env(environ)
    assert environ == {
        "NOVIDE_WSL": "true",
        "NOVIDE_IDLE": "false",
        "NOVIDE_THEME": "dark",
        "NEOVIM_BIN": str(Path("/opt/nvim")),
    }


def test_write_to_env_empty_config_sets_nothing():
    environ = {}
    Config().write_to_env(environ)
    assert environ == {}


def test_init_exports_config(tmp_path):
    file = tmp_path / "config.toml"
    file.write_text('frame = "full"\n')
    environ = {}
    config = Config.init(file, environ)
    assert config == Config(frame="full")
    assert environ == {"NOVIDE_FRAME": "full"}


def test_init_reports_errors(tmp_path, capsys):
    file = tmp_path / "config.toml"
    file.write_text("[[[")
    environ = {}
    assert Config.init(file, environ) is None
    assert environ == {}
    assert "Error while parsing config file" in capsys.readouterr().err


def test_init_without_file_is_silent(tmp_path, capsys):
    environ = {}
    assert Config.init(tmp_path / "absent.toml", environ) is None
    assert environ == {}
    assert capsys.readouterr().err == ""