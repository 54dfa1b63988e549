"""
Tests for the environment-driven settings in `boxperm.config`.

Run with: pytest -q
"""

import importlib

import pytest

from boxperm import config


@pytest.fixture
def reload_config(monkeypatch):
    """
    Reload `boxperm.config` under the patched environment; restore the
    defaults once the test is done.
    """
    yield lambda: importlib.reload(config)
    monkeypatch.undo()
    importlib.reload(config)


def test_defaults(monkeypatch, reload_config):
    for name in (
        "BOXPERM_LOG_LEVEL",
        "BOXPERM_MAX_PAGE_SIZE",
        "BOXPERM_DEFAULT_PAGE_SIZE",
        "BOXPERM_ROTATE_3D",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = reload_config()

    assert settings.LOG_LEVEL == "INFO"
    assert settings.MAX_PAGE_SIZE == 1000
    assert settings.DEFAULT_PAGE_SIZE == 100
    assert settings.DEFAULT_ROTATE_3D is True


@pytest.mark.parametrize("raw", ["many", "1.5"])
def test_invalid_integer_fails_at_import(monkeypatch, reload_config, raw):
    monkeypatch.setenv("BOXPERM_MAX_PAGE_SIZE", raw)

    with pytest.raises(ValueError):
        reload_config()


@pytest.mark.parametrize("raw", ["0", "-3"])
def test_values_below_one_are_rejected(monkeypatch, reload_config, raw):
    monkeypatch.setenv("BOXPERM_DEFAULT_PAGE_SIZE", raw)

    with pytest.raises(ValueError):
        reload_config()


def test_default_page_size_is_clamped(monkeypatch, reload_config):
    monkeypatch.setenv("BOXPERM_MAX_PAGE_SIZE", "50")
    monkeypatch.setenv("BOXPERM_DEFAULT_PAGE_SIZE", "200")

    settings = reload_config()

    assert settings.MAX_PAGE_SIZE == 50
    assert settings.DEFAULT_PAGE_SIZE == 50


def test_log_level_is_upper_cased(monkeypatch, reload_config):
    monkeypatch.setenv("BOXPERM_LOG_LEVEL", "debug")

    assert reload_config().LOG_LEVEL == "DEBUG"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("true", True),
        ("1", True),
        ("Yes", True),
        (" on ", True),
        ("false", False),
        ("0", False),
        ("off", False),
        ("", True),
    ],
)
def test_rotate_3d_parses_to_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("BOXPERM_ROTATE_3D", raw)

    assert config._bool_from_env("BOXPERM_ROTATE_3D", True) is expected
