"""Tests for codec settings loaded from tinyjson.toml."""

import logging

from tinyjson_core import CodecSettings, load_settings
from tinyjson_core.config import DEFAULT_CONFIG_NAME, load_config


def test_defaults_without_file(tmp_path):
    assert load_settings(root=tmp_path) == CodecSettings()

def test_codec_section_read(tmp_path):
    (tmp_path / DEFAULT_CONFIG_NAME).write_text(
        '[codec]\nignore_enum_case = false\ninclude_nulls = true\nencoding = "utf-16"\n',
        encoding="utf-8",
    )
    settings = load_settings(root=tmp_path)
    assert settings.ignore_enum_case is False
    assert settings.include_nulls is True
    assert settings.tab_include_nulls is True
    assert settings.encoding == "utf-16"

def test_explicit_config_path(tmp_path):
    path = tmp_path / "custom.toml"
    path.write_text("[codec]\ntab_include_nulls = false\n", encoding="utf-8")
    assert load_settings(config_path=path).tab_include_nulls is False

def test_mistyped_value_ignored(tmp_path, caplog):
    (tmp_path / DEFAULT_CONFIG_NAME).write_text(
        '[codec]\ninclude_nulls = "yes"\n', encoding="utf-8"
    )
    with caplog.at_level(logging.WARNING, logger="tinyjson_core.config"):
        settings = load_settings(root=tmp_path)
    assert settings.include_nulls is False
    assert "include_nulls" in caplog.text

def test_unknown_keys_ignored(tmp_path):
    (tmp_path / DEFAULT_CONFIG_NAME).write_text(
        "[codec]\ncolour = 3\n[other]\nx = 1\n", encoding="utf-8"
    )
    assert load_settings(root=tmp_path) == CodecSettings()

def test_invalid_toml_logged(tmp_path, caplog):
    (tmp_path / DEFAULT_CONFIG_NAME).write_text("[codec\n", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="tinyjson_core.config"):
        assert load_config(root=tmp_path) == {}
    assert "Ignoring invalid config" in caplog.text

def test_section_not_a_table(tmp_path):
    (tmp_path / DEFAULT_CONFIG_NAME).write_text("codec = 1\n", encoding="utf-8")
    assert load_settings(root=tmp_path) == CodecSettings()
