"""
Tests for DumpConfig validation and JSON loading.
"""

import json

import pytest

from hex_display import ConfigError, DumpConfig, NumericClass, create_default_config


def test_defaults():
    config = DumpConfig()
    assert (config.width, config.group, config.skip, config.length) == (16, 2, 0, None)
    assert not config.color and not config.reverse and not config.uppercase


@pytest.mark.parametrize('values', [
    {'width': 1},
    {'width': 4097},
    {'width': 8, 'group': 9},
    {'group': 0},
    {'skip': -1},
    {'length': -5},
    {'width': '16'},
    {'width': True},
    {'length': 1.5},
])
def test_invalid_values(values):
    with pytest.raises(ConfigError):
        DumpConfig(**values)


def test_config_is_immutable():
    config = DumpConfig()
    with pytest.raises(AttributeError):
        config.width = 8


def test_replace_ignores_none_and_revalidates():
    config = DumpConfig().replace(width=8, group=None, skip=None)
    assert (config.width, config.group) == (8, 2)

    with pytest.raises(ConfigError):
        DumpConfig(width=8).replace(group=16)


def test_from_json_skips_comment_keys(tmp_path):
    path = tmp_path / 'hd.json'
    path.write_text(json.dumps({'width': 32, 'group': 4, '_comment': 'ignored', 'length': None}))

    assert DumpConfig.from_json(path) == DumpConfig(width=32, group=4)


def test_from_json_rejects_unknown_keys(tmp_path):
    path = tmp_path / 'hd.json'
    path.write_text(json.dumps({'widht': 32}))

    with pytest.raises(ConfigError, match='widht'):
        DumpConfig.from_json(path)


def test_from_json_missing_file(tmp_path):
    with pytest.raises(ConfigError, match='not found'):
        DumpConfig.from_json(tmp_path / 'missing.json')


def test_from_json_invalid_json(tmp_path):
    path = tmp_path / 'hd.json'
    path.write_text('{width: 16')

    with pytest.raises(ConfigError, match='Invalid JSON'):
        DumpConfig.from_json(path)


def test_create_default_config(tmp_path):
    path = tmp_path / 'hd.json'

    assert create_default_config(path) == path
    assert DumpConfig.from_json(path) == DumpConfig()
    assert create_default_config(path) is None


@pytest.mark.parametrize('name', ['color', 'reverse', 'uppercase'])
@pytest.mark.parametrize('value', ['false', 1, None])
def test_flags_must_be_booleans(name, value):
    with pytest.raises(ConfigError, match=f'{name} must be true or false'):
        DumpConfig(**{name: value})


def test_string_flag_in_json_is_rejected(tmp_path):
    path = tmp_path / 'hd.json'
    path.write_text(json.dumps({'color': 'false'}))

    with pytest.raises(ConfigError, match='color'):
        DumpConfig.from_json(path)


def test_numeric_defaults_to_decimal():
    assert DumpConfig().numeric is NumericClass.DECIMAL


@pytest.mark.parametrize('value, expected', [
    ('o', NumericClass.OCTAL),
    ('decimal', NumericClass.DECIMAL),
    ('hex', NumericClass.HEXADECIMAL),
    ('none', None),
    (None, None),
    (NumericClass.OCTAL, NumericClass.OCTAL),
])
def test_numeric_names_are_normalized(value, expected):
    assert DumpConfig(numeric=value).numeric is expected


def test_unknown_numeric_class_is_a_config_error():
    with pytest.raises(ConfigError, match="Unknown numeric class: 'binary'"):
        DumpConfig(numeric='binary')


def test_numeric_from_json(tmp_path):
    path = tmp_path / 'hd.json'
    path.write_text(json.dumps({'numeric': 'x'}))
    assert DumpConfig.from_json(path).numeric is NumericClass.HEXADECIMAL

    path.write_text(json.dumps({'numeric': None}))
    assert DumpConfig.from_json(path).numeric is None
