"""
Tests for the hd command line entry point.
"""

import io
import json
import sys

import pytest

import hd
from hex_display import DumpConfig, HexDumper, NumericClass, hex_dump

from conftest import BrokenPipeSink


@pytest.fixture(autouse=True)
def no_color_env(monkeypatch):
    for name in ('NO_COLOR', 'ALWAYS_COLOR', 'CLICOLOR_FORCE', 'FORCE_COLOR'):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def data_file(tmp_path, mixed_bytes):
    path = tmp_path / 'data.bin'
    path.write_bytes(mixed_bytes)
    return path


# ---------------------------------------------------------------------------
# Forward mode
# ---------------------------------------------------------------------------

def test_dump_file(data_file, mixed_bytes, capsys):
    assert hd.main(['--color', 'never', str(data_file)]) == 0
    assert capsys.readouterr().out == hex_dump(mixed_bytes) + '\n'


def test_dump_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, 'stdin', io.TextIOWrapper(io.BytesIO(b'stdin bytes')))

    assert hd.main(['--color', 'never']) == 0
    assert capsys.readouterr().out == hex_dump(b'stdin bytes') + '\n'


def test_layout_flags(data_file, mixed_bytes, capsys):
    assert hd.main(['--color', 'never', '-w', '8', '-g', '4', '-s', '0x4', '-n', '20', '-u', str(data_file)]) == 0

    expected = HexDumper(DumpConfig(width=8, group=4, skip=4, length=20, uppercase=True)).dump(mixed_bytes)
    assert capsys.readouterr().out == expected + '\n'


def test_multiple_files_get_headers(tmp_path, capsys):
    first, second = tmp_path / 'a.bin', tmp_path / 'b.bin'
    first.write_bytes(b'first')
    second.write_bytes(b'second')

    assert hd.main(['--color', 'never', str(first), str(second)]) == 0

    out = capsys.readouterr().out
    assert out == (
        f'[{first}]\n' + hex_dump(b'first') + '\n'
        + f'\n[{second}]\n' + hex_dump(b'second') + '\n'
    )


def test_forced_color(data_file, mixed_bytes, capsys):
    assert hd.main(['--color', 'always', str(data_file)]) == 0
    assert capsys.readouterr().out == hex_dump(mixed_bytes, use_color=True) + '\n'


def test_config_file_with_override(tmp_path, data_file, mixed_bytes, capsys):
    config_path = tmp_path / 'hd.json'
    config_path.write_text(json.dumps({'width': 8, 'group': 8, 'color': False}))

    assert hd.main(['--config', str(config_path), '-g', '2', str(data_file)]) == 0
    assert capsys.readouterr().out == HexDumper(DumpConfig(width=8, group=2)).dump(mixed_bytes) + '\n'


def test_create_config(tmp_path, capsys):
    path = tmp_path / 'hd.json'

    assert hd.main(['--create-config', str(path)]) == 0
    assert 'Created default config' in capsys.readouterr().out
    assert DumpConfig.from_json(path) == DumpConfig()


@pytest.mark.parametrize('name, numeric', [
    ('o', NumericClass.OCTAL),
    ('decimal', NumericClass.DECIMAL),
    ('x', NumericClass.HEXADECIMAL),
    ('none', None),
])
def test_numeric_flag(data_file, mixed_bytes, capsys, name, numeric):
    assert hd.main(['--color', 'always', '-N', name, str(data_file)]) == 0

    expected = HexDumper(DumpConfig(color=True, numeric=numeric)).dump(mixed_bytes)
    assert capsys.readouterr().out == expected + '\n'


def test_unknown_numeric_class_prints_usage(data_file, capsys):
    assert hd.main(['-N', 'binary', str(data_file)]) == 1

    err = capsys.readouterr().err
    assert err.startswith('usage:')
    assert "Unknown numeric class: 'binary'" in err


def test_closed_stdout_exits_quietly(data_file, monkeypatch, capsys):
    monkeypatch.setattr(sys, 'stdout', BrokenPipeSink())

    assert hd.main(['--color', 'never', str(data_file)]) == 1
    assert capsys.readouterr().err == ''


# ---------------------------------------------------------------------------
# Reverse mode
# ---------------------------------------------------------------------------

def test_reverse_file(tmp_path, mixed_bytes, capsysbinary):
    dump_path = tmp_path / 'dump.txt'
    dump_path.write_text(hex_dump(mixed_bytes, use_color=True) + '\n', encoding='utf-8')

    assert hd.main(['-r', str(dump_path)]) == 0
    assert capsysbinary.readouterr().out == mixed_bytes


def test_reverse_rejects_malformed_dump(tmp_path, capsys):
    dump_path = tmp_path / 'dump.txt'
    dump_path.write_text('00000000: 0g\n', encoding='utf-8')

    assert hd.main(['-r', str(dump_path)]) == 1
    assert 'Error: line 1, column 12: invalid hex digit' in capsys.readouterr().err


def test_reverse_takes_one_input(tmp_path, capsys):
    assert hd.main(['-r', str(tmp_path / 'a'), str(tmp_path / 'b')]) == 1
    assert 'at most one input' in capsys.readouterr().err


# ---------------------------------------------------------------------------
# Errors and color detection
# ---------------------------------------------------------------------------

def test_missing_file_reports_cause(tmp_path, capsys):
    assert hd.main(['--color', 'never', str(tmp_path / 'missing.bin')]) == 1

    err = capsys.readouterr().err
    assert 'Error: Unable to read file' in err
    assert 'Caused by:' in err


def test_invalid_width_prints_usage(data_file, capsys):
    assert hd.main(['-w', '1', str(data_file)]) == 1

    err = capsys.readouterr().err
    assert err.startswith('usage:')
    assert 'Width must be in range' in err


def test_invalid_count_is_an_argparse_error(data_file):
    with pytest.raises(SystemExit):
        hd.main(['-s', 'lots', str(data_file)])


def test_color_detection(monkeypatch):
    stream = io.StringIO()

    assert hd.color_enabled('always', stream)
    assert not hd.color_enabled('never', stream)
    assert not hd.color_enabled('auto', stream)

    monkeypatch.setenv('FORCE_COLOR', '1')
    assert hd.color_enabled(None, stream)

    monkeypatch.setenv('NO_COLOR', '1')
    assert not hd.color_enabled(None, stream)


def test_group_completer():
    class Args:
        width = 12

    assert hd.group_completer('', Args()) == ['1', '2', '3', '4', '6', '12']
    assert hd.group_completer('1', Args()) == ['1', '12']
