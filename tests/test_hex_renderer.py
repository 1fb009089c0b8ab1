"""
Tests for the hex column layout.
"""

import pytest

from hex_display import HexRenderer, Style
from hex_display.models import RenderedLine


def plain(renderer, data):
    return RenderedLine.plain(renderer.render(data))


@pytest.mark.parametrize('width, group, column_width', [
    (16, 2, 54),
    (16, 4, 50),
    (16, 16, 47),
    (8, 8, 23),
    (10, 4, 31),
])
def test_column_width(width, group, column_width):
    renderer = HexRenderer(width, group)

    assert renderer.column_width == column_width
    assert len(plain(renderer, bytes(width))) == column_width
    assert len(plain(renderer, b'')) == column_width


def test_full_row_layout():
    renderer = HexRenderer(8, 2)
    assert plain(renderer, bytes(range(8))) == '00 01  02 03  04 05  06 07'


def test_group_of_four_layout():
    renderer = HexRenderer(8, 4)
    assert plain(renderer, b'\xde\xad\xbe\xef\x01\x02\x03\x04') == 'de ad be ef  01 02 03 04'


def test_short_row_keeps_group_spacing():
    renderer = HexRenderer(8, 2)
    line = plain(renderer, b'AB\x00')

    assert line == '41 42  00' + ' ' * 17
    assert line.rstrip() == '41 42  00'


def test_uppercase_digits():
    assert plain(HexRenderer(2, 2, uppercase=True), b'\xab\xcd') == 'AB CD'


def test_byte_column_positions():
    renderer = HexRenderer(16, 4)
    line = plain(renderer, bytes(range(16)))

    for index in range(16):
        column = renderer.byte_column(index)
        assert line[column:column + 2] == f'{index:02x}'


def test_digits_are_styled_and_padding_is_not():
    renderer = HexRenderer(4, 2)
    spans = renderer.render(b'A\x80')

    styled = [(span.text, span.style) for span in spans]
    assert styled == [
        ('41', Style.PRINTABLE),
        (' ', None),
        ('80', Style.ERROR),
        ('  ', None),
        ('  ', None),
        (' ', None),
        ('  ', None),
    ]
