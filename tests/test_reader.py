import struct

import pytest

from winres16.core.errors import EndOfData, Truncated
from winres16.core.reader import (Cursor, read_u8, read_u16, read_u32, read_i32,
                                  read_wide_string, read_name, read_optional_name)
from winres16.core.resource_base import NumericName, TextName, ABSENT

from res_builders import wstr


@pytest.mark.parametrize("reader, fmt, value", [
    (read_u8, '<B', 0),
    (read_u8, '<B', 0xAB),
    (read_u16, '<H', 0x1234),
    (read_u16, '<H', 0xFFFF),
    (read_u32, '<L', 0xDEADBEEF),
    (read_u32, '<L', 1),
])
def test_primitive_little_endian(reader, fmt, value):
    cursor = Cursor(struct.pack(fmt, value))
    assert reader(cursor) == value
    assert cursor.at_end


def test_signed_reads_reuse_unsigned_layout():
    cursor = Cursor(struct.pack('<l', -2))
    assert read_i32(cursor) == -2


def test_read_byte_at_end_raises_end_of_data():
    cursor = Cursor(b'\x01')
    cursor.read_byte()
    with pytest.raises(EndOfData):
        cursor.read_byte()


def test_end_of_data_is_an_eof_error():
    with pytest.raises(EOFError):
        read_u16(Cursor(b''))


def test_read_bytes_reports_overflow():
    cursor = Cursor(b'abcdef')
    cursor.read_bytes(2)
    with pytest.raises(Truncated) as excinfo:
        cursor.read_bytes(7)
    assert excinfo.value.overflow == 3
    assert cursor.position == 2


def test_read_bytes_exact_remaining():
    cursor = Cursor(b'abcdef')
    assert cursor.read_bytes(6) == b'abcdef'
    assert cursor.remaining == 0


@pytest.mark.parametrize("base_offset", [0, 1, 2, 3, 6])
@pytest.mark.parametrize("start", range(8))
def test_align_uses_absolute_position(base_offset, start):
    cursor = Cursor(b'\0' * 16, base_offset)
    cursor.position = start
    before = cursor.absolute_position
    cursor.align(4)
    after = cursor.absolute_position
    assert after >= before
    assert after % 4 == 0
    assert after - before < 4


def test_align_relative_to_base_offset():
    cursor = Cursor(b'\0' * 8, base_offset=2)
    assert cursor.align(4) == 2
    assert cursor.position == 2
    assert cursor.align(4) == 0


def test_align_past_end_leaves_nothing_remaining():
    cursor = Cursor(b'\x01\x02\x03\x04\x05')
    cursor.read_bytes(5)
    assert cursor.align(4) == 3
    assert cursor.remaining == 0
    assert cursor.at_end
    with pytest.raises(EndOfData):
        cursor.read_byte()


@pytest.mark.parametrize("ordinal", [0, 1, 0x80, 0x7FFF, 0xFFFE])
def test_read_name_ordinal(ordinal):
    cursor = Cursor(struct.pack('<HH', 0xFFFF, ordinal))
    assert read_name(cursor) == NumericName(ordinal)


def test_read_name_text():
    cursor = Cursor(wstr("APPICON") + b'\xAA')
    assert read_name(cursor) == TextName("APPICON")
    assert cursor.position == 16


def test_read_name_empty_text():
    cursor = Cursor(b'\0\0')
    assert read_name(cursor) == TextName("")
    assert cursor.at_end


def test_read_optional_name_absent_does_not_align():
    cursor = Cursor(b'\0\0\0\0', base_offset=1)
    assert read_optional_name(cursor) is ABSENT
    assert cursor.position == 2


def test_read_optional_name_ordinal():
    cursor = Cursor(struct.pack('<HH', 0xFFFF, 7))
    assert read_optional_name(cursor) == NumericName(7)


def test_read_optional_name_text_realigns_to_word():
    # odd base offset: the string ends on an odd absolute position
    cursor = Cursor(wstr("Hello") + b'\0\0', base_offset=1)
    assert read_optional_name(cursor) == TextName("Hello")
    assert cursor.absolute_position % 2 == 0
    assert cursor.position == 13


def test_read_wide_string_with_spliced_first_char():
    cursor = Cursor("ello".encode('utf-16-le') + b'\0\0')
    assert read_wide_string(cursor, first_char=ord('H')) == "Hello"


def test_read_wide_string_first_char_zero_reads_nothing():
    cursor = Cursor(wstr("unused"))
    assert read_wide_string(cursor, first_char=0) == ""
    assert cursor.position == 0


def test_read_wide_string_drops_lone_surrogates():
    data = struct.pack('<HHHH', ord('A'), 0xD800, ord('B'), 0)
    assert read_wide_string(Cursor(data)) == "AB"


def test_read_wide_string_unterminated():
    with pytest.raises(EndOfData):
        read_wide_string(Cursor("abc".encode('utf-16-le')))
