# winres16/core/reader.py

import logging
from typing import Optional, Union

from .errors import EndOfData, Truncated
from .resource_base import ResourceName, NumericName, TextName, ABSENT, Absent

log = logging.getLogger(__name__)

# Notes on field encodings inside a resource segment:
# - Integers are little-endian. BYTE, WORD, DWORD; LONG shares the DWORD layout.
# - Name/ordinal fields start with a WORD discriminant:
#     0xFFFF -> a second WORD follows, holding the ordinal.
#     0x0000 -> empty string (or "no value" in the dialog header fields).
#     other  -> first UTF-16LE code unit of a null-terminated string.
# - Padding is counted from the start of the whole segment, so a cursor over a
#   payload slice carries the slice's absolute offset in base_offset.

ORDINAL_FLAG = 0xFFFF


class Cursor:
    """
    Position tracker over an immutable byte buffer.

    base_offset is the absolute position of data[0] in the enclosing segment
    and is only used for alignment.
    """
    def __init__(self, data: bytes, base_offset: int = 0, trace: bool = False):
        self.data = bytes(data)
        self.base_offset = base_offset
        self.trace = trace
        self._position = 0

    @property
    def position(self) -> int:
        return self._position

    @position.setter
    def position(self, value: int):
        if self.trace and value != self._position:
            log.debug("cursor: %#x (absolute %#x)", value, value + self.base_offset)
        self._position = value

    @property
    def absolute_position(self) -> int:
        return self._position + self.base_offset

    @property
    def remaining(self) -> int:
        return max(0, len(self.data) - self._position)

    @property
    def at_end(self) -> bool:
        return self._position >= len(self.data)

    def read_byte(self) -> int:
        if self._position >= len(self.data):
            raise EndOfData(self.absolute_position)
        value = self.data[self._position]
        self.position = self._position + 1
        return value

    def read_bytes(self, size: int) -> bytes:
        overflow = self._position + size - len(self.data)
        if overflow > 0:
            raise Truncated(overflow, self.absolute_position)
        chunk = self.data[self._position:self._position + size]
        self.position = self._position + size
        return chunk

    def align(self, alignment: int) -> int:
        """Skips padding up to the next absolute multiple of alignment. Returns bytes skipped."""
        absolute = self.absolute_position
        padding = (alignment - (absolute % alignment)) % alignment
        if padding:
            self.position = self._position + padding
        return padding

    def __repr__(self):
        return f"Cursor(pos={self._position:#x}, base={self.base_offset:#x}, size={len(self.data)})"


# --- Primitive fields ---

def read_u8(cursor: Cursor) -> int:
    return cursor.read_byte()


def read_u16(cursor: Cursor) -> int:
    return cursor.read_byte() | (cursor.read_byte() << 8)


def read_u32(cursor: Cursor) -> int:
    return (cursor.read_byte()
            | (cursor.read_byte() << 8)
            | (cursor.read_byte() << 16)
            | (cursor.read_byte() << 24))


def read_i32(cursor: Cursor) -> int:
    """LONG: the DWORD layout read as two's complement."""
    value = read_u32(cursor)
    return value - 0x100000000 if value & 0x80000000 else value


# --- Variant fields ---

def _code_unit_to_str(code_unit: int) -> str:
    # Lone surrogates are not scalar values; they are dropped.
    if 0xD800 <= code_unit <= 0xDFFF:
        return ""
    return chr(code_unit)


def read_wide_string(cursor: Cursor, first_char: Optional[int] = None) -> str:
    """
    Reads a null-terminated UTF-16LE string.

    first_char is a code unit the caller already consumed (the discriminant of
    a name field). A first_char of 0 is the terminator itself: the string is
    empty and nothing more is read.
    """
    if first_char == 0:
        return ""
    chars = []
    if first_char is not None:
        chars.append(_code_unit_to_str(first_char))
    while True:
        code_unit = read_u16(cursor)
        if code_unit == 0:
            break
        chars.append(_code_unit_to_str(code_unit))
    return "".join(chars)


def read_name(cursor: Cursor) -> ResourceName:
    """Reads an ordinal-or-string field (type/name of an envelope, dialog item class/title)."""
    discriminant = read_u16(cursor)
    if discriminant == ORDINAL_FLAG:
        return NumericName(read_u16(cursor))
    return TextName(read_wide_string(cursor, first_char=discriminant))


def read_optional_name(cursor: Cursor) -> Union[ResourceName, Absent]:
    """
    Reads the menu/class/title fields of a dialog header, where 0x0000 means
    the field is not present. Only the string path re-aligns to a WORD.
    """
    discriminant = read_u16(cursor)
    if discriminant == 0:
        return ABSENT
    if discriminant == ORDINAL_FLAG:
        return NumericName(read_u16(cursor))
    value = TextName(read_wide_string(cursor, first_char=discriminant))
    cursor.align(2)
    return value
