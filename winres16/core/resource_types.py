# winres16/core/resource_types.py
from collections import namedtuple
from enum import IntEnum
from typing import Dict, List, Optional

from .errors import UnknownCompression, InvalidStringTableName
from .reader import Cursor, read_u8, read_u16, read_u32, read_i32
from .resource_base import ResourceName, NumericName

STRINGS_PER_BLOCK = 16

# --- Icon groups ---
# NEWHEADER (reserved, type, count) followed by count RESDIR entries. In the
# resource form each entry ends with the ordinal of the RT_ICON holding the image
# instead of the file offset used by .ico files.

IconDirectoryEntry = namedtuple("IconDirectoryEntry", [
    "width", "height", "color_count", "reserved",
    "planes", "bit_count", "bytes_in_res", "name_ordinal"
])


class IconGroup:
    def __init__(self, reserved: int = 0, resource_type: int = 1,
                 entries: Optional[List[IconDirectoryEntry]] = None):
        self.reserved = reserved
        self.resource_type = resource_type
        self.entries: List[IconDirectoryEntry] = entries if entries is not None else []

    def __repr__(self):
        return f"IconGroup(type={self.resource_type}, entries={self.entries!r})"


def read_icon_directory_entry(cursor: Cursor) -> IconDirectoryEntry:
    return IconDirectoryEntry(
        width=read_u8(cursor),
        height=read_u8(cursor),
        color_count=read_u8(cursor),
        reserved=read_u8(cursor),
        planes=read_u16(cursor),
        bit_count=read_u16(cursor),
        bytes_in_res=read_u32(cursor),
        name_ordinal=read_u16(cursor),
    )


def read_icon_group(cursor: Cursor) -> IconGroup:
    reserved = read_u16(cursor)
    resource_type = read_u16(cursor)
    count = read_u16(cursor)
    entries = [read_icon_directory_entry(cursor) for _ in range(count)]
    return IconGroup(reserved, resource_type, entries)


def decode_icon_group(data: bytes, base_offset: int = 0) -> IconGroup:
    return read_icon_group(Cursor(data, base_offset))


# --- Bitmaps ---

class Compression(IntEnum):
    BI_RGB = 0x0000
    BI_RLE8 = 0x0001
    BI_RLE4 = 0x0002
    BI_BITFIELDS = 0x0003
    BI_JPEG = 0x0004
    BI_PNG = 0x0005
    BI_CMYK = 0x000B
    BI_CMYKRLE8 = 0x000C
    BI_CMYKRLE4 = 0x000D

    @classmethod
    def from_code(cls, value: int) -> "Compression":
        try:
            return cls(value)
        except ValueError:
            raise UnknownCompression(value) from None


BitmapInfoHeader = namedtuple("BitmapInfoHeader", [
    "size", "width", "height", "planes", "bit_count", "compression",
    "size_image", "x_pels_per_meter", "y_pels_per_meter", "clr_used", "clr_important"
])

BITMAPINFOHEADER_SIZE = 40


def read_bitmap_info_header(cursor: Cursor) -> BitmapInfoHeader:
    return BitmapInfoHeader(
        size=read_u32(cursor),
        width=read_i32(cursor),
        height=read_i32(cursor),
        planes=read_u16(cursor),
        bit_count=read_u16(cursor),
        compression=Compression.from_code(read_u32(cursor)),
        size_image=read_u32(cursor),
        x_pels_per_meter=read_i32(cursor),
        y_pels_per_meter=read_i32(cursor),
        clr_used=read_u32(cursor),
        clr_important=read_u32(cursor),
    )


def decode_bitmap_info_header(data: bytes) -> BitmapInfoHeader:
    """Decodes the BITMAPINFOHEADER at the start of an RT_BITMAP (or RT_ICON) payload."""
    return read_bitmap_info_header(Cursor(data))


# --- String tables ---

def string_block_base_id(name: ResourceName) -> int:
    """Block n holds string ids (n - 1) * 16 .. (n - 1) * 16 + 15."""
    if not isinstance(name, NumericName):
        raise InvalidStringTableName(name)
    return (name.value - 1) * STRINGS_PER_BLOCK


def decode_string_block(name: ResourceName, data: bytes) -> Dict[int, str]:
    """
    Decodes one RT_STRING block: up to 16 slots, each a WORD character count
    followed by that many UTF-16LE code units. Empty slots produce no entry.
    A payload may stop early, but only on a slot boundary.
    """
    base_id = string_block_base_id(name)
    cursor = Cursor(data)
    strings: Dict[int, str] = {}
    for i in range(STRINGS_PER_BLOCK):
        if cursor.at_end:
            break
        str_len_chars = read_u16(cursor)
        if str_len_chars == 0:
            continue
        str_data_bytes = cursor.read_bytes(str_len_chars * 2)
        strings[base_id + i] = str_data_bytes.decode('utf-16-le', errors='replace')
    return strings
