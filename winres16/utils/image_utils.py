from __future__ import annotations
import struct
import io
from typing import Optional
from PIL import Image

from ..core.resource_types import (IconDirectoryEntry, BITMAPINFOHEADER_SIZE, Compression,
                                   decode_bitmap_info_header)

PNG_SIGNATURE = b'\x89PNG'
ICONDIR_SIZE = 6
ICONDIRENTRY_SIZE = 16
BITMAPFILEHEADER_SIZE = 14


def _build_single_icon_ico(data: bytes, width: int, height: int, bit_count: int, color_count: int = 0) -> bytes:
    header = struct.pack('<HHH', 0, 1, 1)
    entry = struct.pack('<BBBBHHLL',
                        width if width < 256 else 0,
                        height if height < 256 else 0,
                        color_count, 0, 1, bit_count, len(data),
                        ICONDIR_SIZE + ICONDIRENTRY_SIZE)
    return header + entry + data


def icon_to_image(data: bytes, entry: Optional[IconDirectoryEntry] = None) -> Image.Image:
    """
    Return a PIL Image from raw RT_ICON data.

    Icon resources are a DIB (or a PNG) without the .ico directory. The group
    entry supplies the directory fields when given; otherwise they are taken
    from the DIB header, whose height counts the XOR and AND masks together.
    """
    if data[:4] == PNG_SIGNATURE:
        return Image.open(io.BytesIO(data))
    if entry is not None:
        width, height, bit_count, color_count = entry.width, entry.height, entry.bit_count, entry.color_count
    else:
        info = decode_bitmap_info_header(data)
        width, height, bit_count, color_count = info.width, abs(info.height) // 2, info.bit_count, 0
    return Image.open(io.BytesIO(_build_single_icon_ico(data, width, height, bit_count, color_count)))


def _color_table_size(info) -> int:
    if info.clr_used:
        return info.clr_used * 4
    if info.bit_count <= 8:
        return (1 << info.bit_count) * 4
    if info.compression == Compression.BI_BITFIELDS and info.size == BITMAPINFOHEADER_SIZE:
        return 3 * 4
    return 0


def bitmap_to_image(data: bytes) -> Image.Image:
    """Return a PIL Image from raw RT_BITMAP data (a packed DIB without BITMAPFILEHEADER)."""
    info = decode_bitmap_info_header(data)
    pixel_offset = BITMAPFILEHEADER_SIZE + info.size + _color_table_size(info)
    file_header = struct.pack('<2sLHHL', b'BM', BITMAPFILEHEADER_SIZE + len(data), 0, 0, pixel_offset)
    return Image.open(io.BytesIO(file_header + data))
