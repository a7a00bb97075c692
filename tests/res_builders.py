"""Byte builders for hand-made resource segments used across the tests."""
import struct

ORDINAL = 0xFFFF


def pad4(length):
    return b'\0' * ((4 - length % 4) % 4)


def wstr(value):
    return value.encode('utf-16-le') + b'\0\0'


def name_field(value):
    """Ordinal-or-string field: int -> 0xFFFF + WORD, str -> null-terminated UTF-16LE."""
    if isinstance(value, int):
        return struct.pack('<HH', ORDINAL, value)
    return wstr(value)


def optional_name_field(value):
    if value is None:
        return b'\0\0'
    return name_field(value)


def envelope(type_id, name, data=b'', language_id=0x0409, memory_flags=0x1030):
    """One RESOURCEHEADER + payload + trailing DWORD padding, assuming a DWORD aligned start."""
    header = name_field(type_id) + name_field(name)
    header += pad4(8 + len(header))
    header += struct.pack('<LHHLL', 0, memory_flags, language_id, 0, 0)
    out = struct.pack('<LL', len(data), 8 + len(header)) + header + data
    return out + pad4(len(out))


def header_envelope():
    return envelope(0, 0, b'', language_id=0, memory_flags=0)


def dialog_item(window_class, title, id_val, style=0x50010000, x=5, y=5, width=40, height=14,
                creation_data=b''):
    """DLGITEMTEMPLATE without its leading alignment padding."""
    out = struct.pack('<LLHHHHH', style, 0, x, y, width, height, id_val)
    out += name_field(window_class)
    out += name_field(title)
    out += struct.pack('<H', len(creation_data) + 2 if creation_data else 0) + creation_data
    return out


def dialog_payload(items=(), style=0x80C80080, title="Dialog", menu=None, window_class=None,
                   font=None, x=10, y=20, width=200, height=100):
    """DLGTEMPLATE + items, assuming the payload starts DWORD aligned."""
    out = struct.pack('<LLHHHHH', style, 0, len(items), x, y, width, height)
    out += optional_name_field(menu)
    out += optional_name_field(window_class)
    out += optional_name_field(title)
    if font is not None:
        size, face = font
        out += struct.pack('<H', size) + wstr(face)
    for item in items:
        out += pad4(len(out))
        out += item
    return out


def icon_group_payload(entries, resource_type=1):
    out = struct.pack('<HHH', 0, resource_type, len(entries))
    for width, height, bit_count, size, ordinal in entries:
        out += struct.pack('<BBBBHHLH', width, height, 0, 0, 1, bit_count, size, ordinal)
    return out


def string_block_payload(slots):
    """slots: mapping index -> string, at most 16 entries."""
    out = b''
    for i in range(16):
        value = slots.get(i, '')
        encoded = value.encode('utf-16-le')
        out += struct.pack('<H', len(encoded) // 2) + encoded
    return out


def bitmap_info_header(width=2, height=2, bit_count=24, compression=0, size_image=0, clr_used=0):
    return struct.pack('<LllHHLLllLL', 40, width, height, 1, bit_count, compression,
                       size_image, 2835, 2835, clr_used, 0)
