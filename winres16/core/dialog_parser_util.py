# winres16/core/dialog_parser_util.py

import logging
from enum import IntEnum
from typing import List, Optional, Union

from .reader import Cursor, read_u16, read_u32, read_name, read_optional_name, read_wide_string
from .resource_base import ResourceName, NumericName, OptionalResourceName, ABSENT

log = logging.getLogger(__name__)

# --- Dialog Styles (WS_, DS_, etc. from WinUser.h) ---
# Window Styles (WS_) - Common subset
WS_POPUP = 0x80000000
WS_CHILD = 0x40000000
WS_MINIMIZE = 0x20000000
WS_VISIBLE = 0x10000000
WS_DISABLED = 0x08000000
WS_CLIPSIBLINGS = 0x04000000
WS_CLIPCHILDREN = 0x02000000
WS_MAXIMIZE = 0x01000000
WS_CAPTION = 0x00C00000  # WS_BORDER | WS_DLGFRAME
WS_BORDER = 0x00800000
WS_DLGFRAME = 0x00400000
WS_VSCROLL = 0x00200000
WS_HSCROLL = 0x00100000
WS_SYSMENU = 0x00080000
WS_THICKFRAME = 0x00040000
WS_GROUP = 0x00020000
WS_TABSTOP = 0x00010000
WS_MINIMIZEBOX = 0x00020000 # Note: Value is same as WS_GROUP
WS_MAXIMIZEBOX = 0x00010000 # Note: Value is same as WS_TABSTOP

# Dialog Styles (DS_)
DS_ABSALIGN = 0x01
DS_SYSMODAL = 0x02
DS_3DLOOK = 0x04
DS_FIXEDSYS = 0x08
DS_NOFAILCREATE = 0x10
DS_LOCALEDIT = 0x20
DS_SETFONT = 0x40
DS_MODALFRAME = 0x80
DS_NOIDLEMSG = 0x100
DS_SETFOREGROUND = 0x200
DS_CONTROL = 0x0400
DS_CENTER = 0x0800
DS_CENTERMOUSE = 0x1000
DS_CONTEXTHELP = 0x2000
DS_USEPIXELS = 0x8000

# Button Styles (BS_)
BS_PUSHBUTTON = 0x00000000; BS_DEFPUSHBUTTON = 0x00000001; BS_CHECKBOX = 0x00000002
BS_AUTOCHECKBOX = 0x00000003; BS_RADIOBUTTON = 0x00000004; BS_3STATE = 0x00000005
BS_AUTO3STATE = 0x00000006; BS_GROUPBOX = 0x00000007; BS_USERBUTTON = 0x00000008
BS_AUTORADIOBUTTON = 0x00000009; BS_PUSHBOX = 0x0000000A; BS_OWNERDRAW = 0x0000000B

# Static Styles (SS_)
SS_LEFT = 0x0000; SS_CENTER = 0x0001; SS_RIGHT = 0x0002; SS_ICON = 0x0003


# --- Control Class Atoms ---
class StandardControlKind(IntEnum):
    BUTTON = 0x0080
    EDIT = 0x0081
    STATIC = 0x0082
    LISTBOX = 0x0083
    SCROLLBAR = 0x0084
    COMBOBOX = 0x0085


class CustomName:
    """Window class of a control that is not one of the predefined atoms."""
    __slots__ = ("name",)

    def __init__(self, name: ResourceName):
        self.name = name

    def __eq__(self, other):
        return isinstance(other, CustomName) and self.name == other.name

    def __hash__(self):
        return hash(("CustomName", self.name))

    def __repr__(self):
        return f"CustomName({self.name!r})"


WindowClass = Union[StandardControlKind, CustomName]


def resolve_window_class(class_name: ResourceName) -> WindowClass:
    if isinstance(class_name, NumericName):
        try:
            return StandardControlKind(class_name.value)
        except ValueError:
            pass
    return CustomName(class_name)


# --- Style to String Maps (for display) ---
STYLE_TO_STR_MAP_BY_CLASS = {
    "GENERAL_WS": {v: k for k, v in globals().items() if k.startswith("WS_") and k != "WS_CHILD"},
    "GENERAL_DS": {v: k for k, v in globals().items() if k.startswith("DS_")},
    StandardControlKind.BUTTON: {v: k for k, v in globals().items() if k.startswith("BS_")},
    StandardControlKind.STATIC: {v: k for k, v in globals().items() if k.startswith("SS_")},
}


def format_style_flags(style_value: int, style_maps: List[dict]) -> str:
    """
    Converts a numeric style value to a string of |-separated flags.
    Bits no map knows about are appended as a hex literal.
    """
    unique_flags = {}
    for style_map in style_maps:
        for val, name in style_map.items():
            if val != 0 and val not in unique_flags:
                unique_flags[val] = name

    found_flags = []
    remaining_style = style_value
    for flag_val, flag_name in sorted(unique_flags.items(), key=lambda x: x[0], reverse=True):
        if (remaining_style & flag_val) == flag_val:
            found_flags.append(flag_name)
            remaining_style &= ~flag_val

    if remaining_style != 0:
        found_flags.append(f"0x{remaining_style:X}")
    return " | ".join(found_flags) if found_flags else "0"


# --- Data Structures ---
class DialogItem:
    def __init__(self, style: int, ex_style: int, x: int, y: int, width: int, height: int,
                 id_val: int, window_class: WindowClass, title: ResourceName,
                 creation_data: Optional[bytes] = None):
        self.style: int = style
        self.ex_style: int = ex_style
        self.x: int = x; self.y: int = y; self.width: int = width; self.height: int = height
        self.id: int = id_val
        self.window_class: WindowClass = window_class
        self.title: ResourceName = title
        self.creation_data: Optional[bytes] = creation_data

    def __repr__(self):
        creation_data_summary = f", creation_data_len={len(self.creation_data)}" if self.creation_data else ""
        return (f"DialogItem(class={self.window_class!r}, title={self.title!r}, id={self.id}, "
                f"pos=({self.x},{self.y}), size=({self.width},{self.height}), "
                f"style=0x{self.style:X}{creation_data_summary})")


class DialogTemplate:
    def __init__(self, style: int = 0, ex_style: int = 0, item_count: int = 0,
                 x: int = 0, y: int = 0, width: int = 0, height: int = 0,
                 menu: OptionalResourceName = ABSENT,
                 window_class: OptionalResourceName = ABSENT,
                 title: OptionalResourceName = ABSENT,
                 font_size: Optional[int] = None, font_name: Optional[str] = None,
                 items: Optional[List[DialogItem]] = None):
        self.style: int = style
        self.ex_style: int = ex_style
        self.item_count: int = item_count
        self.x: int = x; self.y: int = y
        self.width: int = width; self.height: int = height
        self.menu: OptionalResourceName = menu
        self.window_class: OptionalResourceName = window_class
        self.title: OptionalResourceName = title
        self.font_size: Optional[int] = font_size
        self.font_name: Optional[str] = font_name
        self.items: List[DialogItem] = items if items is not None else []

    @property
    def has_font(self) -> bool:
        return bool(self.style & DS_SETFONT)

    def __repr__(self):
        return (f"DialogTemplate(title={self.title!r}, size=({self.width}x{self.height}), "
                f"style=0x{self.style:X}, items={len(self.items)})")


# --- Binary decoding ---
# DLGTEMPLATE (16-bit layout without the DIALOGEX signature):
#   DWORD style, DWORD exStyle, WORD cdit, WORD x, y, cx, cy,
#   menu, class, title (each 0x0000 / 0xFFFF+ordinal / string),
#   [WORD pointsize, string typeface] when DS_SETFONT is set,
#   then cdit DLGITEMTEMPLATEs, each DWORD aligned.

def read_dialog_item(cursor: Cursor) -> DialogItem:
    cursor.align(4)
    style = read_u32(cursor)
    ex_style = read_u32(cursor)
    x = read_u16(cursor)
    y = read_u16(cursor)
    width = read_u16(cursor)
    height = read_u16(cursor)
    id_val = read_u16(cursor)

    cursor.align(2)
    window_class = resolve_window_class(read_name(cursor))

    cursor.align(2)
    title = read_name(cursor)

    # The size WORD counts itself.
    creation_data_size = read_u16(cursor)
    creation_data = None
    if creation_data_size > 2:
        creation_data = cursor.read_bytes(creation_data_size - 2)

    return DialogItem(style, ex_style, x, y, width, height, id_val,
                      window_class, title, creation_data)


def read_dialog_template(cursor: Cursor) -> DialogTemplate:
    dialog = DialogTemplate()
    dialog.style = read_u32(cursor)
    dialog.ex_style = read_u32(cursor)
    dialog.item_count = read_u16(cursor)
    dialog.x = read_u16(cursor)
    dialog.y = read_u16(cursor)
    dialog.width = read_u16(cursor)
    dialog.height = read_u16(cursor)
    dialog.menu = read_optional_name(cursor)
    dialog.window_class = read_optional_name(cursor)
    dialog.title = read_optional_name(cursor)

    if dialog.has_font:
        dialog.font_size = read_u16(cursor)
        dialog.font_name = read_wide_string(cursor)

    for i in range(dialog.item_count):
        item = read_dialog_item(cursor)
        log.debug("dialog item #%d: %r", i + 1, item)
        dialog.items.append(item)
    return dialog


def decode_dialog(data: bytes, base_offset: int = 0) -> DialogTemplate:
    """Decodes an RT_DIALOG payload. base_offset is the payload's absolute position."""
    return read_dialog_template(Cursor(data, base_offset))
