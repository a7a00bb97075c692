# winres16/core/resource_base.py

from enum import IntEnum
from typing import Union

from .errors import UnknownResourceType


class ResourceName:
    """
    Ordinal-or-string name of a resource (also used for type codes, dialog
    menus, classes and titles). The two variants never compare equal to each
    other: NumericName(5) != TextName("5").
    """
    __slots__ = ("value",)

    def __init__(self, value):
        self.value = value

    def __eq__(self, other):
        return type(self) is type(other) and self.value == other.value

    def __hash__(self):
        return hash((type(self).__name__, self.value))

    def __repr__(self):
        return f"{type(self).__name__}({self.value!r})"


class NumericName(ResourceName):
    __slots__ = ()

    def __init__(self, value: int):
        super().__init__(int(value))

    def __str__(self):
        return str(self.value)


class TextName(ResourceName):
    __slots__ = ()

    def __init__(self, value: str):
        super().__init__(str(value))

    def __str__(self):
        return f'"{self.value}"'


class Absent:
    """Marker for an optional dialog header field that holds nothing (a 0x0000 WORD)."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "ABSENT"


ABSENT = Absent()

OptionalResourceName = Union[ResourceName, Absent]


def as_name(value: Union[int, str, ResourceName]) -> ResourceName:
    """Convenience for lookups: 3 -> NumericName(3), "APP" -> TextName("APP")."""
    if isinstance(value, ResourceName):
        return value
    if isinstance(value, int):
        return NumericName(value)
    return TextName(value)


# Common Resource Type Constants
# These values are typically found in WinUser.h or similar Windows SDK headers.
# Type 0 is the empty leading entry that compilers write at the start of a .res file.
RT_HEADER = 0
RT_CURSOR = 1
RT_BITMAP = 2
RT_ICON = 3
RT_MENU = 4
RT_DIALOG = 5
RT_STRING = 6
RT_FONTDIR = 7
RT_FONT = 8
RT_ACCELERATOR = 9
RT_RCDATA = 10
RT_MESSAGETABLE = 11
RT_GROUP_CURSOR = 12 # RT_CURSOR + 11
RT_GROUP_ICON = 14   # RT_ICON + 11
RT_VERSION = 16
RT_DLGINCLUDE = 17
RT_PLUGPLAY = 19
RT_VXD = 20
RT_ANICURSOR = 21
RT_ANIICON = 22
RT_HTML = 23
RT_DLGINIT = 240
RT_TOOLBAR = 241

# Language ID constants (simplified, full list is extensive)
LANG_NEUTRAL = 0x00


class ResourceKind(IntEnum):
    """The closed set of resource type codes this decoder accepts."""
    HEADER = RT_HEADER
    CURSOR = RT_CURSOR
    BITMAP = RT_BITMAP
    ICON = RT_ICON
    MENU = RT_MENU
    DIALOG = RT_DIALOG
    STRING = RT_STRING
    FONTDIR = RT_FONTDIR
    FONT = RT_FONT
    ACCELERATOR = RT_ACCELERATOR
    RCDATA = RT_RCDATA
    MESSAGETABLE = RT_MESSAGETABLE
    GROUP_CURSOR = RT_GROUP_CURSOR
    GROUP_ICON = RT_GROUP_ICON
    VERSION = RT_VERSION
    DLGINCLUDE = RT_DLGINCLUDE
    PLUGPLAY = RT_PLUGPLAY
    VXD = RT_VXD
    ANICURSOR = RT_ANICURSOR
    ANIICON = RT_ANIICON
    HTML = RT_HTML
    DLGINIT = RT_DLGINIT
    TOOLBAR = RT_TOOLBAR

    @classmethod
    def from_name(cls, type_name: ResourceName) -> "ResourceKind":
        """Resolves a decoded type field. Textual types and unknown ordinals are fatal."""
        if not isinstance(type_name, NumericName):
            raise UnknownResourceType(type_name)
        try:
            return cls(type_name.value)
        except ValueError:
            raise UnknownResourceType(type_name) from None


class ResourceRecord:
    """
    One decoded envelope. data holds the payload verbatim and data_offset its
    absolute position in the segment, which nested decoders need for alignment.
    """
    def __init__(self, kind: ResourceKind, name: ResourceName, language_id: int = LANG_NEUTRAL,
                 memory_flags: int = 0, version: int = 0, characteristics: int = 0,
                 data_version: int = 0, header_size: int = 0,
                 data: bytes = b'', data_offset: int = 0):
        self.kind = kind
        self.name = name
        self.language_id = language_id
        self.memory_flags = memory_flags
        self.version = version
        self.characteristics = characteristics
        self.data_version = data_version
        self.header_size = header_size
        self.data = data
        self.data_offset = data_offset

    @property
    def data_size(self) -> int:
        return len(self.data)

    def __repr__(self):
        return (f"ResourceRecord(kind={self.kind.name}, name={self.name!r}, lang={self.language_id:#06x}, "
                f"data_len={len(self.data)}, offset={self.data_offset:#x})")
