# winres16/core/res_parser.py

import logging
from typing import Callable, Dict, List, Optional, Union

from .dialog_parser_util import DialogTemplate, read_dialog_template
from .errors import EndOfData, DuplicateName, MissingPayload
from .reader import Cursor, read_u16, read_u32, read_name
from .resource_base import ResourceKind, ResourceName, ResourceRecord, TextName, NumericName, as_name
from .resource_types import (IconGroup, BitmapInfoHeader, read_icon_group,
                             decode_bitmap_info_header, decode_string_block, string_block_base_id)

log = logging.getLogger(__name__)

# Notes on RES File Format (.res):
# Structure: Sequence of resource entries.
# Each entry:
# 1. RESOURCEHEADER:
#    - DataSize (DWORD): Size of the resource data that follows.
#    - HeaderSize (DWORD): Size of the header, DataSize/HeaderSize included.
#    - Type (WORD/String): If WORD is 0xFFFF, next WORD is numeric ID. Else, null-terminated Unicode string.
#    - Name (WORD/String): Same logic as Type. Padded to DWORD.
#    - DataVersion (DWORD): Typically 0.
#    - MemoryFlags (WORD): MOVEABLE, PURE, PRELOAD, DISCARDABLE.
#    - LanguageId (WORD): LANGID.
#    - Version (DWORD): User-defined.
#    - Characteristics (DWORD): User-defined.
# 2. Resource Data: Raw binary data (DataSize bytes).
# 3. Padding: Data is padded to align on DWORD boundary.
# A compiled .res starts with an empty type 0 entry.

# Kinds whose payload is parsed into a structure or stored by name.
_COLLECTED_KINDS = (ResourceKind.DIALOG, ResourceKind.BITMAP, ResourceKind.ICON,
                    ResourceKind.GROUP_ICON, ResourceKind.STRING)
# Recognised, nothing to keep beyond the envelope.
_DISCARDED_KINDS = (ResourceKind.HEADER, ResourceKind.MENU)


def read_resource_record(cursor: Cursor) -> ResourceRecord:
    """Reads one envelope and its payload, leaving the cursor DWORD aligned after the data."""
    header_start = cursor.position
    data_size = read_u32(cursor)
    header_size = read_u32(cursor)
    kind = ResourceKind.from_name(read_name(cursor))
    name = read_name(cursor)
    cursor.align(4)
    data_version = read_u32(cursor)
    memory_flags = read_u16(cursor)
    language_id = read_u16(cursor)
    version = read_u32(cursor)
    characteristics = read_u32(cursor)

    consumed = cursor.position - header_start
    if consumed != header_size:
        log.debug("%s %r: HeaderSize field is %d, header occupied %d bytes.",
                  kind.name, name, header_size, consumed)

    data_offset = cursor.absolute_position
    data = cursor.read_bytes(data_size)
    cursor.align(4)

    return ResourceRecord(kind, name, language_id=language_id, memory_flags=memory_flags,
                          version=version, characteristics=characteristics,
                          data_version=data_version, header_size=header_size,
                          data=data, data_offset=data_offset)


class ResourceBundle:
    """
    Everything decoded from one resource segment. Built by parse_res_data and
    owned by its caller; nothing here is shared between loads.
    """
    def __init__(self):
        self.records: List[ResourceRecord] = []
        self.dialogs: Dict[ResourceName, DialogTemplate] = {}
        self.bitmaps: Dict[ResourceName, bytes] = {}
        self.icon_groups: Dict[ResourceName, IconGroup] = {}
        self.icons: Dict[ResourceName, bytes] = {}
        self.strings: Dict[int, str] = {}
        self.warnings: List[str] = []

    def icon_data(self, name: str) -> Optional[bytes]:
        """Raw RT_ICON bytes of the first image listed in the group icon called name."""
        group = self.icon_groups.get(TextName(name))
        if group is None or not group.entries:
            return None
        return self.icons.get(NumericName(group.entries[0].name_ordinal))

    def string(self, string_id: int, default: Optional[str] = None) -> Optional[str]:
        return self.strings.get(string_id, default)

    def dialog(self, name: Union[int, str, ResourceName]) -> Optional[DialogTemplate]:
        return self.dialogs.get(as_name(name))

    def bitmap_info(self, name: Union[int, str, ResourceName]) -> Optional[BitmapInfoHeader]:
        data = self.bitmaps.get(as_name(name))
        if data is None:
            return None
        return decode_bitmap_info_header(data)

    def records_of_kind(self, kind: ResourceKind) -> List[ResourceRecord]:
        return [record for record in self.records if record.kind == kind]

    def __repr__(self):
        return (f"ResourceBundle(records={len(self.records)}, dialogs={len(self.dialogs)}, "
                f"bitmaps={len(self.bitmaps)}, icon_groups={len(self.icon_groups)}, "
                f"icons={len(self.icons)}, strings={len(self.strings)})")


class _BundleBuilder:
    def __init__(self, trace: bool = False):
        self.bundle = ResourceBundle()
        self.trace = trace

    def _warn(self, category, message: str):
        log.warning("%s: %s", category.__name__, message)
        self.bundle.warnings.append(message)

    def _store(self, collection: dict, record: ResourceRecord, value, what: str):
        if record.name in collection:
            self._warn(DuplicateName, f"already have {what} named {record.name}, replacing it")
        collection[record.name] = value

    def _decode(self, record: ResourceRecord, read: Callable[[Cursor], object]):
        cursor = Cursor(record.data, record.data_offset, trace=self.trace)
        value = read(cursor)
        if cursor.remaining > 0:
            log.debug("%s %s: %d trailing byte(s) after decoded structure.",
                      record.kind.name, record.name, cursor.remaining)
        return value

    def _collect_strings(self, record: ResourceRecord):
        for string_id, value in decode_string_block(record.name, record.data).items():
            if string_id in self.bundle.strings:
                self._warn(DuplicateName, f"already have string {string_id}, replacing it")
            self.bundle.strings[string_id] = value

    def add(self, record: ResourceRecord):
        self.bundle.records.append(record)
        kind = record.kind

        if kind in _DISCARDED_KINDS:
            return
        if kind not in _COLLECTED_KINDS:
            log.debug("Keeping %s %s as raw envelope only.", kind.name, record.name)
            return
        if kind == ResourceKind.STRING:
            string_block_base_id(record.name)
        if not record.data:
            self._warn(MissingPayload, f"{kind.name} {record.name} has no data, skipped")
            return

        if kind == ResourceKind.DIALOG:
            self._store(self.bundle.dialogs, record, self._decode(record, read_dialog_template), "dialog")
        elif kind == ResourceKind.GROUP_ICON:
            self._store(self.bundle.icon_groups, record, self._decode(record, read_icon_group), "icon group")
        elif kind == ResourceKind.BITMAP:
            self._store(self.bundle.bitmaps, record, record.data, "bitmap")
        elif kind == ResourceKind.ICON:
            self._store(self.bundle.icons, record, record.data, "icon")
        elif kind == ResourceKind.STRING:
            self._collect_strings(record)


def parse_res_data(data: bytes, base_offset: int = 0, trace: bool = False) -> ResourceBundle:
    """
    Decodes a resource segment held in memory.

    base_offset is the absolute position of data[0] when the segment was cut out
    of a larger file; padding is computed against it. Decoding stops cleanly when
    the data ends exactly at an envelope boundary. Any other error propagates
    and no bundle is returned.
    """
    cursor = Cursor(data, base_offset, trace=trace)
    builder = _BundleBuilder(trace=trace)

    while True:
        record_start = cursor.position
        try:
            record = read_resource_record(cursor)
        except EndOfData:
            if cursor.position != record_start:
                raise
            break
        log.debug("Read %r", record)
        builder.add(record)

    log.info("Decoded %d resource(s): %r", len(builder.bundle.records), builder.bundle)
    return builder.bundle


def parse_res_file(res_filepath: str, base_offset: int = 0, trace: bool = False) -> ResourceBundle:
    """Parses a RES (compiled Windows Resource) file."""
    with open(res_filepath, 'rb') as f:
        data = f.read()
    return parse_res_data(data, base_offset=base_offset, trace=trace)
