# winres16/__main__.py

import argparse
import logging
import sys

from .core.dialog_parser_util import (STYLE_TO_STR_MAP_BY_CLASS, StandardControlKind,
                                      format_style_flags)
from .core.errors import ResourceDecodeError
from .core.res_parser import ResourceBundle, parse_res_file

log = logging.getLogger("winres16")


def _item_style(item) -> str:
    maps = [STYLE_TO_STR_MAP_BY_CLASS["GENERAL_WS"]]
    if isinstance(item.window_class, StandardControlKind) and item.window_class in STYLE_TO_STR_MAP_BY_CLASS:
        maps.append(STYLE_TO_STR_MAP_BY_CLASS[item.window_class])
    return format_style_flags(item.style, maps)


def print_summary(bundle: ResourceBundle, out=None):
    out = out or sys.stdout
    print(f"{len(bundle.records)} resource(s)", file=out)
    for record in bundle.records:
        print(f"  {record.kind.name:<12} {str(record.name):<16} lang=0x{record.language_id:04X} "
              f"size={len(record.data)}", file=out)

    for name, dialog in bundle.dialogs.items():
        dialog_style = format_style_flags(dialog.style, [STYLE_TO_STR_MAP_BY_CLASS["GENERAL_WS"],
                                                          STYLE_TO_STR_MAP_BY_CLASS["GENERAL_DS"]])
        print(f"DIALOG {name} {dialog.title!r} ({dialog.x},{dialog.y},{dialog.width},{dialog.height}) {dialog_style}", file=out)
        if dialog.font_name is not None:
            print(f"  FONT {dialog.font_size}, \"{dialog.font_name}\"", file=out)
        for item in dialog.items:
            print(f"  {item.window_class!r} {item.title!r} id={item.id} "
                  f"({item.x},{item.y},{item.width},{item.height}) {_item_style(item)}", file=out)

    for name, group in bundle.icon_groups.items():
        ordinals = ", ".join(str(entry.name_ordinal) for entry in group.entries)
        print(f"GROUP_ICON {name}: icons {ordinals}", file=out)

    if bundle.strings:
        print("STRINGTABLE", file=out)
        for string_id in sorted(bundle.strings):
            print(f"  {string_id:5d} {bundle.strings[string_id]!r}", file=out)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="winres16", description="Dump the resources of a compiled .res segment.")
    parser.add_argument("res_file", help="path to the resource segment")
    parser.add_argument("--base-offset", type=lambda v: int(v, 0), default=0,
                        help="absolute offset of the segment, used for alignment (default 0)")
    parser.add_argument("-v", "--verbose", action="store_true", help="log decoding details")
    parser.add_argument("--trace", action="store_true", help="log every cursor move (implies -v)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if (args.verbose or args.trace) else logging.WARNING,
                        format="%(levelname)s: %(name)s: %(message)s")

    try:
        bundle = parse_res_file(args.res_file, base_offset=args.base_offset, trace=args.trace)
    except FileNotFoundError:
        log.error("RES file not found at %s", args.res_file)
        return 2
    except ResourceDecodeError as e:
        log.error("Failed to decode %s: %s", args.res_file, e)
        return 1

    print_summary(bundle)
    return 0


if __name__ == "__main__":
    sys.exit(main())
