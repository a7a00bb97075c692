# winres16/core/errors.py

class ResourceDecodeError(Exception):
    """Base class for every fatal error raised while decoding a resource segment."""


class EndOfData(ResourceDecodeError, EOFError):
    """No bytes remain where at least one more was expected."""

    def __init__(self, position: int):
        super().__init__(f"Unexpected end of data at offset {position:#x}.")
        self.position = position


class Truncated(ResourceDecodeError):
    """A fixed-size read asked for more bytes than remain in the buffer."""

    def __init__(self, overflow: int, position: int = 0):
        super().__init__(f"Read at offset {position:#x} overruns the buffer by {overflow} byte(s).")
        self.overflow = overflow
        self.position = position


class UnknownResourceType(ResourceDecodeError):
    def __init__(self, type_name):
        super().__init__(f"Unknown resource type {type_name!r}.")
        self.type_name = type_name


class MalformedEnum(ResourceDecodeError):
    """A coded enumeration field holds a value outside its closed set."""

    def __init__(self, enum_name: str, value: int):
        super().__init__(f"Value {value:#x} is not a valid {enum_name}.")
        self.enum_name = enum_name
        self.value = value


class UnknownCompression(MalformedEnum):
    def __init__(self, value: int):
        super().__init__("BITMAPINFOHEADER compression", value)


class InvalidStringTableName(ResourceDecodeError):
    def __init__(self, name):
        super().__init__(f"String table blocks must be named by ordinal, got {name!r}.")
        self.name = name


# Recoverable conditions. These are never raised by the decoder; they tag the
# warnings it logs and records on the bundle.

class ResourceDecodeWarning(UserWarning):
    pass


class DuplicateName(ResourceDecodeWarning):
    pass


class MissingPayload(ResourceDecodeWarning):
    pass
