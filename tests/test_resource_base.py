import pytest

from winres16.core.errors import UnknownResourceType
from winres16.core.resource_base import (NumericName, TextName, ResourceKind, ABSENT, Absent,
                                         as_name, RT_GROUP_ICON)


def test_names_of_different_variants_never_equal():
    assert NumericName(5) != TextName("5")
    assert len({NumericName(5), TextName("5")}) == 2


def test_names_hash_by_variant_and_value():
    collection = {NumericName(7): "icon"}
    assert collection[NumericName(7)] == "icon"
    assert TextName("7") not in collection


def test_absent_is_a_falsy_singleton():
    assert Absent() is ABSENT
    assert not ABSENT


def test_as_name():
    assert as_name(3) == NumericName(3)
    assert as_name("APP") == TextName("APP")
    assert as_name(TextName("X")) == TextName("X")


def test_kind_from_numeric_name():
    assert ResourceKind.from_name(NumericName(RT_GROUP_ICON)) is ResourceKind.GROUP_ICON
    assert ResourceKind.from_name(NumericName(0)) is ResourceKind.HEADER


@pytest.mark.parametrize("type_name", [NumericName(13), NumericName(24), NumericName(0x7FFF)])
def test_kind_unknown_ordinal_is_fatal(type_name):
    with pytest.raises(UnknownResourceType):
        ResourceKind.from_name(type_name)


def test_kind_textual_type_is_fatal():
    with pytest.raises(UnknownResourceType) as excinfo:
        ResourceKind.from_name(TextName("PNG"))
    assert excinfo.value.type_name == TextName("PNG")
