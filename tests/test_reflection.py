import pytest

from dcclcore.reflection import (
    CppTypeHandler,
    CustomMessageHandler,
    add_value,
    get_repeated_value,
    get_value,
    handler_for,
    set_value,
)
from dcclcore.schema import (
    CppType,
    DcclError,
    FieldSpec,
    FieldType,
    Label,
    Message,
    MessageSpec,
)


@pytest.fixture
def inner_spec():
    return MessageSpec("test.Inner", (FieldSpec("x", 1, FieldType.INT32),))


@pytest.fixture
def outer_spec(inner_spec):
    return MessageSpec(
        "test.Outer",
        (
            FieldSpec("d", 1, FieldType.DOUBLE),
            FieldSpec("i", 2, FieldType.SINT64),
            FieldSpec("b", 3, FieldType.BOOL),
            FieldSpec("s", 4, FieldType.STRING),
            FieldSpec("raw", 5, FieldType.BYTES),
            FieldSpec("e", 6, FieldType.ENUM, enum_values=("RED", "GREEN")),
            FieldSpec("inner", 7, FieldType.MESSAGE, message_type=inner_spec),
            FieldSpec("nums", 8, FieldType.UINT32, Label.REPEATED),
            FieldSpec("inners", 9, FieldType.MESSAGE, Label.REPEATED, message_type=inner_spec),
        ),
    )


def test_unset_field_reads_none(outer_spec):
    msg = Message(outer_spec)
    assert get_value(msg, outer_spec.field("d")) is None


def test_double_round_trip_converts_int(outer_spec):
    msg = Message(outer_spec)
    field = outer_spec.field("d")
    set_value(msg, field, 3)
    assert get_value(msg, field) == 3.0
    assert isinstance(get_value(msg, field), float)


@pytest.mark.parametrize(
    "name,value",
    [("i", -42), ("b", True), ("s", "hello"), ("raw", b"\x00\x01"), ("e", "GREEN")],
)
def test_round_trip_scalars(outer_spec, name, value):
    msg = Message(outer_spec)
    field = outer_spec.field(name)
    set_value(msg, field, value)
    assert get_value(msg, field) == value


def test_set_none_is_ignored(outer_spec):
    msg = Message(outer_spec)
    set_value(msg, outer_spec.field("i"), None)
    assert msg.has("i") is False


@pytest.mark.parametrize(
    "name,value",
    [("i", 1.5), ("i", True), ("b", 1), ("s", b"x"), ("raw", "x"), ("d", "1")],
)
def test_wrong_type_raises(outer_spec, name, value):
    with pytest.raises(DcclError):
        set_value(Message(outer_spec), outer_spec.field(name), value)


def test_unknown_enum_value_raises(outer_spec):
    with pytest.raises(DcclError):
        set_value(Message(outer_spec), outer_spec.field("e"), "BLUE")


def test_base_message_value_is_message_itself(outer_spec):
    msg = Message(outer_spec)
    assert get_value(msg) is msg


def test_set_base_message_merges(outer_spec):
    msg = Message(outer_spec)
    other = Message(outer_spec, {"i": 7})
    set_value(msg, None, other)
    assert msg["i"] == 7


def test_set_embedded_message_merges(outer_spec, inner_spec):
    msg = Message(outer_spec)
    field = outer_spec.field("inner")
    set_value(msg, field, Message(inner_spec, {"x": 5}))
    assert get_value(msg, field)["x"] == 5
    assert msg.has("inner")


def test_set_embedded_message_wrong_spec_raises(outer_spec):
    with pytest.raises(DcclError):
        set_value(Message(outer_spec), outer_spec.field("inner"), Message(outer_spec))


def test_add_and_read_repeated(outer_spec):
    msg = Message(outer_spec)
    field = outer_spec.field("nums")
    for number in (4, 5, 6):
        add_value(msg, field, number)
    assert [get_repeated_value(msg, field, k) for k in range(3)] == [4, 5, 6]


def test_add_repeated_message_copies(outer_spec, inner_spec):
    msg = Message(outer_spec)
    field = outer_spec.field("inners")
    source = Message(inner_spec, {"x": 1})
    add_value(msg, field, source)
    source["x"] = 2
    assert get_repeated_value(msg, field, 0)["x"] == 1


def test_repeated_index_out_of_range(outer_spec):
    with pytest.raises(IndexError):
        get_repeated_value(Message(outer_spec), outer_spec.field("nums"), 0)


def test_set_on_repeated_raises(outer_spec):
    with pytest.raises(DcclError):
        set_value(Message(outer_spec), outer_spec.field("nums"), 1)


def test_add_on_singular_raises(outer_spec):
    with pytest.raises(DcclError):
        add_value(Message(outer_spec), outer_spec.field("i"), 1)


def test_get_value_of_repeated_raises(outer_spec):
    with pytest.raises(DcclError):
        get_value(Message(outer_spec), outer_spec.field("nums"))


def test_handler_kind_mismatch_raises(outer_spec):
    with pytest.raises(DcclError):
        CppTypeHandler(CppType.BOOL).get_value(Message(outer_spec), outer_spec.field("d"))


def test_handler_names():
    assert CppTypeHandler(CppType.DOUBLE).name == "CPPTYPE_DOUBLE"
    assert CppTypeHandler().name == "CPPTYPE_UNKNOWN"
    assert handler_for(CppType.ENUM).name == "CPPTYPE_ENUM"


def test_unknown_handler_reads_none_and_ignores_writes(outer_spec):
    msg = Message(outer_spec, {"i": 3})
    handler = CppTypeHandler()
    handler.set_value(msg, outer_spec.field("i"), 9)
    assert handler.get_value(msg, outer_spec.field("i")) is None
    assert msg["i"] == 3


def test_custom_handler_rejects_other_type(outer_spec, inner_spec):
    handler = CustomMessageHandler("test.Inner")
    with pytest.raises(DcclError):
        handler.set_value(Message(outer_spec), outer_spec.field("inner"), Message(outer_spec))


def test_custom_handler_add_value(outer_spec, inner_spec):
    msg = Message(outer_spec)
    field = outer_spec.field("inners")
    handler = CustomMessageHandler("test.Inner")
    handler.add_value(msg, field, Message(inner_spec, {"x": 8}))
    assert handler.get_repeated_value(msg, field, 0)["x"] == 8