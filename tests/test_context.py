import pytest

from dcclcore.context import CodecContext
from dcclcore.message_stack import MessagePart
from dcclcore.schema import (
    DcclError,
    FieldSpec,
    FieldType,
    Message,
    MessageOptions,
    MessageSpec,
)


@pytest.fixture
def ctx():
    return CodecContext()


def make_spec(**options):
    return MessageSpec(
        "test.Msg",
        (FieldSpec("a", 1, FieldType.INT32),),
        MessageOptions(**options),
    )


def test_initial_state(ctx):
    assert ctx.part is MessagePart.UNKNOWN
    assert ctx.root_message is None
    assert ctx.has_codec_group() is False


def test_scope_with_message_sets_and_resets(ctx):
    spec = make_spec()
    message = Message(spec, {"a": 3})
    with ctx.scope(MessagePart.BODY, message=message, strict=True):
        assert ctx.part is MessagePart.BODY
        assert ctx.root_message is message
        assert ctx.root_descriptor is spec
        assert ctx.strict is True
    assert ctx.part is MessagePart.UNKNOWN
    assert ctx.root_descriptor is None
    assert ctx.strict is False


def test_scope_with_descriptor_only(ctx):
    spec = make_spec()
    with ctx.scope(MessagePart.HEAD, descriptor=spec):
        assert ctx.root_message is None
        assert ctx.root_descriptor is spec


def test_scope_resets_after_error(ctx):
    spec = make_spec()
    with pytest.raises(RuntimeError):
        with ctx.scope(MessagePart.BODY, descriptor=spec):
            raise RuntimeError("boom")
    assert ctx.root_descriptor is None
    assert ctx.part is MessagePart.UNKNOWN


def test_has_codec_group(ctx):
    with ctx.scope(MessagePart.BODY, descriptor=make_spec()):
        assert ctx.has_codec_group() is False
    with ctx.scope(MessagePart.BODY, descriptor=make_spec(codec_version=3)):
        assert ctx.has_codec_group() is True
    with ctx.scope(MessagePart.BODY, descriptor=make_spec(codec_group="custom")):
        assert ctx.has_codec_group() is True


def test_codec_group_explicit(ctx):
    spec = make_spec(codec_group="custom", codec_version=3)
    with ctx.scope(MessagePart.BODY, descriptor=spec):
        assert ctx.codec_group() == "custom"
    assert ctx.codec_group(spec) == "custom"


def test_codec_group_default_follows_version(ctx):
    assert ctx.codec_group(make_spec()) == "dccl.default2"
    assert ctx.codec_group(make_spec(codec_version=3)) == "dccl.default3"


def test_codec_version(ctx):
    with ctx.scope(MessagePart.BODY, descriptor=make_spec(codec_version=3)):
        assert ctx.codec_version() == 3
    with ctx.scope(MessagePart.BODY, descriptor=make_spec()):
        assert ctx.codec_version() == 2


def test_codec_version_without_root(ctx):
    with pytest.raises(DcclError):
        ctx.codec_version()
    with pytest.raises(DcclError):
        ctx.codec_group()


def test_this_field_and_descriptor(ctx):
    spec = make_spec()
    field = spec.field("a")
    assert ctx.this_field() is None
    with ctx.stack.scope():
        ctx.stack.push_descriptor(spec)
        with ctx.stack.scope(field):
            assert ctx.this_field() is field
            assert ctx.this_descriptor() is spec
        assert ctx.this_field() is None
    assert ctx.this_descriptor() is None