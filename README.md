# dcclcore

Building blocks for compact, bit-packed message encoding. Message types are
described by schema objects, and messages are dynamic values that follow those
descriptions. Around that model the package provides:

- typed reads and writes of field values;
- a stack that tracks which message, field and message part is being worked on;
- a per-operation context that holds the root message, its codec group and its codec version;
- hex, base64 and bit/byte helpers.

The package has no dependencies outside the standard library.

## Installation

```
pip install dcclcore
```

To run the tests:

```
pip install "dcclcore[test]"
pytest
```

## Modules

### `dcclcore.binary`

- `hex_encode(data, upper_case=False)` turns bytes into two hex digits per byte, with the first byte first. `hex_encode(b"TOM")` gives `"544f4d"`.
- `hex_decode(text)` is the reverse. Upper and lower case digits are both accepted. With an odd number of digits, the first digit alone is the low nibble of the first byte. Characters that are not hex digits count as zero.
- `b64_encode(data)` gives base64 text that is wrapped every 72 characters and ends in a newline.
- `b64_decode(text)` skips every character outside the base64 alphabet. Padding is optional.
- `ceil_log2(value)` gives `ceil(log2(value))`, with the value taken as an unsigned 64-bit integer. Floats are rounded up first, and 0 and 1 both give 0. For example, `ceil_log2(5)` is `3`.
- `log2(value)` is the real base-2 logarithm.

### `dcclcore.common`

- `BITS_IN_BYTE` is 8.
- `floor_bits2bytes(bits)` and `ceil_bits2bytes(bits)` give the number of whole bytes in a bit count, and the number of bytes needed to hold it.
- `round_float(value, precision=0)` rounds to a number of decimal places. Halves round up.
- `round_int(value, precision=0)` rounds an integer to a negative precision. For example, `-2` rounds to hundreds. A precision of zero or more leaves the value unchanged.

### `dcclcore.schema`

- `FieldType`, `CppType` and `Label` are enums. `FieldType` gives the declared field types, `CppType` gives the value kinds they are held as, and `Label` is optional, required or repeated.
- `cpp_type_of(field_type)` maps a field type to its value kind.
- `type_name(field_type)` and `cpp_type_name(cpp_type)` give names such as `"TYPE_DOUBLE"` and `"CPPTYPE_DOUBLE"`. A value that is not known gives `"TYPE_UNKNOWN"` or `"CPPTYPE_UNKNOWN"`.
- `FieldOptions` holds the per-field options `codec`, `max_repeat`, `in_head`, `min`, `max`, `precision` and `max_length`. `codec_name` falls back to `"dccl.default2"`.
- `MessageOptions` holds the per-message options `id`, `max_bytes`, `codec`, `codec_group` and `codec_version`. `version` falls back to `2`.
- `FieldSpec` describes one field. It has `is_repeated()`, `is_required()`, `cpp_type()` and `default_value()`.
- `MessageSpec` describes one message type. It has `full_name`, `name` and `field(name)`.
- `Message` holds field values by name. Use `msg["name"]` to read and write a value, `has(name)` to test whether a field is set, and `merge_from(other)` to merge another message in.
  - Reading an unset field gives its default.
  - In `merge_from`, singular fields overwrite, repeated fields are appended, and embedded messages are merged recursively.
- The errors are `DcclError` and its subclasses `OutOfRangeError` and `NullValueError`.

### `dcclcore.reflection`

- `get_value`, `set_value`, `add_value` and `get_repeated_value` read and write fields, and check each value against the field's kind.
  - Reading an unset singular field gives `None`.
  - Writing `None` does nothing.
  - When `field` is `None`, `get_value` and `set_value` act on the whole message.
- `CppTypeHandler` does the work for one value kind.
- `CustomMessageHandler` handles one named message type and returns independent copies.

```python
from dcclcore.schema import FieldOptions, FieldSpec, FieldType, Label, Message, MessageSpec
from dcclcore.reflection import add_value, get_value, set_value

spec = MessageSpec("demo.Status", fields=(
    FieldSpec("depth", 1, FieldType.DOUBLE, Label.REQUIRED),
    FieldSpec("readings", 2, FieldType.INT32, Label.REPEATED, FieldOptions(max_repeat=4)),
))
msg = Message(spec)
set_value(msg, spec.field("depth"), 12)      # stored as 12.0
add_value(msg, spec.field("readings"), 5)
assert get_value(msg, spec.field("depth")) == 12.0
assert msg["readings"] == [5]
```

### `dcclcore.message_stack`

`MessageStack` keeps three stacks: message descriptions, fields and `MessagePart` values (`HEAD`, `BODY` or `UNKNOWN`).

- `scope(field)` is a context manager. It pushes the field for the duration of a block.
- For an embedded-message field, `scope` also pushes the field's message description and a part. The part is the field's `in_head` option if that is set, and otherwise the enclosing part.
- `current_field()`, `current_descriptor()`, `current_part()`, `count()` and `first()` report the current state.
- `pop_all()` empties every stack.

### `dcclcore.type_helper`

`TypeHelper` looks up names and handlers:

- `find_type(field_type)` gives the name of a field type.
- `find_cpp_type(cpp_type, type_name="")` gives the handler for a value kind. A handler registered with `add_custom(full_name)` is preferred when `type_name` matches its name.
- `find_for_field(field)` and `find_for_message(desc)` give the handler for a field or a message type.
- `remove_custom(full_name)` removes one registered handler, and `reset()` removes all of them.

### `dcclcore.context`

`CodecContext` holds the state of one operation.

- `scope(part, descriptor=None, message=None, strict=False)` sets the root message for a block and puts back the previous state when the block ends.
- `has_codec_group()` tells whether the root sets a codec group or a codec version.
- `codec_group(desc=None)` gives the explicit group, or `"dccl.default<version>"` when none is set.
- `codec_version()` gives the root's codec version.
- `this_field()` and `this_descriptor()` read the context's `MessageStack`.

## What this package does not do

The package has no field codecs, no registry of codecs by name, and no functions that encode or decode a whole message to bits. It provides the schema, reflection, recursion-tracking and context pieces that such codecs are built on, but no wire format. It has no command-line tool.