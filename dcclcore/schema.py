"""Message schema model: field and message descriptions, options, and dynamic messages."""

from __future__ import annotations

import copy
import enum
from dataclasses import dataclass, field as dc_field
from typing import Any

__all__ = [
    "DcclError",
    "OutOfRangeError",
    "NullValueError",
    "FieldType",
    "CppType",
    "Label",
    "FieldOptions",
    "MessageOptions",
    "FieldSpec",
    "MessageSpec",
    "Message",
    "cpp_type_of",
    "type_name",
    "cpp_type_name",
]

DEFAULT_FIELD_CODEC = "dccl.default2"
DEFAULT_CODEC_VERSION = 2


class DcclError(Exception):
    """Base error for encoding, decoding and schema problems."""


class OutOfRangeError(DcclError):
    """A value lies outside the bounds a field allows."""

    def __init__(self, message: str, field: "FieldSpec | None" = None) -> None:
        super().__init__(message)
        self.field = field


class NullValueError(DcclError):
    """The encoded value marks a field as absent."""


class FieldType(enum.IntEnum):
    """Declared field types, numbered as in the Protocol Buffers schema language."""

    DOUBLE = 1
    FLOAT = 2
    INT64 = 3
    UINT64 = 4
    INT32 = 5
    FIXED64 = 6
    FIXED32 = 7
    BOOL = 8
    STRING = 9
    GROUP = 10
    MESSAGE = 11
    BYTES = 12
    UINT32 = 13
    ENUM = 14
    SFIXED32 = 15
    SFIXED64 = 16
    SINT32 = 17
    SINT64 = 18


class CppType(enum.IntEnum):
    """In-memory value kinds that field types map to."""

    INT32 = 1
    INT64 = 2
    UINT32 = 3
    UINT64 = 4
    DOUBLE = 5
    FLOAT = 6
    BOOL = 7
    ENUM = 8
    STRING = 9
    MESSAGE = 10


class Label(enum.IntEnum):
    OPTIONAL = 1
    REQUIRED = 2
    REPEATED = 3


_CPP_TYPE_OF = {
    FieldType.DOUBLE: CppType.DOUBLE,
    FieldType.FLOAT: CppType.FLOAT,
    FieldType.INT64: CppType.INT64,
    FieldType.UINT64: CppType.UINT64,
    FieldType.INT32: CppType.INT32,
    FieldType.FIXED64: CppType.UINT64,
    FieldType.FIXED32: CppType.UINT32,
    FieldType.BOOL: CppType.BOOL,
    FieldType.STRING: CppType.STRING,
    FieldType.GROUP: CppType.MESSAGE,
    FieldType.MESSAGE: CppType.MESSAGE,
    FieldType.BYTES: CppType.STRING,
    FieldType.UINT32: CppType.UINT32,
    FieldType.ENUM: CppType.ENUM,
    FieldType.SFIXED32: CppType.INT32,
    FieldType.SFIXED64: CppType.INT64,
    FieldType.SINT32: CppType.INT32,
    FieldType.SINT64: CppType.INT64,
}


def cpp_type_of(field_type: FieldType | int) -> CppType:
    """Return the value kind a declared field type is held as."""
    try:
        return _CPP_TYPE_OF[FieldType(field_type)]
    except ValueError:
        raise DcclError(f"unknown field type: {field_type!r}") from None


def type_name(field_type: FieldType | int) -> str:
    """Name of a field type such as 'TYPE_DOUBLE', or 'TYPE_UNKNOWN'."""
    try:
        return "TYPE_" + FieldType(field_type).name
    except ValueError:
        return "TYPE_UNKNOWN"


def cpp_type_name(cpp_type: CppType | int) -> str:
    """Name of a value kind such as 'CPPTYPE_DOUBLE', or 'CPPTYPE_UNKNOWN'."""
    try:
        return "CPPTYPE_" + CppType(cpp_type).name
    except ValueError:
        return "CPPTYPE_UNKNOWN"


@dataclass
class FieldOptions:
    """Per-field encoding options; None means the option is not set."""

    codec: str | None = None
    max_repeat: int | None = None
    in_head: bool | None = None
    min: float | None = None
    max: float | None = None
    precision: int | None = None
    max_length: int | None = None

    @property
    def codec_name(self) -> str:
        """The codec set for the field, or the default codec name."""
        return self.codec if self.codec is not None else DEFAULT_FIELD_CODEC


@dataclass
class MessageOptions:
    """Per-message encoding options; None means the option is not set."""

    id: int | None = None
    max_bytes: int | None = None
    codec: str | None = None
    codec_group: str | None = None
    codec_version: int | None = None

    @property
    def version(self) -> int:
        """The codec version set for the message, or the default version."""
        return self.codec_version if self.codec_version is not None else DEFAULT_CODEC_VERSION


@dataclass(eq=False)
class FieldSpec:
    """Description of one field of a message."""

    name: str
    number: int
    type: FieldType
    label: Label = Label.OPTIONAL
    options: FieldOptions = dc_field(default_factory=FieldOptions)
    message_type: "MessageSpec | None" = None
    enum_values: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        self.type = FieldType(self.type)
        self.label = Label(self.label)
        self.enum_values = tuple(self.enum_values)
        if self.cpp_type() is CppType.MESSAGE and self.message_type is None:
            raise DcclError(f"field {self.name} of message type has no message_type")

    def is_repeated(self) -> bool:
        return self.label is Label.REPEATED

    def is_required(self) -> bool:
        return self.label is Label.REQUIRED

    def cpp_type(self) -> CppType:
        return cpp_type_of(self.type)

    def default_value(self) -> Any:
        """The value an unset singular field reads as."""
        kind = self.cpp_type()
        if kind is CppType.MESSAGE:
            return Message(self.message_type)
        if kind is CppType.ENUM:
            return self.enum_values[0] if self.enum_values else None
        if kind is CppType.STRING:
            return b"" if self.type is FieldType.BYTES else ""
        if kind is CppType.BOOL:
            return False
        if kind in (CppType.DOUBLE, CppType.FLOAT):
            return 0.0
        return 0


@dataclass(eq=False)
class MessageSpec:
    """Description of a message type: its full name, fields and options."""

    full_name: str
    fields: tuple[FieldSpec, ...] = ()
    options: MessageOptions = dc_field(default_factory=MessageOptions)

    def __post_init__(self) -> None:
        self.fields = tuple(self.fields)
        self._by_name = {spec.name: spec for spec in self.fields}
        if len(self._by_name) != len(self.fields):
            raise DcclError(f"duplicate field name in message {self.full_name}")

    @property
    def name(self) -> str:
        """The last component of the full name."""
        return self.full_name.rsplit(".", 1)[-1]

    def field(self, name: str) -> FieldSpec:
        """Return the field called `name`, raising KeyError if there is none."""
        try:
            return self._by_name[name]
        except KeyError:
            raise KeyError(f"message {self.full_name} has no field {name!r}") from None


@dataclass
class Message:
    """A message value: field values keyed by field name, following a MessageSpec."""

    spec: MessageSpec
    values: dict[str, Any] = dc_field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in self.values:
            self.spec.field(name)

    def has(self, name: str) -> bool:
        """True if a singular field is set or a repeated field is non-empty."""
        spec = self.spec.field(name)
        if spec.is_repeated():
            return bool(self.values.get(name))
        return name in self.values

    def __getitem__(self, name: str) -> Any:
        spec = self.spec.field(name)
        if name in self.values:
            return self.values[name]
        if spec.is_repeated():
            return self.values.setdefault(name, [])
        return spec.default_value()

    def __setitem__(self, name: str, value: Any) -> None:
        spec = self.spec.field(name)
        self.values[name] = list(value) if spec.is_repeated() else value

    def merge_from(self, other: "Message") -> None:
        """Merge `other` into this message.

        Set singular fields overwrite, repeated fields are appended and
        embedded messages are merged recursively.
        """
        if other.spec.full_name != self.spec.full_name:
            raise DcclError(
                f"cannot merge {other.spec.full_name} into {self.spec.full_name}"
            )
        for name, value in other.values.items():
            spec = self.spec.field(name)
            if spec.is_repeated():
                self.values.setdefault(name, []).extend(copy.deepcopy(list(value)))
            elif spec.cpp_type() is CppType.MESSAGE and name in self.values:
                self.values[name].merge_from(value)
            else:
                self.values[name] = copy.deepcopy(value)