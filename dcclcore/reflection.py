"""Reading and writing field values of dynamic messages, one handler per value kind."""

from __future__ import annotations

import copy
from typing import Any

from .schema import CppType, DcclError, FieldSpec, FieldType, Message, cpp_type_name

__all__ = [
    "CppTypeHandler",
    "CustomMessageHandler",
    "handler_for",
    "get_value",
    "get_repeated_value",
    "set_value",
    "add_value",
]

_INTEGER_KINDS = frozenset({CppType.INT32, CppType.INT64, CppType.UINT32, CppType.UINT64})
_FLOAT_KINDS = frozenset({CppType.DOUBLE, CppType.FLOAT})


class CppTypeHandler:
    """Gets and sets field values of one value kind.

    A handler built without a kind stands for an unknown kind: it reads every
    field as absent and ignores writes. Reads of unset singular fields give
    None, and writes of None are ignored.
    """

    def __init__(self, cpp_type: CppType | None = None) -> None:
        self.cpp_type = None if cpp_type is None else CppType(cpp_type)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"

    @property
    def name(self) -> str:
        """Name of the value kind, such as 'CPPTYPE_DOUBLE'."""
        if self.cpp_type is None:
            return "CPPTYPE_UNKNOWN"
        return cpp_type_name(self.cpp_type)

    def get_value(self, message: Message, field: FieldSpec | None = None) -> Any:
        """Value of a singular field, or of the whole message when `field` is None."""
        if self.cpp_type is None:
            return None
        if field is None:
            self._require_message_kind()
            return self._read(message, None)
        self._check_field(message, field)
        if field.is_repeated():
            raise DcclError(f"field {field.name} is repeated; read it by index")
        if not message.has(field.name):
            return None
        return self._read(message, field)

    def get_repeated_value(self, message: Message, field: FieldSpec, index: int) -> Any:
        """Value at `index` of a repeated field."""
        if self.cpp_type is None:
            return None
        self._check_field(message, field)
        if not field.is_repeated():
            raise DcclError(f"field {field.name} is not repeated")
        return self._read_item(message[field.name][index])

    def set_value(self, message: Message, field: FieldSpec | None, value: Any) -> None:
        """Set a singular field, or merge into the whole message when `field` is None."""
        if value is None or self.cpp_type is None:
            return
        if field is None:
            self._require_message_kind()
            message.merge_from(self._coerce(None, value))
            return
        self._check_field(message, field)
        if field.is_repeated():
            raise DcclError(f"field {field.name} is repeated; use add_value")
        converted = self._coerce(field, value)
        if self.cpp_type is CppType.MESSAGE:
            existing = message.values.get(field.name)
            if existing is None:
                existing = Message(field.message_type)
                message[field.name] = existing
            existing.merge_from(converted)
        else:
            message[field.name] = converted

    def add_value(self, message: Message, field: FieldSpec, value: Any) -> None:
        """Append a value to the end of a repeated field."""
        if value is None or self.cpp_type is None:
            return
        self._check_field(message, field)
        if not field.is_repeated():
            raise DcclError(f"field {field.name} is not repeated")
        converted = self._coerce(field, value)
        if self.cpp_type is CppType.MESSAGE:
            entry = Message(field.message_type)
            entry.merge_from(converted)
            converted = entry
        message[field.name].append(converted)

    def _read(self, message: Message, field: FieldSpec | None) -> Any:
        if field is None:
            return self._read_item(message)
        return self._read_item(message[field.name])

    def _read_item(self, item: Any) -> Any:
        return item

    def _require_message_kind(self) -> None:
        if self.cpp_type is not CppType.MESSAGE:
            raise DcclError(f"{self.name} values need a field to act on")

    def _check_field(self, message: Message, field: FieldSpec) -> None:
        message.spec.field(field.name)
        if field.cpp_type() is not self.cpp_type:
            raise DcclError(
                f"field {field.name} holds {cpp_type_name(field.cpp_type())}, "
                f"not {self.name}"
            )

    def _coerce(self, field: FieldSpec | None, value: Any) -> Any:
        kind = self.cpp_type
        if kind in _FLOAT_KINDS:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise _type_error(self.name, value)
            return float(value)
        if kind in _INTEGER_KINDS:
            if isinstance(value, bool) or not isinstance(value, int):
                raise _type_error(self.name, value)
            return value
        if kind is CppType.BOOL:
            if not isinstance(value, bool):
                raise _type_error(self.name, value)
            return value
        if kind is CppType.STRING:
            if field is not None and field.type is FieldType.BYTES:
                if not isinstance(value, (bytes, bytearray, memoryview)):
                    raise _type_error(self.name, value)
                return bytes(value)
            if not isinstance(value, str):
                raise _type_error(self.name, value)
            return value
        if kind is CppType.ENUM:
            if not isinstance(value, str) or (field is not None and value not in field.enum_values):
                raise DcclError(f"{value!r} is not a value of enum field {field.name if field else ''}")
            return value
        if not isinstance(value, Message):
            raise _type_error(self.name, value)
        if field is not None and value.spec.full_name != field.message_type.full_name:
            raise DcclError(
                f"expected message {field.message_type.full_name}, got {value.spec.full_name}"
            )
        return value


class CustomMessageHandler(CppTypeHandler):
    """Handles one named message type, reading values out as independent copies."""

    def __init__(self, full_name: str) -> None:
        super().__init__(CppType.MESSAGE)
        self.full_name = full_name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.full_name!r})"

    def _read_item(self, item: Any) -> Any:
        return copy.deepcopy(item)

    def _coerce(self, field: FieldSpec | None, value: Any) -> Any:
        if not isinstance(value, Message) or value.spec.full_name != self.full_name:
            raise DcclError(f"error setting value, expected message {self.full_name}")
        return super()._coerce(field, value)


def _type_error(kind: str, value: Any) -> DcclError:
    return DcclError(f"error setting value, expected {kind}, got {type(value).__name__}")


_HANDLERS = {kind: CppTypeHandler(kind) for kind in CppType}


def handler_for(cpp_type: CppType | None) -> CppTypeHandler:
    """The shared handler for a value kind; an unknown-kind handler for None."""
    if cpp_type is None:
        return CppTypeHandler()
    return _HANDLERS[CppType(cpp_type)]


def _handler(field: FieldSpec | None) -> CppTypeHandler:
    return _HANDLERS[CppType.MESSAGE if field is None else field.cpp_type()]


def get_value(message: Message, field: FieldSpec | None = None) -> Any:
    """Value of a singular field (None if unset), or the message itself for None."""
    return _handler(field).get_value(message, field)


def get_repeated_value(message: Message, field: FieldSpec, index: int) -> Any:
    """Value at `index` of a repeated field."""
    return _handler(field).get_repeated_value(message, field, index)


def set_value(message: Message, field: FieldSpec | None, value: Any) -> None:
    """Set a singular field, or merge `value` into `message` when `field` is None."""
    _handler(field).set_value(message, field, value)


def add_value(message: Message, field: FieldSpec, value: Any) -> None:
    """Append `value` to a repeated field."""
    _handler(field).add_value(message, field, value)