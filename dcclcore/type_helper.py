"""Lookup of type names and value handlers by field type, value kind or message name."""

from __future__ import annotations

from .reflection import CppTypeHandler, CustomMessageHandler, handler_for
from .schema import CppType, FieldSpec, FieldType, MessageSpec, type_name

__all__ = ["TypeHelper"]

_UNKNOWN = 0


class TypeHelper:
    """Finds the name of a declared field type and the handler for a value kind.

    Handlers registered for a named message type take precedence over the
    general message handler when a lookup carries that message's full name.
    """

    def __init__(self) -> None:
        self._type_names: dict[int, str] = {}
        self._cpp_handlers: dict[int, CppTypeHandler] = {}
        self._custom: dict[str, CustomMessageHandler] = {}
        self._initialize()

    def _initialize(self) -> None:
        self._type_names = {_UNKNOWN: "TYPE_UNKNOWN"}
        self._type_names.update({int(kind): type_name(kind) for kind in FieldType})
        self._cpp_handlers = {_UNKNOWN: handler_for(None)}
        self._cpp_handlers.update({int(kind): handler_for(kind) for kind in CppType})
        self._custom = {}

    def find_type(self, field_type: FieldType | int) -> str | None:
        """Name of a declared field type, 'TYPE_UNKNOWN' for 0, None if not known."""
        return self._type_names.get(int(field_type))

    def find_cpp_type(
        self, cpp_type: CppType | int, type_name: str = ""
    ) -> CppTypeHandler | None:
        """Handler for a value kind, preferring one registered for `type_name`.

        Kind 0 gives the unknown-kind handler; a kind that is not known gives None.
        """
        if type_name:
            custom = self._custom.get(type_name)
            if custom is not None:
                return custom
        return self._cpp_handlers.get(int(cpp_type))

    def find_for_field(self, field: FieldSpec) -> CppTypeHandler | None:
        """Handler for the values a field holds."""
        if field.cpp_type() is CppType.MESSAGE:
            return self.find_for_message(field.message_type)
        return self.find_cpp_type(field.cpp_type())

    def find_for_message(self, desc: MessageSpec) -> CppTypeHandler | None:
        """Handler for a message type, named or general."""
        return self.find_cpp_type(CppType.MESSAGE, desc.full_name)

    def add_custom(self, full_name: str) -> CustomMessageHandler:
        """Register a handler for the message type `full_name`; an existing one is kept."""
        return self._custom.setdefault(full_name, CustomMessageHandler(full_name))

    def remove_custom(self, full_name: str) -> None:
        """Forget the handler for the message type `full_name`, if any."""
        self._custom.pop(full_name, None)

    def reset(self) -> None:
        """Drop every registered message handler and rebuild the defaults."""
        self._initialize()