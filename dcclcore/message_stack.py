"""Tracks which message, field and message part a codec is working on during recursion."""

from __future__ import annotations

import enum
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from .schema import CppType, FieldSpec, MessageSpec

__all__ = ["MessagePart", "MessageStack"]


class MessagePart(enum.Enum):
    HEAD = 0
    BODY = 1
    UNKNOWN = 2


@dataclass
class _Frame:
    descriptors: int = 0
    fields: int = 0
    parts: int = 0


class MessageStack:
    """Stacks of message descriptions, fields and message parts.

    Entries pushed inside a `scope` are removed when that scope ends; entries
    pushed outside any scope stay until `pop_all`.
    """

    def __init__(self) -> None:
        self._descriptors: list[MessageSpec] = []
        self._fields: list[FieldSpec] = []
        self._parts: list[MessagePart] = []
        self._frames: list[_Frame] = []

    def push_descriptor(self, desc: MessageSpec) -> None:
        self._descriptors.append(desc)
        if self._frames:
            self._frames[-1].descriptors += 1

    def push_field(self, field: FieldSpec) -> None:
        self._fields.append(field)
        if self._frames:
            self._frames[-1].fields += 1

    def push_part(self, part: MessagePart) -> None:
        self._parts.append(MessagePart(part))
        if self._frames:
            self._frames[-1].parts += 1

    @contextmanager
    def scope(self, field: FieldSpec | None = None) -> Iterator["MessageStack"]:
        """Enter `field` for the duration of the block.

        An embedded message field also pushes its message description and the
        part it belongs to: its own in_head option if set, otherwise the
        enclosing part.
        """
        self._frames.append(_Frame())
        try:
            if field is not None:
                if field.cpp_type() is CppType.MESSAGE:
                    in_head = field.options.in_head
                    if in_head is None:
                        part = self.current_part()
                    else:
                        part = MessagePart.HEAD if in_head else MessagePart.BODY
                    self.push_part(part)
                    self.push_descriptor(field.message_type)
                self.push_field(field)
            yield self
        finally:
            frame = self._frames.pop()
            _pop(self._fields, frame.fields)
            _pop(self._descriptors, frame.descriptors)
            _pop(self._parts, frame.parts)

    def pop_all(self) -> None:
        """Empty every stack."""
        self._descriptors.clear()
        self._fields.clear()
        self._parts.clear()
        for frame in self._frames:
            frame.descriptors = frame.fields = frame.parts = 0

    def count(self) -> int:
        """Number of message descriptions on the stack."""
        return len(self._descriptors)

    def first(self) -> bool:
        """True when no message description is on the stack."""
        return not self._descriptors

    def current_part(self) -> MessagePart:
        return self._parts[-1] if self._parts else MessagePart.UNKNOWN

    def current_field(self) -> FieldSpec | None:
        return self._fields[-1] if self._fields else None

    def current_descriptor(self) -> MessageSpec | None:
        return self._descriptors[-1] if self._descriptors else None


def _pop(stack: list, count: int) -> None:
    del stack[max(0, len(stack) - count):]