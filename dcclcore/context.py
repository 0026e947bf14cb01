"""State shared by field codecs while one message is encoded, decoded or inspected."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from .message_stack import MessagePart, MessageStack
from .schema import DcclError, FieldSpec, Message, MessageSpec

__all__ = ["CodecContext"]


def _default_codec_name(version: int) -> str:
    return f"dccl.default{version}"


class CodecContext:
    """The root message, the part being processed and the recursion stack.

    `scope` sets the root for one operation and clears it when the block ends.
    """

    def __init__(self) -> None:
        self.stack = MessageStack()
        self.part = MessagePart.UNKNOWN
        self.strict = False
        self.root_message: Message | None = None
        self.root_descriptor: MessageSpec | None = None

    @contextmanager
    def scope(
        self,
        part: MessagePart,
        descriptor: MessageSpec | None = None,
        message: Message | None = None,
        strict: bool = False,
    ) -> Iterator["CodecContext"]:
        """Process `message` (or a message of type `descriptor`) as the root."""
        if message is not None:
            descriptor = message.spec
        saved = (self.part, self.strict, self.root_message, self.root_descriptor)
        self.part = MessagePart(part)
        self.strict = strict
        self.root_message = message
        self.root_descriptor = descriptor
        try:
            yield self
        finally:
            self.part, self.strict, self.root_message, self.root_descriptor = saved

    def has_codec_group(self) -> bool:
        """True if the root message sets a codec group or a codec version."""
        if self.root_descriptor is None:
            return False
        options = self.root_descriptor.options
        return options.codec_group is not None or options.codec_version is not None

    def codec_group(self, desc: MessageSpec | None = None) -> str:
        """Codec group of `desc` (the root by default), or the default for its version."""
        if desc is None:
            desc = self._root()
        options = desc.options
        if options.codec_group is not None:
            return options.codec_group
        return _default_codec_name(options.version)

    def codec_version(self) -> int:
        """Codec version of the root message."""
        return self._root().options.version

    def this_field(self) -> FieldSpec | None:
        """The field being processed, or None for the root message."""
        return self.stack.current_field()

    def this_descriptor(self) -> MessageSpec | None:
        """The message that immediately holds the current field."""
        return self.stack.current_descriptor()

    def _root(self) -> MessageSpec:
        if self.root_descriptor is None:
            raise DcclError("no root message is being processed")
        return self.root_descriptor