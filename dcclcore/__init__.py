"""Schema model, reflection, recursion tracking and binary helpers for bit-packed message encoding."""

__version__ = "0.1.0"

__all__ = [
    "binary",
    "common",
    "context",
    "message_stack",
    "reflection",
    "schema",
    "type_helper",
]